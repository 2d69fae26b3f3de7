from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Sequence, Tuple, Union

from lxml import etree

from .documents import Loaded, LoadResult, Unavailable, load_document
from .entries import (
    data_entries,
    entry_flags,
    entry_name,
    entry_value,
    find_entry,
    is_string_candidate,
    is_typed,
)
from .errors import HintError, MalformedResourceError

log = logging.getLogger(__name__)

TYPED_VALUE_SEPARATOR = ";"

Target = Union[str, Path, Loaded, Unavailable]


def _load_target(target: Target) -> LoadResult:
    if isinstance(target, (Loaded, Unavailable)):
        return target
    return load_document(target)


def collect_new_strings(data: Sequence[etree._Element], target_path: Target) -> Sequence[etree._Element]:
    """Keep the entries of ``data`` that still need translating into ``target_path``.

    An entry is new when the target has no entry of the same name or when its
    comment carries !EDIT. If the target cannot be loaded, nothing is known
    about it and ``data`` is returned as is. A result of ``load_document`` may
    be passed instead of a path to reuse an earlier load.
    """
    result = _load_target(target_path)
    if not isinstance(result, Loaded):
        log.info("Target %s unavailable (%s); treating all strings as new", result.path, result.reason)
        return data

    target = result.root
    return [
        entry
        for entry in data
        if is_string_candidate(entry)
        and (entry_flags(entry).edit or find_entry(target, entry_name(entry)) is None)
    ]


def collect_empty_strings(data: Sequence[etree._Element], target_path: Target) -> Sequence[etree._Element]:
    """Keep the entries of ``data`` whose translation exists but is blank."""
    result = _load_target(target_path)
    if not isinstance(result, Loaded):
        log.info("Target %s unavailable (%s); returning input unfiltered", result.path, result.reason)
        return data

    target = result.root
    empty: List[etree._Element] = []
    for entry in data:
        if not is_string_candidate(entry) or entry_flags(entry).skip:
            continue
        translated = find_entry(target, entry_name(entry))
        if translated is not None and not entry_value(translated):
            empty.append(entry)
    return empty


def _read_hints(hints: etree._Element) -> List[Tuple[str, str]]:
    pairs: List[Tuple[str, str]] = []
    for index, hint in enumerate(hints.iterchildren(tag=etree.Element), start=1):
        name = hint.get("name")
        if name is None:
            raise HintError(f"Hint #{index} <{hint.tag}> has no name attribute")
        preferred = hint.find("preferred")
        if preferred is None:
            raise HintError(f"Hint '{name}' has no <preferred> element")
        pairs.append((name, (preferred.text or "").strip()))
    return pairs


def merge_hints(root: etree._Element, hints: etree._Element) -> int:
    """Overwrite values in ``root`` with the preferred values from ``hints``.

    Returns the number of entries changed. Every hint is validated before
    anything is written, so a malformed hints document leaves ``root`` as is.
    """
    count = 0
    for name, preferred in _read_hints(hints):
        element = next(
            (
                entry
                for entry in data_entries(root)
                if entry_name(entry) == name and (entry_value(entry) or "") != preferred
            ),
            None,
        )
        if element is None:
            continue

        value = element.find("value")
        if value is None:
            value = etree.SubElement(element, "value")
        value.text = preferred
        count += 1

    log.debug("Merged %d hint(s)", count)
    return count


def _file_sort_key(entry: etree._Element) -> Tuple[str, str, str]:
    fields = (entry_value(entry) or "").split(TYPED_VALUE_SEPARATOR)
    if len(fields) < 2:
        raise MalformedResourceError(
            f"Typed resource '{entry_name(entry)}' has value {entry_value(entry)!r}; expected 'path;type'"
        )
    return fields[1], fields[0], entry_name(entry) or ""


def sort_data(root: etree._Element) -> None:
    """Reorder <data> entries: strings by name, then files by type, path and name."""
    data = data_entries(root)
    if not data:
        return

    strings = sorted((e for e in data if not is_typed(e)), key=lambda e: entry_name(e) or "")
    # validate typed values before detaching anything
    files = [e for _, e in sorted(((_file_sort_key(e), e) for e in data if is_typed(e)), key=lambda p: p[0])]

    indent = data[0].tail if data[0].tail and data[0].tail.strip() == "" else None
    closing = root[-1].tail

    for entry in data:
        root.remove(entry)
    if len(root) and indent is not None:
        root[-1].tail = indent

    for entry in strings + files:
        if indent is not None:
            entry.tail = indent
        root.append(entry)
    root[-1].tail = closing
