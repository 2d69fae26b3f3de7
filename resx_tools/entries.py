"""Classification of resx <data> entries.

A translatable string entry looks like:

    <data name="DemoString" xml:space="preserve">
      <value>Foobar</value>
      <comment>optional note</comment>
    </data>

String entries always carry xml:space and never carry type=. Typed entries
(embedded files, icons, ...) store ``path;type;...`` in their value.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from lxml import etree

DATA_TAG = "data"
SKIP_TOKEN = "!SKIP"
EDIT_TOKEN = "!EDIT"
RESERVED_NAME_PREFIX = ">>"


@dataclass(frozen=True)
class EntryFlags:
    skip: bool = False  # never translate
    edit: bool = False  # retranslate even when the target has it


def parse_flags(comment: Optional[str]) -> EntryFlags:
    if not comment:
        return EntryFlags()
    upper = comment.upper()
    return EntryFlags(skip=SKIP_TOKEN in upper, edit=EDIT_TOKEN in upper)


def entry_name(entry: etree._Element) -> Optional[str]:
    return entry.get("name")


def entry_value(entry: etree._Element) -> Optional[str]:
    return entry.findtext("value")


def entry_comment(entry: etree._Element) -> Optional[str]:
    return entry.findtext("comment")


def entry_flags(entry: etree._Element) -> EntryFlags:
    return parse_flags(entry_comment(entry))


def has_space_marker(entry: etree._Element) -> bool:
    # xml:space arrives namespaced, so compare local names only
    return any(etree.QName(key).localname == "space" for key in entry.attrib)


def is_typed(entry: etree._Element) -> bool:
    return entry.get("type") is not None


def is_string_candidate(entry: etree._Element) -> bool:
    return has_space_marker(entry) and not is_typed(entry)


def is_translatable_string(entry: etree._Element) -> bool:
    if not is_string_candidate(entry):
        return False
    name = entry_name(entry)
    if name is not None and name.startswith(RESERVED_NAME_PREFIX):
        return False
    return not entry_flags(entry).skip


def data_entries(root: etree._Element) -> List[etree._Element]:
    return list(root.iterchildren(DATA_TAG))


def collect_strings(root: etree._Element) -> List[etree._Element]:
    """Return every translatable string entry of ``root`` in document order."""
    return [entry for entry in data_entries(root) if is_translatable_string(entry)]


def find_entry(root: etree._Element, name: Optional[str]) -> Optional[etree._Element]:
    """Return the first <data> child named ``name``; duplicates after it are ignored."""
    for entry in root.iterchildren(DATA_TAG):
        if entry.get("name") == name:
            return entry
    return None
