"""Maintenance helpers for .resx localization resource files.

The core operations work on already-parsed ``lxml`` trees:

- ``collect_strings`` / ``is_translatable_string``: pick translatable entries
- ``collect_new_strings`` / ``collect_empty_strings``: diff against a translation
- ``merge_hints``: force preferred translations into a document
- ``sort_data``: reorder entries for stable diffs
"""

from __future__ import annotations

from .documents import Loaded, Unavailable, derive_target_path, load_document, save_document
from .entries import EntryFlags, collect_strings, find_entry, is_translatable_string, parse_flags
from .errors import HintError, MalformedResourceError, ResxError
from .provider import collect_empty_strings, collect_new_strings, merge_hints, sort_data

__all__ = [
    "EntryFlags",
    "HintError",
    "Loaded",
    "MalformedResourceError",
    "ResxError",
    "Unavailable",
    "collect_empty_strings",
    "collect_new_strings",
    "collect_strings",
    "derive_target_path",
    "find_entry",
    "is_translatable_string",
    "load_document",
    "merge_hints",
    "parse_flags",
    "save_document",
    "sort_data",
]
