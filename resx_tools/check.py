#!/usr/bin/env python3
"""Fail if translated .resx files are missing or blank for any translatable string.

Checks, per language:
- strings absent from the translation, or flagged !EDIT in the neutral file
- strings present in the translation with an empty value
"""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence

from lxml import etree

from .documents import Loaded, derive_target_path, load_document
from .entries import collect_strings, entry_flags, entry_name
from .provider import collect_empty_strings, collect_new_strings
from .workflow import configure_logging, parse_languages


@dataclass
class Violation:
    target: str
    name: str
    reason: str  # missing | edited | empty | no-target


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Check translated .resx files for missing or blank strings.")
    parser.add_argument("--source", required=True, help="Neutral resource file")
    parser.add_argument("--language", required=True, help="Comma-separated target languages")
    parser.add_argument("--trace", action="store_true", help="Verbose logging")
    return parser


def scan_language(source_path: Path, strings: List[etree._Element], language: str) -> List[Violation]:
    target_path = derive_target_path(source_path, language)
    target = load_document(target_path)
    if not isinstance(target, Loaded):
        return [Violation(target=str(target_path), name="*", reason="no-target")]

    violations: List[Violation] = []
    for entry in collect_new_strings(strings, target):
        reason = "edited" if entry_flags(entry).edit else "missing"
        violations.append(Violation(target=str(target_path), name=entry_name(entry) or "", reason=reason))
    for entry in collect_empty_strings(strings, target):
        violations.append(Violation(target=str(target_path), name=entry_name(entry) or "", reason="empty"))
    return violations


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.trace)

    languages = parse_languages(args.language)
    if not languages:
        print("error: --language must name at least one language", file=sys.stderr)
        return 2

    source_path = Path(args.source)
    source = load_document(source_path)
    if not isinstance(source, Loaded):
        print(f"error: Cannot load source file {source.path}: {source.reason}", file=sys.stderr)
        return 1

    strings = collect_strings(source.root)
    violations: List[Violation] = []
    for language in languages:
        violations.extend(scan_language(source_path, strings, language))

    if violations:
        print("Found untranslated resource strings:")
        for item in violations:
            print(f"- {item.target}: {item.name} ({item.reason})")
        return 1

    print("All translatable strings are present in every translation.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
