#!/usr/bin/env python3
"""Refresh translated .resx files against their neutral resource file.

For every requested language this script:
1) Collects strings that are new (missing in the translation, or flagged !EDIT)
2) Collects strings whose translation exists but is blank
3) Writes a candidates artifact for the translators
4) Merges preferred translations from a hints file (optional)
5) Sorts entries so regenerated files diff cleanly (optional)

Artifacts are written to: localization/<language>/
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

from lxml import etree

from .documents import Loaded, derive_target_path, load_document, normalize_language_code, save_document
from .entries import collect_strings, entry_comment, entry_flags, entry_name, entry_value
from .errors import ResxError
from .provider import collect_empty_strings, collect_new_strings, merge_hints, sort_data

ARTIFACT_DIRNAME = "localization"
CANDIDATES_FILENAME = "translation_candidates.json"

log = logging.getLogger("resx_tools")


@dataclass(frozen=True)
class StringRow:
    name: str
    value: str
    comment: Optional[str]
    edit: bool


@dataclass
class LanguageReport:
    language: str
    target: Path
    target_available: bool
    new_strings: List[StringRow]
    empty_strings: List[StringRow]
    hints_applied: int = 0
    sorted: bool = False
    written: bool = False


def configure_logging(trace: bool) -> None:
    log.setLevel(logging.DEBUG if trace else logging.WARNING)
    if log.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(message)s"))
    log.addHandler(handler)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Diff, merge and sort translated .resx files.")
    parser.add_argument("--source", required=True, help="Neutral resource file, e.g. Properties/Resources.resx")
    parser.add_argument("--language", required=True, help="Comma-separated target languages, e.g. fr,de,pt-BR")
    parser.add_argument("--hints", default=None, help="Hints XML with preferred translations to force-merge")
    parser.add_argument("--sort", action="store_true", help="Sort entries of the neutral and translated files")
    parser.add_argument("--dry-run", action="store_true", help="Only produce candidates artifacts")
    parser.add_argument(
        "--artifact-dir",
        default=ARTIFACT_DIRNAME,
        help=f"Directory for per-language artifacts (default: {ARTIFACT_DIRNAME})",
    )
    parser.add_argument("--trace", action="store_true", help="Verbose logging")
    return parser


def parse_languages(value: str) -> List[str]:
    return [normalize_language_code(token) for token in value.split(",") if token.strip()]


def to_row(entry: etree._Element) -> StringRow:
    return StringRow(
        name=entry_name(entry) or "",
        value=entry_value(entry) or "",
        comment=entry_comment(entry),
        edit=entry_flags(entry).edit,
    )


def load_hints(path: Optional[str]) -> Optional[etree._Element]:
    if not path:
        return None
    result = load_document(path)
    if not isinstance(result, Loaded):
        raise ResxError(f"Cannot load hints file {result.path}: {result.reason}")
    return result.root


def refresh_language(
    source_root: etree._Element,
    source_path: Path,
    language: str,
    hints: Optional[etree._Element],
    sort: bool,
    dry_run: bool,
) -> Tuple[LanguageReport, Optional[Loaded]]:
    """Diff one translation and apply hints/sorting in memory.

    Returns the report and, when the translation changed, the loaded document
    still to be written. Nothing is saved here.
    """
    target_path = derive_target_path(source_path, language)
    target = load_document(target_path)
    strings = collect_strings(source_root)
    new_strings = collect_new_strings(strings, target)
    # an unavailable target returns the input unfiltered; nothing is known to be blank
    empty_strings = collect_empty_strings(strings, target) if isinstance(target, Loaded) else []

    report = LanguageReport(
        language=language,
        target=target_path,
        target_available=isinstance(target, Loaded),
        new_strings=[to_row(e) for e in new_strings],
        empty_strings=[to_row(e) for e in empty_strings],
    )

    if dry_run or not isinstance(target, Loaded):
        return report, None

    if hints is not None:
        report.hints_applied = merge_hints(target.root, hints)
    if sort:
        sort_data(target.root)
        report.sorted = True
    if report.hints_applied or report.sorted:
        return report, target
    return report, None


def write_candidates_artifact(path: Path, source: Path, report: LanguageReport) -> None:
    payload = {
        "generatedAt": datetime.now(timezone.utc).isoformat(),
        "source": str(source),
        "target": str(report.target),
        "language": report.language,
        "targetAvailable": report.target_available,
        "totalNew": len(report.new_strings),
        "totalEmpty": len(report.empty_strings),
        "newStrings": [asdict(row) for row in report.new_strings],
        "emptyStrings": [asdict(row) for row in report.empty_strings],
    }
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, ensure_ascii=False, indent=2) + "\n", encoding="utf-8")


def run(args: argparse.Namespace) -> Dict[str, LanguageReport]:
    source_path = Path(args.source)
    source = load_document(source_path)
    if not isinstance(source, Loaded):
        raise ResxError(f"Cannot load source file {source.path}: {source.reason}")

    hints = load_hints(args.hints)
    artifact_dir = Path(args.artifact_dir)

    # every document is changed in memory first; files are written only once all succeeded
    pending: List[Loaded] = []
    if args.sort and not args.dry_run:
        sort_data(source.root)
        pending.append(source)

    reports: Dict[str, LanguageReport] = {}
    for language in parse_languages(args.language):
        report, changed = refresh_language(source.root, source_path, language, hints, args.sort, args.dry_run)
        reports[language] = report
        if changed is not None:
            pending.append(changed)

    for document in pending:
        save_document(document.tree, document.path)
    for language, report in reports.items():
        report.written = any(document.path == report.target for document in pending)
        write_candidates_artifact(artifact_dir / language / CANDIDATES_FILENAME, source_path, report)
    return reports


def print_summary(reports: Dict[str, LanguageReport], artifact_dir: Path) -> None:
    for language, report in reports.items():
        print(f"[{language}] {report.target}")
        if not report.target_available:
            print("  Target missing or unreadable: every string is a candidate")
        print(f"  New strings: {len(report.new_strings)}")
        print(f"  Empty strings: {len(report.empty_strings)}")
        print(f"  Hints applied: {report.hints_applied}")
        print(f"  Sorted: {'yes' if report.sorted else 'no'}")
        print(f"  Candidates artifact: {artifact_dir / language / CANDIDATES_FILENAME}")


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.trace)

    if not parse_languages(args.language):
        print("error: --language must name at least one language", file=sys.stderr)
        return 2

    try:
        reports = run(args)
    except ResxError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    print_summary(reports, Path(args.artifact_dir))
    if args.dry_run:
        print("Dry-run complete. No resource files were modified.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
