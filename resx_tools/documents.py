from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Union

from lxml import etree

log = logging.getLogger(__name__)

RESX_SUFFIX = ".resx"


@dataclass(frozen=True)
class Loaded:
    path: Path
    tree: etree._ElementTree

    @property
    def root(self) -> etree._Element:
        return self.tree.getroot()


@dataclass(frozen=True)
class Unavailable:
    path: Path
    reason: str


LoadResult = Union[Loaded, Unavailable]


def _parser() -> etree.XMLParser:
    return etree.XMLParser(remove_blank_text=False, resolve_entities=False)


def load_document(path: Union[str, Path]) -> LoadResult:
    """Parse a resx file, reporting a missing or unreadable file as ``Unavailable``."""
    path = Path(path)
    try:
        tree = etree.parse(str(path), _parser())
    except OSError as exc:
        log.debug("Cannot read %s: %s", path, exc)
        return Unavailable(path=path, reason=f"unreadable: {exc}")
    except etree.XMLSyntaxError as exc:
        log.debug("Cannot parse %s: %s", path, exc)
        return Unavailable(path=path, reason=f"malformed: {exc}")
    log.debug("Loaded %s", path)
    return Loaded(path=path, tree=tree)


def save_document(tree: etree._ElementTree, path: Union[str, Path]) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    tree.write(str(path), encoding="utf-8", xml_declaration=True)
    log.debug("Wrote %s", path)


def normalize_language_code(code: str) -> str:
    return code.strip().replace("_", "-")


def derive_target_path(source: Union[str, Path], language: str) -> Path:
    """Strings.resx + fr -> Strings.fr.resx, next to the neutral file."""
    source = Path(source)
    stem = source.name[: -len(RESX_SUFFIX)] if source.name.lower().endswith(RESX_SUFFIX) else source.stem
    return source.with_name(f"{stem}.{normalize_language_code(language)}{RESX_SUFFIX}")
