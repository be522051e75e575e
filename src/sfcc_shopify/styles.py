from __future__ import annotations
import logging
from pathlib import Path
from typing import Dict, FrozenSet, Optional


STYLES_SUFFIX = "_styles.txt"

logger = logging.getLogger(__name__)


def parse_style_list(text: str) -> FrozenSet[str]:
    return frozenset(s.strip() for s in text.splitlines() if s.strip())


def load_style_allow_lists(styles_dir: Path, log: Optional[logging.Logger] = None) -> Dict[str, FrozenSet[str]]:
    """Read every `{catalog}_styles.txt` into a set of allowed product ids, keyed by catalog base name."""
    log = log or logger
    if not styles_dir.exists() or not styles_dir.is_dir():
        raise FileNotFoundError(f"Styles directory not found: {styles_dir}")
    allow_lists: Dict[str, FrozenSet[str]] = {}
    for p in sorted(styles_dir.iterdir(), key=lambda x: x.name):
        if not p.is_file() or not p.name.endswith(STYLES_SUFFIX):
            continue
        base = p.name[: -len(STYLES_SUFFIX)]
        allow_lists[base] = parse_style_list(p.read_text(encoding="utf-8-sig"))
        log.debug("Loaded %d style(s) for catalog %s from %s", len(allow_lists[base]), base, p.name)
    log.info("Loaded style allow-lists for %d catalog(s)", len(allow_lists))
    return allow_lists
