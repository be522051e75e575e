"""
Matrixify image manifest.

Builds the Shopify bulk image upload CSV from an inventory export and a
Shopify style map (`id,title,style`). Gray studio shots, when a product has
any, are the storefront image set; otherwise the colour shots are used.
"""
from __future__ import annotations
import csv
import logging
import re
from pathlib import Path
from typing import Dict, Iterable, List, NamedTuple, Optional, Sequence

from .config import INVENTORY_SUFFIX, PipelineConfig
from .inventory import read_inventory_csv
from .io import read_any_rows, write_csv
from .models import InventoryRow, ManifestRow, StyleMapEntry
from .normalize import sanitize_text


MANIFEST_HEADERS = [
    "ID",
    "Image Type",
    "Image Src",
    "Image Command",
    "Image Position",
    "Image Width",
    "Image Height",
    "Image Alt Text",
    "Style",
]

IMAGE_TYPE = "IMAGE"
IMAGE_COMMAND = "REPLACE"

_FILENAME = re.compile(
    r"^(?:(?P<bucket>gray|default|white)_)?(?P<view>.*?)(?:_(?P<width>\d+)x(?P<height>\d+))?$"
)

logger = logging.getLogger(__name__)


class ParsedImage(NamedTuple):
    view: str
    width: str
    height: str


def read_style_map(input_path: Path) -> Dict[str, StyleMapEntry]:
    if not input_path.exists():
        raise FileNotFoundError(f"Shopify style map not found: {input_path}")
    styles: Dict[str, StyleMapEntry] = {}
    for row in read_any_rows(input_path):
        cells = (row + ["", "", ""])[:3]
        shopify_id, title, style = cells
        if not style:
            continue
        styles[style] = StyleMapEntry(shopify_id=shopify_id, title=title, style=style)
    return styles


def parse_image_filename(filename: str, product_id: str = "") -> ParsedImage:
    """Split `{productId}_{bucket}_{view}[_{w}x{h}].jpg` back into its parts."""
    stem = filename.strip()
    if stem.lower().endswith(".jpg"):
        stem = stem[:-4]
    if product_id and stem.startswith(product_id + "_"):
        stem = stem[len(product_id) + 1 :]
    m = _FILENAME.match(stem)
    if not m:
        return ParsedImage(view=stem, width="", height="")
    return ParsedImage(view=m.group("view") or "", width=m.group("width") or "", height=m.group("height") or "")


def alt_text(title: str, view: str) -> str:
    clean_title = sanitize_text(title)
    clean_view = sanitize_text(view)
    if not clean_view or clean_view == "default":
        return clean_title
    return f"{clean_title} - {clean_view}"


def build_manifest_rows(
    inventory_rows: Iterable[InventoryRow],
    style_map: Dict[str, StyleMapEntry],
    log: Optional[logging.Logger] = None,
) -> List[ManifestRow]:
    log = log or logger
    out: List[ManifestRow] = []
    for row in inventory_rows:
        entry = style_map.get(row.product_id)
        if entry is None:
            log.debug("Style %s not in Shopify style map, skipping", row.product_id)
            continue
        images = [f for f in (row.gray or row.non_gray) if f.strip()]
        for idx, filename in enumerate(images):
            parsed = parse_image_filename(filename, row.product_id)
            is_first = idx == 0
            out.append(
                ManifestRow(
                    shopify_id=entry.shopify_id,
                    image_src=filename,
                    position=idx + 1,
                    width=parsed.width,
                    height=parsed.height,
                    alt_text=alt_text(entry.title, parsed.view),
                    style=row.product_id if is_first else "",
                )
            )
    return out


def write_manifest_csv(output_path: Path, rows: Sequence[ManifestRow]) -> int:
    return write_csv(
        output_path,
        MANIFEST_HEADERS,
        (
            [r.shopify_id, IMAGE_TYPE, r.image_src, IMAGE_COMMAND, r.position, r.width, r.height, r.alt_text, r.style]
            for r in rows
        ),
    )


def generate_manifest(
    catalog: str,
    cfg: PipelineConfig,
    log: Optional[logging.Logger] = None,
) -> Optional[Path]:
    """Write the Matrixify CSV for one catalog; None when an input is missing."""
    log = log or logger
    style_map_path = cfg.style_map_path(catalog)
    if style_map_path is None:
        log.error("Missing Shopify style map for %s in %s", catalog, cfg.shopify_styles_dir)
        return None
    inventory_path = cfg.inventory_path(catalog)
    if not inventory_path.exists():
        log.error("Missing image inventory CSV: %s", inventory_path)
        return None
    try:
        style_map = read_style_map(style_map_path)
        inventory_rows = read_inventory_csv(inventory_path)
    except (OSError, ValueError, csv.Error) as e:
        log.error("Could not read manifest inputs for %s: %s", catalog, e)
        return None
    rows = build_manifest_rows(inventory_rows, style_map, log=log)
    out_path = cfg.manifest_path(catalog)
    count = write_manifest_csv(out_path, rows)
    log.info("Matrixify CSV written to %s (%d row(s))", out_path, count)
    return out_path


def inventory_catalogs(inventory_dir: Path) -> List[str]:
    if not inventory_dir.exists():
        return []
    return sorted(
        p.name[: -len(INVENTORY_SUFFIX)] for p in inventory_dir.glob(f"*{INVENTORY_SUFFIX}") if p.is_file()
    )


def generate_manifests(
    cfg: PipelineConfig,
    catalogs: Optional[Iterable[str]] = None,
    log: Optional[logging.Logger] = None,
) -> List[Path]:
    log = log or logger
    names = list(catalogs) if catalogs is not None else inventory_catalogs(cfg.inventory_dir)
    if not names:
        log.error("No image inventory CSVs found in %s", cfg.inventory_dir)
        return []
    written: List[Path] = []
    for catalog in names:
        path = generate_manifest(catalog, cfg, log=log)
        if path is not None:
            written.append(path)
    return written
