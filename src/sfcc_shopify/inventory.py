from __future__ import annotations
import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence

from .io import read_rows, write_csv
from .models import InventoryRow, ResolvedProduct
from .views import is_gray, semantic_view


INVENTORY_HEADERS = ["productId", "nonGrayImageFileNames", "grayImageFileNames"]

NON_GRAY_ORDER = [
    "main",
    "lifestyle",
    "outsole",
    "profile",
    "front",
    "back",
    "instep_profile",
    "birdseye",
]

GRAY_ORDER = [
    "profile",
    "lifestyle",
    "main",
    "instep_profile",
    "doubleheel",
    "doublequarter",
    "outsole",
]

LIST_SEP = ", "

logger = logging.getLogger(__name__)


def output_filename(product_id: str, view_key: str) -> str:
    return f"{product_id}_{view_key}.jpg"


def sort_view_keys(view_keys: Iterable[str], preferred: Sequence[str]) -> List[str]:
    """Order keys by their semantic view's rank in `preferred`.

    Unknown views go last, ordered by the full key. Keys sharing a known view
    keep their relative order.
    """
    rank = {v: i for i, v in enumerate(preferred)}
    unknown = len(preferred)

    def key(view_key: str):
        idx = rank.get(semantic_view(view_key))
        if idx is None:
            return (unknown, view_key)
        return (idx, "")

    return sorted(view_keys, key=key)


def inventory_row(product_id: str, view_keys: Iterable[str]) -> InventoryRow:
    keys = list(view_keys)
    gray = sort_view_keys([k for k in keys if is_gray(k)], GRAY_ORDER)
    non_gray = sort_view_keys([k for k in keys if not is_gray(k)], NON_GRAY_ORDER)
    return InventoryRow(
        product_id=product_id,
        gray=tuple(output_filename(product_id, k) for k in gray),
        non_gray=tuple(output_filename(product_id, k) for k in non_gray),
    )


def build_inventory(
    products: Iterable[ResolvedProduct],
    log: Optional[logging.Logger] = None,
) -> Dict[str, List[InventoryRow]]:
    """Group classified products per catalog into ordered inventory rows."""
    log = log or logger
    grouped: Dict[str, Dict[str, Dict[str, str]]] = {}
    for product in products:
        if not product.views:
            log.debug("No views for %s, no inventory row", product.product_id)
            continue
        catalog = grouped.setdefault(product.catalog, {})
        if product.product_id in catalog:
            log.debug("Merging repeated product %s in catalog %s", product.product_id, product.catalog)
        catalog.setdefault(product.product_id, {}).update(product.views)

    inventory: Dict[str, List[InventoryRow]] = {}
    for catalog, by_product in grouped.items():
        inventory[catalog] = [inventory_row(pid, views.keys()) for pid, views in by_product.items()]
    return inventory


def write_inventory_csv(output_path: Path, rows: Sequence[InventoryRow]) -> int:
    return write_csv(
        output_path,
        INVENTORY_HEADERS,
        ([r.product_id, LIST_SEP.join(r.non_gray), LIST_SEP.join(r.gray)] for r in rows),
    )


def _split_list(cell: str) -> tuple:
    return tuple(s.strip() for s in (cell or "").split(",") if s.strip())


def read_inventory_csv(input_path: Path) -> List[InventoryRow]:
    if not input_path.exists():
        raise FileNotFoundError(f"Inventory CSV not found: {input_path}")
    rows: List[InventoryRow] = []
    for raw in read_rows(input_path):
        product_id = raw[0]
        if not product_id:
            continue
        non_gray = raw[1] if len(raw) > 1 else ""
        gray = raw[2] if len(raw) > 2 else ""
        rows.append(InventoryRow(product_id=product_id, gray=_split_list(gray), non_gray=_split_list(non_gray)))
    return rows
