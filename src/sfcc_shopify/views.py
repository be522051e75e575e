"""
View classification.

A view key names one product image by colour bucket, camera angle and pixel
size, e.g. ``gray_instep_profile_800x600``. It is derived from the catalog path
alone plus the probed dimensions, so the same image always gets the same key
and renamed copies can be traced back to their source.
"""
from __future__ import annotations
import logging
import re
from pathlib import Path, PurePosixPath
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .images import Prober, probe_all, probe_dimensions, store_path
from .models import ResolvedProduct


IGNORED_FOLDERS = ("spins", "spin", "swatch")
COLOR_BUCKETS = ("gray", "white")
DEFAULT_BUCKET = "default"

# first match wins, so longer labels sharing a tail must come first
SIZE_LABELS = ("extralarge", "large", "regular", "thumbnail")

MAIN_VIEW = "main"

VIEW_LABEL_MAP = {
    "2": "outsole",
    "3": "front",
    "4": "back",
    "5": "instep_profile",
    "6": "birdseye",
    "8": "profile",
    "9": "lifestyle",
    "instepprofile": "instep_profile",
}

_BUCKET_PREFIX = re.compile(r"^(gray|default|white)_")
_DIMENSION_SUFFIX = re.compile(r"_\d+x\d+$")

logger = logging.getLogger(__name__)


def color_bucket(image_path: str) -> str:
    folder = PurePosixPath(image_path.replace("\\", "/")).parent.name.lower()
    if folder in IGNORED_FOLDERS:
        return DEFAULT_BUCKET
    if folder in COLOR_BUCKETS:
        return folder
    return DEFAULT_BUCKET


def strip_size_label(view: str) -> str:
    for label in SIZE_LABELS:
        if view.endswith(label):
            return view[: -len(label)].rstrip("_")
    return view


def base_view(product_id: str, image_path: str) -> str:
    """Semantic view token from the filename: prefix, size label and codes resolved."""
    stem = PurePosixPath(image_path.replace("\\", "/")).stem
    if product_id and stem.startswith(product_id):
        stem = stem[len(product_id) :]
    if stem.startswith("_"):
        stem = stem[1:]
    view = strip_size_label(stem.lower())
    if not view.strip():
        view = MAIN_VIEW
    return VIEW_LABEL_MAP.get(view, view)


def build_view_key(product_id: str, image_path: str, dimensions: Optional[Tuple[int, int]] = None) -> str:
    parts = [color_bucket(image_path), base_view(product_id, image_path)]
    if dimensions:
        width, height = dimensions
        parts.append(f"{width}x{height}")
    return "-".join(parts).replace("-", "_")


def semantic_view(view_key: str) -> str:
    return _DIMENSION_SUFFIX.sub("", _BUCKET_PREFIX.sub("", view_key))


def is_gray(view_key: str) -> bool:
    return view_key.startswith("gray_")


def classify_view(
    product_id: str,
    image_path: str,
    image_store: Path,
    probe: Prober = probe_dimensions,
    timeout: Optional[float] = None,
    log: Optional[logging.Logger] = None,
) -> str:
    """Single-image convenience around `build_view_key` that probes dimensions itself."""
    full = store_path(image_store, image_path)
    dims = probe_all([full], probe=probe, timeout=timeout, log=log).get(full)
    return build_view_key(product_id, image_path, dims)


def classify_products(
    products: Sequence[ResolvedProduct],
    image_store: Path,
    probe: Prober = probe_dimensions,
    workers: int = 1,
    timeout: Optional[float] = None,
    log: Optional[logging.Logger] = None,
) -> List[ResolvedProduct]:
    """Attach `views` to every product.

    Keys collide when two images share bucket, view and size; the later path in
    catalog order wins.
    """
    log = log or logger
    full_paths = [store_path(image_store, p) for product in products for p in product.image_paths]
    dims = probe_all(full_paths, probe=probe, workers=workers, timeout=timeout, log=log)

    out: List[ResolvedProduct] = []
    for product in products:
        views: Dict[str, str] = {}
        for image_path in product.image_paths:
            key = build_view_key(product.product_id, image_path, dims.get(store_path(image_store, image_path)))
            if key in views and views[key] != image_path:
                log.warning(
                    "View %s for %s: %s replaces %s", key, product.product_id, image_path, views[key]
                )
            views[key] = image_path
        out.append(product.with_views(views))
    return out


def summarize_views(products: Iterable[ResolvedProduct], log: Optional[logging.Logger] = None) -> None:
    log = log or logger
    rows = [(p.product_id, str(len(p.image_paths)), ", ".join(p.views)) for p in products]
    if not rows:
        log.info("No products with available images")
        return
    w_id = max(len("productId"), *(len(r[0]) for r in rows))
    w_n = len("imagesAvailable")
    log.info("%s | %s | views", "productId".ljust(w_id), "imagesAvailable")
    for pid, n, views in rows:
        log.info("%s | %s | %s", pid.ljust(w_id), n.rjust(w_n), views)
