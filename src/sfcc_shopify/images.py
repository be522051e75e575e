from __future__ import annotations
import logging
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FutureTimeout
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from PIL import Image, UnidentifiedImageError

from .models import CatalogProduct, ResolvedProduct


IMAGE_EXTS = {".jpg", ".jpeg", ".png", ".gif", ".webp", ".tif", ".tiff"}

Dimensions = Tuple[int, int]
Prober = Callable[[Path], Dimensions]

logger = logging.getLogger(__name__)


def list_images(images_dir: Path) -> List[Path]:
    if not images_dir.exists() or not images_dir.is_dir():
        raise FileNotFoundError(f"Images directory not found: {images_dir}")
    files: List[Path] = []
    for p in images_dir.rglob("*"):
        if p.is_file() and p.suffix.lower() in IMAGE_EXTS:
            files.append(p)
    return sorted(files)


def store_path(image_store: Path, image_path: str) -> Path:
    # catalog paths are store-relative even when written with a leading slash
    return image_store / image_path.replace("\\", "/").lstrip("/")


def inside_store(image_store: Path, full_path: Path) -> bool:
    return full_path.resolve().is_relative_to(image_store.resolve())


def resolve_available_images(
    products: Iterable[CatalogProduct],
    image_store: Path,
    log: Optional[logging.Logger] = None,
) -> List[ResolvedProduct]:
    """Keep only the catalog paths that exist on disk; drop products left with none."""
    log = log or logger
    resolved: List[ResolvedProduct] = []
    for product in products:
        found: List[str] = []
        for image_path in product.image_paths:
            full = store_path(image_store, image_path)
            if not inside_store(image_store, full):
                log.warning("%s for %s resolves outside the image store, skipping", image_path, product.product_id)
                continue
            if full.is_file():
                found.append(image_path)
                log.debug("%s found", image_path)
            else:
                log.warning("%s not found for %s (checked %s)", image_path, product.product_id, full)
        if not found:
            log.warning("No images available for %s, dropping product", product.product_id)
            continue
        resolved.append(
            ResolvedProduct(
                product_id=product.product_id,
                image_paths=tuple(found),
                catalog=product.catalog,
                catalog_file=product.catalog_file,
            )
        )
    log.info("Images available for %d product(s)", len(resolved))
    return resolved


def probe_dimensions(path: Path) -> Dimensions:
    """Return (width, height) from the image header. Raises on unreadable files."""
    with Image.open(path) as im:
        width, height = im.size
    return int(width), int(height)


def probe_all(
    paths: Sequence[Path],
    probe: Prober = probe_dimensions,
    workers: int = 1,
    timeout: Optional[float] = None,
    log: Optional[logging.Logger] = None,
) -> Dict[Path, Optional[Dimensions]]:
    """Probe each distinct path once; failures and timeouts map to None.

    Paths are probed in chunks of `workers`. A chunk that times out gets its
    pool abandoned so a hung read cannot block the probes after it. Results
    are keyed by path so callers classify in their own order whatever the
    worker count.
    """
    log = log or logger
    size = max(1, int(workers or 1))
    unique: List[Path] = list(dict.fromkeys(paths))
    results: Dict[Path, Optional[Dimensions]] = {}
    pool: Optional[ThreadPoolExecutor] = None
    try:
        for start in range(0, len(unique), size):
            if pool is None:
                pool = ThreadPoolExecutor(max_workers=size, thread_name_prefix="probe")
            chunk = unique[start : start + size]
            futures = [(p, pool.submit(probe, p)) for p in chunk]
            hung = False
            for p, fut in futures:
                try:
                    results[p] = fut.result(timeout=timeout)
                except FutureTimeout:
                    log.warning("Could not get dimensions for %s: timed out after %ss", p, timeout)
                    results[p] = None
                    hung = True
                except (OSError, UnidentifiedImageError, ValueError, Image.DecompressionBombError) as e:
                    log.warning("Could not get dimensions for %s: %s", p, e)
                    results[p] = None
            if hung:
                pool.shutdown(wait=False, cancel_futures=True)
                pool = None
    finally:
        if pool is not None:
            pool.shutdown(wait=False, cancel_futures=True)
    return results
