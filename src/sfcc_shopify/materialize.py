from __future__ import annotations
import logging
import shutil
from pathlib import Path
from typing import Iterable, Optional

from .images import store_path
from .inventory import output_filename
from .models import ResolvedProduct


logger = logging.getLogger(__name__)


def copy_images_to_output(
    products: Iterable[ResolvedProduct],
    image_store: Path,
    output_dir: Path,
    log: Optional[logging.Logger] = None,
) -> int:
    """Copy each view's source image, bytes unchanged, to `{productId}_{viewKey}.jpg`."""
    log = log or logger
    output_dir.mkdir(parents=True, exist_ok=True)
    copied = 0
    failed = 0
    for product in products:
        for view_key, image_path in product.views.items():
            filename = output_filename(product.product_id, view_key)
            source = store_path(image_store, image_path)
            try:
                shutil.copyfile(source, output_dir / filename)
            except OSError as e:
                log.warning("Failed to copy %s from %s: %s", filename, image_path, e)
                failed += 1
                continue
            copied += 1
            log.debug("Copied %s", filename)
    log.info("Image copy complete: copied=%d failed=%d", copied, failed)
    return copied
