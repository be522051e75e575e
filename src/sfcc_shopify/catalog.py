"""
Catalog XML extraction.

SFCC catalog exports declare a default namespace, so elements are matched on
their local name. Only `hi-res` and `grid-large` image groups carry images we
export; thumbnails and swatches are dropped here.
"""
from __future__ import annotations
import logging
from pathlib import Path
from typing import Dict, FrozenSet, Iterator, List, Optional

from lxml import etree

from .models import CatalogProduct
from .normalize import catalog_base_name


ACCEPTED_VIEW_TYPES = ("hi-res", "grid-large")

logger = logging.getLogger(__name__)


def _descendants(elem: etree._Element, name: str) -> Iterator[etree._Element]:
    # "{*}" matches the name in any namespace, or none
    for child in elem.iter(f"{{*}}{name}"):
        if child is not elem:
            yield child


def load_catalog(xml_path: Path) -> etree._Element:
    parser = etree.XMLParser(resolve_entities=False, remove_comments=True, huge_tree=True)
    return etree.parse(str(xml_path), parser).getroot()


def product_image_paths(product: etree._Element) -> List[str]:
    paths: List[str] = []
    for images in _descendants(product, "images"):
        for group in _descendants(images, "image-group"):
            if group.get("view-type") not in ACCEPTED_VIEW_TYPES:
                continue
            for image in _descendants(group, "image"):
                path = (image.get("path") or "").strip()
                if path:
                    paths.append(path)
    return paths


def parse_catalog_products(
    root: etree._Element,
    allowed: FrozenSet[str],
    catalog: str,
    catalog_file: str = "",
    log: Optional[logging.Logger] = None,
) -> List[CatalogProduct]:
    log = log or logger
    out: List[CatalogProduct] = []
    for product in _descendants(root, "product"):
        product_id = (product.get("product-id") or "").strip()
        if not product_id or product_id not in allowed:
            continue
        paths = product_image_paths(product)
        if not paths:
            log.debug("No hi-res/grid-large images for %s in %s", product_id, catalog_file or catalog)
            continue
        out.append(CatalogProduct(product_id=product_id, image_paths=tuple(paths), catalog=catalog, catalog_file=catalog_file))
        log.info("Images assigned to %s (%d path(s))", product_id, len(paths))
    return out


def extract_catalog_products(
    xml_path: Path,
    allow_lists: Dict[str, FrozenSet[str]],
    log: Optional[logging.Logger] = None,
) -> List[CatalogProduct]:
    log = log or logger
    base = catalog_base_name(xml_path.name)
    allowed = allow_lists.get(base)
    if allowed is None:
        log.warning("No styles list found for catalog %s, skipping", xml_path.name)
        return []
    log.info("Processing catalog: %s with %d styles", xml_path.name, len(allowed))
    try:
        root = load_catalog(xml_path)
    except (etree.XMLSyntaxError, OSError) as e:
        log.error("Could not parse catalog %s: %s", xml_path.name, e)
        return []
    return parse_catalog_products(root, allowed, catalog=base, catalog_file=xml_path.name, log=log)


def extract_all_catalogs(
    catalogs_dir: Path,
    allow_lists: Dict[str, FrozenSet[str]],
    log: Optional[logging.Logger] = None,
) -> List[CatalogProduct]:
    log = log or logger
    if not catalogs_dir.exists() or not catalogs_dir.is_dir():
        raise FileNotFoundError(f"Catalogs directory not found: {catalogs_dir}")
    files = sorted(p for p in catalogs_dir.glob("*.xml") if p.is_file())
    products: List[CatalogProduct] = []
    for p in files:
        products.extend(extract_catalog_products(p, allow_lists, log=log))
    log.info("Extracted %d product(s) from %d catalog file(s)", len(products), len(files))
    return products
