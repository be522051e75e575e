from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import Dict, Tuple


@dataclass(frozen=True)
class CatalogProduct:
    product_id: str
    image_paths: Tuple[str, ...]
    catalog: str
    catalog_file: str = ""


@dataclass(frozen=True)
class ResolvedProduct:
    """A catalog product narrowed to images present in the image store.

    `views` maps a view key to the relative source path it was derived from.
    It stays empty until the classifier has run.
    """

    product_id: str
    image_paths: Tuple[str, ...]
    catalog: str
    catalog_file: str = ""
    views: Dict[str, str] = field(default_factory=dict)

    def with_views(self, views: Dict[str, str]) -> "ResolvedProduct":
        return replace(self, views=dict(views))


@dataclass(frozen=True)
class InventoryRow:
    product_id: str
    gray: Tuple[str, ...]
    non_gray: Tuple[str, ...]


@dataclass(frozen=True)
class StyleMapEntry:
    shopify_id: str
    title: str
    style: str


@dataclass(frozen=True)
class ManifestRow:
    shopify_id: str
    image_src: str
    position: int
    width: str
    height: str
    alt_text: str
    style: str = ""
