"""
SFCC catalog images → Shopify (Matrixify) manifest library.

This package provides modular building blocks for:
- Loading per-catalog style allow-lists
- Extracting product image paths from SFCC catalog XML
- Checking images against the on-disk image store
- Classifying each image into a canonical view key
- Emitting the image inventory CSV, renamed image copies and the Matrixify CSV

Public API:
- styles.load_style_allow_lists
- catalog.extract_catalog_products, catalog.extract_all_catalogs
- images.resolve_available_images, images.probe_dimensions
- views.build_view_key, views.classify_products
- inventory.build_inventory, inventory.write_inventory_csv, inventory.read_inventory_csv
- materialize.copy_images_to_output
- manifest.build_manifest_rows, manifest.generate_manifests
- pipeline.run_pipeline
"""

from . import io, normalize, styles, catalog, images, views, inventory, materialize, manifest, pipeline  # re-export modules

__all__ = [
    "io",
    "normalize",
    "styles",
    "catalog",
    "images",
    "views",
    "inventory",
    "materialize",
    "manifest",
    "pipeline",
]
