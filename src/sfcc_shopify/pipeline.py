from __future__ import annotations
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, FrozenSet, List, Optional

from .catalog import extract_all_catalogs
from .config import PipelineConfig
from .images import Prober, probe_dimensions, resolve_available_images
from .inventory import build_inventory, write_inventory_csv
from .manifest import generate_manifests
from .materialize import copy_images_to_output
from .models import CatalogProduct, InventoryRow, ResolvedProduct
from .styles import load_style_allow_lists
from .views import classify_products, summarize_views


STAGES = ("all", "images", "manifest")

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    allow_lists: Dict[str, FrozenSet[str]] = field(default_factory=dict)
    catalog_products: List[CatalogProduct] = field(default_factory=list)
    products: List[ResolvedProduct] = field(default_factory=list)
    inventory: Dict[str, List[InventoryRow]] = field(default_factory=dict)
    inventory_files: List[Path] = field(default_factory=list)
    copied: int = 0
    manifests: List[Path] = field(default_factory=list)


def check_required_dirs(cfg: PipelineConfig, stage: str = "all") -> None:
    """Fail before any work when a top-level input directory is missing."""
    if stage == "manifest":
        required = {"Inventory": cfg.inventory_dir, "Shopify styles": cfg.shopify_styles_dir}
    else:
        required = cfg.required_dirs
    for label, path in required.items():
        if not path.exists() or not path.is_dir():
            raise FileNotFoundError(f"{label} directory not found: {path}")


def run_image_stage(
    cfg: PipelineConfig,
    probe: Prober = probe_dimensions,
    log: Optional[logging.Logger] = None,
) -> PipelineResult:
    """Catalogs -> allow-list filter -> available images -> views -> inventory CSVs and renamed copies."""
    log = log or logger
    result = PipelineResult()
    result.allow_lists = load_style_allow_lists(cfg.styles_dir, log=log)
    result.catalog_products = extract_all_catalogs(cfg.catalogs_dir, result.allow_lists, log=log)
    resolved = resolve_available_images(result.catalog_products, cfg.image_store, log=log)
    result.products = classify_products(
        resolved,
        cfg.image_store,
        probe=probe,
        workers=cfg.probe_workers,
        timeout=cfg.probe_timeout,
        log=log,
    )
    summarize_views(result.products, log=log)

    result.inventory = build_inventory(result.products, log=log)
    for catalog, rows in result.inventory.items():
        path = cfg.inventory_path(catalog)
        try:
            count = write_inventory_csv(path, rows)
        except OSError as e:
            log.error("Could not write inventory CSV %s: %s", path, e)
            continue
        result.inventory_files.append(path)
        log.info("Inventory CSV exported to %s (%d product(s))", path, count)

    result.copied = copy_images_to_output(result.products, cfg.image_store, cfg.output_images_dir, log=log)
    return result


def run_pipeline(
    cfg: PipelineConfig,
    stage: str = "all",
    probe: Prober = probe_dimensions,
    log: Optional[logging.Logger] = None,
) -> PipelineResult:
    log = log or logger
    if stage not in STAGES:
        raise ValueError(f"Unknown stage {stage!r}, expected one of {', '.join(STAGES)}")
    check_required_dirs(cfg, stage)

    if stage == "manifest":
        result = PipelineResult()
        result.manifests = generate_manifests(cfg, log=log)
        return result

    result = run_image_stage(cfg, probe=probe, log=log)
    if stage == "all":
        if result.inventory:
            result.manifests = generate_manifests(cfg, catalogs=list(result.inventory), log=log)
        else:
            log.warning("No inventory produced, skipping Matrixify manifests")
    log.info(
        "Done. catalogs=%d products=%d copied=%d manifests=%d",
        len(result.inventory),
        len(result.products),
        result.copied,
        len(result.manifests),
    )
    return result
