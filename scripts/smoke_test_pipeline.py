#!/usr/bin/env python3
"""Basic smoke test for a full pipeline run.

Runs every stage against ./data (catalogs/, styles/, images/, shopify-styles/)
and checks that inventory and Matrixify CSVs were produced.
"""
import logging
from pathlib import Path
import sys

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / 'src'))

from sfcc_shopify.config import PipelineConfig  # type: ignore
from sfcc_shopify.logs import setup_logging  # type: ignore
from sfcc_shopify.manifest import MANIFEST_HEADERS  # type: ignore
from sfcc_shopify.pipeline import run_pipeline  # type: ignore


def main() -> int:
    data = ROOT / 'data'
    if not (data / 'catalogs').exists():
        print(f"Sample input not found: {data / 'catalogs'}")
        return 0

    cfg = PipelineConfig.from_env(data)
    setup_logging(logging.WARNING, cfg.log_file)
    result = run_pipeline(cfg)
    if not result.inventory_files:
        print("Smoke test failed: no inventory CSV produced")
        return 1
    print(f"Smoke test ok: {len(result.products)} products, {result.copied} images copied")
    for p in result.inventory_files + result.manifests:
        print(f"- {p}")
    print("Manifest headers:", MANIFEST_HEADERS)
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
