#!/usr/bin/env python3
"""Turn SFCC catalog exports and their image tree into Shopify image import files.

With no arguments every catalog under ./catalogs is processed in one pass:
inventory CSVs, renamed image copies and Matrixify upload CSVs.
"""
import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from sfcc_shopify.config import PipelineConfig, load_env
from sfcc_shopify.logs import setup_logging
from sfcc_shopify.pipeline import STAGES, run_pipeline


def fail(msg: str) -> None:
    print(f"Error: {msg}", file=sys.stderr)
    sys.exit(1)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    # Early parse to pick up --env-file, then load it so env-backed defaults see it
    env_only = argparse.ArgumentParser(add_help=False)
    env_only.add_argument("--env-file", default="", help="Path to .env file (optional)")
    early_args, _ = env_only.parse_known_args(argv)
    load_env(early_args.env_file or None)

    p = argparse.ArgumentParser(
        description="Build image inventory, renamed images and Matrixify CSVs from SFCC catalogs",
        parents=[env_only],
    )
    p.add_argument("--root", default=os.getenv("PIPELINE_ROOT", ""), help="Project root holding catalogs/, styles/, images/ (default: CWD)")
    p.add_argument(
        "--stage",
        choices=list(STAGES),
        default="all",
        help="all (default), images = inventory CSVs + image copies only, manifest = Matrixify CSVs from existing inventory",
    )
    p.add_argument("--probe-workers", type=int, help="Parallel image dimension probes (default: PROBE_WORKERS or 1)")
    p.add_argument("--probe-timeout", type=float, help="Seconds before a dimension probe is abandoned (default: PROBE_TIMEOUT or 30)")
    p.add_argument("--log-file", help="Append-only log file (default: LOG_FILE or <root>/debug.log)")
    p.add_argument("-v", "--verbose", action="count", default=0, help="Increase verbosity (-v for DEBUG)")
    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    try:
        args = parse_args(argv)
    except FileNotFoundError as e:
        fail(str(e))
    try:
        cfg = PipelineConfig.from_env(Path(args.root) if args.root else None)
    except ValueError as e:
        fail(str(e))
    if args.probe_workers is not None:
        cfg.probe_workers = args.probe_workers
    if args.probe_timeout is not None:
        cfg.probe_timeout = args.probe_timeout
    if args.log_file:
        cfg.log_file = Path(args.log_file)

    level = logging.DEBUG if args.verbose >= 1 else logging.INFO
    log = setup_logging(level, cfg.log_file)
    log.info("Using root=%s stage=%s", cfg.root, args.stage)

    try:
        run_pipeline(cfg, stage=args.stage)
    except FileNotFoundError as e:
        log.error("%s", e)
        fail(str(e))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
