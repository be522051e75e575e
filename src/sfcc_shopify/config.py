from __future__ import annotations
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


INVENTORY_SUFFIX = "_catalog-image-inventory-export.csv"
MANIFEST_SUFFIX = "_matrixify_image_upload.csv"


@dataclass
class PipelineConfig:
    root: Path
    catalogs_dir: Path
    styles_dir: Path
    images_dir: Path
    shopify_styles_dir: Path
    inventory_dir: Path
    output_images_dir: Path
    manifest_dir: Path
    log_file: Path
    probe_workers: int = 1
    probe_timeout: float = 30.0

    @property
    def image_store(self) -> Path:
        # catalog image paths are relative to images/images
        return self.images_dir / "images"

    @property
    def required_dirs(self) -> dict:
        return {
            "Catalogs": self.catalogs_dir,
            "Styles": self.styles_dir,
            "Images": self.images_dir,
        }

    @classmethod
    def from_env(cls, root: Optional[Path] = None) -> "PipelineConfig":
        base = Path(root or os.getenv("PIPELINE_ROOT") or Path.cwd()).expanduser()

        def _dir(env_name: str, default: str) -> Path:
            value = (os.getenv(env_name) or "").strip()
            p = Path(value).expanduser() if value else Path(default)
            return p if p.is_absolute() else base / p

        def _number(env_name: str, default: str, kind):
            value = (os.getenv(env_name) or "").strip() or default
            try:
                return kind(value)
            except ValueError:
                raise ValueError(f"{env_name} must be a number, got {value!r}") from None

        return cls(
            root=base,
            catalogs_dir=_dir("CATALOGS_DIR", "catalogs"),
            styles_dir=_dir("STYLES_DIR", "styles"),
            images_dir=_dir("IMAGES_DIR", "images"),
            shopify_styles_dir=_dir("SHOPIFY_STYLES_DIR", "shopify-styles"),
            inventory_dir=_dir("INVENTORY_DIR", "inventory-output"),
            output_images_dir=_dir("OUTPUT_IMAGES_DIR", "images-output"),
            manifest_dir=_dir("MANIFEST_DIR", "matrixify"),
            log_file=_dir("LOG_FILE", "debug.log"),
            probe_workers=_number("PROBE_WORKERS", "1", int),
            probe_timeout=_number("PROBE_TIMEOUT", "30", float),
        )

    def inventory_path(self, catalog: str) -> Path:
        return self.inventory_dir / f"{catalog}{INVENTORY_SUFFIX}"

    def manifest_path(self, catalog: str) -> Path:
        return self.manifest_dir / f"{catalog}{MANIFEST_SUFFIX}"

    def style_map_path(self, catalog: str) -> Optional[Path]:
        for ext in (".csv", ".xlsx"):
            p = self.shopify_styles_dir / f"{catalog}_styles{ext}"
            if p.exists():
                return p
        return None


def load_env(dotenv_path: Optional[str] = None) -> None:
    """Populate os.environ from .env files without overriding real env vars.

    Project root `.env` first, then the CWD one, then an explicit file.
    """
    project_env = Path(__file__).resolve().parents[2] / ".env"
    for candidate in (project_env, Path.cwd() / ".env"):
        if candidate.exists():
            load_dotenv(candidate)
    if dotenv_path:
        p = Path(dotenv_path).expanduser()
        if not p.exists():
            raise FileNotFoundError(f"Env file not found: {p}")
        load_dotenv(p, override=True)
