"""
Shared test fixtures.

Builds small SFCC-style project trees on disk: catalogs, style allow-lists,
an image store with real JPEGs, and a Shopify style map.
"""

from pathlib import Path
from typing import Dict, Optional, Tuple

import pytest
from PIL import Image

from sfcc_shopify.config import PipelineConfig


PIPELINE_ENV_VARS = (
    "PIPELINE_ROOT",
    "CATALOGS_DIR",
    "STYLES_DIR",
    "IMAGES_DIR",
    "SHOPIFY_STYLES_DIR",
    "INVENTORY_DIR",
    "OUTPUT_IMAGES_DIR",
    "MANIFEST_DIR",
    "LOG_FILE",
    "PROBE_WORKERS",
    "PROBE_TIMEOUT",
)

SFCC_NS = "http://www.demandware.com/xml/impex/catalog/2006-10-31"

ROCKY_CATALOG = f"""<?xml version="1.0" encoding="UTF-8"?>
<catalog xmlns="{SFCC_NS}" catalog-id="rockyboots">
  <product product-id="ABC123">
    <display-name xml:lang="x-default">Ridge Boot</display-name>
    <images>
      <image-group view-type="hi-res">
        <image path="ABC123/gray/ABC123_instepprofile_large.jpg"/>
        <image path="ABC123/default/ABC123_9_regular.jpg"/>
        <image path="ABC123/ABC123_large.jpg"/>
        <image path="ABC123/default/ABC123_3.jpg"/>
      </image-group>
      <image-group view-type="thumbnail">
        <image path="ABC123/ABC123_thumbnail.jpg"/>
      </image-group>
    </images>
  </product>
  <product product-id="NOTLISTED">
    <images>
      <image-group view-type="hi-res">
        <image path="NOTLISTED/NOTLISTED_large.jpg"/>
      </image-group>
    </images>
  </product>
  <product product-id="DEF456">
    <images>
      <image-group view-type="grid-large">
        <image path="DEF456/DEF456_2.jpg"/>
      </image-group>
    </images>
    <images>
      <image-group view-type="hi-res">
        <image path="DEF456/spins/DEF456_thumbnail.jpg"/>
      </image-group>
    </images>
  </product>
  <product product-id="GHI789">
    <images>
      <image-group view-type="hi-res">
        <image path="GHI789/GHI789_large.jpg"/>
      </image-group>
    </images>
  </product>
  <product product-id="NOIMG">
    <images>
      <image-group view-type="swatch">
        <image path="NOIMG/swatch/NOIMG_swatch.jpg"/>
      </image-group>
    </images>
  </product>
</catalog>
"""

OUTLET_CATALOG = f"""<?xml version="1.0" encoding="UTF-8"?>
<catalog xmlns="{SFCC_NS}" catalog-id="outlet">
  <product product-id="ABC999">
    <images>
      <image-group view-type="hi-res">
        <image path="ABC999/ABC999_large.jpg"/>
      </image-group>
    </images>
  </product>
</catalog>
"""

ROCKY_STYLE_MAP = (
    "id,title,style\n"
    "1001,Rocky “Ridge” Boot,ABC123\n"
    "1002,Trail Runner,DEF456\n"
    "\n"
    "1003,Unused Style,ZZZ000\n"
)


def make_jpeg(path: Path, size: Tuple[int, int] = (40, 30), color: str = "gray") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.new("RGB", size, color=color).save(path, format="JPEG")
    return path


class FakeProbe:
    """Dimension probe backed by a filename -> (w, h) dict; unknown names fail."""

    def __init__(self, sizes: Optional[Dict[str, Tuple[int, int]]] = None):
        self.sizes = dict(sizes or {})
        self.calls = []

    def __call__(self, path: Path) -> Tuple[int, int]:
        self.calls.append(path)
        if path.name not in self.sizes:
            raise OSError(f"cannot identify image file {path}")
        return self.sizes[path.name]


@pytest.fixture(autouse=True)
def clean_pipeline_env(monkeypatch):
    for name in PIPELINE_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def fake_probe():
    return FakeProbe


@pytest.fixture
def project_root(tmp_path) -> Path:
    """A complete input tree for the rockyboots catalog plus an unlisted outlet catalog."""
    root = tmp_path / "project"
    (root / "catalogs").mkdir(parents=True)
    (root / "catalogs" / "rockyboots_catalog.xml").write_text(ROCKY_CATALOG, encoding="utf-8")
    (root / "catalogs" / "outlet.xml").write_text(OUTLET_CATALOG, encoding="utf-8")
    (root / "catalogs" / "notes.txt").write_text("not a catalog", encoding="utf-8")

    (root / "styles").mkdir()
    (root / "styles" / "rockyboots_styles.txt").write_text(
        "ABC123\r\n  DEF456  \n\nGHI789\nNOIMG\nABC999\n", encoding="utf-8"
    )

    store = root / "images" / "images"
    make_jpeg(store / "ABC123" / "gray" / "ABC123_instepprofile_large.jpg", (80, 60))
    make_jpeg(store / "ABC123" / "default" / "ABC123_9_regular.jpg", (40, 30))
    make_jpeg(store / "ABC123" / "ABC123_large.jpg", (100, 75))
    make_jpeg(store / "ABC123" / "ABC123_thumbnail.jpg", (10, 10))
    make_jpeg(store / "DEF456" / "DEF456_2.jpg", (50, 50))
    corrupt = store / "DEF456" / "spins" / "DEF456_thumbnail.jpg"
    corrupt.parent.mkdir(parents=True, exist_ok=True)
    corrupt.write_bytes(b"not really a jpeg")
    make_jpeg(store / "ABC999" / "ABC999_large.jpg", (20, 20))

    (root / "shopify-styles").mkdir()
    (root / "shopify-styles" / "rockyboots_styles.csv").write_text(ROCKY_STYLE_MAP, encoding="utf-8")
    return root


@pytest.fixture
def pipeline_config(project_root) -> PipelineConfig:
    return PipelineConfig.from_env(project_root)
