#!/usr/bin/env python3
"""Self-test for view key derivation and inventory ordering.

No image files required. Validates deterministic behavior of the naming rules.
"""
from pathlib import Path
import sys

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / 'src'))

from sfcc_shopify.inventory import NON_GRAY_ORDER, sort_view_keys  # type: ignore
from sfcc_shopify.manifest import parse_image_filename  # type: ignore
from sfcc_shopify.views import build_view_key  # type: ignore


def main() -> int:
    # gray folder, written-out label, size suffix
    assert build_view_key('ABC123', 'gray/ABC123_instepprofile_large.jpg', (800, 600)) == 'gray_instep_profile_800x600'
    # numeric code, no dimensions
    assert build_view_key('ABC123', 'default/ABC123_9_regular.jpg') == 'default_lifestyle'
    # spin folder with nothing left after the size label
    assert build_view_key('ABC123', 'spins/ABC123_thumbnail.jpg') == 'default_main'
    # ordering
    assert sort_view_keys(['default_back', 'default_zz', 'default_main'], NON_GRAY_ORDER) == ['default_main', 'default_back', 'default_zz']
    # manifest filename parsing
    assert parse_image_filename('ABC123_gray_instep_profile_800x600.jpg', 'ABC123') == ('instep_profile', '800', '600')
    print('Self-test ok: build_view_key, sort_view_keys and parse_image_filename pass basic checks')
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
