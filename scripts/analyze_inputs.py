#!/usr/bin/env python3
import sys
from collections import Counter
from pathlib import Path

from lxml import etree

sys.path.append(str(Path(__file__).resolve().parents[1] / 'src'))
from sfcc_shopify.images import list_images  # type: ignore
from sfcc_shopify.normalize import catalog_base_name  # type: ignore
from sfcc_shopify.styles import load_style_allow_lists  # type: ignore


def main():
    root = Path(sys.argv[1]) if len(sys.argv) > 1 else Path('.')
    allow_lists = load_style_allow_lists(root / 'styles')
    files = sorted((root / 'catalogs').glob('*.xml'))

    print('Catalogs:')
    view_types = Counter()
    for p in files:
        base = catalog_base_name(p.name)
        doc = etree.parse(str(p)).getroot()
        products = list(doc.iter('{*}product'))
        allowed = allow_lists.get(base)
        listed = sum(1 for e in products if allowed and e.get('product-id') in allowed)
        for e in doc.iter('{*}image-group'):
            view_types[e.get('view-type') or '(missing)'] += 1
        styles = f'{len(allowed)} styles' if allowed is not None else 'NO styles list'
        print(f'- {p.name}: {len(products)} products, {listed} allow-listed ({styles})')

    images = list_images(root / 'images' / 'images')
    folders = Counter(p.parent.name.lower() for p in images)
    print(f"\nImages on disk: {len(images)}")

    print('\nimage-group view-type values:')
    for k, v in view_types.most_common():
        print(f'- {k}: {v}')

    print('\nTop image folders:')
    for k, v in folders.most_common(20):
        print(f'- {k or "(root)"}: {v}')

if __name__ == '__main__':
    main()
