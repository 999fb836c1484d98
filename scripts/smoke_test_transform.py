#!/usr/bin/env python3
"""Basic smoke test for the converter.

Runs a conversion on an inline Shopify export and checks headers and counts.
No network and no files are touched.
"""
from pathlib import Path
import sys

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / 'src'))

from shopify_medusa.transform import ConversionOptions, convert  # type: ignore


SAMPLE = (
    'Handle,Title,Body (HTML),Type,Tags,Published,Option1 Name,Option1 Value,Variant SKU,Variant Grams,Variant Price,Image Src\n'
    'shirt,Shirt,<p>Soft <b>cotton</b></p>,Tops,"summer, cotton",TRUE,Size,Small,SH-S,200,10.00,https://cdn.example.com/shirt.png\n'
    'shirt,,,,,,,Large,SH-L,210,12.00,https://cdn.example.com/shirt-back.png\n'
)


def main() -> int:
    result = convert(SAMPLE, ConversionOptions(currency_code='eur', markdown_description=True))
    if not result.rows:
        print("Smoke test failed: no rows produced")
        return 1
    header = result.csv_text.splitlines()[0]
    if '"Variant Price EUR"' not in header:
        print(f"Smoke test failed: missing price column in {header}")
        return 1
    print(f"Smoke test ok: {result.summary.products} products, {result.summary.variants} variants")
    print(result.csv_text)
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
