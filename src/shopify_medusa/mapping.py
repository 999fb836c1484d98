from __future__ import annotations
from typing import Dict, List


# Shopify product export columns read by the transformer.
SHOPIFY_HEADERS = [
    "Handle",
    "Title",
    "Body (HTML)",
    "Vendor",
    "Type",
    "Tags",
    "Published",
    "Option1 Name",
    "Option1 Value",
    "Option2 Name",
    "Option2 Value",
    "Option3 Name",
    "Option3 Value",
    "Variant SKU",
    "Variant Grams",
    "Variant Inventory Qty",
    "Variant Price",
    "Image Src",
    "Image Position",
    "Image Alt Text",
]

DEFAULT_VARIANT_TITLE = "Default Variant"

# Medusa import columns that appear on every row, in output order. Ids are
# left blank so Medusa generates them during import.
PRODUCT_HEADERS = [
    "Product Id",
    "Product Handle",
    "Product Title",
    "Product Subtitle",
    "Product Description",
    "Product Status",
    "Product Thumbnail",
    "Product Weight",
    "Product Length",
    "Product Width",
    "Product Height",
    "Product HS Code",
    "Product Origin Country",
    "Product MID Code",
    "Product Material",
    "Shipping Profile Id",
    "Product Sales Channel 1",
    "Product Collection Id",
    "Product Type Id",
    "Product Discountable",
    "Product External Id",
]

VARIANT_HEADERS = [
    "Variant Id",
    "Variant Title",
    "Variant SKU",
    "Variant Barcode",
    "Variant Allow Backorder",
    "Variant Manage Inventory",
    "Variant Weight",
    "Variant Length",
    "Variant Width",
    "Variant Height",
    "Variant HS Code",
    "Variant Origin Country",
    "Variant MID Code",
    "Variant Material",
]

OPTION_COUNT = 3


def price_column(currency_code: str) -> str:
    return f"Variant Price {currency_code.upper()}"


def tag_column(n: int) -> str:
    return f"Product Tag {n}"


def image_column(n: int) -> str:
    return f"Product Image {n} Url"


def map_options(row: Dict[str, str]) -> Dict[str, str]:
    """Copy the three Shopify option name/value pairs onto Medusa option columns."""
    out: Dict[str, str] = {}
    for n in range(1, OPTION_COUNT + 1):
        out[f"Variant Option {n} Name"] = row.get(f"Option{n} Name") or ""
        out[f"Variant Option {n} Value"] = row.get(f"Option{n} Value") or ""
    return out


def map_status(published: str) -> str:
    return "published" if published == "TRUE" else "draft"
