from __future__ import annotations
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from .describe import html_to_markdown
from .errors import EmptyInputError, OptionsError
from .io import read_rows, read_rows_bytes, read_rows_text, render_medusa_csv, write_csv_text
from .mapping import (
    DEFAULT_VARIANT_TITLE,
    PRODUCT_HEADERS,
    SHOPIFY_HEADERS,
    VARIANT_HEADERS,
    image_column,
    map_options,
    map_status,
    price_column,
    tag_column,
)
from .normalize import is_valid_currency, normalize_currency, split_tags, unique_images


log = logging.getLogger(__name__)

DEFAULT_SALES_CHANNEL = "default"


@dataclass
class ConversionOptions:
    currency_code: str
    markdown_description: bool = False
    # None leaves "Product Sales Channel 1" blank.
    sales_channel: Optional[str] = None

    def __post_init__(self) -> None:
        code = normalize_currency(self.currency_code)
        if not is_valid_currency(code):
            raise OptionsError(f"Currency code must be 3 letters, got {self.currency_code!r}")
        self.currency_code = code

    @property
    def price_column(self) -> str:
        return price_column(self.currency_code)


@dataclass
class ConversionSummary:
    products: int
    variants: int

    @classmethod
    def from_rows(cls, rows: List[Dict[str, str]]) -> "ConversionSummary":
        handles = {r.get("Product Handle") for r in rows}
        return cls(products=len(handles), variants=len(rows))


@dataclass
class ConversionResult:
    csv_text: str
    summary: ConversionSummary
    rows: List[Dict[str, str]] = field(default_factory=list)


def group_by_handle(src: List[Dict[str, str]]) -> Dict[str, List[Dict[str, str]]]:
    """Group rows by Handle, keeping first-seen group order and row order.

    Handles are used verbatim as keys. Rows whose handle is empty or blank
    carry no parent context and are dropped.
    """
    groups: Dict[str, List[Dict[str, str]]] = {}
    dropped = 0
    for row in src:
        handle = row.get("Handle") or ""
        if not handle.strip():
            dropped += 1
            continue
        groups.setdefault(handle, []).append(row)
    if dropped:
        log.debug("dropped %d rows without a Handle", dropped)
    return groups


def _blank_row() -> Dict[str, str]:
    out = {h: "" for h in PRODUCT_HEADERS}
    out.update({h: "" for h in VARIANT_HEADERS})
    return out


def _parent_fields(first: Dict[str, str], images: List[str], opts: ConversionOptions) -> Dict[str, str]:
    description = first.get("Body (HTML)") or ""
    if opts.markdown_description and description:
        description = html_to_markdown(description)
    return {
        "Product Title": first.get("Title") or "",
        "Product Description": description,
        "Product Status": map_status(first.get("Published") or ""),
        "Product Thumbnail": images[0] if images else "",
        "Product Weight": first.get("Variant Grams") or "",
        "Product Sales Channel 1": opts.sales_channel or "",
        "Product Type Id": first.get("Type") or "",
        "Product Discountable": "TRUE",
    }


def transform_group(handle: str, items: List[Dict[str, str]], opts: ConversionOptions) -> List[Dict[str, str]]:
    first = items[0]
    images = unique_images(items)
    parent = _parent_fields(first, images, opts)
    tags = split_tags(first.get("Tags") or "")

    out_rows = []
    for idx, row in enumerate(items):
        out = _blank_row()
        out["Product Handle"] = handle
        if idx == 0:
            out.update(parent)

        out["Variant Title"] = row.get("Option1 Value") or DEFAULT_VARIANT_TITLE
        out["Variant SKU"] = row.get("Variant SKU") or ""
        out["Variant Allow Backorder"] = "FALSE"
        out["Variant Manage Inventory"] = "TRUE"
        out["Variant Weight"] = row.get("Variant Grams") or ""
        out.update(map_options(row))
        out[opts.price_column] = row.get("Variant Price") or ""

        if idx == 0:
            for i, tag in enumerate(tags, start=1):
                out[tag_column(i)] = tag
            for i, img in enumerate(images, start=1):
                out[image_column(i)] = img

        out_rows.append(out)
    return out_rows


def transform_rows(src_all: List[Dict[str, str]], opts: ConversionOptions) -> List[Dict[str, str]]:
    """Map Shopify export rows onto Medusa import rows, one output row per input row.

    Groups are emitted in order of first appearance of their handle. Only the
    first row of each group carries product-level columns, tags and images.
    """
    groups = group_by_handle(src_all)
    out_rows: List[Dict[str, str]] = []
    for handle, items in groups.items():
        out_rows.extend(transform_group(handle, items, opts))
    log.info("transformed %d rows into %d products", len(out_rows), len(groups))
    return out_rows


def _finish(src: List[Dict[str, str]], opts: ConversionOptions) -> ConversionResult:
    if not src:
        raise EmptyInputError()
    missing = [h for h in SHOPIFY_HEADERS if h not in src[0]]
    if missing:
        log.info("input has no %s column(s); treating them as empty", ", ".join(missing))
    rows = transform_rows(src, opts)
    if not rows:
        raise EmptyInputError("No products found in CSV (no row has a Handle)")
    csv_text = render_medusa_csv(rows)
    return ConversionResult(csv_text=csv_text, summary=ConversionSummary.from_rows(rows), rows=rows)


def convert(text: str, opts: ConversionOptions) -> ConversionResult:
    """Decode Shopify CSV text, transform it and encode the Medusa CSV.

    Raises a ConversionError subclass on failure; nothing is returned partially.
    """
    return _finish(read_rows_text(text), opts)


def convert_bytes(data: bytes, opts: ConversionOptions) -> ConversionResult:
    return _finish(read_rows_bytes(data), opts)


def convert_file(input_path: Path, opts: ConversionOptions) -> ConversionResult:
    return _finish(read_rows(input_path), opts)


def write_output(output_path: Path, result: ConversionResult) -> None:
    write_csv_text(output_path, result.csv_text)
