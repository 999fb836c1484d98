"""
Shopify → Medusa product CSV converter.

This package provides modular building blocks for:
- Reading Shopify product export CSVs
- Grouping variant rows under their product handle
- Optional HTML → Markdown conversion of product descriptions
- Emitting Medusa-compatible import CSV rows

Public API:
- io.read_rows, io.read_rows_text, io.render_medusa_csv, io.write_csv_text
- mapping.price_column, mapping.tag_column, mapping.image_column
- describe.html_to_markdown
- transform.ConversionOptions, transform.transform_rows, transform.convert
- errors.ConversionError and its subclasses
"""

from . import errors, io, mapping, normalize, describe, transform  # re-export modules
from .errors import ConversionError, DecodeError, EmptyInputError, EncodeError, OptionsError
from .transform import ConversionOptions, ConversionResult, ConversionSummary, convert

__all__ = [
    "errors",
    "io",
    "mapping",
    "normalize",
    "describe",
    "transform",
    "ConversionError",
    "DecodeError",
    "EmptyInputError",
    "EncodeError",
    "OptionsError",
    "ConversionOptions",
    "ConversionResult",
    "ConversionSummary",
    "convert",
]
