from __future__ import annotations
import csv
import logging
import sys
from io import StringIO
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from .errors import DecodeError, EncodeError


log = logging.getLogger(__name__)


def _allow_large_fields() -> None:
    # Descriptions with inline data: images exceed the csv default of 131072.
    limit = sys.maxsize
    while True:
        try:
            csv.field_size_limit(limit)
            return
        except OverflowError:
            limit = limit // 10


def _rows_from_reader(reader: Iterable[List[str]]) -> List[Dict[str, str]]:
    rows = list(reader)

    header_idx = -1
    header: List[str] = []
    for i, row in enumerate(rows):
        if any(c.strip() for c in row):
            header_idx = i
            header = [c.strip() for c in row]
            break
    if header_idx == -1:
        raise DecodeError("CSV has no header row")

    out: List[Dict[str, str]] = []
    for raw in rows[header_idx + 1 :]:
        if not raw or not any(c.strip() for c in raw):
            continue
        if len(raw) != len(header):
            log.debug("row %d has %d fields, header has %d", len(out) + 1, len(raw), len(header))
        d: Dict[str, str] = {}
        for i, name in enumerate(header):
            if not name:
                continue
            d[name] = raw[i] if i < len(raw) else ""
        out.append(d)
    return out


def read_rows_text(text: str) -> List[Dict[str, str]]:
    """Decode CSV text into header-keyed rows, in file order.

    Short rows are padded with empty strings and surplus trailing fields are
    ignored, since real exports are not always rectangular. A header-only
    file yields an empty list.
    """
    if text.startswith("\ufeff"):
        text = text[1:]
    _allow_large_fields()
    try:
        return _rows_from_reader(csv.reader(StringIO(text, newline="")))
    except csv.Error as e:
        raise DecodeError(f"Could not parse CSV: {e}") from e


def read_rows_bytes(data: bytes, encoding: str = "utf-8-sig") -> List[Dict[str, str]]:
    try:
        text = data.decode(encoding)
    except UnicodeDecodeError as e:
        raise DecodeError(f"Could not decode CSV as {encoding}: {e}") from e
    return read_rows_text(text)


def read_rows(input_path: Path) -> List[Dict[str, str]]:
    try:
        data = input_path.read_bytes()
    except OSError as e:
        raise DecodeError(f"Could not read {input_path}: {e}") from e
    return read_rows_bytes(data)


def collect_headers(rows: Iterable[Dict[str, object]]) -> List[str]:
    """Union of keys across all rows, in first-seen order."""
    seen: Dict[str, None] = {}
    for r in rows:
        for k in r:
            if k not in seen:
                seen[k] = None
    return list(seen)


def _cell(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    return str(value)


def _write(out, rows: List[Dict[str, object]], fieldnames: List[str]) -> None:
    writer = csv.writer(out, quoting=csv.QUOTE_ALL, lineterminator="\r\n")
    writer.writerow(fieldnames)
    for r in rows:
        writer.writerow([_cell(r.get(name)) for name in fieldnames])


def render_medusa_csv(rows: List[Dict[str, object]], fieldnames: Optional[List[str]] = None) -> str:
    """Encode target rows as CSV text with every field quoted."""
    fieldnames = fieldnames or collect_headers(rows)
    buf = StringIO(newline="")
    try:
        _write(buf, rows, fieldnames)
    except (csv.Error, TypeError, ValueError) as e:
        raise EncodeError(f"Could not encode CSV: {e}") from e
    return buf.getvalue()


def write_csv_text(output_path: Path, text: str) -> None:
    """Write already encoded CSV text in a single call."""
    try:
        output_path.write_text(text, encoding="utf-8", newline="")
    except OSError as e:
        raise EncodeError(f"Could not write {output_path}: {e}") from e
