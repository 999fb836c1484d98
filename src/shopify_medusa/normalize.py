import re
from typing import Dict, Iterable, List


CURRENCY_RE = re.compile(r"^[A-Z]{3}$")


def normalize_currency(code: str) -> str:
    if not code:
        return ""
    return code.strip().upper()


def is_valid_currency(code: str) -> bool:
    return bool(CURRENCY_RE.match(code or ""))


def split_tags(tags: str) -> List[str]:
    """Split a Shopify comma-joined tag string into trimmed segments.

    Segments are kept even when blank after trimming ("a,,b" gives three tags)
    so tag positions line up with the source string.
    """
    if not tags:
        return []
    return [t.strip() for t in tags.split(",")]


def unique_images(rows: Iterable[Dict[str, str]], key: str = "Image Src") -> List[str]:
    seen = set()
    images: List[str] = []
    for row in rows:
        src = row.get(key) or ""
        if not src or src in seen:
            continue
        seen.add(src)
        images.append(src)
    return images


def is_truthy(value: str) -> bool:
    return (value or "").strip().lower() in ("1", "true", "yes", "on")
