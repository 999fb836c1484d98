from __future__ import annotations
import os
from typing import Dict

from shopify_medusa.normalize import is_truthy
from shopify_medusa.transform import DEFAULT_SALES_CHANNEL


def default_settings() -> Dict:
    return {
        "default_currency": "",
        "markdown_default": False,
        "sales_channel_default": DEFAULT_SALES_CHANNEL,
        "max_upload_mb": 20,
        "preview_rows": 20,
        # Branding (for header/footer/UI)
        "branding_name": "Shopify → Medusa",
        "branding_tagline": "Convert a Shopify product export into a Medusa import CSV",
    }


def get_settings() -> Dict:
    """Defaults overlaid with MEDUSA_* environment variables."""
    base = default_settings()
    env = os.environ
    if env.get("MEDUSA_CURRENCY"):
        base["default_currency"] = env["MEDUSA_CURRENCY"].strip().upper()
    if "MEDUSA_MARKDOWN" in env:
        base["markdown_default"] = is_truthy(env["MEDUSA_MARKDOWN"])
    if env.get("MEDUSA_SALES_CHANNEL"):
        base["sales_channel_default"] = env["MEDUSA_SALES_CHANNEL"].strip()
    if env.get("MEDUSA_MAX_UPLOAD_MB"):
        base["max_upload_mb"] = int(env["MEDUSA_MAX_UPLOAD_MB"])
    if env.get("MEDUSA_PREVIEW_ROWS"):
        base["preview_rows"] = int(env["MEDUSA_PREVIEW_ROWS"])
    if env.get("BRANDING_NAME"):
        base["branding_name"] = env["BRANDING_NAME"]
    return base
