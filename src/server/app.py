from __future__ import annotations
import logging
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from fastapi import FastAPI, File, Form, HTTPException, Request, UploadFile
from fastapi.responses import HTMLResponse, Response
from fastapi.templating import Jinja2Templates
from pydantic import BaseModel

from shopify_medusa.errors import ConversionError, DecodeError, EmptyInputError, EncodeError, OptionsError
from shopify_medusa.io import collect_headers
from shopify_medusa.normalize import is_truthy
from shopify_medusa.transform import ConversionOptions, ConversionResult, convert_bytes
from . import settings as app_settings


log = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"

app = FastAPI(title="Shopify → Medusa API", version="0.1.0")
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


class Summary(BaseModel):
    products: int
    variants: int


class Preview(BaseModel):
    filename: str
    currency_code: str
    summary: Summary
    columns: List[str]
    rows: List[Dict[str, str]]


@app.get("/health")
def health() -> Dict[str, str]:
    return {"status": "ok"}


def _status_for(err: ConversionError) -> int:
    if isinstance(err, OptionsError):
        return 422
    if isinstance(err, (DecodeError, EmptyInputError)):
        return 400
    if isinstance(err, EncodeError):
        return 500
    return 400


def _read_upload(file: UploadFile) -> bytes:
    max_bytes = int(app_settings.get_settings()["max_upload_mb"]) * 1024 * 1024
    data = file.file.read(max_bytes + 1)
    if len(data) > max_bytes:
        raise HTTPException(413, f"File larger than {max_bytes // (1024 * 1024)} MB")
    return data


def _run(
    file: UploadFile,
    currency_code: str,
    markdown_description: str,
    use_sales_channel: str,
    sales_channel: Optional[str],
) -> Tuple[ConversionOptions, ConversionResult]:
    """Convert an uploaded CSV in memory; nothing is written to disk."""
    data = _read_upload(file)
    try:
        channel = None
        if is_truthy(use_sales_channel):
            channel = (sales_channel or "").strip() or app_settings.get_settings()["sales_channel_default"]
        opts = ConversionOptions(
            currency_code=currency_code,
            markdown_description=is_truthy(markdown_description),
            sales_channel=channel,
        )
        result = convert_bytes(data, opts)
    except ConversionError as e:
        log.info(f"conversion of {file.filename!r} failed: {e}")
        raise HTTPException(_status_for(e), str(e)) from e
    log.info(f"converted {file.filename!r}: {result.summary.products} products, {result.summary.variants} variants")
    return opts, result


def _output_name(filename: Optional[str]) -> str:
    stem = Path(filename or "products.csv").stem or "products"
    return f"medusa_{stem}.csv"


def _download(file: UploadFile, result: ConversionResult) -> Response:
    headers = {
        "Content-Disposition": f'attachment; filename="{_output_name(file.filename)}"',
        "X-Products": str(result.summary.products),
        "X-Variants": str(result.summary.variants),
    }
    return Response(content=result.csv_text, media_type="text/csv; charset=utf-8", headers=headers)


@app.post("/convert")
def convert_upload(
    file: UploadFile = File(...),
    currency_code: str = Form(...),
    markdown_description: str = Form("false"),
    use_sales_channel: str = Form("false"),
    sales_channel: Optional[str] = Form(None),
):
    _, result = _run(file, currency_code, markdown_description, use_sales_channel, sales_channel)
    return _download(file, result)


def _preview(file: UploadFile, opts: ConversionOptions, result: ConversionResult) -> Preview:
    limit = int(app_settings.get_settings()["preview_rows"])
    return Preview(
        filename=file.filename or "",
        currency_code=opts.currency_code,
        summary=Summary(products=result.summary.products, variants=result.summary.variants),
        columns=collect_headers(result.rows),
        rows=result.rows[:limit],
    )


@app.post("/convert/preview", response_model=Preview)
def convert_preview(
    file: UploadFile = File(...),
    currency_code: str = Form(...),
    markdown_description: str = Form("false"),
    use_sales_channel: str = Form("false"),
    sales_channel: Optional[str] = Form(None),
) -> Preview:
    opts, result = _run(file, currency_code, markdown_description, use_sales_channel, sales_channel)
    return _preview(file, opts, result)


# --- Jinja2-based UI ---
@app.get("/", response_class=HTMLResponse)
def ui_home(request: Request):
    return templates.TemplateResponse(request, "index.html", {"s": app_settings.get_settings(), "preview": None, "error": None})


@app.post("/ui/preview", response_class=HTMLResponse)
def ui_preview(
    request: Request,
    file: UploadFile = File(...),
    currency_code: str = Form(""),
    markdown_description: str = Form("false"),
    use_sales_channel: str = Form("false"),
    sales_channel: Optional[str] = Form(None),
):
    ctx = {"s": app_settings.get_settings(), "preview": None, "error": None}
    try:
        opts, result = _run(file, currency_code, markdown_description, use_sales_channel, sales_channel)
        ctx["preview"] = _preview(file, opts, result)
    except HTTPException as e:
        ctx["error"] = e.detail
        return templates.TemplateResponse(request, "index.html", ctx, status_code=e.status_code)
    return templates.TemplateResponse(request, "index.html", ctx)


@app.post("/ui/convert")
def ui_convert(
    request: Request,
    file: UploadFile = File(...),
    currency_code: str = Form(""),
    markdown_description: str = Form("false"),
    use_sales_channel: str = Form("false"),
    sales_channel: Optional[str] = Form(None),
):
    try:
        _, result = _run(file, currency_code, markdown_description, use_sales_channel, sales_channel)
    except HTTPException as e:
        ctx = {"s": app_settings.get_settings(), "preview": None, "error": e.detail}
        return templates.TemplateResponse(request, "index.html", ctx, status_code=e.status_code)
    return _download(file, result)
