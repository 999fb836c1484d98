#!/usr/bin/env python3
import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from shopify_medusa.errors import ConversionError
from shopify_medusa.normalize import is_truthy
from shopify_medusa.transform import DEFAULT_SALES_CHANNEL, ConversionOptions, convert_file, write_output


def load_env(env_path: Optional[str]) -> None:
    """Load .env from the project root and CWD, then an explicit --env-file."""
    project_env = Path(__file__).resolve().parent.parent / ".env"
    for p in (project_env, Path.cwd() / ".env"):
        if p.exists():
            load_dotenv(p)
    if env_path:
        p = Path(env_path)
        if p.exists():
            load_dotenv(p, override=True)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    # Early parse to pick up --env-file so env-backed defaults below see it
    env_only = argparse.ArgumentParser(add_help=False)
    env_only.add_argument("--env-file", default="")
    early_args, remaining = env_only.parse_known_args(argv)
    load_env(early_args.env_file or None)

    channel_env = os.getenv("MEDUSA_SALES_CHANNEL", "").strip()
    parser = argparse.ArgumentParser(
        description="Convert a Shopify product export CSV into a Medusa product import CSV.",
        parents=[env_only],
    )
    parser.add_argument("--input", required=True, help="Path to the Shopify product export CSV")
    parser.add_argument("--output", required=True, help="Path to output Medusa CSV")
    parser.add_argument(
        "--currency",
        default=os.getenv("MEDUSA_CURRENCY", ""),
        help="Target currency code for variant prices, e.g. EUR (env: MEDUSA_CURRENCY)",
    )
    parser.add_argument(
        "--markdown",
        action="store_true",
        default=is_truthy(os.getenv("MEDUSA_MARKDOWN", "")),
        help="Convert Body (HTML) descriptions to Markdown",
    )
    parser.add_argument(
        "--sales-channel",
        nargs="?",
        const=DEFAULT_SALES_CHANNEL,
        default=channel_env or None,
        help=f"Fill Product Sales Channel 1 (bare flag uses '{DEFAULT_SALES_CHANNEL}')",
    )
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase log verbosity (-v, -vv)")
    return parser.parse_args(remaining)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(message)s")
    log = logging.getLogger(__name__)

    if not args.currency:
        print("Error: --currency is required (or set MEDUSA_CURRENCY)", file=sys.stderr)
        return 2
    try:
        opts = ConversionOptions(
            currency_code=args.currency,
            markdown_description=args.markdown,
            sales_channel=args.sales_channel,
        )
    except ConversionError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    input_path = Path(args.input)
    output_path = Path(args.output)
    log.info(f"Converting {input_path} with currency={opts.currency_code} markdown={opts.markdown_description}")

    try:
        result = convert_file(input_path, opts)
        write_output(output_path, result)
    except ConversionError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    print(
        f"Wrote {result.summary.variants} Medusa rows "
        f"({result.summary.products} products) to {output_path}"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
