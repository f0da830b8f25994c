"""
CLI Entry Point: Run a conversion locally

Runs a JSON request file through the same pipeline the Lambda uses.
Point S3_ENDPOINT at a local S3 emulator to avoid touching real buckets.

Usage:
    python -m pdf_lambda request.json
    python -m pdf_lambda request.json --log-level DEBUG
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import ValidationError

from .config import get_settings
from .handler import convert
from .logger import setup_logging
from .models import PdfRequest


def load_request(request_path: str) -> PdfRequest:
    """Load and validate a request from a JSON file."""
    path = Path(request_path)
    if not path.exists():
        raise FileNotFoundError(f"Request file not found: {request_path}")

    with open(path, "r") as f:
        payload = json.load(f)
    return PdfRequest.model_validate(payload)


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI function."""
    parser = argparse.ArgumentParser(
        description="Convert HTML pages to a PDF and upload it to S3"
    )
    parser.add_argument(
        "request",
        help="Path to a JSON request (pages, options, output)"
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Override LOG_LEVEL"
    )
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Environment file to load before reading settings"
    )

    args = parser.parse_args(argv)

    load_dotenv(args.env_file)
    settings = get_settings()
    setup_logging(args.log_level or settings.log_level, settings.log_format)

    try:
        request = load_request(args.request)
    except (OSError, json.JSONDecodeError, ValidationError) as e:
        print(f"❌ Could not load request: {e}", file=sys.stderr)
        return 2

    response = convert(request, settings=settings)
    print(json.dumps(response.model_dump(), indent=2))
    return 0 if response.success else 1


if __name__ == "__main__":
    sys.exit(main())
