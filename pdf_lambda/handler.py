"""
Lambda handler - HTML pages to a single PDF in S3.

Pipeline: build wkhtmltopdf arguments -> run wkhtmltopdf -> upload to S3.

convert() is the only place pipeline errors are caught: any failure becomes
a PdfResponse with success=False and the error text as its single message.
A renderer that exits non-zero produces a failed response carrying its
stdout/stderr instead, and nothing is uploaded.
"""

import logging
from contextlib import ExitStack
from typing import Any, Dict, Optional

from pydantic import ValidationError

from .args import build_args
from .config import PdfLambdaSettings, get_settings, log_configuration
from .errors import PdfLambdaError
from .executor import run_renderer
from .locator import RendererLocation, get_renderer_location
from .logger import RequestLogger, get_logger, setup_logging
from .models import PdfRequest, PdfResponse
from .tempfiles import create_temp_file
from .uploader import upload

OUTPUT_PREFIX = "wkhtmltopdf-output"
OUTPUT_SUFFIX = ".pdf"

# Cold start state
_logging_configured = False


def convert_inner(
    request: PdfRequest,
    settings: PdfLambdaSettings,
    location: RendererLocation,
    log: RequestLogger,
) -> PdfResponse:
    """
    Run the conversion pipeline, raising PdfLambdaError on internal failures.

    Temporary input and output files live on one ExitStack and are removed
    once the upload (or the failure) is done.
    """
    log.info(f"Converting {len(request.pages)} pages")
    log.info(f"PDF will be uploaded to s3://{request.output.bucket}/{request.output.object_key}")
    if not request.pages:
        log.warning("Request has no pages; wkhtmltopdf will decide the outcome")

    with ExitStack() as stack:
        built = build_args(request, stack)
        output_path = create_temp_file(stack, OUTPUT_PREFIX, OUTPUT_SUFFIX)
        log.info(f"Args: {built.args + [output_path]}")

        result = run_renderer(location, built.args, output_path)
        if not result.success:
            return PdfResponse(success=False, messages=result.messages())

        upload(output_path, request.output, settings)

    return PdfResponse(success=True)


def convert(
    request: PdfRequest,
    settings: Optional[PdfLambdaSettings] = None,
    location: Optional[RendererLocation] = None,
    request_id: Optional[str] = None,
) -> PdfResponse:
    """
    Convert a request, never raising.

    Args:
        request: Validated conversion request
        settings: Settings to use (defaults to the cached environment settings)
        location: Renderer to use (defaults to the cached discovered location)
        request_id: AWS request id for log correlation

    Returns:
        PdfResponse; success=False with diagnostic messages on any failure
    """
    log = get_logger(__name__, request_id)
    try:
        if settings is None:
            settings = get_settings()
        if location is None:
            location = get_renderer_location()
        return convert_inner(request, settings, location, log)
    except PdfLambdaError as e:
        log.error(f"PDF conversion failed: {e.to_dict()}")
        return PdfResponse(success=False, messages=[str(e)])
    except Exception as e:
        log.exception(f"Unexpected error during PDF conversion: {e}")
        return PdfResponse(success=False, messages=[str(e)])


def _configure_logging() -> None:
    """Install log handlers once per container."""
    global _logging_configured
    if _logging_configured:
        return
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    log_configuration(settings)
    _logging_configured = True


def lambda_handler(event: Dict[str, Any], context: Any = None) -> Dict[str, Any]:
    """
    AWS Lambda entry point.

    Args:
        event: PdfRequest payload as a dict
        context: Lambda context (only aws_request_id is used)

    Returns:
        PdfResponse as a dict: {"success": bool, "messages": [str, ...]}
    """
    request_id = getattr(context, "aws_request_id", None)
    try:
        _configure_logging()
    except ValidationError as e:
        logging.getLogger(__name__).error(f"Configuration validation failed: {e}")
        return PdfResponse(success=False, messages=[f"Configuration validation failed: {e}"]).model_dump()

    try:
        request = PdfRequest.model_validate(event)
    except ValidationError as e:
        get_logger(__name__, request_id).error(f"Invalid request: {e}")
        return PdfResponse(success=False, messages=[f"Invalid request: {e}"]).model_dump()

    return convert(request, request_id=request_id).model_dump()
