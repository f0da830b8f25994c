"""
Argument builder for wkhtmltopdf.

Translates a PdfRequest into the command-line tokens wkhtmltopdf expects:

    [global options] [<page type> [<source>] [page options] [--enable-local-file-access]]...

The executable and the trailing output path are added by the executor.
Inline (Base64) pages are written to temporary .html files whose lifetime
is owned by the caller's ExitStack.
"""

import base64
import binascii
import logging
from contextlib import ExitStack
from dataclasses import dataclass, field
from typing import Iterable, List

from .errors import DecodeError, MissingSourceError
from .models import Page, PageType, PdfOption, PdfRequest
from .tempfiles import create_temp_file

logger = logging.getLogger(__name__)

# wkhtmltopdf refuses to read local paths without this switch
LOCAL_FILE_ACCESS_FLAG = "--enable-local-file-access"

INPUT_PREFIX = "wkhtmltopdf-input"
INPUT_SUFFIX = ".html"


@dataclass
class BuiltArgs:
    """Renderer arguments plus the temporary input files they reference."""

    args: List[str] = field(default_factory=list)
    files: List[str] = field(default_factory=list)


def option_tokens(options: Iterable[PdfOption]) -> List[str]:
    """Emit each option as its name followed by its value, if any."""
    tokens = []
    for option in options:
        tokens.append(option.name)
        if option.value is not None:
            tokens.append(option.value)
    return tokens


def decode_html(html_base64: str) -> bytes:
    """
    Decode inline page content.

    Raises:
        DecodeError: If the content is not valid standard Base64
    """
    try:
        return base64.b64decode(html_base64, validate=True)
    except (binascii.Error, ValueError) as e:
        raise DecodeError(f"Failed to decode Base64: {e}") from e


def page_tokens(page: Page, stack: ExitStack, built: BuiltArgs) -> List[str]:
    """
    Build the tokens for a single page.

    Temporary files created for the page are recorded on `built` and
    registered on `stack`.
    """
    tokens = [str(page.page_type)]
    if page.page_type == PageType.TOC:
        return tokens

    if page.html_url is not None:
        if page.html_base64 is not None:
            logger.warning("Page has both html_url and html_base64; using html_url")
        tokens.append(page.html_url)
    elif page.html_base64 is not None:
        html = decode_html(page.html_base64)
        path = create_temp_file(stack, INPUT_PREFIX, INPUT_SUFFIX, html)
        built.files.append(path)
        tokens.append(path)
    else:
        raise MissingSourceError()

    tokens.extend(option_tokens(page.options))

    # Added whenever inline content is supplied, even if the URL was used
    if page.html_base64 is not None:
        tokens.append(LOCAL_FILE_ACCESS_FLAG)
    return tokens


def build_args(request: PdfRequest, stack: ExitStack) -> BuiltArgs:
    """
    Build wkhtmltopdf arguments for a request.

    Args:
        request: Conversion request
        stack: ExitStack that takes ownership of any temporary input files;
            it must stay open until the renderer has exited

    Returns:
        BuiltArgs with the ordered tokens and the temp file paths

    Raises:
        DecodeError: Inline content is not valid Base64
        MissingSourceError: A non-TOC page has no source
        TempFileError: A temporary input file could not be written
    """
    built = BuiltArgs(args=option_tokens(request.options))
    for page in request.pages:
        built.args.extend(page_tokens(page, stack, built))
    return built
