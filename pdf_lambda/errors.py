"""
Error kinds raised by the conversion pipeline.

Every stage raises a subclass of PdfLambdaError. The handler catches them
in one place and turns the message into a failed PdfResponse, so callers
only ever see data, never an exception.

A renderer that exits non-zero is not an error here: its stdout/stderr are
returned as ordinary response messages (see pdf_lambda.executor).
"""


class PdfLambdaError(Exception):
    """Base class for failures that stop a conversion before upload completes."""

    operation = "convert"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> dict:
        """Convert to dictionary for structured logging."""
        return {
            "operation": self.operation,
            "error_type": type(self).__name__,
            "message": self.message,
        }


class DecodeError(PdfLambdaError):
    """Inline page content is not valid Base64."""

    operation = "build_args"


class MissingSourceError(PdfLambdaError):
    """A non-TOC page has neither html_url nor html_base64."""

    operation = "build_args"

    def __init__(self, message: str = "No page source specified"):
        super().__init__(message)


class TempFileError(PdfLambdaError):
    """A temporary input or output file could not be created or written."""

    operation = "temp_file"


class SpawnError(PdfLambdaError):
    """The wkhtmltopdf process could not be started."""

    operation = "render"


class EmptyOutputError(PdfLambdaError):
    """The renderer reported success but produced no bytes."""

    operation = "upload"

    def __init__(self, message: str = "Failed to read PDF output"):
        super().__init__(message)


class InvalidRegionError(PdfLambdaError):
    """The requested region is not a known S3 region."""

    operation = "upload"


class UploadError(PdfLambdaError):
    """S3 rejected the put, or the request never reached it."""

    operation = "upload"
