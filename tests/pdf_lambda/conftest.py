"""
Pytest fixtures for PDF Lambda tests.

Isolates the environment variables the Lambda reads and clears cached
settings so every test starts from a known configuration. No test spawns
wkhtmltopdf or talks to S3.
"""

import base64
from unittest.mock import MagicMock

import pytest

from pdf_lambda.config import PdfLambdaSettings, get_settings
from pdf_lambda.locator import RendererLocation, get_renderer_location

LAMBDA_ENV_VARS = [
    "LAMBDA_TASK_ROOT",
    "S3_ENDPOINT",
    "DEFAULT_REGION",
    "WKHTMLTOPDF_LAYER_PATH",
    "LOG_LEVEL",
    "LOG_FORMAT",
]


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch):
    """Remove Lambda configuration from the environment and reset caches."""
    for name in LAMBDA_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    get_renderer_location.cache_clear()
    yield
    get_settings.cache_clear()
    get_renderer_location.cache_clear()


@pytest.fixture
def settings():
    """Default settings (no endpoint override, default region)."""
    return PdfLambdaSettings()


@pytest.fixture
def location():
    """A renderer location that is never actually executed."""
    return RendererLocation("/usr/bin/wkhtmltopdf", "/usr/share/fonts")


@pytest.fixture
def html_b64():
    """Encode an HTML string the way clients send inline pages."""
    def _encode(html: str) -> str:
        return base64.b64encode(html.encode("utf-8")).decode("ascii")
    return _encode


@pytest.fixture
def url_request_payload():
    """One content page from a URL, no options."""
    return {
        "pages": [{"page_type": "page", "html_url": "https://example.com/a.html"}],
        "options": [],
        "output": {"bucket": "b", "object_key": "k"},
    }


@pytest.fixture
def mock_s3_client():
    """S3 client double returning a put_object acknowledgment."""
    client = MagicMock()
    client.put_object.return_value = {"ETag": '"abc123"'}
    return client
