"""
Unit tests for PDF Lambda configuration.
"""

import pytest
from pydantic import ValidationError

from pdf_lambda.config import PdfLambdaSettings, get_settings


class TestPdfLambdaSettings:
    """Tests for environment-driven settings."""

    def test_defaults(self):
        settings = PdfLambdaSettings()
        assert settings.lambda_task_root is None
        assert settings.s3_endpoint is None
        assert settings.default_region == "ap-southeast-2"
        assert settings.wkhtmltopdf_layer_path == "/opt/bin/wkhtmltopdf"
        assert settings.log_level == "INFO"
        assert settings.uses_custom_endpoint is False

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("LAMBDA_TASK_ROOT", "/var/task")
        monkeypatch.setenv("S3_ENDPOINT", "http://localhost:4566")
        monkeypatch.setenv("DEFAULT_REGION", "eu-central-1")

        settings = PdfLambdaSettings()

        assert settings.lambda_task_root == "/var/task"
        assert settings.s3_endpoint == "http://localhost:4566"
        assert settings.default_region == "eu-central-1"
        assert settings.uses_custom_endpoint is True

    def test_blank_endpoint_is_unset(self, monkeypatch):
        monkeypatch.setenv("S3_ENDPOINT", "  ")
        assert PdfLambdaSettings().s3_endpoint is None

    def test_log_level_normalized(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "debug")
        assert PdfLambdaSettings().log_level == "DEBUG"

    def test_invalid_log_level(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "CHATTY")
        with pytest.raises(ValidationError):
            PdfLambdaSettings()

    def test_invalid_log_format(self, monkeypatch):
        monkeypatch.setenv("LOG_FORMAT", "xml")
        with pytest.raises(ValidationError):
            PdfLambdaSettings()


def test_get_settings_is_cached(monkeypatch):
    first = get_settings()
    monkeypatch.setenv("DEFAULT_REGION", "us-west-2")
    assert get_settings() is first

    get_settings.cache_clear()
    assert get_settings().default_region == "us-west-2"
