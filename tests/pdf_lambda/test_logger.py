"""
Unit tests for request-scoped logging.
"""

import io
import json
import logging

import pytest

from pdf_lambda.logger import JsonFormatter, TextFormatter, get_logger, setup_logging

REQUEST_ID = "8f5e2c1a-1111-2222-3333-444455556666"


@pytest.fixture
def restore_root_logger():
    """setup_logging replaces the root handlers; put the originals back."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def capture(formatter):
    """Return a logger writing through `formatter` and the stream it writes to."""
    stream = io.StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(formatter)
    logger = logging.getLogger(f"pdf_lambda.test.{type(formatter).__name__}")
    logger.handlers[:] = [handler]
    logger.propagate = False
    logger.setLevel(logging.DEBUG)
    return logger, stream


class TestRequestLogger:
    """Tests for the request id attached to records."""

    def test_request_id_attached_to_record(self, caplog):
        log = get_logger("pdf_lambda.test", request_id=REQUEST_ID)

        with caplog.at_level(logging.INFO, logger="pdf_lambda.test"):
            log.info("Converting 2 pages")

        record = caplog.records[-1]
        assert record.getMessage() == "Converting 2 pages"
        assert record.request_id == REQUEST_ID

    def test_no_request_id(self, caplog):
        log = get_logger("pdf_lambda.test")

        with caplog.at_level(logging.WARNING, logger="pdf_lambda.test"):
            log.warning("Request has no pages")

        record = caplog.records[-1]
        assert record.getMessage() == "Request has no pages"
        assert record.request_id is None

    def test_caller_extra_is_kept(self, caplog):
        log = get_logger("pdf_lambda.test", request_id=REQUEST_ID)

        with caplog.at_level(logging.INFO, logger="pdf_lambda.test"):
            log.info("Uploaded", extra={"bucket": "pdfs"})

        record = caplog.records[-1]
        assert record.bucket == "pdfs"
        assert record.request_id == REQUEST_ID


class TestTextFormatter:
    """Tests for the plain text format."""

    def test_short_request_tag(self):
        logger, stream = capture(TextFormatter())
        get_logger(logger.name, REQUEST_ID).info("Converting 2 pages")

        line = stream.getvalue().strip()
        assert line.endswith(f"[INFO] {logger.name} [req:8f5e2c1a]: Converting 2 pages")

    def test_plain_logger_has_no_tag(self):
        logger, stream = capture(TextFormatter())
        logger.info("Configuration loaded")

        assert stream.getvalue().strip().endswith(f"[INFO] {logger.name}: Configuration loaded")


class TestJsonFormatter:
    """Tests for the JSON line format."""

    def test_renderer_output_stays_valid_json(self):
        logger, stream = capture(JsonFormatter())
        stderr = 'Error: Failed to load "https://example.com/a.html"\nExit with code 1 \\ network'
        get_logger(logger.name, REQUEST_ID).error(stderr)

        payload = json.loads(stream.getvalue())
        assert payload["message"] == stderr
        assert payload["level"] == "ERROR"
        assert payload["name"] == logger.name
        assert payload["request_id"] == REQUEST_ID

    def test_one_object_per_line(self):
        logger, stream = capture(JsonFormatter())
        logger.info("first\nline")
        logger.info("second")

        lines = stream.getvalue().splitlines()
        assert len(lines) == 2
        assert [json.loads(line)["message"] for line in lines] == ["first\nline", "second"]
        assert "request_id" not in json.loads(lines[1])

    def test_exception_included(self):
        logger, stream = capture(JsonFormatter())
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            logger.exception("Unexpected error")

        payload = json.loads(stream.getvalue())
        assert "RuntimeError: boom" in payload["exception"]


class TestSetupLogging:
    """Tests for root handler installation."""

    def test_json_format_writes_to_stdout(self, capsys, restore_root_logger):
        setup_logging("info", "json")
        get_logger("pdf_lambda.test", REQUEST_ID).info('said "hi"')

        payload = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
        assert payload["message"] == 'said "hi"'
        assert payload["request_id"] == REQUEST_ID

    def test_single_handler_and_level(self, restore_root_logger):
        setup_logging("WARNING", "simple")

        assert len(restore_root_logger.handlers) == 1
        assert isinstance(restore_root_logger.handlers[0].formatter, TextFormatter)
        assert restore_root_logger.level == logging.WARNING
