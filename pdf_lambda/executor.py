"""
wkhtmltopdf Executor Module

Runs the renderer as a blocking subprocess with:
- FONTCONFIG_PATH pointed at the located fonts directory
- stdin closed
- stdout/stderr captured for diagnostics
- Exit code capture

A non-zero exit is returned as a failed RenderResult, not raised.
"""

import logging
import os
import subprocess
from dataclasses import dataclass
from typing import List

from .errors import SpawnError
from .locator import RendererLocation

logger = logging.getLogger(__name__)


@dataclass
class RenderResult:
    """Exit status and captured output of one wkhtmltopdf run."""

    returncode: int
    stdout: bytes = b""
    stderr: bytes = b""

    @property
    def success(self) -> bool:
        return self.returncode == 0

    def messages(self) -> List[str]:
        """Non-empty stdout, then non-empty stderr, decoded leniently."""
        messages = []
        for stream in (self.stdout, self.stderr):
            if stream:
                messages.append(stream.decode("utf-8", errors="replace"))
        return messages


def run_renderer(location: RendererLocation, args: List[str], output_path: str) -> RenderResult:
    """
    Execute wkhtmltopdf and wait for it to finish.

    Args:
        location: Binary and fonts directory to use
        args: Arguments from pdf_lambda.args.build_args
        output_path: File wkhtmltopdf writes the PDF to (appended last)

    Returns:
        RenderResult with exit code and captured streams

    Raises:
        SpawnError: If the process could not be started
    """
    cmd = [location.binary_path, *args, output_path]
    logger.info(f"Executing: {' '.join(cmd)}")

    env = {**os.environ, "FONTCONFIG_PATH": location.fontconfig_path}

    try:
        proc = subprocess.run(
            cmd,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            env=env,
            check=False,
        )
    except OSError as e:
        raise SpawnError(f"Failed to start {location.binary_path}: {e}") from e

    result = RenderResult(returncode=proc.returncode, stdout=proc.stdout or b"", stderr=proc.stderr or b"")

    if result.success:
        logger.info("Successfully converted HTML to PDF")
    else:
        logger.error(f"wkhtmltopdf exited with {result.returncode}")
        logger.error(f"wkhtmltopdf stdout: {result.stdout.decode('utf-8', errors='replace')}")
        logger.error(f"wkhtmltopdf stderr: {result.stderr.decode('utf-8', errors='replace')}")

    return result
