"""
wkhtmltopdf discovery.

Search order, first match wins:
1. A Lambda layer install (/opt/bin/wkhtmltopdf, fonts in /opt/fonts)
2. A binary bundled in the deployment package ($LAMBDA_TASK_ROOT/bin/wkhtmltopdf)
3. The system install (/usr/bin/wkhtmltopdf)

The location is resolved once per container and passed to the executor.
"""

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Callable, Optional

from .config import get_settings

logger = logging.getLogger(__name__)

LAYER_PATH = "/opt/bin/wkhtmltopdf"
BUNDLED_RELATIVE_PATH = os.path.join("bin", "wkhtmltopdf")
SYSTEM_PATH = "/usr/bin/wkhtmltopdf"
SYSTEM_FONTS_PATH = "/usr/share/fonts"


@dataclass(frozen=True)
class RendererLocation:
    """Path to the wkhtmltopdf binary and the directory FONTCONFIG_PATH should point at."""

    binary_path: str
    fontconfig_path: str


def layer_fonts_path(layer_path: str) -> str:
    """Fonts live beside bin/ under the layer prefix: /opt/bin/wkhtmltopdf -> /opt/fonts."""
    prefix = os.path.dirname(os.path.dirname(layer_path))
    return os.path.join(prefix, "fonts")


def locate_renderer(
    task_root: Optional[str] = None,
    layer_path: str = LAYER_PATH,
    exists: Callable[[str], bool] = os.path.exists,
) -> RendererLocation:
    """
    Find wkhtmltopdf and its fonts directory.

    Args:
        task_root: Value of LAMBDA_TASK_ROOT, if set
        layer_path: Where a Lambda layer installs the binary
        exists: Filesystem probe (injectable for tests)

    Returns:
        RendererLocation; the system fallback is returned even if it does
        not exist, in which case spawning fails later
    """
    if exists(layer_path):
        return RendererLocation(layer_path, layer_fonts_path(layer_path))

    if task_root:
        bundled_path = os.path.join(task_root, BUNDLED_RELATIVE_PATH)
        if exists(bundled_path):
            return RendererLocation(bundled_path, os.path.join(task_root, "fonts"))

    return RendererLocation(SYSTEM_PATH, SYSTEM_FONTS_PATH)


@lru_cache()
def get_renderer_location() -> RendererLocation:
    """Resolve the renderer once per container from the configured environment."""
    settings = get_settings()
    location = locate_renderer(
        task_root=settings.lambda_task_root,
        layer_path=settings.wkhtmltopdf_layer_path,
    )
    logger.info(f"wkhtmltopdf path: {location.binary_path}")
    logger.info(f"fontconfig path: {location.fontconfig_path}")
    return location
