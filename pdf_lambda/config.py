"""
PDF Lambda Configuration Module

Centralized configuration management with Pydantic validation.
All environment variables are read once per container and cached, so warm
invocations reuse the same settings.
"""

import logging
from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)


class PdfLambdaSettings(BaseSettings):
    """
    PDF Lambda configuration with validation.

    All settings can be overridden via environment variables
    (LAMBDA_TASK_ROOT, S3_ENDPOINT, DEFAULT_REGION, ...).
    """

    # === Renderer discovery ===
    lambda_task_root: Optional[str] = Field(
        default=None,
        description="Lambda task root, searched for a bundled bin/wkhtmltopdf"
    )
    wkhtmltopdf_layer_path: str = Field(
        default="/opt/bin/wkhtmltopdf",
        description="wkhtmltopdf provided by a Lambda layer"
    )

    # === Storage ===
    s3_endpoint: Optional[str] = Field(
        default=None,
        description="Custom S3 endpoint (e.g. a local emulator); overrides any region"
    )
    default_region: str = Field(
        default="ap-southeast-2",
        description="Region used when the request does not name one"
    )

    # === Logging ===
    log_level: str = Field(default="INFO", description="DEBUG, INFO, WARNING, ERROR")
    log_format: str = Field(default="simple", description="simple or json")

    @field_validator("lambda_task_root", "s3_endpoint", mode="before")
    @classmethod
    def blank_as_unset(cls, v: Optional[str]) -> Optional[str]:
        """Treat an empty environment variable as not set."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a known value."""
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR"}
        v_upper = v.upper()
        if v_upper not in allowed:
            raise ValueError(f"log_level must be one of: {', '.join(sorted(allowed))}")
        return v_upper

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        v_lower = v.lower()
        if v_lower not in {"simple", "json"}:
            raise ValueError("log_format must be 'simple' or 'json'")
        return v_lower

    @property
    def uses_custom_endpoint(self) -> bool:
        return self.s3_endpoint is not None

    class Config:
        env_prefix = ""  # No prefix, use exact env var names
        case_sensitive = False  # S3_ENDPOINT = s3_endpoint


@lru_cache()
def get_settings() -> PdfLambdaSettings:
    """
    Get cached settings instance.

    Settings are loaded once per container and cached.
    Call get_settings.cache_clear() after changing the environment in tests.
    """
    return PdfLambdaSettings()


def log_configuration(settings: PdfLambdaSettings) -> None:
    """Log loaded configuration at cold start."""
    logger.info("Configuration loaded:")
    logger.info(f"  lambda_task_root={settings.lambda_task_root}")
    logger.info(f"  wkhtmltopdf_layer_path={settings.wkhtmltopdf_layer_path}")
    logger.info(f"  s3_endpoint={settings.s3_endpoint}")
    logger.info(f"  default_region={settings.default_region}")
