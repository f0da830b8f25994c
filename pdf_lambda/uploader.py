"""
S3 upload of the rendered PDF.

Region selection, in priority order:
1. S3_ENDPOINT override (custom endpoint, placeholder region name)
2. The region named in the request's output details
3. The configured default region

The whole PDF is read into memory and written with a single put_object.
"""

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Callable, FrozenSet, Optional

import boto3
from botocore.config import Config as BotoConfig
from botocore.exceptions import BotoCoreError, ClientError

from .config import PdfLambdaSettings
from .errors import EmptyOutputError, InvalidRegionError, UploadError
from .models import S3Details

logger = logging.getLogger(__name__)

PDF_CONTENT_TYPE = "application/pdf"

# Region name is irrelevant once an explicit endpoint is given
CUSTOM_ENDPOINT_REGION = "us-east-1"


@dataclass(frozen=True)
class RegionConfig:
    """Region name and optional endpoint override for the S3 client."""

    name: str
    endpoint_url: Optional[str] = None


@lru_cache()
def known_s3_regions() -> FrozenSet[str]:
    """Every region botocore knows S3 in, across all partitions."""
    session = boto3.session.Session()
    regions = set()
    for partition in session.get_available_partitions():
        regions.update(session.get_available_regions("s3", partition_name=partition))
    return frozenset(regions)


def parse_region(region: str) -> str:
    """
    Validate a region name.

    Raises:
        InvalidRegionError: If the name is not a known S3 region
    """
    name = region.strip().lower()
    if name not in known_s3_regions():
        raise InvalidRegionError(f"Not a valid AWS region: {region}")
    return name


def resolve_region(
    details: S3Details,
    default_region: str,
    endpoint_url: Optional[str] = None,
) -> RegionConfig:
    """Pick the region/endpoint for the upload."""
    if endpoint_url:
        region = RegionConfig(CUSTOM_ENDPOINT_REGION, endpoint_url)
        logger.info(f"Picked up non-standard endpoint {endpoint_url} from S3_ENDPOINT env var")
        return region
    if details.region is not None:
        return RegionConfig(parse_region(details.region))
    return RegionConfig(default_region)


def read_output(path: str) -> bytes:
    """
    Read the rendered PDF fully into memory.

    Raises:
        EmptyOutputError: If the file is empty or missing
    """
    try:
        with open(path, "rb") as f:
            contents = f.read()
    except FileNotFoundError as e:
        raise EmptyOutputError() from e
    if len(contents) == 0:
        raise EmptyOutputError()
    return contents


def create_s3_client(region: RegionConfig):
    """Build a boto3 S3 client for the resolved region."""
    if region.endpoint_url:
        # Local emulators generally only support path-style addressing
        return boto3.client(
            "s3",
            region_name=region.name,
            endpoint_url=region.endpoint_url,
            config=BotoConfig(s3={"addressing_style": "path"}),
        )
    return boto3.client("s3", region_name=region.name)


def upload(
    path: str,
    details: S3Details,
    settings: PdfLambdaSettings,
    client_factory: Callable[[RegionConfig], object] = create_s3_client,
) -> dict:
    """
    Upload the rendered PDF to S3.

    Args:
        path: Rendered PDF file
        details: Destination bucket/key/region
        settings: Supplies the endpoint override and default region
        client_factory: Builds the S3 client (injectable for tests)

    Returns:
        The put_object response

    Raises:
        EmptyOutputError: Nothing to upload
        InvalidRegionError: details.region is not a known region
        UploadError: S3 or the transport failed
    """
    # Region first: a bad region is reported even when the render produced nothing
    region = resolve_region(details, settings.default_region, settings.s3_endpoint)
    contents = read_output(path)

    try:
        client = client_factory(region)
        response = client.put_object(
            Bucket=details.bucket,
            Key=details.object_key,
            ContentType=PDF_CONTENT_TYPE,
            Body=contents,
        )
    except (BotoCoreError, ClientError) as e:
        raise UploadError(
            f"Failed to upload PDF to s3://{details.bucket}/{details.object_key}: {e}"
        ) from e

    logger.info(f"Uploaded PDF to s3://{details.bucket}/{details.object_key} ({len(contents)} bytes)")
    return response
