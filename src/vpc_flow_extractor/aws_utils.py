"""
AWS utilities for VPC Flow Log Extractor.
"""

import io
import logging
import os
from typing import Any, Optional, Protocol

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from .config import JobConfig
from .errors import ConfigurationError, StoreAccessError

logger = logging.getLogger(__name__)


class ObjectStore(Protocol):
    """Blob store with get/put-by-key semantics."""

    def get(self, container: str, key: str) -> bytes: ...

    def put(self, container: str, key: str, body: bytes) -> None: ...


class RegionResolver:
    """Handles AWS region resolution logic."""

    DEFAULT_REGION = "us-east-1"

    @classmethod
    def resolve_region(cls, region: Optional[str] = None) -> str:
        """Resolve AWS region from parameter, environment, or default."""
        if region:
            return region

        resolved_region = (
            os.environ.get("AWS_REGION")
            or os.environ.get("AWS_DEFAULT_REGION")
            or cls.DEFAULT_REGION
        )

        if resolved_region == cls.DEFAULT_REGION:
            logger.info(f"No region specified, using default: {resolved_region}")

        return resolved_region


class AWSClientFactory:
    """Factory for creating AWS clients with consistent configuration."""

    @staticmethod
    def create_session(
        access_key: Optional[str] = None,
        secret_access_key: Optional[str] = None,
        profile: Optional[str] = None,
    ) -> boto3.Session:
        """Create a boto3 session from static keys, a profile, or the default chain."""
        if access_key and secret_access_key:
            return boto3.Session(
                aws_access_key_id=access_key,
                aws_secret_access_key=secret_access_key,
            )
        return boto3.Session(profile_name=profile) if profile else boto3.Session()

    @classmethod
    def create_client(
        cls,
        service: str,
        region: Optional[str] = None,
        profile: Optional[str] = None,
        access_key: Optional[str] = None,
        secret_access_key: Optional[str] = None,
    ) -> Any:
        """Create a boto3 client with optional credentials, profile and region."""
        session = cls.create_session(access_key, secret_access_key, profile)
        return session.client(service, region_name=RegionResolver.resolve_region(region))


class S3ObjectStore:
    """Object store backed by Amazon S3."""

    def __init__(self, s3_client: Any):
        self.s3_client = s3_client

    def get(self, container: str, key: str) -> bytes:
        """Download a whole object using the managed transfer."""
        buffer = io.BytesIO()
        try:
            self.s3_client.download_fileobj(container, key, buffer)
        except (ClientError, BotoCoreError) as e:
            raise StoreAccessError(
                f"Failed to download s3://{container}/{key}: {e}"
            ) from e

        body = buffer.getvalue()
        logger.debug(f"Downloaded {len(body)} bytes from s3://{container}/{key}")
        return body

    def put(self, container: str, key: str, body: bytes) -> None:
        """Write an object, replacing any existing object at the key."""
        try:
            self.s3_client.put_object(Bucket=container, Key=key, Body=body)
        except (ClientError, BotoCoreError) as e:
            raise StoreAccessError(
                f"Failed to upload s3://{container}/{key}: {e}"
            ) from e

        logger.debug(f"Uploaded {len(body)} bytes to s3://{container}/{key}")


# Public API functions
def create_object_store(config: JobConfig) -> S3ObjectStore:
    """Create the S3 store described by the job configuration."""
    try:
        s3_client = AWSClientFactory.create_client(
            "s3",
            config.region,
            config.profile,
            config.access_key,
            config.secret_access_key,
        )
    except BotoCoreError as e:
        raise ConfigurationError(f"Unable to create S3 client: {e}") from e
    return S3ObjectStore(s3_client)
