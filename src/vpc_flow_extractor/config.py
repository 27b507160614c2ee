"""
Configuration module for VPC Flow Log Extractor.
"""

import os
from dataclasses import dataclass, field
from datetime import date
from typing import Final, Mapping, Optional

from .errors import ConfigurationError
from .paths import parse_storage_path
from .time_utils import format_run_timestamp, parse_run_date


class EnvironmentVariables:
    """Names of the environment variables the job reads."""

    ACCESS_KEY: Final[str] = "ACCESS_KEY"
    SECRET_ACCESS_KEY: Final[str] = "SECRET_ACCESS_KEY"
    # Format "[bucket-name]/path/to/file.ext"
    SOURCE_PATH: Final[str] = "SOURCE_BUCKET_NAME"
    # Comma-separated source addresses whose outbound traffic is kept
    SOURCE_ADDRESSES: Final[str] = "SOURCE_IP_ADDRESSES"
    # Format "[bucket-name]/path/to/file[[timestamp]].ext"
    DEST_PATH: Final[str] = "DEST_BUCKET_NAME"
    REGION: Final[str] = "AWS_REGION"
    DEFAULT_REGION: Final[str] = "AWS_DEFAULT_REGION"
    PROFILE: Final[str] = "AWS_PROFILE"
    RUN_DATE: Final[str] = "RUN_DATE"


def parse_address_list(value: str) -> list[str]:
    """Split a comma-separated address list, dropping blank entries."""
    return [address.strip() for address in value.split(",") if address.strip()]


@dataclass
class JobConfig:
    """Structured configuration for one extraction run."""

    source_path: str
    dest_path: str
    source_addresses: list[str]
    access_key: Optional[str] = None
    secret_access_key: Optional[str] = None
    region: Optional[str] = None
    profile: Optional[str] = None
    run_date: date = field(default_factory=date.today)

    @property
    def run_timestamp(self) -> str:
        """Date stamp substituted into the destination key."""
        return format_run_timestamp(self.run_date)

    def validate(self) -> None:
        """Validate configuration parameters."""
        if not self.source_path:
            raise ConfigurationError(
                f"{EnvironmentVariables.SOURCE_PATH} is required"
            )
        if not self.dest_path:
            raise ConfigurationError(f"{EnvironmentVariables.DEST_PATH} is required")
        if not self.source_addresses:
            raise ConfigurationError(
                f"At least one source address is required in "
                f"{EnvironmentVariables.SOURCE_ADDRESSES}"
            )
        if bool(self.access_key) != bool(self.secret_access_key):
            raise ConfigurationError(
                f"{EnvironmentVariables.ACCESS_KEY} and "
                f"{EnvironmentVariables.SECRET_ACCESS_KEY} must be set together"
            )

        # Both paths must at least name a container and a key
        for path in (self.source_path, self.dest_path):
            parse_storage_path(path)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "JobConfig":
        """Build and validate configuration from environment variables."""
        env = os.environ if environ is None else environ
        names = EnvironmentVariables

        run_date_value = env.get(names.RUN_DATE)
        config = cls(
            source_path=env.get(names.SOURCE_PATH, "").strip(),
            dest_path=env.get(names.DEST_PATH, "").strip(),
            source_addresses=parse_address_list(env.get(names.SOURCE_ADDRESSES, "")),
            access_key=env.get(names.ACCESS_KEY) or None,
            secret_access_key=env.get(names.SECRET_ACCESS_KEY) or None,
            region=env.get(names.REGION) or env.get(names.DEFAULT_REGION) or None,
            profile=env.get(names.PROFILE) or None,
        )
        if run_date_value:
            config.run_date = parse_run_date(run_date_value)

        config.validate()
        return config
