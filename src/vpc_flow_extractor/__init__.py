"""
VPC Flow Log Extractor package.

Fetches a VPC Flow Log object from S3, keeps the records sent from a set of
source addresses and writes them to a date-stamped object.
"""

from typing import Final

# Package metadata
__version__: Final[str] = "1.0.0"
__description__: Final[str] = "Outbound VPC Flow Log extraction job for S3"

# Public API exports
from .aws_utils import S3ObjectStore, create_object_store
from .config import JobConfig
from .errors import (
    ConfigurationError,
    FlowLogExtractorError,
    MalformedPathError,
    StoreAccessError,
    StreamReadError,
)
from .job import FlowLogExtractionJob, lambda_handler, run_job
from .parser import filter_flow_log_lines
from .paths import StoragePath, parse_storage_path
from .time_utils import format_run_timestamp, resolve_destination_key

__all__ = [
    # AWS utilities
    "S3ObjectStore",
    "create_object_store",
    # Configuration
    "JobConfig",
    # Errors
    "ConfigurationError",
    "FlowLogExtractorError",
    "MalformedPathError",
    "StoreAccessError",
    "StreamReadError",
    # Job
    "FlowLogExtractionJob",
    "lambda_handler",
    "run_job",
    # Parser
    "filter_flow_log_lines",
    # Paths
    "StoragePath",
    "parse_storage_path",
    # Time utilities
    "format_run_timestamp",
    "resolve_destination_key",
]
