"""
Extraction job: fetch a flow log, keep outbound records, write the result.
"""

import logging
from typing import Any, Optional

from .aws_utils import ObjectStore, create_object_store
from .config import JobConfig
from .errors import FlowLogExtractorError
from .logging_utils import generate_run_id, log_run_end, log_run_start, setup_logger
from .parser import FlowLogLineFilter, open_flow_log
from .paths import parse_storage_path
from .time_utils import resolve_destination_key

logger = logging.getLogger(__name__)

DONE = "Done."


class FlowLogExtractionJob:
    """Runs one fetch, filter and write pass over a single flow log object."""

    def __init__(self, config: JobConfig, store: ObjectStore):
        self.config = config
        self.store = store
        self.run_id = generate_run_id()
        self.summary: dict[str, Any] = {}

    def run(self) -> str:
        """Run every stage in order; any failure propagates to the caller."""
        log_run_start(
            logger,
            self.run_id,
            source=self.config.source_path,
            destination=self.config.dest_path,
            addresses=self.config.source_addresses,
        )
        try:
            source_key, body = self._fetch()
            output = self._filter(source_key, body)
            container, key = self._resolve_destination()
            self._write(container, key, output)
        except FlowLogExtractorError as e:
            log_run_end(logger, self.run_id, False, error=str(e))
            raise

        log_run_end(logger, self.run_id, True, result_data=self.summary)
        return DONE

    def _fetch(self) -> tuple[str, bytes]:
        """Download the source object."""
        source = parse_storage_path(self.config.source_path)
        logger.info(f"Attempting to parse VPC logs from {self.config.source_path}")
        body = self.store.get(source.container, source.key)
        self.summary["source_key"] = source.key
        self.summary["bytes_read"] = len(body)
        return source.key, body

    def _filter(self, key: str, body: bytes) -> bytes:
        """Keep only lines originating from the configured addresses."""
        line_filter = FlowLogLineFilter(self.config.source_addresses)
        output = line_filter.filter_content(open_flow_log(body, key))
        self.summary["lines_scanned"] = line_filter.lines_scanned
        self.summary["lines_matched"] = line_filter.lines_matched
        return output

    def _resolve_destination(self) -> tuple[str, str]:
        """Parse the destination path and stamp the run date into its key."""
        destination = parse_storage_path(self.config.dest_path)
        key = resolve_destination_key(destination.key, self.config.run_timestamp)
        self.summary["dest_container"] = destination.container
        self.summary["dest_key"] = key
        return destination.container, key

    def _write(self, container: str, key: str, output: bytes) -> None:
        """Upload the filtered lines, replacing any previous object."""
        self.store.put(container, key, output)
        self.summary["bytes_written"] = len(output)
        logger.info(f"Wrote {len(output)} bytes to {container}/{key}")


# Public API functions
def run_job(
    config: Optional[JobConfig] = None, store: Optional[ObjectStore] = None
) -> str:
    """Run the extraction job, reading configuration from the environment by default."""
    setup_logger("vpc_flow_extractor")
    config = config or JobConfig.from_env()
    store = store or create_object_store(config)
    return FlowLogExtractionJob(config, store).run()


def lambda_handler(event: Any, context: Any) -> str:
    """AWS Lambda entry point; the trigger event carries no parameters."""
    try:
        return run_job()
    except FlowLogExtractorError as e:
        logger.error(f"Extraction failed: {e}")
        raise
