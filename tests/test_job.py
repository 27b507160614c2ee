"""
Tests for the extraction job.
"""

import gzip
from unittest.mock import Mock, patch

import pytest

from vpc_flow_extractor.errors import (
    MalformedPathError,
    StoreAccessError,
    StreamReadError,
)
from vpc_flow_extractor.job import FlowLogExtractionJob, lambda_handler, run_job

DEST = ("outbound", "//reports//outbound-9-3-2024.log")


class TestFlowLogExtractionJob:
    """Test the fetch, filter and write stages end to end."""

    def test_single_address(self, job_config, object_store, first_line):
        """Test only the configured source's record is written."""
        result = FlowLogExtractionJob(job_config, object_store).run()

        assert result == "Done."
        assert object_store.puts == [(*DEST, f"{first_line}\n".encode())]

    def test_two_addresses(self, job_config, object_store, first_line, second_line):
        """Test both records are written in original order."""
        job_config.source_addresses = ["10.0.0.1", "10.0.0.9"]

        FlowLogExtractionJob(job_config, object_store).run()

        assert object_store.objects[DEST] == f"{first_line}\n{second_line}\n".encode()

    def test_empty_input_still_written(self, job_config, object_store):
        """Test an empty source produces an empty destination object."""
        object_store.objects[("flow-logs", "//2024//03//09//eni.log")] = b""

        assert FlowLogExtractionJob(job_config, object_store).run() == "Done."
        assert object_store.puts == [(*DEST, b"")]

    def test_no_match_still_succeeds(self, job_config, object_store):
        """Test an address matching nothing writes an empty object."""
        job_config.source_addresses = ["192.0.2.1"]

        assert FlowLogExtractionJob(job_config, object_store).run() == "Done."
        assert object_store.objects[DEST] == b""

    def test_destination_without_placeholder(self, job_config, object_store):
        """Test a fixed destination key is used unchanged."""
        job_config.dest_path = "outbound/latest.log"

        FlowLogExtractionJob(job_config, object_store).run()

        assert object_store.puts[0][:2] == ("outbound", "//latest.log")

    def test_existing_destination_overwritten(self, job_config, object_store):
        """Test rerunning on the same date replaces the previous object."""
        object_store.objects[DEST] = b"stale\n"

        FlowLogExtractionJob(job_config, object_store).run()

        assert b"stale" not in object_store.objects[DEST]

    def test_gzip_source(self, job_config, object_store, sample_vpc_log_data, first_line):
        """Test compressed flow logs are filtered into plain text."""
        job_config.source_path = "flow-logs/2024/03/09/eni.log.gz"
        object_store.objects[("flow-logs", "//2024//03//09//eni.log.gz")] = (
            gzip.compress(sample_vpc_log_data)
        )

        FlowLogExtractionJob(job_config, object_store).run()

        assert object_store.objects[DEST] == f"{first_line}\n".encode()

    def test_summary(self, job_config, object_store):
        """Test the run summary records counts and the destination."""
        job = FlowLogExtractionJob(job_config, object_store)

        job.run()

        assert job.summary["lines_scanned"] == 2
        assert job.summary["lines_matched"] == 1
        assert job.summary["dest_key"] == DEST[1]


class TestJobFailures:
    """Test that failures abort without writing."""

    def test_missing_source_object(self, job_config):
        """Test fetch failures propagate and nothing is written."""
        store = Mock()
        store.get.side_effect = StoreAccessError("NoSuchKey")

        with pytest.raises(StoreAccessError):
            FlowLogExtractionJob(job_config, store).run()

        store.put.assert_not_called()

    def test_malformed_destination(self, job_config, object_store):
        """Test a destination without a key aborts before writing."""
        job_config.dest_path = "outbound"

        with pytest.raises(MalformedPathError):
            FlowLogExtractionJob(job_config, object_store).run()

        assert object_store.puts == []

    def test_corrupt_source(self, job_config, object_store):
        """Test read errors during the scan abort before writing."""
        job_config.source_path = "flow-logs/eni.log.gz"
        object_store.objects[("flow-logs", "//eni.log.gz")] = b"not gzip"

        with pytest.raises(StreamReadError):
            FlowLogExtractionJob(job_config, object_store).run()

        assert object_store.puts == []

    def test_write_failure(self, job_config, sample_vpc_log_data):
        """Test write failures propagate."""
        store = Mock()
        store.get.return_value = sample_vpc_log_data
        store.put.side_effect = StoreAccessError("AccessDenied")

        with pytest.raises(StoreAccessError, match="AccessDenied"):
            FlowLogExtractionJob(job_config, store).run()

    def test_failure_logged(self, job_config, caplog):
        """Test the failure reason reaches the log."""
        store = Mock()
        store.get.side_effect = StoreAccessError("NoSuchKey")

        with pytest.raises(StoreAccessError):
            FlowLogExtractionJob(job_config, store).run()

        assert "FAILED" in caplog.text
        assert "NoSuchKey" in caplog.text


class TestEntryPoints:
    """Test run_job and the Lambda handler."""

    def test_run_job_with_injected_dependencies(self, job_config, object_store):
        """Test run_job accepts explicit configuration and store."""
        assert run_job(job_config, object_store) == "Done."
        assert len(object_store.puts) == 1

    @patch("vpc_flow_extractor.job.create_object_store")
    def test_run_job_from_environment(
        self, mock_create_store, base_environ, object_store, monkeypatch, first_line, second_line
    ):
        """Test the no-argument entry point reads the environment."""
        for name, value in base_environ.items():
            monkeypatch.setenv(name, value)
        monkeypatch.setenv("RUN_DATE", "2024-03-09")
        mock_create_store.return_value = object_store

        assert run_job() == "Done."
        assert object_store.objects[DEST] == f"{first_line}\n{second_line}\n".encode()

    @patch("vpc_flow_extractor.job.run_job")
    def test_lambda_handler(self, mock_run_job):
        """Test the handler returns the job status."""
        mock_run_job.return_value = "Done."

        assert lambda_handler({}, None) == "Done."

    @patch("vpc_flow_extractor.job.run_job")
    def test_lambda_handler_reraises(self, mock_run_job):
        """Test failures are reported to the trigger."""
        mock_run_job.side_effect = StoreAccessError("AccessDenied")

        with pytest.raises(StoreAccessError):
            lambda_handler({}, None)
