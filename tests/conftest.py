"""
Pytest configuration and fixtures for VPC Flow Log Extractor tests.
"""

from datetime import date

import pytest

from vpc_flow_extractor.config import JobConfig
from vpc_flow_extractor.errors import StoreAccessError

FIRST_LINE = "2 111 eni-1 10.0.0.1 10.0.0.2 443 80 6 1 52 1616 1619 ACCEPT OK"
SECOND_LINE = "2 111 eni-2 10.0.0.9 10.0.0.2 443 80 6 1 52 1616 1619 ACCEPT OK"


class InMemoryObjectStore:
    """Object store keeping objects in a dict keyed by (container, key)."""

    def __init__(self, objects=None):
        self.objects = dict(objects or {})
        self.puts = []

    def get(self, container, key):
        try:
            return self.objects[(container, key)]
        except KeyError:
            raise StoreAccessError(f"No such object: {container}/{key}")

    def put(self, container, key, body):
        self.puts.append((container, key, body))
        self.objects[(container, key)] = body


@pytest.fixture
def first_line():
    """Record sent from 10.0.0.1."""
    return FIRST_LINE


@pytest.fixture
def second_line():
    """Record sent from 10.0.0.9."""
    return SECOND_LINE


@pytest.fixture
def sample_vpc_log_data():
    """Two flow log records from different source addresses."""
    return f"{FIRST_LINE}\n{SECOND_LINE}\n".encode()


@pytest.fixture
def object_store(sample_vpc_log_data):
    """In-memory store holding the sample log at flow-logs//2024//03//09//eni.log."""
    return InMemoryObjectStore(
        {("flow-logs", "//2024//03//09//eni.log"): sample_vpc_log_data}
    )


@pytest.fixture
def job_config():
    """Job configuration pointing at the sample log."""
    return JobConfig(
        source_path="flow-logs/2024/03/09/eni.log",
        dest_path="outbound/reports/outbound-[[timestamp]].log",
        source_addresses=["10.0.0.1"],
        run_date=date(2024, 3, 9),
    )


@pytest.fixture
def base_environ():
    """Environment variables for a valid job configuration."""
    return {
        "ACCESS_KEY": "AKIAEXAMPLE",
        "SECRET_ACCESS_KEY": "secret",
        "SOURCE_BUCKET_NAME": "flow-logs/2024/03/09/eni.log",
        "SOURCE_IP_ADDRESSES": "10.0.0.1,10.0.0.9",
        "DEST_BUCKET_NAME": "outbound/reports/outbound-[[timestamp]].log",
    }
