"""
Storage path parsing for VPC Flow Log Extractor.

A storage path names a container followed by the object key, e.g.
``flow-logs/2024/03/09/eni.log``. The key is rebuilt with ``//`` in front of
every segment, so the example above resolves to container ``flow-logs`` and
key ``//2024//03//09//eni.log``.
"""

from typing import NamedTuple

from .errors import MalformedPathError


class StoragePath(NamedTuple):
    """A container name and an object key within it."""

    container: str
    key: str


class StoragePathParser:
    """Splits ``container/path/to/file`` strings into container and key."""

    SEPARATOR = "/"
    KEY_SEPARATOR = "//"
    EXPECTED_FORMAT = "[container-name]/path/to/file.ext"

    def parse(self, path: str) -> StoragePath:
        """Parse a storage path into a (container, key) pair."""
        parts = path.split(self.SEPARATOR)

        if len(parts) < 2:
            raise MalformedPathError(
                f"File path string {path!r} not in the correct format - "
                f"expected {self.EXPECTED_FORMAT}"
            )

        return StoragePath(
            container=parts[0],
            key=self.KEY_SEPARATOR + self.KEY_SEPARATOR.join(parts[1:]),
        )


def parse_storage_path(path: str) -> StoragePath:
    """Parse a storage path into a (container, key) pair."""
    return StoragePathParser().parse(path)
