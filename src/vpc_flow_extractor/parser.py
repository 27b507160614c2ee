"""
Parser module for VPC Flow Log Extractor.

Flow log records are space-separated:
<version> <account-id> <interface-id> <srcaddr> <dstaddr> <srcport> <dstport>
<protocol> <packets> <bytes> <start> <end> <action> <log-status>
"""

import gzip
import io
import logging
import zlib
from typing import BinaryIO, Generator, Optional, Sequence, Union

from .errors import StreamReadError

logger = logging.getLogger(__name__)

FlowLogContent = Union[bytes, BinaryIO]


class FlowLogLineReader:
    """Reads newline-delimited records from a binary stream."""

    def __init__(self, stream: BinaryIO):
        self.stream = stream

    def read_lines(self) -> Generator[bytes, None, None]:
        """Yield each line without its line terminator."""
        try:
            for line in self.stream:
                yield self._strip_terminator(line)
        except (OSError, EOFError, zlib.error) as e:
            raise StreamReadError(f"Failed to read flow log content: {e}") from e

    @staticmethod
    def _strip_terminator(line: bytes) -> bytes:
        if line.endswith(b"\r\n"):
            return line[:-2]
        if line.endswith(b"\n"):
            return line[:-1]
        return line


class FlowLogLineFilter:
    """Selects flow log lines whose source address is one of the configured ones."""

    FIELD_SEPARATOR = b" "
    SRCADDR_INDEX = 3

    def __init__(self, addresses: Sequence[str]):
        self.addresses = [address.encode() for address in addresses]
        self.lines_scanned = 0
        self.lines_matched = 0

    def match(self, line: bytes) -> Optional[bytes]:
        """Return the first configured address matching the line's srcaddr."""
        fields = line.split(self.FIELD_SEPARATOR)
        if len(fields) <= self.SRCADDR_INDEX:
            return None

        srcaddr = fields[self.SRCADDR_INDEX]
        return next(
            (address for address in self.addresses if address == srcaddr), None
        )

    def filter_lines(
        self, lines: Generator[bytes, None, None]
    ) -> Generator[bytes, None, None]:
        """Yield matching lines, each terminated by a single newline."""
        for line in lines:
            self.lines_scanned += 1
            if (address := self.match(line)) is None:
                continue

            self.lines_matched += 1
            logger.info(
                f"Found outbound log from {address.decode(errors='replace')}: "
                f"{line.decode(errors='replace')}"
            )
            yield line + b"\n"

    def filter_content(self, content: FlowLogContent) -> bytes:
        """Filter a whole flow log body into the output buffer."""
        stream = io.BytesIO(content) if isinstance(content, bytes) else content
        reader = FlowLogLineReader(stream)
        return b"".join(self.filter_lines(reader.read_lines()))


def open_flow_log(content: bytes, key: str) -> BinaryIO:
    """Wrap a fetched object body, decompressing it when the key ends in .gz."""
    stream: BinaryIO = io.BytesIO(content)
    if key.endswith(".gz"):
        return gzip.GzipFile(fileobj=stream)  # type: ignore[return-value]
    return stream


# Public API functions
def filter_flow_log_lines(content: FlowLogContent, addresses: Sequence[str]) -> bytes:
    """Return the lines of a flow log whose srcaddr is one of the addresses."""
    line_filter = FlowLogLineFilter(addresses)
    return line_filter.filter_content(content)
