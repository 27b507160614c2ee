"""
Exception types for VPC Flow Log Extractor.
"""


class FlowLogExtractorError(Exception):
    """Base class for all extraction job failures."""


class ConfigurationError(FlowLogExtractorError, ValueError):
    """A required configuration value is missing or unusable."""


class MalformedPathError(FlowLogExtractorError, ValueError):
    """A storage path does not hold both a container and a key."""


class StoreAccessError(FlowLogExtractorError, RuntimeError):
    """Reading from or writing to the object store failed."""


class StreamReadError(FlowLogExtractorError, RuntimeError):
    """The flow log content could not be read to the end."""
