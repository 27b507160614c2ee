"""
Command-line interface for VPC Flow Log Extractor.
"""

import argparse
import os
from typing import Optional, Sequence

from .config import EnvironmentVariables, JobConfig
from .errors import FlowLogExtractorError
from .job import run_job
from .logging_utils import setup_logger


class ArgumentParser:
    """Handles command-line argument parsing."""

    @classmethod
    def parse_args(cls, argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
        """Parse and return command-line arguments."""
        parser = argparse.ArgumentParser(
            description="Extract outbound VPC Flow Log records from S3"
        )

        cls._add_path_args(parser)
        cls._add_aws_args(parser)
        cls._add_run_args(parser)

        return parser.parse_args(argv)

    @staticmethod
    def _add_path_args(parser: argparse.ArgumentParser) -> None:
        """Add source and destination arguments."""
        parser.add_argument(
            "--source",
            help=f"Source path 'bucket/path/to/file.log' (default: ${EnvironmentVariables.SOURCE_PATH})",
        )
        parser.add_argument(
            "--dest",
            help=f"Destination path, may contain '[[timestamp]]' (default: ${EnvironmentVariables.DEST_PATH})",
        )
        parser.add_argument(
            "--addresses",
            help=f"Comma-separated source IP addresses (default: ${EnvironmentVariables.SOURCE_ADDRESSES})",
        )

    @staticmethod
    def _add_aws_args(parser: argparse.ArgumentParser) -> None:
        """Add AWS-related arguments."""
        parser.add_argument("--profile", help="AWS profile name to use for API calls")
        parser.add_argument("--region", help="AWS region of the buckets")

    @staticmethod
    def _add_run_args(parser: argparse.ArgumentParser) -> None:
        """Add run-related arguments."""
        parser.add_argument(
            "--run-date",
            help="Date stamped into the destination key (ISO date, default: today)",
        )
        parser.add_argument(
            "--debug",
            action="store_true",
            help="Enable debug output to see detailed processing information",
        )


class ConfigurationBuilder:
    """Builds job configuration from the environment overlaid with arguments."""

    ARGUMENT_VARIABLES = {
        "source": EnvironmentVariables.SOURCE_PATH,
        "dest": EnvironmentVariables.DEST_PATH,
        "addresses": EnvironmentVariables.SOURCE_ADDRESSES,
        "region": EnvironmentVariables.REGION,
        "profile": EnvironmentVariables.PROFILE,
        "run_date": EnvironmentVariables.RUN_DATE,
    }

    def __init__(self, args: argparse.Namespace):
        self.args = args

    def build_configuration(self) -> JobConfig:
        """Build complete configuration from environment and arguments."""
        environ = dict(os.environ)
        for attribute, variable in self.ARGUMENT_VARIABLES.items():
            if (value := getattr(self.args, attribute, None)) is not None:
                environ[variable] = value
        return JobConfig.from_env(environ)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for the CLI."""
    args = ArgumentParser.parse_args(argv)
    logger = setup_logger("vpc_flow_extractor", level="DEBUG" if args.debug else None)

    try:
        config = ConfigurationBuilder(args).build_configuration()
        print(run_job(config))
        return 0
    except FlowLogExtractorError as e:
        print(f"Error: {e}")
        return 1
    except Exception as e:
        logger.exception("Unexpected error")
        print(f"Unexpected error: {e}")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
