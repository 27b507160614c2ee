"""Logging utilities with run ID tracking."""

import json
import logging
import logging.handlers
import os
import uuid

from pathlib import Path
from typing import Any, Dict, Optional


def setup_logger(
    name: str, level: Optional[str] = None, log_dir: Optional[str] = None
) -> logging.Logger:
    """Setup package logger with console and optional rotating file handlers."""
    logger = logging.getLogger(name)

    if logger.handlers:
        return logger

    level_name = (level or os.environ.get("LOG_LEVEL") or "INFO").upper()
    logger.setLevel(getattr(logging, level_name, logging.INFO))

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # Rotating file handler (30MB max, 5 backups), only when a directory is given
    if log_dir := log_dir or os.environ.get("LOG_DIR"):
        directory = Path(log_dir)
        directory.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            directory / "vpc-flow-extractor.log",
            maxBytes=30 * 1024 * 1024,  # 30MB
            backupCount=5,
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def generate_run_id() -> str:
    """Generate unique run ID."""
    return str(uuid.uuid4())[:8]


def log_run_start(logger: logging.Logger, run_id: str, **kwargs: Any) -> None:
    """Log run start with parameters."""
    logger.info(f"Run {run_id} started - {kwargs}")


def log_run_end(
    logger: logging.Logger,
    run_id: str,
    success: bool,
    result_data: Optional[Dict[str, Any]] = None,
    **kwargs: Any,
) -> None:
    """Log run completion with optional result data."""
    status = "SUCCESS" if success else "FAILED"
    log_data = {"run_id": run_id, "status": status, **kwargs}

    if result_data:
        log_data["result_data"] = result_data

    level = logging.INFO if success else logging.ERROR
    logger.log(level, f"Run {run_id} {status} - {json.dumps(log_data, default=str)}")
