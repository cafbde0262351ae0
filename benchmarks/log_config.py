"""
Logging configuration for the benchmark suite.

Report tables go to stdout through print; this logger carries
diagnostics (warnings, failed cells, per-candidate iteration counts).
"""

import logging
import sys
from pathlib import Path
from typing import Optional


def setup_logger(
    name: Optional[str] = None,
    level: int = logging.INFO,
    log_file: Optional[Path] = None
) -> logging.Logger:
    """
    Configure and return a logger with consistent formatting.

    Args:
        name: Logger name (None configures the root logger, which the
            harness and benchmark modules propagate to)
        level: Console logging level (default: INFO)
        log_file: Optional file path for log output at DEBUG level

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG if log_file else level)

    # Remove handlers from earlier calls to avoid duplicates
    for handler in list(logger.handlers):
        if getattr(handler, '_bench_handler', False):
            logger.removeHandler(handler)
            handler.close()

    # Console handler on stderr so report output stays clean
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler._bench_handler = True
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(fmt='[%(levelname)s] %(message)s'))
    logger.addHandler(console_handler)

    # Optional file handler with more detailed format
    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode='a', encoding='utf-8')
        file_handler._bench_handler = True
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(
            fmt='%(asctime)s [%(levelname)s] %(name)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        ))
        logger.addHandler(file_handler)

    return logger
