"""Application logging setup."""

import logging
import sys
from pathlib import Path

from reality_filter.config.models import LoggingConfig

CONSOLE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
KEYVALUE_FORMAT = 'ts=%(asctime)s level=%(levelname)s logger=%(name)s msg="%(message)s"'

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "warn": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}


def _handler_for(output_path: str) -> logging.Handler:
    if output_path == "stdout":
        return logging.StreamHandler(sys.stdout)
    if output_path == "stderr":
        return logging.StreamHandler(sys.stderr)
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    return logging.FileHandler(path)


def configure_logging(config: LoggingConfig) -> None:
    """Configure the root logger from ``config``.

    Replaces any handlers already installed on the root logger, so calling
    it twice does not duplicate output.
    """
    handler = _handler_for(config.output_path)
    fmt = KEYVALUE_FORMAT if config.format == "keyvalue" else CONSOLE_FORMAT
    handler.setFormatter(logging.Formatter(fmt))
    logging.basicConfig(level=_LEVELS[config.level], handlers=[handler], force=True)
