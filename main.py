#!/usr/bin/env python
"""CLI for the Reality Filter HTTP service."""

import argparse
import logging
import sys
from pathlib import Path

import uvicorn
from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from reality_filter.api import create_app
from reality_filter.config import get_default_config_path, load_config
from reality_filter.log_setup import configure_logging

logger = logging.getLogger(__name__)


class CLIArgs(BaseModel):
    """Validated CLI arguments."""

    config: Path | None = None
    host: str | None = None
    port: int | None = Field(default=None, ge=1, le=65535)
    log_runs: bool = False

    @field_validator("config")
    @classmethod
    def config_must_exist(cls, v: Path | None) -> Path | None:
        if v is not None and not v.exists():
            raise ValueError(f"Config file not found: {v}")
        return v


def run(args: CLIArgs) -> None:
    """Load configuration and serve the API until interrupted.

    Args:
        args: Validated CLI arguments.
    """
    config = load_config(args.config)
    configure_logging(config.logging)

    host = args.host or config.server.host
    port = args.port or config.server.port
    logger.info(f"Config: {args.config or 'defaults + environment'}")
    logger.info(f"Serving on {host}:{port}")

    app = create_app(config, run_log_override=True if args.log_runs else None)
    uvicorn.run(app, host=host, port=port, log_config=None)


def main() -> None:
    """Entry point for the CLI."""
    parser = argparse.ArgumentParser(description="Score and flag news articles over HTTP.")
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=None,
        help="Path to YAML config file (default: configs/default.yaml if present)",
    )
    parser.add_argument("--host", default=None, help="Override server.host")
    parser.add_argument("--port", type=int, default=None, help="Override server.port")
    parser.add_argument(
        "--log-runs",
        action="store_true",
        default=False,
        help="Write a JSON run log for every analysis",
    )

    logging.basicConfig(level=logging.INFO, format="%(message)s")
    load_dotenv()

    ns = parser.parse_args()
    config_path: Path | None = ns.config
    if config_path is None and get_default_config_path().exists():
        config_path = get_default_config_path()

    try:
        args = CLIArgs(config=config_path, host=ns.host, port=ns.port, log_runs=ns.log_runs)
    except Exception as e:
        logger.error(str(e))
        sys.exit(1)

    try:
        run(args)
    except KeyboardInterrupt:
        sys.exit(130)


if __name__ == "__main__":
    main()
