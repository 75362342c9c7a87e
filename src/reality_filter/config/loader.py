"""YAML configuration loading utilities."""

import os
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

import yaml

from reality_filter.config.models import RealityFilterConfig

# Environment variable -> (section, key, converter)
ENV_OVERRIDES: dict[str, tuple[str, str, Callable[[str], Any]]] = {
    "SERVER_HOST": ("server", "host", str),
    "SERVER_PORT": ("server", "port", int),
    "MONGODB_URI": ("mongodb", "uri", str),
    "MONGODB_DATABASE": ("mongodb", "database", str),
    "REDIS_HOST": ("redis", "host", str),
    "REDIS_PORT": ("redis", "port", int),
    "REDIS_PASSWORD": ("redis", "password", str),
    "REDIS_DB": ("redis", "db", int),
    "POSTGRES_HOST": ("postgres", "host", str),
    "POSTGRES_PORT": ("postgres", "port", int),
    "POSTGRES_USER": ("postgres", "user", str),
    "POSTGRES_PASSWORD": ("postgres", "password", str),
    "POSTGRES_DB": ("postgres", "dbname", str),
    "POSTGRES_SSLMODE": ("postgres", "sslmode", str),
    "LOG_LEVEL": ("logging", "level", str.lower),
    "LOG_FORMAT": ("logging", "format", str.lower),
    "LOG_OUTPUT_PATH": ("logging", "output_path", str),
}


def apply_env_overrides(
    raw: dict[str, Any], environ: Mapping[str, str] | None = None
) -> dict[str, Any]:
    """Overlay connection and logging settings from environment variables.

    Args:
        raw: Parsed YAML mapping (not modified).
        environ: Environment to read (defaults to ``os.environ``).

    Returns:
        A new mapping with overrides applied.

    Raises:
        ValueError: If a numeric variable does not parse.
    """
    env = os.environ if environ is None else environ
    merged = {k: dict(v) if isinstance(v, dict) else v for k, v in raw.items()}
    for var, (section, key, convert) in ENV_OVERRIDES.items():
        if var not in env:
            continue
        try:
            value = convert(env[var])
        except ValueError as e:
            msg = f"Invalid value for {var}: {env[var]!r}"
            raise ValueError(msg) from e
        merged.setdefault(section, {})[key] = value
    return merged


def load_config(
    path: Path | str | None = None, *, environ: Mapping[str, str] | None = None
) -> RealityFilterConfig:
    """Load configuration from a YAML file plus environment overrides.

    Args:
        path: Path to YAML config file. If None, only defaults and
            environment variables are used.
        environ: Environment to read (defaults to ``os.environ``).

    Returns:
        Validated RealityFilterConfig.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        pydantic.ValidationError: If config is invalid.
    """
    raw: dict[str, Any] = {}
    if path is not None:
        path = Path(path)
        with path.open() as f:
            raw = yaml.safe_load(f) or {}

    return RealityFilterConfig.model_validate(apply_env_overrides(raw, environ))


def get_default_config_path() -> Path:
    """Get path to default config file."""
    return Path(__file__).parents[3] / "configs" / "default.yaml"
