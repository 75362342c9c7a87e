"""HTTP API for Reality Filter."""

from reality_filter.api.app import API_PREFIX, create_app
from reality_filter.api.routes import router

__all__ = ["API_PREFIX", "create_app", "router"]
