"""API routers module."""

from . import percentiles

__all__ = ["percentiles"]
