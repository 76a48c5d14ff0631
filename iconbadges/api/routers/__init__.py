"""Expose API routers."""
from . import badges, icons

__all__ = ["badges", "icons"]
