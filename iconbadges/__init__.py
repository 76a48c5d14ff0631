"""Custom icon badges: shields.io badges with icons it does not ship."""
from .api.main import create_app

__all__ = ["create_app"]
