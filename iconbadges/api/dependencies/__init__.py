"""FastAPI dependency helpers."""
from .database import get_db
from .services import (
    get_badge_fetcher,
    get_icon_lookup,
    get_icon_store,
    get_octicons,
    get_submission_service,
    get_upstream_catalog,
)

__all__ = [
    "get_db",
    "get_badge_fetcher",
    "get_icon_lookup",
    "get_icon_store",
    "get_octicons",
    "get_submission_service",
    "get_upstream_catalog",
]
