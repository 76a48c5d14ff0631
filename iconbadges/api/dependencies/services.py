"""Service providers wired into routes through FastAPI dependencies."""
from __future__ import annotations

from functools import lru_cache

from fastapi import Depends
from sqlalchemy.orm import Session

from iconbadges.api.dependencies.database import get_db
from iconbadges.core.logging import get_logger
from iconbadges.services.icons import IconLookup, IconStore, OcticonTable, get_octicon_table
from iconbadges.services.submissions import IconSubmissionService
from iconbadges.services.upstream import BadgeFetcher, MarkupProbeCatalog, UpstreamIconCatalog


@lru_cache()
def get_badge_fetcher() -> BadgeFetcher:
    return BadgeFetcher()


def get_octicons() -> OcticonTable:
    return get_octicon_table()


def get_icon_store(db: Session = Depends(get_db)) -> IconStore:
    return IconStore(db)


def get_icon_lookup(
    octicons: OcticonTable = Depends(get_octicons),
    store: IconStore = Depends(get_icon_store),
) -> IconLookup:
    return IconLookup(octicons, store)


def get_upstream_catalog(fetcher: BadgeFetcher = Depends(get_badge_fetcher)) -> UpstreamIconCatalog:
    return MarkupProbeCatalog(fetcher)


def get_submission_service(
    lookup: IconLookup = Depends(get_icon_lookup),
    store: IconStore = Depends(get_icon_store),
    fetcher: BadgeFetcher = Depends(get_badge_fetcher),
    catalog: UpstreamIconCatalog = Depends(get_upstream_catalog),
) -> IconSubmissionService:
    return IconSubmissionService(
        lookup=lookup,
        store=store,
        fetcher=fetcher,
        catalog=catalog,
        logger=get_logger("iconbadges.submissions"),
    )


__all__ = [
    "get_badge_fetcher",
    "get_octicons",
    "get_icon_store",
    "get_icon_lookup",
    "get_upstream_catalog",
    "get_submission_service",
]
