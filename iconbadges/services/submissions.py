"""Validate and store user-submitted icons."""
from __future__ import annotations

from typing import Iterable, Mapping

import structlog

from iconbadges.core.errors import ConflictError, UpstreamError, ValidationError
from iconbadges.services.icons import IconLookup, IconRecord, IconStore, icon_body
from iconbadges.services.upstream import BadgeFetcher, UpstreamIconCatalog

DEFAULT_RENDER_PATH = ("badge", "-custom-blue")


class IconSubmissionService:
    """Encapsulate the checks a new icon goes through before it is stored.

    1. every field is present,
    2. the upstream can render a badge with the icon embedded,
    3. the slug is free: not a curated or custom icon, and not an icon the
       upstream ships itself.

    The store's unique slug constraint still guards the final insert, so two
    concurrent submissions of the same slug cannot both succeed.
    """

    def __init__(
        self,
        lookup: IconLookup,
        store: IconStore,
        fetcher: BadgeFetcher,
        catalog: UpstreamIconCatalog,
        logger: structlog.BoundLogger,
    ) -> None:
        self.lookup = lookup
        self.store = store
        self.fetcher = fetcher
        self.catalog = catalog
        self.logger = logger

    def submit(
        self,
        slug: str | None,
        type: str | None,
        data: str | None,
        segments: Iterable[str] | None = None,
        query: Mapping[str, str] | None = None,
    ) -> IconRecord:
        body = icon_body(slug, type, data)
        if not slug or not type or not data:
            raise ValidationError(body=body)

        self.logger.info("icon_received", slug=slug, type=type)

        candidate = IconRecord(slug=slug, type=type, data=data)
        response = self.fetcher.fetch_badge(
            list(segments) if segments else DEFAULT_RENDER_PATH,
            dict(query or {}),
            candidate,
        )
        if response.is_error:
            self.logger.info("icon_render_failed", slug=slug, status=response.status)
            raise UpstreamError.from_status(response.status, response.reason, body=body)

        if self.lookup.resolve(slug) is not None or self.catalog.has_icon(slug):
            self.logger.info("icon_slug_in_use", slug=slug)
            raise ConflictError(body=body)

        record = self.store.insert_icon(slug, type, data)
        self.logger.info("icon_created", slug=slug, type=type)
        return record


__all__ = ["IconSubmissionService", "DEFAULT_RENDER_PATH"]
