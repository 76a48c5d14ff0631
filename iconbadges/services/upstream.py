"""HTTP access to the upstream badge renderer (shields.io)."""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable, Mapping, Protocol

import requests

from iconbadges.core.errors import TransportError
from iconbadges.core.logging import get_logger
from iconbadges.core.settings import Settings, get_settings
from iconbadges.services.badges import build_badge_url, build_default_badge_url
from iconbadges.services.icons import IconRecord

logger = get_logger(__name__)

IMAGE_ELEMENT = re.compile(r"<image[^>]*>")


@dataclass(slots=True)
class UpstreamResponse:
    status: int
    reason: str
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes = b""
    default_content_type: str = "image/svg+xml"

    @property
    def content_type(self) -> str:
        for key, value in self.headers.items():
            if key.lower() == "content-type" and value:
                return value
        return self.default_content_type

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")

    @property
    def is_error(self) -> bool:
        return self.status >= 400


class BadgeFetcher:
    """Fetch badges upstream, relaying every status code as a valid result."""

    def __init__(self, settings: Settings | None = None, session: requests.Session | None = None) -> None:
        self.settings = settings or get_settings()
        self.session = session or requests.Session()
        self.session.headers.setdefault("User-Agent", self.settings.user_agent)

    def fetch(self, url: str) -> UpstreamResponse:
        try:
            response = self.session.get(url, timeout=self.settings.upstream_timeout)
        except requests.RequestException as exc:
            logger.warning("upstream_unreachable", url=url, error=str(exc))
            raise TransportError() from exc
        return UpstreamResponse(
            status=response.status_code,
            reason=response.reason or "",
            headers=dict(response.headers),
            body=response.content,
            default_content_type=self.settings.default_content_type,
        )

    def fetch_badge(
        self,
        segments: Iterable[str],
        query: Mapping[str, str],
        icon: IconRecord | None,
    ) -> UpstreamResponse:
        url = build_badge_url(segments, query, icon, self.settings.resolved_upstream_base_url)
        return self.fetch(url)

    def fetch_default_badge(self, slug: str) -> UpstreamResponse:
        return self.fetch(build_default_badge_url(slug, self.settings.resolved_upstream_base_url))


class UpstreamIconCatalog(Protocol):
    def has_icon(self, slug: str) -> bool:
        ...


class MarkupProbeCatalog:
    """Detect upstream built-in icons by rendering a probe badge.

    The upstream exposes no "does this logo exist" endpoint, so a placeholder
    badge is rendered with ``logo=<slug>``: when the upstream knows the slug the
    SVG embeds the logo as an ``<image>`` element, otherwise no image is drawn.
    This depends on the upstream's SVG output format.
    """

    def __init__(self, fetcher: BadgeFetcher) -> None:
        self.fetcher = fetcher

    def has_icon(self, slug: str) -> bool:
        response = self.fetcher.fetch_default_badge(slug)
        return IMAGE_ELEMENT.search(response.text) is not None


__all__ = ["UpstreamResponse", "BadgeFetcher", "UpstreamIconCatalog", "MarkupProbeCatalog"]
