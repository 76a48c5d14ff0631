"""Translate inbound badge requests into shields.io URLs."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Mapping
from urllib.parse import quote

from iconbadges.core.settings import get_settings
from iconbadges.services.icons import IconRecord
from iconbadges.services.logo_color import apply_logo_color

LOGO_PARAM = "logo"
LOGO_COLOR_PARAM = "logoColor"
PROBE_BADGE_PATH = ("badge", "-test-blue")


@dataclass(slots=True)
class BadgeRequestContext:
    """Per-request view of a badge request: path segments, query and icon."""

    segments: list[str]
    query: dict[str, str] = field(default_factory=dict)
    icon: IconRecord | None = None

    @property
    def logo(self) -> str:
        return self.query.get(LOGO_PARAM, "")

    @property
    def logo_color(self) -> str | None:
        return self.query.get(LOGO_COLOR_PARAM)


def build_query_string(query: Mapping[str, str]) -> str:
    return "&".join(f"{key}={quote(str(value), safe='')}" for key, value in query.items())


def build_path(segments: Iterable[str]) -> str:
    return "/".join(quote(segment, safe="") for segment in segments)


def build_badge_query(query: Mapping[str, str], icon: IconRecord | None) -> dict[str, str]:
    """Return the query forwarded upstream, with the logo embedded when resolved."""
    if icon is None:
        return dict(query)

    data = icon.data
    forwarded = dict(query)
    color = forwarded.get(LOGO_COLOR_PARAM)
    if icon.is_svg and color:
        data = apply_logo_color(data, color)
        # applied to the markup, not forwarded
        forwarded.pop(LOGO_COLOR_PARAM)
    forwarded[LOGO_PARAM] = f"data:image/{icon.type};base64,{data}"
    return forwarded


def build_badge_url(
    segments: Iterable[str],
    query: Mapping[str, str],
    icon: IconRecord | None,
    base_url: str | None = None,
) -> str:
    base = (base_url or get_settings().resolved_upstream_base_url).rstrip("/")
    query_string = build_query_string(build_badge_query(query, icon))
    return f"{base}/{build_path(segments)}?{query_string}"


def build_default_badge_url(slug: str, base_url: str | None = None) -> str:
    """URL of a placeholder badge using ``slug`` as a plain upstream logo name."""
    return build_badge_url(PROBE_BADGE_PATH, {LOGO_PARAM: slug}, None, base_url)


__all__ = [
    "LOGO_PARAM",
    "LOGO_COLOR_PARAM",
    "BadgeRequestContext",
    "build_query_string",
    "build_path",
    "build_badge_query",
    "build_badge_url",
    "build_default_badge_url",
]
