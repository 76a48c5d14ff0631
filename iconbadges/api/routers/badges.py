"""Badge proxy: resolve the logo, then relay the upstream badge."""
from __future__ import annotations

from urllib.parse import unquote

from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response

from iconbadges.api.dependencies.services import get_badge_fetcher, get_icon_lookup
from iconbadges.core.errors import IconNotFoundError
from iconbadges.core.logging import get_logger
from iconbadges.services.badges import BadgeRequestContext
from iconbadges.services.icons import IconLookup
from iconbadges.services.upstream import BadgeFetcher

logger = get_logger(__name__)

# Included last: the catch-all path relays every upstream endpoint
# (/badge/..., /github/..., /endpoint, ...).
router = APIRouter(tags=["badges"])

# Paths owned by this service; never relayed upstream.
RESERVED_PREFIXES = frozenset({"icons", "healthz", "metrics"})


def _query_params(request: Request) -> dict[str, str]:
    query: dict[str, str] = {}
    for key, value in request.query_params.multi_items():
        query.setdefault(key, value)
    return query


def _path_segments(request: Request, badge_path: str) -> list[str]:
    # Split the raw path so an encoded "/" (%2F) stays inside its segment.
    raw_path = request.scope.get("raw_path")
    if raw_path:
        path = raw_path.decode("latin-1").split("?", 1)[0]
        return [unquote(segment) for segment in path.split("/") if segment]
    return [segment for segment in badge_path.split("/") if segment]


@router.get("/{badge_path:path}", response_class=Response)
def get_badge(
    badge_path: str,
    request: Request,
    lookup: IconLookup = Depends(get_icon_lookup),
    fetcher: BadgeFetcher = Depends(get_badge_fetcher),
) -> Response:
    segments = _path_segments(request, badge_path)
    if not segments or segments[0] in RESERVED_PREFIXES:
        raise IconNotFoundError("Badge not found.", body={"path": badge_path})

    context = BadgeRequestContext(segments=segments, query=_query_params(request))
    context.icon = lookup.resolve(context.logo)
    upstream = fetcher.fetch_badge(context.segments, context.query, context.icon)
    if upstream.is_error:
        logger.info("badge_upstream_error", path=badge_path, status=upstream.status)
    return Response(
        content=upstream.body,
        status_code=upstream.status,
        media_type=upstream.content_type,
    )


__all__ = ["router"]
