"""Icon sources: the bundled Octicons table and the custom icon store."""
from __future__ import annotations

import base64
import json
import re
from dataclasses import asdict, dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from iconbadges.core import models
from iconbadges.core.errors import ConflictError, TransportError
from iconbadges.core.logging import get_logger
from iconbadges.core.settings import get_settings

logger = get_logger(__name__)

SVG_TYPE = "svg+xml"
OCTICON_FILL = "whitesmoke"

_SIZE_SUFFIX = re.compile(r"^(?P<name>.+)-(?P<size>\d+)$")


@dataclass(slots=True, frozen=True)
class IconRecord:
    slug: str
    type: str
    data: str

    @property
    def is_svg(self) -> bool:
        return self.type == SVG_TYPE

    def as_dict(self) -> dict[str, str]:
        return asdict(self)


class OcticonTable:
    """Read-only table of bundled Octicons keyed by name and size.

    Two layouts are accepted: the compact bundled one (``{name: {size: d}}``)
    and the ``build/data.json`` export shipped by ``@primer/octicons``
    (``{name: {"heights": {size: {"width": w, "path": "<path .../>"}}}}``),
    so a complete export can be dropped in through ``ICONBADGES_OCTICONS_PATH``.
    """

    def __init__(self, icons: dict[str, Any]) -> None:
        self._icons = {name: _normalise_sizes(entry) for name, entry in icons.items()}

    @classmethod
    def from_file(cls, path: Path) -> "OcticonTable":
        with path.open(encoding="utf-8") as handle:
            table = cls(json.load(handle))
        logger.info("octicons_loaded", path=str(path), count=len(table._icons))
        return table

    def __contains__(self, slug: str) -> bool:
        return self._find(slug) is not None

    def names(self) -> list[str]:
        return sorted(self._icons)

    def _find(self, slug: str) -> tuple[str, tuple[int, str]] | None:
        sizes = self._icons.get(slug)
        if sizes:
            size = min(sizes, key=int)
            return size, sizes[size]
        match = _SIZE_SUFFIX.match(slug)
        if match:
            sizes = self._icons.get(match.group("name")) or {}
            shape = sizes.get(match.group("size"))
            if shape:
                return match.group("size"), shape
        return None

    def get_icon(self, slug: str) -> IconRecord | None:
        found = self._find(slug)
        if found is None:
            return None
        size, (width, paths) = found
        markup = (
            f'<svg xmlns="http://www.w3.org/2000/svg" width="{width}" height="{size}" '
            f'viewBox="0 0 {width} {size}" fill="{OCTICON_FILL}">{paths}</svg>'
        )
        data = base64.b64encode(markup.encode("utf-8")).decode("ascii")
        return IconRecord(slug=slug, type=SVG_TYPE, data=data)


def _normalise_sizes(entry: dict[str, Any]) -> dict[str, tuple[int, str]]:
    if "heights" in entry:
        return {
            size: (int(shape.get("width", size)), shape["path"])
            for size, shape in entry["heights"].items()
        }
    return {size: (int(size), f'<path d="{d}"/>') for size, d in entry.items()}


@lru_cache()
def get_octicon_table() -> OcticonTable:
    settings = get_settings()
    return OcticonTable.from_file(settings.resolved_octicons_path)


class IconStore:
    """Custom icons submitted by users, persisted through SQLAlchemy."""

    def __init__(self, session: Session) -> None:
        self.session = session

    @staticmethod
    def _to_record(icon: models.Icon) -> IconRecord:
        return IconRecord(slug=icon.slug, type=icon.type, data=icon.data)

    def get_icon(self, slug: str) -> IconRecord | None:
        try:
            icon = self.session.scalars(select(models.Icon).where(models.Icon.slug == slug)).first()
        except SQLAlchemyError as exc:
            logger.error("icon_store_unavailable", operation="get", error=str(exc))
            raise TransportError("The icon database could not be reached.") from exc
        return self._to_record(icon) if icon else None

    def list_icons(self) -> list[IconRecord]:
        try:
            icons = self.session.scalars(select(models.Icon).order_by(models.Icon.id)).all()
        except SQLAlchemyError as exc:
            logger.error("icon_store_unavailable", operation="list", error=str(exc))
            raise TransportError("The icon database could not be reached.") from exc
        return [self._to_record(icon) for icon in icons]

    def insert_icon(self, slug: str, type: str, data: str) -> IconRecord:
        icon = models.Icon(slug=slug, type=type, data=data)
        self.session.add(icon)
        try:
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            raise ConflictError(body={"slug": slug, "type": type, "data": data}) from exc
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.error("icon_store_unavailable", operation="insert", error=str(exc))
            raise TransportError("The icon database could not be reached.") from exc
        return self._to_record(icon)


class IconLookup:
    """Resolve a ``logo`` slug, curated Octicons first, then the custom store."""

    def __init__(self, octicons: OcticonTable, store: IconStore) -> None:
        self.octicons = octicons
        self.store = store

    def resolve(self, slug: str | None) -> IconRecord | None:
        if not slug:
            return None
        return self.octicons.get_icon(slug) or self.store.get_icon(slug)


def icon_body(slug: Any, type: Any, data: Any) -> dict[str, Any]:
    """Echo of a submission, used as ``body`` in response envelopes."""
    return {"slug": slug, "type": type, "data": data}


__all__ = [
    "IconRecord",
    "OcticonTable",
    "get_octicon_table",
    "IconStore",
    "IconLookup",
    "icon_body",
    "SVG_TYPE",
]
