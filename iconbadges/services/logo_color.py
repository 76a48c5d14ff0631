"""Recolor SVG logos to honour the ``logoColor`` badge parameter.

The rewrite is regex based and intentionally lenient: payloads that cannot be
decoded, or that hold no ``<svg`` element, are returned untouched so a badge is
still rendered (with the icon's own colors) instead of failing the request.
"""
from __future__ import annotations

import base64
import binascii
import re

__all__ = ["apply_logo_color", "normalize_color", "recolor_markup"]

HEX_COLOR = re.compile(r"^(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")
SVG_OPEN_TAG = re.compile(r"<svg\b[^>]*>", re.IGNORECASE)
PAINT_ATTR = re.compile(r'(?<![\w-])(fill|stroke)\s*=\s*("[^"]*"|\'[^\']*\')')
PAINT_STYLE = re.compile(r"(?<![\w-])(fill|stroke)\s*:\s*([^;\"'}<]+)")


def normalize_color(color: str) -> str:
    """Prefix bare hex values with ``#``; named colors pass through."""
    color = color.strip()
    if HEX_COLOR.match(color):
        return f"#{color}"
    return color


def _is_none(value: str) -> bool:
    return value.strip("\"' ").lower() in {"none", "transparent"}


def recolor_markup(markup: str, color: str) -> str | None:
    """Return recolored markup, or ``None`` when no ``<svg>`` root is found."""
    root = SVG_OPEN_TAG.search(markup)
    if root is None:
        return None

    def replace_attr(match: re.Match) -> str:
        if _is_none(match.group(2)):
            return match.group(0)
        return f'{match.group(1)}="{color}"'

    def replace_style(match: re.Match) -> str:
        if _is_none(match.group(2)):
            return match.group(0)
        return f"{match.group(1)}:{color}"

    body = PAINT_ATTR.sub(replace_attr, markup[root.end():])
    body = PAINT_STYLE.sub(replace_style, body)

    tag = PAINT_ATTR.sub(replace_attr, root.group(0))
    if not re.search(r"(?<![\w-])fill\s*=", tag):
        closing = "/>" if tag.endswith("/>") else ">"
        tag = f'{tag[: -len(closing)].rstrip()} fill="{color}"{closing}'

    return markup[: root.start()] + tag + body


def _decode(data: str) -> str | None:
    try:
        # Tolerate MIME-style line wrapping.
        return base64.b64decode("".join(data.split()), validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError, ValueError):
        return None


def apply_logo_color(data: str, color: str) -> str:
    """Recolor a base64 SVG payload and return it base64 encoded again.

    Raw SVG markup is accepted too; the result is always base64 so it can be
    embedded in a ``data:`` URL as-is.
    """
    if not color:
        return data
    markup = _decode(data)
    if markup is None:
        if SVG_OPEN_TAG.search(data) is None:
            return data
        markup = data

    recolored = recolor_markup(markup, normalize_color(color))
    if recolored is None:
        return data
    return base64.b64encode(recolored.encode("utf-8")).decode("ascii")
