"""Assemble the context handed to template renderers.

Example
-------
>>> from pagebuild.generator.context import make_context
>>> make_context({"title": "A"}, {"site": "S"}, {"h": 1})
{'h': 1, 'config': {'site': 'S'}, 'title': 'A'}
"""

from __future__ import annotations

import collections.abc as cabc
import datetime as dt
import typing as typ

from pagebuild.merge import deep_merge
from pagebuild.urls import page_number_url

if typ.TYPE_CHECKING:
    from .renderer import HtmlContentRenderer


def make_context(
    document: cabc.Mapping[str, typ.Any],
    config: cabc.Mapping[str, typ.Any],
    helpers: cabc.Mapping[str, typ.Any],
) -> dict[str, typ.Any]:
    """Merge ``helpers``, ``{"config": config}`` and ``document``.

    Later layers win on key collisions, so document fields override the
    ``config`` key and helpers, and nested mappings are merged recursively.
    """
    return deep_merge(helpers, {"config": config}, document)


def format_date(value: dt.date | dt.datetime | None, fmt: str = "%b %d, %Y") -> str:
    """Format ``value`` with ``fmt``; missing dates render as an empty string."""
    if value is None:
        return ""
    return value.strftime(fmt)


def absolute_url(config: cabc.Mapping[str, typ.Any], url: str) -> str:
    """Prefix a site-relative ``url`` with the ``url`` option from ``config``."""
    base = str(config.get("url") or "").rstrip("/")
    if not url.startswith("/"):
        url = f"/{url}"
    return f"{base}{url}"


def default_helpers(renderer: HtmlContentRenderer) -> dict[str, typ.Any]:
    """Return the helper functions exposed to every template."""
    return {
        "page_number_url": page_number_url,
        "format_date": format_date,
        "absolute_url": absolute_url,
        "markdown": renderer.markdown,
        "pygments_css": renderer.stylesheet,
    }


__all__ = ["absolute_url", "default_helpers", "format_date", "make_context"]
