"""Helpers that turn source paths into site URLs.

Example
-------
>>> from pagebuild.urls import derive_url, page_number_url
>>> derive_url("blog/index.md")
'/blog'
>>> derive_url("index.md")
'/'
>>> page_number_url("/blog", 2)
'/blog/page/2'
"""

from __future__ import annotations

import posixpath
import re

INDEX_SUFFIX_PATTERN = re.compile(r"/index$")


def _to_posix(path: str) -> str:
    return path.replace("\\", "/")


def get_extension(path: str) -> str:
    """Return the extension of ``path`` without its leading dot."""
    return posixpath.splitext(_to_posix(path))[1].lstrip(".")


def remove_extension(path: str) -> str:
    """Return ``path`` with its final extension stripped."""
    return posixpath.splitext(_to_posix(path))[0]


def derive_url(source_path: str) -> str:
    """Convert a source path relative to the content folder into a site URL.

    The extension is dropped, the path is rooted at ``/``, and a trailing
    ``/index`` segment collapses into its folder, so ``about/index.md`` and
    ``about.md`` both map to ``/about``.
    """
    url = "/" + remove_extension(source_path)
    url = INDEX_SUFFIX_PATTERN.sub("", url)
    if not url:
        return "/"
    return url


def page_number_url(url_prefix: str, page_number: int) -> str:
    """Return the listing URL for ``page_number`` under ``url_prefix``."""
    return f"{url_prefix}/page/{page_number}"


__all__ = [
    "INDEX_SUFFIX_PATTERN",
    "derive_url",
    "get_extension",
    "page_number_url",
    "remove_extension",
]
