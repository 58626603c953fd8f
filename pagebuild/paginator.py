"""Split an ordered document collection into listing pages.

Example
-------
>>> from pagebuild.documents import Document
>>> from pagebuild.paginator import paginate
>>> docs = [Document({"url": f"/posts/{n}"}) for n in range(5)]
>>> pages = paginate(docs, url_prefix="/blog", documents_per_page=2, layout="list")
>>> [(p.url, p.previous_url, p.next_url, len(p.documents)) for p in pages]
[('/blog/page/1', None, '/blog/page/2', 2), ('/blog/page/2', '/blog/page/1', '/blog/page/3', 2), ('/blog/page/3', '/blog/page/2', None, 1)]
"""

from __future__ import annotations

import collections.abc as cabc
import math
import typing as typ

from .documents import ListingPage
from .errors import ConfigurationError
from .urls import page_number_url

if typ.TYPE_CHECKING:
    from .documents import Document


def _require(option: str, value: object) -> None:
    if not value:
        msg = f'"{option}" not specified for paginate().'
        raise ConfigurationError(option, msg)


def paginate(
    documents: cabc.Sequence[Document],
    *,
    url_prefix: str | None = None,
    documents_per_page: int | None = None,
    layout: str | None = None,
) -> list[ListingPage]:
    """Return one :class:`ListingPage` per page of ``documents``.

    Parameters
    ----------
    documents : Sequence[Document]
        Documents to list, already filtered and ordered.
    url_prefix : str
        Prefix for page URLs; page ``n`` lives at ``{url_prefix}/page/{n}``.
    documents_per_page : int
        Maximum number of documents on each page.
    layout : str
        Layout used to render every listing page.

    Returns
    -------
    list[ListingPage]
        Pages numbered from 1, each carrying its slice of ``documents`` and
        links to its neighbours. No documents means no pages.

    Raises
    ------
    ConfigurationError
        If any of the options is missing or falsy, or ``documents_per_page``
        is not a positive integer.
    """
    _require("url_prefix", url_prefix)
    _require("documents_per_page", documents_per_page)
    _require("layout", layout)
    per_page = documents_per_page
    if isinstance(per_page, bool) or not isinstance(per_page, int) or per_page < 1:
        msg = f'"documents_per_page" must be a positive integer, got {per_page!r}.'
        raise ConfigurationError("documents_per_page", msg)
    prefix = typ.cast("str", url_prefix)

    total_pages = math.ceil(len(documents) / per_page)
    pages: list[ListingPage] = []
    for page_number in range(1, total_pages + 1):
        url = page_number_url(prefix, page_number)
        begin = (page_number - 1) * per_page
        pages.append(
            ListingPage(
                {
                    "source_path": url.removeprefix("/"),
                    "url": url,
                    "documents": list(documents[begin : begin + per_page]),
                    "previous_url": (
                        page_number_url(prefix, page_number - 1)
                        if page_number > 1
                        else None
                    ),
                    "next_url": (
                        page_number_url(prefix, page_number + 1)
                        if page_number < total_pages
                        else None
                    ),
                    "layout": layout,
                    "page_number": page_number,
                    "total_pages": total_pages,
                }
            )
        )
    return pages


__all__ = ["paginate"]
