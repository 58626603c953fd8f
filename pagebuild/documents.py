"""Records flowing through the build pipeline.

:class:`Document` is a read-only mapping of front matter and structural fields
for one parsed source file. :class:`ListingPage` is a synthetic document
produced by the paginator, and :class:`Page` is the rendered output handed to
the writer.

Example
-------
>>> from pagebuild.documents import Document
>>> doc = Document({"source_path": "about.md", "url": "/about", "title": "About"})
>>> doc["title"], doc.url
('About', '/about')
>>> doc.evolve(title="Other")["title"]
'Other'
>>> doc["title"]
'About'
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import typing as typ


class Document(cabc.Mapping[str, typ.Any]):
    """Immutable mapping describing one parsed source document.

    Structural keys are ``source_path``, ``url``, ``content`` and, when a cut
    marker was found, ``excerpt`` and ``more``. Every other key comes from the
    document's front matter.
    """

    __slots__ = ("_fields",)

    def __init__(self, fields: cabc.Mapping[str, typ.Any] | None = None) -> None:
        self._fields: dict[str, typ.Any] = dict(fields or {})

    def __getitem__(self, key: str) -> typ.Any:
        return self._fields[key]

    def __iter__(self) -> cabc.Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._fields!r})"

    @property
    def source_path(self) -> str | None:
        return self._fields.get("source_path")

    @property
    def url(self) -> str | None:
        return self._fields.get("url")

    @property
    def content(self) -> str | None:
        return self._fields.get("content")

    @property
    def excerpt(self) -> str | None:
        return self._fields.get("excerpt")

    @property
    def more(self) -> str | None:
        return self._fields.get("more")

    @property
    def layout(self) -> str | None:
        return self._fields.get("layout")

    def evolve(self, **fields: typ.Any) -> typ.Self:
        """Return a copy of this record with ``fields`` replaced or added."""
        return type(self)({**self._fields, **fields})


class ListingPage(Document):
    """Synthetic document representing one page of a paginated listing."""

    __slots__ = ()

    @property
    def documents(self) -> list[Document]:
        return self._fields.get("documents", [])

    @property
    def previous_url(self) -> str | None:
        return self._fields.get("previous_url")

    @property
    def next_url(self) -> str | None:
        return self._fields.get("next_url")

    @property
    def page_number(self) -> int | None:
        return self._fields.get("page_number")


@dc.dataclass(frozen=True, slots=True)
class Page:
    """Rendered output for a single document.

    Attributes
    ----------
    page_path : str
        Output path relative to the output folder, without an extension.
    content : str
        Rendered template text.
    """

    page_path: str
    content: str


__all__ = ["Document", "ListingPage", "Page"]
