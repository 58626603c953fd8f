"""Filter, order and group document collections.

Every function returns a new collection and leaves its input untouched, so one
loaded document set can feed several listings within the same build.

Examples
--------
>>> import re
>>> from pagebuild.documents import Document
>>> from pagebuild.query import filter_documents, group_documents, order_documents
>>> docs = [
...     Document({"url": "/posts/b", "lang": "en", "tags": ["x"], "date": 2}),
...     Document({"url": "/posts/a", "lang": "en", "tags": ["x", "y"], "date": 1}),
...     Document({"url": "/about", "lang": "ru"}),
... ]
>>> [d.url for d in filter_documents(docs, {"lang": "en", "url": re.compile("^/posts/")})]
['/posts/b', '/posts/a']
>>> [d.url for d in order_documents(docs[:2], ["date"])]
['/posts/a', '/posts/b']
>>> {tag: len(items) for tag, items in group_documents(docs, "tags").items()}
{'x': 2, 'y': 1}
"""

from __future__ import annotations

import collections.abc as cabc
import datetime as dt
import re
import typing as typ

from ._constants import DESCENDING_MARKER

if typ.TYPE_CHECKING:
    from .documents import Document

_MISSING = object()


def _matches(document: Document, field: str, expected: typ.Any) -> bool:
    """Return True when ``document[field]`` satisfies ``expected``."""
    actual = document.get(field, _MISSING)
    if isinstance(expected, re.Pattern):
        if actual is _MISSING or actual is None:
            return False
        return expected.search(str(actual)) is not None
    if actual is _MISSING:
        return expected is None
    return actual == expected


def filter_documents(
    documents: cabc.Iterable[Document], criteria: cabc.Mapping[str, typ.Any]
) -> list[Document]:
    """Return the documents that satisfy every criterion.

    Parameters
    ----------
    documents : Iterable[Document]
        Documents to test.
    criteria : Mapping[str, Any]
        Field name to expected value. A compiled regular expression is
        searched in the string form of the field; any other value must be
        equal to the field. A missing field only matches a ``None`` value.

    Returns
    -------
    list[Document]
        Matching documents in input order.
    """
    return [
        document
        for document in documents
        if all(
            _matches(document, field, expected)
            for field, expected in criteria.items()
        )
    ]


def _parse_sort_key(entry: str) -> tuple[str, bool]:
    """Split ``"-date"`` into ``("date", True)``."""
    if entry.startswith(DESCENDING_MARKER):
        return entry[len(DESCENDING_MARKER) :], True
    return entry, False


def _comparable(value: typ.Any) -> tuple[int, typ.Any]:
    """Rank ``value`` by kind so mixed YAML scalars still sort."""
    match value:
        case bool() | int() | float():
            return 0, value
        case dt.datetime():
            return 1, value if value.tzinfo else value.replace(tzinfo=dt.UTC)
        case dt.date():
            return 1, dt.datetime(value.year, value.month, value.day, tzinfo=dt.UTC)
        case str():
            return 2, value
        case _:
            return 3, str(value)


def _sort_key(field: str) -> cabc.Callable[[Document], tuple[typ.Any, ...]]:
    def _key(document: Document) -> tuple[typ.Any, ...]:
        value = document.get(field)
        if value is None:
            return (True,)
        return (False, *_comparable(value))

    return _key


def order_documents(
    documents: cabc.Iterable[Document], fields: cabc.Sequence[str]
) -> list[Document]:
    """Return documents sorted by ``fields``.

    Each entry is a field name, prefixed with ``-`` for descending order.
    Sorting is stable, so documents with equal keys keep their input order.
    Documents without a value sort last in ascending order and first in
    descending order. Mixed value types never raise: numbers sort before
    dates and datetimes (compared as UTC), which sort before strings, and
    any other value sorts last by its string form.
    """
    ordered = list(documents)
    for entry in reversed(fields):
        field, descending = _parse_sort_key(entry)
        ordered.sort(key=_sort_key(field), reverse=descending)
    return ordered


def group_documents(
    documents: cabc.Iterable[Document], field: str
) -> dict[typ.Any, list[Document]]:
    """Group documents by the values of ``field``.

    A document whose field holds a list or tuple is added to the group of
    every element, so a post tagged ``["a", "b"]`` appears under both tags.
    Documents without the field are left out. Groups and their members keep
    encounter order.
    """
    grouped: dict[typ.Any, list[Document]] = {}
    for document in documents:
        if field not in document:
            continue
        value = document[field]
        keys = value if isinstance(value, list | tuple) else (value,)
        for key in keys:
            grouped.setdefault(key, []).append(document)
    return grouped


__all__ = ["filter_documents", "group_documents", "order_documents"]
