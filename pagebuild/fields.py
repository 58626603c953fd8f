"""Custom front matter field parsers.

A field parser is a pure callable that receives the raw front matter value for
one field (``None`` when the field is absent) and returns the value documents
should carry instead. :func:`parse_fields` applies a mapping of such parsers to
a document's raw fields.

Examples
--------
>>> from pagebuild.fields import parse_fields, parse_tags
>>> parse_fields({"title": "Hi", "tags": "a, b"}, {"tags": parse_tags})
{'title': 'Hi', 'tags': ['a', 'b']}
"""

from __future__ import annotations

import collections.abc as cabc
import datetime as dt
import re
import types
import typing as typ

from .errors import FieldParseError

FieldParser = cabc.Callable[[typ.Any], typ.Any]

TAG_SEPARATOR_PATTERN = re.compile(r"\s*,\s*")


def parse_fields(
    raw_fields: cabc.Mapping[str, typ.Any],
    parsers: cabc.Mapping[str, FieldParser],
) -> dict[str, typ.Any]:
    """Return ``raw_fields`` with every field named in ``parsers`` transformed.

    Parameters
    ----------
    raw_fields : Mapping[str, Any]
        Front matter attributes as produced by the splitter.
    parsers : Mapping[str, FieldParser]
        Field name to transform. Each transform is called even when the field
        is missing from ``raw_fields`` so parsers can supply defaults.

    Returns
    -------
    dict[str, Any]
        A new mapping; parser results replace the raw values.

    Raises
    ------
    FieldParseError
        If a parser raises; the original exception is chained.
    """
    parsed: dict[str, typ.Any] = dict(raw_fields)
    for name, parser in parsers.items():
        try:
            parsed[name] = parser(raw_fields.get(name))
        except Exception as exc:
            raise FieldParseError(name, str(exc)) from exc
    return parsed


def parse_date(value: dt.datetime | dt.date | str | None) -> dt.datetime | None:
    """Return a timezone-aware UTC datetime parsed from ``value``, or None.

    Raises
    ------
    ValueError
        If ``value`` is a non-empty string that is not ISO-8601.
    TypeError
        If ``value`` has an unsupported type.
    """
    match value:
        case None:
            return None
        case dt.datetime():
            parsed = value
        case dt.date():
            parsed = dt.datetime(value.year, value.month, value.day)
        case str() as text:
            sanitized = text.strip()
            if not sanitized:
                return None
            if sanitized.endswith("Z"):
                sanitized = sanitized[:-1] + "+00:00"
            parsed = dt.datetime.fromisoformat(sanitized)
        case _:
            msg = f"Unsupported date value {value!r}"
            raise TypeError(msg)
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=dt.UTC)
    return parsed.astimezone(dt.UTC)


def parse_tags(value: str | cabc.Iterable[object] | None) -> list[str]:
    """Normalize tag definitions into a list of non-empty strings."""
    if value is None:
        return []
    if isinstance(value, str):
        segments = TAG_SEPARATOR_PATTERN.split(value.strip())
        return [segment for segment in segments if segment]
    normalized: list[str] = []
    for segment in value:
        text = str(segment).strip()
        if text:
            normalized.append(text)
    return normalized


STANDARD_FIELD_PARSERS: cabc.Mapping[str, FieldParser] = types.MappingProxyType(
    {"date": parse_date, "tags": parse_tags}
)


__all__ = [
    "STANDARD_FIELD_PARSERS",
    "FieldParser",
    "parse_date",
    "parse_fields",
    "parse_tags",
]
