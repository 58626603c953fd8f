"""Recursive mapping merge shared by the config loader and context assembler.

Example
-------
>>> from pagebuild.merge import deep_merge
>>> deep_merge({"a": {"x": 1, "y": 2}, "l": [1, 2]}, {"a": {"y": 3}, "l": [9]})
{'a': {'x': 1, 'y': 3}, 'l': [9]}
"""

from __future__ import annotations

import collections.abc as cabc
import typing as typ


def deep_merge(*layers: cabc.Mapping[str, typ.Any]) -> dict[str, typ.Any]:
    """Merge ``layers`` left to right into a new dictionary.

    Parameters
    ----------
    *layers : Mapping[str, Any]
        Mappings to combine. Later layers win on key collisions.

    Returns
    -------
    dict[str, Any]
        A fresh dictionary. Nested mappings present on both sides are merged
        key by key; scalars and lists from the later layer replace the earlier
        value wholesale. Plain ``dict`` and ``list`` values are copied so the
        result never aliases containers owned by the inputs.
    """
    merged: dict[str, typ.Any] = {}
    for layer in layers:
        _merge_into(merged, layer)
    return merged


def _merge_into(
    target: dict[str, typ.Any], overlay: cabc.Mapping[str, typ.Any]
) -> None:
    """Merge ``overlay`` into ``target`` in place."""
    for key, value in overlay.items():
        current = target.get(key)
        if isinstance(value, cabc.Mapping) and isinstance(current, cabc.Mapping):
            target[key] = deep_merge(current, value)
        else:
            target[key] = _detach(value)


def _detach(value: typ.Any) -> typ.Any:
    """Return a copy of plain containers so merged results own their values."""
    match value:
        case dict():
            return deep_merge(value)
        case list():
            return [_detach(item) for item in value]
        case _:
            return value


__all__ = ["deep_merge"]
