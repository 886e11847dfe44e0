"""Field rules describing how one destination field obtains its value.

Purpose
-------
Model the three outcomes a destination field can have during mapping: it is
ignored, it is computed by a factory, or (when no rule exists) it follows the
default naming convention handled by the engine.

Contents
--------
* :data:`ALL_FIELDS` – catch-all sentinel used by ``for_all()``.
* :class:`IgnoreRule` / :class:`FactoryRule` – the two explicit rule kinds.
* :class:`SourceField` – factory reading a named field off the source.
* :class:`Constant` – factory returning a fixed value.
* :func:`read_source_field` – shared helper for Mapping and attribute sources.
"""

from __future__ import annotations

import inspect
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable, Final, Union

Factory = Callable[[Any, Any], Any]

ALL_FIELDS: Final[str] = "*"
"""Sentinel field name for the catch-all rule.

Exact field names always take precedence over the catch-all entry, whatever
the declaration order was.
"""


@dataclass(frozen=True, slots=True)
class IgnoreRule:
    """Leave the destination field untouched.

    Existing destinations keep their current value; freshly constructed
    destinations keep the model's default.
    """


@dataclass(frozen=True, slots=True)
class FactoryRule:
    """Write ``factory(source, destination)`` into the destination field."""

    factory: Factory

    def evaluate(self, source: Any, destination: Any) -> Any:
        return self.factory(source, destination)


FieldRule = Union[IgnoreRule, FactoryRule]

IGNORE: Final[IgnoreRule] = IgnoreRule()


@dataclass(frozen=True, slots=True)
class SourceField:
    """Factory equivalent to reading ``name`` off the source object.

    Examples
    --------
    >>> SourceField("userId")({"userId": 7}, None)
    7
    >>> SourceField("missing")({"userId": 7}, None) is None
    True
    """

    name: str

    def __call__(self, source: Any, destination: Any) -> Any:
        return read_source_field(source, self.name)


@dataclass(frozen=True, slots=True)
class Constant:
    """Factory returning ``value`` for every mapped element."""

    value: Any

    def __call__(self, source: Any, destination: Any) -> Any:
        return self.value


def read_source_field(source: Any, name: str, default: Any = None) -> Any:
    """Return ``name`` from *source* or *default* when the field does not exist.

    Mapping sources are read by key, every other source by attribute. Bound
    methods are behaviour, not data, and therefore count as absent.

    Examples
    --------
    >>> from types import SimpleNamespace
    >>> read_source_field(SimpleNamespace(first="Ada"), "first")
    'Ada'
    >>> read_source_field({"first": "Ada"}, "last", default="?")
    '?'
    """

    if isinstance(source, Mapping):
        return source.get(name, default)
    value = getattr(source, name, default)
    if inspect.ismethod(value):
        return default
    return value


def make_factory(source_or_factory: str | Factory) -> Factory:
    """Normalise the argument of ``map_from`` into a factory callable.

    Examples
    --------
    >>> make_factory("userId")
    SourceField(name='userId')
    >>> make_factory(42)
    Traceback (most recent call last):
    ...
    TypeError: map_from expects a source field name or a callable, got int
    """

    if isinstance(source_or_factory, str):
        if not source_or_factory:
            raise ValueError("map_from expects a non-empty source field name")
        return SourceField(source_or_factory)
    if callable(source_or_factory):
        return source_or_factory
    raise TypeError(
        f"map_from expects a source field name or a callable, got {type(source_or_factory).__name__}"
    )


__all__ = [
    "ALL_FIELDS",
    "Constant",
    "Factory",
    "FactoryRule",
    "FieldRule",
    "IGNORE",
    "IgnoreRule",
    "SourceField",
    "make_factory",
    "read_source_field",
]
