"""Default model introspection adapter.

Purpose
-------
Implement :class:`lib_object_mapper.application.ports.ModelIntrospector` on top
of Python's own object model: dataclasses, classes with ``__slots__``, classes
with class-level annotations and plain classes whose ``__init__`` assigns
instance attributes. Plain data values (mappings and
:class:`types.SimpleNamespace`) are treated as anonymous.

Key behaviours
--------------
* Default construction fills required ``__init__`` parameters with ``None``
  so models with constructor arguments still have a no-argument path.
* Field enumeration keeps declaration order and skips ``_private`` names
  unless ``include_private_fields`` is set.
* Field names are cached per model after the first enumeration.
"""

from __future__ import annotations

import dataclasses
import inspect
import typing
from collections.abc import Mapping, MutableMapping
from types import SimpleNamespace
from typing import Any, ClassVar, Iterable

from ...domain.errors import DestinationConstructionError
from ...domain.rules import read_source_field
from ...observability import log_debug, make_event

_MISSING = object()


class DefaultIntrospector:
    """Reflect over Python models to construct them and access their fields.

    Examples
    --------
    >>> from dataclasses import dataclass
    >>> @dataclass
    ... class Person:
    ...     first_name: str
    ...     last_name: str
    ...     _token: str = ""
    >>> introspector = DefaultIntrospector()
    >>> introspector.field_names(Person)
    ('first_name', 'last_name')
    >>> introspector.construct(Person)
    Person(first_name=None, last_name=None, _token='')
    >>> introspector.is_anonymous({"first_name": "Ada"}), introspector.is_anonymous(Person("a", "b"))
    (True, False)
    """

    def __init__(self, *, include_private_fields: bool = False) -> None:
        self._include_private_fields = include_private_fields
        self._field_cache: dict[type, tuple[str, ...]] = {}

    def construct(self, model: type) -> Any:
        """Return a new default instance of *model*.

        Raises
        ------
        DestinationConstructionError
            When the constructor raises for the placeholder arguments, whatever
            the exception type; the original exception is chained.
        """

        args, kwargs = _placeholder_arguments(model)
        try:
            return model(*args, **kwargs)
        except Exception as exc:  # noqa: BLE001 - any constructor failure on placeholders
            raise DestinationConstructionError(
                f"Cannot construct a default instance of {model.__name__}: {exc}"
            ) from exc

    def field_names(self, model: type) -> tuple[str, ...]:
        cached = self._field_cache.get(model)
        if cached is not None:
            return cached
        names = tuple(name for name in _dedupe(self._declared_fields(model)) if self._is_visible(name))
        self._field_cache[model] = names
        log_debug("model_fields_resolved", **make_event(None, model, {"fields": list(names)}))
        return names

    def type_of(self, instance: Any) -> type:
        return type(instance)

    def is_anonymous(self, instance: Any) -> bool:
        return isinstance(instance, Mapping) or type(instance) is SimpleNamespace

    def has_field(self, instance: Any, name: str) -> bool:
        if isinstance(instance, Mapping):
            return name in instance
        return read_source_field(instance, name, _MISSING) is not _MISSING

    def read_field(self, instance: Any, name: str) -> Any:
        return read_source_field(instance, name)

    def write_field(self, instance: Any, name: str, value: Any) -> None:
        if isinstance(instance, MutableMapping):
            instance[name] = value
        else:
            setattr(instance, name, value)

    def _declared_fields(self, model: type) -> list[str]:
        if dataclasses.is_dataclass(model):
            return [field.name for field in dataclasses.fields(model)]
        names = _slot_names(model)
        names.extend(_annotated_names(model))
        instance = self.construct(model)
        if hasattr(instance, "__dict__"):
            names.extend(vars(instance))
        return names

    def _is_visible(self, name: str) -> bool:
        return self._include_private_fields or not name.startswith("_")


def _placeholder_arguments(model: type) -> tuple[list[Any], dict[str, Any]]:
    """Return ``None`` placeholders for every required constructor parameter.

    Examples
    --------
    >>> class Point:
    ...     def __init__(self, x, y=0, *, label):
    ...         pass
    >>> _placeholder_arguments(Point)
    ([None], {'label': None})
    """

    try:
        signature = inspect.signature(model)
    except (TypeError, ValueError):
        return [], {}
    args: list[Any] = []
    kwargs: dict[str, Any] = {}
    for parameter in signature.parameters.values():
        if parameter.default is not inspect.Parameter.empty:
            continue
        if parameter.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD):
            args.append(None)
        elif parameter.kind is inspect.Parameter.KEYWORD_ONLY:
            kwargs[parameter.name] = None
    return args, kwargs


def _slot_names(model: type) -> list[str]:
    names: list[str] = []
    for klass in reversed(model.__mro__):
        slots = klass.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        names.extend(slot for slot in slots if slot not in {"__dict__", "__weakref__"})
    return names


def _annotated_names(model: type) -> list[str]:
    """Return class-level annotated attribute names, base classes first.

    ``ClassVar`` annotations are not instance fields and are skipped.

    Examples
    --------
    >>> from typing import ClassVar, Optional
    >>> class Account:
    ...     kind: ClassVar[str] = "account"
    ...     owner: Optional[str] = None
    ...     balance: int
    >>> _annotated_names(Account)
    ['owner', 'balance']
    """

    try:
        hints: dict[str, Any] = typing.get_type_hints(model)
    except (NameError, TypeError):
        # unresolvable forward references: fall back to the raw annotations
        hints = {}
        for klass in reversed(model.__mro__):
            hints.update(klass.__dict__.get("__annotations__", {}))
    return [name for name, hint in hints.items() if not _is_class_var(hint)]


def _is_class_var(hint: Any) -> bool:
    if isinstance(hint, str):
        return hint.startswith(("ClassVar", "typing.ClassVar"))
    return hint is ClassVar or typing.get_origin(hint) is ClassVar


def _dedupe(names: Iterable[str]) -> list[str]:
    return list(dict.fromkeys(names))


__all__ = ["DefaultIntrospector"]
