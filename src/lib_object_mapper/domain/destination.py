"""Destination specification variants.

Purpose
-------
Replace inference from ambiguous argument shapes with an explicit tagged
variant that says how the destination object is obtained and which model
drives configuration lookup and the field set.

Contents
--------
* :class:`NewInstance` – construct a fresh default instance of ``model``.
* :class:`ExistingInstance` – enrich ``target`` in place; model inferred.
* :class:`ExistingInstanceWithType` – enrich ``target`` in place using the
  explicitly supplied ``model``.
* :func:`resolve_destination` – converts the ``map(source, destination,
  destination_type)`` call shape into one of the variants.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Union

from .errors import UnresolvableDestinationTypeError


@dataclass(frozen=True, slots=True)
class NewInstance:
    """Map into a newly constructed instance of ``model``."""

    model: type


@dataclass(frozen=True, slots=True)
class ExistingInstance:
    """Map into ``target``; its runtime type is the destination model."""

    target: Any


@dataclass(frozen=True, slots=True)
class ExistingInstanceWithType:
    """Map into ``target`` using ``model`` for configuration and field set.

    ``target`` keeps its own type; it may even be a plain ``dict``.
    """

    target: Any
    model: type


DestinationSpec = Union[NewInstance, ExistingInstance, ExistingInstanceWithType]
DESTINATION_SPECS = (NewInstance, ExistingInstance, ExistingInstanceWithType)


def resolve_destination(
    destination: Any,
    destination_type: type | None = None,
    *,
    is_anonymous: Callable[[Any], bool],
) -> DestinationSpec:
    """Return the destination variant described by the legacy call shape.

    Why
    ----
    ``map`` accepts either a model or an existing object as destination. The
    decision is made once here so the engine only deals with explicit variants.

    Parameters
    ----------
    destination:
        A model class, an existing object, or an already built variant.
    destination_type:
        Optional explicit model for an existing destination object.
    is_anonymous:
        Predicate identifying plain data values whose field set is unknown.

    Raises
    ------
    UnresolvableDestinationTypeError
        When *destination* is ``None``, or an anonymous destination is passed
        without ``destination_type``.

    Examples
    --------
    >>> class Person:
    ...     pass
    >>> resolve_destination(Person, is_anonymous=lambda obj: isinstance(obj, dict))
    NewInstance(model=<class 'lib_object_mapper.domain.destination.Person'>)
    >>> resolve_destination({}, is_anonymous=lambda obj: isinstance(obj, dict))
    Traceback (most recent call last):
    ...
    lib_object_mapper.domain.errors.UnresolvableDestinationTypeError: Unable to determine destination type. Supply the destination as a model class or pass destination_type explicitly.
    """

    if destination is None:
        raise UnresolvableDestinationTypeError(
            "Destination is None. Supply a model class or an existing object to populate."
        )
    if isinstance(destination, DESTINATION_SPECS):
        if destination_type is not None:
            raise TypeError("destination_type cannot be combined with an explicit destination specification")
        return destination
    if isinstance(destination, type):
        return NewInstance(destination)
    if destination_type is not None:
        return ExistingInstanceWithType(destination, destination_type)
    if is_anonymous(destination):
        raise UnresolvableDestinationTypeError(
            "Unable to determine destination type. Supply the destination as a model class "
            "or pass destination_type explicitly."
        )
    return ExistingInstance(destination)


__all__ = [
    "DESTINATION_SPECS",
    "DestinationSpec",
    "ExistingInstance",
    "ExistingInstanceWithType",
    "NewInstance",
    "resolve_destination",
]
