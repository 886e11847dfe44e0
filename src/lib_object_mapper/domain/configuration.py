"""Immutable mapping configuration for one (source, destination) type pair.

Purpose
-------
Hold the field rules registered for a type pair in a read-only value object
that the engine can consult many times without synchronisation. The object is
produced by :class:`lib_object_mapper.application.builder.MappingBuilder` and
never mutated afterwards.

Contents
--------
* :class:`MappingConfiguration` – frozen set of ignored fields plus a read-only
  mapping of field factories.
* :data:`EMPTY_CONFIGURATION` – configuration without rules, used for
  anonymous sources that have nothing registered.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import AbstractSet

from .errors import DuplicateFieldRuleError
from .rules import ALL_FIELDS, IGNORE, Factory, FactoryRule, FieldRule


@dataclass(frozen=True, slots=True)
class MappingConfiguration:
    """Field rules for a single type pair.

    Why
    ----
    The engine must decide per destination field whether to skip it, compute
    it, or copy it by name. Keeping the rules in a frozen object removes any
    chance of observing a half-built configuration.

    Parameters
    ----------
    ignored_fields:
        Destination field names that are never written.
    field_factories:
        Destination field names mapped to ``factory(source, destination)``.

    Examples
    --------
    >>> config = MappingConfiguration({"id"}, {"name": lambda src, dst: src["n"]})
    >>> config.rule_for("id")
    IgnoreRule()
    >>> config.rule_for("email") is None
    True
    >>> MappingConfiguration({"id"}, {"id": lambda src, dst: 1})
    Traceback (most recent call last):
    ...
    lib_object_mapper.domain.errors.DuplicateFieldRuleError: Field 'id' is both ignored and mapped by a factory
    """

    ignored_fields: AbstractSet[str] = field(default_factory=frozenset)
    field_factories: Mapping[str, Factory] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "ignored_fields", frozenset(self.ignored_fields))
        object.__setattr__(self, "field_factories", MappingProxyType(dict(self.field_factories)))
        overlap = sorted(self.ignored_fields.intersection(self.field_factories))
        if overlap:
            raise DuplicateFieldRuleError(f"Field '{overlap[0]}' is both ignored and mapped by a factory")

    def rule_for(self, name: str) -> FieldRule | None:
        """Return the rule governing destination field *name*.

        Exact field names are consulted before the :data:`ALL_FIELDS`
        catch-all. ``None`` means the default convention applies.
        """

        exact = self._lookup(name)
        if exact is not None:
            return exact
        return self._lookup(ALL_FIELDS)

    def is_empty(self) -> bool:
        return not self.ignored_fields and not self.field_factories

    def _lookup(self, name: str) -> FieldRule | None:
        if name in self.ignored_fields:
            return IGNORE
        factory = self.field_factories.get(name)
        if factory is not None:
            return FactoryRule(factory)
        return None


EMPTY_CONFIGURATION = MappingConfiguration()


__all__ = ["EMPTY_CONFIGURATION", "MappingConfiguration"]
