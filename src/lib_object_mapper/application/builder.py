"""Fluent builder for mapping configurations.

Purpose
-------
Let callers declare field rules for a type pair in a readable chain and
freeze the result into an immutable :class:`MappingConfiguration`.

Contents
--------
* :class:`FieldRuleHandle` – one-shot handle for a single destination field.
* :class:`MappingBuilder` – ordered accumulator of field declarations with an
  explicit :meth:`MappingBuilder.build` step.

System Role
-----------
:meth:`lib_object_mapper.core.Mapper.create_map` reserves the type pair in
the registry and returns a builder. Nothing becomes visible to ``map`` until
``build()`` inserts the frozen configuration.

Examples
--------
>>> from lib_object_mapper.application.registry import MappingRegistry
>>> class Row: pass
>>> class User: pass
>>> registry = MappingRegistry()
>>> config = (
...     MappingBuilder(Row, User, registry)
...     .for_field("id").map_from("userId")
...     .for_field("audit").ignore()
...     .build()
... )
>>> sorted(config.field_factories), sorted(config.ignored_fields)
(['id'], ['audit'])
>>> registry.find(Row, User) is config
True
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from ..domain.configuration import MappingConfiguration
from ..domain.errors import ConfigurationFrozenError, DuplicateFieldRuleError
from ..domain.rules import ALL_FIELDS, IGNORE, Constant, Factory, FactoryRule, FieldRule, IgnoreRule, make_factory
from .ports import ConfigurationStore

S = TypeVar("S")
D = TypeVar("D")


class FieldRuleHandle(Generic[S, D]):
    """Describe how one destination field of the owning builder is resolved.

    Every terminal method returns the owning builder so chains can continue.
    A handle accepts a single terminal call.
    """

    def __init__(self, builder: "MappingBuilder[S, D]", destination_field: str) -> None:
        self._builder = builder
        self._destination_field = destination_field

    @property
    def destination_field(self) -> str:
        return self._destination_field

    def ignore(self) -> "MappingBuilder[S, D]":
        """Exclude the field from mapping.

        Fresh destinations keep the model default; existing destinations keep
        their current value.
        """

        return self._builder._declare(self._destination_field, IGNORE)

    def map_from(self, source_or_factory: str | Factory) -> "MappingBuilder[S, D]":
        """Resolve the field from a source field name or a factory.

        Parameters
        ----------
        source_or_factory:
            Name of the source field to read, or ``factory(source, destination)``
            whose return value is written. Factories may call the mapper again
            to map nested objects.
        """

        return self._builder._declare(self._destination_field, FactoryRule(make_factory(source_or_factory)))

    def constant(self, value: Any) -> "MappingBuilder[S, D]":
        """Set the field to *value* for every mapped element."""

        return self._builder._declare(self._destination_field, FactoryRule(Constant(value)))


class MappingBuilder(Generic[S, D]):
    """Accumulate field declarations for one type pair.

    Parameters
    ----------
    source_type / destination_type:
        The ordered pair this builder configures.
    store:
        Registry receiving the configuration on :meth:`build`.
    reserved:
        ``True`` when the pair was reserved in *store* beforehand.
    """

    def __init__(
        self,
        source_type: type[S],
        destination_type: type[D],
        store: ConfigurationStore,
        *,
        reserved: bool = False,
    ) -> None:
        self.source_type = source_type
        self.destination_type = destination_type
        self._store = store
        self._reserved = reserved
        self._declarations: dict[str, FieldRule | None] = {}
        self._configuration: MappingConfiguration | None = None

    @property
    def built(self) -> bool:
        return self._configuration is not None

    def for_field(self, destination_field: str) -> FieldRuleHandle[S, D]:
        """Open the rule declaration for *destination_field*.

        Raises
        ------
        DuplicateFieldRuleError
            When the field was already declared on this builder.
        """

        self._ensure_open()
        if not isinstance(destination_field, str) or not destination_field:
            raise ValueError("destination field name must be a non-empty string")
        if destination_field in self._declarations:
            raise DuplicateFieldRuleError(f"Mapping already configured for field '{destination_field}'")
        self._declarations[destination_field] = None
        return FieldRuleHandle(self, destination_field)

    def for_all(self) -> FieldRuleHandle[S, D]:
        """Open the catch-all declaration.

        Typically paired with ``.ignore()`` to flip the default from copying
        every field to copying only explicitly declared ones.
        """

        return self.for_field(ALL_FIELDS)

    def build(self) -> MappingConfiguration:
        """Freeze the declarations and register them.

        Returns
        -------
        MappingConfiguration
            The immutable configuration now visible to the mapper.
        """

        self._ensure_open()
        ignored = {name for name, rule in self._declarations.items() if isinstance(rule, IgnoreRule)}
        factories = {
            name: rule.factory for name, rule in self._declarations.items() if isinstance(rule, FactoryRule)
        }
        configuration = MappingConfiguration(ignored, factories)
        self._store.insert(self.source_type, self.destination_type, configuration, reserved=self._reserved)
        self._configuration = configuration
        return configuration

    def _declare(self, destination_field: str, rule: FieldRule) -> "MappingBuilder[S, D]":
        self._ensure_open()
        if self._declarations.get(destination_field) is not None:
            raise DuplicateFieldRuleError(f"Mapping already configured for field '{destination_field}'")
        self._declarations[destination_field] = rule
        return self

    def _ensure_open(self) -> None:
        if self._configuration is not None:
            raise ConfigurationFrozenError(
                f"Mapping {self.source_type.__name__} -> {self.destination_type.__name__} is already built"
            )


__all__ = ["FieldRuleHandle", "MappingBuilder"]
