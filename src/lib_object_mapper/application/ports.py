"""Application-layer ports describing adapter responsibilities.

Purpose
-------
Define the structural contracts the mapping engine relies on so it never
touches the host object model, the environment, or the filesystem directly.

Contents
--------
* :class:`ModelIntrospector` – constructs models and enumerates, reads, and
  writes their fields.
* :class:`ConfigurationStore` – the registry contract used by the builder and
  the engine.
* :class:`SettingsLoader` – materialises :class:`MapperSettings`.
* :class:`PayloadLoader` – parses structured payload files for the CLI.

System Role
-----------
These protocols enforce Dependency Inversion. Each adapter implements one
protocol so the application layer can request behaviour via abstraction.
"""

from __future__ import annotations

from typing import Any, Iterator, Mapping, Protocol, Sequence, Union, runtime_checkable

from ..domain.configuration import MappingConfiguration
from ..domain.settings import MapperSettings

Payload = Union[Mapping[str, object], Sequence[Mapping[str, object]]]


@runtime_checkable
class ModelIntrospector(Protocol):
    """Capability interface over the host object model.

    Methods
    -------
    :meth:`construct`
        Produce a default-initialised instance of a model.
    :meth:`field_names`
        Enumerate the public instance fields declared by a model.
    :meth:`type_of` / :meth:`is_anonymous`
        Recover the runtime model of an object and tell plain data values
        apart from named-model instances.
    :meth:`has_field` / :meth:`read_field` / :meth:`write_field`
        Field access for both attribute objects and mappings.
    """

    def construct(self, model: type) -> Any:
        """Return a new default instance of *model*."""

    def field_names(self, model: type) -> tuple[str, ...]:
        """Return the declared field names of *model* in declaration order."""

    def type_of(self, instance: Any) -> type:
        """Return the runtime model of *instance*."""

    def is_anonymous(self, instance: Any) -> bool:
        """Return ``True`` when *instance* is a plain untyped data value."""

    def has_field(self, instance: Any, name: str) -> bool:
        """Return ``True`` when *instance* exposes field *name*."""

    def read_field(self, instance: Any, name: str) -> Any:
        """Return the value of field *name* on *instance*."""

    def write_field(self, instance: Any, name: str, value: Any) -> None:
        """Assign *value* to field *name* on *instance*."""


@runtime_checkable
class ConfigurationStore(Protocol):
    """Append-only table of configurations keyed by ordered type pairs."""

    def find(self, source_type: type, destination_type: type) -> MappingConfiguration | None:
        """Return the configuration for the pair or ``None``."""

    def reserve(self, source_type: type, destination_type: type) -> None:
        """Claim the pair for a builder that has not been built yet."""

    def is_pending(self, source_type: type, destination_type: type) -> bool:
        """Return ``True`` when the pair is reserved but not yet built."""

    def insert(
        self,
        source_type: type,
        destination_type: type,
        configuration: MappingConfiguration,
        *,
        reserved: bool = False,
    ) -> None:
        """Register *configuration*; fails when the pair is already registered."""

    def pairs(self) -> Iterator[tuple[type, type]]:
        """Yield registered pairs in insertion order."""


@runtime_checkable
class SettingsLoader(Protocol):
    """Produce :class:`MapperSettings` from an external source."""

    def load(self, prefix: str) -> MapperSettings:
        """Return settings read from variables that start with *prefix*."""


@runtime_checkable
class PayloadLoader(Protocol):
    """Parse a structured payload file into source records."""

    def load(self, path: str) -> Payload:
        """Read *path* and return a mapping or a list of mappings."""
