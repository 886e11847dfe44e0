"""Domain-level exception hierarchy.

Purpose
-------
Expose the stable error taxonomy shared by the builder, the registry, the
mapping engine, and consuming applications. The hierarchy lives in the domain
layer so outer layers may depend on it without creating import cycles.

Contents
--------
* :class:`MapperError` – umbrella base class for all mapping-related issues.
* :class:`DuplicateMappingError` / :class:`DuplicateFieldRuleError` /
  :class:`ConfigurationFrozenError` – configuration-time failures.
* :class:`MissingMappingError` / :class:`UnbuiltMappingError` /
  :class:`UnresolvableDestinationTypeError` /
  :class:`DestinationConstructionError` – map-time failures.
* :class:`InvalidSettings` – settings outside their allowed domain.
* :class:`InvalidPayload` / :class:`PayloadNotFound` – payload files used by
  the CLI adapter.

System Role
-----------
Every failure is raised synchronously to the immediate caller. Callers catch
:class:`MapperError` to handle all library failures uniformly.
"""

from __future__ import annotations


class MapperError(Exception):
    """Base type for all exceptions emitted by ``lib_object_mapper``.

    Why
    ----
    Provide a single catch-all type for consumers that do not need fine-grained
    handling.
    """


class DuplicateMappingError(MapperError):
    """Raised when a configuration already exists for a (source, destination) pair.

    The first configuration stays registered and usable; configurations are
    immutable once created.
    """


class DuplicateFieldRuleError(MapperError):
    """Raised when a rule for the same destination field is declared twice."""


class ConfigurationFrozenError(MapperError):
    """Raised when a builder is used after :meth:`MappingBuilder.build`."""


class MissingMappingError(MapperError):
    """Raised when a named source type has no configuration for the destination.

    Why
    ----
    Explicit configuration is mandatory for named source types; only anonymous
    sources (``dict``, ``SimpleNamespace``) fall back to the default
    convention.
    """


class UnbuiltMappingError(MissingMappingError):
    """Raised when a pair was reserved by ``create_map`` but never built.

    The pair stays reserved, so a second ``create_map`` for it fails with
    :class:`DuplicateMappingError`; the pending builder must call ``build()``.
    """


class UnresolvableDestinationTypeError(MapperError):
    """Raised when the destination type cannot be derived from the call shape.

    Typical Sources
    ---------------
    Passing a bare ``dict`` as destination without an explicit destination
    type: the field set to populate is undiscoverable.
    """


class DestinationConstructionError(MapperError):
    """Raised when a destination model cannot be default-constructed."""


class InvalidSettings(MapperError):
    """Signifies that a settings value failed validation."""


class InvalidPayload(MapperError):
    """Raised when a payload file cannot be parsed into mapping records."""


class PayloadNotFound(MapperError):
    """Represents a missing payload file or an unavailable parser."""
