"""Mapping engine: resolves destinations and applies field rules.

Purpose
-------
Transform a source value into a destination object using the configuration
registered for the ``(source type, destination type)`` pair, or the default
naming convention for anonymous sources.

Contents
    - ``MappingEngine.map``: public entry point covering single values and
      plain sequences.
    - ``MappingEngine.map_one``: the per-element algorithm driven by an
      explicit destination variant.
    - ``_materialise`` / ``_configuration_for`` / ``_resolve_values``: the
      three steps of ``map_one`` kept small so precedence reads top-down.

Precedence per destination field
    1. ignored -> not written;
    2. factory -> ``factory(source, destination)``;
    3. default -> same-named source field; ``None`` when the source lacks it
       (``missing_source_fields="skip"`` leaves the field untouched instead).

All values are resolved against the destination as passed in before any of
them is written, so no field observes another field's new value. Writing is
not transactional: a failing assignment leaves earlier fields written.
"""

from __future__ import annotations

from typing import Any, Iterable

from ..domain.configuration import EMPTY_CONFIGURATION, MappingConfiguration
from ..domain.destination import (
    DestinationSpec,
    ExistingInstance,
    ExistingInstanceWithType,
    NewInstance,
    resolve_destination,
)
from ..domain.errors import MissingMappingError, UnbuiltMappingError, UnresolvableDestinationTypeError
from ..domain.rules import FactoryRule, IgnoreRule
from ..domain.settings import DEFAULT_SETTINGS, MISSING_SKIP, MapperSettings
from ..observability import log_debug, log_error, make_event, type_name
from .ports import ConfigurationStore, ModelIntrospector

SEQUENCE_TYPES = (list, tuple)


class MappingEngine:
    """Run-time half of the mapper.

    Parameters
    ----------
    store:
        Registry consulted for configurations (read-only from here).
    introspector:
        Host object model capabilities.
    settings:
        Behaviour for source fields that do not exist.
    """

    def __init__(
        self,
        store: ConfigurationStore,
        introspector: ModelIntrospector,
        settings: MapperSettings = DEFAULT_SETTINGS,
    ) -> None:
        self._store = store
        self._introspector = introspector
        self._settings = settings

    def map(self, source: Any, destination: Any, destination_type: type | None = None) -> Any:
        """Map *source* into the destination described by the call shape.

        ``list``/``tuple`` sources are mapped element by element into a list
        of the same length and order. Any element failure aborts the batch.
        """

        if isinstance(source, SEQUENCE_TYPES):
            return self.map_many(source, destination, destination_type)
        try:
            spec = resolve_destination(destination, destination_type, is_anonymous=self._introspector.is_anonymous)
        except UnresolvableDestinationTypeError:
            log_error(
                "destination_unresolvable",
                **make_event(self._introspector.type_of(source), None, {"destination_value": type_name(type(destination))}),
            )
            raise
        return self.map_one(source, spec)

    def map_many(self, sources: Iterable[Any], destination: Any, destination_type: type | None = None) -> list[Any]:
        results = [self.map(item, destination, destination_type) for item in sources]
        log_debug("batch_mapped", source=None, destination=_describe(destination, destination_type), count=len(results))
        return results

    def map_one(self, source: Any, spec: DestinationSpec) -> Any:
        """Map a single *source* into the destination described by *spec*."""

        destination, model = self._materialise(spec)
        source_type = self._introspector.type_of(source)
        configuration = self._configuration_for(source, source_type, model)
        values = self._resolve_values(source, destination, model, configuration)
        for name, value in values.items():
            self._introspector.write_field(destination, name, value)
        log_debug("object_mapped", **make_event(source_type, model, {"fields": sorted(values)}))
        return destination

    def _materialise(self, spec: DestinationSpec) -> tuple[Any, type]:
        """Return ``(destination_object, destination_model)`` for *spec*."""

        if isinstance(spec, NewInstance):
            return self._introspector.construct(spec.model), spec.model
        if isinstance(spec, ExistingInstanceWithType):
            return spec.target, spec.model
        if isinstance(spec, ExistingInstance):
            return spec.target, self._introspector.type_of(spec.target)
        raise TypeError(f"Unsupported destination specification: {spec!r}")

    def _configuration_for(self, source: Any, source_type: type, model: type) -> MappingConfiguration:
        configuration = self._store.find(source_type, model)
        if configuration is not None:
            return configuration
        if self._store.is_pending(source_type, model):
            log_error("mapping_unbuilt", **make_event(source_type, model))
            raise UnbuiltMappingError(
                f"Mapping for {source_type.__name__} -> {model.__name__} was created with create_map(...) "
                "but never built. Call .build() on the builder returned by create_map"
            )
        if self._introspector.is_anonymous(source):
            return EMPTY_CONFIGURATION
        log_error("mapping_missing", **make_event(source_type, model))
        raise MissingMappingError(
            f"Mapping missing for {source_type.__name__} -> {model.__name__} but required unless the "
            "source is anonymous. Create it with create_map(...).build()"
        )

    def _resolve_values(
        self,
        source: Any,
        destination: Any,
        model: type,
        configuration: MappingConfiguration,
    ) -> dict[str, Any]:
        values: dict[str, Any] = {}
        for name in self._introspector.field_names(model):
            rule = configuration.rule_for(name)
            if isinstance(rule, IgnoreRule):
                continue
            if isinstance(rule, FactoryRule):
                values[name] = rule.evaluate(source, destination)
            elif self._introspector.has_field(source, name):
                values[name] = self._introspector.read_field(source, name)
            elif self._settings.missing_source_fields != MISSING_SKIP:
                values[name] = None
        return values


def _describe(destination: Any, destination_type: type | None) -> str | None:
    if destination_type is not None:
        return type_name(destination_type)
    if isinstance(destination, type):
        return type_name(destination)
    return type_name(type(destination))


__all__ = ["MappingEngine", "SEQUENCE_TYPES"]
