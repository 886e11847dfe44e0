"""Composition root for ``lib_object_mapper``.

Purpose
-------
Wire the registry, the model introspector, the settings, and the mapping
engine into the :class:`Mapper` facade consumers call, and provide the
process-wide default instance.

Contents
--------
* :class:`Mapper` – ``create_map`` (build time) and ``map`` / ``map_many``
  (run time).
* :data:`mapper` – process-wide default mapper; its registry starts empty at
  import and lives as long as the process.
* :func:`load_settings` – settings from the environment.

System Role
-----------
This is the canonical place to swap adapters: pass a custom
``introspector`` or an isolated ``registry`` to :class:`Mapper`.

Examples
--------
>>> from dataclasses import dataclass
>>> @dataclass
... class Row:
...     user_id: int
...     name: str
>>> @dataclass
... class User:
...     id: int = 0
...     name: str = ""
>>> local = Mapper()
>>> _ = local.create_map(Row, User).for_field("id").map_from("user_id").build()
>>> local.map(Row(7, "Ada"), User)
User(id=7, name='Ada')
>>> local.map([Row(1, "a"), Row(2, "b")], User)
[User(id=1, name='a'), User(id=2, name='b')]
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping, TypeVar

from .adapters.env.default import DefaultSettingsLoader, default_env_prefix
from .adapters.introspection.default import DefaultIntrospector
from .application.builder import MappingBuilder
from .application.engine import MappingEngine
from .application.ports import ConfigurationStore, ModelIntrospector
from .application.registry import MappingRegistry
from .domain.settings import DEFAULT_SETTINGS, MapperSettings

S = TypeVar("S")
D = TypeVar("D")


class Mapper:
    """Object-object mapper facade.

    Why
    ----
    Callers need a single object that registers type-pair configurations and
    transforms values with them, without knowing about the engine or the
    adapters behind it.

    Parameters
    ----------
    registry:
        Configuration store; a fresh :class:`MappingRegistry` by default.
    introspector:
        Host object model adapter; :class:`DefaultIntrospector` by default.
    settings:
        Behaviour knobs; :data:`DEFAULT_SETTINGS` by default.
    """

    def __init__(
        self,
        *,
        registry: ConfigurationStore | None = None,
        introspector: ModelIntrospector | None = None,
        settings: MapperSettings | None = None,
    ) -> None:
        self.settings = settings if settings is not None else DEFAULT_SETTINGS
        self.registry = registry if registry is not None else MappingRegistry()
        self.introspector = (
            introspector
            if introspector is not None
            else DefaultIntrospector(include_private_fields=self.settings.include_private_fields)
        )
        self._engine = MappingEngine(self.registry, self.introspector, self.settings)

    @classmethod
    def from_environment(cls, environ: Mapping[str, str] | None = None) -> "Mapper":
        """Return a mapper configured from ``LIB_OBJECT_MAPPER_*`` variables."""

        return cls(settings=load_settings(environ))

    def create_map(self, source_type: type[S], destination_type: type[D]) -> MappingBuilder[S, D]:
        """Start the configuration for ``source_type -> destination_type``.

        The pair is reserved immediately, so a second ``create_map`` for the
        same pair fails with :class:`DuplicateMappingError` even before the
        first builder is built. Call :meth:`MappingBuilder.build` to make the
        configuration visible to :meth:`map`.

        Raises
        ------
        DuplicateMappingError
            When the pair is already registered or reserved.
        TypeError
            When either argument is not a class.
        """

        for label, model in (("source_type", source_type), ("destination_type", destination_type)):
            if not isinstance(model, type):
                raise TypeError(f"{label} must be a class, got {model!r}")
        self.registry.reserve(source_type, destination_type)
        return MappingBuilder(source_type, destination_type, self.registry, reserved=True)

    def map(self, source: Any, destination: Any, destination_type: type | None = None) -> Any:
        """Map *source* into *destination*.

        Call shapes
        -----------
        ``map(source, Model)``
            New default instance of ``Model``, always fresh.
        ``map(source, existing, Model)``
            ``existing`` enriched in place using ``Model``'s configuration and
            field set; ``existing`` is returned.
        ``map(source, existing)``
            ``existing`` enriched in place; its own type is the model. Plain
            ``dict`` / ``SimpleNamespace`` destinations cannot be used this way.
        ``map(source, NewInstance(...) | ExistingInstance(...) | ExistingInstanceWithType(...))``
            Explicit destination variant.

        A ``list`` or ``tuple`` source returns a list with one result per
        element.
        """

        return self._engine.map(source, destination, destination_type)

    def map_many(self, sources: Iterable[Any], destination: Any, destination_type: type | None = None) -> list[Any]:
        """Map every element of *sources* (any iterable) and return a list."""

        return self._engine.map_many(sources, destination, destination_type)

    def has_mapping(self, source_type: type, destination_type: type) -> bool:
        return self.registry.find(source_type, destination_type) is not None


def load_settings(environ: Mapping[str, str] | None = None) -> MapperSettings:
    """Return :class:`MapperSettings` read from ``LIB_OBJECT_MAPPER_*`` variables.

    Examples
    --------
    >>> load_settings({"LIB_OBJECT_MAPPER_MISSING_SOURCE_FIELDS": "skip"}).missing_source_fields
    'skip'
    """

    return DefaultSettingsLoader(environ=environ).load(default_env_prefix())


mapper = Mapper()
"""Process-wide default mapper (empty registry at import, no teardown)."""


__all__ = ["DEFAULT_SETTINGS", "Mapper", "MapperSettings", "load_settings", "mapper"]
