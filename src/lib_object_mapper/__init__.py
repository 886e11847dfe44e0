"""Public package surface for ``lib_object_mapper``.

``mapper`` is the process-wide default :class:`Mapper`; construct your own
``Mapper()`` for an isolated registry.
"""

from __future__ import annotations

from .application.builder import FieldRuleHandle, MappingBuilder
from .application.registry import MappingRegistry
from .core import Mapper, load_settings, mapper
from .domain.configuration import EMPTY_CONFIGURATION, MappingConfiguration
from .domain.destination import ExistingInstance, ExistingInstanceWithType, NewInstance
from .domain.errors import (
    ConfigurationFrozenError,
    DestinationConstructionError,
    DuplicateFieldRuleError,
    DuplicateMappingError,
    InvalidPayload,
    InvalidSettings,
    MapperError,
    MissingMappingError,
    PayloadNotFound,
    UnbuiltMappingError,
    UnresolvableDestinationTypeError,
)
from .domain.rules import ALL_FIELDS
from .domain.settings import MapperSettings
from .observability import bind_trace_id, get_logger

__all__ = [
    "ALL_FIELDS",
    "ConfigurationFrozenError",
    "DestinationConstructionError",
    "DuplicateFieldRuleError",
    "DuplicateMappingError",
    "EMPTY_CONFIGURATION",
    "ExistingInstance",
    "ExistingInstanceWithType",
    "FieldRuleHandle",
    "InvalidPayload",
    "InvalidSettings",
    "Mapper",
    "MapperError",
    "MapperSettings",
    "MappingBuilder",
    "MappingConfiguration",
    "MappingRegistry",
    "MissingMappingError",
    "NewInstance",
    "PayloadNotFound",
    "UnbuiltMappingError",
    "UnresolvableDestinationTypeError",
    "bind_trace_id",
    "get_logger",
    "load_settings",
    "mapper",
]
