"""Mapper settings value object.

Purpose
-------
Capture the small set of behaviours a host application may tune without
touching mapping configurations: what happens to destination fields the source
does not provide, and whether ``_private`` fields take part in mapping.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import asdict, dataclass
from typing import Any, Final

from .errors import InvalidSettings

MISSING_SKIP: Final[str] = "skip"
MISSING_ASSIGN_NONE: Final[str] = "assign_none"
MISSING_SOURCE_FIELD_POLICIES: Final[tuple[str, ...]] = (MISSING_ASSIGN_NONE, MISSING_SKIP)


@dataclass(frozen=True, slots=True)
class MapperSettings:
    """Immutable tuning knobs consumed by the engine and the introspector.

    Attributes
    ----------
    missing_source_fields:
        ``"assign_none"`` (default) writes ``None`` to a destination field when
        the source has no field of the same name, overwriting existing values
        and constructor defaults; ``"skip"`` leaves such fields untouched.
    include_private_fields:
        When ``True`` fields whose names start with ``_`` are enumerated too.

    Examples
    --------
    >>> MapperSettings().missing_source_fields
    'assign_none'
    >>> MapperSettings(missing_source_fields="drop")
    Traceback (most recent call last):
    ...
    lib_object_mapper.domain.errors.InvalidSettings: missing_source_fields must be one of: assign_none, skip (got 'drop')
    """

    missing_source_fields: str = MISSING_ASSIGN_NONE
    include_private_fields: bool = False

    def __post_init__(self) -> None:
        if self.missing_source_fields not in MISSING_SOURCE_FIELD_POLICIES:
            allowed = ", ".join(MISSING_SOURCE_FIELD_POLICIES)
            raise InvalidSettings(
                f"missing_source_fields must be one of: {allowed} (got {self.missing_source_fields!r})"
            )
        if not isinstance(self.include_private_fields, bool):
            raise InvalidSettings(
                f"include_private_fields must be a boolean (got {self.include_private_fields!r})"
            )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "MapperSettings":
        """Build settings from a loose mapping, ignoring unknown keys."""

        known = {key: data[key] for key in ("missing_source_fields", "include_private_fields") if key in data}
        return cls(**known)

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)


DEFAULT_SETTINGS: Final[MapperSettings] = MapperSettings()


__all__ = [
    "DEFAULT_SETTINGS",
    "MISSING_ASSIGN_NONE",
    "MISSING_SKIP",
    "MISSING_SOURCE_FIELD_POLICIES",
    "MapperSettings",
]
