"""Environment variable settings adapter.

Purpose
-------
Translate process environment variables into :class:`MapperSettings`. It
implements :class:`lib_object_mapper.application.ports.SettingsLoader`.

Key behaviours
--------------
* Enforces a prefix (``default_env_prefix``) so only relevant keys are
  captured: ``LIB_OBJECT_MAPPER_MISSING_SOURCE_FIELDS=skip``.
* Performs light type coercion for common scalar types (bools, ints, floats,
  ``null``/``none``).
* Unknown keys are ignored; invalid values raise :class:`InvalidSettings`.
"""

from __future__ import annotations

import os
from typing import Mapping

from ...domain.settings import MapperSettings
from ...observability import log_debug

SETTINGS_SLUG = "lib-object-mapper"


def default_env_prefix(slug: str = SETTINGS_SLUG) -> str:
    """Return the canonical environment prefix for *slug*.

    Examples
    --------
    >>> default_env_prefix('lib-object-mapper')
    'LIB_OBJECT_MAPPER'
    """

    return slug.replace("-", "_").upper()


class DefaultSettingsLoader:
    """Load mapper settings from environment variables."""

    def __init__(self, *, environ: Mapping[str, str] | None = None) -> None:
        """Initialise the loader with a specific ``environ`` mapping for testability.

        Parameters
        ----------
        environ:
            Mapping to read from. Defaults to :data:`os.environ`.
        """

        self._environ = environ if environ is not None else os.environ

    def load(self, prefix: str | None = None) -> MapperSettings:
        """Return settings built from variables that carry *prefix*.

        Examples
        --------
        >>> env = {
        ...     'DEMO_MISSING_SOURCE_FIELDS': 'skip',
        ...     'DEMO_INCLUDE_PRIVATE_FIELDS': 'true',
        ... }
        >>> settings = DefaultSettingsLoader(environ=env).load('DEMO')
        >>> settings.missing_source_fields, settings.include_private_fields
        ('skip', True)
        """

        values = self.collect(prefix if prefix is not None else default_env_prefix())
        settings = MapperSettings.from_mapping(values)
        log_debug("settings_loaded", source=None, destination=None, keys=sorted(values))
        return settings

    def collect(self, prefix: str) -> dict[str, object]:
        """Return lower-cased, coerced values for every variable under *prefix*."""

        prefix = f"{prefix}_" if prefix and not prefix.endswith("_") else prefix
        collected: dict[str, object] = {}
        for key, value in self._environ.items():
            if prefix and not key.startswith(prefix):
                continue
            stripped = key[len(prefix) :] if prefix else key
            if not stripped:
                continue
            collected[stripped.lower()] = _coerce(value)
        return collected


def _coerce(value: str) -> object:
    """Coerce textual environment values to Python primitives where possible.

    Examples
    --------
    >>> _coerce('true'), _coerce('10'), _coerce('3.5'), _coerce('skip')
    (True, 10, 3.5, 'skip')
    """

    lowered = value.lower()
    if lowered in {"true", "false"}:
        return lowered == "true"
    if lowered in {"null", "none"}:
        return None
    try:
        if value.isdigit() or (value.startswith("-") and value[1:].isdigit()):
            return int(value)
        return float(value)
    except ValueError:
        return value


__all__ = ["DefaultSettingsLoader", "SETTINGS_SLUG", "default_env_prefix"]
