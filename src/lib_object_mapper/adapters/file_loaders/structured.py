"""Structured payload file loaders.

Purpose
-------
Convert on-disk payloads into anonymous source records (mappings, or lists of
mappings for batch mapping) for the CLI adapter. Adapters are small wrappers
around ``tomllib``/``json``/``yaml.safe_load`` so error handling and
observability live in one place.

Contents
--------
* :class:`BaseFileLoader` – shared helpers for reading files and validating
  record outputs.
* :class:`TOMLFileLoader` – loader for TOML documents (always a mapping).
* :class:`JSONFileLoader` – JSON objects or arrays of objects.
* :class:`YAMLFileLoader` – optional YAML loader (only available when PyYAML is
  installed).
* :func:`loader_for` – picks a loader by file suffix.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Mapping, Sequence, Union

try:  # Python >= 3.11
    import tomllib
except ModuleNotFoundError:  # pragma: no cover - fallback for <3.11
    import tomli as tomllib  # type: ignore[assignment]

from ...domain.errors import InvalidPayload, PayloadNotFound
from ...observability import log_debug, log_error

try:
    import yaml  # type: ignore[import-not-found]
except ModuleNotFoundError:  # pragma: no cover - optional dependency
    yaml = None  # type: ignore[assignment]

Payload = Union[Mapping[str, object], list[Mapping[str, object]]]


class BaseFileLoader:
    """Common utilities shared by the structured file loaders."""

    def _read(self, path: str) -> bytes:
        """Read *path* as bytes, raising :class:`PayloadNotFound` when the file is missing."""

        file_path = Path(path)
        if not file_path.is_file():
            raise PayloadNotFound(f"Payload file not found: {path}")
        payload = file_path.read_bytes()
        log_debug("payload_file_read", source=None, destination=None, path=path, size=len(payload))
        return payload

    @staticmethod
    def _ensure_records(data: object, *, path: str) -> Payload:
        """Ensure *data* is a mapping or a list of mappings.

        Examples
        --------
        >>> BaseFileLoader._ensure_records({"key": 1}, path="demo")
        {'key': 1}
        >>> BaseFileLoader._ensure_records([{"key": 1}], path="demo")
        [{'key': 1}]
        >>> BaseFileLoader._ensure_records(42, path="demo")
        Traceback (most recent call last):
        ...
        lib_object_mapper.domain.errors.InvalidPayload: File demo did not produce a mapping or a list of mappings
        """

        if isinstance(data, Mapping):
            return data
        if isinstance(data, Sequence) and not isinstance(data, (str, bytes)):
            if all(isinstance(item, Mapping) for item in data):
                return list(data)
        raise InvalidPayload(f"File {path} did not produce a mapping or a list of mappings")


class TOMLFileLoader(BaseFileLoader):
    """Load TOML documents using the standard library parser."""

    def load(self, path: str) -> Payload:
        try:
            text = self._read(path).decode("utf-8")
            data = tomllib.loads(text)
        except (tomllib.TOMLDecodeError, UnicodeDecodeError) as exc:  # type: ignore[attr-defined]
            log_error("payload_file_invalid", source=None, destination=None, path=path, format="toml", error=str(exc))
            raise InvalidPayload(f"Invalid TOML in {path}: {exc}") from exc
        result = self._ensure_records(data, path=path)
        log_debug("payload_file_loaded", source=None, destination=None, path=path, format="toml")
        return result


class JSONFileLoader(BaseFileLoader):
    """Load JSON documents."""

    def load(self, path: str) -> Payload:
        """Return records extracted from JSON file at *path*.

        Examples
        --------
        >>> from tempfile import NamedTemporaryFile
        >>> tmp = NamedTemporaryFile('w', delete=False, encoding='utf-8')
        >>> _ = tmp.write('[{"id": 1}, {"id": 2}]')
        >>> tmp.close()
        >>> [row["id"] for row in JSONFileLoader().load(tmp.name)]
        [1, 2]
        >>> Path(tmp.name).unlink()
        """

        try:
            data = json.loads(self._read(path))
        except json.JSONDecodeError as exc:
            log_error("payload_file_invalid", source=None, destination=None, path=path, format="json", error=str(exc))
            raise InvalidPayload(f"Invalid JSON in {path}: {exc}") from exc
        result = self._ensure_records(data, path=path)
        log_debug("payload_file_loaded", source=None, destination=None, path=path, format="json")
        return result


class YAMLFileLoader(BaseFileLoader):
    """Load YAML documents when PyYAML is available.

    Raises
    ------
    PayloadNotFound
        When PyYAML is not installed.
    """

    def load(self, path: str) -> Payload:
        if yaml is None:
            raise PayloadNotFound("PyYAML is required for YAML payload support")
        try:
            data = yaml.safe_load(self._read(path))  # type: ignore[operator]
        except yaml.YAMLError as exc:  # type: ignore[attr-defined]
            log_error("payload_file_invalid", source=None, destination=None, path=path, format="yaml", error=str(exc))
            raise InvalidPayload(f"Invalid YAML in {path}: {exc}") from exc
        if data is None:
            data = {}
        result = self._ensure_records(data, path=path)
        log_debug("payload_file_loaded", source=None, destination=None, path=path, format="yaml")
        return result


_LOADERS = {
    ".toml": TOMLFileLoader(),
    ".json": JSONFileLoader(),
    ".yaml": YAMLFileLoader(),
    ".yml": YAMLFileLoader(),
}


def loader_for(path: str) -> BaseFileLoader:
    """Return the loader registered for the suffix of *path*.

    Examples
    --------
    >>> type(loader_for("rows.json")).__name__
    'JSONFileLoader'
    >>> loader_for("rows.csv")
    Traceback (most recent call last):
    ...
    lib_object_mapper.domain.errors.InvalidPayload: Unsupported payload format '.csv' (use .json, .toml, .yaml or .yml)
    """

    suffix = Path(path).suffix.lower()
    loader = _LOADERS.get(suffix)
    if loader is None:
        raise InvalidPayload(f"Unsupported payload format '{suffix}' (use .json, .toml, .yaml or .yml)")
    return loader


__all__ = ["BaseFileLoader", "JSONFileLoader", "TOMLFileLoader", "YAMLFileLoader", "loader_for"]
