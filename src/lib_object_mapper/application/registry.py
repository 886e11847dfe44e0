"""Append-only registry of mapping configurations.

Purpose
-------
Store one :class:`MappingConfiguration` per ordered ``(source, destination)``
type pair. The registry is a plain constructible object so tests can build
isolated instances; the composition root owns one process-wide instance that
starts empty at import time and is never torn down.

Concurrency
-----------
Mutations (``reserve`` and ``insert``) run under a lock, so exactly one caller
wins a given pair and every later caller gets :class:`DuplicateMappingError`.
``find`` is lock-free; lookups are expected to start after registration.
"""

from __future__ import annotations

import threading
from typing import Iterator

from ..domain.configuration import MappingConfiguration
from ..domain.errors import DuplicateMappingError
from ..observability import log_debug, make_event

_RESERVED = object()


class MappingRegistry:
    """Configuration table keyed by ``(source_type, destination_type)``.

    Examples
    --------
    >>> class A: pass
    >>> class B: pass
    >>> registry = MappingRegistry()
    >>> registry.insert(A, B, MappingConfiguration())
    >>> registry.find(A, B) is not None, registry.find(B, A)
    (True, None)
    >>> registry.insert(A, B, MappingConfiguration())
    Traceback (most recent call last):
    ...
    lib_object_mapper.domain.errors.DuplicateMappingError: Configuration already exists for mapping A -> B
    """

    def __init__(self) -> None:
        self._entries: dict[tuple[type, type], object] = {}
        self._lock = threading.Lock()

    def find(self, source_type: type, destination_type: type) -> MappingConfiguration | None:
        entry = self._entries.get((source_type, destination_type))
        if isinstance(entry, MappingConfiguration):
            return entry
        return None

    def reserve(self, source_type: type, destination_type: type) -> None:
        """Claim the pair for a pending builder.

        A reserved pair is invisible to :meth:`find` until :meth:`insert`
        completes it, and rejects any further ``reserve`` or foreign insert.
        """

        key = (source_type, destination_type)
        with self._lock:
            if key in self._entries:
                raise DuplicateMappingError(_duplicate_message(source_type, destination_type))
            self._entries[key] = _RESERVED
        log_debug("mapping_reserved", **make_event(source_type, destination_type))

    def is_pending(self, source_type: type, destination_type: type) -> bool:
        return self._entries.get((source_type, destination_type)) is _RESERVED

    def insert(
        self,
        source_type: type,
        destination_type: type,
        configuration: MappingConfiguration,
        *,
        reserved: bool = False,
    ) -> None:
        """Register *configuration* for the pair.

        Parameters
        ----------
        reserved:
            ``True`` when the caller previously reserved the pair via
            :meth:`reserve` and now completes it.
        """

        key = (source_type, destination_type)
        with self._lock:
            current = self._entries.get(key)
            claimable = current is None or (reserved and current is _RESERVED)
            if not claimable:
                raise DuplicateMappingError(_duplicate_message(source_type, destination_type))
            self._entries[key] = configuration
        log_debug(
            "mapping_registered",
            **make_event(
                source_type,
                destination_type,
                {
                    "ignored": sorted(configuration.ignored_fields),
                    "factories": sorted(configuration.field_factories),
                },
            ),
        )

    def pairs(self) -> Iterator[tuple[type, type]]:
        for key, entry in list(self._entries.items()):
            if isinstance(entry, MappingConfiguration):
                yield key

    def __contains__(self, pair: object) -> bool:
        return isinstance(self._entries.get(pair), MappingConfiguration)  # type: ignore[arg-type]

    def __len__(self) -> int:
        return sum(1 for _ in self.pairs())


def _duplicate_message(source_type: type, destination_type: type) -> str:
    return f"Configuration already exists for mapping {source_type.__name__} -> {destination_type.__name__}"


__all__ = ["MappingRegistry"]
