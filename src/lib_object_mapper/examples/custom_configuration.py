"""Field rules: renamed fields, nested mapping, and destination-aware factories."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from ..core import Mapper


@dataclass
class Record:
    organization_id: int
    user_id: int
    name: str
    last_name: str


@dataclass
class Organization:
    id: Optional[int] = None
    name: Optional[str] = None


@dataclass
class User:
    id: Optional[int] = None
    full_name: Optional[str] = None
    organization: Optional[Organization] = None


def configure(target: Mapper) -> None:
    """Register ``Record -> User`` and ``Record -> Organization`` on *target*."""

    (
        target.create_map(Record, User)
        .for_field("id").map_from("user_id")
        .for_field("organization").map_from(lambda src, dst: target.map(src, Organization))
        .for_field("full_name").map_from(_keep_or_join_name)
        .build()
    )
    (
        target.create_map(Record, Organization)
        .for_field("id").map_from("organization_id")
        # Record.name belongs to the user
        .for_field("name").ignore()
        .build()
    )


def _keep_or_join_name(source: Record, destination: User) -> str:
    if destination.full_name is not None:
        return destination.full_name
    return f"{source.name} {source.last_name}"


def run_custom_configuration(target: Mapper | None = None) -> dict[str, Any]:
    """Run the field-rule example on *target* (an isolated mapper by default).

    Examples
    --------
    >>> result = run_custom_configuration()
    >>> result["user"]
    User(id=1, full_name='John Denver', organization=Organization(id=1, name=None))
    >>> result["existing_user"].full_name
    'Emma Watson'
    """

    target = target if target is not None else Mapper()
    configure(target)

    record = Record(1, 1, "John", "Denver")
    user = target.map(record, User)
    organization = target.map(record, Organization)

    existing_user = User(1, "Emma Watson", None)
    target.map(record, existing_user)
    return {"user": user, "organization": organization, "existing_user": existing_user}


__all__ = ["Organization", "Record", "User", "configure", "run_custom_configuration"]
