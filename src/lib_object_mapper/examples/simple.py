"""Convention-based mapping without field rules.

Shows the three destination shapes (new instance, existing instance, existing
object with explicit type) and batch mapping of a list.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..core import Mapper


@dataclass
class User:
    first_name: str
    last_name: str
    _email: str = field(default="", repr=False)


@dataclass
class Person:
    first_name: str
    last_name: str


def run_simple(target: Mapper | None = None) -> dict[str, Any]:
    """Run the convention example on *target* (an isolated mapper by default).

    Examples
    --------
    >>> result = run_simple()
    >>> result["person"]
    Person(first_name='John', last_name='Denver')
    >>> result["enriched"] is result["emma"]
    True
    >>> result["anonymous"]
    {'first_name': 'John', 'last_name': 'Denver'}
    """

    target = target if target is not None else Mapper()
    target.create_map(User, Person).build()

    source = User("John", "Denver", "john@email.com")
    person = target.map(source, Person)

    emma = Person("Emma", "Watson")
    enriched = target.map(source, emma)

    john: dict[str, Any] = {"first_name": "John"}
    anonymous = target.map(source, john, Person)

    persons = target.map(
        [User("John", "Denver", "john@email.com"), User("Emma", "Watson", "emma@watson.com")],
        Person,
    )
    return {"person": person, "emma": emma, "enriched": enriched, "anonymous": anonymous, "persons": persons}


__all__ = ["Person", "User", "run_simple"]
