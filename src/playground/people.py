"""Name-pair record used by the comparator, collector and equality demos."""

from __future__ import annotations

import itertools
from dataclasses import dataclass
from typing import Optional

from .settings import Settings

_ids = itertools.count(1)


class Person:
    """A first name / last name pair with an identifier.

    Equality and hashing look at ``last_name`` only, so ``Seven List`` and
    ``None List`` compare equal. This is a deliberate example of a surprising
    equality contract: two objects that differ in visible state are treated as
    the same set member or dict key. Do not copy it into real value types.
    """

    __match_args__ = ("first_name", "last_name")

    def __init__(self, first_name: Optional[str], last_name: str, id: Optional[int] = None) -> None:
        self.first_name = first_name
        self.last_name = last_name
        self.id = next(_ids) if id is None else id

    def __repr__(self) -> str:
        return f"Person({self.first_name!r}, {self.last_name!r}, id={self.id})"

    def __str__(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Person):
            return NotImplemented
        return self.last_name == other.last_name

    def __hash__(self) -> int:
        return hash(self.last_name)


@dataclass(frozen=True)
class FullName:
    """Field-wise counterpart of :class:`Person` for contrast."""

    first_name: Optional[str]
    last_name: str


def sample_people() -> list[Person]:
    """Return ``[Seven Map, Seven List, None List]`` with fresh identifiers."""
    return [Person("Seven", "Map"), Person("Seven", "List"), Person(None, "List")]


def demo_1_partial_equality() -> tuple[bool, int]:
    """Objects equal on one field collapse inside hashed collections."""
    seven_list = Person("Seven", "List")
    null_list = Person(None, "List")
    same = seven_list == null_list
    distinct = len({Person("Seven", "Map"), seven_list, null_list})
    print("1. partial equality:", same, distinct, seven_list.id != null_list.id, sep=" | ")
    return same, distinct


def demo_2_field_wise_equality() -> tuple[bool, int]:
    """A dataclass compares every field, so the same names stay distinct."""
    seven_list = FullName("Seven", "List")
    null_list = FullName(None, "List")
    same = seven_list == null_list
    distinct = len({FullName("Seven", "Map"), seven_list, null_list})
    print("2. field-wise equality:", same, distinct, sep=" | ")
    return same, distinct


def describe(person: object) -> str:
    """Destructure a person positionally through ``__match_args__``."""
    match person:
        case Person(None, last):
            return f"only a last name: {last}"
        case Person(first, "List"):
            return f"{first} of the List family"
        case Person(first, last):
            return f"{first} {last}"
        case _:
            return "not a person"


def demo_3_match_by_position() -> list[str]:
    """Class patterns bind fields in the order named by ``__match_args__``."""
    descriptions = [describe(p) for p in sample_people()] + [describe("Seven")]
    print("3. match by position:", *descriptions, sep=" | ")
    return descriptions


def run_all(settings: Settings | None = None) -> None:
    """Execute the equality demos; settings are unused here."""
    demo_1_partial_equality()
    demo_2_field_wise_equality()
    demo_3_match_by_position()


if __name__ == "__main__":
    run_all()
