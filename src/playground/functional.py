"""Lambdas, lazy pipelines, optional values, collectors, method references.

All demos work on the sample people ``[Seven Map, Seven List, None List]``.
"""

from __future__ import annotations

import itertools
import operator
from collections import Counter
from typing import Callable, Iterable, Iterator, Optional, TypeVar

from .people import Person, sample_people
from .settings import Settings

T = TypeVar("T")


def demo_1_lambda(people: list[Person]) -> list[str]:
    """Anonymous functions passed where a one-method callback is expected."""
    shout = lambda p: p.last_name.upper()  # noqa: E731
    shouted = list(map(shout, people))
    print("1. lambda:", shouted)
    return shouted


def demo_2_lazy_pipeline(people: list[Person]) -> list[str]:
    """Generator pipelines run only when a terminal step consumes them."""
    visited: list[int] = []

    def peek(p: Person) -> Person:
        visited.append(p.id)
        return p

    with_first = (p for p in map(peek, people) if p.first_name is not None)
    last_names = (p.last_name for p in with_first)
    untouched = not visited
    result = sorted(last_names)  # List, Map
    print("2. pipeline:", untouched, result, len(visited), sep=" | ")
    return result


def find_first(items: Iterable[T], predicate: Callable[[T], bool]) -> Optional[T]:
    return next(filter(predicate, items), None)


def demo_3_optional_values(people: list[Person]) -> tuple[str, str]:
    """``None`` as the absent value, with a default and a mapped present value."""
    eight = find_first(people, lambda p: p.first_name == "Eight")
    absent = eight.last_name if eight is not None else "unknown"
    seven = find_first(people, lambda p: p.first_name == "Seven")
    present = seven.last_name if seven is not None else "unknown"  # Map
    print("3. optional:", absent, present, sep=" | ")
    return absent, present


def partition(items: Iterable[T], predicate: Callable[[T], bool]) -> dict[bool, list[T]]:
    parts: dict[bool, list[T]] = {True: [], False: []}
    for item in items:
        parts[bool(predicate(item))].append(item)
    return parts


def demo_4_collectors(people: list[Person]) -> dict[str, object]:
    """Terminal reductions: joining, grouping with counts and partitioning."""
    joined = ", ".join(p.last_name for p in people)  # Map, List, List
    grouped = dict(Counter(p.last_name for p in people))  # {"Map": 1, "List": 2}
    by_last_name = {
        key: [p.id for p in group]
        for key, group in itertools.groupby(sorted(people, key=operator.attrgetter("last_name")), operator.attrgetter("last_name"))
    }
    parts = partition(people, lambda p: p.first_name is not None)
    partitioned = {key: len(value) for key, value in parts.items()}  # {True: 2, False: 1}
    results = {"joined": joined, "grouped": grouped, "ids": by_last_name, "partitioned": partitioned}
    print("4. collectors:", joined, grouped, partitioned, sep=" | ")
    return results


def demo_5_method_references(people: list[Person]) -> dict[str, list[str]]:
    """Bound and unbound methods and attribute getters used as callables."""
    last_name = operator.attrgetter("last_name")
    upper = list(map(str.upper, map(last_name, people)))
    collected: list[str] = []
    append = collected.append  # bound method
    for name in map(str, people):
        append(name)
    print("5. method references:", upper, collected, sep=" | ")
    return {"upper": upper, "collected": collected}


def chunked(items: Iterable[T], size: int) -> Iterator[tuple[T, ...]]:
    """Fixed-size batches from any iterable; the last may be shorter."""
    if size < 1:
        raise ValueError("size must be at least 1")
    iterator = iter(items)
    while batch := tuple(itertools.islice(iterator, size)):
        yield batch


def demo_6_infinite_sources() -> list[tuple[int, ...]]:
    """Unbounded generators are safe as long as a step limits them."""
    evens = (n for n in itertools.count() if n % 2 == 0)
    batches = list(chunked(itertools.islice(evens, 5), 2))
    print("6. infinite sources:", batches)
    return batches


def run_all(settings: Settings | None = None) -> None:
    """Run the functional-style demos over the sample people."""
    people = sample_people()
    demo_1_lambda(people)
    demo_2_lazy_pipeline(people)
    demo_3_optional_values(people)
    demo_4_collectors(people)
    demo_5_method_references(people)
    demo_6_infinite_sources()


if __name__ == "__main__":
    run_all()
