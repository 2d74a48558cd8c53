"""Newer-release idioms: joining, numerics, comparators, annotations, regex.

Each demo prints a numbered line and returns what it computed; the literal
results are quoted in the docstrings.
"""

from __future__ import annotations

import base64
import bisect
import inspect
import operator
import re
import struct
from functools import reduce
from typing import Annotated, Any, Callable, Generic, Iterable, Iterator, Optional, Sequence, TypeVar, get_type_hints

from .logs import LazyMessage, get_logger
from .people import Person
from .settings import Settings

T = TypeVar("T")
F = TypeVar("F", bound=Callable[..., Any])

MAX_INT = 2**31 - 1
AVAILABLE_LOCALES = (
    "de",
    "de-CH",
    "de-AT",
    "de-LU",
    "de-DE",
    "de-GR",
    "en",
    "en-US",
    "en-GB",
    "fr",
    "fr-CH",
    "fr-FR",
    "it",
    "it-CH",
    "it-IT",
)

logger = get_logger("modern")


def demo_1_join_strings() -> str:
    """The opposite of ``str.split``: ``", ".join`` gives "seven, list"."""
    joined = ", ".join(["seven", "list"])
    print("1. join:", joined)
    return joined


def to_byte_exact(value: int) -> bytes:
    """Narrow to one signed byte; raises ``OverflowError`` if it does not fit."""
    return value.to_bytes(1, "big", signed=True)


def demo_2_numeric_conveniences() -> dict[str, Any]:
    """Sizes, hashing and reduction helpers available without boxing."""
    values = {
        "bytes": struct.calcsize("i"),
        "hash": hash(5),
        "sum": reduce(operator.add, [1, 2]),
        "max": max(3, 4),
        "min": min(1.2, 1.1),
        "or": reduce(operator.or_, [True, False]),
        "xor": operator.xor(True, False),
        "exact": to_byte_exact(7),
    }
    try:
        to_byte_exact(200)
    except OverflowError:
        values["overflow"] = True
    print("2. numerics:", *values.values(), sep=" | ")
    return values


def to_unsigned_int(value: int, bits: int = 8) -> int:
    """Reinterpret a signed ``bits``-wide value as unsigned."""
    return value & ((1 << bits) - 1)


def compare_unsigned(x: int, y: int, bits: int = 32) -> int:
    """Compare two ``bits``-wide values as if both were unsigned."""
    mask = (1 << bits) - 1
    x, y = x & mask, y & mask
    return (x > y) - (x < y)


def demo_3_unsigned_values() -> tuple[int, int, int]:
    """For file formats and network protocols that carry unsigned fields."""
    byte_value = struct.unpack("b", bytes([246]))[0]  # -10 as a signed byte
    unsigned = to_unsigned_int(byte_value)  # 246
    (from_struct,) = struct.unpack("B", struct.pack("b", byte_value))
    # MAX_INT + 1 and MAX_INT + 2 wrap negative when signed
    ordering = compare_unsigned(MAX_INT + 1, MAX_INT + 2)  # -1
    print("3. unsigned:", byte_value, unsigned, from_struct, ordering, sep=" | ")
    return unsigned, from_struct, ordering


def nulls_first(key: Callable[[T], Any]) -> Callable[[T], tuple[bool, Any]]:
    """Wrap a sort key so that ``None`` values order before everything else."""

    def wrapped(item: T) -> tuple[bool, Any]:
        value = key(item)
        return (value is not None, value if value is not None else 0)

    return wrapped


def demo_4_comparators() -> dict[str, list[str]]:
    """Composite, derived and null-aware sort keys.

    Sorting is stable, so ties keep their input order.
    """
    seven_list = Person("Seven", "List")
    seven_map = Person("Seven", "Map")
    persons = [seven_map, seven_list]

    by_name = sorted(persons, key=operator.attrgetter("first_name", "last_name"))  # Seven List, Seven Map
    by_length = sorted(persons, key=lambda p: len(p.last_name))  # Seven Map, Seven List

    null_list = Person(None, "List")
    persons = [seven_map, seven_list, null_list]
    first_name_key = nulls_first(operator.attrgetter("first_name"))
    nulls = sorted(persons, key=first_name_key)  # None List, Seven Map, Seven List
    reversed_nulls = sorted(persons, key=first_name_key, reverse=True)

    results = {
        "by_name": [str(p) for p in by_name],
        "by_length": [str(p) for p in by_length],
        "nulls_first": [str(p) for p in nulls],
        "reversed": [str(p) for p in reversed_nulls],
    }
    print("4. comparators:", *results.values(), sep=" | ")
    return results


class SortedSet(Generic[T]):
    """Minimal navigable set kept sorted with :mod:`bisect`."""

    def __init__(self, items: Iterable[T] = ()) -> None:
        self._items: list[T] = sorted(set(items))

    def add(self, item: T) -> bool:
        index = bisect.bisect_left(self._items, item)
        if index < len(self._items) and self._items[index] == item:
            return False
        self._items.insert(index, item)
        return True

    def lower(self, item: T) -> Optional[T]:
        """Greatest element strictly less than ``item``, or ``None``."""
        index = bisect.bisect_left(self._items, item)
        return self._items[index - 1] if index else None

    def higher(self, item: T) -> Optional[T]:
        """Least element strictly greater than ``item``, or ``None``."""
        index = bisect.bisect_right(self._items, item)
        return self._items[index] if index < len(self._items) else None

    def __contains__(self, item: object) -> bool:
        index = bisect.bisect_left(self._items, item)
        return index < len(self._items) and self._items[index] == item

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)


class CheckedSortedSet(SortedSet[T]):
    """View that rejects elements of the wrong type at insertion time."""

    def __init__(self, backing: SortedSet[T], element_type: type) -> None:
        self._backing = backing
        self.element_type = element_type

    @property
    def _items(self) -> list[T]:  # type: ignore[override]
        return self._backing._items

    def add(self, item: T) -> bool:
        if not isinstance(item, self.element_type):
            raise TypeError(
                f"Attempt to insert {type(item).__name__} element into set "
                f"with element type {self.element_type.__name__}"
            )
        return self._backing.add(item)


def checked_set(backing: SortedSet[T], element_type: type) -> CheckedSortedSet[T]:
    return CheckedSortedSet(backing, element_type)


def demo_5_navigable_and_checked_set() -> tuple[Optional[int], str]:
    """``lower(2)`` is 1; a checked view refuses a ``str``."""
    s: SortedSet[Any] = SortedSet([1, 2, 3])
    lower = s.lower(2)
    checked = checked_set(s, int)
    try:
        checked.add("4")
    except TypeError as exc:
        error = type(exc).__name__
    print("5. navigable set:", lower, s.higher(2), error, sep=" | ")
    return lower, error


def demo_6_base64() -> bytes:
    """Credentials for a basic auth header: "dXNlcm5hbWU6cGFzc3dvcmQ="."""
    original = "username" + ":" + "password"
    encoded = base64.b64encode(original.encode("utf-8"))
    decoded = base64.b64decode(encoded).decode("utf-8")
    urlsafe = base64.urlsafe_b64encode(b"\xfb\xff")
    print("6. base64:", encoded.decode("ascii"), decoded, urlsafe, sep=" | ")
    return encoded


def author(name: str) -> Callable[[F], F]:
    """Repeatable marker decorator; stacked uses accumulate in source order."""

    def mark(fn: F) -> F:
        fn.__authors__ = (name, *getattr(fn, "__authors__", ()))  # type: ignore[attr-defined]
        return fn

    return mark


def authors_of(fn: Callable[..., Any]) -> tuple[str, ...]:
    return getattr(fn, "__authors__", ())


@author("seven")
@author("list")
def annotated_with_repeatable_marker() -> None:
    pass


def demo_7_repeatable_annotation() -> tuple[str, ...]:
    """The same decorator applied twice records both values."""
    authors = authors_of(annotated_with_repeatable_marker)
    print("7. repeatable annotation:", authors)
    return authors


def demo_8_type_use_annotation() -> tuple[Any, ...]:
    """Metadata attached to a type argument with ``Annotated``.

    Plain type checkers ignore the metadata; runtime tools read it back with
    ``get_type_hints(..., include_extras=True)``.
    """

    def collect(names: list[Annotated[str, "NonNull"]]) -> None:
        pass

    hints = get_type_hints(collect, include_extras=True)
    (element,) = hints["names"].__args__
    metadata = element.__metadata__
    print("8. type-use annotation:", metadata)
    return metadata


def reflect_method_parameter(param: str) -> list[str]:
    """Parameter names are always available at runtime; no compiler flag needed."""
    return list(inspect.signature(reflect_method_parameter).parameters)


def demo_9_reflect_method_parameter() -> list[str]:
    names = reflect_method_parameter("value")
    print("9. parameter names:", names)
    return names


def demo_10_lazy_log_message() -> int:
    """The message supplier only runs when the record is actually emitted."""
    message = LazyMessage(lambda: "a message that is expensive to construct")
    logger.debug("%s", message)
    print("10. lazy message: supplier calls =", message.calls)
    return message.calls


CITY_STATE = re.compile(r"(?P<city>[^\W\d_]+(?: [^\W\d_]+)*),\s*(?P<state>[A-Z]{2})")


def demo_11_named_capturing_group() -> Optional[dict[str, str]]:
    """Split "New York City, NY" into city "New York City" and state "NY"."""
    match = CITY_STATE.fullmatch("New York City, NY")
    groups = match.groupdict() if match else None
    print("11. named groups:", groups)
    return groups


def _extended_match(language_range: str, tag: str) -> bool:
    """RFC 4647 section 3.3.2 extended filtering for a single range and tag."""
    range_subtags = language_range.lower().split("-")
    tag_subtags = tag.lower().split("-")
    if range_subtags[0] not in ("*", tag_subtags[0]):
        return False
    r, t = 1, 1
    while r < len(range_subtags):
        if range_subtags[r] == "*":
            r += 1
        elif t >= len(tag_subtags):
            return False
        elif range_subtags[r] == tag_subtags[t]:
            r += 1
            t += 1
        elif len(tag_subtags[t]) == 1:
            return False
        else:
            t += 1
    return True


def filter_locales(ranges: Sequence[str], available: Sequence[str] = AVAILABLE_LOCALES) -> list[str]:
    """Tags from ``available`` matching any range, ordered by range priority."""
    matches: list[str] = []
    for language_range in ranges:
        for tag in available:
            if tag not in matches and _extended_match(language_range, tag):
                matches.append(tag)
    return matches


def demo_12_matching_locales() -> list[str]:
    """Ranges "de" and "*-CH": all German tags plus Swiss French and Italian."""
    ranges = list(map(str.strip, ["de", "*-CH"]))
    matches = filter_locales(ranges)
    print("12. locales:", ", ".join(matches))
    return matches


def run_all(settings: Settings | None = None) -> None:
    """Execute every newer-release language demo."""
    demo_1_join_strings()
    demo_2_numeric_conveniences()
    demo_3_unsigned_values()
    demo_4_comparators()
    demo_5_navigable_and_checked_set()
    demo_6_base64()
    demo_7_repeatable_annotation()
    demo_8_type_use_annotation()
    demo_9_reflect_method_parameter()
    demo_10_lazy_log_message()
    demo_11_named_capturing_group()
    demo_12_matching_locales()


if __name__ == "__main__":
    run_all()
