"""Older-release idioms: literals, string switches, exception handling, nulls.

Each `demo_*` function focuses on one idiom, prints a numbered line and
returns the value it demonstrates so the catalog can be checked against the
literal results quoted in the docstrings.
"""

from __future__ import annotations

import importlib
import traceback
from collections import defaultdict
from contextlib import ExitStack
from pathlib import Path
from typing import Any, Callable, Optional, TypeVar

from .errors import InvalidDayError, ReflectiveOperationError
from .logs import get_logger
from .settings import Settings

T = TypeVar("T")

logger = get_logger("classic")


def as_signed(value: int, bits: int) -> int:
    """Reinterpret the low ``bits`` of ``value`` as a two's complement integer."""
    mask = (1 << bits) - 1
    value &= mask
    return value - (1 << bits) if value >> (bits - 1) else value


def demo_1_binary_literals() -> dict[str, int]:
    """Binary literals for 8, 16, 32 and 64 bit quantities.

    Python integers are unbounded, so the fixed-width casts of other
    languages become an explicit ``as_signed`` step.
    """
    a_byte = 0b00100001  # 8
    a_short = 0b1010000101000101  # 16
    an_int = 0b10100001010001011010000101000101  # 32
    a_long = 0b1010000101000101101000010100010110100001010001011010000101000101  # 64
    values = {
        "byte": as_signed(a_byte, 8),
        "short": as_signed(a_short, 16),
        "int": as_signed(an_int, 32),
        "long": as_signed(a_long, 64),
    }
    print("1. binary literals:", *values.values(), sep=" | ")
    return values


def demo_2_underscores_in_numeric_literals() -> dict[str, int | float]:
    """Underscores may group digits anywhere between two digits (PEP 515)."""
    values: dict[str, int | float] = {
        "credit_card_number": 1234_5678_9012_3456,
        "social_security_number": 999_99_9999,
        "pi": 3.14_15,
        "hex_bytes": 0xFF_EC_DE_5E,
        "hex_words": 0xCAFE_BABE,
        "max_long": 0x7FFF_FFFF_FFFF_FFFF,
        "nybbles": 0b0010_0101,
        "bytes": 0b11010010_01101001_10010100_10010010,
    }
    print("2. underscores:", f"{values['credit_card_number']:_}", values["max_long"], sep=" | ")
    return values


def day_category(day: str) -> str:
    """Classify a day of the week using structural pattern matching."""
    match day:
        case "Monday":
            return "Start of work week"
        case "Tuesday" | "Wednesday" | "Thursday":
            return "Midweek"
        case "Friday":
            return "End of work week"
        case "Saturday" | "Sunday":
            return "Weekend"
        case _:
            raise InvalidDayError(day)


def demo_3_string_switch() -> str:
    """Match on string literals, with alternatives sharing one branch."""
    category = day_category("Thursday")
    print("3. string switch:", category)
    return category


def demo_4_type_inference_for_containers() -> dict[str, list[str]]:
    """Annotate the variable once; the empty literal needs no type arguments."""
    my_map: dict[str, list[str]] = {}
    grouped: defaultdict[str, list[str]] = defaultdict(list)
    grouped["seven"].append("list")
    my_map.update(grouped)
    print("4. type inference:", my_map)
    return my_map


class TrackedResource:
    """Resource that records whether it was closed; optionally fails on close."""

    def __init__(self, name: str, fail_on_close: bool = False) -> None:
        self.name = name
        self.fail_on_close = fail_on_close
        self.closed = False

    def __enter__(self) -> "TrackedResource":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.closed = True
        if self.fail_on_close:
            raise OSError(f"close failed: {self.name}")


def demo_5_with_statement(path: Path) -> tuple[Optional[str], str]:
    """Read the first line of a file; the handle is closed on every exit path.

    A second, failing resource shows how an error raised while closing keeps
    the original error reachable through ``__context__``.
    """
    with open(path, encoding="utf-8") as reader:
        first = reader.readline().rstrip("\n") or None

    resource = TrackedResource("failing", fail_on_close=True)
    try:
        with ExitStack() as stack:
            stack.enter_context(resource)
            raise RuntimeError("body failed")
    except OSError as exc:
        suppressed = type(exc.__context__).__name__

    print("5. with statement:", first, reader.closed, resource.closed, suppressed, sep=" | ")
    return first, suppressed


def demo_6_catch_multiple_exception_types() -> str:
    """One handler for several unrelated exception types."""
    try:
        module = importlib.import_module(__name__)
        getattr(module, "main")()
    except (ImportError, AttributeError, TypeError) as exc:
        traceback.print_exc()
        caught = type(exc).__name__
    else:
        caught = "none"
    print("6. multi-catch:", caught)
    return caught


def invoke(module_name: str, attribute: str, *args: Any) -> Any:
    """Import ``module_name`` and call ``attribute`` on it.

    Every lookup failure surfaces as :class:`ReflectiveOperationError`, with
    the original exception chained as its cause.
    """
    try:
        module = importlib.import_module(module_name)
        target = getattr(module, attribute)
    except (ImportError, AttributeError) as exc:
        raise ReflectiveOperationError(f"cannot resolve {module_name}.{attribute}") from exc
    if not callable(target):
        raise ReflectiveOperationError(f"{module_name}.{attribute} is not callable")
    return target(*args)


def demo_7_reflective_exception_base() -> str:
    """Catch one broader exception type instead of listing every cause."""
    try:
        invoke(__name__, "main")
    except ReflectiveOperationError as exc:
        traceback.print_exc()
        cause = type(exc.__cause__).__name__
    else:
        cause = "none"
    print("7. reflective base:", cause)
    return cause


class Holder:
    """Wraps a possibly-None value; equality and hash delegate to it."""

    def __init__(self, value: Optional[str]) -> None:
        self.value = value

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if other is None or type(self) is not type(other):
            return False
        return self.value == other.value  # None == None holds without a guard

    def __hash__(self) -> int:
        return hash(self.value)  # or: hash((one, two, three))


def demo_8_null_safe_equality() -> tuple[bool, bool]:
    """Equality and hashing that tolerate a missing value."""
    both_empty = Holder(None) == Holder(None)
    hashed = hash(Holder(None)) == hash(Holder(None))
    print("8. null-safe equality:", both_empty, hashed, Holder("a") == Holder(None), sep=" | ")
    return both_empty, hashed


def to_string(value: object, default: str) -> str:
    return default if value is None else str(value)


def demo_9_null_safe_to_string() -> tuple[str, str]:
    """``str(None)`` gives "None"; ``to_string`` substitutes a default."""
    s = None
    plain = str(s)
    defaulted = to_string(s, "")
    print("9. null-safe str:", plain, repr(defaulted), sep=" | ")
    return plain, defaulted


def compare(x: int, y: int) -> int:
    """Three-way comparison; ``x - y`` would overflow for fixed-width ints."""
    return (x > y) - (x < y)


def demo_10_compare_numeric_types() -> int:
    """``compare(-1, MIN_INT)`` is 1; in 32 bits ``MIN_INT - 1`` wraps to a positive."""
    min_int = -(2**31)
    result = compare(-1, min_int)
    print("10. compare:", result, as_signed(min_int - 1, 32), sep=" | ")
    return result


def require_non_null(obj: Optional[T], message: str = "obj must not be null") -> T:
    if obj is None:
        raise TypeError(message)
    return obj


def demo_11_require_non_null() -> str:
    """Fail fast with a descriptive message instead of later on first use."""
    try:
        require_non_null(None, "obj must not be null")
    except TypeError as exc:
        message = str(exc)
    print("11. require non-null:", message)
    return message


def demo_12_log_message() -> str:
    """Emit a fixed message through the playground logger."""
    logger.info("message")
    print("12. log message: sent to", logger.name)
    return logger.name


def bit_set(data: bytes) -> set[int]:
    """Return the indices of set bits, reading bytes little-endian."""
    value = int.from_bytes(data, "little")
    return {index for index in range(value.bit_length()) if value >> index & 1}


def demo_13_bit_set() -> set[int]:
    """0b10101100 sets bits 2, 3, 5 and 7; 0b00101000 sets bits 11 and 13."""
    first_byte = 0b10101100
    second_byte = 0b00101000
    bits = bit_set(bytes([first_byte, second_byte]))
    print("13. bit set:", sorted(bits))
    return bits


def run_all(settings: Settings | None = None) -> None:
    """Execute every older-release language demo."""
    settings = settings or Settings()
    root = settings.ensure_root()
    sample = root / "myFile.txt"
    if not sample.exists():
        sample.write_text("first line\nsecond line\n", encoding="utf-8")

    demos: list[Callable[[], object]] = [
        demo_1_binary_literals,
        demo_2_underscores_in_numeric_literals,
        demo_3_string_switch,
        demo_4_type_inference_for_containers,
        lambda: demo_5_with_statement(sample),
        demo_6_catch_multiple_exception_types,
        demo_7_reflective_exception_base,
        demo_8_null_safe_equality,
        demo_9_null_safe_to_string,
        demo_10_compare_numeric_types,
        demo_11_require_non_null,
        demo_12_log_message,
        demo_13_bit_set,
    ]
    for demo in demos:
        demo()


if __name__ == "__main__":
    run_all()
