from __future__ import annotations

import contextlib
import io
import logging
import tempfile
import unittest
from pathlib import Path

from playground import classic
from playground.errors import InvalidDayError, PlaygroundError, ReflectiveOperationError


def quietly(fn, *args):
    with contextlib.redirect_stdout(io.StringIO()), contextlib.redirect_stderr(io.StringIO()):
        return fn(*args)


class LiteralTests(unittest.TestCase):
    def test_binary_literals_reinterpret_as_signed(self) -> None:
        values = quietly(classic.demo_1_binary_literals)
        self.assertEqual(values["byte"], 33)
        self.assertEqual(values["short"], -24251)
        self.assertLess(values["long"], 0)

    def test_as_signed_leaves_small_values_alone(self) -> None:
        self.assertEqual(classic.as_signed(0x7F, 8), 127)
        self.assertEqual(classic.as_signed(0x80, 8), -128)
        self.assertEqual(classic.as_signed(0xFFFF_FFFF, 32), -1)

    def test_underscores_do_not_change_values(self) -> None:
        values = quietly(classic.demo_2_underscores_in_numeric_literals)
        self.assertEqual(values["credit_card_number"], 1234567890123456)
        self.assertEqual(values["hex_words"], 0xCAFEBABE)
        self.assertEqual(values["max_long"], 2**63 - 1)
        self.assertEqual(values["nybbles"], 37)


class DaySwitchTests(unittest.TestCase):
    def test_demo_returns_midweek_for_thursday(self) -> None:
        self.assertEqual(quietly(classic.demo_3_string_switch), "Midweek")

    def test_every_day_has_a_category(self) -> None:
        expected = {
            "Monday": "Start of work week",
            "Tuesday": "Midweek",
            "Wednesday": "Midweek",
            "Friday": "End of work week",
            "Saturday": "Weekend",
            "Sunday": "Weekend",
        }
        for day, category in expected.items():
            with self.subTest(day=day):
                self.assertEqual(classic.day_category(day), category)

    def test_unknown_day_raises_value_error(self) -> None:
        with self.assertRaises(InvalidDayError) as ctx:
            classic.day_category("Funday")
        self.assertIsInstance(ctx.exception, ValueError)
        self.assertIsInstance(ctx.exception, PlaygroundError)
        self.assertEqual(str(ctx.exception), "Invalid day of the week: Funday")


class ResourceAndExceptionTests(unittest.TestCase):
    def test_with_statement_reads_first_line(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "myFile.txt"
            path.write_text("first\nsecond\n", encoding="utf-8")
            self.assertEqual(quietly(classic.demo_5_with_statement, path), ("first", "RuntimeError"))

    def test_with_statement_on_empty_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "empty.txt"
            path.touch()
            first, _ = quietly(classic.demo_5_with_statement, path)
            self.assertIsNone(first)

    def test_tracked_resource_closes_when_body_fails(self) -> None:
        resource = classic.TrackedResource("plain")
        with self.assertRaises(RuntimeError):
            with resource:
                raise RuntimeError("boom")
        self.assertTrue(resource.closed)

    def test_error_on_close_keeps_body_error_as_context(self) -> None:
        resource = classic.TrackedResource("failing", fail_on_close=True)
        with self.assertRaises(OSError) as ctx:
            with resource:
                raise RuntimeError("body failed")
        self.assertTrue(resource.closed)
        self.assertIsInstance(ctx.exception.__context__, RuntimeError)
        self.assertEqual(str(ctx.exception.__context__), "body failed")

    def test_multi_catch_reports_missing_attribute(self) -> None:
        self.assertEqual(quietly(classic.demo_6_catch_multiple_exception_types), "AttributeError")

    def test_reflective_base_chains_cause(self) -> None:
        self.assertEqual(quietly(classic.demo_7_reflective_exception_base), "AttributeError")

    def test_invoke_wraps_import_failures(self) -> None:
        with self.assertRaises(ReflectiveOperationError) as ctx:
            classic.invoke("playground.does_not_exist", "main")
        self.assertIsInstance(ctx.exception.__cause__, ImportError)
        self.assertIsInstance(ctx.exception, LookupError)

    def test_invoke_calls_resolved_attribute(self) -> None:
        self.assertEqual(classic.invoke("playground.classic", "compare", 2, 1), 1)

    def test_invoke_rejects_non_callables(self) -> None:
        with self.assertRaises(ReflectiveOperationError):
            classic.invoke("playground.classic", "logger")


class NullSafetyTests(unittest.TestCase):
    def test_holder_equality_and_hash(self) -> None:
        self.assertEqual(quietly(classic.demo_8_null_safe_equality), (True, True))
        self.assertNotEqual(classic.Holder("a"), classic.Holder(None))
        self.assertNotEqual(classic.Holder("a"), "a")

    def test_to_string(self) -> None:
        self.assertEqual(quietly(classic.demo_9_null_safe_to_string), ("None", ""))
        self.assertEqual(classic.to_string(5, ""), "5")

    def test_compare_has_no_overflow(self) -> None:
        self.assertEqual(quietly(classic.demo_10_compare_numeric_types), 1)
        self.assertEqual(classic.compare(3, 3), 0)
        self.assertEqual(classic.compare(-(2**31), 1), -1)

    def test_require_non_null(self) -> None:
        self.assertEqual(quietly(classic.demo_11_require_non_null), "obj must not be null")
        self.assertEqual(classic.require_non_null("x"), "x")
        with self.assertRaisesRegex(TypeError, "must not be null"):
            classic.require_non_null(None)


class LoggingAndBitsTests(unittest.TestCase):
    def test_log_message_is_emitted_at_info(self) -> None:
        with self.assertLogs("playground.classic", level=logging.INFO) as captured:
            quietly(classic.demo_12_log_message)
        self.assertEqual(captured.records[0].getMessage(), "message")

    def test_bit_set_little_endian(self) -> None:
        self.assertEqual(quietly(classic.demo_13_bit_set), {2, 3, 5, 7, 11, 13})
        self.assertEqual(classic.bit_set(b""), set())


class RunAllTests(unittest.TestCase):
    def test_run_all_creates_sample_file(self) -> None:
        from playground.settings import Settings

        with tempfile.TemporaryDirectory() as tmp:
            settings = Settings(root=Path(tmp) / "scratch")
            quietly(classic.run_all, settings)
            self.assertTrue((settings.root / "myFile.txt").exists())


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
