"""Exception hierarchy for the playground catalog.

Every playground-specific exception inherits from :class:`PlaygroundError`
so that the runner can tell catalog failures apart from the I/O, HTTP and
subprocess errors that the demos let propagate unchanged.
"""


class PlaygroundError(Exception):
    """Base exception for all playground demos."""


class InvalidDayError(PlaygroundError, ValueError):
    """Raised when a day name does not match any day of the week."""

    def __init__(self, day: object) -> None:
        super().__init__(f"Invalid day of the week: {day}")
        self.day = day


class ReflectiveOperationError(PlaygroundError, LookupError):
    """Raised when a module or attribute cannot be looked up dynamically.

    Import failures, missing attributes and non-callable targets are all
    reported through this single type so callers need only one handler.
    """
