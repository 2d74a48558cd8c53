"""A catalog of short, independent language-feature demonstrations.

Each snippet module exposes numbered ``demo_*`` functions and a ``run_all``
entry point. ``python -m playground`` runs them in a stable order.
"""

from __future__ import annotations

from .errors import InvalidDayError, PlaygroundError, ReflectiveOperationError
from .people import Person
from .settings import Settings

__all__ = [
    "InvalidDayError",
    "Person",
    "PlaygroundError",
    "ReflectiveOperationError",
    "Settings",
]

__version__ = "0.1.0"
