"""Runtime settings for the playground runner."""

from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Mapping

DEFAULT_URL = "http://www.google.de"
DEFAULT_PROCESS_TIMEOUT = 3.0
ENV_PREFIX = "PLAYGROUND_"

_TRUTHY = {"1", "true", "yes", "on"}


def default_root() -> Path:
    """Return the scratch directory used by the file and process demos."""
    return Path(tempfile.gettempdir()) / "playground"


@dataclass(frozen=True)
class Settings:
    """Where the demos may write, what they fetch, and how long they wait."""

    root: Path = field(default_factory=default_root)
    url: str = DEFAULT_URL
    process_timeout: float = DEFAULT_PROCESS_TIMEOUT
    offline: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        """Build settings from ``PLAYGROUND_*`` environment variables.

        Unset variables keep their defaults. A malformed timeout raises
        :class:`ValueError` rather than silently falling back.
        """

        env = os.environ if environ is None else environ
        settings = cls()
        overrides: dict[str, object] = {}
        if root := env.get(f"{ENV_PREFIX}ROOT"):
            overrides["root"] = Path(root).expanduser()
        if url := env.get(f"{ENV_PREFIX}URL"):
            overrides["url"] = url
        if timeout := env.get(f"{ENV_PREFIX}PROCESS_TIMEOUT"):
            value = float(timeout)
            if value <= 0:
                raise ValueError(f"{ENV_PREFIX}PROCESS_TIMEOUT must be positive, got {timeout!r}")
            overrides["process_timeout"] = value
        if offline := env.get(f"{ENV_PREFIX}OFFLINE"):
            overrides["offline"] = offline.strip().lower() in _TRUTHY
        if level := env.get(f"{ENV_PREFIX}LOG_LEVEL"):
            overrides["log_level"] = level.upper()
        return replace(settings, **overrides)

    def ensure_root(self) -> Path:
        """Create the scratch directory if needed and return it."""
        self.root.mkdir(parents=True, exist_ok=True)
        return self.root
