"""Entry point for the playground catalog.

Running ``python -m playground`` executes every module's ``run_all`` function
in a stable order. Each module prints numbered lines, so a missing demo is
obvious when reading the output.

To add a new module:
1. Create ``<topic>.py`` with numbered ``demo_*`` functions and a
   ``run_all(settings)``.
2. Append the module name to ``MODULE_NAMES``.
"""

from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from importlib import import_module
from pathlib import Path
from typing import Callable, Optional

from colored import attr, fg

from .logs import configure_logging, get_logger
from .settings import Settings

MODULE_NAMES = (
    "classic",
    "paths_files",
    "processes",
    "people",
    "modern",
    "functional",
)

Runner = Callable[[Optional[Settings]], None]

HEADER_COLOR = fg("cyan")
FAILURE_COLOR = fg("red")
RESET = attr("reset")

logger = get_logger("runner")


def load_runner(module_name: str) -> Runner:
    if module_name not in MODULE_NAMES:
        raise ValueError(f"unknown module {module_name!r}; choose from {', '.join(MODULE_NAMES)}")
    module = import_module(f"{__package__}.{module_name}")
    return module.run_all


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="playground", description=__doc__.splitlines()[0])
    parser.add_argument("modules", nargs="*", metavar="MODULE", help="modules to run (default: all)")
    parser.add_argument("--list", action="store_true", help="list the available modules and exit")
    parser.add_argument("--root", type=Path, help="scratch directory for file and process demos")
    parser.add_argument("--offline", action="store_true", help="skip demos that need the network")
    return parser


def run_modules(names: list[str], settings: Settings) -> list[str]:
    """Run each module, logging failures and carrying on; return failed names."""
    failed: list[str] = []
    for name in names:
        print(f"{HEADER_COLOR}== Running {name} =={RESET}")
        try:
            load_runner(name)(settings)
        except Exception:
            logger.exception("%s== %s failed ==%s", FAILURE_COLOR, name, RESET)
            failed.append(name)
    return failed


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv if argv is not None else sys.argv[1:])
    if args.list:
        print("\n".join(MODULE_NAMES))
        return 0

    settings = Settings.from_env()
    if args.root is not None:
        settings = replace(settings, root=args.root)
    if args.offline:
        settings = replace(settings, offline=True)
    configure_logging(settings.log_level)

    names = args.modules or list(MODULE_NAMES)
    unknown = [name for name in names if name not in MODULE_NAMES]
    if unknown:
        logger.error("unknown module(s): %s", ", ".join(unknown))
        return 2

    failed = run_modules(names, settings)
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
