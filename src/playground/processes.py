"""External processes and scoped module loading from archives."""

from __future__ import annotations

import importlib
import subprocess
import sys
import zipfile
import zipimport
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator, Sequence

from .logs import get_logger
from .settings import DEFAULT_PROCESS_TIMEOUT, Settings

IDENTIFIER_PATTERN = "[A-Za-z_][A-Za-z_0-9]*"

logger = get_logger("processes")


def start_process(source: Path, output: Path, timeout: float = DEFAULT_PROCESS_TIMEOUT) -> bool:
    """Extract identifiers from ``source`` into ``output`` with ``grep -o``.

    Stdin and stdout are redirected to files. Returns ``False`` when the
    process does not finish within ``timeout`` seconds; it is killed then.
    """

    with source.open("rb") as stdin, output.open("wb") as stdout:
        process = subprocess.Popen(["grep", "-o", IDENTIFIER_PATTERN], stdin=stdin, stdout=stdout)
        try:
            process.wait(timeout=timeout)
        except subprocess.TimeoutExpired:
            logger.warning("grep did not finish within %ss; killing pid %s", timeout, process.pid)
            process.kill()
            process.wait()
            return False
    return True


def list_directory(directory: Path) -> int:
    """Run ``ls -al`` sharing this process's stdin, stdout and stderr."""
    sys.stdout.flush()
    return subprocess.run(["ls", "-al"], cwd=directory, check=False).returncode


def demo_1_start_process(root: Path, timeout: float = DEFAULT_PROCESS_TIMEOUT) -> bool:
    """Redirect a child process's input and output to files, with a deadline."""
    output = root / "identifiers.txt"
    completed = start_process(Path(__file__), output, timeout)
    count = len(output.read_text(encoding="utf-8").splitlines()) if completed else 0
    print("1. start process:", completed, count, sep=" | ")
    return completed


def demo_2_inherit_io(root: Path) -> int:
    """Let a child process write straight to the console."""
    status = list_directory(root)
    print("2. inherit io:", status)
    return status


@contextmanager
def archive_loader(archives: Sequence[Path]) -> Iterator[Any]:
    """Make modules inside ``archives`` importable for the ``with`` block only.

    The cached directory of each archive is re-read on entry, so an archive
    rebuilt at the same path is seen afresh. On exit the archive entries are
    removed from the import path and every module loaded from them is dropped
    from :data:`sys.modules`.
    """

    entries = [str(archive) for archive in archives]
    for entry in entries:
        zipimport.zipimporter(entry).invalidate_caches()  # drop any stale directory index
    before = set(sys.modules)
    sys.path[:0] = entries
    importlib.invalidate_caches()
    try:
        yield importlib.import_module
    finally:
        for entry in entries:
            if entry in sys.path:
                sys.path.remove(entry)
            sys.path_importer_cache.pop(entry, None)
        for name in set(sys.modules) - before:
            origin = getattr(sys.modules[name], "__file__", None) or ""
            if any(origin.startswith(entry) for entry in entries):
                del sys.modules[name]


def build_archive(path: Path, module_name: str, source: str) -> Path:
    with zipfile.ZipFile(path, "w") as archive:
        archive.writestr(f"{module_name}.py", source)
    return path


def load_from_archives(archives: Sequence[Path], module_name: str, attribute: str) -> Any:
    """Resolve ``module_name.attribute`` from ``archives`` and call it."""
    with archive_loader(archives) as load:
        module = load(module_name)
        return getattr(module, attribute)()


def demo_3_load_from_archives(root: Path) -> str:
    """Load a module from a zip archive inside a scoped loader."""
    archive = build_archive(
        root / "greetings.zip",
        "greetings",
        'def greet():\n    return "hello from the archive"\n',
    )
    greeting = load_from_archives([archive], "greetings", "greet")
    print("3. archive loader:", greeting, "greetings" in sys.modules, sep=" | ")
    return greeting


def run_all(settings: Settings | None = None) -> None:
    """Run process and archive loading demos."""
    settings = settings or Settings()
    root = settings.ensure_root()
    demo_1_start_process(root, settings.process_timeout)
    demo_2_inherit_io(root)
    demo_3_load_from_archives(root)


if __name__ == "__main__":
    run_all()
