"""Path manipulation and file handling probes.

Pure path demos use :class:`~pathlib.PurePosixPath` so the quoted results do
not depend on the host platform. File demos work below a caller-supplied
directory and open every handle in a ``with`` block.
"""

from __future__ import annotations

import os
import posixpath
import shutil
import sys
import tempfile
from pathlib import Path, PurePosixPath
from typing import BinaryIO, Optional

import httpx

from .logs import get_logger
from .settings import Settings

CHUNK_SIZE = 64 * 1024

logger = get_logger("paths_files")


def demo_1_path_objects() -> dict[str, str]:
    """Build, resolve, relativize and normalize paths.

    ``relativize`` and ``normalize`` go through :mod:`posixpath` because
    ``PurePath`` never collapses ``..`` without touching the filesystem.
    """
    absolute = PurePosixPath("/", "home", "sevenlist")
    relative = PurePosixPath("subdir", "next-subdir", "some.properties")
    home_directory = PurePosixPath("/home/sevenlist")

    properties_path = home_directory / "subdir/nextsubdir/some.properties"
    sibling = home_directory.with_name("acme")  # /home/acme
    relativized = posixpath.relpath("/home/acme/foo", "/home/sevenlist")  # ../acme/foo
    normalized = posixpath.normpath("/home/sevenlist/../acme/./foo")  # /home/acme/foo

    results = {
        "absolute": str(absolute),
        "relative": str(relative),
        "resolved": str(properties_path),
        "sibling": str(sibling),
        "relativized": relativized,
        "normalized": normalized,
        "parent": str(home_directory.parent),
        "file_name": properties_path.name,
        "root": absolute.root,
    }
    print("1. paths:", results["sibling"], relativized, normalized, sep=" | ")
    return results


def demo_2_read_and_write_small_files(path: Path) -> list[str]:
    """Whole-file helpers for bytes, text and lines, including append."""
    content = path.read_bytes().decode("utf-8")
    path.write_bytes(content.encode("utf-8"))

    lines = path.read_text(encoding="utf-8").splitlines()
    path.write_text("".join(f"{line}\n" for line in lines), encoding="utf-8")

    with path.open("a", encoding="utf-8") as appender:
        appender.writelines(f"{line}\n" for line in lines)

    result = path.read_text(encoding="utf-8").splitlines()
    print("2. small files:", len(lines), len(result), sep=" | ")
    return result


def demo_3_read_and_write_large_files(path: Path, size: int = 3 * CHUNK_SIZE) -> int:
    """Buffered streams for content too large to hold in memory at once."""
    with path.open("wb") as out:
        remaining = size
        while remaining:
            chunk = min(remaining, CHUNK_SIZE)
            out.write(b"\x00" * chunk)
            remaining -= chunk

    total = 0
    with path.open("rb") as stream:
        while chunk := stream.read(CHUNK_SIZE):
            total += len(chunk)

    text_path = path.with_suffix(".txt")
    with text_path.open("w", encoding="utf-8") as writer:
        writer.write("seven\nlist\n")
    with text_path.open(encoding="utf-8") as reader:
        words = [line.rstrip("\n") for line in reader]

    print("3. large files:", total, words, sep=" | ")
    return total


def save_url_as_file(url: str, target: Path, client: Optional[httpx.Client] = None) -> int:
    """Stream the body of ``url`` into ``target`` and return the byte count.

    Like a plain copy, an existing ``target`` is an error. A partially written
    file is removed when the transfer fails.
    """

    owns_client = client is None
    client = client or httpx.Client(follow_redirects=True)
    written = 0
    try:
        with client.stream("GET", url) as response:
            response.raise_for_status()
            with target.open("xb") as out:
                try:
                    for chunk in response.iter_bytes():
                        out.write(chunk)
                        written += len(chunk)
                except BaseException:
                    out.close()
                    target.unlink(missing_ok=True)
                    raise
    finally:
        if owns_client:
            client.close()
    logger.debug("saved %s bytes from %s to %s", written, url, target)
    return written


def demo_4_save_url_as_file(url: str, target: Path, client: Optional[httpx.Client] = None) -> int:
    """Fetch a page and store it byte for byte."""
    written = save_url_as_file(url, target, client)
    print("4. url to file:", url, written, sep=" | ")
    return written


def demo_5_write_file_to_stream(path: Path, out: Optional[BinaryIO] = None) -> int:
    """Copy a file's bytes to an output stream, stdout by default."""
    if out is None:
        sys.stdout.flush()
        out = getattr(sys.stdout, "buffer", None)
    with path.open("rb") as source:
        if out is None:
            # text-only stdout, e.g. under redirect_stdout(io.StringIO())
            sys.stdout.write(source.read().decode("utf-8", errors="replace"))
            sys.stdout.flush()
        else:
            shutil.copyfileobj(source, out)
            out.flush()
    copied = path.stat().st_size
    print("\n5. file to stream:", copied)
    return copied


def demo_6_create_files_and_directories(root: Path) -> dict[str, Path]:
    """Directories (single and nested), a new empty file and a temp file."""
    single = root / "exists" / "does-not-exist"
    single.parent.mkdir(exist_ok=True)
    single.mkdir()  # parent must exist; fails if already present

    nested = root / "does-not-exist-1" / "does-not-exist-2"
    nested.mkdir(parents=True)

    new_file = root / "file.txt"
    new_file.touch(exist_ok=False)

    fd, temp_name = tempfile.mkstemp(suffix=".txt", dir=root)
    os.close(fd)

    created = {"directory": single, "directories": nested, "file": new_file, "temp": Path(temp_name)}
    print("6. create:", *(path.name for path in created.values()), sep=" | ")
    return created


def delete_if_exists(path: Path) -> bool:
    """Delete ``path`` and report whether it was there; ``unlink`` raises instead."""
    try:
        path.unlink()
    except FileNotFoundError:
        return False
    return True


def demo_7_copy_move_delete(root: Path) -> dict[str, bool]:
    """Copy with metadata, atomic rename, delete and recursive delete."""
    from_path = root / "from" / "path" / "file.txt"
    to_path = root / "to" / "path" / "file.txt"
    from_path.parent.mkdir(parents=True, exist_ok=True)
    to_path.parent.mkdir(parents=True, exist_ok=True)
    from_path.write_text("seven list\n", encoding="utf-8")
    to_path.write_text("stale\n", encoding="utf-8")

    shutil.copy2(from_path, to_path)  # replaces the target, keeps timestamps and mode
    copied = to_path.read_text(encoding="utf-8") == "seven list\n"

    moved_path = to_path.with_name("moved.txt")
    os.replace(to_path, moved_path)  # atomic on the same filesystem
    moved = moved_path.exists() and not to_path.exists()

    deleted = delete_if_exists(moved_path)
    deleted_again = delete_if_exists(moved_path)

    shutil.rmtree(root / "from")  # non-empty directory tree
    tree_removed = not (root / "from").exists()

    results = {
        "copied": copied,
        "moved": moved,
        "deleted": deleted,
        "deleted_again": deleted_again,
        "tree_removed": tree_removed,
    }
    print("7. copy/move/delete:", *results.values(), sep=" | ")
    return results


def run_all(settings: Settings | None = None) -> None:
    """Run the path and file demos inside a fresh scratch directory."""
    settings = settings or Settings()
    base = settings.ensure_root()
    with tempfile.TemporaryDirectory(dir=base, prefix="files-") as scratch:
        root = Path(scratch)
        names = root / "names.txt"
        names.write_text("seven\nlist\n", encoding="utf-8")

        demo_1_path_objects()
        demo_2_read_and_write_small_files(names)
        demo_3_read_and_write_large_files(root / "large-file.bin")
        page = root / "index.html"
        if settings.offline:
            logger.info("offline: skipping fetch of %s", settings.url)
            page.write_bytes(b"<html></html>\n")
        else:
            demo_4_save_url_as_file(settings.url, page)
        demo_5_write_file_to_stream(page)
        demo_6_create_files_and_directories(root)
        demo_7_copy_move_delete(root)


if __name__ == "__main__":
    run_all()
