"""Walk a checked-out repository and return its text files."""

import logging
import os
from collections.abc import Iterator
from pathlib import Path

from menta.errors import FetchError
from menta.models import FileEntry

logger = logging.getLogger(__name__)

SKIP_DIRS = frozenset({".git"})


def _iter_files(root: Path) -> Iterator[Path]:
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = [d for d in dirnames if d not in SKIP_DIRS]
        for name in filenames:
            yield Path(dirpath) / name


def read_repository(root: Path | str = ".") -> list[FileEntry]:
    """Return every UTF-8 text file under root, sorted by relative path.

    Sorting keeps the prompt byte-identical regardless of the order the
    filesystem lists directories in. Binary files are skipped.
    """
    root = Path(root)
    if not root.is_dir():
        raise FetchError(f"Repository root {root} is not a directory")

    entries: list[FileEntry] = []
    for path in _iter_files(root):
        if not path.is_file():
            continue
        rel = path.relative_to(root).as_posix()
        try:
            contents = path.read_bytes().decode("utf-8")
        except UnicodeDecodeError:
            logger.debug("Skipping non-text file %s", rel)
            continue
        except OSError as exc:
            raise FetchError(f"Cannot read {rel}: {exc}") from exc
        entries.append(FileEntry(path=rel, contents=contents))

    return sorted(entries, key=lambda e: e.path)
