"""
File access for governed project files.

The files touched here belong to the inspected project, not to Dev Guardian.
Writes are destructive overwrites with no backup; they go through a temp file
in the same directory followed by a rename, so an interrupted write never
leaves a half-written config behind.

Usage:
    from devguard.core.file_access import exists, read, write

    content = read(Path("tsconfig.json"))   # None if the file is missing
    write(Path("tsconfig.json"), canonical)
"""

import os
import tempfile
from pathlib import Path
from typing import Optional, Union


PathLike = Union[str, Path]


class FileWriteError(OSError):
    """The filesystem rejected a write to a governed file."""

    def __init__(self, path: Path, cause: OSError):
        self.path = path
        self.cause = cause
        super().__init__(cause.errno, f"Cannot write {path}: {cause.strerror or cause}")


def exists(path: PathLike) -> bool:
    """Check if a file exists at the given path."""
    return Path(path).exists()


def read(path: PathLike) -> Optional[str]:
    """
    Read a file as UTF-8 text.

    Undecodable bytes become U+FFFD and line endings are kept as they are,
    so any non-canonical content still fingerprints as a mismatch.

    Args:
        path: File to read

    Returns:
        Content with surrounding whitespace stripped, or None if the file
        does not exist
    """
    path = Path(path)
    if not path.exists():
        return None
    with open(path, 'r', encoding='utf-8', errors='replace', newline='') as f:
        return f.read().strip()


def write(path: PathLike, text: str) -> None:
    """
    Create or overwrite a file with text.

    Args:
        path: File to write
        text: Full new content

    Raises:
        FileWriteError: If the filesystem rejects the write (no retry)
    """
    path = Path(path)
    temp_path = None

    try:
        temp_fd, temp_name = tempfile.mkstemp(
            prefix=f".tmp_{path.name}_",
            dir=path.parent,
            suffix=".tmp"
        )
        temp_path = Path(temp_name)

        with os.fdopen(temp_fd, 'w', encoding='utf-8', newline='') as f:
            f.write(text)
            f.flush()
            os.fsync(f.fileno())

        if path.exists():
            os.chmod(temp_path, path.stat().st_mode)

        os.replace(temp_path, path)

    except OSError as e:
        if temp_path is not None and temp_path.exists():
            temp_path.unlink()
        raise FileWriteError(path, e) from e
