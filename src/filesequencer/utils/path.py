"""
Path and file system utilities for filesequencer.

This module handles all path-related functionality including:
- Extension normalization and file classification
- Eligible file discovery for a single directory
- Numeric ordering of existing filenames
- Directory filtering and affected folder counting
- The starting path safety guard
"""

from __future__ import annotations

import os
import re
from collections import Counter
from collections.abc import Iterable
from pathlib import Path

from ..config import FileExtensions
from ..core.errors import InvalidStartingPathError
from ..core.types import EligibleFile, FileKind

# Stems that are not plain numbers (or overflow a 32-bit int) share this key
NON_NUMERIC_SORT_KEY = 2**31 - 1
UNKNOWN_EXT = ".unknown"

_NUMERIC_STEM = re.compile(r"[0-9]+")


def normalize_extension(ext: str) -> str:
    """Lower-case an extension and make sure it starts with a dot.

    Examples:
        "PNG" -> ".png"
        ".Jpg" -> ".jpg"
        "" -> ""
    """
    ext = ext.lower()
    if not ext:
        return ext
    return ext if ext.startswith(".") else f".{ext}"


def file_extension(path: Path) -> str:
    """Extension of the file name, leading dot included.

    Unlike `Path.suffix`, a name made only of a dot and an extension counts
    as that extension, and a trailing dot means no extension.

    Examples:
        "a.PNG" -> ".PNG"
        ".png" -> ".png"
        "archive." -> ""
    """
    name = path.name
    dot = name.rfind(".")
    if dot == -1 or dot == len(name) - 1:
        return ""
    return name[dot:]


def classify(path: Path, extensions: FileExtensions) -> FileKind | None:
    """Return the kind of file at `path`, or None if its extension is not recognized.

    Args:
        path (Path): File path; only the extension is inspected.
        extensions (FileExtensions): Allow-lists to test against.

    Returns:
        Optional[FileKind]: ANIMATED or STATIC for eligible files, else None.
    """
    ext = normalize_extension(file_extension(path))
    if ext in extensions.animated_exts:
        return FileKind.ANIMATED
    if ext in extensions.static_exts:
        return FileKind.STATIC
    return None


def list_eligible_files(directory: Path, extensions: FileExtensions) -> list[EligibleFile]:
    """List the eligible files directly inside `directory`.

    Subdirectories are not entered. Files come back in the order the file
    system returns them.

    Args:
        directory (Path): Directory to scan.
        extensions (FileExtensions): Allow-lists to filter with.

    Returns:
        List[EligibleFile]: Matching files with absolute paths.
    """
    found: list[EligibleFile] = []
    base = directory.resolve()
    with os.scandir(base) as entries:
        for entry in entries:
            if not entry.is_file():
                continue
            f_path = base / entry.name
            kind = classify(f_path, extensions)
            if kind is None:
                continue
            found.append(EligibleFile(path=f_path, ext=normalize_extension(file_extension(f_path)), kind=kind))
    return found


def numeric_sort_key(path: Path) -> int:
    """Sort key from a filename stem: its integer value, or NON_NUMERIC_SORT_KEY.

    Examples:
        "12.png" -> 12
        "007.jpg" -> 7
        "b.png" -> NON_NUMERIC_SORT_KEY
    """
    stem = path.stem
    if not _NUMERIC_STEM.fullmatch(stem):
        return NON_NUMERIC_SORT_KEY
    return min(int(stem), NON_NUMERIC_SORT_KEY)


def order_files(files: Iterable[EligibleFile]) -> list[EligibleFile]:
    """Sort files by their numeric stem; non-numeric names keep their relative order at the end."""
    return sorted(files, key=lambda f: numeric_sort_key(f.path))


def count_extensions(files: Iterable[EligibleFile | Path]) -> Counter[str]:
    """Count files per lower-cased extension, in first-seen order."""
    counts: Counter[str] = Counter()
    for f in files:
        path = f.path if isinstance(f, EligibleFile) else f
        counts[file_extension(path).lower() or UNKNOWN_EXT] += 1
    return counts


def should_skip_dir(dirname: str, animated_dir_name: str) -> bool:
    """Directories created by the renamer itself are never traversed."""
    return dirname.rstrip("\\/") == animated_dir_name


def iter_child_dirs(directory: Path, animated_dir_name: str) -> list[Path]:
    """Immediate subdirectories of `directory` that may be traversed."""
    with os.scandir(directory) as entries:
        return [
            directory / entry.name
            for entry in entries
            if entry.is_dir() and not should_skip_dir(entry.name, animated_dir_name)
        ]


def count_affected_folders(directory: Path, animated_dir_name: str) -> int:
    """Count every descendant directory a recursive run would visit.

    The starting directory itself is not counted, and reserved directories are
    neither counted nor entered.
    """
    children = iter_child_dirs(directory, animated_dir_name)
    return len(children) + sum(count_affected_folders(d, animated_dir_name) for d in children)


def path_depth(path: Path | str) -> int:
    """Number of path separators in `path`."""
    s = str(path)
    depth = s.count(os.sep)
    if os.altsep:
        depth += s.count(os.altsep)
    return depth


def assert_valid_start(path: Path | str, min_depth: int) -> None:
    """Refuse to operate on an empty path or one too close to the filesystem root.

    Raises:
        InvalidStartingPathError: If the path is blank or has fewer than `min_depth` separators.
    """
    if not str(path).strip() or path_depth(path) < min_depth:
        raise InvalidStartingPathError(path)
