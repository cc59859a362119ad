"""
Core data types for filesequencer.

Eligible files are discovered per directory and consumed immediately by the
renamer; none of these types outlive a run.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class FileKind(str, Enum):
    """Whether an eligible file stays in place or may be separated."""

    STATIC = "static"
    ANIMATED = "animated"


@dataclass(frozen=True)
class EligibleFile:
    """A file whose extension is in one of the allow-lists."""

    path: Path
    ext: str  # lower-cased, leading dot
    kind: FileKind

    @property
    def parent(self) -> Path:
        return self.path.parent


@dataclass
class RenameSummary:
    """Counters accumulated over one renamer run."""

    directories: int = 0
    renamed: int = 0
    skipped: int = 0
    moved_animated: int = 0

    @property
    def total(self) -> int:
        return self.renamed + self.skipped + self.moved_animated
