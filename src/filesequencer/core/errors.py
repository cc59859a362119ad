"""Exceptions raised by filesequencer."""

from __future__ import annotations

from pathlib import Path


class FileSequencerError(Exception):
    """Base class for all filesequencer failures."""


class InvalidStartingPathError(FileSequencerError):
    """The working directory is empty or too close to the filesystem root."""

    def __init__(self, path: Path | str) -> None:
        self.path = path
        super().__init__(f"Bad starting path: [{path}]")


class MoveFailureError(FileSequencerError):
    """A rename/move could not be performed. The run stops without rollback."""

    def __init__(self, source: Path, destination: Path, reason: str = "") -> None:
        self.source = source
        self.destination = destination
        self.reason = reason
        msg = f"Cannot move file: {source} -> {destination}"
        if reason:
            msg += f" ({reason})"
        super().__init__(msg)
