"""
Sequential renaming of eligible files.

Each directory is handled in one forward pass: eligible files are split into
static and animated partitions, ordered by their existing numeric names, and
renamed to 1, 2, 3, ... with the lower-cased extension kept. Animated files
can be moved into a reserved child directory with their own numbering.
"""

from __future__ import annotations

from pathlib import Path

from ..config import FileExtensions, RunConfig, TraversalSettings
from ..core.errors import MoveFailureError
from ..core.types import EligibleFile, FileKind, RenameSummary
from ..output.logger import SimpleLogger
from ..utils.path import iter_child_dirs, list_eligible_files, order_files


class Renamer:
    """Renames eligible files in a directory tree to sequential numbers."""

    def __init__(
        self,
        run: RunConfig,
        extensions: FileExtensions | None = None,
        traversal: TraversalSettings | None = None,
        logger: SimpleLogger | None = None,
    ) -> None:
        self.run = run
        self.extensions = extensions or FileExtensions()
        self.traversal = traversal or TraversalSettings()
        self.logger = logger
        self.summary = RenameSummary()

    def start(self) -> RenameSummary:
        """Process the starting directory (and its children in recursive mode)."""
        self.process_directory(self.run.start_path)
        return self.summary

    def process_directory(self, directory: Path) -> None:
        """Rename files in `directory`, after all traversable children are done."""
        if self.run.recursive:
            for child in iter_child_dirs(directory, self.traversal.animated_dir_name):
                self.process_directory(child)

        self.summary.directories += 1
        self.rename_files(directory)

    def partition(self, files: list[EligibleFile]) -> tuple[list[EligibleFile], list[EligibleFile]]:
        """Split files into (static, animated), each ordered by numeric name.

        Without animated separation everything lands in the static partition.
        """
        if not self.run.move_animated:
            return order_files(files), []
        static = [f for f in files if f.kind is FileKind.STATIC]
        animated = [f for f in files if f.kind is FileKind.ANIMATED]
        return order_files(static), order_files(animated)

    def rename_files(self, directory: Path) -> None:
        files = list_eligible_files(directory, self.extensions)
        if not files:
            return

        static, animated = self.partition(files)
        self.rename_sequence(static)

        if animated:
            target = self.animated_directory(directory)
            self.rename_sequence(animated, target, animated=True)

    def animated_directory(self, directory: Path) -> Path:
        """Return the reserved child directory, creating it on first use."""
        target = directory.resolve() / self.traversal.animated_dir_name
        try:
            target.mkdir(exist_ok=True)
        except OSError as ex:
            raise MoveFailureError(directory, target, f"{type(ex).__name__}: {ex}") from ex
        return target

    def rename_sequence(
        self, files: list[EligibleFile], target_dir: Path | None = None, animated: bool = False
    ) -> None:
        """Assign 1..N to the ordered `files` inside `target_dir` (default: where each file already is)."""
        for number, f in enumerate(files, 1):
            destination = (target_dir or f.parent) / f"{number}{f.ext}"
            if self.safe_move(f.path, destination):
                if animated:
                    self.summary.moved_animated += 1
                else:
                    self.summary.renamed += 1
            else:
                self.summary.skipped += 1

    def safe_move(self, source: Path, destination: Path) -> bool:
        """Move `source` to `destination`.

        Returns:
            bool: False when the file is already in place, True after a move.

        Raises:
            MoveFailureError: If the destination is taken by another file or the OS refuses.
        """
        if source.resolve() == destination.resolve():
            return False

        try:
            if destination.exists() and not destination.samefile(source):
                raise FileExistsError(f"destination exists: {destination}")
            source.rename(destination)
        except OSError as ex:
            raise MoveFailureError(source, destination, f"{type(ex).__name__}: {ex}") from ex

        if self.logger:
            self.logger.info(f"{source.name} -> {self._display(destination)}")
        return True

    def _display(self, path: Path) -> str:
        try:
            return path.relative_to(self.run.start_path).as_posix()
        except ValueError:
            return str(path)
