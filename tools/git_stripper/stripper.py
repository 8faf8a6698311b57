"""Core logic for stripping git metadata out of first-level subdirectories."""

import os
import shutil
import stat
import sys
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, Iterator, List, Optional, Tuple

from shared.cli import echo
from shared.logger import get_logger

logger = get_logger(__name__)


class ArtifactKind(Enum):
    """Kind of git artifact removed from a subdirectory."""

    GIT_DIR = ".git"
    GITIGNORE_FILE = ".gitignore"

    @property
    def label(self) -> str:
        """Human-readable description used in announcements."""
        if self is ArtifactKind.GIT_DIR:
            return ".git directory"
        return ".gitignore file"


@dataclass
class Removal:
    """A single artifact the stripper acted on."""

    entry: str
    kind: ArtifactKind
    path: Path
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class StripResult:
    """Outcome of one pass over a root directory."""

    root: Path
    scanned: int = 0
    removals: List[Removal] = field(default_factory=list)

    @property
    def removed(self) -> List[Removal]:
        return [r for r in self.removals if r.ok]

    @property
    def failed(self) -> List[Removal]:
        return [r for r in self.removals if not r.ok]


def format_entry(directory: Path) -> str:
    """Render a subdirectory the way a shell ``*/`` glob would, e.g. ``a/``."""
    return f"{directory.name}{os.sep}"


def announcement(entry: str, kind: ArtifactKind) -> str:
    """Line printed before an artifact is removed."""
    return f"Removing {kind.label} from {entry}"


def _check(path: Path, predicate: Callable[[Path], bool]) -> bool:
    """Apply a type check, treating an unreadable path as absent."""
    try:
        return predicate(path)
    except OSError as e:
        logger.warning(f"Cannot inspect {path}: {e}")
        return False


def _make_writable_and_retry(func, path, exc) -> None:
    # Read-only objects inside .git (pack files on Windows) block unlink
    if func not in (os.unlink, os.remove, os.rmdir):
        # onerror passes an exc_info tuple, onexc the exception itself
        raise exc[1] if isinstance(exc, tuple) else exc
    os.chmod(path, os.lstat(path).st_mode | stat.S_IWRITE)
    func(path)


def _remove_tree(path: Path) -> None:
    if path.is_symlink():
        # Drop the link itself, never the directory it points to
        path.unlink()
        return

    if sys.version_info >= (3, 12):
        shutil.rmtree(path, onexc=_make_writable_and_retry)
    else:
        shutil.rmtree(path, onerror=_make_writable_and_retry)


class GitStripper:
    """
    Removes ``.git`` directories and ``.gitignore`` files one level below a root.

    Only direct children of the root are inspected. The root itself and anything
    nested deeper than one level is never touched. Removal is best effort: a
    failure is recorded and logged, and the pass continues with the next entry.

    Attributes:
        root: Directory whose subdirectories are cleaned
        announce: Callable receiving one line per artifact, before removal
    """

    def __init__(self, root: Path, announce: Optional[Callable[[str], None]] = None):
        """
        Initialize the stripper.

        Args:
            root: Directory whose first-level subdirectories are cleaned
            announce: Output sink for removal lines (defaults to stdout)
        """
        self.root = Path(root)
        self.announce = announce or echo

    def list_entries(self) -> List[Path]:
        """
        List the first-level subdirectories of the root.

        Hidden directories are skipped and symlinks to directories are
        included, like a shell ``*/`` glob. An entry that cannot be
        inspected is skipped with a warning.

        Returns:
            Subdirectories sorted by name, in code point order

        Raises:
            OSError: If the root cannot be listed
        """
        entries = [
            child
            for child in self.root.iterdir()
            if not child.name.startswith(".") and _check(child, Path.is_dir)
        ]
        entries.sort(key=lambda p: p.name)
        logger.debug(f"Found {len(entries)} subdirectories in {self.root}")
        return entries

    def targets_in(self, directory: Path) -> Iterator[Tuple[ArtifactKind, Path]]:
        """
        Yield the artifacts present in one subdirectory.

        A ``.git`` must be a directory and a ``.gitignore`` a regular file;
        symlinks are followed for the type check. A path that cannot be
        inspected counts as absent. Each check runs only when the generator
        reaches it.
        """
        git_dir = directory / ArtifactKind.GIT_DIR.value
        if _check(git_dir, Path.is_dir):
            yield ArtifactKind.GIT_DIR, git_dir

        gitignore = directory / ArtifactKind.GITIGNORE_FILE.value
        if _check(gitignore, Path.is_file):
            yield ArtifactKind.GITIGNORE_FILE, gitignore

    def find_targets(self) -> Iterator[Tuple[Path, ArtifactKind, Path]]:
        """Yield ``(subdirectory, kind, path)`` for every artifact, without removing."""
        for directory in self.list_entries():
            for kind, path in self.targets_in(directory):
                yield directory, kind, path

    def remove(self, directory: Path, kind: ArtifactKind, path: Path) -> Removal:
        """
        Announce and remove one artifact.

        Args:
            directory: Subdirectory holding the artifact
            kind: Artifact kind
            path: Full path of the artifact

        Returns:
            Removal record, with ``error`` set if the removal failed
        """
        entry = format_entry(directory)
        self.announce(announcement(entry, kind))

        try:
            if kind is ArtifactKind.GIT_DIR:
                _remove_tree(path)
            else:
                path.unlink()
        except OSError as e:
            logger.warning(f"Failed to remove {path}: {e}")
            return Removal(entry=entry, kind=kind, path=path, error=str(e))

        logger.debug(f"Removed {path}")
        return Removal(entry=entry, kind=kind, path=path)

    def run(self) -> StripResult:
        """
        Strip git artifacts from every first-level subdirectory.

        Each subdirectory is fully handled before the next one is looked at.

        Returns:
            StripResult describing what was removed and what failed
        """
        result = StripResult(root=self.root)
        logger.debug(f"Scanning {self.root}")

        for directory in self.list_entries():
            result.scanned += 1
            found = False

            for kind, path in self.targets_in(directory):
                found = True
                result.removals.append(self.remove(directory, kind, path))

            if not found:
                logger.debug(f"Nothing to remove in {directory.name}")

        logger.debug(
            f"Scanned {result.scanned} directories, removed {len(result.removed)}, "
            f"failed {len(result.failed)}"
        )
        return result


def strip_git_artifacts(
    root: Path, announce: Optional[Callable[[str], None]] = None
) -> StripResult:
    """Run a single pass of :class:`GitStripper` over ``root``."""
    return GitStripper(root, announce=announce).run()
