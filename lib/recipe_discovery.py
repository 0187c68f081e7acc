"""Recipe file discovery - walk a recipe tree and yield .cook files."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, Optional

logger = logging.getLogger(__name__)

RECIPE_EXTENSION = ".cook"


@dataclass(frozen=True)
class SkippedEntry:
    """A file or directory that could not be read during a scan."""
    path: Path
    reason: str


@dataclass
class SkipPolicy:
    """Records unreadable entries instead of aborting the scan.

    One bad file (permissions, broken symlink, binary content) must not
    stop the rest of the tree from being indexed. Every skipped entry is
    kept here so callers can report it.
    """
    skipped: list[SkippedEntry] = field(default_factory=list)

    def record(self, path, error: BaseException) -> None:
        reason = f"{type(error).__name__}: {error}"
        self.skipped.append(SkippedEntry(path=Path(path), reason=reason))
        logger.debug("Skipping %s (%s)", path, reason)


def is_recipe_file(path: Path) -> bool:
    """True when the extension is exactly .cook (case-sensitive).

    "soup.cook.bak" and "soup.COOK" are not recipes.
    """
    return path.suffix == RECIPE_EXTENSION


def iter_recipe_files(
    root: Path,
    skip_policy: Optional[SkipPolicy] = None,
) -> Iterator[Path]:
    """Recursively yield recipe files under root, following symlinks.

    Directory entries are visited in sorted order. A directory reachable
    through several symlinks is scanned under each of its paths; only a
    link back to one of its own ancestors (a cycle) is not followed.

    Args:
        root: Directory to scan
        skip_policy: Receives entries that could not be read. A fresh
            policy is used when omitted.

    Yields:
        Paths of regular files with the .cook extension, rooted at root.
    """
    if skip_policy is None:
        skip_policy = SkipPolicy()

    root = Path(root)
    # Real paths of each pending directory's ancestors, keyed by walk path
    ancestors_of: dict[str, frozenset[str]] = {os.fspath(root): frozenset()}

    def on_error(error: OSError) -> None:
        skip_policy.record(error.filename or root, error)

    for dirpath, dirnames, filenames in os.walk(root, onerror=on_error, followlinks=True):
        chain = ancestors_of.pop(dirpath, frozenset()) | {os.path.realpath(dirpath)}

        kept = []
        for name in sorted(dirnames):
            child = os.path.join(dirpath, name)
            if os.path.realpath(child) in chain:
                # Symlink cycle back to an ancestor
                continue
            ancestors_of[child] = chain
            kept.append(name)
        dirnames[:] = kept

        for filename in sorted(filenames):
            path = Path(dirpath) / filename
            if not is_recipe_file(path):
                continue
            try:
                if not path.is_file():
                    if path.is_symlink():
                        raise FileNotFoundError(2, "Broken symbolic link", str(path))
                    raise OSError(f"Not a regular file: {path}")
            except OSError as e:
                skip_policy.record(path, e)
                continue
            yield path
