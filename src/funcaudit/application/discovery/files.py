"""Source file discovery under a root directory."""

from __future__ import annotations

import logging
import os
import subprocess
from dataclasses import dataclass
from enum import Enum
from pathlib import Path, PurePosixPath
from typing import TYPE_CHECKING

from funcaudit.domain.exceptions import FatalConfigurationError
from funcaudit.domain.findings import AnalysisWarning, WarningKind

if TYPE_CHECKING:
    from funcaudit.domain.config import AuditConfig

logger = logging.getLogger(__name__)


class DiscoveryMethod(Enum):
    """How files were enumerated."""

    GIT = "git"
    WALK = "walk"


@dataclass(frozen=True, slots=True)
class DiscoveryResult:
    """Discovered files and non-fatal problems.

    Attributes:
        files: Relative POSIX paths, sorted
        warnings: Unreadable directories skipped during the walk
        method: Enumeration strategy used
    """

    files: tuple[str, ...]
    warnings: tuple[AnalysisWarning, ...] = ()
    method: DiscoveryMethod = DiscoveryMethod.WALK


def discover_files(root: Path, config: AuditConfig) -> DiscoveryResult:
    """Find analyzable source files under root.

    Uses `git ls-files` (tracked plus untracked, ignored included) when allowed and
    root is inside a work tree, otherwise walks the directory tree.

    Args:
        root: Directory to scan
        config: Extensions and excluded directory names

    Returns:
        DiscoveryResult with sorted relative paths

    Raises:
        FatalConfigurationError: If root does not exist or is not a directory
    """
    if not root.exists():
        raise FatalConfigurationError(root=str(root), reason="does not exist.")
    if not root.is_dir():
        raise FatalConfigurationError(root=str(root), reason="is not a directory.")

    if config.prefer_git:
        listed = _list_with_git(root)
        if listed is not None:
            files = sorted(
                path for path in listed if _accepts(path, config) and (root / path).is_file()
            )
            logger.debug("git listed %d source files under %s", len(files), root)
            return DiscoveryResult(files=tuple(files), method=DiscoveryMethod.GIT)

    warnings: list[AnalysisWarning] = []
    files = sorted(_walk(root, config, warnings))
    logger.debug("walk found %d source files under %s", len(files), root)
    return DiscoveryResult(files=tuple(files), warnings=tuple(warnings), method=DiscoveryMethod.WALK)


def _accepts(path: str, config: AuditConfig) -> bool:
    """Check extension and excluded directory components."""
    pure = PurePosixPath(path)
    if pure.suffix.lower() not in config.extensions:
        return False
    return not any(part in config.exclude_dirs for part in pure.parts[:-1])


def _list_with_git(root: Path) -> list[str] | None:
    """Relative paths from git, None when git is unavailable or root is no work tree.

    Ignored files are listed too; exclusion is left to exclude_dirs so the
    result matches the directory walk.
    """
    try:
        proc = subprocess.run(
            ["git", "ls-files", "--cached", "--others", "-z"],
            cwd=root,
            check=True,
            capture_output=True,
        )
    except FileNotFoundError:
        logger.debug("git executable not found, walking %s", root)
        return None
    except subprocess.CalledProcessError as e:
        logger.debug("git ls-files failed in %s: %s", root, os.fsdecode(e.stderr).strip())
        return None

    try:
        # names decode like Path.iterdir() entries, undecodable bytes escaped
        names = [os.fsdecode(raw) for raw in proc.stdout.split(b"\0") if raw]
    except UnicodeDecodeError as e:
        logger.debug("undecodable path from git in %s (%s), walking instead", root, e)
        return None
    # dict preserves order; --cached and --others may overlap on unmerged paths
    return list(dict.fromkeys(names))


def _walk(root: Path, config: AuditConfig, warnings: list[AnalysisWarning]) -> list[str]:
    """Iterative directory walk collecting matching files.

    Unreadable directories are recorded as warnings and skipped.
    Symlinked directories are not followed.
    """
    found: list[str] = []
    stack: list[Path] = [root]

    while stack:
        directory = stack.pop()
        try:
            entries = sorted(directory.iterdir())
        except OSError as e:
            relative = directory.relative_to(root).as_posix()
            message = e.strerror or str(e)
            logger.warning("skipping unreadable directory %s: %s", relative, message)
            warnings.append(
                AnalysisWarning(kind=WarningKind.FILESYSTEM, path=relative, message=message)
            )
            continue

        for entry in entries:
            if entry.is_dir():
                if entry.is_symlink() or entry.name in config.exclude_dirs:
                    continue
                stack.append(entry)
            elif entry.suffix.lower() in config.extensions and entry.is_file():
                found.append(entry.relative_to(root).as_posix())

    return found
