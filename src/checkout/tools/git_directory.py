"""Decide whether an existing workspace directory can be reused for checkout.

A CI job may find its workspace already populated by an earlier run.  When the
directory still holds a working copy of the *same* repository it is cheaper to
reuse it: stale ``*.lock`` files are removed, the working tree is optionally
cleaned and reset, ``HEAD`` is detached and every local and remote-tracking
branch is deleted so the upcoming fetch starts from a neutral state.  Anything
else (no ``.git`` directory, no git tooling, an unreadable or foreign remote,
a failed clean/reset or branch cleanup) causes the directory contents to be discarded.

The decision runs as a linear sequence of gates; the first gate that fails
returns a :class:`PreparationResult` describing the discard.
"""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Iterable, List

from .vcs import GitCommandManager

LOGGER = logging.getLogger(__name__)

_CLEAN_FAILED_MESSAGE = "Unable to clean or reset the repository at {path}. The repository will be recreated instead."
_REUSE_FAILED_MESSAGE = "Unable to prepare the existing repository at {path} ({error}). The repository will be recreated instead."

__all__ = [
    "DirectoryOutcome",
    "PreparationResult",
    "prepare_existing_directory",
    "remove_directory_contents",
    "remove_lock_files",
]


class DirectoryOutcome(str, Enum):
    """Final state of the prepared directory."""

    REUSED = "reused"
    DISCARDED = "discarded"


@dataclass(frozen=True, slots=True)
class PreparationResult:
    """Report emitted after reconciling an existing directory."""

    outcome: DirectoryOutcome
    reason: str
    removed_lock_files: tuple[Path, ...] = ()
    deleted_branches: tuple[tuple[bool, str], ...] = ()
    remote_url_updated: bool = False
    warnings: tuple[str, ...] = ()

    @property
    def reused(self) -> bool:
        return self.outcome is DirectoryOutcome.REUSED


def remove_directory_contents(path: Path | str) -> None:
    """Delete every entry inside ``path`` while keeping ``path`` itself."""

    root = Path(path)
    for entry in sorted(root.iterdir()):
        if entry.is_dir() and not entry.is_symlink():
            shutil.rmtree(entry)
        else:
            entry.unlink(missing_ok=True)


def remove_lock_files(git_dir: Path | str) -> List[Path]:
    """Remove ``*.lock`` files directly inside ``git_dir`` and return them."""

    removed: List[Path] = []
    for candidate in sorted(Path(git_dir).glob("*.lock")):
        if candidate.is_dir() and not candidate.is_symlink():
            continue
        LOGGER.debug("Removing stale lock file %s", candidate)
        candidate.unlink(missing_ok=True)
        removed.append(candidate)
    return removed


def prepare_existing_directory(
    git: GitCommandManager | None,
    repository_path: Path | str,
    repository_url: str,
    valid_remote_urls: Iterable[str],
    clean: bool,
) -> PreparationResult:
    """Reuse ``repository_path`` when it is a matching working copy, else empty it.

    ``valid_remote_urls`` lists every URL form accepted as the same repository
    (for example the https and ssh spellings); it gates reuse.  The remote is
    rewritten only when it differs from the exact ``repository_url``.
    """

    path = Path(repository_path)
    git_dir = path / ".git"
    accepted = set(valid_remote_urls)

    if not git_dir.is_dir():
        return _discard(path, "missing-git-directory")

    if git is None:
        return _discard(path, "missing-command-manager")

    try:
        remote_url = git.try_get_remote_url()
    except Exception as error:  # noqa: BLE001 - any failure means the state is unusable
        LOGGER.debug("Unable to read remote URL in %s: %s", path, error)
        return _discard(path, "remote-url-unavailable")

    if not remote_url:
        return _discard(path, "remote-url-unavailable")

    if remote_url not in accepted:
        LOGGER.debug("Remote URL %s does not match %s", remote_url, sorted(accepted))
        return _discard(path, "remote-url-mismatch")

    removed_locks = tuple(remove_lock_files(git_dir))

    if clean:
        LOGGER.info("Cleaning the repository")
        if not git.try_clean():
            return _discard_with_warning(
                path,
                "clean-failed",
                _CLEAN_FAILED_MESSAGE.format(path=path),
                removed_locks,
            )
        if not git.try_reset():
            return _discard_with_warning(
                path,
                "reset-failed",
                _CLEAN_FAILED_MESSAGE.format(path=path),
                removed_locks,
            )

    deleted: List[tuple[bool, str]] = []
    try:
        if not git.is_detached():
            git.checkout_detach()

        for remote in (False, True):
            for branch in git.branch_list(remote):
                git.branch_delete(remote, branch)
                deleted.append((remote, branch))

        remote_url_updated = False
        if remote_url != repository_url:
            LOGGER.info("Updating remote URL to %s", repository_url)
            git.set_remote_url(repository_url)
            remote_url_updated = True
    except Exception as error:  # noqa: BLE001 - a half-normalised repository is not reusable
        LOGGER.debug("Failed to normalise branches in %s: %s", path, error)
        return _discard_with_warning(
            path,
            "reuse-failed",
            _REUSE_FAILED_MESSAGE.format(path=path, error=error),
            removed_locks,
        )

    return PreparationResult(
        outcome=DirectoryOutcome.REUSED,
        reason="reused",
        removed_lock_files=removed_locks,
        deleted_branches=tuple(deleted),
        remote_url_updated=remote_url_updated,
    )


def _discard(path: Path, reason: str) -> PreparationResult:
    LOGGER.info("Deleting the contents of '%s' (%s)", path, reason)
    remove_directory_contents(path)
    return PreparationResult(outcome=DirectoryOutcome.DISCARDED, reason=reason)


def _discard_with_warning(
    path: Path,
    reason: str,
    message: str,
    removed_locks: tuple[Path, ...],
) -> PreparationResult:
    LOGGER.warning(message)
    remove_directory_contents(path)
    return PreparationResult(
        outcome=DirectoryOutcome.DISCARDED,
        reason=reason,
        removed_lock_files=removed_locks,
        warnings=(message,),
    )
