"""Git and filesystem helpers used to prepare a checkout workspace."""

from .git_directory import (
    DirectoryOutcome,
    PreparationResult,
    prepare_existing_directory,
    remove_directory_contents,
    remove_lock_files,
)
from .urls import equivalent_remote_urls, fetch_url
from .vcs import GitCommandManager, GitError

__all__ = [
    "DirectoryOutcome",
    "GitCommandManager",
    "GitError",
    "PreparationResult",
    "equivalent_remote_urls",
    "fetch_url",
    "prepare_existing_directory",
    "remove_directory_contents",
    "remove_lock_files",
]
