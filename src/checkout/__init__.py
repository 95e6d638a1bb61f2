"""Workspace preparation for CI checkouts."""

from .tools.git_directory import DirectoryOutcome, PreparationResult, prepare_existing_directory
from .tools.vcs import GitCommandManager, GitError

__all__ = [
    "DirectoryOutcome",
    "GitCommandManager",
    "GitError",
    "PreparationResult",
    "prepare_existing_directory",
]
