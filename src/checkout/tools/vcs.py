"""Minimal git command manager
The helpers below wrap just enough of ``git`` to inspect, normalise, and
re-point an existing working copy before a fresh fetch and checkout.
"""

from __future__ import annotations

import logging
import os
import subprocess
from pathlib import Path
from typing import List, Mapping, Sequence

LOGGER = logging.getLogger(__name__)

_LOCAL_BRANCH_PREFIX = "refs/heads/"
_REMOTE_BRANCH_PREFIX = "refs/remotes/"


class GitError(RuntimeError):
    """Raised when a git command fails or the repository cannot be used."""


class GitCommandManager:
    """Lightweight wrapper around ``git`` commands bound to one directory.

    Methods prefixed with ``try_`` never raise for a failing git command; they
    report success through their return value so callers can choose a fallback.
    Every other method raises :class:`GitError` when git exits non-zero.
    """

    def __init__(
        self,
        working_directory: Path | str,
        *,
        git_path: str = "git",
        env: Mapping[str, str] | None = None,
    ) -> None:
        self.working_directory = Path(working_directory).resolve()
        self.git_path = git_path
        self._env = dict(env) if env else {}

    # ------------------------------------------------------------------ git IO
    def _run_git(self, args: Sequence[str], *, check: bool = True) -> subprocess.CompletedProcess[str]:
        command = [self.git_path, *args]
        env = os.environ.copy()
        env.update(self._env)
        LOGGER.debug("Running %s in %s", " ".join(command), self.working_directory)
        try:
            process = subprocess.run(
                command,
                cwd=self.working_directory,
                env=env,
                capture_output=True,
                text=False,
                check=False,
            )
        except OSError as error:
            raise GitError(f"Unable to execute {self.git_path}: {error}") from error
        stdout = process.stdout.decode("utf-8", errors="replace") if process.stdout else ""
        stderr = process.stderr.decode("utf-8", errors="replace") if process.stderr else ""
        result = subprocess.CompletedProcess(process.args, process.returncode, stdout, stderr)
        if check and result.returncode != 0:
            message = result.stderr.strip() or result.stdout.strip() or "unknown git error"
            raise GitError(f"git {' '.join(args)} failed: {message}")
        return result

    def git(self, *args: str, check: bool = True) -> subprocess.CompletedProcess[str]:
        """Execute ``git`` with ``args`` inside the working directory."""

        return self._run_git(list(args), check=check)

    def _succeeds(self, args: Sequence[str]) -> bool:
        try:
            result = self._run_git(args, check=False)
        except GitError as error:
            LOGGER.debug("%s", error)
            return False
        return result.returncode == 0

    # ------------------------------------------------------------------- setup
    def init(self) -> None:
        """Initialise an empty repository in the working directory."""

        self._run_git(["init", str(self.working_directory)])

    def remote_add(self, name: str, url: str) -> None:
        self._run_git(["remote", "add", name, url])

    def try_disable_automatic_garbage_collection(self) -> bool:
        return self._succeeds(["config", "--local", "gc.auto", "0"])

    # ----------------------------------------------------------------- remotes
    def try_get_remote_url(self) -> str:
        """Return the configured ``origin`` URL, or ``""`` when unavailable."""

        result = self._run_git(["config", "--local", "--get", "remote.origin.url"], check=False)
        if result.returncode != 0:
            return ""
        return result.stdout.strip()

    def set_remote_url(self, url: str) -> None:
        self._run_git(["remote", "set-url", "origin", url])

    # ------------------------------------------------------------- working tree
    def try_clean(self) -> bool:
        """Remove untracked and ignored files; return ``False`` on failure."""

        return self._succeeds(["clean", "-ffdx"])

    def try_reset(self) -> bool:
        """Discard tracked modifications; return ``False`` on failure."""

        return self._succeeds(["reset", "--hard", "HEAD"])

    # -------------------------------------------------------------- branches
    def is_detached(self) -> bool:
        """Return ``True`` when ``HEAD`` does not point at a local branch."""

        result = self._run_git(
            ["rev-parse", "--symbolic-full-name", "--verify", "--quiet", "HEAD"],
            check=False,
        )
        return not result.stdout.strip().startswith(_LOCAL_BRANCH_PREFIX)

    def checkout_detach(self) -> None:
        self._run_git(["checkout", "--detach"])

    def branch_list(self, remote: bool) -> List[str]:
        """Return local (or ``origin`` remote-tracking) branch names."""

        args: List[str] = ["rev-parse", "--symbolic-full-name"]
        args.append("--remotes=origin" if remote else "--branches")
        result = self._run_git(args)

        branches: List[str] = []
        for line in result.stdout.splitlines():
            name = line.strip()
            if not name:
                continue
            for prefix in (_LOCAL_BRANCH_PREFIX, _REMOTE_BRANCH_PREFIX):
                if name.startswith(prefix):
                    name = name[len(prefix):]
                    break
            # origin/HEAD resolves to the branch it points at, so names can repeat.
            if name not in branches:
                branches.append(name)
        return branches

    def branch_delete(self, remote: bool, branch: str) -> None:
        args: List[str] = ["branch", "--delete", "--force"]
        if remote:
            args.append("--remote")
        args.append(branch)
        self._run_git(args)


__all__ = ["GitCommandManager", "GitError"]
