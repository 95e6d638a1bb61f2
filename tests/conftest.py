from __future__ import annotations

import subprocess
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, List

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

HTTPS_URL = "https://github.com/my-org/my-repo"
SSH_URL = "git@github.com:my-org/my-repo"


@dataclass
class FakeGit:
    """Recording stand-in for ``GitCommandManager`` used by reconciler tests."""

    repository_path: Path
    remote_url: str = HTTPS_URL
    clean_ok: bool = True
    reset_ok: bool = True
    detached: bool = False
    local_branches: List[str] = field(default_factory=list)
    remote_branches: List[str] = field(default_factory=list)
    remote_error: Exception | None = None
    detach_error: Exception | None = None
    delete_error: Exception | None = None
    calls: List[tuple[str, tuple[Any, ...]]] = field(default_factory=list)

    def _record(self, name: str, *args: Any) -> None:
        self.calls.append((name, args))

    def called(self, name: str) -> bool:
        return any(call == name for call, _ in self.calls)

    def calls_to(self, name: str) -> List[tuple[Any, ...]]:
        return [args for call, args in self.calls if call == name]

    def try_get_remote_url(self) -> str:
        self._record("try_get_remote_url")
        # Must never be queried once the .git directory is gone.
        assert (self.repository_path / ".git").is_dir()
        if self.remote_error is not None:
            raise self.remote_error
        return self.remote_url

    def try_clean(self) -> bool:
        self._record("try_clean")
        return self.clean_ok

    def try_reset(self) -> bool:
        self._record("try_reset")
        return self.reset_ok

    def is_detached(self) -> bool:
        self._record("is_detached")
        return self.detached

    def checkout_detach(self) -> None:
        self._record("checkout_detach")
        if self.detach_error is not None:
            raise self.detach_error
        self.detached = True

    def branch_list(self, remote: bool) -> List[str]:
        self._record("branch_list", remote)
        return list(self.remote_branches if remote else self.local_branches)

    def branch_delete(self, remote: bool, branch: str) -> None:
        self._record("branch_delete", remote, branch)
        if self.delete_error is not None:
            raise self.delete_error

    def set_remote_url(self, url: str) -> None:
        self._record("set_remote_url", url)
        self.remote_url = url


@pytest.fixture()
def repository_path(tmp_path: Path) -> Path:
    """Workspace containing an (empty) ``.git`` directory and one tracked file."""

    path = tmp_path / "workspace"
    (path / ".git").mkdir(parents=True)
    (path / "my-file").write_text("", encoding="utf-8")
    return path


@pytest.fixture()
def fake_git(repository_path: Path) -> FakeGit:
    return FakeGit(repository_path=repository_path)


@pytest.fixture()
def run_git() -> Callable[..., subprocess.CompletedProcess[str]]:
    """Run a real ``git`` command, skipping the test when git is unavailable."""

    def _run(cwd: Path, *cmd: str) -> subprocess.CompletedProcess[str]:
        return subprocess.run(
            ["git", *cmd],
            cwd=cwd,
            check=True,
            capture_output=True,
            text=True,
        )

    try:
        subprocess.run(["git", "--version"], check=True, capture_output=True)
    except (OSError, subprocess.CalledProcessError):
        pytest.skip("git executable not available")
    return _run
