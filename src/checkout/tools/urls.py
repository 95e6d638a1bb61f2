"""Remote URL spellings for a hosted repository."""

from __future__ import annotations

from typing import List
from urllib.parse import urlsplit

__all__ = ["DEFAULT_SERVER_URL", "equivalent_remote_urls", "fetch_url"]

DEFAULT_SERVER_URL = "https://github.com"


def _require(value: str, label: str) -> str:
    cleaned = (value or "").strip().strip("/")
    if not cleaned:
        raise ValueError(f"{label} must not be empty")
    return cleaned


def fetch_url(
    server_url: str,
    owner: str,
    repository: str,
    *,
    ssh: bool = False,
) -> str:
    """Return the https (default) or ssh fetch URL for ``owner/repository``."""

    owner_part = _require(owner, "owner")
    repository_part = _require(repository, "repository")
    base = (server_url or DEFAULT_SERVER_URL).strip().rstrip("/")
    if ssh:
        host = urlsplit(base).hostname or base
        return f"git@{host}:{owner_part}/{repository_part}"
    return f"{base}/{owner_part}/{repository_part}"


def equivalent_remote_urls(server_url: str, owner: str, repository: str) -> List[str]:
    """Return every URL form accepted as the same logical repository."""

    return [
        fetch_url(server_url, owner, repository),
        fetch_url(server_url, owner, repository, ssh=True),
    ]
