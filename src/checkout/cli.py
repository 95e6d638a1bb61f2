"""CLI commands for preparing a CI checkout workspace."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import typer

from .config import DEFAULT_CONFIG_NAME, CheckoutConfig, ConfigError, load_config
from .tools.git_directory import prepare_existing_directory
from .tools.urls import DEFAULT_SERVER_URL, equivalent_remote_urls
from .tools.vcs import GitCommandManager

APP_HELP = "Prepare an existing workspace directory before a fresh checkout."

app = typer.Typer(help=APP_HELP)


def _configure_logging(config: CheckoutConfig, *, verbose: bool) -> None:
    level_name = "DEBUG" if verbose else config.logging.level.upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        typer.echo(f"Unknown logging level '{config.logging.level}'; using INFO.")
        level = logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _load(config: str) -> CheckoutConfig:
    try:
        return load_config(Path(config))
    except ConfigError as error:
        typer.echo(str(error))
        raise typer.Exit(code=1) from error


@app.callback()
def main() -> None:
    """Workspace checkout helpers."""


@app.command()
def prepare(
    path: Optional[Path] = typer.Argument(None, help="Existing workspace directory to prepare."),
    repository_url: Optional[str] = typer.Option(
        None,
        "--repository-url",
        "-u",
        help="Canonical remote URL the workspace should point at.",
    ),
    valid_url: Optional[List[str]] = typer.Option(
        None,
        "--valid-url",
        help="Additional remote URL accepted as the same repository (repeatable).",
    ),
    server_url: str = typer.Option(
        DEFAULT_SERVER_URL,
        "--server-url",
        help="Server hosting the repository; used with --owner and --repo.",
    ),
    owner: Optional[str] = typer.Option(None, "--owner", help="Repository owner on the server."),
    repo: Optional[str] = typer.Option(None, "--repo", help="Repository name on the server."),
    clean: Optional[bool] = typer.Option(
        None,
        "--clean/--no-clean",
        help="Clean and reset the working tree when the directory is reused.",
    ),
    config: str = typer.Option(
        DEFAULT_CONFIG_NAME,
        "--config",
        "-c",
        help="Path to the checkout configuration file.",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Reuse the workspace when it matches the repository, otherwise empty it."""
    settings = _load(config)
    _configure_logging(settings, verbose=verbose)

    workspace = path or settings.workspace.path
    if workspace is None or not workspace.is_dir():
        typer.echo(f"Workspace directory not found: {workspace}")
        raise typer.Exit(code=1)

    hosted_urls: List[str] = []
    if owner or repo:
        try:
            hosted_urls = equivalent_remote_urls(server_url, owner or "", repo or "")
        except ValueError as error:
            typer.echo(f"Invalid repository coordinates: {error}")
            raise typer.Exit(code=1) from error

    url = repository_url or settings.repository.url or next(iter(hosted_urls), None)
    if not url:
        typer.echo("A repository URL is required (--repository-url, --owner/--repo or repository.url).")
        raise typer.Exit(code=1)

    valid_urls = [url, *hosted_urls, *settings.repository.valid_urls, *(valid_url or [])]
    should_clean = settings.workspace.clean if clean is None else clean

    git = GitCommandManager(workspace, git_path=settings.git.path)
    result = prepare_existing_directory(git, workspace, url, valid_urls, should_clean)

    typer.echo(f"Workspace: {workspace}")
    typer.echo(f"Outcome: {result.outcome.value} ({result.reason})")
    if result.removed_lock_files:
        typer.echo(f"- Removed lock files: {len(result.removed_lock_files)}")
    if result.deleted_branches:
        typer.echo(f"- Deleted branches: {len(result.deleted_branches)}")
    if result.remote_url_updated:
        typer.echo(f"- Remote URL set to {url}")
    for warning in result.warnings:
        typer.echo(f"Warning: {warning}")


if __name__ == "__main__":
    app()
