"""Command-line entry point: Typer commands over the Repository facade."""

from __future__ import annotations

from pathlib import Path
from typing import List, NoReturn, Optional

import typer
from rich.console import Console
from rich.markup import escape

from gitrovo import __version__

app = typer.Typer(
    name="git-rovo",
    help="Inspect, stage, and commit the changes in a git working tree.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console(stderr=True)


def _fail(exc: Exception) -> NoReturn:
    """Print *exc* and exit: 1 for bad requests, 2 for git/config errors."""
    from gitrovo.git.repository import PreconditionError

    if isinstance(exc, PreconditionError):
        console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc
    console.print(f"[bold red]Git error:[/bold red] {escape(str(exc))}")
    raise typer.Exit(code=2) from exc


def _open_repo(ctx: typer.Context):
    """Resolve the repository, load config, configure logging."""
    from gitrovo.config.loader import ConfigError, load_config
    from gitrovo.git.repository import GitError, Repository, find_repo_root
    from gitrovo.log import log_app_start, log_config_load, setup_logging

    opts = ctx.obj or {}
    try:
        repo_root = find_repo_root(opts.get("repo"))
    except GitError as exc:
        console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=2) from exc

    try:
        cfg = load_config(repo_root, opts.get("config"))
    except ConfigError as exc:
        console.print(f"[bold red]Config error:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=2) from exc

    logger = setup_logging(cfg.logger)
    source = str(cfg.source) if cfg.source else None
    log_config_load(logger, source, True)
    log_app_start(logger, __version__, source)

    try:
        repo = Repository(
            repo_root,
            logger=logger.getChild("git"),
            timeout=cfg.git.timeout_seconds(),
            max_untracked_bytes=cfg.git.max_untracked_bytes,
        )
    except GitError as exc:
        _fail(exc)
    return repo, cfg


def _resolve_format(format: Optional[str], default: str) -> str:
    fmt = format or default
    if fmt not in ("terminal", "json"):
        console.print(f"[bold red]Invalid format:[/bold red] {escape(fmt)}")
        raise typer.Exit(code=2)
    return fmt


# ── status ────────────────────────────────────────────────────────────────────


@app.command()
def status(
    ctx: typer.Context,
    format: Optional[str] = typer.Option(None, "--format", "-f", help="Output format: terminal | json"),
) -> None:
    """Show staged, modified, and untracked files."""
    from gitrovo.git.repository import GitError
    from gitrovo.output import json_report, terminal

    repo, cfg = _open_repo(ctx)
    fmt = _resolve_format(format, cfg.output.format)
    try:
        files = repo.get_status()
    except GitError as exc:
        _fail(exc)

    if fmt == "json":
        print(json_report.render(json_report.status_to_dict(files)))
    else:
        terminal.render_status(files, Console())


# ── diff ──────────────────────────────────────────────────────────────────────


@app.command()
def diff(
    ctx: typer.Context,
    paths: Optional[List[str]] = typer.Argument(None, help="Restrict the diff to these paths"),
    cached: bool = typer.Option(False, "--cached", "--staged", help="Diff staged changes"),
    untracked: Optional[bool] = typer.Option(
        None, "--untracked/--no-untracked", help="Include untracked files"
    ),
    stat: bool = typer.Option(False, "--stat", help="Show a per-file summary only"),
    format: Optional[str] = typer.Option(None, "--format", "-f", help="Output format: terminal | json"),
) -> None:
    """Show changes as unified diffs, including untracked files."""
    from gitrovo.git.repository import GitError
    from gitrovo.output import json_report, terminal

    repo, cfg = _open_repo(ctx)
    fmt = _resolve_format(format, cfg.output.format)
    selected = tuple(paths or ())
    include_untracked = untracked if untracked is not None else (
        cfg.git.show_untracked and not cached
    )

    try:
        records = repo.get_diff(*selected, staged=cached)
        if include_untracked:
            records.extend(repo.get_untracked_diff(*selected))
    except GitError as exc:
        _fail(exc)

    if fmt == "json":
        print(json_report.render(json_report.diff_to_dict(records)))
    else:
        terminal.render_diff(records, Console(), stat_only=stat)


# ── log ───────────────────────────────────────────────────────────────────────


@app.command()
def log(
    ctx: typer.Context,
    limit: int = typer.Option(20, "--limit", "-n", help="Number of commits to show (0 = all)"),
    format: Optional[str] = typer.Option(None, "--format", "-f", help="Output format: terminal | json"),
) -> None:
    """Show recent commits."""
    from gitrovo.git.repository import GitError
    from gitrovo.output import json_report, terminal

    repo, cfg = _open_repo(ctx)
    fmt = _resolve_format(format, cfg.output.format)
    try:
        commits = repo.get_commit_history(limit) if repo.has_commits() else []
    except GitError as exc:
        _fail(exc)

    if fmt == "json":
        print(json_report.render(json_report.history_to_dict(commits)))
    else:
        terminal.render_log(commits, Console())


# ── stage / unstage ───────────────────────────────────────────────────────────


@app.command()
def stage(
    ctx: typer.Context,
    paths: Optional[List[str]] = typer.Argument(None, help="Files to stage"),
    all_: bool = typer.Option(False, "--all", "-A", help="Stage every change"),
) -> None:
    """Add files to the index."""
    from gitrovo.git.repository import GitError

    if all_ and paths:
        console.print("[bold red]Error:[/bold red] --all cannot be combined with paths")
        raise typer.Exit(code=1)

    repo, _ = _open_repo(ctx)
    try:
        if all_:
            repo.stage_all()
        else:
            repo.stage(*(paths or ()))
    except GitError as exc:
        _fail(exc)
    label = "all changes" if all_ else f"{len(paths or ())} file(s)"
    console.print(f"[green]✓[/green] Staged {label}")


@app.command()
def unstage(
    ctx: typer.Context,
    paths: Optional[List[str]] = typer.Argument(None, help="Files to unstage"),
) -> None:
    """Remove files from the index, keeping their contents."""
    from gitrovo.git.repository import GitError

    repo, _ = _open_repo(ctx)
    try:
        repo.unstage(*(paths or ()))
    except GitError as exc:
        _fail(exc)
    console.print(f"[green]✓[/green] Unstaged {len(paths or ())} file(s)")


# ── commit / amend ────────────────────────────────────────────────────────────


@app.command()
def commit(
    ctx: typer.Context,
    message: str = typer.Option("", "--message", "-m", help="Commit message"),
) -> None:
    """Commit the staged changes."""
    from gitrovo.git.repository import GitError

    repo, _ = _open_repo(ctx)
    try:
        repo.commit(message)
        short = repo.get_last_commit_hash()[:8]
    except GitError as exc:
        _fail(exc)
    console.print(f"[green]✓[/green] Committed {short}")


@app.command()
def amend(
    ctx: typer.Context,
    message: str = typer.Option("", "--message", "-m", help="New commit message"),
) -> None:
    """Rewrite the last commit with the staged changes and a new message."""
    from gitrovo.git.repository import GitError

    repo, _ = _open_repo(ctx)
    try:
        repo.amend_commit(message)
        short = repo.get_last_commit_hash()[:8]
    except GitError as exc:
        _fail(exc)
    console.print(f"[green]✓[/green] Amended {short}")


# ── discard ───────────────────────────────────────────────────────────────────


@app.command()
def discard(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="File whose changes are thrown away"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
) -> None:
    """Discard all changes to a file. Untracked files are deleted."""
    from gitrovo.git.repository import GitError

    repo, _ = _open_repo(ctx)
    try:
        state = next((f for f in repo.get_status() if f.path == path), None)
        untracked = state is not None and state.untracked
        if not yes:
            prompt = f"Delete untracked {path}?" if untracked else f"Discard changes to {path}?"
            if not typer.confirm(prompt):
                raise typer.Exit(code=1)
        repo.discard_changes(path)
    except GitError as exc:
        _fail(exc)
    verb = "Deleted" if untracked else "Discarded changes to"
    console.print(f"[green]✓[/green] {verb} {escape(path)}")


# ── init ──────────────────────────────────────────────────────────────────────


@app.command()
def init(ctx: typer.Context) -> None:
    """Generate a starter .git-rovo.toml in the repo root."""
    from gitrovo.config.defaults import DEFAULT_TOML
    from gitrovo.config.loader import CONFIG_FILENAME
    from gitrovo.git.repository import GitError, find_repo_root

    try:
        repo_root = find_repo_root((ctx.obj or {}).get("repo"))
    except GitError as exc:
        console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=2) from exc

    config_path = repo_root / CONFIG_FILENAME
    if config_path.exists():
        console.print(f"[yellow]⚠[/yellow]  {CONFIG_FILENAME} already exists at {escape(str(config_path))}")
        raise typer.Exit(code=1)

    config_path.write_text(DEFAULT_TOML, encoding="utf-8")
    console.print(f"[green]✓[/green] Created {escape(str(config_path))}")


# ── version ───────────────────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        print(f"git-rovo {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False, "--version", "-V", callback=_version_callback,
        is_eager=True, help="Show version and exit",
    ),
    repo: Optional[Path] = typer.Option(None, "--repo", "-C", help="Run as if started in this directory"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to a config file"),
) -> None:
    """Inspect and commit the changes in a git working tree."""
    ctx.obj = {"repo": repo, "config": config}
