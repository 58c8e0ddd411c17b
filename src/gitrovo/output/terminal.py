"""Rich terminal rendering for status tables, coloured diffs and history."""

from __future__ import annotations

from typing import Optional, Sequence

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from gitrovo.git.models import ChangeKind, CommitRecord, DiffRecord, FileState, StatusCode

_CODE_STYLE = {
    StatusCode.MODIFIED: "yellow",
    StatusCode.TYPE_CHANGED: "yellow",
    StatusCode.ADDED: "green",
    StatusCode.DELETED: "red",
    StatusCode.RENAMED: "cyan",
    StatusCode.COPIED: "cyan",
    StatusCode.UNMERGED: "bold red",
    StatusCode.UNTRACKED: "magenta",
    StatusCode.IGNORED: "dim",
}

_KIND_LABEL = {
    ChangeKind.ADDED: "[green]added[/green]",
    ChangeKind.MODIFIED: "[yellow]modified[/yellow]",
    ChangeKind.DELETED: "[red]deleted[/red]",
    ChangeKind.RENAMED: "[cyan]renamed[/cyan]",
    ChangeKind.COPIED: "[cyan]copied[/cyan]",
    ChangeKind.UNKNOWN: "[dim]changed[/dim]",
}


def _code_cell(code: StatusCode, raw: str) -> Text:
    return Text(raw if raw != " " else "·", style=_CODE_STYLE.get(code, "dim"))


def _diff_line(line: str) -> Text:
    if line.startswith("+++") or line.startswith("---"):
        return Text(line, style="bold")
    if line.startswith("+"):
        return Text(line, style="green")
    if line.startswith("-"):
        return Text(line, style="red")
    if line.startswith("@@"):
        return Text(line, style="cyan")
    if line.startswith("diff --git"):
        return Text(line, style="bold")
    return Text(line)


def render_status(files: Sequence[FileState], console: Optional[Console] = None) -> None:
    """Print working tree status as a table."""
    console = console or Console()
    if not files:
        console.print("[bold green]✓ Working tree clean.[/bold green]")
        return

    table = Table(title="Working Tree", border_style="dim", title_style="bold")
    table.add_column("Idx", justify="center", width=4)
    table.add_column("Wt", justify="center", width=4)
    table.add_column("Path", style="magenta")
    table.add_column("State", style="dim")

    for f in files:
        if f.untracked:
            state = "untracked"
        elif f.staged and f.modified:
            state = "staged + modified"
        elif f.staged:
            state = "staged"
        else:
            state = "modified"
        table.add_row(
            _code_cell(f.index, f.raw_code[0]),
            _code_cell(f.worktree, f.raw_code[1]),
            Text(f.path),
            state,
        )

    console.print(table)
    staged = sum(1 for f in files if f.staged)
    untracked = sum(1 for f in files if f.untracked)
    console.print(
        f"[dim]{len(files)} files, {staged} staged, {untracked} untracked[/dim]"
    )


def render_diff(
    records: Sequence[DiffRecord],
    console: Optional[Console] = None,
    *,
    stat_only: bool = False,
) -> None:
    """Print diff records, either in full or as a per-file summary."""
    console = console or Console()
    if not records:
        console.print("[dim]No changes.[/dim]")
        return

    if stat_only:
        table = Table(border_style="dim", show_header=True)
        table.add_column("File", style="magenta")
        table.add_column("Change")
        table.add_column("+", justify="right", style="green")
        table.add_column("-", justify="right", style="red")
        for r in records:
            table.add_row(
                Text(r.file_path),
                _KIND_LABEL[r.change_kind],
                "bin" if r.is_binary else str(r.additions),
                "" if r.is_binary else str(r.deletions),
            )
        console.print(table)
        console.print(
            f"[dim]{len(records)} files, "
            f"+{sum(r.additions for r in records)} "
            f"-{sum(r.deletions for r in records)}[/dim]"
        )
        return

    for r in records:
        console.rule(f"{escape(r.file_path)}  {_KIND_LABEL[r.change_kind]}", align="left", style="dim")
        if r.is_binary:
            console.print(Text(r.content, style="dim italic"))
            continue
        for line in r.content.split("\n"):
            console.print(_diff_line(line), soft_wrap=True)


def render_log(commits: Sequence[CommitRecord], console: Optional[Console] = None) -> None:
    """Print commit history as a table."""
    console = console or Console()
    if not commits:
        console.print("[dim]No commits.[/dim]")
        return

    table = Table(border_style="dim")
    table.add_column("Commit", style="yellow", no_wrap=True)
    table.add_column("Date", style="green", no_wrap=True)
    table.add_column("Author", style="cyan")
    table.add_column("Subject")
    for c in commits:
        table.add_row(
            c.short_hash,
            c.date.strftime("%Y-%m-%d %H:%M") if c.date else "-",
            Text(c.author),
            Text(c.subject),
        )
    console.print(table)
