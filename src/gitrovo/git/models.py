"""Value types for status entries, diff records and commits."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Dict, Optional


class StatusCode(str, Enum):
    """One character of a porcelain v1 status code."""

    UNMODIFIED = " "
    MODIFIED = "M"
    TYPE_CHANGED = "T"
    ADDED = "A"
    DELETED = "D"
    RENAMED = "R"
    COPIED = "C"
    UNMERGED = "U"
    UNTRACKED = "?"
    IGNORED = "!"
    UNKNOWN = "unknown"


class ChangeKind(str, Enum):
    ADDED = "A"
    MODIFIED = "M"
    DELETED = "D"
    RENAMED = "R"
    COPIED = "C"
    UNKNOWN = ""


# All knowledge of raw status characters lives in these tables.
_STATUS_CODES: Dict[str, StatusCode] = {
    c.value: c for c in StatusCode if c is not StatusCode.UNKNOWN
}
_CHANGE_KINDS: Dict[str, ChangeKind] = {k.value: k for k in ChangeKind}

UNTRACKED_CODE = "??"


def status_code(char: str) -> StatusCode:
    """Map a single porcelain character to its StatusCode."""
    return _STATUS_CODES.get(char, StatusCode.UNKNOWN)


def change_kind(raw: str) -> ChangeKind:
    """Map a single-letter change kind ("A", "M", ...) to ChangeKind."""
    return _CHANGE_KINDS.get(raw, ChangeKind.UNKNOWN)


@dataclass(frozen=True)
class FileState:
    """One entry of ``git status --porcelain=v1``."""

    path: str
    raw_code: str  # two characters: index state, worktree state

    @property
    def index(self) -> StatusCode:
        return status_code(self.raw_code[0])

    @property
    def worktree(self) -> StatusCode:
        return status_code(self.raw_code[1])

    @property
    def untracked(self) -> bool:
        return self.raw_code == UNTRACKED_CODE

    @property
    def staged(self) -> bool:
        return self.raw_code[0] not in (" ", "?")

    @property
    def modified(self) -> bool:
        # Worktree deletions (" D") count as modified too.
        return self.raw_code[1] != " " and not self.untracked


@dataclass(frozen=True)
class DiffRecord:
    """One file section of a unified diff, parsed or synthesized."""

    file_path: str
    old_path: str = ""
    new_path: str = ""
    change_kind: ChangeKind = ChangeKind.UNKNOWN
    additions: int = 0
    deletions: int = 0
    is_binary: bool = False
    content: str = ""

    @property
    def total_changes(self) -> int:
        return self.additions + self.deletions


@dataclass(frozen=True)
class CommitRecord:
    """A single entry of the commit history."""

    hash: str
    short_hash: str
    author: str
    subject: str
    body: str = ""
    date: Optional[datetime] = None
