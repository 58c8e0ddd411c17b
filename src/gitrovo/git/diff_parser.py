"""Split ``git diff`` output into per-file records.

A single left-to-right scan. Every line is kept in the content of the
section it belongs to, so joining the ``content`` of all records with
newlines gives back the input. Malformed sections are tolerated: missing
paths default to empty strings and unknown lines are carried verbatim.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List, Optional

from gitrovo.git.models import ChangeKind, DiffRecord

# --- Section markers ---

_FILE_SECTION = "diff --git"
_DIFF_HEADER_RE = re.compile(r"^diff --git a/(.*) b/(.*)$")
_NEW_FILE = "new file mode"
_DELETED_FILE = "deleted file mode"
_RENAME_FROM = "rename from"
_COPY_FROM = "copy from"
_BINARY = "Binary files"
_HUNK = "@@"


@dataclass
class _Section:
    """Mutable accumulator for the file section being scanned."""

    old_path: str = ""
    new_path: str = ""
    file_path: str = ""
    change_kind: ChangeKind = ChangeKind.UNKNOWN
    additions: int = 0
    deletions: int = 0
    is_binary: bool = False
    lines: List[str] = field(default_factory=list)

    def freeze(self) -> DiffRecord:
        return DiffRecord(
            file_path=self.file_path,
            old_path=self.old_path,
            new_path=self.new_path,
            change_kind=self.change_kind,
            additions=self.additions,
            deletions=self.deletions,
            is_binary=self.is_binary,
            content="\n".join(self.lines),
        )


def _split_header(line: str) -> tuple[str, str]:
    """Return (old, new) paths from a ``diff --git a/... b/...`` line."""
    m = _DIFF_HEADER_RE.match(line)
    if m:
        return m.group(1), m.group(2)
    parts = line.split()
    if len(parts) >= 4:
        return _strip_prefix(parts[2], "a/"), _strip_prefix(parts[3], "b/")
    return "", ""


def _strip_prefix(path: str, prefix: str) -> str:
    return path[len(prefix):] if path.startswith(prefix) else path


class DiffParser:
    """Parse unified diff text into DiffRecord values, one per file.

    Usage::

        for record in DiffParser(diff_text).parse():
            print(record.file_path, record.additions, record.deletions)
    """

    def __init__(self, diff_text: str) -> None:
        if diff_text.endswith("\n"):
            diff_text = diff_text[:-1]
        self._lines = diff_text.split("\n") if diff_text else []

    def parse(self) -> List[DiffRecord]:
        records: List[DiffRecord] = []
        current: Optional[_Section] = None
        # Lines seen before the first section marker join the first section.
        pending: List[str] = []

        for line in self._lines:
            if line.startswith(_FILE_SECTION):
                if current is not None:
                    records.append(current.freeze())
                    pending = []
                current = _Section(lines=pending)
                old, new = _split_header(line)
                current.old_path = old
                current.new_path = new
                current.file_path = new
            elif current is not None:
                self._apply(current, line)

            if current is not None:
                current.lines.append(line)
            else:
                pending.append(line)

        if current is not None:
            records.append(current.freeze())
        return records

    @staticmethod
    def _apply(section: _Section, line: str) -> None:
        """Update *section* counters and flags for one non-header line."""
        if line.startswith(_NEW_FILE):
            section.change_kind = ChangeKind.ADDED
        elif line.startswith(_DELETED_FILE):
            section.change_kind = ChangeKind.DELETED
            section.file_path = section.old_path
        elif line.startswith(_RENAME_FROM):
            section.change_kind = ChangeKind.RENAMED
        elif line.startswith(_COPY_FROM):
            section.change_kind = ChangeKind.COPIED
        elif line.startswith(_BINARY):
            section.is_binary = True
        elif line.startswith(_HUNK):
            # Added / deleted / renamed markers win over hunk headers.
            if section.change_kind is ChangeKind.UNKNOWN:
                section.change_kind = ChangeKind.MODIFIED
        elif line.startswith("+") and not line.startswith("+++"):
            section.additions += 1
        elif line.startswith("-") and not line.startswith("---"):
            section.deletions += 1
