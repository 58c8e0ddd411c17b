"""Diff synthesis for untracked files.

Untracked files have no history, so ``git diff`` never shows them. These
records are built from the file contents on disk and are shaped like the
output of ``git diff`` for a newly added file.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Dict, List, Optional

from gitrovo.git.binary import is_binary_content
from gitrovo.git.models import ChangeKind, DiffRecord, FileState

MAX_FILE_SIZE = 1024 * 1024  # larger files are reported as binary unread

_log = logging.getLogger(__name__)


def _binary_record(path: str, size: Optional[int] = None) -> DiffRecord:
    if size is None:
        placeholder = f"Binary file {path}"
    else:
        placeholder = f"Binary file {path} (size: {size} bytes)"
    return DiffRecord(
        file_path=path,
        new_path=path,
        change_kind=ChangeKind.ADDED,
        is_binary=True,
        content=placeholder,
    )


def _text_record(path: str, data: bytes) -> DiffRecord:
    lines = data.decode("utf-8", errors="replace").split("\n")
    header = [
        f"diff --git a/{path} b/{path}",
        "new file mode 100644",
        "index 0000000..0000000",
        "--- /dev/null",
        f"+++ b/{path}",
        f"@@ -0,0 +1,{len(lines)} @@",
    ]
    body = [f"+{line}" for line in lines]
    return DiffRecord(
        file_path=path,
        new_path=path,
        change_kind=ChangeKind.ADDED,
        additions=len(lines),
        content="\n".join(header + body),
    )


class UntrackedDiffSynthesizer:
    """Build DiffRecords for the files status reports as untracked."""

    def __init__(
        self,
        work_dir: Path,
        status_provider: Callable[[], List[FileState]],
        *,
        max_file_size: int = MAX_FILE_SIZE,
    ) -> None:
        self._work_dir = Path(work_dir)
        self._status_provider = status_provider
        self._max_file_size = max_file_size

    def synthesize(self, *paths: str) -> List[DiffRecord]:
        """Return records for untracked *paths*, or for all when none given.

        Requested paths that are not untracked are dropped. A file that
        cannot be read is skipped; the batch still succeeds.
        """
        untracked: Dict[str, None] = {
            f.path: None for f in self._status_provider() if f.untracked
        }
        if paths:
            targets = [p for p in paths if p in untracked]
        else:
            targets = list(untracked)

        records: List[DiffRecord] = []
        for path in targets:
            try:
                record = self.synthesize_file(path)
            except OSError as exc:
                _log.debug("Skipping unreadable untracked file %s: %s", path, exc)
                continue
            if record is not None:
                records.append(record)
        return records

    def synthesize_file(self, path: str) -> Optional[DiffRecord]:
        """Build the record for one file. Returns None for directories.

        Raises OSError if the file cannot be read.
        """
        full_path = self._work_dir / path
        if full_path.is_dir():
            return None
        size = full_path.stat().st_size
        if size > self._max_file_size:
            return _binary_record(path, size)
        data = full_path.read_bytes()
        if is_binary_content(data):
            return _binary_record(path)
        return _text_record(path, data)
