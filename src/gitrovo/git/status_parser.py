"""Porcelain v1 status parser."""

from __future__ import annotations

from typing import List

from gitrovo.git.models import FileState


def parse_status(output: str) -> List[FileState]:
    """Parse ``git status --porcelain=v1`` output into FileState records.

    The first two characters of each line are the status code, the path
    starts at offset 3. Lines shorter than 3 characters are skipped.
    Leading spaces are significant, so lines are never stripped.
    """
    files: List[FileState] = []
    for line in output.split("\n"):
        line = line.rstrip("\r")
        if len(line) < 3:
            continue
        files.append(FileState(path=line[3:], raw_code=line[:2]))
    return files
