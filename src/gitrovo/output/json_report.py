"""JSON reporter for status, diff, and history queries."""

from __future__ import annotations

import json
from typing import Any, Dict, List, Sequence

from gitrovo.git.models import CommitRecord, DiffRecord, FileState


def status_to_dict(files: Sequence[FileState]) -> Dict[str, Any]:
    """Convert status entries to a JSON-serialisable dict."""
    entries: List[Dict[str, Any]] = []
    for f in files:
        entries.append({
            "path": f.path,
            "code": f.raw_code,
            "index": f.index.name.lower(),
            "worktree": f.worktree.name.lower(),
            "staged": f.staged,
            "modified": f.modified,
            "untracked": f.untracked,
        })
    return {
        "version": "1.0",
        "total_files": len(entries),
        "staged": sum(1 for f in files if f.staged),
        "files": entries,
    }


def diff_to_dict(records: Sequence[DiffRecord]) -> Dict[str, Any]:
    files: List[Dict[str, Any]] = []
    for r in records:
        files.append({
            "path": r.file_path,
            "old_path": r.old_path,
            "new_path": r.new_path,
            "change": r.change_kind.name.lower(),
            "additions": r.additions,
            "deletions": r.deletions,
            "binary": r.is_binary,
            "content": r.content,
        })
    return {
        "version": "1.0",
        "total_files": len(files),
        "additions": sum(r.additions for r in records),
        "deletions": sum(r.deletions for r in records),
        "files": files,
    }


def history_to_dict(commits: Sequence[CommitRecord]) -> Dict[str, Any]:
    return {
        "version": "1.0",
        "commits": [
            {
                "hash": c.hash,
                "short_hash": c.short_hash,
                "author": c.author,
                "date": c.date.isoformat() if c.date else None,
                "subject": c.subject,
                **({"body": c.body} if c.body else {}),
            }
            for c in commits
        ],
    }


def render(data: Dict[str, Any]) -> str:
    """Return formatted JSON string."""
    return json.dumps(data, indent=2)
