"""Run git in a working tree: status, diff, history and index mutations.

Every public method maps to one or a few ``git`` invocations in the
working directory given at construction. Nothing is cached between calls:
each query re-reads the repository state.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Sequence, Union

from gitrovo.git.diff_parser import DiffParser
from gitrovo.git.models import CommitRecord, DiffRecord, FileState, StatusCode
from gitrovo.git.status_parser import parse_status
from gitrovo.git.untracked import MAX_FILE_SIZE, UntrackedDiffSynthesizer
from gitrovo.log import log_git_operation

_LOG_FORMAT = "--pretty=format:%H|%an|%ad|%s|%b%x1e"
_RECORD_SEP = "\x1e"
_GIT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S %z"


class GitError(Exception):
    """Base class for everything the repository layer raises."""


class GitCommandError(GitError):
    """Raised when git is unavailable, times out, or exits non-zero."""

    def __init__(
        self,
        message: str,
        args: Sequence[str] = (),
        returncode: Optional[int] = None,
        output: str = "",
    ) -> None:
        super().__init__(message)
        self.git_args = list(args)
        self.returncode = returncode
        self.output = output


class PreconditionError(GitError):
    """Raised before invoking git when the request is obviously invalid."""


class NoCommitsError(PreconditionError):
    """Raised when an operation needs history and the repository has none."""

    def __init__(self) -> None:
        super().__init__("no commits found")


def is_git_repository(directory: Union[str, Path]) -> bool:
    """Return True if *directory* has a ``.git`` dir (or worktree file)."""
    return (Path(directory) / ".git").exists()


def find_repo_root(cwd: Optional[Union[str, Path]] = None) -> Path:
    """Return the top-level directory of the repository containing *cwd*."""
    cwd = Path(cwd) if cwd is not None else Path.cwd()
    try:
        result = subprocess.run(
            ["git", "rev-parse", "--show-toplevel"],
            cwd=cwd,
            capture_output=True,
            text=True,
            timeout=30,
        )
    except FileNotFoundError as exc:
        raise GitCommandError("git is not installed or not on PATH") from exc
    except OSError as exc:
        raise GitError(f"not a git repository: {cwd}") from exc
    if result.returncode != 0:
        raise GitError(f"not a git repository: {cwd}")
    return Path(result.stdout.strip())


def _strip_trailing_newline(text: str) -> str:
    # Leading whitespace is significant for porcelain output.
    return text[:-1] if text.endswith("\n") else text


def _parse_date(raw: str) -> Optional[datetime]:
    try:
        return datetime.strptime(raw.strip(), _GIT_DATE_FORMAT)
    except ValueError:
        return None


class Repository:
    """Query and mutate a git working tree through the ``git`` CLI."""

    def __init__(
        self,
        work_dir: Optional[Union[str, Path]] = None,
        *,
        logger: Optional[logging.Logger] = None,
        timeout: Optional[int] = None,
        max_untracked_bytes: int = MAX_FILE_SIZE,
    ) -> None:
        if work_dir is None:
            work_dir = Path.cwd()
        work_dir = Path(work_dir)
        if not is_git_repository(work_dir):
            raise GitError(f"not a git repository: {work_dir}")
        self._work_dir = work_dir
        self._logger = logger or logging.getLogger(__name__)
        self._timeout = timeout
        self._untracked = UntrackedDiffSynthesizer(
            work_dir, self.get_status, max_file_size=max_untracked_bytes
        )

    @property
    def work_dir(self) -> Path:
        return self._work_dir

    # ---- command runner ----

    def _run_git(self, *args: str) -> str:
        """Run git with *args* and return stdout without its final newline.

        Raises GitCommandError with the combined stdout/stderr on failure.
        """
        cwd = str(self._work_dir)
        try:
            result = subprocess.run(
                ["git", *args],
                cwd=cwd,
                capture_output=True,
                text=True,
                timeout=self._timeout,
                encoding="utf-8",
                errors="replace",
            )
        except FileNotFoundError as exc:
            err = GitCommandError("git is not installed or not on PATH", args)
            log_git_operation(self._logger, "git", args, cwd, False, "", err)
            raise err from exc
        except subprocess.TimeoutExpired as exc:
            err = GitCommandError(
                f"git command timed out after {self._timeout}s: git {' '.join(args)}", args
            )
            log_git_operation(self._logger, "git", args, cwd, False, "", err)
            raise err from exc

        stdout = _strip_trailing_newline(result.stdout)
        if result.returncode != 0:
            combined = _strip_trailing_newline(result.stdout + result.stderr)
            err = GitCommandError(
                f"git command failed: git {' '.join(args)} (exit {result.returncode})"
                f"\nOutput: {combined}",
                args,
                result.returncode,
                combined,
            )
            log_git_operation(self._logger, "git", args, cwd, False, combined, err)
            raise err

        log_git_operation(self._logger, "git", args, cwd, True, stdout)
        return stdout

    def run_git(self, *args: str) -> str:
        """Run an arbitrary git command in the working directory."""
        return self._run_git(*args)

    # ---- queries ----

    def get_status(self) -> List[FileState]:
        # Non-ASCII paths must come back verbatim, not C-quoted.
        return parse_status(
            self._run_git("-c", "core.quotepath=false", "status", "--porcelain=v1")
        )

    def get_diff(self, *paths: str, staged: bool = False) -> List[DiffRecord]:
        """Diff the index against HEAD (*staged*) or the worktree against the index."""
        args = ["-c", "core.quotepath=false", "diff", "--no-color"]
        if staged:
            args.append("--cached")
        if paths:
            args.extend(["--", *paths])
        return DiffParser(self._run_git(*args)).parse()

    def get_untracked_diff(self, *paths: str) -> List[DiffRecord]:
        """Synthesize new-file diffs for untracked *paths* (all when empty)."""
        return self._untracked.synthesize(*paths)

    def get_commit_history(self, limit: int = 0) -> List[CommitRecord]:
        """Return commits reachable from HEAD, newest first."""
        args = ["log", _LOG_FORMAT, "--date=iso"]
        if limit > 0:
            args.append(f"-{limit}")
        output = self._run_git(*args)

        commits: List[CommitRecord] = []
        for entry in output.split(_RECORD_SEP):
            entry = entry.strip("\n")
            if not entry:
                continue
            parts = entry.split("|", 4)
            if len(parts) < 4:
                continue
            commits.append(
                CommitRecord(
                    hash=parts[0],
                    short_hash=parts[0][:8],
                    author=parts[1],
                    date=_parse_date(parts[2]),
                    subject=parts[3],
                    body=parts[4].strip() if len(parts) == 5 else "",
                )
            )
        return commits

    def get_last_commit_hash(self) -> str:
        return self._run_git("rev-parse", "HEAD").strip()

    def has_commits(self) -> bool:
        try:
            self._run_git("rev-parse", "--verify", "--quiet", "HEAD")
        except GitCommandError:
            return False
        return True

    def get_last_commit_message(self) -> str:
        if not self.has_commits():
            raise NoCommitsError()
        return self._run_git("log", "-1", "--pretty=format:%B").strip()

    def get_current_branch(self) -> str:
        return self._run_git("branch", "--show-current").strip()

    def get_remote_url(self, remote_name: str = "origin") -> str:
        return self._run_git("remote", "get-url", remote_name or "origin").strip()

    def has_staged_changes(self) -> bool:
        return self._run_git("diff", "--cached", "--name-only").strip() != ""

    def has_unstaged_changes(self) -> bool:
        return self._run_git("diff", "--name-only").strip() != ""

    def is_clean(self) -> bool:
        return self._run_git("status", "--porcelain").strip() == ""

    # ---- mutations ----

    def stage(self, *paths: str) -> None:
        if not paths:
            raise PreconditionError("no files specified to stage")
        self._run_git("add", "--", *paths)

    def unstage(self, *paths: str) -> None:
        if not paths:
            raise PreconditionError("no files specified to unstage")
        self._run_git("reset", "HEAD", "--", *paths)

    def stage_all(self) -> None:
        self._run_git("add", ".")

    def commit(self, message: str) -> None:
        if not message:
            raise PreconditionError("commit message cannot be empty")
        self._run_git("commit", "-m", message)

    def amend_commit(self, message: str) -> None:
        """Replace the last commit, including anything currently staged."""
        if not message:
            raise PreconditionError("commit message cannot be empty")
        if not self.has_commits():
            raise NoCommitsError()
        self._run_git("commit", "--amend", "-m", message)

    def discard_changes(self, path: str) -> None:
        """Throw away every change to *path*.

        Untracked paths are deleted from disk. A path only added to the
        index is unstaged and left on disk as untracked. Anything else is
        restored from HEAD, both in the index and the working tree.
        """
        if not path:
            raise PreconditionError("no path specified to discard")

        state = next((f for f in self.get_status() if f.path == path), None)
        if state is not None and state.untracked:
            self._remove_from_disk(path)
        elif state is not None and state.index is StatusCode.ADDED:
            self._run_git("rm", "--cached", "--quiet", "--", path)
        else:
            self._run_git("checkout", "HEAD", "--", path)

    def _remove_from_disk(self, path: str) -> None:
        full_path = self._work_dir / path
        try:
            if full_path.is_dir() and not full_path.is_symlink():
                shutil.rmtree(full_path)
            else:
                os.remove(full_path)
        except OSError as exc:
            raise GitError(f"failed to remove untracked file {path}: {exc}") from exc
        self._logger.info(
            "Untracked file removed",
            extra={"operation": "discard", "path": path, "work_dir": str(self._work_dir)},
        )
