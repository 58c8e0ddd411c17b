"""Git interface layer: the repository facade plus status and diff parsing."""

from gitrovo.git.binary import is_binary_content
from gitrovo.git.diff_parser import DiffParser
from gitrovo.git.models import (
    ChangeKind,
    CommitRecord,
    DiffRecord,
    FileState,
    StatusCode,
)
from gitrovo.git.repository import (
    GitCommandError,
    GitError,
    NoCommitsError,
    PreconditionError,
    Repository,
    find_repo_root,
    is_git_repository,
)
from gitrovo.git.status_parser import parse_status
from gitrovo.git.untracked import UntrackedDiffSynthesizer

__all__ = [
    "ChangeKind",
    "CommitRecord",
    "DiffParser",
    "DiffRecord",
    "FileState",
    "GitCommandError",
    "GitError",
    "NoCommitsError",
    "PreconditionError",
    "Repository",
    "StatusCode",
    "UntrackedDiffSynthesizer",
    "find_repo_root",
    "is_binary_content",
    "is_git_repository",
    "parse_status",
]
