"""Shared test fixtures: sample diffs, status output and temp git repos."""

from __future__ import annotations

import subprocess
import textwrap
from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def isolated_home(tmp_path_factory, monkeypatch) -> Path:
    """Keep config lookup and log files away from the real home directory."""
    home = tmp_path_factory.mktemp("home")
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("GIT_ROVO_LOG_FILE", str(home / "rovo.log"))
    for var in ("GIT_ROVO_LOG_LEVEL", "GIT_ROVO_SHOW_UNTRACKED", "GIT_ROVO_FORMAT"):
        monkeypatch.delenv(var, raising=False)
    return home


@pytest.fixture
def sample_status() -> str:
    """Porcelain v1 output covering every state the UI distinguishes."""
    return "\n".join([
        "M  staged.py",
        " M modified.py",
        "MM both.py",
        "A  added.py",
        " D removed.py",
        "?? new.txt",
        "R  old.py -> renamed.py",
    ])


@pytest.fixture
def sample_diff_modified() -> str:
    return textwrap.dedent("""\
        diff --git a/app.py b/app.py
        index 1234567..abcdef0 100644
        --- a/app.py
        +++ b/app.py
        @@ -1,4 +1,4 @@
         import os
        -DEBUG = True
        +DEBUG = False
        +LOG_LEVEL = "info"
    """)


@pytest.fixture
def sample_diff_new_file() -> str:
    return textwrap.dedent("""\
        diff --git a/hello.py b/hello.py
        new file mode 100644
        index 0000000..e69de29
        --- /dev/null
        +++ b/hello.py
        @@ -0,0 +1,3 @@
        +def greet(name):
        +    return f"Hello, {name}!"
        +
    """)


@pytest.fixture
def sample_diff_deleted() -> str:
    return textwrap.dedent("""\
        diff --git a/old.py b/old.py
        deleted file mode 100644
        index abc1234..0000000
        --- a/old.py
        +++ /dev/null
        @@ -1,3 +0,0 @@
        -line one
        -line two
        -line three
    """)


@pytest.fixture
def sample_diff_binary() -> str:
    return textwrap.dedent("""\
        diff --git a/image.png b/image.png
        new file mode 100644
        index 0000000..abc1234
        Binary files /dev/null and b/image.png differ
    """)


@pytest.fixture
def sample_diff_rename() -> str:
    return textwrap.dedent("""\
        diff --git a/old_name.py b/new_name.py
        similarity index 97%
        rename from old_name.py
        rename to new_name.py
        index abc1234..def5678 100644
        --- a/old_name.py
        +++ b/new_name.py
        @@ -1,1 +1,2 @@
         # header
        +# New line added after rename
    """)


@pytest.fixture
def sample_diff_multi(sample_diff_modified, sample_diff_new_file, sample_diff_deleted) -> str:
    return sample_diff_modified + sample_diff_new_file + sample_diff_deleted


def _git(repo: Path, *args: str) -> subprocess.CompletedProcess:
    return subprocess.run(["git", *args], cwd=repo, capture_output=True, check=True)


def _init_repo(path: Path) -> Path:
    subprocess.run(["git", "init", str(path)], capture_output=True, check=True)
    _git(path, "config", "user.email", "test@test.com")
    _git(path, "config", "user.name", "Test")
    _git(path, "config", "commit.gpgsign", "false")
    return path


@pytest.fixture
def git():
    """Run a git command in a repo: ``git(repo, "add", "x")``."""
    return _git


@pytest.fixture
def empty_git_repo(tmp_path: Path) -> Path:
    """A freshly initialised repository without any commits."""
    repo = tmp_path / "empty"
    repo.mkdir()
    return _init_repo(repo)


@pytest.fixture
def tmp_git_repo(tmp_path: Path) -> Path:
    """A repository with one commit containing README.md."""
    repo = tmp_path / "repo"
    repo.mkdir()
    _init_repo(repo)
    (repo / "README.md").write_text("# Test\n")
    _git(repo, "add", ".")
    _git(repo, "commit", "-m", "init")
    return repo
