"""Tests for the porcelain status parser and FileState derivations."""

from gitrovo.git.models import FileState, StatusCode
from gitrovo.git.status_parser import parse_status


def _by_path(files):
    return {f.path: f for f in files}


class TestParsing:
    def test_one_record_per_line(self, sample_status):
        files = parse_status(sample_status)
        assert len(files) == 7
        assert [f.raw_code for f in files] == ["M ", " M", "MM", "A ", " D", "??", "R "]

    def test_order_preserved(self, sample_status):
        files = parse_status(sample_status)
        assert files[0].path == "staged.py"
        assert files[-1].path == "old.py -> renamed.py"

    def test_empty_output(self):
        assert parse_status("") == []

    def test_short_lines_skipped(self):
        files = parse_status("M\n??\n\n M a.txt")
        assert len(files) == 1
        assert files[0].path == "a.txt"

    def test_leading_space_in_path_preserved(self):
        files = parse_status("??  spaced name.txt")
        assert files[0].path == " spaced name.txt"

    def test_trailing_cr_dropped(self):
        files = parse_status(" M a.txt\r\n")
        assert files[0].path == "a.txt"


class TestDerivedFlags:
    def test_index_only(self):
        f = parse_status("M  file.txt")[0]
        assert f.staged is True
        assert f.modified is False

    def test_worktree_only(self):
        f = parse_status(" M file.txt")[0]
        assert f.staged is False
        assert f.modified is True

    def test_both(self, sample_status):
        f = _by_path(parse_status(sample_status))["both.py"]
        assert f.staged is True
        assert f.modified is True

    def test_untracked_never_staged_or_modified(self, sample_status):
        for f in parse_status(sample_status):
            if f.raw_code == "??":
                assert f.untracked is True
                assert f.staged is False
                assert f.modified is False

    def test_worktree_deletion_counts_as_modified(self, sample_status):
        f = _by_path(parse_status(sample_status))["removed.py"]
        assert f.modified is True
        assert f.worktree is StatusCode.DELETED


class TestStatusCodes:
    def test_mapping(self):
        f = FileState(path="x", raw_code="A?")
        assert f.index is StatusCode.ADDED
        assert f.worktree is StatusCode.UNTRACKED

    def test_unknown_character(self):
        f = FileState(path="x", raw_code="Z ")
        assert f.index is StatusCode.UNKNOWN
        assert f.worktree is StatusCode.UNMODIFIED
        assert f.staged is True

    def test_ignored(self):
        f = parse_status("!! build/")[0]
        assert f.index is StatusCode.IGNORED
        assert f.untracked is False
