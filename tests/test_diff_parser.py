"""Tests for the unified diff parser."""

from gitrovo.git.diff_parser import DiffParser
from gitrovo.git.models import ChangeKind


class TestBasicParsing:
    def test_modified_file(self, sample_diff_modified):
        records = DiffParser(sample_diff_modified).parse()
        assert len(records) == 1
        r = records[0]
        assert r.file_path == "app.py"
        assert r.old_path == "app.py"
        assert r.new_path == "app.py"
        assert r.change_kind == ChangeKind.MODIFIED
        assert r.additions == 2
        assert r.deletions == 1
        assert r.is_binary is False

    def test_empty_diff(self):
        assert DiffParser("").parse() == []

    def test_multiple_sections(self, sample_diff_multi):
        records = DiffParser(sample_diff_multi).parse()
        assert [r.file_path for r in records] == ["app.py", "hello.py", "old.py"]
        assert [r.change_kind for r in records] == [
            ChangeKind.MODIFIED,
            ChangeKind.ADDED,
            ChangeKind.DELETED,
        ]

    def test_content_starts_with_section_marker(self, sample_diff_multi):
        for r in DiffParser(sample_diff_multi).parse():
            assert r.content.startswith("diff --git")

    def test_file_headers_not_counted(self, sample_diff_modified):
        r = DiffParser(sample_diff_modified).parse()[0]
        assert "--- a/app.py" in r.content
        assert "+++ b/app.py" in r.content
        assert r.total_changes == 3


class TestRoundTrip:
    def test_contents_rebuild_input(self, sample_diff_multi):
        records = DiffParser(sample_diff_multi).parse()
        assert "\n".join(r.content for r in records) == sample_diff_multi.rstrip("\n")

    def test_no_trailing_newline_input(self, sample_diff_modified):
        text = sample_diff_modified.rstrip("\n")
        records = DiffParser(text).parse()
        assert records[0].content == text

    def test_preamble_kept_in_first_section(self, sample_diff_new_file):
        text = "warning: LF will be replaced by CRLF\n" + sample_diff_new_file
        records = DiffParser(text).parse()
        assert len(records) == 1
        assert records[0].content.startswith("warning:")
        assert records[0].file_path == "hello.py"


class TestChangeKinds:
    def test_new_file_wins_over_hunks(self, sample_diff_new_file):
        text = sample_diff_new_file + "@@ -0,0 +4,1 @@\n+more\n"
        r = DiffParser(text).parse()[0]
        assert r.change_kind == ChangeKind.ADDED
        assert r.additions == 4

    def test_deleted_file_uses_old_path(self, sample_diff_deleted):
        r = DiffParser(sample_diff_deleted).parse()[0]
        assert r.change_kind == ChangeKind.DELETED
        assert r.file_path == r.old_path == "old.py"
        assert r.deletions == 3
        assert r.additions == 0

    def test_rename(self, sample_diff_rename):
        r = DiffParser(sample_diff_rename).parse()[0]
        assert r.change_kind == ChangeKind.RENAMED
        assert r.old_path == "old_name.py"
        assert r.new_path == "new_name.py"
        assert r.file_path == "new_name.py"
        assert r.additions == 1

    def test_copy(self):
        diff = (
            "diff --git a/base.py b/copy.py\n"
            "similarity index 100%\n"
            "copy from base.py\n"
            "copy to copy.py\n"
        )
        r = DiffParser(diff).parse()[0]
        assert r.change_kind == ChangeKind.COPIED

    def test_mode_only_change_is_unknown(self):
        diff = (
            "diff --git a/script.sh b/script.sh\n"
            "old mode 100644\n"
            "new mode 100755\n"
        )
        r = DiffParser(diff).parse()[0]
        assert r.change_kind == ChangeKind.UNKNOWN
        assert r.total_changes == 0


class TestEdgeCases:
    def test_binary_marker(self, sample_diff_binary):
        r = DiffParser(sample_diff_binary).parse()[0]
        assert r.is_binary is True
        assert r.change_kind == ChangeKind.ADDED
        assert r.file_path == "image.png"

    def test_path_with_spaces(self):
        diff = (
            "diff --git a/my file.txt b/my file.txt\n"
            "index abc..def 100644\n"
            "--- a/my file.txt\n"
            "+++ b/my file.txt\n"
            "@@ -1 +1 @@\n"
            "-a\n"
            "+b\n"
        )
        r = DiffParser(diff).parse()[0]
        assert r.file_path == "my file.txt"

    def test_malformed_header_defaults_paths(self):
        diff = "diff --git\n@@ -1 +1 @@\n+x\n"
        r = DiffParser(diff).parse()[0]
        assert r.file_path == ""
        assert r.old_path == ""
        assert r.additions == 1

    def test_lines_before_any_section_without_marker(self):
        assert DiffParser("just some text\nnot a diff\n").parse() == []

    def test_no_newline_marker_not_counted(self):
        diff = (
            "diff --git a/data.txt b/data.txt\n"
            "index abc..def 100644\n"
            "--- a/data.txt\n"
            "+++ b/data.txt\n"
            "@@ -1 +1 @@\n"
            "-old\n"
            "\\ No newline at end of file\n"
            "+new\n"
            "\\ No newline at end of file\n"
        )
        r = DiffParser(diff).parse()[0]
        assert r.additions == 1
        assert r.deletions == 1
