"""
Tests for the CLI.

Runs the typer app in-process against the sample project.
"""

from typer.testing import CliRunner

from cli.main import app
from tests.fixtures import SAMPLE_PROJECT, UNTERMINATED_IMPORT

runner = CliRunner()


class TestScanCommand:
    """Tests for `importgraph scan`."""

    def test_scan_sample_project(self):
        """Test a clean scan and its summary."""
        result = runner.invoke(app, ["scan", str(SAMPLE_PROJECT), "--all"])

        assert result.exit_code == 0
        assert "Scan Complete" in result.output
        assert "std" in result.output
        assert "graph/graph" in result.output

    def test_scan_count_table_prints_markup_literally(self, tmp_path):
        (tmp_path / "main.zig").write_bytes(b'const x = @import("[bold]x");')

        result = runner.invoke(app, ["scan", str(tmp_path), "--all"])

        assert result.exit_code == 0
        assert "[bold]x" in result.output

    def test_scan_missing_directory(self, tmp_path):
        """Test that a missing root exits with an error."""
        result = runner.invoke(app, ["scan", str(tmp_path / "missing")])

        assert result.exit_code == 1
        assert "Error" in result.output

    def test_scan_reports_skipped_files(self, tmp_path):
        """Test that recorded errors are listed."""
        (tmp_path / "bad.zig").write_bytes(UNTERMINATED_IMPORT)
        (tmp_path / "good.zig").write_bytes(b'@import("std")')

        result = runner.invoke(app, ["scan", str(tmp_path)])

        assert result.exit_code == 0
        assert "bad.zig" in result.output

    def test_scan_fail_fast(self, tmp_path):
        """Test that --fail-fast turns a malformed file into exit code 1."""
        (tmp_path / "bad.zig").write_bytes(UNTERMINATED_IMPORT)

        result = runner.invoke(app, ["scan", str(tmp_path), "--fail-fast"])

        assert result.exit_code == 1


class TestExplainCommand:
    """Tests for `importgraph explain`."""

    def test_explain_known_module(self):
        """Test importers and dependencies of a module."""
        result = runner.invoke(app, ["explain", "util", str(SAMPLE_PROJECT)])

        assert result.exit_code == 0
        assert "1 file(s)" in result.output
        assert "main" in result.output
        assert "graph/graph" in result.output

    def test_explain_unknown_module_suggests(self):
        """Test partial-match suggestions for unknown ids."""
        result = runner.invoke(app, ["explain", "graph", str(SAMPLE_PROJECT)])

        assert result.exit_code == 1
        assert "Did you mean" in result.output
        assert "graph/graph" in result.output

    def test_explain_prints_markup_literally(self, tmp_path):
        """Test that module ids are not interpreted as console markup."""
        (tmp_path / "main.zig").write_bytes(b'const x = @import("[bold]x");')

        result = runner.invoke(app, ["explain", "[bold]x", str(tmp_path)])

        assert result.exit_code == 0
        assert "[bold]x" in result.output
        assert "main" in result.output

    def test_explain_unknown_module(self):
        result = runner.invoke(app, ["explain", "nowhere", str(SAMPLE_PROJECT)])

        assert result.exit_code == 1
        assert "not found" in result.output


class TestLevelsCommand:
    """Tests for `importgraph levels`."""

    def test_levels(self):
        result = runner.invoke(app, ["levels", str(SAMPLE_PROJECT)])

        assert result.exit_code == 0
        assert "Dependency Levels" in result.output
        assert "std" in result.output

    def test_levels_empty_tree(self, tmp_path):
        result = runner.invoke(app, ["levels", str(tmp_path)])

        assert result.exit_code == 0
        assert "No modules found" in result.output


class TestImportsCommand:
    """Tests for `importgraph imports`."""

    def test_imports_lists_occurrences(self):
        """Test listing the imports of one file."""
        result = runner.invoke(app, ["imports", str(SAMPLE_PROJECT / "main.zig")])

        assert result.exit_code == 0
        assert "util.zig" in result.output
        assert "graph/graph" in result.output

    def test_imports_malformed_file(self, tmp_path):
        """Test that a malformed tail stops the listing without failing."""
        bad = tmp_path / "bad.zig"
        bad.write_bytes(UNTERMINATED_IMPORT)

        result = runner.invoke(app, ["imports", str(bad)])

        assert result.exit_code == 0
        assert "std" in result.output

    def test_imports_none(self, tmp_path):
        plain = tmp_path / "plain.zig"
        plain.write_bytes(b"pub fn f() void {}")

        result = runner.invoke(app, ["imports", str(plain)])

        assert result.exit_code == 0
        assert "No imports found" in result.output


class TestVersion:
    """Tests for the version option."""

    def test_version(self):
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert "0.1.0" in result.output
