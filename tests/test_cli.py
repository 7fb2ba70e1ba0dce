"""Tests for the CLI interface."""

from pathlib import Path
from unittest.mock import patch

from typer.testing import CliRunner

from sani.cli import EXIT_DATAERR, EXIT_UNAVAILABLE, app


runner = CliRunner()


class TestCLI:
    """Tests for CLI commands."""

    def test_version_flag(self):
        """Test --version flag."""
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert "sani v" in result.stdout

    def test_help_flag(self):
        """Test --help flag."""
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        assert "Markdown" in result.stdout

    def test_render_with_color(self, tmp_path: Path):
        input_file = tmp_path / "doc.md"
        input_file.write_text("lorem **ipsum**", encoding="utf-8")

        result = runner.invoke(app, [str(input_file), "--color"])

        assert result.exit_code == 0
        assert "lorem \x1b[1mipsum\x1b[22m" in result.stdout

    def test_render_plain(self, tmp_path: Path):
        input_file = tmp_path / "doc.md"
        input_file.write_text("lorem **ipsum**\ndolor", encoding="utf-8")

        result = runner.invoke(app, [str(input_file), "--plain"])

        assert result.exit_code == 0
        assert result.stdout == "lorem ipsum dolor\n"

    def test_preserve_wrapping_flag(self, tmp_path: Path):
        input_file = tmp_path / "doc.md"
        input_file.write_text("foo\nbar", encoding="utf-8")

        result = runner.invoke(app, [str(input_file), "--plain", "--preserve-wrapping"])

        assert result.stdout == "foo\nbar\n"

    def test_color_from_environment(self, tmp_path: Path):
        input_file = tmp_path / "doc.md"
        input_file.write_text("*a*", encoding="utf-8")

        result = runner.invoke(app, [str(input_file)], env={"SANI_COLOR": "always"})

        assert result.exit_code == 0
        assert "\x1b[3ma\x1b[23m" in result.stdout

    def test_reads_standard_input(self):
        result = runner.invoke(app, ["-", "--plain"], input=b"~~gone~~ *here*")

        assert result.exit_code == 0
        assert result.stdout == "gone here\n"

    def test_missing_file_error(self, tmp_path: Path):
        """Test error when file doesn't exist."""
        result = runner.invoke(app, [str(tmp_path / "nonexistent.md")])

        assert result.exit_code == EXIT_UNAVAILABLE
        assert "unable to read file" in result.output

    def test_invalid_utf8_error(self, tmp_path: Path):
        input_file = tmp_path / "bad.md"
        input_file.write_bytes(b"caf\xe9")

        result = runner.invoke(app, [str(input_file)])

        assert result.exit_code == EXIT_DATAERR
        assert "not valid UTF-8" in result.output

    def test_invalid_configuration(self, tmp_path: Path):
        input_file = tmp_path / "doc.md"
        input_file.write_text("a", encoding="utf-8")

        result = runner.invoke(
            app, [str(input_file)], env={"SANI_EMPHASIS_STYLE": "sparkly"}
        )

        assert result.exit_code == EXIT_DATAERR
        assert "invalid configuration" in result.output

    def test_verbose_enables_debug_logging(self, tmp_path: Path):
        input_file = tmp_path / "doc.md"
        input_file.write_text("a", encoding="utf-8")

        with patch("sani.cli.setup_logging") as mock_setup:
            result = runner.invoke(app, [str(input_file), "--verbose", "--plain"])

        assert result.exit_code == 0
        mock_setup.assert_called_once_with("DEBUG")

    def test_file_is_rendered_through_pipeline(self, tmp_path: Path):
        input_file = tmp_path / "doc.md"
        input_file.write_text("a", encoding="utf-8")

        with patch("sani.cli.MarkdownRenderer.render_file") as mock_render:
            result = runner.invoke(app, [str(input_file), "--plain"])

        assert result.exit_code == 0
        mock_render.assert_called_once()
        assert mock_render.call_args.args[0] == input_file

    def test_raw_escape_in_file_is_not_passed_through(self, tmp_path: Path):
        input_file = tmp_path / "doc.md"
        input_file.write_bytes(b"plain \x1b[1mbold?")

        result = runner.invoke(app, [str(input_file), "--color"])

        assert result.exit_code == 0
        assert result.stdout == "plain ␛[1mbold?\n"
