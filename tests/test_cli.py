"""Tests for the typegen command."""

from pathlib import Path

from typer.testing import CliRunner

from typegen.cli import app

runner = CliRunner()


class TestCli:
    def test_file(self, tmp_path: Path) -> None:
        path = tmp_path / "data.json"
        path.write_text('{"foo": true, "bar": [1, 2.5]}')

        result = runner.invoke(app, [str(path)])

        assert result.exit_code == 0
        assert result.stdout == "{\n    foo: bool,\n    bar: float[],\n}\n"

    def test_stdin(self) -> None:
        result = runner.invoke(app, [], input="[1, 2]")
        assert result.exit_code == 0
        assert result.stdout == "int[]\n"

    def test_dash_reads_stdin(self) -> None:
        result = runner.invoke(app, ["-"], input='{"a": null}')
        assert result.exit_code == 0
        assert result.stdout == "{\n    a: bottom?,\n}\n"

    def test_indent(self, tmp_path: Path) -> None:
        path = tmp_path / "data.json"
        path.write_text('{"a": {"b": "x"}}')

        result = runner.invoke(app, ["--indent", "2", str(path)])

        assert result.exit_code == 0
        assert result.stdout == "{\n  a: {\n    b: str,\n  },\n}\n"

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.json"
        path.write_text('{"foo": true,\n}')

        result = runner.invoke(app, [str(path)])

        assert result.exit_code == 1
        assert "Error:" in result.output
        assert "at byte 14" in result.output

    def test_unexpected_end(self) -> None:
        result = runner.invoke(app, [], input="[true")
        assert result.exit_code == 1
        assert "unexpected end of input (at byte 5)" in result.output

    def test_deeply_nested(self) -> None:
        result = runner.invoke(app, [], input="[" * 600 + "]" * 600)
        assert result.exit_code == 1
        assert "Error: nesting too deep" in result.output

    def test_missing_file(self, tmp_path: Path) -> None:
        result = runner.invoke(app, [str(tmp_path / "missing.json")])
        assert result.exit_code == 1
        assert "cannot open" in result.output

    def test_verbose(self) -> None:
        result = runner.invoke(app, ["--verbose"], input="true")
        assert result.exit_code == 0
        assert "bool" in result.stdout
