"""Tests for the cord CLI."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from pathlib import Path

import pytest
from typer.testing import CliRunner

from cord import _version
from cord.cli import PromptValueProvider, app


@pytest.fixture
def cli_runner() -> CliRunner:
    """Return a CLI test runner."""
    return CliRunner()


@pytest.fixture
def expr_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Write an expression to a file in an isolated working directory."""
    monkeypatch.chdir(tmp_path)
    for name in ("CORD_MAX_DEPTH", "CORD_ALLOW_TRAILING", "CORD_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)

    def _write(text: str) -> Path:
        path = tmp_path / "expr.txt"
        path.write_text(text)
        return path

    return _write


class TestEvaluateFile:
    def test_prints_result(self, cli_runner: CliRunner, expr_file) -> None:
        path = expr_file("(3 * 4) + (2 * 5) - 6\n")
        result = cli_runner.invoke(app, [str(path)])
        assert result.exit_code == 0
        assert "[Result] 16" in result.output

    def test_fractional_result(self, cli_runner: CliRunner, expr_file) -> None:
        path = expr_file("((10 + 5) * 2 - 3) / 4")
        result = cli_runner.invoke(app, [str(path)])
        assert "[Result] 6.75" in result.output

    def test_non_finite_result(self, cli_runner: CliRunner, expr_file) -> None:
        path = expr_file("1/0")
        result = cli_runner.invoke(app, [str(path)])
        assert result.exit_code == 0
        assert "[Result] inf" in result.output

    def test_prompts_once_per_variable(self, cli_runner: CliRunner, expr_file) -> None:
        path = expr_file("a + a * b")
        result = cli_runner.invoke(app, [str(path)], input="5\n2\n")
        assert result.exit_code == 0
        assert result.output.count("Set value [a]: ") == 1
        assert result.output.count("Set value [b]: ") == 1
        assert "[Result] 15" in result.output

    def test_preset_variables_skip_prompt(self, cli_runner: CliRunner, expr_file) -> None:
        path = expr_file("x ^ 2")
        result = cli_runner.invoke(app, [str(path), "--set", "x=3"])
        assert result.exit_code == 0
        assert "Set value" not in result.output
        assert "[Result] 9" in result.output

    def test_bad_assignment(self, cli_runner: CliRunner, expr_file) -> None:
        path = expr_file("x")
        result = cli_runner.invoke(app, [str(path), "--set", "x"])
        assert result.exit_code == 2

    def test_tree(self, cli_runner: CliRunner, expr_file) -> None:
        path = expr_file("1 + 2 * -3")
        result = cli_runner.invoke(app, [str(path), "--tree"])
        assert "[Tree] (1 + (2 * -3))" in result.output
        assert "[Result] -5" in result.output

    def test_tree_of_long_chain(self, cli_runner: CliRunner, expr_file) -> None:
        path = expr_file(" + ".join(["1"] * 5000))
        result = cli_runner.invoke(app, [str(path), "--tree"])
        assert result.exit_code == 0
        assert "[Tree]" in result.output
        assert "[Result] 5000" in result.output


class TestErrors:
    def test_no_arguments(self, cli_runner: CliRunner, expr_file) -> None:
        result = cli_runner.invoke(app, [])
        assert result.exit_code == 1
        assert "usage: cord [filename]" in result.output

    def test_missing_file(self, cli_runner: CliRunner, expr_file) -> None:
        result = cli_runner.invoke(app, ["missing.txt"])
        assert result.exit_code == 1
        assert "file does not exist" in result.output

    def test_file_not_utf8(self, cli_runner: CliRunner, expr_file, tmp_path: Path) -> None:
        path = tmp_path / "latin1.txt"
        path.write_bytes(b"1 + \xff")
        result = cli_runner.invoke(app, [str(path)])
        assert result.exit_code == 1
        assert "Cannot read" in result.output
        assert not isinstance(result.exception, UnicodeDecodeError)

    def test_directory_argument(self, cli_runner: CliRunner, expr_file, tmp_path: Path) -> None:
        folder = tmp_path / "exprs"
        folder.mkdir()
        result = cli_runner.invoke(app, [str(folder)])
        assert result.exit_code == 1
        assert "Cannot read" in result.output
        assert not isinstance(result.exception, OSError)

    def test_parse_error(self, cli_runner: CliRunner, expr_file) -> None:
        path = expr_file("(1 + 2")
        result = cli_runner.invoke(app, [str(path)])
        assert result.exit_code == 1
        assert "ParseError" in result.output
        assert "unclosed bracket" in result.output
        assert "[Result]" not in result.output

    def test_lex_error(self, cli_runner: CliRunner, expr_file) -> None:
        path = expr_file("invalid expression")
        result = cli_runner.invoke(app, [str(path)])
        assert result.exit_code == 1
        assert "LexError" in result.output

    def test_non_numeric_answer(self, cli_runner: CliRunner, expr_file) -> None:
        path = expr_file("x + 1")
        result = cli_runner.invoke(app, [str(path)], input="five\n")
        assert result.exit_code == 1
        assert "ResolveError" in result.output

    def test_closed_input(self, cli_runner: CliRunner, expr_file) -> None:
        path = expr_file("x + 1")
        result = cli_runner.invoke(app, [str(path)], input="")
        assert result.exit_code == 1
        assert "ResolveError" in result.output


class TestTrailingTokens:
    def test_strict_by_default(self, cli_runner: CliRunner, expr_file) -> None:
        path = expr_file("2 3")
        result = cli_runner.invoke(app, [str(path)])
        assert result.exit_code == 1
        assert "trailing token" in result.output

    def test_lenient_flag(self, cli_runner: CliRunner, expr_file) -> None:
        path = expr_file("2 3")
        result = cli_runner.invoke(app, [str(path), "--lenient"])
        assert result.exit_code == 0
        assert "[Result] 2" in result.output

    def test_config_file(self, cli_runner: CliRunner, expr_file, tmp_path: Path) -> None:
        (tmp_path / "cord.toml").write_text("[cord]\nallow_trailing = true\n")
        path = expr_file("2 3")
        result = cli_runner.invoke(app, [str(path)])
        assert result.exit_code == 0

    def test_strict_flag_beats_config(
        self, cli_runner: CliRunner, expr_file, tmp_path: Path
    ) -> None:
        (tmp_path / "cord.toml").write_text("[cord]\nallow_trailing = true\n")
        path = expr_file("2 3")
        result = cli_runner.invoke(app, [str(path), "--strict"])
        assert result.exit_code == 1

    def test_bad_config(self, cli_runner: CliRunner, expr_file, tmp_path: Path) -> None:
        path = expr_file("1")
        result = cli_runner.invoke(app, [str(path), "--config", str(tmp_path / "none.toml")])
        assert result.exit_code == 1
        assert "Configuration error" in result.output


class TestVersion:
    def test_version(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "cord version" in result.output

    def test_version_when_not_installed(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def _missing(name: str) -> str:
            raise PackageNotFoundError(name)

        monkeypatch.setattr(_version, "version", _missing)
        assert _version.get_version() == "0.0.0"


class TestPromptValueProvider:
    def test_preset_answer(self) -> None:
        provider = PromptValueProvider({"x": "4"})
        assert provider.request("x") == "4"
