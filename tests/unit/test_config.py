"""Tests for cord configuration loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from cord.core.config import DEFAULT_MAX_DEPTH, MAX_DEPTH_LIMIT, CordConfig, load_config
from cord.core.errors import ConfigError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Run each test in an empty directory with no CORD_* variables."""
    for name in ("CORD_MAX_DEPTH", "CORD_ALLOW_TRAILING", "CORD_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


class TestDefaults:
    def test_no_file_no_env(self) -> None:
        config = load_config()
        assert config == CordConfig()
        assert config.max_depth == DEFAULT_MAX_DEPTH
        assert config.allow_trailing is False
        assert config.log_level == "WARNING"


class TestFile:
    def test_reads_cord_table(self, tmp_path: Path) -> None:
        path = tmp_path / "custom.toml"
        path.write_text('[cord]\nmax_depth = 8\nallow_trailing = true\nlog_level = "debug"\n')
        config = load_config(path)
        assert config == CordConfig(max_depth=8, allow_trailing=True, log_level="DEBUG")

    def test_default_file_in_cwd(self, tmp_path: Path) -> None:
        (tmp_path / "cord.toml").write_text("[cord]\nmax_depth = 12\n")
        assert load_config().max_depth == 12

    def test_file_without_cord_table(self, tmp_path: Path) -> None:
        path = tmp_path / "other.toml"
        path.write_text('[tool]\nname = "x"\n')
        assert load_config(path) == CordConfig()

    def test_missing_explicit_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="not found"):
            load_config(tmp_path / "nope.toml")

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.toml"
        path.write_text("[cord\n")
        with pytest.raises(ConfigError, match="Invalid TOML"):
            load_config(path)

    def test_unknown_key(self, tmp_path: Path) -> None:
        path = tmp_path / "cord.toml"
        path.write_text("[cord]\nmax_dept = 3\n")
        with pytest.raises(ConfigError, match="max_dept"):
            load_config(path)

    @pytest.mark.parametrize("value", ["0", "-3", '"ten"', "true"])
    def test_invalid_depth(self, tmp_path: Path, value: str) -> None:
        path = tmp_path / "cord.toml"
        path.write_text(f"[cord]\nmax_depth = {value}\n")
        with pytest.raises(ConfigError, match="max_depth"):
            load_config(path)

    def test_depth_above_limit(self, tmp_path: Path) -> None:
        path = tmp_path / "cord.toml"
        path.write_text(f"[cord]\nmax_depth = {MAX_DEPTH_LIMIT + 1}\n")
        with pytest.raises(ConfigError, match="at most"):
            load_config(path)

    def test_depth_at_limit(self, tmp_path: Path) -> None:
        path = tmp_path / "cord.toml"
        path.write_text(f"[cord]\nmax_depth = {MAX_DEPTH_LIMIT}\n")
        assert load_config(path).max_depth == MAX_DEPTH_LIMIT

    def test_invalid_allow_trailing(self, tmp_path: Path) -> None:
        path = tmp_path / "cord.toml"
        path.write_text('[cord]\nallow_trailing = "yes"\n')
        with pytest.raises(ConfigError, match="allow_trailing"):
            load_config(path)


class TestEnvironment:
    def test_env_overrides_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "cord.toml").write_text("[cord]\nmax_depth = 12\nallow_trailing = true\n")
        monkeypatch.setenv("CORD_MAX_DEPTH", "20")
        monkeypatch.setenv("CORD_ALLOW_TRAILING", "no")
        config = load_config()
        assert config.max_depth == 20
        assert config.allow_trailing is False

    def test_log_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CORD_LOG_LEVEL", "info")
        assert load_config().log_level == "INFO"

    def test_bad_depth(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CORD_MAX_DEPTH", "deep")
        with pytest.raises(ConfigError, match="CORD_MAX_DEPTH"):
            load_config()

    def test_bad_boolean(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CORD_ALLOW_TRAILING", "maybe")
        with pytest.raises(ConfigError, match="CORD_ALLOW_TRAILING"):
            load_config()

    def test_bad_log_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CORD_LOG_LEVEL", "LOUD")
        with pytest.raises(ConfigError, match="log level"):
            load_config()
