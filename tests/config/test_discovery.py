"""Tests for descriptor discovery, TOML loading and table merging."""

from pathlib import Path

import click
import pytest

from cikit.config.discovery import CONFIG_FILENAME, deep_merge, find_config, read_toml


class TestFindConfig:
    def test_finds_in_start_directory(self, tmp_path: Path) -> None:
        (tmp_path / CONFIG_FILENAME).write_text("")
        assert find_config(tmp_path) == (tmp_path / CONFIG_FILENAME).resolve()

    def test_walks_up(self, tmp_path: Path) -> None:
        (tmp_path / CONFIG_FILENAME).write_text("")
        nested = tmp_path / "a" / "b" / "c"
        nested.mkdir(parents=True)
        assert find_config(nested) == (tmp_path / CONFIG_FILENAME).resolve()

    def test_not_found(self, tmp_path: Path) -> None:
        nested = tmp_path / "empty"
        nested.mkdir()
        # Nothing above a pytest tmp dir ships a cikit.toml.
        assert find_config(nested) is None

    def test_env_var_override(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        custom = tmp_path / "elsewhere.toml"
        custom.write_text("")
        monkeypatch.setenv("CIKIT_CONFIG", str(custom))
        assert find_config(tmp_path / "ignored") == custom

    def test_env_var_missing_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / CONFIG_FILENAME).write_text("")
        monkeypatch.setenv("CIKIT_CONFIG", str(tmp_path / "nope.toml"))
        assert find_config(tmp_path) is None


class TestReadToml:
    def test_reads_tables(self, tmp_path: Path) -> None:
        path = tmp_path / "x.toml"
        path.write_text('[project]\nname = "demo"\n')
        assert read_toml(path) == {"project": {"name": "demo"}}

    def test_syntax_error(self, tmp_path: Path) -> None:
        path = tmp_path / "x.toml"
        path.write_text("name = \n")
        with pytest.raises(click.ClickException, match="Invalid TOML"):
            read_toml(path)


class TestDeepMerge:
    def test_nested_tables_merge(self) -> None:
        base = {"docker": {"registry": "quay.io", "org": "shared"}, "go": {"command": "go"}}
        override = {"docker": {"org": "acme"}}
        assert deep_merge(base, override) == {
            "docker": {"registry": "quay.io", "org": "acme"},
            "go": {"command": "go"},
        }

    def test_lists_are_replaced(self) -> None:
        assert deep_merge({"build": {"os": ["linux", "darwin"]}}, {"build": {"os": ["linux"]}}) == {
            "build": {"os": ["linux"]}
        }

    def test_inputs_untouched(self) -> None:
        base = {"a": {"b": 1}}
        deep_merge(base, {"a": {"b": 2}})
        assert base == {"a": {"b": 1}}
