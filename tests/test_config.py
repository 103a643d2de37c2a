"""Tests for the configuration module."""

from pathlib import Path

import pytest

from wiregraph._cli.config import (
    ConfigError,
    ModuleSource,
    ScriptSource,
    WiregraphConfig,
    find_pyproject_toml,
    load_config,
)


def write_pyproject(tmp_path: Path, content: str) -> Path:
    pyproject = tmp_path / "pyproject.toml"
    pyproject.write_text(content)
    return pyproject


class TestFindPyprojectToml:
    """Tests for find_pyproject_toml function."""

    def test_finds_in_current_directory(self, tmp_path: Path) -> None:
        pyproject = write_pyproject(tmp_path, "[project]\nname = 'test'\n")
        assert find_pyproject_toml(tmp_path) == pyproject

    def test_finds_in_parent_directory(self, tmp_path: Path) -> None:
        """Should walk up until it finds pyproject.toml."""
        pyproject = write_pyproject(tmp_path, "[project]\nname = 'test'\n")
        subdir = tmp_path / "src" / "pkg"
        subdir.mkdir(parents=True)

        assert find_pyproject_toml(subdir) == pyproject

    def test_returns_none_when_not_found(self, tmp_path: Path) -> None:
        assert find_pyproject_toml(tmp_path) is None


class TestLoadConfigTable:
    """Tests for loading the table source."""

    def test_module_path_string(self, tmp_path: Path) -> None:
        pyproject = write_pyproject(tmp_path, '[tool.wiregraph]\ntable = "examples.arithmetic:TABLE"\n')

        config = load_config(pyproject)

        assert config.table == ModuleSource(module_path="examples.arithmetic:TABLE")
        assert config.project_root == tmp_path

    def test_module_path_without_colon_raises_error(self, tmp_path: Path) -> None:
        pyproject = write_pyproject(tmp_path, '[tool.wiregraph]\ntable = "examples.arithmetic"\n')

        with pytest.raises(ConfigError, match="Invalid module path"):
            load_config(pyproject)

    def test_script_path_with_name(self, tmp_path: Path) -> None:
        """Relative script paths are resolved from the project root."""
        pyproject = write_pyproject(
            tmp_path,
            '[tool.wiregraph]\ntable = { script = "examples/arithmetic.py", name = "TABLE" }\n',
        )

        config = load_config(pyproject)

        assert config.table == ScriptSource(script=tmp_path / "examples/arithmetic.py", name="TABLE")

    def test_script_path_missing_script_key_raises_error(self, tmp_path: Path) -> None:
        pyproject = write_pyproject(tmp_path, '[tool.wiregraph]\ntable = { name = "TABLE" }\n')

        with pytest.raises(ConfigError, match="'script' key"):
            load_config(pyproject)

    def test_invalid_table_type_raises_error(self, tmp_path: Path) -> None:
        pyproject = write_pyproject(tmp_path, "[tool.wiregraph]\ntable = 123\n")

        with pytest.raises(ConfigError, match=r"Invalid.*table configuration"):
            load_config(pyproject)


class TestLoadConfigBindingsOutput:
    """Tests for bindings and output configuration."""

    def test_bindings(self, tmp_path: Path) -> None:
        pyproject = write_pyproject(
            tmp_path,
            '[tool.wiregraph]\ntable = "pkg:TABLE"\nbindings = { a = 15, "foo/b" = 3.5 }\n',
        )

        config = load_config(pyproject)

        assert config.bindings == {"a": 15, "foo/b": 3.5}

    def test_bindings_must_be_a_table(self, tmp_path: Path) -> None:
        pyproject = write_pyproject(tmp_path, '[tool.wiregraph]\nbindings = "a=1"\n')

        with pytest.raises(ConfigError, match="bindings"):
            load_config(pyproject)

    def test_output_path(self, tmp_path: Path) -> None:
        pyproject = write_pyproject(tmp_path, '[tool.wiregraph]\noutput = "out/results.toml"\n')

        assert load_config(pyproject).output == tmp_path / "out/results.toml"

    def test_invalid_output_type_raises_error(self, tmp_path: Path) -> None:
        pyproject = write_pyproject(tmp_path, "[tool.wiregraph]\noutput = 123\n")

        with pytest.raises(ConfigError, match="expected string path"):
            load_config(pyproject)


class TestLoadConfigEmptySection:
    """Tests for empty or missing configuration."""

    def test_no_tool_section(self, tmp_path: Path) -> None:
        pyproject = write_pyproject(tmp_path, "[project]\nname = 'test'\n")

        config = load_config(pyproject)

        assert config.table is None
        assert config.bindings == {}
        assert config.output is None
        assert config.project_root == tmp_path

    def test_invalid_toml_raises_error(self, tmp_path: Path) -> None:
        pyproject = write_pyproject(tmp_path, "invalid toml [[[")

        with pytest.raises(ConfigError, match="Invalid TOML"):
            load_config(pyproject)


class TestWiregraphConfigDataclass:
    def test_default_values(self) -> None:
        config = WiregraphConfig()

        assert config.table is None
        assert config.bindings == {}
        assert config.output is None
        assert config.project_root is None

    def test_frozen(self) -> None:
        config = WiregraphConfig()

        with pytest.raises(AttributeError):
            config.table = ModuleSource("pkg:TABLE")  # type: ignore[misc]
