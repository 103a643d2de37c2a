"""Configuration loading from pyproject.toml."""

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, cast


class ConfigError(Exception):
    """Error in wiregraph configuration."""


@dataclass(slots=True, frozen=True)
class ScriptSource:
    """Script path with optional variable name."""

    script: Path
    name: str | None = None


@dataclass(slots=True, frozen=True)
class ModuleSource:
    """Module path with variable name (e.g., 'examples.arithmetic:TABLE')."""

    module_path: str


TableSource = ScriptSource | ModuleSource


@dataclass(slots=True, frozen=True)
class WiregraphConfig:
    """Configuration loaded from pyproject.toml.

    All relative paths are resolved from the project root (directory containing pyproject.toml).
    """

    table: TableSource | None = None
    bindings: dict[str, Any] = field(default_factory=dict)
    output: Path | None = None
    project_root: Path | None = None


def find_pyproject_toml(start_dir: Path | None = None) -> Path | None:
    """Find pyproject.toml by walking up from start_dir.

    Args:
        start_dir: Starting directory. Defaults to current working directory.

    Returns:
        Path to pyproject.toml if found, None otherwise.

    """
    if start_dir is None:
        start_dir = Path.cwd()

    current = start_dir.resolve()

    while True:
        candidate = current / "pyproject.toml"
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            # Reached filesystem root
            return None
        current = parent


def parse_table_source(value: object, project_root: Path) -> TableSource:
    """Parse the table field from config.

    Args:
        value: The raw value from TOML (string or dict)
        project_root: Project root directory for resolving relative paths

    Returns:
        Parsed TableSource

    Raises:
        ConfigError: If the value format is invalid

    """
    if isinstance(value, str):
        # Module path format: "module.path:variable"
        if ":" not in value:
            msg = f"Invalid module path '{value}'. Expected format: 'module.path:variable_name'"
            raise ConfigError(msg)
        return ModuleSource(module_path=value)

    if isinstance(value, dict):
        # Script path format: { script = "path.py", name = "TABLE" }
        value_dict = cast("dict[str, object]", value)
        if "script" not in value_dict:
            msg = "Invalid [tool.wiregraph].table configuration. Expected string or table with 'script' key."
            raise ConfigError(msg)

        script_value = value_dict["script"]
        if not isinstance(script_value, str):
            msg = "Invalid [tool.wiregraph].table.script: expected string path"
            raise ConfigError(msg)
        script_path = Path(script_value)
        if not script_path.is_absolute():
            script_path = project_root / script_path

        name = value_dict.get("name")
        if name is not None and not isinstance(name, str):
            msg = "Invalid [tool.wiregraph].table.name: expected string"
            raise ConfigError(msg)

        return ScriptSource(script=script_path, name=name)

    msg = "Invalid [tool.wiregraph].table configuration. Expected string or table with 'script' key."
    raise ConfigError(msg)


def load_config(pyproject_path: Path) -> WiregraphConfig:
    """Load and validate [tool.wiregraph] config from pyproject.toml.

    Args:
        pyproject_path: Path to pyproject.toml

    Returns:
        Parsed WiregraphConfig

    Raises:
        ConfigError: If the configuration is invalid

    """
    project_root = pyproject_path.parent

    with pyproject_path.open("rb") as f:
        try:
            data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            msg = f"Invalid TOML in {pyproject_path}: {e}"
            raise ConfigError(msg) from e

    section = data.get("tool", {}).get("wiregraph", {})

    if not section:
        return WiregraphConfig(project_root=project_root)

    table_source: TableSource | None = None
    if "table" in section:
        table_source = parse_table_source(section["table"], project_root)

    bindings: dict[str, Any] = {}
    if "bindings" in section:
        bindings_value = section["bindings"]
        if not isinstance(bindings_value, dict):
            msg = "Invalid [tool.wiregraph].bindings: expected a table of name = value"
            raise ConfigError(msg)
        bindings = dict(bindings_value)

    output_path: Path | None = None
    if "output" in section:
        output_value = section["output"]
        if not isinstance(output_value, str):
            msg = "Invalid [tool.wiregraph].output: expected string path"
            raise ConfigError(msg)
        output_path = Path(output_value)
        if not output_path.is_absolute():
            output_path = project_root / output_path

    return WiregraphConfig(
        table=table_source,
        bindings=bindings,
        output=output_path,
        project_root=project_root,
    )


def get_config() -> WiregraphConfig:
    """Get config from pyproject.toml in current directory or parents.

    Returns:
        WiregraphConfig (may be empty if no pyproject.toml or no [tool.wiregraph] section)

    """
    pyproject_path = find_pyproject_toml()
    if pyproject_path is None:
        return WiregraphConfig()
    return load_config(pyproject_path)
