"""Utilities to discover declaration tables in scripts and modules.

This module was adapted from `fastapi_cli.discover` of package `fastapi-cli` version 0.0.8 (77e6d1f).
"""

from __future__ import annotations

import importlib
import logging
import sys
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .config import ModuleSource, ScriptSource, TableSource

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_TABLE_NAMES = ("TABLE", "GRAPH", "table", "graph")


@dataclass
class ModuleData:
    """Module data for a Python module."""

    module_import_str: str
    extra_sys_path: Path
    module_paths: list[Path]


def get_module_data_from_path(path: Path) -> ModuleData:
    """Get module data from a file path.

    Args:
        path: Path to a Python file or package

    Returns:
        ModuleData containing module import information

    """
    use_path = path.resolve()
    module_path = use_path
    if use_path.is_file() and use_path.stem == "__init__":
        module_path = use_path.parent
    module_paths = [module_path]
    extra_sys_path = module_path.parent
    for parent in module_path.parents:
        init_path = parent / "__init__.py"
        if init_path.is_file():
            module_paths.insert(0, parent)
            extra_sys_path = parent.parent
        else:
            break

    module_str = ".".join(p.stem for p in module_paths)
    return ModuleData(
        module_import_str=module_str,
        extra_sys_path=extra_sys_path.resolve(),
        module_paths=module_paths,
    )


def _check_table(table: object, where: str) -> Mapping:
    if not isinstance(table, Mapping):
        msg = f"{where} is not a declaration table (got {type(table).__name__})"
        raise TypeError(msg)
    return table


def load_table_from_script(script_path: Path, table_name: str | None = None) -> Mapping:
    """Load a declaration table from a Python script path.

    Args:
        script_path: Path to the Python script defining the table
        table_name: Name of the table variable. If None, the first of
            ``TABLE``, ``GRAPH``, ``table`` or ``graph`` found is used

    Returns:
        The declaration table

    Raises:
        ImportError: If the module cannot be imported
        ValueError: If no table is found or the specified variable doesn't exist
        TypeError: If the variable is not a mapping

    """
    module_data = get_module_data_from_path(script_path)
    sys.path.insert(0, str(module_data.extra_sys_path))

    try:
        module = importlib.import_module(module_data.module_import_str)
    except (ImportError, ValueError):
        logger.exception("Import error")
        logger.warning("Ensure all the package directories have an __init__.py file")
        raise

    if table_name:
        if not hasattr(module, table_name):
            msg = f"Could not find table '{table_name}' in {module_data.module_import_str}"
            raise ValueError(msg)
        return _check_table(getattr(module, table_name), f"'{table_name}' in {module_data.module_import_str}")

    for name in DEFAULT_TABLE_NAMES:
        if hasattr(module, name):
            logger.debug("Found table: %s", name)
            return _check_table(getattr(module, name), f"'{name}' in {module_data.module_import_str}")

    msg = "Could not find a declaration table in module, try using --table"
    raise ValueError(msg)


def load_table_from_module_path(module_path: str) -> Mapping:
    """Load a declaration table from a module path (e.g., 'examples.arithmetic:TABLE').

    Raises:
        ValueError: If module path format is invalid
        TypeError: If the variable is not a mapping

    """
    if ":" not in module_path:
        msg = "Module path must be in format 'module.path:variable_name'"
        raise ValueError(msg)

    module_name, table_name = module_path.split(":", 1)
    module = importlib.import_module(module_name)
    return _check_table(getattr(module, table_name), f"'{table_name}' in module '{module_name}'")


def load_table_from_source(source: TableSource) -> Mapping:
    """Load a declaration table from a TableSource (script or module)."""
    match source:
        case ScriptSource(script=script, name=name):
            return load_table_from_script(script, name)
        case ModuleSource(module_path=module_path):
            return load_table_from_module_path(module_path)
