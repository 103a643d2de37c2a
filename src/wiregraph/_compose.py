"""Helpers for combining independently written declaration tables.

Each function returns a new table and leaves its input untouched. Renaming
applies both to keys and to the names listed as dependencies, so a table
stays internally consistent after being moved into another namespace.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable, Mapping
from typing import TYPE_CHECKING

from ._ir import NodeSpec, declare
from ._name import Name

if TYPE_CHECKING:
    from ._ir import DeclarationTable


def _replace_names(table: Mapping[Name | str, object], replace: Callable[[Name], Name]) -> dict[Name, NodeSpec]:
    specs = declare(table)
    result: dict[Name, NodeSpec] = {}
    for key in sorted(specs, key=Name.sort_key):
        spec = specs[key]
        result[replace(key)] = NodeSpec(
            dependencies=tuple(replace(d) for d in spec.dependencies),
            fn=spec.fn,
        )
    return result


def with_namespace(table: Mapping[Name | str, object], namespace: str) -> dict[Name, NodeSpec]:
    """Qualify every unqualified key and dependency with `namespace`.

    Names that already have a namespace are left as they are.

    Example:
        >>> import operator
        >>> table = with_namespace({"c": (["a", "b"], operator.mul)}, "foo")
        >>> [str(k) for k in table]
        ['foo/c']

    """
    return _replace_names(table, lambda n: n if n.qualified else n.with_namespace(namespace))


def replace_keys(
    table: Mapping[Name | str, object],
    key_map: Mapping[Name | str, Name | str],
) -> dict[Name, NodeSpec]:
    """Rename keys and dependencies using an old name -> new name mapping.

    Example:
        >>> import operator
        >>> table = {"foo/c": (["foo/a", "foo/b"], operator.mul), "foo/d": (["foo/c"], abs)}
        >>> renamed = replace_keys(table, {"foo/c": "bar/z"})
        >>> [str(d) for d in renamed[Name("foo", "d")].dependencies]
        ['bar/z']

    """
    names = {Name.coerce(k): Name.coerce(v) for k, v in key_map.items()}
    return _replace_names(table, lambda n: names.get(n, n))


def replace_namespaces(
    table: Mapping[Name | str, object],
    namespace_map: Mapping[str, str],
) -> dict[Name, NodeSpec]:
    """Move keys and dependencies between namespaces.

    Only the namespace segment changes; names in namespaces absent from
    `namespace_map` (and unqualified names) are left as they are.
    """

    def replace(name: Name) -> Name:
        if name.namespace in namespace_map:
            return name.with_namespace(namespace_map[name.namespace])
        return name

    return _replace_names(table, replace)


def _seen_namespaces(specs: DeclarationTable) -> set[str]:
    namespaces: set[str] = set()
    for key, spec in specs.items():
        for name in (key, *spec.dependencies):
            if name.namespace is not None:
                namespaces.add(name.namespace)
    return namespaces


def append_namespace(
    table: Mapping[Name | str, object],
    suffix: str,
    *,
    exclude: Iterable[str] | None = None,
    only: Iterable[str] | None = None,
) -> dict[Name, NodeSpec]:
    """Append ``.suffix`` to the namespace of keys and dependencies.

    By default every namespace appearing in the table (as a key or as a
    dependency) is extended. `exclude` removes namespaces from that set;
    `only`, when non-empty, replaces it altogether. Unqualified names are
    never changed.

    Example:
        >>> import operator
        >>> table = {"foo/c": (["bar/a", "bar/b"], operator.mul)}
        >>> [str(k) for k in append_namespace(table, "v2", exclude=["bar"])]
        ['foo.v2/c']

    """
    specs = declare(table)

    only_set = set(only) if only else set()
    if only_set:
        include = only_set
    else:
        include = _seen_namespaces(specs) - set(exclude or ())

    def replace(name: Name) -> Name:
        if name.namespace in include:
            return name.with_namespace(f"{name.namespace}.{suffix}")
        return name

    return _replace_names(specs, replace)


def filter_namespace(table: Mapping[Name | str, object], namespace: str | None) -> dict[Name, NodeSpec]:
    """Select the declarations whose key is in `namespace` (None selects unqualified keys)."""
    return {k: v for k, v in declare(table).items() if k.namespace == namespace}


def re_filter_namespace(table: Mapping[Name | str, object], pattern: str | re.Pattern[str]) -> dict[Name, NodeSpec]:
    """Select the declarations whose key namespace fully matches `pattern`.

    Example:
        >>> import operator
        >>> table = {"foo.v1/c": (["a"], abs), "foo.v2/c": (["a"], abs), "bar/c": (["a"], abs)}
        >>> sorted(str(k) for k in re_filter_namespace(table, r"foo\\..*"))
        ['foo.v1/c', 'foo.v2/c']

    """
    regex = re.compile(pattern)
    return {
        k: v
        for k, v in declare(table).items()
        if k.namespace is not None and regex.fullmatch(k.namespace)
    }


def list_namespaces(table: Mapping[Name | str, object]) -> frozenset[str | None]:
    """Get the distinct namespaces of a table's keys (None for unqualified keys)."""
    return frozenset(k.namespace for k in declare(table))


def merge_tables(*tables: Mapping[Name | str, object]) -> dict[Name, NodeSpec]:
    """Combine tables key by key; later tables win on duplicate keys."""
    result: dict[Name, NodeSpec] = {}
    for table in tables:
        result.update(declare(table))
    return result
