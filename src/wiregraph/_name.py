"""Structured node names."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Self


@dataclass(slots=True, frozen=True)
class Name:
    """A node name made of an optional namespace and a local segment.

    Names render as ``namespace/local`` (or just ``local`` when unqualified)
    and compare structurally, so they can be used directly as mapping keys.

    Example:
        >>> Name.parse("foo/c")
        Name(namespace='foo', local='c')
        >>> str(Name(None, "a"))
        'a'

    """

    namespace: str | None
    local: str

    SEPARATOR: ClassVar[str] = "/"

    def __post_init__(self) -> None:
        if not self.local:
            msg = "Name must have a non-empty local segment"
            raise ValueError(msg)
        if self.namespace == "":
            msg = f"Namespace of '{self.local}' must be None or non-empty"
            raise ValueError(msg)

    def __str__(self) -> str:
        if self.namespace is None:
            return self.local
        return f"{self.namespace}{self.SEPARATOR}{self.local}"

    @classmethod
    def parse(cls, name_str: str) -> Self:
        s = name_str.strip()
        namespace, sep, local = s.partition(cls.SEPARATOR)
        if not sep:
            return cls(namespace=None, local=s)
        if not namespace:
            msg = f"Empty namespace in name: {name_str!r}"
            raise ValueError(msg)
        return cls(namespace=namespace, local=local)

    @classmethod
    def coerce(cls, value: object) -> Name:
        """Return `value` as a Name, parsing strings."""
        if isinstance(value, Name):
            return value
        if isinstance(value, str):
            return cls.parse(value)
        msg = f"Cannot use {type(value).__name__} as a node name: {value!r}"
        raise TypeError(msg)

    @property
    def qualified(self) -> bool:
        return self.namespace is not None

    def with_namespace(self, namespace: str | None) -> Name:
        return Name(namespace=namespace, local=self.local)

    def sort_key(self) -> tuple[bool, str, str]:
        """Total ordering key: unqualified names first, then namespace, then local."""
        return (self.namespace is not None, self.namespace or "", self.local)
