"""
Type registry mapping schema node instances to declared type names.

Lookups are by identity, never by structural equality, so two objects
that look alike are still distinct types unless registered together.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping

from .schema_ast.nodes import SchemaNode


class TypeRegistry:
    """Identity-keyed mapping from schema nodes to type names."""

    def __init__(self, entries: TypeRegistry | Mapping[SchemaNode, str] | Iterable[tuple[SchemaNode, str]] | None = None):
        # id(node) -> (node, name); holding the node keeps its id from being reused
        self._entries: dict[int, tuple[SchemaNode, str]] = {}
        if entries is not None:
            self.update(entries)

    def register(self, node: SchemaNode, name: str) -> None:
        """Register ``node`` under ``name``. Last write wins."""
        self._entries[id(node)] = (node, name)

    def update(self, entries: TypeRegistry | Mapping[SchemaNode, str] | Iterable[tuple[SchemaNode, str]]) -> None:
        if isinstance(entries, Mapping):
            entries = entries.items()
        for node, name in entries:
            self.register(node, name)

    def get(self, node: SchemaNode) -> str | None:
        entry = self._entries.get(id(node))
        return entry[1] if entry is not None else None

    def copy(self) -> TypeRegistry:
        return TypeRegistry(self)

    def __contains__(self, node: object) -> bool:
        return id(node) in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[tuple[SchemaNode, str]]:
        return iter(list(self._entries.values()))

    def __repr__(self) -> str:
        names = ", ".join(name for _, name in self._entries.values())
        return f"TypeRegistry([{names}])"
