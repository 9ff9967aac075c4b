"""
Field type resolver.

Turns the schema node of a field (or list element) into an SDL type
reference such as ``String!``, ``[Int]`` or ``Product``.
"""

from __future__ import annotations

from loguru import logger

from ..config import CompileOptions
from ..errors import StructuralError
from ..registry import TypeRegistry
from ..schema_ast.nodes import (
    EnumNode,
    ListNode,
    LiteralNode,
    ObjectNode,
    ScalarNode,
    SchemaNode,
    UnionNode,
    WrapperNode,
)
from .union_classifier import UnionClassifier

# Nesting limit for lists of lists and wrapper chains
MAX_DEPTH = 64


class FieldTypeResolver:
    """Resolves field schema nodes to SDL type references."""

    def __init__(self, registry: TypeRegistry, options: CompileOptions):
        """
        Initialize the resolver.

        Args:
            registry: Registered schema nodes and their type names
            options: Compile options (scalar overrides)
        """
        self.registry = registry
        self.options = options
        self.union_classifier = UnionClassifier(self)
        # ids of the nodes currently being resolved
        self._active: list[int] = []

    def resolve_field_type(self, node: SchemaNode) -> str:
        """Resolve a field node, appending ``!`` unless it is nullable."""
        node, nullable = self.unwrap(node)
        base_type = self.resolve_base_type(node)
        return base_type if nullable else f"{base_type}!"

    def unwrap(self, node: SchemaNode) -> tuple[SchemaNode, bool]:
        """
        Strip wrapper nodes from the outside in.

        Returns:
            The first non-wrapper node and whether any optional/nullable
            wrapper was seen on the way
        """
        nullable = False
        seen: set[int] = set()
        while isinstance(node, WrapperNode):
            if id(node) in seen or len(seen) >= MAX_DEPTH:
                raise StructuralError(f"Cyclic or too deeply nested wrapper {self._describe(node)}")
            seen.add(id(node))
            nullable = nullable or node.is_nullable
            if node.inner is None:
                raise StructuralError(f"Wrapper without inner schema {self._describe(node)}")
            node = node.inner
        return node, nullable

    def resolve_base_type(self, node: SchemaNode) -> str:
        """Resolve an unwrapped node to its SDL base type name."""
        registered = self.registry.get(node)
        if registered is not None:
            return registered

        if isinstance(node, ScalarNode):
            return self.options.scalar_name(node.subtype)

        if isinstance(node, ListNode):
            return self._resolve_list(node)

        if isinstance(node, ObjectNode):
            json_name = self.options.scalar_name("json")
            logger.debug(f"Unregistered object schema {self._describe(node)}falls back to {json_name}")
            return json_name

        if isinstance(node, EnumNode):
            return self.options.scalar_name("string")

        if isinstance(node, LiteralNode):
            return self._resolve_literal(node)

        if isinstance(node, UnionNode):
            return self.union_classifier.classify(node)

        logger.warning(f"Unhandled schema node {type(node).__name__} {self._describe(node)}resolved as String")
        return self.options.scalar_name("string")

    def _resolve_list(self, node: ListNode) -> str:
        if id(node) in self._active:
            raise StructuralError(f"Cyclic schema: list {self._describe(node)}contains itself")
        if len(self._active) >= MAX_DEPTH:
            raise StructuralError(f"Schema nesting deeper than {MAX_DEPTH} levels {self._describe(node)}")
        if node.element is None:
            raise StructuralError(f"List without element schema {self._describe(node)}")

        self._active.append(id(node))
        try:
            item_type = self.resolve_field_type(node.element)
        finally:
            self._active.pop()
        return f"[{item_type}]"

    def _resolve_literal(self, node: LiteralNode) -> str:
        category = node.value_category
        if not category:
            logger.warning(f"Unsupported literal value {node.value!r} {self._describe(node)}resolved as String")
            return self.options.scalar_name("string")
        return self.options.scalar_name(category)

    @staticmethod
    def _describe(node: SchemaNode) -> str:
        return f"at {node.source_path} " if node.source_path else ""
