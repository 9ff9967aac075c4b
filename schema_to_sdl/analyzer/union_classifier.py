"""
Union classifier.

Decides how a union used as a field type is represented in SDL: collapsed
to a single scalar, referenced by its registered name, or rejected.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..errors import StructuralError
from ..schema_ast.nodes import (
    EnumNode,
    LiteralNode,
    ObjectNode,
    ScalarNode,
    SchemaNode,
    UnionNode,
)

if TYPE_CHECKING:
    from .field_resolver import FieldTypeResolver


class UnionClassifier:
    """Classifies union nodes in field position."""

    def __init__(self, resolver: FieldTypeResolver):
        self.resolver = resolver

    def classify(self, node: UnionNode) -> str:
        """
        Return the SDL base type for a union field.

        Args:
            node: The union node

        Returns:
            Base type name (without nullability marker)

        Raises:
            StructuralError: For object unions that are not registered,
                empty unions and unions mixing categories
        """
        registered = self.resolver.registry.get(node)
        if registered is not None:
            return registered

        if not node.variants:
            raise StructuralError(f"Union {self._describe(node)}has no variants")

        variants = [self.resolver.unwrap(v)[0] for v in node.variants]
        options = self.resolver.options

        if all(self._is_string_like(v) for v in variants):
            return options.scalar_name("string")

        if all(self._is_number_like(v) for v in variants):
            if all(self._is_integer_valued(v) for v in variants):
                return options.scalar_name("int")
            return options.scalar_name("float")

        if all(self._is_boolean_like(v) for v in variants):
            return options.scalar_name("boolean")

        if all(isinstance(v, ObjectNode) for v in variants):
            raise StructuralError(f"Object union used as a field must be registered with a type name {self._describe(node)}(pass it in the named schemas or in the types option)")

        raise StructuralError(
            f"Union contains mixed types {self._describe(node)}"
            "(allowed: all strings, all numbers, all booleans, or registered objects)"
        )

    @staticmethod
    def _describe(node: SchemaNode) -> str:
        return f"at {node.source_path} " if node.source_path else ""

    @staticmethod
    def _is_string_like(node: SchemaNode) -> bool:
        if isinstance(node, ScalarNode):
            return node.subtype == "string"
        if isinstance(node, LiteralNode):
            return node.value_category == "string"
        return isinstance(node, EnumNode)

    @staticmethod
    def _is_number_like(node: SchemaNode) -> bool:
        if isinstance(node, ScalarNode):
            return node.type_name == "number"
        if isinstance(node, LiteralNode):
            return node.value_category in ("int", "float")
        return False

    @staticmethod
    def _is_integer_valued(node: SchemaNode) -> bool:
        if isinstance(node, ScalarNode):
            return node.subtype == "int"
        return isinstance(node, LiteralNode) and node.value_category == "int"

    @staticmethod
    def _is_boolean_like(node: SchemaNode) -> bool:
        if isinstance(node, ScalarNode):
            return node.type_name == "boolean"
        return isinstance(node, LiteralNode) and node.value_category == "boolean"
