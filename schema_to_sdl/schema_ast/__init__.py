"""
Schema AST module.

Contains the schema node definitions and the JSON Schema parser.
"""

from __future__ import annotations

from .nodes import (
    EnumNode,
    ListNode,
    LiteralNode,
    ObjectNode,
    ScalarNode,
    SchemaNode,
    UnionNode,
    WrapperKind,
    WrapperNode,
)
from .parser import SchemaParser

__all__ = [
    "SchemaNode",
    "ScalarNode",
    "WrapperNode",
    "WrapperKind",
    "ListNode",
    "ObjectNode",
    "EnumNode",
    "LiteralNode",
    "UnionNode",
    "SchemaParser",
]
