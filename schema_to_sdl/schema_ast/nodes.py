"""
Schema node definitions.

These nodes describe the data shapes the compiler walks. Nodes compare
and hash by identity: two structurally equal objects are still two
different types unless they are the same instance.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

# Refinement checks understood on scalar nodes
UUID_CHECK = "uuid"
DATETIME_CHECK = "datetime"
DATE_CHECK = "date"
INT_CHECK = "int"


class WrapperKind(Enum):
    """Kind of wrapper around another node."""

    OPTIONAL = "optional"
    NULLABLE = "nullable"
    DEFAULT = "default"  # value always materialized, stays non-null


@dataclass(eq=False)
class SchemaNode:
    """Base class for all schema nodes."""

    # Original source location in schema (for error messages)
    source_path: str = field(default="", kw_only=True)

    # Raw schema metadata (x-* extensions, etc.)
    metadata: dict[str, Any] = field(default_factory=dict, kw_only=True)

    def optional(self) -> WrapperNode:
        return WrapperNode(kind=WrapperKind.OPTIONAL, inner=self)

    def nullable(self) -> WrapperNode:
        return WrapperNode(kind=WrapperKind.NULLABLE, inner=self)

    def default(self, value: Any) -> WrapperNode:
        return WrapperNode(kind=WrapperKind.DEFAULT, inner=self, default_value=value)


@dataclass(eq=False)
class ScalarNode(SchemaNode):
    """A scalar (string, number, boolean) with its refinement checks."""

    type_name: str = "string"  # "string", "number", "boolean"
    checks: tuple[str, ...] = ()

    def has_check(self, name: str) -> bool:
        """Whether this scalar carries the refinement check ``name``."""
        return name in self.checks

    @property
    def subtype(self) -> str:
        """Scalar subtype used as the key into the scalar table.

        One of "uuid", "datetime", "date", "string", "int", "float", "boolean".
        """
        if self.type_name == "string":
            for check in (UUID_CHECK, DATETIME_CHECK, DATE_CHECK):
                if self.has_check(check):
                    return check
            return "string"
        if self.type_name == "number":
            return "int" if self.has_check(INT_CHECK) else "float"
        return self.type_name


@dataclass(eq=False)
class WrapperNode(SchemaNode):
    """Optional, nullable or defaulted wrapper around another node."""

    kind: WrapperKind = WrapperKind.OPTIONAL
    inner: SchemaNode | None = None
    default_value: Any = None

    @property
    def is_nullable(self) -> bool:
        return self.kind in (WrapperKind.OPTIONAL, WrapperKind.NULLABLE)


@dataclass(eq=False)
class ListNode(SchemaNode):
    """A homogeneous list of ``element``."""

    element: SchemaNode | None = None


@dataclass(eq=False)
class ObjectNode(SchemaNode):
    """An object record; field order is declaration order."""

    fields: dict[str, SchemaNode] = field(default_factory=dict)


@dataclass(eq=False)
class EnumNode(SchemaNode):
    """A string enumeration."""

    values: list[str] = field(default_factory=list)


@dataclass(eq=False)
class LiteralNode(SchemaNode):
    """A single constant value (str, int, float or bool)."""

    value: Any = None

    @property
    def value_category(self) -> str:
        """One of "boolean", "int", "float", "string" or "" when unsupported."""
        # bool first: bool is a subclass of int
        if isinstance(self.value, bool):
            return "boolean"
        if isinstance(self.value, int):
            return "int"
        if isinstance(self.value, float):
            return "int" if self.value.is_integer() else "float"
        if isinstance(self.value, str):
            return "string"
        return ""


@dataclass(eq=False)
class UnionNode(SchemaNode):
    """A union of variants, in declared order."""

    variants: list[SchemaNode] = field(default_factory=list)


def string() -> ScalarNode:
    return ScalarNode(type_name="string")


def uuid() -> ScalarNode:
    return ScalarNode(type_name="string", checks=(UUID_CHECK,))


def datetime() -> ScalarNode:
    return ScalarNode(type_name="string", checks=(DATETIME_CHECK,))


def date() -> ScalarNode:
    return ScalarNode(type_name="string", checks=(DATE_CHECK,))


def integer() -> ScalarNode:
    return ScalarNode(type_name="number", checks=(INT_CHECK,))


def number() -> ScalarNode:
    return ScalarNode(type_name="number")


def boolean() -> ScalarNode:
    return ScalarNode(type_name="boolean")


def array(element: SchemaNode) -> ListNode:
    return ListNode(element=element)


def obj(**fields: SchemaNode) -> ObjectNode:
    return ObjectNode(fields=dict(fields))


def enum(*values: str) -> EnumNode:
    return EnumNode(values=list(values))


def literal(value: Any) -> LiteralNode:
    return LiteralNode(value=value)


def union(*variants: SchemaNode) -> UnionNode:
    return UnionNode(variants=list(variants))
