"""
JSON Schema parser that builds schema node trees.

Turns the ``$defs`` (or ``definitions``) of a JSON Schema document into
named schema nodes the compiler can consume. Every ``$ref`` to a
definition yields the very same node instance, so references resolve
through the identity-keyed type registry.
"""

from __future__ import annotations

from typing import Any

from ..errors import StructuralError
from ..utils import snake_to_pascal_case
from .nodes import (
    DATE_CHECK,
    DATETIME_CHECK,
    INT_CHECK,
    UUID_CHECK,
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


class SchemaParser:
    """Parses JSON Schema into named schema nodes."""

    # JSON Schema "format" -> scalar refinement check
    FORMAT_CHECKS = {
        "uuid": UUID_CHECK,
        "date-time": DATETIME_CHECK,
        "date": DATE_CHECK,
    }

    def __init__(self):
        self._raw_definitions: dict[str, dict[str, Any]] = {}
        self._parsed: dict[str, SchemaNode] = {}
        self._in_progress: set[str] = set()

    def parse(self, schema: dict[str, Any], root_name: str = "") -> dict[str, SchemaNode]:
        """
        Parse a JSON Schema into named schema nodes.

        Args:
            schema: The JSON Schema dictionary
            root_name: Name for the root type (if schema has properties)

        Returns:
            PascalCase type name -> schema node for each definition that
            becomes its own declaration (objects, enums, object unions),
            in definition order, followed by the root type
        """
        self._raw_definitions = {}
        self._parsed = {}
        self._in_progress = set()

        definitions = schema.get("$defs") or schema.get("definitions") or {}
        for name, def_schema in definitions.items():
            # Skip comment fields (strings) and _comment prefixed keys
            if isinstance(def_schema, str) or name.startswith("_comment"):
                continue
            self._raw_definitions[name] = def_schema

        parsed = {name: self._parse_definition(name) for name in self._raw_definitions}

        # Nodes each definition built itself; an alias ($ref or single-variant
        # oneOf) hands back a node built by another definition
        owned = {id(node) for name, node in parsed.items() if node.source_path == self._definition_path(name)}

        named: dict[str, SchemaNode] = {}
        for name, node in parsed.items():
            if id(node) in owned and node.source_path != self._definition_path(name):
                continue
            # Scalars, lists and wrappers are inlined wherever they are referenced
            if not self._is_declarable(node):
                continue
            named[snake_to_pascal_case(name)] = node

        if "properties" in schema and root_name:
            named[snake_to_pascal_case(root_name)] = self._parse_schema_node(schema, "#")

        return named

    def _parse_definition(self, name: str) -> SchemaNode:
        """Parse a definition once; later references get the same node."""
        if name in self._parsed:
            return self._parsed[name]
        if name in self._in_progress:
            raise StructuralError(f"Cyclic schema: definition {name!r} refers to itself")

        def_schema = self._raw_definitions[name]
        path = self._definition_path(name)

        if self._is_plain_object(def_schema):
            # Registered before its fields are parsed so self references work
            node = ObjectNode(source_path=path, metadata=self._extract_metadata(def_schema))
            self._parsed[name] = node
            node.fields = self._parse_fields(def_schema, path)
            return node

        self._in_progress.add(name)
        try:
            node = self._parse_schema_node(def_schema, path)
        finally:
            self._in_progress.discard(name)
        self._parsed[name] = node
        return node

    @staticmethod
    def _definition_path(name: str) -> str:
        return f"#/$defs/{name}"

    @staticmethod
    def _is_declarable(node: SchemaNode) -> bool:
        """Whether a definition becomes its own SDL declaration."""
        if isinstance(node, UnionNode):
            return bool(node.variants) and all(isinstance(v, ObjectNode) for v in node.variants)
        return isinstance(node, (ObjectNode, EnumNode))

    def _is_plain_object(self, schema: dict[str, Any]) -> bool:
        if any(key in schema for key in ("$ref", "const", "enum", "oneOf", "anyOf", "allOf")):
            return False
        return schema.get("type") == "object" or ("type" not in schema and "properties" in schema)

    def _parse_schema_node(self, schema: dict[str, Any], path: str) -> SchemaNode:
        """
        Parse a schema node recursively.

        Args:
            schema: The schema dictionary
            path: Current path in schema (for error messages)

        Returns:
            Appropriate SchemaNode subclass
        """
        metadata = self._extract_metadata(schema)

        if "$ref" in schema:
            return self._parse_ref_node(schema, path)

        if "const" in schema:
            return LiteralNode(value=schema["const"], source_path=path, metadata=metadata)

        if "oneOf" in schema or "anyOf" in schema:
            return self._parse_union_node(schema, path, metadata)

        if "allOf" in schema:
            return self._parse_allof_node(schema, path, metadata)

        if "enum" in schema:
            return self._parse_enum_node(schema, path, metadata)

        if "type" in schema:
            return self._parse_type_node(schema, path, metadata)

        # Fallback: treat as generic object (no properties means JSON)
        return ObjectNode(
            fields=self._parse_fields(schema, path),
            source_path=path,
            metadata=metadata,
        )

    def _extract_metadata(self, schema: dict[str, Any]) -> dict[str, Any]:
        """Extract x-* extension metadata from schema."""
        return {key: value for key, value in schema.items() if key.startswith("x-")}

    def _parse_ref_node(self, schema: dict[str, Any], path: str) -> SchemaNode:
        ref_path = schema["$ref"]
        if not ref_path.startswith("#"):
            raise StructuralError(f"External $ref {ref_path!r} at {path} is not supported")

        # e.g., "#/definitions/MyClass" or "#/$defs/MyClass"
        parts = ref_path.split("/")
        if len(parts) >= 3 and parts[1] in ("definitions", "$defs"):
            def_name = parts[2]
        else:
            def_name = parts[-1]

        if def_name not in self._raw_definitions:
            raise StructuralError(f"Unresolved $ref {ref_path!r} at {path}")
        return self._parse_definition(def_name)

    def _parse_union_node(self, schema: dict[str, Any], path: str, metadata: dict[str, Any]) -> SchemaNode:
        """Parse a oneOf or anyOf union; a null variant makes it nullable."""
        union_type = "oneOf" if "oneOf" in schema else "anyOf"

        variants = []
        is_nullable = False
        for i, variant in enumerate(schema[union_type]):
            if variant.get("type") == "null":
                is_nullable = True
                continue
            variants.append(self._parse_schema_node(variant, f"{path}/{union_type}/{i}"))

        node: SchemaNode
        if len(variants) == 1:
            node = variants[0]
        else:
            node = UnionNode(variants=variants, source_path=path, metadata=metadata)
        return self._wrap_nullable(node, path) if is_nullable else node

    def _parse_allof_node(self, schema: dict[str, Any], path: str, metadata: dict[str, Any]) -> ObjectNode:
        """Parse allOf by merging the fields of its object parts in order."""
        fields: dict[str, SchemaNode] = {}
        for i, part in enumerate(schema["allOf"]):
            part_node = self._parse_schema_node(part, f"{path}/allOf/{i}")
            if not isinstance(part_node, ObjectNode):
                raise StructuralError(f"allOf part {i} at {path} must be an object schema, got {type(part_node).__name__}")
            fields.update(part_node.fields)
        return ObjectNode(fields=fields, source_path=path, metadata=metadata)

    def _parse_enum_node(self, schema: dict[str, Any], path: str, metadata: dict[str, Any]) -> SchemaNode:
        values = schema["enum"]
        if all(isinstance(v, str) for v in values):
            return EnumNode(values=list(values), source_path=path, metadata=metadata)

        # Non-string enums become unions of literals
        variants: list[SchemaNode] = [LiteralNode(value=v, source_path=f"{path}/enum/{i}") for i, v in enumerate(values) if v is not None]
        node = UnionNode(variants=variants, source_path=path, metadata=metadata)
        return self._wrap_nullable(node, path) if None in values else node

    def _parse_type_node(self, schema: dict[str, Any], path: str, metadata: dict[str, Any]) -> SchemaNode:
        type_value = schema["type"]

        # Handle array of types (e.g., ["string", "null"])
        if isinstance(type_value, list):
            types = [t for t in type_value if t != "null"]
            if not types:
                raise StructuralError(f"Null-only type at {path} cannot be expressed in SDL")
            variants = [self._parse_type_node({**schema, "type": t}, f"{path}/type/{t}", metadata) for t in types]
            node: SchemaNode = variants[0] if len(variants) == 1 else UnionNode(variants=variants, source_path=path, metadata=metadata)
            return self._wrap_nullable(node, path) if len(types) != len(type_value) else node

        if type_value == "array":
            return self._parse_array_node(schema, path, metadata)

        if type_value == "object":
            return ObjectNode(fields=self._parse_fields(schema, path), source_path=path, metadata=metadata)

        return self._parse_scalar_node(schema, type_value, path, metadata)

    def _parse_array_node(self, schema: dict[str, Any], path: str, metadata: dict[str, Any]) -> ListNode:
        items_schema = schema.get("items")
        if items_schema is None:
            element: SchemaNode = ObjectNode(source_path=f"{path}/items")
        elif isinstance(items_schema, list):
            raise StructuralError(f"Tuple arrays at {path} cannot be expressed in SDL")
        else:
            element = self._parse_schema_node(items_schema, f"{path}/items")
        return ListNode(element=element, source_path=path, metadata=metadata)

    def _parse_fields(self, schema: dict[str, Any], path: str) -> dict[str, SchemaNode]:
        """Parse object properties; optional unless required or defaulted."""
        required_fields = schema.get("required", [])

        fields: dict[str, SchemaNode] = {}
        for prop_name, prop_schema in schema.get("properties", {}).items():
            prop_path = f"{path}/properties/{prop_name}"
            prop_node = self._parse_schema_node(prop_schema, prop_path)

            if "default" in prop_schema:
                prop_node = WrapperNode(
                    kind=WrapperKind.DEFAULT,
                    inner=prop_node,
                    default_value=prop_schema["default"],
                    source_path=prop_path,
                )
            elif prop_name not in required_fields:
                prop_node = WrapperNode(kind=WrapperKind.OPTIONAL, inner=prop_node, source_path=prop_path)

            fields[prop_name] = prop_node
        return fields

    def _parse_scalar_node(self, schema: dict[str, Any], type_name: str, path: str, metadata: dict[str, Any]) -> ScalarNode:
        if type_name == "string":
            check = self.FORMAT_CHECKS.get(schema.get("format", ""))
            return ScalarNode(type_name="string", checks=(check,) if check else (), source_path=path, metadata=metadata)

        if type_name == "integer":
            return ScalarNode(type_name="number", checks=(INT_CHECK,), source_path=path, metadata=metadata)

        if type_name in ("number", "boolean"):
            return ScalarNode(type_name=type_name, source_path=path, metadata=metadata)

        raise StructuralError(f"Unsupported JSON Schema type {type_name!r} at {path}")

    def _wrap_nullable(self, node: SchemaNode, path: str) -> WrapperNode:
        return WrapperNode(kind=WrapperKind.NULLABLE, inner=node, source_path=path)
