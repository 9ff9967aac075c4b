"""
Declaration emitter.

Renders one named top-level schema (object, enum or union) into an SDL
declaration block using the templates in ``templates/sdl``.
"""

from __future__ import annotations

from pathlib import Path

import jinja2

from .analyzer import FieldTypeResolver
from .config import CompileOptions
from .errors import StructuralError
from .registry import TypeRegistry
from .schema_ast.nodes import EnumNode, ObjectNode, SchemaNode, UnionNode

CURRENT_DIR = Path(__file__).parent.resolve().absolute()
TEMPLATE_DIR = CURRENT_DIR / "templates" / "sdl"


def _load_template(env: jinja2.Environment, name: str) -> jinja2.Template:
    return env.from_string((TEMPLATE_DIR / f"{name}.graphql.jinja2").read_text(encoding="utf-8"))


class DeclarationEmitter:
    """Emits SDL declarations for top-level schemas."""

    def __init__(self, registry: TypeRegistry, options: CompileOptions):
        self.registry = registry
        self.options = options
        self.resolver = FieldTypeResolver(registry, options)

        self.jinja_env = jinja2.Environment(lstrip_blocks=True, trim_blocks=True)
        self.type_template = _load_template(self.jinja_env, "type")
        self.enum_template = _load_template(self.jinja_env, "enum")
        self.union_template = _load_template(self.jinja_env, "union")

    def emit(self, name: str, node: SchemaNode) -> str:
        """
        Emit the declaration for one named schema.

        Args:
            name: Declared type name
            node: Top-level schema node

        Returns:
            The SDL declaration block, without trailing newline

        Raises:
            StructuralError: If the node kind cannot be declared at top level
                or a field type cannot be expressed
        """
        if isinstance(node, ObjectNode):
            return self.emit_object(name, node)
        if isinstance(node, EnumNode):
            return self.emit_enum(name, node)
        if isinstance(node, UnionNode):
            return self.emit_union(name, node)
        raise StructuralError(f'Top-level schema "{name}" must be an object, enum or union, got {type(node).__name__}')

    def emit_object(self, name: str, node: ObjectNode) -> str:
        fields = []
        for field_name, field_node in node.fields.items():
            try:
                field_type = self.resolver.resolve_field_type(field_node)
            except StructuralError as e:
                raise StructuralError(f'Field "{field_name}" on type "{name}": {e}') from e
            fields.append({"name": field_name, "type": field_type})
        return self.type_template.render(name=name, fields=fields)

    def emit_enum(self, name: str, node: EnumNode) -> str:
        values = [str(v) if self.options.preserve_enum_case else str(v).upper() for v in node.values]
        return self.enum_template.render(name=name, values=values)

    def emit_union(self, name: str, node: UnionNode) -> str:
        if not node.variants:
            raise StructuralError(f'Union "{name}" has no members')

        members = []
        for index, variant in enumerate(node.variants):
            member_name = self.registry.get(variant)
            if not isinstance(variant, ObjectNode) or member_name is None:
                raise StructuralError(f'Union "{name}" member {index} must be a registered object schema, got {"unregistered " if member_name is None else ""}{type(variant).__name__}')
            members.append(member_name)
        return self.union_template.render(name=name, members=members)
