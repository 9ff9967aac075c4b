"""
SDL compiler.

Compiles one named schema, or a batch of named schemas with their
cross-references resolved, into SDL type definitions.
"""

from __future__ import annotations

from collections.abc import Mapping

from loguru import logger

from .analyzer import MAX_DEPTH
from .config import CompileOptions, coerce_options
from .emitter import DeclarationEmitter
from .errors import SchemaReferenceError, StructuralError
from .registry import TypeRegistry
from .schema_ast.nodes import ListNode, ObjectNode, SchemaNode, WrapperNode

DECLARATION_SEPARATOR = "\n\n"


class SdlCompiler:
    """Compiles schema nodes into SDL declarations."""

    def __init__(self, options: CompileOptions | dict | None = None):
        self.options = coerce_options(options)

    def compile_single(self, name: str, node: SchemaNode) -> str:
        """
        Compile one schema using only the caller-supplied registry.

        There is no auto-registration and no strict pass here; strict mode
        needs a batch of named peers.
        """
        registry = self.options.registry()
        logger.debug(f"Compiling {name} to SDL with {len(registry)} registered types")
        return DeclarationEmitter(registry, self.options).emit(name, node)

    def compile_batch(self, schemas: Mapping[str, SchemaNode]) -> str:
        """
        Compile named schemas into one SDL document.

        Args:
            schemas: Type name -> schema node, in output order

        Returns:
            Declarations joined by a blank line

        Raises:
            SchemaReferenceError: In strict mode, for a field referencing an
                unregistered object schema
            StructuralError: For schemas that cannot be expressed in SDL
        """
        registry = self.build_registry(schemas)
        logger.debug(f"Compiling {len(schemas)} schemas to SDL with {len(registry)} registered types (strict={self.options.strict})")

        if self.options.strict:
            self.validate_references(schemas, registry)

        # The registry is complete before emission, so forward references resolve
        emitter = DeclarationEmitter(registry, self.options)
        return DECLARATION_SEPARATOR.join(emitter.emit(name, node) for name, node in schemas.items())

    def build_registry(self, schemas: Mapping[str, SchemaNode]) -> TypeRegistry:
        """Seed registry from options, then register every named schema."""
        registry = self.options.registry()
        for name, node in schemas.items():
            registry.register(node, name)
        return registry

    def validate_references(self, schemas: Mapping[str, SchemaNode], registry: TypeRegistry) -> None:
        """Check that every object-typed field of every declared object is registered.

        Only the direct fields of each declared object are checked.
        """
        for type_name, node in schemas.items():
            if not isinstance(node, ObjectNode):
                continue
            for field_name, field_node in node.fields.items():
                target = self._referenced_node(field_node, type_name, field_name)
                if isinstance(target, ObjectNode) and target not in registry:
                    raise SchemaReferenceError(type_name, field_name)

    @staticmethod
    def _referenced_node(node: SchemaNode, type_name: str, field_name: str) -> SchemaNode | None:
        """Follow wrappers and list elements down to the referenced node."""
        seen: set[int] = set()
        while isinstance(node, (WrapperNode, ListNode)):
            if id(node) in seen or len(seen) >= MAX_DEPTH:
                raise StructuralError(f'Cyclic or too deeply nested schema in field "{field_name}" on type "{type_name}"')
            seen.add(id(node))
            node = node.inner if isinstance(node, WrapperNode) else node.element
        return node


def schema_to_sdl(name: str, schema: SchemaNode, options: CompileOptions | dict | None = None) -> str:
    """Compile a single named schema to SDL."""
    return SdlCompiler(options).compile_single(name, schema)


def schemas_to_sdl(schemas: Mapping[str, SchemaNode], options: CompileOptions | dict | None = None) -> str:
    """Compile named schemas to one SDL document."""
    return SdlCompiler(options).compile_batch(schemas)


def to_sdl(
    name_or_schemas: str | Mapping[str, SchemaNode],
    schema_or_options: SchemaNode | CompileOptions | dict | None = None,
    options: CompileOptions | dict | None = None,
) -> str:
    """
    Compile either ``(name, schema[, options])`` or ``(schemas[, options])``.

    Examples:
        to_sdl("Person", person_schema)
        to_sdl({"Dog": dog, "Cat": cat, "Pet": pet}, {"strict": True})
    """
    if isinstance(name_or_schemas, str):
        if not isinstance(schema_or_options, SchemaNode):
            raise TypeError(f"Expected a schema node after the name {name_or_schemas!r}, got {type(schema_or_options).__name__}")
        return schema_to_sdl(name_or_schemas, schema_or_options, options)

    if options is not None or isinstance(schema_or_options, SchemaNode):
        raise TypeError("Options must be passed as the second argument when compiling a mapping of schemas")
    return schemas_to_sdl(name_or_schemas, schema_or_options)
