"""
Errors raised while compiling schemas to SDL.
"""

from __future__ import annotations


class SdlError(Exception):
    """Base class for schema to SDL compilation errors."""


class StructuralError(SdlError):
    """The schema shape cannot be expressed in SDL."""


class SchemaReferenceError(SdlError):
    """Strict mode: a field references an object schema missing from the registry."""

    def __init__(self, type_name: str, field_name: str):
        self.type_name = type_name
        self.field_name = field_name
        super().__init__(f'Strict mode: Field "{field_name}" on type "{type_name}" references an unregistered object schema. Register it with a type name or disable strict mode.')
