"""Schema to SDL compiler

Compiles trees of data-shape definitions (scalars, wrappers, lists,
enums, literals, unions and objects) into GraphQL-style SDL type
definitions, resolving cross-references between named schemas.
"""

__version__ = "1.0.0"

from loguru import logger

from .compiler import SdlCompiler, schema_to_sdl, schemas_to_sdl, to_sdl
from .config import DEFAULT_SCALARS, CompileOptions
from .errors import SchemaReferenceError, SdlError, StructuralError
from .registry import TypeRegistry
from .schema_ast import SchemaParser

# Library logging stays silent until a caller opts in with logger.enable("schema_to_sdl")
logger.disable("schema_to_sdl")

__all__ = [
    "SdlCompiler",
    "schema_to_sdl",
    "schemas_to_sdl",
    "to_sdl",
    "CompileOptions",
    "DEFAULT_SCALARS",
    "TypeRegistry",
    "SchemaParser",
    "SdlError",
    "StructuralError",
    "SchemaReferenceError",
]
