"""
Configuration for the SDL compiler.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from types import MappingProxyType

from .registry import TypeRegistry

# Output names for refined scalars and the object fallback
DEFAULT_SCALARS: Mapping[str, str] = MappingProxyType(
    {
        "uuid": "UUID",
        "datetime": "Datetime",
        "date": "Date",
        "json": "JSON",
    }
)

# Generic names for each scalar category
GENERIC_SCALARS: Mapping[str, str] = MappingProxyType(
    {
        "string": "String",
        "int": "Int",
        "float": "Float",
        "boolean": "Boolean",
    }
)

# Refined string subtypes fall back to their category name when unmapped
SUBTYPE_CATEGORIES: Mapping[str, str] = MappingProxyType(
    {
        "uuid": "string",
        "datetime": "string",
        "date": "string",
    }
)

# camelCase spellings accepted in config files
OPTION_ALIASES: Mapping[str, str] = MappingProxyType(
    {
        "preserveEnumCase": "preserve_enum_case",
        "addGenerationComment": "add_generation_comment",
    }
)


@dataclass
class CompileOptions:
    """Configuration options for SDL compilation."""

    # Scalar name overrides, merged over DEFAULT_SCALARS
    scalars: dict[str, str] = field(default_factory=dict)

    # Registry seed: schema node -> type name
    types: TypeRegistry | Mapping | None = None

    # Batch only: unregistered object fields are errors instead of JSON
    strict: bool = False

    # Emit enum values verbatim instead of upper-casing them
    preserve_enum_case: bool = False

    # Add generation comment at top of CLI output
    add_generation_comment: bool = True

    def resolved_scalars(self) -> dict[str, str]:
        """Default scalar table merged with this call's overrides."""
        return {**DEFAULT_SCALARS, **self.scalars}

    def scalar_name(self, key: str) -> str:
        """Output name for a scalar subtype key ("uuid", "int", "json", ...)."""
        scalars = self.resolved_scalars()
        if key in scalars:
            return scalars[key]
        category = SUBTYPE_CATEGORIES.get(key, key)
        return scalars.get(category, GENERIC_SCALARS.get(category, "String"))

    def registry(self) -> TypeRegistry:
        """A fresh registry seeded from ``types``."""
        if self.types is None:
            return TypeRegistry()
        return TypeRegistry(self.types)

    @staticmethod
    def from_dict(d: dict) -> CompileOptions:
        """Create options from a dictionary (e.g. a JSON config file)."""
        options = CompileOptions()
        option_names = {f.name for f in fields(CompileOptions)}
        for k, v in d.items():
            k = OPTION_ALIASES.get(k, k)
            if k == "types":
                continue
            if k in option_names:
                setattr(options, k, v)
        return options

    def to_dict(self) -> dict:
        """Convert options to a dictionary."""
        return {
            "scalars": dict(self.scalars),
            "strict": self.strict,
            "preserve_enum_case": self.preserve_enum_case,
            "add_generation_comment": self.add_generation_comment,
        }


def coerce_options(options: CompileOptions | dict | None) -> CompileOptions:
    """Accept options as a CompileOptions, a plain dict or None."""
    if options is None:
        return CompileOptions()
    if isinstance(options, CompileOptions):
        return options
    coerced = CompileOptions.from_dict(options)
    coerced.types = options.get("types")
    return coerced
