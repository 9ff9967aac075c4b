"""
Naming helpers for SDL type names.
"""

import re
from pathlib import Path

# Words in camelCase, snake_case, kebab-case or spaced text
_WORD_PATTERN = re.compile(r"[a-z]+|[A-Z][a-z]*|[0-9]+")


def snake_to_pascal_case(text: str) -> str:
    """Convert snake_case, camelCase or space-separated text to PascalCase.

    Examples:
        "domain_product" -> "DomainProduct"
        "drink-type" -> "DrinkType"
        "inventoryItem" -> "InventoryItem"
        "first 3 rows" -> "First3Rows"
    """
    if not text:
        return ""
    words = _WORD_PATTERN.findall(text.replace("_", " ").replace("-", " "))
    return "".join(word.capitalize() for word in words if word)


def type_name_from_path(path: str | Path) -> str:
    """Root type name for a schema file: ``pet_store.schema.json`` -> ``PetStore``."""
    return snake_to_pascal_case(Path(path).name.split(".")[0])
