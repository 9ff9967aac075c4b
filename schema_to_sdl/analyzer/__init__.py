"""
Analyzer module.

Contains field type resolution and union classification.
"""

from __future__ import annotations

from .field_resolver import MAX_DEPTH, FieldTypeResolver
from .union_classifier import UnionClassifier

__all__ = [
    "FieldTypeResolver",
    "UnionClassifier",
    "MAX_DEPTH",
]
