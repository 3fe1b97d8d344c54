"""
Normalization of raw metadata rows into the canonical schema
"""

from .column_normalizer import ColumnNormalizer
from .relation_resolver import resolve_relations
from .relation_normalizer import normalize_relations

__all__ = [
    'ColumnNormalizer',
    'resolve_relations',
    'normalize_relations'
]
