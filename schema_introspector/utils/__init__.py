"""
Utility functions and helper classes
"""

from .inflector import singular, plural, title_case
from .logger import setup_logger
from .schema_analyzer import SchemaAnalyzer

__all__ = [
    'singular',
    'plural',
    'title_case',
    'setup_logger',
    'SchemaAnalyzer'
]
