"""
Schema Introspector - canonical, database-agnostic schema models read from
PostgreSQL and MySQL metadata catalogs
"""

__version__ = "0.1.0"
