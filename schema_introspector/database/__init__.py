"""
Database adapters and schema models
"""

from .models import (
    ColumnType, RelationKind, TableReference, DataType, Column, Table, Schema,
    RawColumnDescriptor, schema_to_dict,
)
from .errors import (
    IntrospectionError, DatabaseConnectionError, QueryError,
    SchemaWarning, UnmappedTypeWarning, EnumResolutionWarning,
)
from .adapters import DatabaseAdapter, PostgreSQLAdapter, MySQLAdapter
from .factory import DatabaseFactory

__all__ = [
    'ColumnType',
    'RelationKind',
    'TableReference',
    'DataType',
    'Column',
    'Table',
    'Schema',
    'RawColumnDescriptor',
    'schema_to_dict',
    'IntrospectionError',
    'DatabaseConnectionError',
    'QueryError',
    'SchemaWarning',
    'UnmappedTypeWarning',
    'EnumResolutionWarning',
    'DatabaseAdapter',
    'PostgreSQLAdapter',
    'MySQLAdapter',
    'DatabaseFactory',
]
