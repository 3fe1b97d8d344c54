"""
Errors and warnings raised while introspecting a database schema
"""

from typing import Optional


class IntrospectionError(Exception):
    """Base class for fatal introspection failures"""


class DatabaseConnectionError(IntrospectionError, ConnectionError):
    """The data source is unreachable or rejected the session"""


class QueryError(IntrospectionError):
    """A metadata query failed"""

    def __init__(self, message: str, table_name: Optional[str] = None):
        self.table_name = table_name
        if table_name:
            message = f"{message} (table: {table_name})"
        super().__init__(message)


class SchemaWarning(UserWarning):
    """Non-fatal condition absorbed into the schema model"""

    def __init__(self, message: str, column_name: Optional[str] = None):
        self.column_name = column_name
        super().__init__(message)


class UnmappedTypeWarning(SchemaWarning):
    """A native type token has no canonical mapping"""


class EnumResolutionWarning(SchemaWarning):
    """Enum labels could not be resolved from the type catalog"""
