"""
Database adapters for different database types
"""

import logging
import re
from abc import ABC, abstractmethod
from typing import Any, Dict, FrozenSet, List, Optional

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine, URL
from sqlalchemy.exc import SQLAlchemyError

from ..config import ConnectionConfig
from .type_maps import POSTGRESQL_TYPES, POSTGRESQL_SIZED_TYPES, MYSQL_TYPES, MYSQL_SIZED_TYPES
from .errors import DatabaseConnectionError, QueryError
from .models import ColumnType, RawColumnDescriptor, TableReference

logger = logging.getLogger(__name__)


class DatabaseAdapter(ABC):
    """Interface every engine adapter satisfies.

    Adapters only fetch metadata rows and shape them into RawColumnDescriptor
    and TableReference values; normalization never depends on a concrete engine.
    """

    db_type: str = ''
    type_map: Dict[str, ColumnType] = {}
    sized_types: FrozenSet[str] = frozenset()
    excluded_tables: FrozenSet[str] = frozenset()

    config: ConnectionConfig

    @abstractmethod
    def connect(self) -> None:
        """Open the connection pool"""
        pass

    @abstractmethod
    def close(self) -> None:
        """Release every pooled connection"""
        pass

    @abstractmethod
    def list_tables(self) -> List[str]:
        """Names of all base tables"""
        pass

    @abstractmethod
    def fetch_columns(self, table_name: str) -> List[RawColumnDescriptor]:
        """Column rows for one table, one row per column constraint"""
        pass

    @abstractmethod
    def fetch_relations(self, table_name: str) -> List[TableReference]:
        """Foreign key rows for one table"""
        pass

    def fetch_enum_labels(self, type_name: str) -> List[str]:
        """Ordered enum labels for a type name; empty when unknown"""
        return []

    def __enter__(self):
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


class MetadataQueryRunner:
    """Runs parameterized metadata queries on a pooled SQLAlchemy engine.

    Each query checks out its own connection, so several tables can be read
    from different threads at once.
    """

    def __init__(self, url: URL, pool_size: int = 5):
        self.url = url
        self.pool_size = pool_size
        self.engine: Optional[Engine] = None

    def connect(self) -> Engine:
        if self.engine is not None:
            return self.engine

        engine = create_engine(
            self.url,
            pool_size=self.pool_size,
            max_overflow=0,
            pool_pre_ping=True,
        )
        try:
            with engine.connect() as connection:
                connection.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            engine.dispose()
            raise DatabaseConnectionError(
                f"{self.url.get_backend_name()} connection failed: {e}"
            ) from e

        self.engine = engine
        logger.debug(f"Connected to {self.url.render_as_string(hide_password=True)}")
        return engine

    def close(self) -> None:
        if self.engine is not None:
            self.engine.dispose()
            self.engine = None

    def fetch_rows(self, query: str, params: Dict[str, Any],
                   table_name: Optional[str] = None) -> List[Dict[str, Any]]:
        """Execute a query and return rows as dicts with lower-case keys"""
        engine = self.connect()
        try:
            with engine.connect() as connection:
                result = connection.execute(text(query), params)
                rows = result.mappings().all()
        except SQLAlchemyError as e:
            raise QueryError(f"Metadata query failed: {e}", table_name) from e

        return [
            {str(key).lower(): _to_text(value) for key, value in row.items()}
            for row in rows
        ]


def _to_text(value: Any) -> Any:
    if isinstance(value, (bytes, bytearray)):
        return value.decode('utf-8')
    return value


class PostgreSQLAdapter(DatabaseAdapter):
    """PostgreSQL database adapter"""

    db_type = 'postgresql'
    type_map = POSTGRESQL_TYPES
    sized_types = POSTGRESQL_SIZED_TYPES
    excluded_tables = frozenset({'pg_stat_statements', 'pg_stat_statements_info'})

    TABLES_QUERY = """
        SELECT table_name
        FROM information_schema.tables
        WHERE table_schema = :schema
          AND table_catalog = :database
          AND table_type = 'BASE TABLE'
        ORDER BY table_name
    """

    COLUMNS_QUERY = """
        SELECT
            c.column_name,
            c.is_nullable,
            c.data_type,
            c.character_maximum_length,
            c.udt_schema,
            c.udt_name,
            tc.constraint_type
        FROM information_schema.columns c
        LEFT JOIN information_schema.key_column_usage kcu
            ON kcu.table_catalog = c.table_catalog
            AND kcu.table_schema = c.table_schema
            AND kcu.table_name = c.table_name
            AND kcu.column_name = c.column_name
        LEFT JOIN information_schema.table_constraints tc
            ON tc.constraint_catalog = kcu.constraint_catalog
            AND tc.constraint_schema = kcu.constraint_schema
            AND tc.constraint_name = kcu.constraint_name
            AND tc.table_name = c.table_name
        WHERE c.table_name = :table_name
          AND c.table_catalog = :database
          AND c.table_schema = :schema
        ORDER BY c.ordinal_position
    """

    RELATIONS_QUERY = """
        SELECT
            kcu.column_name,
            ccu.table_name AS referenced_table_name,
            ccu.column_name AS referenced_column_name
        FROM information_schema.table_constraints tc
        JOIN information_schema.key_column_usage kcu
            ON tc.constraint_name = kcu.constraint_name
            AND tc.table_schema = kcu.table_schema
        JOIN information_schema.constraint_column_usage ccu
            ON ccu.constraint_name = tc.constraint_name
            AND ccu.table_schema = tc.table_schema
        WHERE tc.constraint_type = 'FOREIGN KEY'
          AND tc.table_name = :table_name
          AND tc.table_schema = :schema
    """

    ENUM_LABELS_QUERY = """
        SELECT e.enumlabel
        FROM pg_catalog.pg_type t
        JOIN pg_catalog.pg_enum e ON t.oid = e.enumtypid
        JOIN pg_catalog.pg_namespace n ON n.oid = t.typnamespace
        WHERE t.typname = :type_name
          AND n.nspname = :type_schema
        ORDER BY e.enumsortorder
    """

    def __init__(self, config: ConnectionConfig):
        self.config = config
        self.queries = MetadataQueryRunner(
            URL.create(
                'postgresql+psycopg2',
                username=config.user,
                password=config.password,
                host=config.host,
                port=config.port,
                database=config.database,
            ),
            pool_size=config.pool_size,
        )

    def connect(self) -> None:
        self.queries.connect()

    def close(self) -> None:
        self.queries.close()

    def list_tables(self) -> List[str]:
        rows = self.queries.fetch_rows(
            self.TABLES_QUERY,
            {'schema': self.config.schema, 'database': self.config.database},
        )
        return [row['table_name'] for row in rows]

    def fetch_columns(self, table_name: str) -> List[RawColumnDescriptor]:
        rows = self.queries.fetch_rows(
            self.COLUMNS_QUERY,
            {'table_name': table_name, 'database': self.config.database, 'schema': self.config.schema},
            table_name,
        )
        return [
            RawColumnDescriptor(
                column_name=row['column_name'],
                is_nullable=row['is_nullable'],
                data_type=row['data_type'],
                character_maximum_length=row['character_maximum_length'],
                constraint_type=row['constraint_type'],
                type_name=_qualified_type(row['udt_schema'], row['udt_name']),
            )
            for row in rows
        ]

    def fetch_relations(self, table_name: str) -> List[TableReference]:
        rows = self.queries.fetch_rows(
            self.RELATIONS_QUERY,
            {'table_name': table_name, 'schema': self.config.schema},
            table_name,
        )
        return [_table_reference(row) for row in rows]

    def fetch_enum_labels(self, type_name: str) -> List[str]:
        """Labels of an enum type, given as schema.type or a bare type name"""
        type_schema, _, name = type_name.rpartition('.')
        rows = self.queries.fetch_rows(
            self.ENUM_LABELS_QUERY,
            {'type_name': name, 'type_schema': type_schema or self.config.schema},
        )
        return [row['enumlabel'] for row in rows]


class MySQLAdapter(DatabaseAdapter):
    """MySQL database adapter"""

    db_type = 'mysql'
    type_map = MYSQL_TYPES
    sized_types = MYSQL_SIZED_TYPES

    TABLES_QUERY = """
        SELECT TABLE_NAME AS table_name
        FROM information_schema.TABLES
        WHERE TABLE_SCHEMA = :database
          AND TABLE_TYPE = 'BASE TABLE'
        ORDER BY TABLE_NAME
    """

    COLUMNS_QUERY = """
        SELECT
            c.COLUMN_NAME AS column_name,
            c.IS_NULLABLE AS is_nullable,
            c.DATA_TYPE AS data_type,
            c.CHARACTER_MAXIMUM_LENGTH AS character_maximum_length,
            c.COLUMN_TYPE AS column_type,
            tc.CONSTRAINT_TYPE AS constraint_type
        FROM information_schema.COLUMNS c
        LEFT JOIN information_schema.KEY_COLUMN_USAGE kcu
            ON kcu.TABLE_SCHEMA = c.TABLE_SCHEMA
            AND kcu.TABLE_NAME = c.TABLE_NAME
            AND kcu.COLUMN_NAME = c.COLUMN_NAME
        LEFT JOIN information_schema.TABLE_CONSTRAINTS tc
            ON tc.CONSTRAINT_SCHEMA = kcu.CONSTRAINT_SCHEMA
            AND tc.TABLE_NAME = kcu.TABLE_NAME
            AND tc.CONSTRAINT_NAME = kcu.CONSTRAINT_NAME
        WHERE c.TABLE_SCHEMA = :database
          AND c.TABLE_NAME = :table_name
        ORDER BY c.ORDINAL_POSITION
    """

    RELATIONS_QUERY = """
        SELECT
            COLUMN_NAME AS column_name,
            REFERENCED_TABLE_NAME AS referenced_table_name,
            REFERENCED_COLUMN_NAME AS referenced_column_name
        FROM information_schema.KEY_COLUMN_USAGE
        WHERE TABLE_SCHEMA = :database
          AND TABLE_NAME = :table_name
          AND REFERENCED_TABLE_NAME IS NOT NULL
    """

    ENUM_PATTERN = re.compile(r"^\s*enum\s*\((.*)\)\s*$", re.IGNORECASE | re.DOTALL)
    LABEL_PATTERN = re.compile(r"'((?:[^']|'')*)'")

    def __init__(self, config: ConnectionConfig):
        self.config = config
        self.queries = MetadataQueryRunner(
            URL.create(
                'mysql+pymysql',
                username=config.user,
                password=config.password,
                host=config.host,
                port=config.port,
                database=config.database,
            ),
            pool_size=config.pool_size,
        )

    def connect(self) -> None:
        self.queries.connect()

    def close(self) -> None:
        self.queries.close()

    def list_tables(self) -> List[str]:
        rows = self.queries.fetch_rows(self.TABLES_QUERY, {'database': self.config.database})
        return [row['table_name'] for row in rows]

    def fetch_columns(self, table_name: str) -> List[RawColumnDescriptor]:
        rows = self.queries.fetch_rows(
            self.COLUMNS_QUERY,
            {'table_name': table_name, 'database': self.config.database},
            table_name,
        )
        columns = []
        for row in rows:
            data_type = (row['data_type'] or '').lower() or None
            column_type = row['column_type'] or ''
            # MySQL reports BOOLEAN columns as tinyint(1)
            if data_type == 'tinyint' and column_type.lower().startswith('tinyint(1)'):
                data_type = 'boolean'
            columns.append(RawColumnDescriptor(
                column_name=row['column_name'],
                is_nullable=row['is_nullable'],
                data_type=data_type,
                character_maximum_length=row['character_maximum_length'],
                constraint_type=row['constraint_type'],
                type_name=column_type or None,
            ))
        return columns

    def fetch_relations(self, table_name: str) -> List[TableReference]:
        rows = self.queries.fetch_rows(
            self.RELATIONS_QUERY,
            {'table_name': table_name, 'database': self.config.database},
            table_name,
        )
        return [_table_reference(row) for row in rows]

    def fetch_enum_labels(self, type_name: str) -> List[str]:
        """Labels come from the column type itself, e.g. enum('no','yes')"""
        match = self.ENUM_PATTERN.match(type_name)
        if not match:
            return []
        return [label.replace("''", "'") for label in self.LABEL_PATTERN.findall(match.group(1))]


def _table_reference(row: Dict[str, Any]) -> TableReference:
    return TableReference(
        name=row['column_name'],
        table=row['referenced_table_name'],
        column=row['referenced_column_name'],
    )


def _qualified_type(schema: Optional[str], name: Optional[str]) -> Optional[str]:
    if schema and name:
        return f"{schema}.{name}"
    return name
