"""
Native type vocabularies of each engine mapped to canonical column types
"""

from typing import Dict

from .models import ColumnType


POSTGRESQL_TYPES: Dict[str, ColumnType] = {
    'character varying': ColumnType.STRING,
    'varchar': ColumnType.STRING,
    'character': ColumnType.STRING,
    'char': ColumnType.STRING,
    'text': ColumnType.STRING,
    'uuid': ColumnType.STRING,
    'citext': ColumnType.STRING,
    'smallint': ColumnType.NUMBER,
    'integer': ColumnType.NUMBER,
    'bigint': ColumnType.NUMBER,
    'numeric': ColumnType.NUMBER,
    'decimal': ColumnType.NUMBER,
    'real': ColumnType.NUMBER,
    'double precision': ColumnType.NUMBER,
    'smallserial': ColumnType.NUMBER,
    'serial': ColumnType.NUMBER,
    'bigserial': ColumnType.NUMBER,
    'money': ColumnType.NUMBER,
    'boolean': ColumnType.BOOLEAN,
    'date': ColumnType.DATE,
    'timestamp': ColumnType.DATE,
    'timestamp without time zone': ColumnType.DATE,
    'timestamp with time zone': ColumnType.DATE,
    'time': ColumnType.DATE,
    'time without time zone': ColumnType.DATE,
    'time with time zone': ColumnType.DATE,
    'USER-DEFINED': ColumnType.ENUM,
}

POSTGRESQL_SIZED_TYPES = frozenset({
    'character varying',
    'varchar',
    'character',
    'char',
})

MYSQL_TYPES: Dict[str, ColumnType] = {
    'varchar': ColumnType.STRING,
    'char': ColumnType.STRING,
    'tinytext': ColumnType.STRING,
    'text': ColumnType.STRING,
    'mediumtext': ColumnType.STRING,
    'longtext': ColumnType.STRING,
    'tinyint': ColumnType.NUMBER,
    'smallint': ColumnType.NUMBER,
    'mediumint': ColumnType.NUMBER,
    'int': ColumnType.NUMBER,
    'integer': ColumnType.NUMBER,
    'bigint': ColumnType.NUMBER,
    'decimal': ColumnType.NUMBER,
    'numeric': ColumnType.NUMBER,
    'float': ColumnType.NUMBER,
    'double': ColumnType.NUMBER,
    'boolean': ColumnType.BOOLEAN,
    'bit': ColumnType.BOOLEAN,
    'date': ColumnType.DATE,
    'datetime': ColumnType.DATE,
    'timestamp': ColumnType.DATE,
    'time': ColumnType.DATE,
    'year': ColumnType.DATE,
    'enum': ColumnType.ENUM,
}

MYSQL_SIZED_TYPES = frozenset({
    'varchar',
    'char',
})
