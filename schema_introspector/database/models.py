"""
Data models for the canonical schema representation
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Dict, Any, Optional, Tuple, Union


class ColumnType(str, Enum):
    """Closed set of scalar column types"""
    STRING = 'string'
    NUMBER = 'number'
    BOOLEAN = 'boolean'
    DATE = 'date'
    ENUM = 'enum'
    UNKNOWN = 'unknown'


class RelationKind(str, Enum):
    """Shape of a relation carried by a foreign key column"""
    ONE_TO_ONE = 'one_to_one'
    MANY_TO_ONE = 'many_to_one'
    MANY_TO_MANY = 'many_to_many'


@dataclass(frozen=True)
class TableReference:
    """Foreign key reference from a physical column to another table"""
    name: str
    table: str
    column: str
    through: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {'name': self.name, 'table': self.table, 'column': self.column}
        if self.through is not None:
            data['through'] = self.through
        return data


@dataclass(frozen=True)
class DataType:
    """Canonical data type of a column.

    ``type`` holds a ColumnType value for scalar columns, or the title-cased
    name of the referenced table for relation columns.
    """
    type: str
    size: Optional[int] = None
    values: Optional[Tuple[str, ...]] = None
    references: Optional[TableReference] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {'type': self.type}
        if self.size is not None:
            data['size'] = self.size
        if self.values is not None:
            data['values'] = list(self.values)
        if self.references is not None:
            data['references'] = self.references.to_dict()
        return data


@dataclass(frozen=True)
class Column:
    """A canonical table column"""
    name: str
    allow_null: bool
    primary: bool
    unique: bool
    foreign_key: bool
    data_type: DataType
    relation: Optional[RelationKind] = None

    @property
    def is_synthetic(self) -> bool:
        """True for many-to-many columns injected from a collapsed junction table"""
        references = self.data_type.references
        return references is not None and references.through is not None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            'name': self.name,
            'allowNull': self.allow_null,
            'primary': self.primary,
            'unique': self.unique,
            'foreignKey': self.foreign_key,
            'dataType': self.data_type.to_dict(),
        }
        if self.relation is not None:
            data['relation'] = self.relation.value
        return data


@dataclass(frozen=True)
class Table:
    """A canonical table: name plus columns in source order"""
    name: str
    columns: Tuple[Column, ...] = ()

    def get_column(self, name: str) -> Optional[Column]:
        for column in self.columns:
            if column.name == name:
                return column
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'columns': [column.to_dict() for column in self.columns],
        }


Schema = List[Table]


@dataclass(frozen=True)
class RawColumnDescriptor:
    """One column row as fetched from an engine's metadata catalog.

    Adapters shape their engine-specific rows into this before normalization.
    ``type_name`` is the concrete type name used to look up enum labels
    (PostgreSQL ``udt_name``, MySQL ``COLUMN_TYPE``).
    """
    column_name: str
    is_nullable: Union[str, bool, None]
    data_type: Optional[str]
    character_maximum_length: Union[str, int, None] = None
    constraint_type: Optional[str] = None
    type_name: Optional[str] = None


def schema_to_dict(schema: Schema) -> List[Dict[str, Any]]:
    """Render a schema as JSON-ready data"""
    return [table.to_dict() for table in schema]
