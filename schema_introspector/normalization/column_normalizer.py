"""
Convert raw, engine-specific column rows into canonical columns
"""

import logging
from typing import Callable, Dict, List, Optional, Sequence, Union, AbstractSet

from ..database.errors import SchemaWarning, UnmappedTypeWarning, EnumResolutionWarning
from ..database.models import Column, ColumnType, DataType, RawColumnDescriptor

logger = logging.getLogger(__name__)

EnumResolver = Callable[[str], Sequence[str]]

PRIMARY_KEY = 'PRIMARY KEY'
UNIQUE = 'UNIQUE'


class ColumnNormalizer:
    """Normalize raw column descriptors for one engine vocabulary.

    Non-fatal problems (unmapped types, unresolvable enums) degrade the column
    to ``unknown`` and are collected in ``warnings`` for the caller to log.
    """

    def __init__(self,
                 type_map: Dict[str, ColumnType],
                 sized_types: AbstractSet[str] = frozenset(),
                 enum_resolver: Optional[EnumResolver] = None,
                 numeric_base: int = 10):
        self.type_map = type_map
        self.sized_types = sized_types
        self.enum_resolver = enum_resolver
        self.numeric_base = numeric_base
        self.warnings: List[SchemaWarning] = []

    def normalize(self, raw: RawColumnDescriptor) -> Column:
        """Convert one raw descriptor into a canonical column"""
        primary = raw.constraint_type == PRIMARY_KEY
        unique = primary or raw.constraint_type == UNIQUE

        return Column(
            name=raw.column_name,
            allow_null=self._is_nullable(raw.is_nullable) and not primary,
            primary=primary,
            unique=unique,
            foreign_key=False,
            data_type=self._data_type(raw),
        )

    def _data_type(self, raw: RawColumnDescriptor) -> DataType:
        column_type = self.type_map.get(raw.data_type) if raw.data_type else None

        if column_type is None:
            self._warn(UnmappedTypeWarning(
                f"Unmapped type {raw.data_type!r} for column {raw.column_name!r}",
                raw.column_name,
            ))
            return DataType(type=ColumnType.UNKNOWN.value)

        if column_type is ColumnType.ENUM:
            return self._enum_type(raw)

        size = None
        if raw.data_type in self.sized_types:
            size = self._parse_size(raw.character_maximum_length)

        return DataType(type=column_type.value, size=size)

    def _enum_type(self, raw: RawColumnDescriptor) -> DataType:
        type_name = raw.type_name or raw.data_type
        labels: Sequence[str] = ()

        if self.enum_resolver is not None and type_name:
            try:
                labels = self.enum_resolver(type_name)
            except Exception as e:
                self._warn(EnumResolutionWarning(
                    f"Enum lookup for {type_name!r} failed on column {raw.column_name!r}: {e}",
                    raw.column_name,
                ))
                return DataType(type=ColumnType.UNKNOWN.value)

        if not labels:
            self._warn(EnumResolutionWarning(
                f"No enum labels found for {type_name!r} on column {raw.column_name!r}",
                raw.column_name,
            ))
            return DataType(type=ColumnType.UNKNOWN.value)

        return DataType(type=ColumnType.ENUM.value, values=tuple(labels))

    def _parse_size(self, value: Union[str, int, None]) -> Optional[int]:
        if value is None or isinstance(value, bool):
            return None
        if isinstance(value, int):
            return value
        try:
            return int(str(value).strip(), self.numeric_base)
        except ValueError:
            logger.debug(f"Ignoring unparseable length {value!r}")
            return None

    @staticmethod
    def _is_nullable(value: Union[str, bool, None]) -> bool:
        if isinstance(value, str):
            return value.strip().upper() == 'YES'
        return bool(value)

    def _warn(self, warning: SchemaWarning):
        self.warnings.append(warning)
