"""
Classify relations across a whole schema and collapse junction tables
"""

import logging
from dataclasses import replace
from typing import Dict, List, Optional, Sequence, Set, Tuple

from ..database.models import Column, DataType, RelationKind, Schema, Table, TableReference
from ..utils.inflector import plural, title_case

logger = logging.getLogger(__name__)


def normalize_relations(schema: Schema) -> Schema:
    """Return the schema with relation shapes classified and junctions collapsed.

    Works in a single pass: merge and classify every table, decide which
    tables are junctions, drop them, then inject the many-to-many columns
    on both endpoints. Running it again on its own output changes nothing.
    """
    tables = [_classify_table(_merge_columns(table)) for table in schema]

    names = {table.name for table in tables}
    referenced = _referenced_tables(tables)
    junctions = {}
    for table in tables:
        sides = _junction_sides(table)
        if sides is None or not all(ref.table in names for ref in sides):
            continue
        # Collapsing a table other tables point at would leave dangling references
        if table.name in referenced:
            logger.warning(f"{table.name} links two tables but is referenced elsewhere; keeping it")
            continue
        junctions[table.name] = sides

    injections: Dict[str, List[Column]] = {}
    for name, (left, right) in junctions.items():
        logger.debug(f"Collapsing junction table {name} ({left.table} <-> {right.table})")
        injections.setdefault(left.table, []).append(_many_to_many_column(name, right))
        injections.setdefault(right.table, []).append(_many_to_many_column(name, left))

    normalized = []
    for table in tables:
        if table.name in junctions:
            continue
        normalized.append(_inject_columns(table, injections.get(table.name, [])))

    return normalized


def _referenced_tables(tables: Sequence[Table]) -> Set[str]:
    """Names of tables targeted by a foreign key of some other table"""
    referenced = set()
    for table in tables:
        for column in table.columns:
            references = column.data_type.references
            if column.foreign_key and references is not None and references.table != table.name:
                referenced.add(references.table)
    return referenced


def _merge_columns(table: Table) -> Table:
    """Fold duplicate rows of one logical column into a single column.

    Metadata joins return one row per constraint, so a column that is both a
    foreign key and unique shows up twice. Plain columns keep their names;
    a foreign key whose relation name is taken falls back to its physical name.
    """
    merged: Dict[Tuple[str, str], Column] = {}
    for column in table.columns:
        key = (column.name, _physical_name(column))
        existing = merged.get(key)
        merged[key] = column if existing is None else _merge_pair(existing, column)

    taken = {column.name for column in merged.values() if not _is_renamed(column)}
    columns = []
    for column in merged.values():
        if _is_renamed(column):
            name = _free_name(column.name, _physical_name(column), taken)
            if name != column.name:
                logger.warning(f"{table.name}: {column.name} is already taken; keeping name {name}")
                column = replace(column, name=name)
            taken.add(name)
        columns.append(column)

    return replace(table, columns=tuple(columns))


def _is_renamed(column: Column) -> bool:
    return column.name != _physical_name(column)


def _free_name(name: str, physical: str, taken: Set[str]) -> str:
    if name not in taken:
        return name
    candidate, suffix = physical, 2
    while candidate in taken:
        candidate = f"{physical}_{suffix}"
        suffix += 1
    return candidate


def _physical_name(column: Column) -> str:
    references = column.data_type.references
    if column.foreign_key and references is not None and references.through is None:
        return references.name
    return column.name


def _merge_pair(first: Column, second: Column) -> Column:
    primary = first.primary or second.primary
    data_type = first.data_type
    if data_type.references is None and second.data_type.references is not None:
        data_type = second.data_type

    return replace(
        first,
        allow_null=first.allow_null and second.allow_null and not primary,
        primary=primary,
        unique=first.unique or second.unique or primary,
        foreign_key=first.foreign_key or second.foreign_key,
        data_type=data_type,
        relation=first.relation or second.relation,
    )


def _classify_table(table: Table) -> Table:
    return replace(table, columns=tuple(_classify_column(column) for column in table.columns))


def _classify_column(column: Column) -> Column:
    if not column.foreign_key:
        return column
    if column.relation is RelationKind.MANY_TO_MANY:
        return column

    relation = RelationKind.ONE_TO_ONE if column.unique else RelationKind.MANY_TO_ONE
    return replace(column, relation=relation)


def _junction_sides(table: Table) -> Optional[Tuple[TableReference, TableReference]]:
    """Return both reference rows if the table only links two other tables.

    A junction has exactly two columns, both foreign keys, pointing at two
    distinct tables. Its primary key, if any, is made of those two columns.
    """
    foreign_keys = []
    for column in table.columns:
        if column.is_synthetic or not column.foreign_key or column.data_type.references is None:
            return None
        foreign_keys.append(column.data_type.references)

    if len(foreign_keys) != 2:
        return None

    left, right = foreign_keys
    referenced: Set[str] = {left.table, right.table}
    if len(referenced) != 2 or table.name in referenced:
        return None

    return left, right


def _many_to_many_column(junction: str, target: TableReference) -> Column:
    return Column(
        name=plural(target.table),
        allow_null=True,
        primary=False,
        unique=False,
        foreign_key=True,
        data_type=DataType(
            type=title_case(target.table),
            references=replace(target, through=junction),
        ),
        relation=RelationKind.MANY_TO_MANY,
    )


def _inject_columns(table: Table, columns: Sequence[Column]) -> Table:
    if not columns:
        return table

    existing = {column.name for column in table.columns}
    added = []
    for column in columns:
        if column.name in existing:
            logger.warning(
                f"{table.name} already has a column named {column.name}; "
                f"skipping many-to-many relation through {column.data_type.references.through}"
            )
            continue
        existing.add(column.name)
        added.append(column)

    return replace(table, columns=table.columns + tuple(added))
