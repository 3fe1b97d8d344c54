"""
Attach foreign key references to normalized columns
"""

import logging
from dataclasses import replace
from typing import Dict, List, Sequence

from ..database.models import Column, TableReference
from ..utils.inflector import singular, title_case

logger = logging.getLogger(__name__)


def resolve_relations(table_name: str,
                      columns: Sequence[Column],
                      relations: Sequence[TableReference]) -> List[Column]:
    """Turn every column that matches a foreign key reference into a typed reference.

    When several references share a column name the last one wins; constraint
    and key-usage joins routinely return duplicate rows.
    """
    references: Dict[str, TableReference] = {}
    for reference in relations:
        if reference.name in references and references[reference.name] != reference:
            logger.debug(
                f"{table_name}.{reference.name}: replacing reference to "
                f"{references[reference.name].table} with {reference.table}"
            )
        references[reference.name] = reference

    resolved = []
    for column in columns:
        reference = references.get(column.name)
        if reference is None:
            resolved.append(column)
            continue

        data_type = replace(
            column.data_type,
            type=title_case(reference.table),
            values=None,
            references=reference,
        )
        resolved.append(replace(
            column,
            name=singular(reference.table),
            foreign_key=True,
            data_type=data_type,
        ))

    return resolved
