"""
Read a database schema through an adapter and normalize it
"""

import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional

from .database.adapters import DatabaseAdapter
from .database.errors import SchemaWarning
from .database.models import Schema, Table, TableReference
from .normalization.column_normalizer import ColumnNormalizer
from .normalization.relation_normalizer import normalize_relations
from .normalization.relation_resolver import resolve_relations

logger = logging.getLogger(__name__)

# Filtered out for every engine
SYSTEM_TABLES = frozenset({'pg_stat_statements'})


class SchemaReader:
    """Builds the canonical schema from an adapter's raw metadata rows"""

    def __init__(self, adapter: DatabaseAdapter, max_workers: Optional[int] = None):
        self.adapter = adapter
        self.max_workers = max_workers or adapter.config.pool_size
        self.warnings: List[SchemaWarning] = []
        self._warnings_lock = threading.Lock()

    def read_schema(self) -> Schema:
        """List tables, read each one concurrently, then normalize relations.

        Any table failing aborts the whole read; a partial schema is never returned.
        """
        started = time.time()
        self.warnings = []
        table_names = self.get_tables()
        if not table_names:
            logger.info("No tables found")
            return []

        workers = max(1, min(self.max_workers, len(table_names)))
        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = [executor.submit(self.get_table_schema, name) for name in table_names]
            try:
                tables = [future.result() for future in futures]
            except Exception:
                for future in futures:
                    future.cancel()
                raise

        schema = normalize_relations(tables)
        logger.info(
            f"Read {len(schema)} tables ({len(tables) - len(schema)} junction tables collapsed) "
            f"in {time.time() - started:.2f}s"
        )
        return schema

    def get_tables(self) -> List[str]:
        excluded = SYSTEM_TABLES | self.adapter.excluded_tables
        return [name for name in self.adapter.list_tables() if name not in excluded]

    def get_table_schema(self, table_name: str) -> Table:
        raw_columns = self.adapter.fetch_columns(table_name)
        relations = self.get_relations_for_table(table_name)

        normalizer = ColumnNormalizer(
            self.adapter.type_map,
            self.adapter.sized_types,
            enum_resolver=self.adapter.fetch_enum_labels,
            numeric_base=self.adapter.config.numeric_base,
        )
        columns = [normalizer.normalize(raw) for raw in raw_columns]
        columns = resolve_relations(table_name, columns, relations)

        for warning in normalizer.warnings:
            logger.warning(f"{table_name}: {warning}")
        with self._warnings_lock:
            self.warnings.extend(normalizer.warnings)

        logger.debug(f"{table_name}: {len(columns)} column rows, {len(relations)} relations")
        return Table(name=table_name, columns=tuple(columns))

    def get_relations_for_table(self, table_name: str) -> List[TableReference]:
        return self.adapter.fetch_relations(table_name)
