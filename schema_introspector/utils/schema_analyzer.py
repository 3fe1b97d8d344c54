"""
Schema analysis and table dependency utilities
"""

import networkx as nx
from typing import Dict, List, Any
from ..database.models import Schema


class SchemaAnalyzer:
    """Analyze table dependencies of a canonical schema"""

    def __init__(self):
        self.relationship_graph = nx.DiGraph()

    def analyze_schema(self, schema: Schema) -> Dict[str, Any]:
        """Analyze schema and return dependency insights"""
        self._build_relationship_graph(schema)

        return {
            'dependencies': self._analyze_table_dependencies(schema),
            'circular_references': self._find_circular_references(),
            'self_references': self._find_self_references(schema),
            'generation_order': self.get_generation_order(schema),
        }

    def _build_relationship_graph(self, schema: Schema):
        """Build a graph of table -> referenced table edges"""
        self.relationship_graph.clear()

        for table in schema:
            self.relationship_graph.add_node(table.name)

        for table in schema:
            for column in table.columns:
                references = column.data_type.references
                if not column.foreign_key or references is None or column.is_synthetic:
                    continue
                # Self references do not affect ordering
                if references.table == table.name:
                    continue
                if references.table not in self.relationship_graph:
                    continue
                self.relationship_graph.add_edge(
                    table.name,
                    references.table,
                    column=column.name,
                    referenced_column=references.column,
                )

    def _analyze_table_dependencies(self, schema: Schema) -> Dict[str, List[str]]:
        """Analyze which tables depend on which other tables"""
        return {
            table.name: sorted(self.relationship_graph.successors(table.name))
            for table in schema
        }

    def _find_circular_references(self) -> List[List[str]]:
        """Find circular references in the schema.

        Each cycle follows edge direction and starts at its smallest table name.
        """
        cycles = []
        for cycle in nx.simple_cycles(self.relationship_graph):
            start = cycle.index(min(cycle))
            cycles.append(cycle[start:] + cycle[:start])
        return sorted(cycles)

    def _find_self_references(self, schema: Schema) -> List[str]:
        names = []
        for table in schema:
            for column in table.columns:
                references = column.data_type.references
                if column.foreign_key and references is not None and references.table == table.name:
                    names.append(table.name)
                    break
        return names

    def get_generation_order(self, schema: Schema) -> List[str]:
        """Order tables so every table comes after the tables it references"""
        self._build_relationship_graph(schema)

        try:
            # Edges point at dependencies, so reverse them for a topological order
            return list(nx.lexicographical_topological_sort(self.relationship_graph.reverse(copy=True)))
        except nx.NetworkXUnfeasible:
            # If there are cycles, fall back to dependency-based ordering
            return self._get_dependency_based_order(schema)

    def _get_dependency_based_order(self, schema: Schema) -> List[str]:
        """Get table order based on dependency analysis"""
        dependencies = self._analyze_table_dependencies(schema)

        # Sort tables by number of dependencies (fewer dependencies first)
        return sorted(
            dependencies.keys(),
            key=lambda name: (len(dependencies[name]), name)
        )
