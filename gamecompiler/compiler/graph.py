"""
WorldGraph - Worlds and the prerequisite paths between them.

Uses networkx for graph operations:
- Cycle detection (checked once, before availability is computed)
- Transitive predecessor queries
- Topological ordering
"""

import logging

import networkx as nx

from gamecompiler.errors import CyclicWorldGraphError
from gamecompiler.schemas import PathEdge, WorldGraphData

logger = logging.getLogger(__name__)


class WorldGraph:
    """Directed graph of worlds; an edge u -> v means u comes before v."""

    def __init__(self):
        self.graph = nx.DiGraph()

    def add_world(self, world_id: str):
        self.graph.add_node(world_id)

    def add_edge(self, from_id: str, to_id: str):
        """Add a path from_id -> to_id. Unknown worlds are added as nodes."""
        self.graph.add_edge(from_id, to_id)

    @property
    def worlds(self) -> list[str]:
        return list(self.graph.nodes)

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    def find_cycle(self) -> list[tuple[str, str]]:
        """Return the edges of one cycle, or [] if the graph is acyclic."""
        try:
            return [(u, v) for u, v in nx.find_cycle(self.graph)]
        except nx.NetworkXNoCycle:
            return []

    def has_cycle(self) -> bool:
        return not nx.is_directed_acyclic_graph(self.graph)

    def validate(self):
        """Raise CyclicWorldGraphError if the graph has a cycle."""
        cycle = self.find_cycle()
        if cycle:
            logger.error(f"Cycle in world graph: {cycle}")
            raise CyclicWorldGraphError(cycle)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def predecessors(self, world_id: str) -> set[str]:
        """ALL worlds that must come before world_id (transitively)."""
        if world_id not in self.graph:
            return set()
        return nx.ancestors(self.graph, world_id)

    def direct_predecessors(self, world_id: str) -> list[str]:
        if world_id not in self.graph:
            return []
        return list(self.graph.predecessors(world_id))

    def successors(self, world_id: str) -> list[str]:
        if world_id not in self.graph:
            return []
        return list(self.graph.successors(world_id))

    def topological_order(self) -> list[str]:
        """Worlds with prerequisites first; ties broken by name."""
        return list(nx.lexicographical_topological_sort(self.graph))

    def to_schema(self) -> WorldGraphData:
        return WorldGraphData(
            nodes=self.topological_order(),
            edges=[PathEdge(from_id=u, to_id=v) for u, v in sorted(self.graph.edges())],
        )
