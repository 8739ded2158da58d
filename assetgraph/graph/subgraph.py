from collections import deque
from typing import Dict, Set, Sequence, Callable, FrozenSet, Optional

from ..config import settings
from ..types import AdjacencyIndex, GraphData, GraphEdge, GraphNode
from ..utils.logger import app_logger


class SubgraphExtractor:
    """Extracts everything ancestor- or descendant-reachable from a set of seeds.

    All seeds share one reachable set and one edge set, so the result is the
    union over seeds. Each direction also keeps a set of nodes whose
    neighbours have already been expanded: once a node has been expanded
    upwards, its whole ancestry and the edges leading there are recorded, so
    later traversals stop at it instead of walking the same ancestry again.
    """

    def __init__(self, unknown_type: Optional[str] = None):
        self.logger = app_logger.bind(component="subgraph_extractor")
        self.unknown_type = unknown_type or settings.unknown_type

    def extract(self, seeds: Sequence[str], index: AdjacencyIndex) -> GraphData:
        """Compute the node- and edge-induced subgraph reachable from ``seeds``."""
        reachable: Dict[str, None] = {}
        edges: Dict[GraphEdge, None] = {}
        expanded_up: Set[str] = set()
        expanded_down: Set[str] = set()

        for seed in seeds:
            reachable.setdefault(seed, None)
            if seed not in index:
                self.logger.debug(f"Seed {seed!r} not present in records, adding as {self.unknown_type}")
                continue

            # ancestors: child -> parent
            self._traverse(
                seed, index.parents_of, expanded_up, reachable, edges,
                lambda current, parent: GraphEdge(source=current, target=parent),
            )
            # descendants: child -> current
            self._traverse(
                seed, index.children_of, expanded_down, reachable, edges,
                lambda current, child: GraphEdge(source=child, target=current),
            )

        nodes = {node_id: self._materialize(node_id, index, reachable) for node_id in reachable}

        self.logger.debug(f"Extracted {len(nodes)} nodes and {len(edges)} edges from {len(seeds)} seeds")
        return GraphData(nodes=nodes, edges=tuple(edges))

    def _traverse(
        self,
        start: str,
        neighbours: Callable[[str], FrozenSet[str]],
        expanded: Set[str],
        reachable: Dict[str, None],
        edges: Dict[GraphEdge, None],
        make_edge: Callable[[str, str], GraphEdge],
    ) -> None:
        """Breadth-first walk in one direction, recording nodes and edges."""
        queue = deque([start])
        while queue:
            current = queue.popleft()
            if current in expanded:
                continue
            expanded.add(current)
            reachable.setdefault(current, None)

            for neighbour in sorted(neighbours(current)):
                edges.setdefault(make_edge(current, neighbour), None)
                if neighbour not in expanded:
                    queue.append(neighbour)

    def _materialize(self, node_id: str, index: AdjacencyIndex, reachable: Dict[str, None]) -> GraphNode:
        """Build a node whose parents/children are limited to the reachable set."""
        return GraphNode(
            id=node_id,
            type=index.type_of.get(node_id, self.unknown_type),
            parents=frozenset(p for p in index.parents_of(node_id) if p in reachable),
            children=frozenset(c for c in index.children_of(node_id) if c in reachable),
        )


def extract_subgraph(seeds: Sequence[str], index: AdjacencyIndex) -> GraphData:
    """Extract the union of ancestor and descendant subgraphs of ``seeds``."""
    return SubgraphExtractor().extract(seeds, index)
