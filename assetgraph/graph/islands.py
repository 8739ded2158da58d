from typing import List

import networkx as nx

from ..types import GraphData, Island
from ..utils.logger import app_logger


class IslandDetector:
    """Partitions a graph into connected components ("islands")."""

    def __init__(self):
        self.logger = app_logger.bind(component="island_detector")

    def detect(self, graph: GraphData) -> List[Island]:
        """Return the islands of ``graph`` ordered by size, then by smallest member id.

        Edge direction is ignored. Every node, including isolated ones, belongs
        to exactly one island.
        """
        undirected = self._build_graph(graph)
        islands = [Island(nodes=frozenset(component)) for component in nx.connected_components(undirected)]

        islands.sort(key=lambda island: (island.size, island.representative))
        self.logger.debug(f"Detected {len(islands)} islands over {len(graph.nodes)} nodes")
        return islands

    @staticmethod
    def _build_graph(graph: GraphData) -> nx.Graph:
        undirected = nx.Graph()
        undirected.add_nodes_from(graph.nodes)
        undirected.add_edges_from((edge.source, edge.target) for edge in graph.edges)
        return undirected


def detect_islands(graph: GraphData) -> List[Island]:
    """Detect islands of ``graph``, smallest first."""
    return IslandDetector().detect(graph)
