from typing import FrozenSet, Set

import networkx as nx

from ..types import GraphData, GraphEdge, PathClassification
from ..utils.logger import app_logger


class PathClassifier:
    """Classifies the nodes and edges on ancestor/descendant paths of a focus node."""

    def __init__(self):
        self.logger = app_logger.bind(component="path_classifier")

    def classify(self, focus: str, graph: GraphData) -> PathClassification:
        """Compute ancestors, descendants and the edges on each path family.

        A focus id missing from ``graph`` yields an empty classification. An
        edge may land in both edge sets when the focus sits on a cycle.
        """
        if focus not in graph.nodes:
            self.logger.debug(f"Focus {focus!r} not in graph, returning empty classification")
            return PathClassification(focus=focus)

        ancestors = self.find_ancestors(focus, graph)
        descendants = self.find_descendants(focus, graph)

        ancestor_edges: Set[GraphEdge] = set()
        descendant_edges: Set[GraphEdge] = set()
        for edge in graph.edges:
            if self._on_path(edge, focus, ancestors):
                ancestor_edges.add(edge)
            if self._on_path(edge, focus, descendants):
                descendant_edges.add(edge)

        self.logger.debug(
            f"Focus {focus!r}: {len(ancestors)} ancestors, {len(descendants)} descendants, "
            f"{len(ancestor_edges)} ancestor edges, {len(descendant_edges)} descendant edges"
        )
        return PathClassification(
            focus=focus,
            ancestors=ancestors,
            descendants=descendants,
            ancestor_edges=frozenset(ancestor_edges),
            descendant_edges=frozenset(descendant_edges),
        )

    def find_ancestors(self, focus: str, graph: GraphData) -> FrozenSet[str]:
        """Nodes reachable from ``focus`` by following parent links."""
        if focus not in graph.nodes:
            return frozenset()
        return frozenset(nx.descendants(self._build_digraph(graph), focus))

    def find_descendants(self, focus: str, graph: GraphData) -> FrozenSet[str]:
        """Nodes reachable from ``focus`` by following child links."""
        if focus not in graph.nodes:
            return frozenset()
        return frozenset(nx.ancestors(self._build_digraph(graph), focus))

    @staticmethod
    def _build_digraph(graph: GraphData) -> nx.DiGraph:
        # child -> parent, so parent links are followed forwards
        lineage = nx.DiGraph()
        lineage.add_nodes_from(graph.nodes)
        lineage.add_edges_from(
            (node_id, parent) for node_id, node in graph.nodes.items() for parent in node.parents
        )
        return lineage

    @staticmethod
    def _on_path(edge: GraphEdge, focus: str, members: FrozenSet[str]) -> bool:
        return (
            (edge.source == focus and edge.target in members)
            or (edge.source in members and edge.target in members)
            or (edge.source in members and edge.target == focus)
        )


def classify_paths(focus: str, graph: GraphData) -> PathClassification:
    """Classify ancestor/descendant nodes and edges around ``focus``."""
    return PathClassifier().classify(focus, graph)
