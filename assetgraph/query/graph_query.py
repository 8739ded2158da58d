from typing import List, Dict, Any, Optional, Iterable, Sequence, Union

from ..types import GraphData, Island, LabelMode, ParseResult, PathClassification, RelationshipRecord, StyleAssignment
from ..graph.adjacency import AdjacencyBuilder
from ..graph.subgraph import SubgraphExtractor
from ..graph.islands import IslandDetector
from ..graph.paths import PathClassifier
from ..graph.highlight import assign_styles, node_label, type_color, type_colors
from ..utils.logger import app_logger


ALL_TYPES = "all"


class GraphQueryService:
    """Answers graph queries over one ingested record set.

    The adjacency index is built once; every query recomputes its result from
    the index and the seeds it is given.
    """

    def __init__(self, source: Union[ParseResult, Iterable[RelationshipRecord]]):
        self.logger = app_logger.bind(component="graph_query")
        if isinstance(source, ParseResult):
            self.parse_result: Optional[ParseResult] = source
            records = source.records
        else:
            self.parse_result = None
            records = tuple(source)

        self.index = AdjacencyBuilder().build(records)
        self.extractor = SubgraphExtractor()
        self.island_detector = IslandDetector()
        self.path_classifier = PathClassifier()

    def extract(self, seeds: Sequence[str]) -> GraphData:
        """Extract the subgraph reachable from ``seeds``."""
        return self.extractor.extract(seeds, self.index)

    def filter_by_type(self, graph: GraphData, node_type: Optional[str]) -> GraphData:
        """Restrict ``graph`` to nodes of ``node_type``; None or "all" keeps everything."""
        if node_type is None or node_type == ALL_TYPES:
            return graph
        return graph.restrict(node_id for node_id, node in graph.nodes.items() if node.type == node_type)

    def islands(self, graph: GraphData, node_type: Optional[str] = None) -> List[Island]:
        """Islands of ``graph`` after the optional type filter, smallest first."""
        return self.island_detector.detect(self.filter_by_type(graph, node_type))

    @staticmethod
    def longest_island(islands: Sequence[Island]) -> Optional[Island]:
        return islands[-1] if islands else None

    def classify(self, graph: GraphData, focus: str) -> PathClassification:
        return self.path_classifier.classify(focus, graph)

    def highlight(
        self,
        graph: GraphData,
        focus: Optional[str],
        seeds: Iterable[str] = (),
        classification: Optional[PathClassification] = None,
    ) -> StyleAssignment:
        """Highlight states for a selection of ``focus``; no focus means nothing is highlighted.

        ``classification`` may come from a larger graph than ``graph`` (the
        unfiltered extraction); only the elements of ``graph`` get a style.
        """
        if classification is None and focus:
            classification = self.classify(graph, focus)
        return assign_styles(graph, classification, seeds)

    def search_nodes(self, graph: GraphData, query: str, limit: Optional[int] = None) -> List[str]:
        """Case-insensitive substring search over node ids."""
        if not query.strip():
            return []
        needle = query.lower()
        matches = sorted(node_id for node_id in graph.nodes if needle in node_id.lower())
        if limit is not None:
            matches = matches[:limit]
        return matches

    def node_details(
        self,
        graph: GraphData,
        node_id: str,
        seeds: Iterable[str] = (),
        classification: Optional[PathClassification] = None,
    ) -> Optional[Dict[str, Any]]:
        """Get detailed information about a node, or None if it is not in the graph."""
        node = graph.get_node(node_id)
        if node is None:
            return None

        if classification is None:
            classification = self.classify(graph, node_id)
        return {
            "node": node.to_dict(),
            "label": node_label(node),
            "type_color": type_color(node.type),
            "is_seed": node_id in set(seeds),
            "ancestor_count": len(classification.ancestors),
            "descendant_count": len(classification.descendants),
            "cycle_count": len(classification.ancestors & classification.descendants),
            "ancestor_edge_count": len(classification.ancestor_edges),
            "descendant_edge_count": len(classification.descendant_edges),
            "classification": classification.to_dict(),
        }

    def stats(self, graph: GraphData, islands: Sequence[Island]) -> Dict[str, Any]:
        """Get graph statistics."""
        type_counts: Dict[str, int] = {}
        for node in graph.nodes.values():
            type_counts[node.type] = type_counts.get(node.type, 0) + 1

        longest = self.longest_island(islands)
        return {
            "node_count": len(graph.nodes),
            "edge_count": len(graph.edges),
            "island_count": len(islands),
            "longest_island_size": longest.size if longest else 0,
            "types": dict(sorted(type_counts.items())),
        }

    def summary(
        self,
        seeds: Sequence[str],
        node_type: Optional[str] = None,
        label_mode: LabelMode = LabelMode.BOTH,
    ) -> Dict[str, Any]:
        """Extract, filter and partition in one call."""
        graph = self.filter_by_type(self.extract(seeds), node_type)
        islands = self.island_detector.detect(graph)
        self.logger.info(
            f"{len(seeds)} seeds -> {len(graph.nodes)} nodes, {len(graph.edges)} edges, {len(islands)} islands"
        )
        return {
            "seeds": list(seeds),
            "node_type": node_type or ALL_TYPES,
            "stats": self.stats(graph, islands),
            "type_colors": type_colors(node.type for node in graph.nodes.values()),
            "labels": {node_id: node_label(graph.nodes[node_id], label_mode) for node_id in sorted(graph.nodes)},
            "islands": [island.to_dict() for island in islands],
            "graph": graph.to_dict(),
        }
