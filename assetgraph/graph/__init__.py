"""
Graph engine: adjacency construction, subgraph extraction, island detection
and path classification.
"""

from .adjacency import AdjacencyBuilder, build_adjacency
from .subgraph import SubgraphExtractor, extract_subgraph
from .islands import IslandDetector, detect_islands
from .paths import PathClassifier, classify_paths
from .highlight import assign_styles, type_color, truncate_id, node_label

__all__ = [
    'AdjacencyBuilder',
    'build_adjacency',
    'SubgraphExtractor',
    'extract_subgraph',
    'IslandDetector',
    'detect_islands',
    'PathClassifier',
    'classify_paths',
    'assign_styles',
    'type_color',
    'truncate_id',
    'node_label'
]
