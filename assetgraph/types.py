from typing import Dict, Any, Optional, FrozenSet, Iterable, Tuple
from dataclasses import dataclass, field
from enum import Enum


class LabelMode(Enum):
    """Node label rendering mode."""
    BOTH = "both"
    CATEGORY = "category"
    ASSET_ID = "assetId"


class NodeStyle(Enum):
    """Highlight state of a node."""
    DEFAULT = "default"
    DIMMED = "dimmed"
    SELECTED = "highlight-selected"
    CONNECTED = "highlight-connected"


class EdgeStyle(Enum):
    """Highlight state of an edge."""
    DEFAULT = "default"
    DIMMED = "dimmed"
    ANCESTOR_PATH = "highlight-parent-subgraph"
    DESCENDANT_PATH = "highlight-child-subgraph"


@dataclass(frozen=True)
class RelationshipRecord:
    """One child -> parent relationship with type labels for both endpoints."""
    child_id: str
    parent_id: str
    child_type: str
    parent_type: str

    @property
    def is_valid(self) -> bool:
        """A record is valid when all four fields are non-empty."""
        return bool(self.child_id and self.parent_id and self.child_type and self.parent_type)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "child_id": self.child_id,
            "parent_id": self.parent_id,
            "child_type": self.child_type,
            "parent_type": self.parent_type,
        }


@dataclass(frozen=True)
class ParseResult:
    """Valid records of one ingested source plus reporting statistics."""
    records: Tuple[RelationshipRecord, ...]
    total_rows: int
    unique_nodes: int
    unique_edges: int
    invalid_rows: int
    types: FrozenSet[str]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary (statistics only)."""
        return {
            "total_rows": self.total_rows,
            "valid_rows": len(self.records),
            "unique_nodes": self.unique_nodes,
            "unique_edges": self.unique_edges,
            "invalid_rows": self.invalid_rows,
            "types": sorted(self.types),
        }


@dataclass(frozen=True)
class AdjacencyIndex:
    """Directed adjacency over the whole record set.

    ``out_adj`` maps a child to its parents, ``in_adj`` maps a parent to its
    children and ``type_of`` holds the first type observed for every id.
    """
    out_adj: Dict[str, FrozenSet[str]] = field(default_factory=dict)
    in_adj: Dict[str, FrozenSet[str]] = field(default_factory=dict)
    type_of: Dict[str, str] = field(default_factory=dict)

    def parents_of(self, node_id: str) -> FrozenSet[str]:
        return self.out_adj.get(node_id, frozenset())

    def children_of(self, node_id: str) -> FrozenSet[str]:
        return self.in_adj.get(node_id, frozenset())

    def __contains__(self, node_id: str) -> bool:
        return node_id in self.type_of


@dataclass(frozen=True)
class GraphEdge:
    """Directed edge source -> target (child -> parent)."""
    source: str
    target: str

    @property
    def key(self) -> str:
        return f"{self.source}->{self.target}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": self.key,
            "source": self.source,
            "target": self.target,
        }


@dataclass(frozen=True)
class GraphNode:
    """Node of an extracted graph with its in-graph neighbours."""
    id: str
    type: str
    parents: FrozenSet[str] = frozenset()
    children: FrozenSet[str] = frozenset()

    @property
    def in_degree(self) -> int:
        return len(self.children)

    @property
    def out_degree(self) -> int:
        return len(self.parents)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "type": self.type,
            "in_degree": self.in_degree,
            "out_degree": self.out_degree,
            "parents": sorted(self.parents),
            "children": sorted(self.children),
        }


@dataclass(frozen=True, eq=False)
class GraphData:
    """Extracted graph snapshot.

    Every id referenced by an edge or by a node's parents/children is a key
    of ``nodes``.
    """
    nodes: Dict[str, GraphNode] = field(default_factory=dict)
    edges: Tuple[GraphEdge, ...] = ()

    @property
    def node_ids(self) -> FrozenSet[str]:
        return frozenset(self.nodes)

    @property
    def edge_set(self) -> FrozenSet[GraphEdge]:
        return frozenset(self.edges)

    def get_node(self, node_id: str) -> Optional[GraphNode]:
        return self.nodes.get(node_id)

    def restrict(self, node_ids: Iterable[str]) -> "GraphData":
        """Return the subgraph induced by ``node_ids``."""
        keep = {node_id for node_id in node_ids if node_id in self.nodes}
        nodes = {}
        for node_id, node in self.nodes.items():
            if node_id not in keep:
                continue
            nodes[node_id] = GraphNode(
                id=node.id,
                type=node.type,
                parents=frozenset(p for p in node.parents if p in keep),
                children=frozenset(c for c in node.children if c in keep),
            )
        edges = tuple(e for e in self.edges if e.source in keep and e.target in keep)
        return GraphData(nodes=nodes, edges=edges)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "nodes": [self.nodes[node_id].to_dict() for node_id in sorted(self.nodes)],
            "edges": [edge.to_dict() for edge in sorted(self.edges, key=lambda e: (e.source, e.target))],
        }


@dataclass(frozen=True)
class Island:
    """Connected component of an extracted graph (undirected view)."""
    nodes: FrozenSet[str]

    @property
    def size(self) -> int:
        return len(self.nodes)

    @property
    def representative(self) -> str:
        """Lexicographically smallest member, used to break size ties."""
        return min(self.nodes) if self.nodes else ""

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "size": self.size,
            "nodes": sorted(self.nodes),
        }


@dataclass(frozen=True)
class PathClassification:
    """Ancestor/descendant nodes and path edges around a focus node."""
    focus: str
    ancestors: FrozenSet[str] = frozenset()
    descendants: FrozenSet[str] = frozenset()
    ancestor_edges: FrozenSet[GraphEdge] = frozenset()
    descendant_edges: FrozenSet[GraphEdge] = frozenset()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "focus": self.focus,
            "ancestors": sorted(self.ancestors),
            "descendants": sorted(self.descendants),
            "ancestor_edges": sorted(edge.key for edge in self.ancestor_edges),
            "descendant_edges": sorted(edge.key for edge in self.descendant_edges),
        }


@dataclass(frozen=True, eq=False)
class StyleAssignment:
    """Highlight state per node id and per edge, ready for a renderer."""
    node_styles: Dict[str, NodeStyle]
    edge_styles: Dict[GraphEdge, EdgeStyle]
    seeds: FrozenSet[str] = frozenset()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "nodes": {
                node_id: {"style": style.value, "is_seed": node_id in self.seeds}
                for node_id, style in sorted(self.node_styles.items())
            },
            "edges": {
                edge.key: style.value
                for edge, style in sorted(self.edge_styles.items(), key=lambda item: item[0].key)
            },
        }

