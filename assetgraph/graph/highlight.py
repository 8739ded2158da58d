"""
Pure presentation helpers.

Everything a renderer needs to highlight a selection, colour node types and
label nodes is computed here from graph values; nothing holds a handle to a
rendering engine.
"""
from typing import Dict, Iterable, Optional

from ..config import settings
from ..types import (
    GraphData, GraphEdge, GraphNode, PathClassification, StyleAssignment,
    NodeStyle, EdgeStyle, LabelMode,
)


TYPE_PALETTE = [
    '#ef4444',  # red
    '#10b981',  # emerald
    '#3b82f6',  # blue
    '#8b5cf6',  # violet
    '#ec4899',  # pink
    '#06b6d4',  # cyan
    '#84cc16',  # lime
    '#f97316',  # orange
    '#6366f1',  # indigo
    '#14b8a6',  # teal
    '#a855f7',  # purple
    '#f43f5e',  # rose
    '#22c55e',  # green
    '#0ea5e9',  # sky
    '#d946ef',  # fuchsia
    '#fb923c',  # orange-400
    '#4ade80',  # green-400
    '#60a5fa',  # blue-400
    '#c084fc',  # purple-400
    '#f472b6',  # pink-400
    '#2dd4bf',  # teal-400
]


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value >= 0x80000000 else value


def type_hash(type_label: str) -> int:
    """Shift-and-subtract string hash with 32-bit wrap on the shift."""
    hash_value = 0
    for char in type_label:
        # UTF-16 code units, so astral characters hash as surrogate pairs
        for unit in _utf16_units(char):
            hash_value = unit + (_to_int32(_to_int32(hash_value) << 5) - hash_value)
    return hash_value


def _utf16_units(char: str) -> Iterable[int]:
    code = ord(char)
    if code < 0x10000:
        return (code,)
    code -= 0x10000
    return (0xD800 + (code >> 10), 0xDC00 + (code & 0x3FF))


def type_color(type_label: str) -> str:
    """Stable palette colour for a node type."""
    return TYPE_PALETTE[abs(type_hash(type_label)) % len(TYPE_PALETTE)]


def type_colors(types: Iterable[str]) -> Dict[str, str]:
    return {type_label: type_color(type_label) for type_label in sorted(types)}


def truncate_id(node_id: str, max_length: int = 12) -> str:
    """Shorten long ids for display."""
    if len(node_id) <= max_length:
        return node_id
    return node_id[:max_length] + "..."


def node_label(node: GraphNode, mode: LabelMode = LabelMode.BOTH, max_length: Optional[int] = None) -> str:
    if max_length is None:
        max_length = settings.label_max_length
    short_id = truncate_id(node.id, max_length)
    if mode is LabelMode.CATEGORY:
        return node.type
    if mode is LabelMode.ASSET_ID:
        return short_id
    return f"{node.type}\n{short_id}"


def assign_styles(
    graph: GraphData,
    classification: Optional[PathClassification] = None,
    seeds: Iterable[str] = (),
) -> StyleAssignment:
    """Map every node and edge of ``graph`` to a highlight state.

    Without a classification (or with one whose focus is not in the graph)
    everything is DEFAULT. Otherwise everything starts DIMMED and the focus,
    its connected nodes and its path edges are lifted out of it. Ancestor
    paths take precedence over descendant paths for edges in both sets.
    """
    seed_set = frozenset(seed for seed in seeds if seed in graph.nodes)

    if classification is None or classification.focus not in graph.nodes:
        return StyleAssignment(
            node_styles={node_id: NodeStyle.DEFAULT for node_id in graph.nodes},
            edge_styles={edge: EdgeStyle.DEFAULT for edge in graph.edges},
            seeds=seed_set,
        )

    connected = classification.ancestors | classification.descendants
    node_styles: Dict[str, NodeStyle] = {}
    for node_id in graph.nodes:
        if node_id == classification.focus:
            node_styles[node_id] = NodeStyle.SELECTED
        elif node_id in connected:
            node_styles[node_id] = NodeStyle.CONNECTED
        else:
            node_styles[node_id] = NodeStyle.DIMMED

    edge_styles: Dict[GraphEdge, EdgeStyle] = {}
    for edge in graph.edges:
        if edge in classification.ancestor_edges:
            edge_styles[edge] = EdgeStyle.ANCESTOR_PATH
        elif edge in classification.descendant_edges:
            edge_styles[edge] = EdgeStyle.DESCENDANT_PATH
        else:
            edge_styles[edge] = EdgeStyle.DIMMED

    return StyleAssignment(node_styles=node_styles, edge_styles=edge_styles, seeds=seed_set)
