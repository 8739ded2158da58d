from typing import Dict, Set, Iterable

from ..types import RelationshipRecord, AdjacencyIndex
from ..utils.logger import app_logger


class AdjacencyBuilder:
    """Builds directed adjacency indices from relationship records."""

    def __init__(self):
        self.logger = app_logger.bind(component="adjacency_builder")

    def build(self, records: Iterable[RelationshipRecord]) -> AdjacencyIndex:
        """Index child -> parents, parent -> children and the type of every id.

        Records are expected to be validated already. A node keeps the type of
        the first record that mentions it.
        """
        out_adj: Dict[str, Set[str]] = {}
        in_adj: Dict[str, Set[str]] = {}
        type_of: Dict[str, str] = {}

        for record in records:
            type_of.setdefault(record.child_id, record.child_type)
            type_of.setdefault(record.parent_id, record.parent_type)

            out_adj.setdefault(record.child_id, set()).add(record.parent_id)
            in_adj.setdefault(record.parent_id, set()).add(record.child_id)

        self.logger.debug(f"Indexed {len(type_of)} ids, {sum(len(p) for p in out_adj.values())} edges")

        return AdjacencyIndex(
            out_adj={node_id: frozenset(parents) for node_id, parents in out_adj.items()},
            in_adj={node_id: frozenset(children) for node_id, children in in_adj.items()},
            type_of=type_of,
        )


def build_adjacency(records: Iterable[RelationshipRecord]) -> AdjacencyIndex:
    """Build an adjacency index from relationship records."""
    return AdjacencyBuilder().build(records)
