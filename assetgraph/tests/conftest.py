import pytest
from pathlib import Path
from typing import List

from assetgraph.types import RelationshipRecord
from assetgraph.graph.adjacency import build_adjacency
from assetgraph.query import GraphQueryService


def make_records(*rows) -> List[RelationshipRecord]:
    """Build records from (child, parent[, child_type, parent_type]) tuples."""
    records = []
    for row in rows:
        if len(row) == 2:
            child, parent = row
            row = (child, parent, "Asset", "Asset")
        records.append(RelationshipRecord(*row))
    return records


@pytest.fixture
def chain_records() -> List[RelationshipRecord]:
    """X -> Y -> Z."""
    return make_records(("X", "Y", "A", "B"), ("Y", "Z", "B", "C"))


@pytest.fixture
def cycle_records() -> List[RelationshipRecord]:
    """A -> B -> A."""
    return make_records(("A", "B"), ("B", "A"))


@pytest.fixture
def lineage_records() -> List[RelationshipRecord]:
    """Two disjoint lineages plus a diamond.

    table_a, table_b -> view_ab -> report_1
    view_ab -> report_2
    raw_1 -> clean_1 (separate island)
    """
    return make_records(
        ("table_a", "view_ab", "Table", "View"),
        ("table_b", "view_ab", "Table", "View"),
        ("view_ab", "report_1", "View", "Report"),
        ("view_ab", "report_2", "View", "Report"),
        ("raw_1", "clean_1", "Table", "Table"),
    )


@pytest.fixture
def lineage_index(lineage_records):
    return build_adjacency(lineage_records)


@pytest.fixture
def lineage_service(lineage_records) -> GraphQueryService:
    return GraphQueryService(lineage_records)


@pytest.fixture
def lineage_csv_text() -> str:
    return (
        "assetId,parentAssetId,assetType,parentAssetType\n"
        "table_a,view_ab,Table,View\n"
        "table_b,view_ab,Table,View\n"
        "view_ab,report_1,View,Report\n"
        "view_ab,report_2,View,Report\n"
        "raw_1,clean_1,Table,Table\n"
        ",orphan,Table,View\n"
    )


@pytest.fixture
def lineage_csv_file(tmp_path, lineage_csv_text) -> Path:
    csv_path = tmp_path / "lineage.csv"
    csv_path.write_text(lineage_csv_text, encoding="utf-8")
    return csv_path


@pytest.fixture
def record_factory():
    return make_records
