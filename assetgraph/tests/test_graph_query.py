from assetgraph.ingest import CsvRecordIngestor
from assetgraph.query import GraphQueryService
from assetgraph.types import LabelMode


class TestGraphQueryService:
    """Test the query layer over the graph engine."""

    def test_built_from_parse_result(self, lineage_csv_text):
        parse_result = CsvRecordIngestor().parse_text(lineage_csv_text)
        service = GraphQueryService(parse_result)

        assert service.parse_result is parse_result
        assert "view_ab" in service.index

    def test_filter_by_type(self, lineage_service):
        graph = lineage_service.extract(["view_ab"])
        tables = lineage_service.filter_by_type(graph, "Table")

        assert tables.node_ids == frozenset({"table_a", "table_b"})
        assert tables.edges == ()
        for node in tables.nodes.values():
            assert node.parents == frozenset()
            assert node.in_degree == 0

    def test_filter_all_keeps_graph(self, lineage_service):
        graph = lineage_service.extract(["view_ab"])

        assert lineage_service.filter_by_type(graph, None) is graph
        assert lineage_service.filter_by_type(graph, "all") is graph

    def test_islands_with_type_filter(self, lineage_service):
        """Filtering can split an island into several."""
        graph = lineage_service.extract(["view_ab"])

        assert len(lineage_service.islands(graph)) == 1
        tables = lineage_service.islands(graph, "Table")
        assert [island.nodes for island in tables] == [frozenset({"table_a"}), frozenset({"table_b"})]

    def test_longest_island(self, lineage_service):
        graph = lineage_service.extract(["table_a", "raw_1"])
        islands = lineage_service.islands(graph)

        assert lineage_service.longest_island(islands).size == 4
        assert lineage_service.longest_island([]) is None

    def test_search_nodes(self, lineage_service):
        graph = lineage_service.extract(["view_ab"])

        assert lineage_service.search_nodes(graph, "REPORT") == ["report_1", "report_2"]
        assert lineage_service.search_nodes(graph, "report", limit=1) == ["report_1"]
        assert lineage_service.search_nodes(graph, "raw") == []
        assert lineage_service.search_nodes(graph, "   ") == []

    def test_node_details(self, lineage_service):
        graph = lineage_service.extract(["view_ab"])
        details = lineage_service.node_details(graph, "view_ab", ["view_ab"])

        assert details["node"]["id"] == "view_ab"
        assert details["node"]["in_degree"] == 2
        assert details["is_seed"] is True
        assert details["ancestor_count"] == 2
        assert details["descendant_count"] == 2
        assert details["type_color"].startswith("#")

    def test_node_details_absent(self, lineage_service):
        graph = lineage_service.extract(["view_ab"])

        assert lineage_service.node_details(graph, "raw_1") is None

    def test_stats(self, lineage_service):
        graph = lineage_service.extract(["table_a", "raw_1", "ghost"])
        stats = lineage_service.stats(graph, lineage_service.islands(graph))

        assert stats == {
            "node_count": 7,
            "edge_count": 4,
            "island_count": 3,
            "longest_island_size": 4,
            "types": {"Report": 2, "Table": 3, "Unknown": 1, "View": 1},
        }

    def test_summary(self, lineage_service):
        summary = lineage_service.summary(["raw_1", "table_b"], "Table")

        assert summary["node_type"] == "Table"
        assert summary["stats"]["node_count"] == 3
        assert [island["nodes"] for island in summary["islands"]] == [["table_b"], ["clean_1", "raw_1"]]
        assert summary["graph"]["edges"] == [{"id": "raw_1->clean_1", "source": "raw_1", "target": "clean_1"}]

    def test_summary_type_colors(self, lineage_service):
        summary = lineage_service.summary(["table_a"])

        assert sorted(summary["type_colors"]) == ["Report", "Table", "View"]

    def test_highlight(self, lineage_service):
        graph = lineage_service.extract(["view_ab"])

        selected = lineage_service.highlight(graph, "table_a", ["view_ab"])
        assert selected.node_styles["table_a"].value == "highlight-selected"
        assert selected.seeds == frozenset({"view_ab"})

        cleared = lineage_service.highlight(graph, None)
        assert {style.value for style in cleared.node_styles.values()} == {"default"}

    def test_search_matches_query_as_typed(self, lineage_service, record_factory):
        """Whitespace only decides emptiness; it is part of the matched substring."""
        graph = lineage_service.extract(["view_ab"])

        assert lineage_service.search_nodes(graph, "report ") == []
        assert lineage_service.search_nodes(graph, " report") == []

        spaced = GraphQueryService(record_factory(("my table", "table_x")))
        spaced_graph = spaced.extract(["my table"])
        assert spaced.search_nodes(spaced_graph, " TABLE") == ["my table"]
        assert spaced.search_nodes(spaced_graph, "table") == ["my table", "table_x"]

    def test_node_details_cycle_count(self, cycle_records, lineage_service):
        service = GraphQueryService(cycle_records)
        details = service.node_details(service.extract(["A"]), "A")

        assert details["cycle_count"] == 1
        assert details["ancestor_count"] == 1
        assert details["descendant_count"] == 1

        lineage = lineage_service.extract(["view_ab"])
        assert lineage_service.node_details(lineage, "view_ab")["cycle_count"] == 0

    def test_node_details_with_given_classification(self, lineage_service):
        """A classification from the unfiltered graph is reported as is."""
        graph = lineage_service.extract(["view_ab"])
        classification = lineage_service.classify(graph, "table_a")
        tables = lineage_service.filter_by_type(graph, "Table")

        details = lineage_service.node_details(tables, "table_a", classification=classification)

        assert details["ancestor_count"] == 3
        assert details["node"]["out_degree"] == 0

        styles = lineage_service.highlight(tables, "table_a", classification=classification)
        assert set(styles.node_styles) == {"table_a", "table_b"}
        assert styles.node_styles["table_b"].value == "dimmed"

    def test_summary_labels(self, lineage_service):
        summary = lineage_service.summary(["raw_1"])

        assert summary["labels"] == {"clean_1": "Table\nclean_1", "raw_1": "Table\nraw_1"}
        short = lineage_service.summary(["raw_1"], label_mode=LabelMode.ASSET_ID)
        assert short["labels"]["clean_1"] == "clean_1"
