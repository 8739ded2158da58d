import json

from main import main


class TestCommandLine:
    """Test the command line entry point."""

    def test_report(self, lineage_csv_file, capsys):
        exit_code = main([str(lineage_csv_file), "--seeds", "table_a, raw_1"])
        report = json.loads(capsys.readouterr().out)

        assert exit_code == 0
        assert report["ingestion"]["invalid_rows"] == 1
        assert report["seeds"] == ["table_a", "raw_1"]
        assert report["stats"]["island_count"] == 2
        assert "focus" not in report

    def test_focus_and_search(self, lineage_csv_file, capsys):
        exit_code = main([
            str(lineage_csv_file), "--seeds", "view_ab", "--focus", "view_ab", "--search", "table",
        ])
        report = json.loads(capsys.readouterr().out)

        assert exit_code == 0
        assert report["focus"]["classification"]["ancestors"] == ["report_1", "report_2"]
        assert report["search"] == ["table_a", "table_b"]
        assert report["highlight"]["nodes"]["view_ab"]["style"] == "highlight-selected"

    def test_seeds_file(self, lineage_csv_file, tmp_path, capsys):
        seeds_file = tmp_path / "seeds.txt"
        seeds_file.write_text("raw_1\nghost\n", encoding="utf-8")

        exit_code = main([str(lineage_csv_file), "--seeds-file", str(seeds_file)])
        report = json.loads(capsys.readouterr().out)

        assert exit_code == 0
        assert report["seeds"] == ["raw_1", "ghost"]
        assert report["stats"]["types"]["Unknown"] == 1

    def test_missing_csv(self, tmp_path, capsys):
        exit_code = main([str(tmp_path / "missing.csv"), "--seeds", "a"])

        assert exit_code == 1
        assert capsys.readouterr().out == ""

    def test_focus_classified_on_unfiltered_graph(self, tmp_path, capsys):
        """Ancestors reached through a node of another type survive the type filter."""
        csv_path = tmp_path / "mixed.csv"
        csv_path.write_text(
            "assetId,parentAssetId,assetType,parentAssetType\n"
            "a,m,Table,View\n"
            "m,top,View,Table\n",
            encoding="utf-8",
        )

        exit_code = main([str(csv_path), "--seeds", "a", "--type", "Table", "--focus", "a"])
        report = json.loads(capsys.readouterr().out)

        assert exit_code == 0
        assert report["focus"]["classification"]["ancestors"] == ["m", "top"]
        assert report["focus"]["node"]["out_degree"] == 1
        assert set(report["highlight"]["nodes"]) == {"a", "top"}
        assert report["highlight"]["nodes"]["top"]["style"] == "highlight-connected"

    def test_focus_outside_type_filter(self, lineage_csv_file, capsys):
        exit_code = main([
            str(lineage_csv_file), "--seeds", "view_ab", "--type", "Table", "--focus", "view_ab",
        ])
        report = json.loads(capsys.readouterr().out)

        assert exit_code == 0
        assert report["focus"] is None
        assert {node["style"] for node in report["highlight"]["nodes"].values()} == {"default"}

    def test_label_mode(self, lineage_csv_file, capsys):
        exit_code = main([str(lineage_csv_file), "--seeds", "raw_1", "--label-mode", "category"])
        report = json.loads(capsys.readouterr().out)

        assert exit_code == 0
        assert report["labels"] == {"clean_1": "Table", "raw_1": "Table"}
