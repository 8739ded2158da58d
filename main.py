#!/usr/bin/env python3
"""
Asset Graph - Command Line Entry Point

Loads a CSV of parent/child asset relationships, extracts the subgraph
reachable from the given seed ids and prints a JSON report with islands and,
optionally, the path classification of one focus node.
"""

import argparse
import json
import sys
from pathlib import Path

from assetgraph.config import settings
from assetgraph.ingest import CsvRecordIngestor, IngestionError, parse_seed_list
from assetgraph.query import GraphQueryService
from assetgraph.types import LabelMode
from assetgraph.utils.logger import app_logger, setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Asset Graph - lineage subgraph analysis")
    parser.add_argument("csv_path", help="CSV file with relationship records")
    parser.add_argument("--seeds", default="", help="Comma or newline separated seed ids")
    parser.add_argument("--seeds-file", help="File with comma or newline separated seed ids")
    parser.add_argument("--focus", help="Node id to classify ancestor/descendant paths for")
    parser.add_argument("--type", dest="node_type", help="Only keep nodes of this type")
    parser.add_argument("--search", help="Case-insensitive substring to look up among node ids")
    parser.add_argument(
        "--label-mode",
        choices=[mode.value for mode in LabelMode],
        default=LabelMode.BOTH.value,
        help="What node labels show",
    )
    parser.add_argument("--log-level", default=settings.log_level, help="Log level")
    return parser


def main(argv=None) -> int:
    """Main entry point for the command line."""
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level, settings.log_file)

    seed_text = args.seeds
    if args.seeds_file:
        try:
            seed_text = "\n".join([seed_text, Path(args.seeds_file).read_text(encoding="utf-8")])
        except OSError as e:
            app_logger.error(f"Cannot read seeds file: {e}")
            return 1
    seeds = parse_seed_list(seed_text)
    if not seeds:
        app_logger.warning("No seed ids given, the graph will be empty")

    try:
        parse_result = CsvRecordIngestor().parse_file(args.csv_path)
    except IngestionError as e:
        app_logger.error(f"Error loading relationship records: {e}")
        return 1

    service = GraphQueryService(parse_result)
    report = {"ingestion": parse_result.to_dict()}
    report.update(service.summary(seeds, args.node_type, LabelMode(args.label_mode)))

    if args.focus or args.search:
        # the type filter only decides what is shown; paths follow the full extraction
        full_graph = service.extract(seeds)
        graph = service.filter_by_type(full_graph, args.node_type)
        if args.focus:
            classification = service.classify(full_graph, args.focus)
            details = None
            if args.focus in graph.nodes:
                details = service.node_details(full_graph, args.focus, seeds, classification)
            else:
                app_logger.warning(f"Focus node {args.focus!r} is not part of the extracted graph")
            report["focus"] = details
            report["highlight"] = service.highlight(graph, args.focus, seeds, classification).to_dict()
        if args.search:
            report["search"] = service.search_nodes(graph, args.search)

    json.dump(report, sys.stdout, indent=2, ensure_ascii=False)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
