#!/usr/bin/env python3

import argparse
import json

import pandas as pd
from pydantic import ValidationError

from coursemap.catalog_index import build_index
from coursemap.catalog_loader import load_catalog
from coursemap.config import Config
from coursemap.graph_analysis import print_graph_analysis, visualize_graph
from coursemap.graph_builder import build_graph
from coursemap.models import CourseGraph, GraphConfig
from coursemap.zoned_layout import layout


def graph_node_table(graph: CourseGraph) -> pd.DataFrame:
    """One row per node: code, name, zone, depth and position"""
    rows = [{
        "Course Code": node.id,
        "Course Name": node.data.course_name,
        "Credits": node.data.credits,
        "Zone": node.data.zone.value,
        "Depth": node.data.depth,
        "Master": node.data.is_master,
        "Mutual Corequisite Of": node.data.mutual_corequisite_of or "",
        "X": node.position.x,
        "Y": node.position.y,
    } for node in graph.nodes]
    columns = ["Course Code", "Course Name", "Credits", "Zone", "Depth",
               "Master", "Mutual Corequisite Of", "X", "Y"]
    return pd.DataFrame(rows, columns=columns)


def build_course_graph(catalog_path: str, course_code: str,
                       config: GraphConfig) -> CourseGraph:
    """Load the catalog, then build and lay out the graph for one course."""
    records = load_catalog(catalog_path)
    index = build_index(records)
    return layout(build_graph(course_code, index, config))


def main():
    ap = argparse.ArgumentParser(description="Build the dependency graph centered on one course")
    ap.add_argument("--catalog", default=Config.CATALOG_PATH, help="Path to catalog JSON")
    ap.add_argument("--course", default=Config.DEFAULT_MASTER_COURSE, help="Master course code, e.g. COMP2611")
    ap.add_argument("--out", required=True, help="Output path for graph JSON")
    ap.add_argument("--max-prereq-depth", type=int, default=3, help="Prerequisite levels to expand")
    ap.add_argument("--max-postreq-depth", type=int, default=2, help="Postrequisite levels to expand")
    ap.add_argument("--no-exclusions", action="store_true", help="Leave out exclusions")
    ap.add_argument("--no-corequisites", action="store_true", help="Leave out corequisites")
    ap.add_argument("--nodes-csv", help="Optional output path for a node table")
    ap.add_argument("--plot", help="Optional output path for a PNG drawing")

    args = ap.parse_args()

    try:
        config = GraphConfig(
            max_prereq_depth=args.max_prereq_depth,
            max_postreq_depth=args.max_postreq_depth,
            show_exclusions=not args.no_exclusions,
            show_corequisites=not args.no_corequisites,
        )
    except ValidationError as e:
        problems = "; ".join(f"{err['loc'][0]} {err['msg']}" for err in e.errors())
        ap.error(f"invalid graph options: {problems}")

    graph = build_course_graph(args.catalog, args.course, config)
    if not graph.nodes:
        print(f"Course {args.course} not found in catalog, writing empty graph")

    with open(args.out, "w", encoding="utf-8") as f:
        json.dump(graph.to_payload(), f, indent=2)
    print(f"Course graph written: {args.out} ({len(graph.nodes)} nodes, {len(graph.edges)} edges)")

    if args.nodes_csv:
        graph_node_table(graph).to_csv(args.nodes_csv, index=False)
        print(f"Node table written: {args.nodes_csv}")

    if graph.nodes:
        print_graph_analysis(graph, top_n=5)
        if args.plot:
            visualize_graph(graph, save_path=args.plot, show=False)


if __name__ == "__main__":
    main()
