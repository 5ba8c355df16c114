#!/usr/bin/env python3
"""
Course graph analysis and visualization
"""

import re
from collections import Counter
from typing import Dict, List, Optional

import networkx as nx
import numpy as np
import pandas as pd

from coursemap.catalog_index import CatalogIndex
from coursemap.models import CourseGraph, Zone
from coursemap.zoned_layout import NODE_HEIGHT, NODE_WIDTH

ZONE_COLORS = {
    Zone.CENTER: '#F59E0B',
    Zone.NORTH: '#10B981',
    Zone.SOUTH: '#3B82F6',
    Zone.EAST: '#8B5CF6',
    Zone.WEST: '#EF4444',
}

RELATION_STYLES = {
    'prerequisite': ('#3b82f6', 'solid'),
    'corequisite': ('#8b5cf6', 'dashed'),
    'exclusion': ('#ef4444', 'dashed'),
    'equivalent': ('#6b7280', 'dotted'),
}

# ============================================================================
# CATALOG-WIDE ANALYSIS
# ============================================================================


def detect_cycles(index: CatalogIndex) -> List[List[str]]:
    """
    Detect cycles in the catalog's prerequisite data using NetworkX.

    Args:
        index: CatalogIndex

    Returns:
        List of cycles (each cycle is a list of course codes), shortest first
    """
    G = nx.DiGraph()
    for code in index:
        for prereq in index.prerequisites_of(code).course_codes:
            if prereq in index and prereq != code:
                G.add_edge(prereq, code)

    cycles = [list(cycle) for cycle in nx.simple_cycles(G)]
    return sorted(cycles, key=lambda x: (len(x), x[0]))


def get_bottleneck_courses(index: CatalogIndex, top_n: int = 10) -> Dict[str, Dict]:
    """
    Find bottleneck courses - courses listed as a prerequisite by the most
    other courses.

    Args:
        index: CatalogIndex
        top_n: Number of top bottlenecks to return

    Returns:
        Dict where key=course code, value={blocks: count, dependent_courses: [...]}
    """
    bottlenecks = {}
    for code, dependents in index.reverse_prerequisites.items():
        if code not in index:
            continue
        known = [d for d in dependents if d in index]
        if known:
            bottlenecks[code] = {
                "blocks": len(known),
                "dependent_courses": sorted(known)
            }

    return dict(sorted(
        bottlenecks.items(),
        key=lambda x: (-x[1]["blocks"], x[0])
    )[:top_n])


def catalog_statistics(index: CatalogIndex) -> Dict:
    """
    Statistics about a loaded catalog.

    Returns:
        Dictionary with statistics (numpy ints converted to Python ints)
    """
    rows = [{
        "code": code,
        "prefix": course.course_prefix or re.match(r"[A-Z]*", code).group(0),
        "has_prereqs": bool(index.prerequisites_of(code).course_codes),
        "has_coreqs": bool(index.corequisites_of(code).course_codes),
        "has_exclusions": bool(course.course_exclusion.strip()),
    } for code, course in index.courses.items()]

    if not rows:
        return {
            "total_courses": 0,
            "courses_with_prereqs": 0,
            "courses_with_coreqs": 0,
            "courses_with_exclusions": 0,
            "total_subjects": 0,
        }

    df = pd.DataFrame(rows)
    return {
        "total_courses": int(len(df)),
        "courses_with_prereqs": int(df["has_prereqs"].sum()),
        "courses_with_coreqs": int(df["has_coreqs"].sum()),
        "courses_with_exclusions": int(df["has_exclusions"].sum()),
        "total_subjects": int(df["prefix"].nunique()),
    }


# ============================================================================
# GRAPH ANALYSIS
# ============================================================================

def to_networkx(graph: CourseGraph) -> nx.DiGraph:
    """Convert a CourseGraph to a NetworkX DiGraph, keeping zone/depth/relation"""
    G = nx.DiGraph()

    for node in graph.nodes:
        G.add_node(
            node.id,
            title=node.data.course_name,
            zone=node.data.zone.value,
            depth=node.data.depth,
            is_master=node.data.is_master,
            pos=(node.position.x, node.position.y)
        )

    for edge in graph.edges:
        G.add_edge(
            edge.source,
            edge.target,
            relation=edge.data.relation_type.value,
            label=edge.data.label,
            bidirectional=edge.data.bidirectional
        )

    return G


def build_adjacency_mat(graph: CourseGraph) -> pd.DataFrame:
    """
    Build adjacency matrix in the form of a pandas dataframe.
    Rows are edge sources, columns edge targets, any relation type counts.
    """
    courses = sorted(node.id for node in graph.nodes)

    #map out courses to an index
    index_map = {c: i for i, c in enumerate(courses)}

    N = len(courses)
    mat = np.zeros((N, N), dtype=int)

    for edge in graph.edges:
        mat[index_map[edge.source], index_map[edge.target]] = 1

    return pd.DataFrame(mat, index=courses, columns=courses)


def analyze_graph(graph: CourseGraph, top_n: int = 10) -> Dict:
    """
    Analyze a course graph and return key statistics.

    Args:
        graph: CourseGraph from build_graph()
        top_n: Number of top courses to return in rankings

    Returns:
        Dictionary with analysis results
    """
    G = to_networkx(graph)

    zone_counts = Counter(node.data.zone.value for node in graph.nodes)
    relation_counts = Counter(edge.data.relation_type.value for edge in graph.edges)

    def max_depth(zone: Zone) -> int:
        depths = [n.data.depth for n in graph.nodes if n.data.zone == zone]
        return max(depths) if depths else 0

    master = graph.master()
    degree = {node: G.degree(node) for node in G.nodes()}

    return {
        "master": master.id if master else None,
        "total_courses": G.number_of_nodes(),
        "total_relations": len(graph.edges),
        "courses_by_zone": dict(zone_counts),
        "relations_by_type": dict(relation_counts),
        "max_prereq_depth": max_depth(Zone.SOUTH),
        "max_postreq_depth": max_depth(Zone.NORTH),
        "most_connected_courses": sorted(
            degree.items(),
            key=lambda x: (-x[1], x[0])
        )[:top_n],
    }


def print_graph_analysis(graph: CourseGraph, top_n: int = 10):
    """
    Print a formatted analysis of a course graph.

    Args:
        graph: CourseGraph from build_graph()
        top_n: Number of top courses to show
    """
    analysis = analyze_graph(graph, top_n=top_n)

    print("=" * 70)
    print(f"COURSE GRAPH ANALYSIS: {analysis['master']}")
    print("=" * 70)

    print(f"\nOverview:")
    print(f"  Total Courses: {analysis['total_courses']}")
    print(f"  Total Relations: {analysis['total_relations']}")
    print(f"  Prerequisite Depth: {analysis['max_prereq_depth']}")
    print(f"  Postrequisite Depth: {analysis['max_postreq_depth']}")

    print(f"\nCourses by Zone:")
    for zone, count in sorted(analysis['courses_by_zone'].items()):
        print(f"  {zone}: {count}")

    print(f"\nRelations by Type:")
    for relation, count in sorted(analysis['relations_by_type'].items()):
        print(f"  {relation}: {count}")

    print(f"\nMost Connected Courses:")
    for course_id, count in analysis['most_connected_courses']:
        if count > 0:
            print(f"  {course_id}: {count} relations")

    print("=" * 70)


# ============================================================================
# GRAPH VISUALIZATION
# ============================================================================

def visualize_graph(graph: CourseGraph,
                    figsize: tuple = (20, 15),
                    title: Optional[str] = None,
                    save_path: Optional[str] = None,
                    show: bool = True) -> tuple:
    """
    Draw a laid-out course graph with matplotlib and networkx.

    Node boxes are drawn at their zoned positions (centers of the top-left
    anchored boxes), coloured by zone; edges are styled by relation type.

    Args:
        graph: Positioned CourseGraph from layout()
        figsize: Figure size (width, height)
        title: Graph title (auto-generated if None)
        save_path: Path to save figure (e.g., "graph.png")
        show: Whether to display the graph

    Returns:
        tuple: (figure, axis, graph, positions)
    """
    import matplotlib.pyplot as plt
    from matplotlib.patches import Patch

    G = to_networkx(graph)

    # screen y grows downward, plot y grows upward
    pos = {
        node.id: (node.position.x + NODE_WIDTH / 2,
                  -(node.position.y + NODE_HEIGHT / 2))
        for node in graph.nodes
    }
    node_colors = [ZONE_COLORS[Zone(G.nodes[n]['zone'])] for n in G.nodes()]

    fig, ax = plt.subplots(figsize=figsize)

    nx.draw_networkx_nodes(
        G, pos,
        ax=ax,
        node_color=node_colors,
        node_size=3000,
        node_shape='s',
        linewidths=2
    )
    nx.draw_networkx_labels(G, pos, ax=ax, font_size=8, font_weight='bold')

    for relation, (color, style) in RELATION_STYLES.items():
        edgelist = [(u, v) for u, v, d in G.edges(data=True) if d['relation'] == relation]
        if not edgelist:
            continue
        nx.draw_networkx_edges(
            G, pos,
            ax=ax,
            edgelist=edgelist,
            edge_color=color,
            style=style,
            arrows=True,
            arrowsize=20,
            node_size=3000
        )

    edge_labels = {(u, v): d['label'] for u, v, d in G.edges(data=True) if d['label']}
    if edge_labels:
        nx.draw_networkx_edge_labels(G, pos, edge_labels=edge_labels, ax=ax, font_size=7)

    if title is None:
        master = graph.master()
        title = f"{master.id if master else 'Unknown'} - Course Dependencies"
    ax.set_title(title, fontsize=16, fontweight='bold')
    ax.axis('off')

    present = {Zone(G.nodes[n]['zone']) for n in G.nodes()}
    legend_elements = [
        Patch(facecolor=color, label=zone.value)
        for zone, color in ZONE_COLORS.items() if zone in present
    ]
    if legend_elements:
        ax.legend(handles=legend_elements, loc='upper right')

    plt.tight_layout()

    if save_path:
        plt.savefig(save_path, dpi=300, bbox_inches='tight')
        print(f"Graph saved to: {save_path}")

    if show:
        plt.show()

    return fig, ax, G, pos


__all__ = [
    'detect_cycles',
    'get_bottleneck_courses',
    'catalog_statistics',
    'to_networkx',
    'build_adjacency_mat',
    'analyze_graph',
    'print_graph_analysis',
    'visualize_graph',
]
