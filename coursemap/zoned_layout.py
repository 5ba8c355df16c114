#!/usr/bin/env python3
"""
Zoned layout for course graphs

Places every node from its zone and depth alone:

    north   rows above the master, deeper postrequisites further up
    south   rows below the master, deeper prerequisites further down
    west    one column left of the master
    east    mutual corequisites beside their partner, others in a column
            right of the master
    center  the master, centered on the origin

Positions are the top-left corner of each node box, matching what the
renderer expects.
"""

from collections import defaultdict
from typing import Dict, List, Optional, Set

from coursemap.models import CourseGraph, GraphNode, Position, Zone

# ============================================================================
# CONFIGURATION
# ============================================================================

NODE_WIDTH = 200
NODE_HEIGHT = 80
HORIZONTAL_GAP = 50
VERTICAL_GAP = 100
ZONE_PADDING = 60


class _Dimensions:
    def __init__(self, node_width: float = NODE_WIDTH,
                 node_height: float = NODE_HEIGHT,
                 horizontal_gap: float = HORIZONTAL_GAP,
                 vertical_gap: float = VERTICAL_GAP,
                 zone_padding: float = ZONE_PADDING):
        self.w = node_width
        self.h = node_height
        self.hgap = horizontal_gap
        self.vgap = vertical_gap
        self.pad = zone_padding


# ============================================================================
# HELPER FUNCTIONS
# ============================================================================

def _group_by_depth(nodes: List[GraphNode]) -> Dict[int, List[GraphNode]]:
    groups = defaultdict(list)
    for node in nodes:
        groups[node.data.depth].append(node)
    return dict(sorted(groups.items()))


def _row_positions(count: int, y: float, dims: _Dimensions) -> List[Position]:
    """A horizontal row of `count` boxes centered under x = 0"""
    row_width = count * (dims.w + dims.hgap) - dims.hgap
    start_x = -row_width / 2
    return [Position(x=start_x + i * (dims.w + dims.hgap), y=y)
            for i in range(count)]


def _column_positions(count: int, x: float, dims: _Dimensions) -> List[Position]:
    """A vertical column of `count` boxes centered on y = 0"""
    column_height = count * (dims.h + dims.hgap) - dims.hgap
    start_y = -column_height / 2
    return [Position(x=x, y=start_y + i * (dims.h + dims.hgap))
            for i in range(count)]


def _south_y(depth: int, dims: _Dimensions) -> float:
    return dims.h / 2 + dims.pad + (depth - 1) * (dims.h + dims.vgap)


def _north_y(depth: int, dims: _Dimensions) -> float:
    return -dims.h / 2 - dims.pad - depth * (dims.h + dims.vgap)


def _place_rows(nodes: List[GraphNode], y_for_depth,
                positions: Dict[str, Position], dims: _Dimensions) -> None:
    for depth, group in _group_by_depth(nodes).items():
        row = _row_positions(len(group), y_for_depth(depth, dims), dims)
        for node, position in zip(group, row):
            positions[node.id] = position


def _partner_position(node_id: str, by_id: Dict[str, GraphNode],
                      positions: Dict[str, Position], dims: _Dimensions,
                      resolving: Set[str],
                      slots: Dict[str, int]) -> Optional[Position]:
    """Position right of the partner, resolving partner chains first"""
    if node_id in positions:
        return positions[node_id]

    partner_id = by_id[node_id].data.mutual_corequisite_of
    if partner_id not in by_id or node_id in resolving:
        return None

    resolving.add(node_id)
    partner = _partner_position(
        partner_id, by_id, positions, dims, resolving, slots)
    resolving.discard(node_id)
    if partner is None:
        return None

    # several mutual corequisites of one course line up to its right: the
    # k-th sits k slots out, not all at partner.x + w + pad
    slot = slots.get(partner_id, 0)
    slots[partner_id] = slot + 1
    position = Position(
        x=partner.x + (slot + 1) * (dims.w + dims.pad), y=partner.y)
    positions[node_id] = position
    return position


# ============================================================================
# LAYOUT
# ============================================================================

def layout(graph: CourseGraph, **kwargs) -> CourseGraph:
    """
    Assign final coordinates to every node of a built graph.

    Pure and idempotent: the input graph is not modified, and laying out the
    same graph twice gives identical positions.

    Args:
        graph: CourseGraph from build_graph()
        **kwargs: Optional overrides for node_width, node_height,
            horizontal_gap, vertical_gap, zone_padding

    Returns:
        New CourseGraph with positioned nodes (master last) and the same edges
    """
    dims = _Dimensions(**kwargs)

    zones: Dict[Zone, List[GraphNode]] = defaultdict(list)
    for node in graph.nodes:
        zones[node.data.zone].append(node)

    positions: Dict[str, Position] = {}
    for node in zones[Zone.CENTER]:
        positions[node.id] = Position(x=-dims.w / 2, y=-dims.h / 2)

    _place_rows(zones[Zone.SOUTH], _south_y, positions, dims)
    _place_rows(zones[Zone.NORTH], _north_y, positions, dims)

    west_x = -dims.w / 2 - dims.pad - dims.w
    west = zones[Zone.WEST]
    for node, position in zip(west, _column_positions(len(west), west_x, dims)):
        positions[node.id] = position

    by_id = {node.id: node for node in graph.nodes}
    east_column = []
    slots: Dict[str, int] = {}
    for node in zones[Zone.EAST]:
        placed = None
        if node.data.mutual_corequisite_of:
            placed = _partner_position(
                node.id, by_id, positions, dims, set(), slots)
        if placed is None:
            east_column.append(node)

    # the column starts past any corequisites lined up beside the master,
    # not at the bare w / 2 + pad offset
    beside_master = sum(slots.get(node.id, 0) for node in zones[Zone.CENTER])
    east_x = dims.w / 2 + dims.pad + beside_master * (dims.w + dims.pad)
    for node, position in zip(east_column,
                              _column_positions(len(east_column), east_x, dims)):
        positions[node.id] = position

    # master goes last so it is drawn above anything overlapping it
    ordered = [n for n in graph.nodes if n.data.zone != Zone.CENTER]
    ordered += zones[Zone.CENTER]

    nodes = [node.model_copy(update={"position": positions[node.id]}, deep=True)
             for node in ordered]
    edges = [edge.model_copy(deep=True) for edge in graph.edges]
    return CourseGraph(nodes=nodes, edges=edges)


__all__ = [
    'NODE_WIDTH',
    'NODE_HEIGHT',
    'HORIZONTAL_GAP',
    'VERTICAL_GAP',
    'ZONE_PADDING',
    'layout',
]
