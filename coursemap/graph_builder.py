#!/usr/bin/env python3
"""
Course dependency graph construction

Builds the graph around one master course by walking the catalog in four
directions:

    south  prerequisites (and corequisites) of the master, recursively
    north  courses that require the master, recursively
    west   the master's exclusions, one hop
    east   mutual corequisites, plus previous / alternative codes

Every walk keeps its own visited set so cyclic requirement data terminates.
A node keeps the zone and depth of the walk that found it first.
"""

from typing import Dict, Optional, Set, Tuple

from coursemap.catalog_index import CatalogIndex
from coursemap.models import (
    DEFAULT_GRAPH_CONFIG,
    CourseGraph,
    CourseRecord,
    GraphConfig,
    GraphEdge,
    GraphEdgeData,
    GraphNode,
    GraphNodeData,
    RelationType,
    Zone,
    make_edge_id,
)
from coursemap.prereq_parser import normalize_course_code, parse_course_list

# ============================================================================
# HELPER FUNCTIONS
# ============================================================================


def _node_data(course: CourseRecord, zone: Zone, depth: int,
               mutual_of: Optional[str] = None) -> GraphNodeData:
    return GraphNodeData(
        course_code=course.course_code,
        course_name=course.course_name,
        credits=course.credits,
        department_code=course.department_code,
        level=course.level,
        career_type=course.career_type,
        course_prerequisite=course.course_prerequisite,
        course_corequisite=course.course_corequisite,
        course_exclusion=course.course_exclusion,
        zone=zone,
        depth=depth,
        is_master=zone == Zone.CENTER,
        mutual_corequisite_of=mutual_of,
    )


def _row(node: GraphNode) -> int:
    """Vertical band of a node: north rows negative, south rows positive"""
    if node.data.zone == Zone.NORTH:
        return -node.data.depth
    if node.data.zone == Zone.SOUTH:
        return node.data.depth
    return 0


def _edge_handles(source: GraphNode,
                  target: GraphNode) -> Tuple[Optional[str], Optional[str]]:
    """Which side of each node an edge attaches to, from the node zones"""
    side_zones = {
        Zone.WEST: ("left", "right"),
        Zone.EAST: ("right", "left"),
    }
    if target.data.zone in side_zones:
        return side_zones[target.data.zone]
    if source.data.zone in side_zones:
        source_side, target_side = side_zones[source.data.zone]
        return target_side, source_side

    source_row, target_row = _row(source), _row(target)
    if source_row > target_row:
        return "top", "bottom"
    if source_row < target_row:
        return "bottom", "top"
    return None, None


# ============================================================================
# GRAPH BUILDER
# ============================================================================

class _GraphBuilder:
    """Node and edge accumulator for a single build call"""

    def __init__(self, index: CatalogIndex, config: GraphConfig):
        self.index = index
        self.config = config
        self.nodes: Dict[str, GraphNode] = {}
        self.edges: Dict[str, GraphEdge] = {}

    # ------------------------------------------------------------------
    # nodes and edges
    # ------------------------------------------------------------------

    def add_node(self, code: str, zone: Zone, depth: int,
                 mutual_of: Optional[str] = None) -> GraphNode:
        """Create the node on first discovery; later calls return it unchanged"""
        if code not in self.nodes:
            course = self.index.get(code)
            self.nodes[code] = GraphNode(
                id=code, data=_node_data(course, zone, depth, mutual_of))
        return self.nodes[code]

    def add_edge(self, source: str, target: str, relation: RelationType,
                 label: Optional[str] = None,
                 bidirectional: bool = False) -> None:
        edge_id = make_edge_id(source, target, relation)
        if edge_id in self.edges:
            return
        if bidirectional and make_edge_id(target, source, relation) in self.edges:
            return

        source_handle, target_handle = _edge_handles(
            self.nodes[source], self.nodes[target])
        self.edges[edge_id] = GraphEdge(
            id=edge_id,
            source=source,
            target=target,
            source_handle=source_handle,
            target_handle=target_handle,
            data=GraphEdgeData(
                relation_type=relation,
                label=label,
                bidirectional=bidirectional,
            ),
        )

    def _resolved(self, code: str) -> Optional[str]:
        code = normalize_course_code(code)
        return code if code in self.index else None

    # ------------------------------------------------------------------
    # walks
    # ------------------------------------------------------------------

    def walk_prerequisites(self, code: str, depth: int, visited: Set[str]) -> None:
        """South walk: what has to be taken before (or alongside) this course"""
        if depth > self.config.max_prereq_depth:
            return

        requirement = self.index.prerequisites_of(code)
        for ref in requirement.course_codes:
            if ref == code or ref not in self.index:
                continue
            self.add_node(ref, Zone.SOUTH, depth)
            self.add_edge(ref, code, RelationType.PREREQUISITE,
                          label=requirement.label)
            if ref not in visited:
                visited.add(ref)
                self.walk_prerequisites(ref, depth + 1, visited)

        if not self.config.show_corequisites:
            return

        for ref in self.index.corequisites_of(code).course_codes:
            if ref == code or ref not in self.index:
                continue
            if self.index.mutual_corequisite(code, ref):
                self.add_node(ref, Zone.EAST, depth, mutual_of=code)
                self.add_edge(code, ref, RelationType.COREQUISITE,
                              bidirectional=True)
            else:
                self.add_node(ref, Zone.SOUTH, depth)
                self.add_edge(code, ref, RelationType.COREQUISITE)

    def walk_postrequisites(self, code: str, depth: int, visited: Set[str]) -> None:
        """North walk: courses that list this course as a requirement"""
        if depth > self.config.max_postreq_depth:
            return

        for dependent in self.index.dependents_of(code):
            if dependent not in self.index:
                continue
            self.add_node(dependent, Zone.NORTH, depth)
            self.add_edge(code, dependent, RelationType.PREREQUISITE,
                          label=self.index.prerequisites_of(dependent).label)
            if dependent not in visited:
                visited.add(dependent)
                self.walk_postrequisites(dependent, depth + 1, visited)

        if not self.config.show_corequisites:
            return

        # one-way corequisites: the dependent needs this course alongside it
        for dependent in self.index.corequisite_dependents_of(code):
            if dependent not in self.index:
                continue
            if self.index.mutual_corequisite(code, dependent):
                continue
            self.add_node(dependent, Zone.NORTH, depth)
            self.add_edge(code, dependent, RelationType.COREQUISITE)

    def add_exclusions(self, master: str) -> None:
        """West: the master's own exclusions, never recursed"""
        course = self.index.get(master)
        for code in parse_course_list(course.course_exclusion):
            if code == master or code not in self.index:
                continue
            self.add_node(code, Zone.WEST, 1)
            self.add_edge(master, code, RelationType.EXCLUSION)

    def add_equivalents(self, master: str) -> None:
        """Previous codes point at the master, the master points at alternatives"""
        course = self.index.get(master)

        for previous in course.previous_course_codes:
            code = self._resolved(previous)
            if code is None or code == master:
                continue
            self.add_node(code, Zone.EAST, 1)
            self.add_edge(code, master, RelationType.EQUIVALENT)

        for alternative in course.alternative_course_codes:
            code = self._resolved(alternative)
            if code is None or code == master:
                continue
            self.add_node(code, Zone.EAST, 1)
            self.add_edge(master, code, RelationType.EQUIVALENT)

    def build(self, master: str) -> CourseGraph:
        self.add_node(master, Zone.CENTER, 0)

        self.walk_prerequisites(master, 1, {master})
        self.walk_postrequisites(master, 1, {master})
        if self.config.show_exclusions:
            self.add_exclusions(master)
        self.add_equivalents(master)

        return CourseGraph(nodes=list(self.nodes.values()),
                           edges=list(self.edges.values()))


def build_graph(master_code: str, index: CatalogIndex,
                config: Optional[GraphConfig] = None) -> CourseGraph:
    """
    Build the unpositioned dependency graph for one master course.

    Args:
        master_code: Course code to center the graph on (e.g., "COMP 2611")
        index: CatalogIndex built from the catalog
        config: Traversal limits (default: GraphConfig())

    Returns:
        CourseGraph with all positions at (0, 0); empty when the master
        course is not in the catalog
    """
    master = normalize_course_code(master_code)
    if not master or master not in index:
        return CourseGraph()

    builder = _GraphBuilder(index, config or DEFAULT_GRAPH_CONFIG)
    return builder.build(master)


__all__ = [
    'build_graph',
]
