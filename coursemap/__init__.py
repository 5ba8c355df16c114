"""
Course dependency graphs centered on one master course.

    from coursemap import build_index, build_graph, layout

    index = build_index(catalog_records)
    graph = layout(build_graph("COMP 2611", index))
"""

from coursemap.catalog_index import CatalogIndex, build_index
from coursemap.graph_builder import build_graph
from coursemap.models import (
    DEFAULT_GRAPH_CONFIG,
    CourseGraph,
    CourseRecord,
    GraphConfig,
    GraphEdge,
    GraphNode,
    ParsedRequirement,
    RelationType,
    Zone,
)
from coursemap.prereq_parser import (
    normalize_course_code,
    parse_course_list,
    parse_requirement,
)
from coursemap.zoned_layout import layout

__all__ = [
    'CatalogIndex',
    'build_index',
    'build_graph',
    'layout',
    'normalize_course_code',
    'parse_course_list',
    'parse_requirement',
    'DEFAULT_GRAPH_CONFIG',
    'CourseGraph',
    'CourseRecord',
    'GraphConfig',
    'GraphEdge',
    'GraphNode',
    'ParsedRequirement',
    'RelationType',
    'Zone',
]
