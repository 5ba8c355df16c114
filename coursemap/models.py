#!/usr/bin/env python3
"""
Course graph data models
"""

import numbers
import re
from enum import Enum
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

# ============================================================================
# ENUMS
# ============================================================================


class Zone(str, Enum):
    CENTER = "center"
    NORTH = "north"
    SOUTH = "south"
    EAST = "east"
    WEST = "west"


class RelationType(str, Enum):
    PREREQUISITE = "prerequisite"
    COREQUISITE = "corequisite"
    EXCLUSION = "exclusion"
    EQUIVALENT = "equivalent"


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


# ============================================================================
# CATALOG MODELS
# ============================================================================

class CourseAttribute(_CamelModel):
    model_config = ConfigDict(frozen=True)

    course_attribute: str = ""
    course_attribute_value: str = ""
    course_attribute_value_description: str = ""


class CourseRecord(_CamelModel):
    """One course from the catalog, field names as the catalog spells them"""
    model_config = ConfigDict(frozen=True)

    course_code: str = ""
    course_prefix: str = ""
    course_number: str = ""
    course_name: str = ""
    academic_career_type: str = ""
    academic_career: str = ""
    school_code: str = ""
    department_code: str = ""
    min_units: str = ""
    max_units: str = ""
    course_vector: str = ""
    course_vector_printed: str = ""
    course_description: str = ""
    course_prerequisite: str = ""
    course_corequisite: str = ""
    course_exclusion: str = ""
    course_background: str = ""
    course_colisted: str = ""
    course_cross_campus_equivalence: str = ""
    course_reference: str = ""
    previous_course_codes: Tuple[str, ...] = ()
    alternative_course_codes: Tuple[str, ...] = ()
    course_attributes: Tuple[CourseAttribute, ...] = ()

    @field_validator(
        "course_code", "course_prefix", "course_number", "course_name",
        "academic_career_type", "academic_career", "school_code",
        "department_code", "min_units", "max_units", "course_vector",
        "course_vector_printed", "course_description", "course_prerequisite",
        "course_corequisite", "course_exclusion", "course_background",
        "course_colisted", "course_cross_campus_equivalence",
        "course_reference",
        mode="before")
    @classmethod
    def _text_or_empty(cls, value):
        if value is None:
            return ""
        if isinstance(value, float) and value != value:
            return ""
        if isinstance(value, numbers.Real):
            # numeric units come through as 3 or 3.0
            return re.sub(r"\.0$", "", str(value))
        return value

    @field_validator(
        "previous_course_codes", "alternative_course_codes",
        "course_attributes", mode="before")
    @classmethod
    def _list_or_empty(cls, value):
        if value is None or isinstance(value, (str, float)):
            return ()
        return tuple(value)

    @property
    def credits(self) -> str:
        """Credit string, a single value like 3 or a range like 1-3"""
        low = self.min_units or "0"
        high = self.max_units or low
        if low == high:
            return low
        return f"{low}-{high}"

    @property
    def level(self) -> int:
        """Course level from the first digit of the course number"""
        number = self.course_number or re.sub(r"^[A-Za-z\s]+", "", self.course_code)
        first = number[:1]
        return int(first) if first.isdigit() else 0

    @property
    def career_type(self) -> str:
        return "PG" if self.academic_career_type == "PG" else "UG"


class ParsedRequirement(BaseModel):
    """Flat view of a requirement string: referenced codes plus AND/OR hints"""
    model_config = ConfigDict(frozen=True)

    course_codes: Tuple[str, ...] = ()
    has_and: bool = False
    has_or: bool = False
    raw: str = ""

    @property
    def label(self) -> Optional[str]:
        """Edge label for mixed or alternative requirements"""
        if self.has_and and self.has_or:
            return "AND/OR"
        if self.has_or:
            return "OR"
        return None


# ============================================================================
# GRAPH MODELS
# ============================================================================

class GraphConfig(_CamelModel):
    """Traversal limits for one graph build"""
    model_config = ConfigDict(frozen=True)

    max_prereq_depth: int = Field(3, ge=1)
    max_postreq_depth: int = Field(2, ge=1)
    show_exclusions: bool = True
    show_corequisites: bool = True


DEFAULT_GRAPH_CONFIG = GraphConfig()


class Position(BaseModel):
    x: float = 0.0
    y: float = 0.0


class GraphNodeData(_CamelModel):
    course_code: str
    course_name: str = ""
    credits: str = "0"
    department_code: str = ""
    level: int = 0
    career_type: str = "UG"
    course_prerequisite: str = ""
    course_corequisite: str = ""
    course_exclusion: str = ""
    zone: Zone
    depth: int = Field(0, ge=0)
    is_master: bool = False
    mutual_corequisite_of: Optional[str] = None


class GraphNode(_CamelModel):
    id: str
    type: str = "course"
    position: Position = Field(default_factory=Position)
    data: GraphNodeData


class GraphEdgeData(_CamelModel):
    relation_type: RelationType
    label: Optional[str] = None
    bidirectional: bool = False


class GraphEdge(_CamelModel):
    id: str
    source: str
    target: str
    source_handle: Optional[str] = None
    target_handle: Optional[str] = None
    data: GraphEdgeData


class CourseGraph(_CamelModel):
    nodes: List[GraphNode] = Field(default_factory=list)
    edges: List[GraphEdge] = Field(default_factory=list)

    def node_map(self) -> Dict[str, GraphNode]:
        return {node.id: node for node in self.nodes}

    def master(self) -> Optional[GraphNode]:
        for node in self.nodes:
            if node.data.is_master:
                return node
        return None

    def to_payload(self) -> Dict:
        """Renderer-facing dict with camelCase keys"""
        return self.model_dump(mode="json", by_alias=True)


def make_edge_id(source: str, target: str, relation: RelationType) -> str:
    """Edge id of the form source->target:relationType, also the dedup key"""
    return f"{source}->{target}:{relation.value}"
