#!/usr/bin/env python3
"""
Course Graph API
"""

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel
from typing import List, Optional

from coursemap.catalog_index import CatalogIndex, build_index
from coursemap.catalog_loader import load_catalog
from coursemap.config import Config
from coursemap.graph_analysis import catalog_statistics
from coursemap.graph_builder import build_graph
from coursemap.models import GraphConfig
from coursemap.prereq_parser import normalize_course_code, parse_course_list
from coursemap.zoned_layout import layout

# ============================================================================
# DATA MODELS
# ============================================================================

class Course(BaseModel):
    course_code: str
    course_name: str
    credits: str
    department_code: str
    level: int
    career_type: str
    prerequisite: str
    corequisite: str
    exclusion: str
    previous_course_codes: List[str]
    alternative_course_codes: List[str]

class Requirement(BaseModel):
    courses: List[str]
    has_and: bool
    has_or: bool
    label: Optional[str] = None
    raw: str

class CourseRequirements(BaseModel):
    course_code: str
    prerequisite: Requirement
    corequisite: Requirement
    exclusions: List[str]
    required_by: List[str]
    corequisite_of: List[str]

# ============================================================================
# DATA STORAGE CLASS
# ============================================================================

class CourseGraphDataStore:
    """In-memory data store for one catalog snapshot"""

    def __init__(self):
        self.index: Optional[CatalogIndex] = None

    def load_data(self, catalog_path: str):
        """Load the catalog and rebuild the index from scratch"""
        records = load_catalog(catalog_path)
        print("Building catalog index...")
        self.index = build_index(records)
        print(f"Data loaded: {len(self.index)} courses")

    def require_index(self) -> CatalogIndex:
        if self.index is None:
            raise HTTPException(status_code=503, detail="Data not loaded")
        return self.index

    def require_course(self, course_code: str):
        index = self.require_index()
        course = index.get(course_code)
        if course is None:
            raise HTTPException(status_code=404, detail=f"Course {course_code} not found")
        return course

# ============================================================================
# FASTAPI APPLICATION
# ============================================================================

app = FastAPI(
    title="Course Graph API",
    description="API for course prerequisite, corequisite and exclusion graphs centered on one course",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

data_store = CourseGraphDataStore()

# ============================================================================
# API ENDPOINTS
# ============================================================================

@app.on_event("startup")
async def startup_event():
    """Load data on startup"""
    try:
        data_store.load_data(Config.CATALOG_PATH)
    except (OSError, ValueError) as e:
        print(f"Warning: Could not load data on startup: {e}")
        print("API will return 503 until data is loaded")

@app.get("/")
async def root():
    """API health check"""
    return {
        "status": "online",
        "message": "Course Graph API",
        "data_loaded": data_store.index is not None
    }

@app.get("/statistics")
async def get_statistics():
    """Catalog statistics"""
    return catalog_statistics(data_store.require_index())

@app.get("/courses/{course_code}", response_model=Course)
async def get_course(course_code: str):
    """Get details for a specific course"""
    course = data_store.require_course(course_code)
    return Course(
        course_code=normalize_course_code(course.course_code),
        course_name=course.course_name,
        credits=course.credits,
        department_code=course.department_code,
        level=course.level,
        career_type=course.career_type,
        prerequisite=course.course_prerequisite,
        corequisite=course.course_corequisite,
        exclusion=course.course_exclusion,
        previous_course_codes=list(course.previous_course_codes),
        alternative_course_codes=list(course.alternative_course_codes)
    )

@app.get("/courses/{course_code}/requirements", response_model=CourseRequirements)
async def get_course_requirements(course_code: str):
    """Parsed prerequisites, corequisites and exclusions plus reverse relations"""
    course = data_store.require_course(course_code)
    index = data_store.index
    code = normalize_course_code(course_code)

    def to_requirement(parsed) -> Requirement:
        return Requirement(
            courses=list(parsed.course_codes),
            has_and=parsed.has_and,
            has_or=parsed.has_or,
            label=parsed.label,
            raw=parsed.raw
        )

    return CourseRequirements(
        course_code=code,
        prerequisite=to_requirement(index.prerequisites_of(code)),
        corequisite=to_requirement(index.corequisites_of(code)),
        exclusions=parse_course_list(course.course_exclusion),
        required_by=list(index.dependents_of(code)),
        corequisite_of=list(index.corequisite_dependents_of(code))
    )

@app.get("/search")
async def search_courses(
    query: str = Query(..., min_length=2, description="Course code prefix"),
    limit: int = Query(Config.SEARCH_LIMIT, ge=1, le=100, description="Maximum results")
):
    """Search for courses by code prefix"""
    index = data_store.require_index()

    results = []
    for code in index.search_courses(query, limit=limit):
        course = index.get(code)
        results.append({
            "course_code": code,
            "course_name": course.course_name,
            "department_code": course.department_code
        })

    return {"query": query, "count": len(results), "results": results}

@app.get("/graph/{course_code}")
async def get_course_graph(
    course_code: str,
    max_prereq_depth: int = Query(3, ge=1, description="Prerequisite levels to expand"),
    max_postreq_depth: int = Query(2, ge=1, description="Postrequisite levels to expand"),
    show_exclusions: bool = Query(True, description="Include the course's exclusions"),
    show_corequisites: bool = Query(True, description="Include corequisites")
):
    """Get the laid-out dependency graph for a course (nodes and edges)"""
    data_store.require_course(course_code)

    config = GraphConfig(
        max_prereq_depth=max_prereq_depth,
        max_postreq_depth=max_postreq_depth,
        show_exclusions=show_exclusions,
        show_corequisites=show_corequisites
    )
    graph = layout(build_graph(course_code, data_store.index, config))
    return graph.to_payload()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="127.0.0.1", port=8000)
