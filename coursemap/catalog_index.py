#!/usr/bin/env python3
"""
Catalog index: forward and reverse lookups over one catalog snapshot
"""

from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Tuple, Union

from pydantic import ValidationError

from coursemap.models import CourseRecord, ParsedRequirement
from coursemap.prereq_parser import normalize_course_code, parse_requirement

# ============================================================================
# HELPER FUNCTIONS
# ============================================================================


def _as_record(record: Union[CourseRecord, Mapping]) -> CourseRecord:
    if isinstance(record, CourseRecord):
        return record
    return CourseRecord.model_validate(dict(record))


def _build_reverse_map(
        parsed: Mapping[str, ParsedRequirement]) -> Dict[str, Tuple[str, ...]]:
    """Map each referenced code to the codes whose requirement mentions it"""
    reverse: Dict[str, Dict[str, None]] = {}
    for code, requirement in parsed.items():
        for ref in requirement.course_codes:
            if ref == code:
                continue
            # dict keeps catalog order and drops repeats
            reverse.setdefault(ref, {})[code] = None
    return {ref: tuple(codes) for ref, codes in reverse.items()}


# ============================================================================
# CATALOG INDEX
# ============================================================================

class CatalogIndex:
    """
    Immutable lookup structure for one catalog snapshot.

    Holds the forward map (normalized code -> CourseRecord), the parsed
    prerequisite / corequisite text of every course, and the two reverse maps
    (code -> courses that list it as prerequisite / corequisite). Rebuild a
    new index when the catalog changes; never patch one in place.
    """

    def __init__(self, courses: Dict[str, CourseRecord]):
        self._courses = MappingProxyType(dict(courses))

        prereqs = {code: parse_requirement(course.course_prerequisite)
                   for code, course in self._courses.items()}
        coreqs = {code: parse_requirement(course.course_corequisite)
                  for code, course in self._courses.items()}

        self._prereqs = MappingProxyType(prereqs)
        self._coreqs = MappingProxyType(coreqs)
        self._reverse_prereqs = MappingProxyType(_build_reverse_map(prereqs))
        self._reverse_coreqs = MappingProxyType(_build_reverse_map(coreqs))

    def __len__(self) -> int:
        return len(self._courses)

    def __contains__(self, code) -> bool:
        return normalize_course_code(code) in self._courses

    def __iter__(self):
        return iter(self._courses)

    @property
    def courses(self) -> Mapping[str, CourseRecord]:
        return self._courses

    @property
    def reverse_prerequisites(self) -> Mapping[str, Tuple[str, ...]]:
        return self._reverse_prereqs

    @property
    def reverse_corequisites(self) -> Mapping[str, Tuple[str, ...]]:
        return self._reverse_coreqs

    def codes(self) -> List[str]:
        return list(self._courses)

    def get(self, code: str) -> Optional[CourseRecord]:
        """Look up a course by code, with or without the space"""
        return self._courses.get(normalize_course_code(code))

    def prerequisites_of(self, code: str) -> ParsedRequirement:
        return self._prereqs.get(normalize_course_code(code), ParsedRequirement())

    def corequisites_of(self, code: str) -> ParsedRequirement:
        return self._coreqs.get(normalize_course_code(code), ParsedRequirement())

    def dependents_of(self, code: str) -> Tuple[str, ...]:
        """Courses whose prerequisite text references this course"""
        return self._reverse_prereqs.get(normalize_course_code(code), ())

    def corequisite_dependents_of(self, code: str) -> Tuple[str, ...]:
        """Courses whose corequisite text references this course"""
        return self._reverse_coreqs.get(normalize_course_code(code), ())

    def mutual_corequisite(self, code_a: str, code_b: str) -> bool:
        """
        True when each course lists the other as a corequisite.

        Args:
            code_a: First course code
            code_b: Second course code

        Returns:
            bool, symmetric in its arguments
        """
        a = normalize_course_code(code_a)
        b = normalize_course_code(code_b)
        if a not in self._coreqs or b not in self._coreqs:
            return False
        return (b in self._coreqs[a].course_codes
                and a in self._coreqs[b].course_codes)

    def search_courses(self, query: str, limit: int = 10) -> List[str]:
        """
        Prefix search on course codes.

        Args:
            query: Code prefix such as "comp 2" (spaces and case ignored)
            limit: Maximum number of results (default: 10)

        Returns:
            Matching codes in catalog order; [] for queries under 2 characters
        """
        if not query or len(query) < 2:
            return []
        prefix = normalize_course_code(query)

        results = []
        for code in self._courses:
            if code.startswith(prefix):
                results.append(code)
                if len(results) >= limit:
                    break
        return results


def build_index(
        records: Iterable[Union[CourseRecord, Mapping]]) -> CatalogIndex:
    """
    Build a CatalogIndex from catalog records.

    Records may be CourseRecord objects or raw catalog dicts. Records with no
    usable course code are skipped; when two records share a normalized code
    the later one wins.

    Args:
        records: Iterable of courses in catalog order

    Returns:
        CatalogIndex
    """
    courses: Dict[str, CourseRecord] = {}
    for record in records or []:
        try:
            course = _as_record(record)
        except (ValidationError, TypeError, ValueError):
            # not shaped like a course, nothing to index
            continue
        code = normalize_course_code(course.course_code)
        if not code:
            continue
        courses[code] = course
    return CatalogIndex(courses)


__all__ = [
    'CatalogIndex',
    'build_index',
]
