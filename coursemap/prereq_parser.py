#!/usr/bin/env python3
"""
Requirement text parsing

Pulls course codes out of free-form prerequisite, corequisite and exclusion
text, e.g. "ACCT 1000 AND (MATH 1010 OR MATH 1020)" or
"(for non-BIBU students) ACCT 2010". Boolean structure is not modelled, only
whether the text mentions AND / OR.
"""

import re
from typing import List

from coursemap.models import ParsedRequirement

# PREFIX (2-4 uppercase letters) + optional space + NUMBER (3-4 digits, optional letter)
COURSE_CODE_PATTERN = re.compile(r"\b([A-Z]{2,4})\s*(\d{3,4}[A-Z]?)\b", re.ASCII)


def normalize_course_code(code: str) -> str:
    """Remove all whitespace and upper-case, e.g. "acct 2010" -> "ACCT2010" """
    if not isinstance(code, str):
        return ""
    return re.sub(r"\s+", "", code).upper()


def extract_course_codes(text: str) -> List[str]:
    """
    Extract normalized course codes from text in first-seen order.

    Args:
        text: Any requirement string (None and non-strings yield [])

    Returns:
        List of unique codes like ["COMP1021", "MATH1013"]
    """
    if not text or not isinstance(text, str):
        return []

    codes = []
    for prefix, number in COURSE_CODE_PATTERN.findall(text):
        code = normalize_course_code(prefix + number)
        if code not in codes:
            codes.append(code)
    return codes


def parse_requirement(text: str) -> ParsedRequirement:
    """
    Parse a prerequisite or corequisite string.

    Args:
        text: Free-text requirement, e.g. "COMP 1021 AND MATH 1013"

    Returns:
        ParsedRequirement with the referenced codes, AND/OR flags and the raw text
    """
    raw = text if isinstance(text, str) else ""
    upper_raw = raw.upper()

    return ParsedRequirement(
        course_codes=tuple(extract_course_codes(raw)),
        has_and=" AND " in upper_raw,
        has_or=" OR " in upper_raw,
        raw=raw,
    )


def parse_course_list(text: str) -> List[str]:
    """Codes from a comma separated or free-text list (exclusions, co-listed)"""
    return extract_course_codes(text)


__all__ = [
    'COURSE_CODE_PATTERN',
    'normalize_course_code',
    'extract_course_codes',
    'parse_requirement',
    'parse_course_list',
]
