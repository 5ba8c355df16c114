"""Shared catalog fixtures."""

import pytest

from coursemap.catalog_index import build_index


def course(code, name="", prereq="", coreq="", exclusion="",
           previous=None, alternative=None, **extra):
    record = {
        "courseCode": code,
        "courseName": name or f"Course {code}",
        "coursePrerequisite": prereq,
        "courseCorequisite": coreq,
        "courseExclusion": exclusion,
        "previousCourseCodes": previous or [],
        "alternativeCourseCodes": alternative or [],
        "minUnits": "3",
        "maxUnits": "3",
    }
    record.update(extra)
    return record


@pytest.fixture
def sample_records():
    """
    COMP2611 sits in the middle:

        COMP5211 -> COMP4211 -> COMP3711 -> COMP2611 <- COMP1021, MATH1013
        COMP2611 <-> COMP2711 mutual corequisites
        COMP3111 takes COMP2611 as a one-way corequisite
        COMP2611 excludes ELEC2300; previous code COMP2610; alternative COMP2611H
    """
    return [
        course("COMP 1021", "Introduction to Computer Science", prereq="MATH 1003"),
        course("MATH 1003", "Calculus and Linear Algebra"),
        course("MATH 1013", "Calculus IB"),
        course("COMP 2611", "Computer Organization",
               prereq="COMP 1021 AND MATH 1013",
               coreq="COMP 2711",
               exclusion="ELEC 2300, ELEC 9999",
               previous=["COMP 2610"],
               alternative=["COMP2611H", "COMP 9990"]),
        course("COMP 2711", "Discrete Mathematical Tools", coreq="COMP 2611"),
        course("COMP 3111", "Software Engineering", coreq="COMP 2611"),
        course("COMP 3711", "Design and Analysis of Algorithms",
               prereq="COMP 2611 OR COMP 2012"),
        course("COMP 4211", "Machine Learning", prereq="COMP 3711"),
        course("COMP 5211", "Advanced Artificial Intelligence", prereq="COMP 4211"),
        course("ELEC 2300", "Computer Organization (ELEC)"),
        course("COMP 2610", "Computer Organization (old code)"),
        course("COMP 2611H", "Honors Computer Organization"),
    ]


@pytest.fixture
def sample_index(sample_records):
    return build_index(sample_records)
