"""Tests for the catalog index."""

import itertools

import pytest

from coursemap.catalog_index import build_index
from coursemap.conftest import course
from coursemap.models import CourseRecord


class TestForwardMap:

    def test_codes_are_normalized(self, sample_index):
        assert "COMP2611" in sample_index
        assert "comp 2611" in sample_index
        assert sample_index.get("Comp 2611").course_name == "Computer Organization"

    def test_missing_course(self, sample_index):
        assert sample_index.get("COMP9999") is None
        assert "COMP9999" not in sample_index

    def test_last_record_wins_on_duplicate_codes(self):
        index = build_index([
            course("COMP 1021", "First"),
            course("COMP1021", "Second"),
        ])
        assert len(index) == 1
        assert index.get("COMP1021").course_name == "Second"

    def test_accepts_course_records(self):
        record = CourseRecord(course_code="MATH 1013", course_name="Calculus IB")
        index = build_index([record])
        assert index.get("MATH1013") is record

    def test_skips_records_without_code(self):
        index = build_index([{"courseName": "No code"}, course("COMP1021"), "junk"])
        assert index.codes() == ["COMP1021"]

    def test_missing_optional_fields(self):
        index = build_index([{"courseCode": "COMP1021", "coursePrerequisite": None}])
        assert index.prerequisites_of("COMP1021").course_codes == ()

    def test_empty_catalog(self):
        index = build_index([])
        assert len(index) == 0
        assert index.search_courses("COMP") == []

    def test_courses_mapping_is_read_only(self, sample_index):
        with pytest.raises(TypeError):
            sample_index.courses["NEW1000"] = None


class TestReverseMaps:

    def test_reverse_prerequisites(self, sample_index):
        assert sample_index.dependents_of("COMP1021") == ("COMP2611",)
        assert sample_index.dependents_of("COMP 2611") == ("COMP3711",)
        # referenced but not in catalog still gets a reverse entry
        assert sample_index.dependents_of("COMP2012") == ("COMP3711",)

    def test_reverse_corequisites(self, sample_index):
        assert sample_index.corequisite_dependents_of("COMP2611") == ("COMP2711", "COMP3111")
        assert sample_index.corequisite_dependents_of("COMP2711") == ("COMP2611",)

    def test_unknown_code_has_no_dependents(self, sample_index):
        assert sample_index.dependents_of("ZZZZ0000") == ()

    def test_self_reference_ignored(self):
        index = build_index([course("COMP2011", prereq="COMP 2011 or COMP 1021")])
        assert index.dependents_of("COMP2011") == ()
        assert index.dependents_of("COMP1021") == ("COMP2011",)


class TestMutualCorequisite:

    def test_mutual_pair(self, sample_index):
        assert sample_index.mutual_corequisite("COMP2611", "COMP2711")
        assert sample_index.mutual_corequisite("COMP 2711", "comp2611")

    def test_one_way_is_not_mutual(self, sample_index):
        assert not sample_index.mutual_corequisite("COMP3111", "COMP2611")
        assert not sample_index.mutual_corequisite("COMP2611", "COMP3111")

    def test_unknown_course(self, sample_index):
        assert not sample_index.mutual_corequisite("COMP2611", "COMP9999")

    def test_symmetric_over_all_pairs(self, sample_index):
        for a, b in itertools.product(sample_index.codes(), repeat=2):
            assert sample_index.mutual_corequisite(a, b) == sample_index.mutual_corequisite(b, a)


class TestSearchCourses:

    def test_prefix_match_in_catalog_order(self, sample_index):
        assert sample_index.search_courses("comp 26") == ["COMP2611", "COMP2610", "COMP2611H"]

    def test_limit(self, sample_index):
        assert len(sample_index.search_courses("COMP", limit=3)) == 3

    def test_short_query(self, sample_index):
        assert sample_index.search_courses("C") == []
        assert sample_index.search_courses("") == []
