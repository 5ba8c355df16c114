"""Tests for the course graph API."""

import pytest
from fastapi.testclient import TestClient

from coursemap.course_graph_api import app, data_store


@pytest.fixture
def client():
    # no context manager, so the startup event does not load from disk
    return TestClient(app)


@pytest.fixture
def loaded(sample_index):
    data_store.index = sample_index
    yield data_store
    data_store.index = None


class TestNoData:

    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["data_loaded"] is False

    @pytest.mark.parametrize("path", [
        "/statistics",
        "/courses/COMP2611",
        "/courses/COMP2611/requirements",
        "/search?query=COMP",
        "/graph/COMP2611",
    ])
    def test_unavailable(self, client, path):
        assert client.get(path).status_code == 503


class TestCourses:

    def test_root(self, client, loaded):
        assert client.get("/").json()["data_loaded"] is True

    def test_get_course(self, client, loaded):
        response = client.get("/courses/comp2611")
        assert response.status_code == 200

        course = response.json()
        assert course["course_code"] == "COMP2611"
        assert course["course_name"] == "Computer Organization"
        assert course["credits"] == "3"
        assert course["level"] == 2
        assert course["career_type"] == "UG"
        assert course["previous_course_codes"] == ["COMP 2610"]
        assert course["alternative_course_codes"] == ["COMP2611H", "COMP 9990"]

    def test_unknown_course(self, client, loaded):
        response = client.get("/courses/NOPE1234")
        assert response.status_code == 404
        assert "NOPE1234" in response.json()["detail"]

    def test_requirements(self, client, loaded):
        requirements = client.get("/courses/COMP2611/requirements").json()

        assert requirements["prerequisite"] == {
            "courses": ["COMP1021", "MATH1013"],
            "has_and": True,
            "has_or": False,
            "label": None,
            "raw": "COMP 1021 AND MATH 1013",
        }
        assert requirements["corequisite"]["courses"] == ["COMP2711"]
        assert requirements["exclusions"] == ["ELEC2300", "ELEC9999"]
        assert requirements["required_by"] == ["COMP3711"]
        assert requirements["corequisite_of"] == ["COMP2711", "COMP3111"]

    def test_statistics(self, client, loaded):
        stats = client.get("/statistics").json()
        assert stats["total_courses"] == 12
        assert stats["total_subjects"] == 3


class TestSearch:

    def test_prefix(self, client, loaded):
        result = client.get("/search", params={"query": "comp 26"}).json()

        assert result["count"] == 3
        assert [r["course_code"] for r in result["results"]] == [
            "COMP2611", "COMP2610", "COMP2611H",
        ]

    def test_limit(self, client, loaded):
        result = client.get("/search", params={"query": "COMP", "limit": 2}).json()
        assert result["count"] == 2

    @pytest.mark.parametrize("params", [
        {"query": "C"},
        {"query": "COMP", "limit": 0},
        {},
    ])
    def test_bad_parameters(self, client, loaded, params):
        assert client.get("/search", params=params).status_code == 422


class TestGraph:

    def test_default_graph(self, client, loaded):
        response = client.get("/graph/COMP2611")
        assert response.status_code == 200

        payload = response.json()
        assert len(payload["nodes"]) == 11
        assert len(payload["edges"]) == 10

        master = payload["nodes"][-1]
        assert master["id"] == "COMP2611"
        assert master["type"] == "course"
        assert master["data"]["isMaster"] is True
        assert master["position"] == {"x": -100, "y": -40}

        edges = {edge["id"]: edge for edge in payload["edges"]}
        coreq = edges["COMP2611->COMP2711:corequisite"]
        assert coreq["sourceHandle"] == "right"
        assert coreq["targetHandle"] == "left"
        assert coreq["data"] == {
            "relationType": "corequisite",
            "label": None,
            "bidirectional": True,
        }

    def test_depth_and_toggles(self, client, loaded):
        params = {
            "max_postreq_depth": 1,
            "show_exclusions": False,
        }
        payload = client.get("/graph/COMP2611", params=params).json()
        ids = {node["id"] for node in payload["nodes"]}

        assert "COMP3711" in ids
        assert "COMP4211" not in ids
        assert "ELEC2300" not in ids

    def test_unknown_course(self, client, loaded):
        assert client.get("/graph/NOPE1234").status_code == 404

    @pytest.mark.parametrize("param", ["max_prereq_depth", "max_postreq_depth"])
    def test_bad_depth(self, client, loaded, param):
        response = client.get("/graph/COMP2611", params={param: 0})
        assert response.status_code == 422
