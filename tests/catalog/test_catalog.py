"""Tests for the course catalog."""

import pytest
from fastapi.testclient import TestClient
from pydantic import ValidationError

from learnhub.catalog import ALL, Catalog, format_price


class TestCatalog:
    """Tests for catalog lookup."""

    def test_find_course_by_id(self, catalog: Catalog) -> None:
        course = catalog.find_course_by_id(1)
        assert course is not None
        assert course.title == "Python Fundamentals"
        assert course.total_lessons == 4

    def test_find_unknown_course(self, catalog: Catalog) -> None:
        assert catalog.find_course_by_id(999) is None

    def test_find_lesson(self, catalog: Catalog) -> None:
        course = catalog.find_course_by_id(1)
        assert course.find_lesson(102).title == "Variables"
        assert course.find_lesson(1) is None

    def test_order_is_preserved(self, catalog: Catalog) -> None:
        assert [course.id for course in catalog.all_courses()] == [1, 2, 3]
        assert len(catalog) == 3

    def test_duplicate_ids_rejected(self) -> None:
        course = {
            "id": 1,
            "title": "A",
            "category": "Technology",
            "level": "Beginner",
            "instructor": "X",
            "duration": "1 hour",
            "price": 0,
        }
        with pytest.raises(ValueError, match="Duplicate"):
            Catalog([course, {**course, "title": "B"}])

    def test_invalid_course_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Catalog([{"id": 1, "title": "No price"}])

    def test_courses_are_immutable(self, catalog: Catalog) -> None:
        course = catalog.find_course_by_id(1)
        with pytest.raises(ValidationError):
            course.title = "Changed"

    def test_default_catalog(self) -> None:
        """Bundled catalog has six courses with lessons."""
        catalog = Catalog.default()
        assert len(catalog) == 6
        assert catalog.find_course_by_id(1).total_lessons == 5
        assert all(course.total_lessons > 0 for course in catalog)
        assert catalog.categories == ["Technology", "Languages", "Business", "Design"]
        assert catalog.levels == ["Beginner", "Intermediate", "Advanced"]


class TestSearch:
    """Tests for catalog browsing filters."""

    def test_no_filters_returns_everything(self, catalog: Catalog) -> None:
        assert len(catalog.search()) == 3

    def test_term_matches_title_case_insensitively(self, catalog: Catalog) -> None:
        assert [c.id for c in catalog.search("PYTHON")] == [1]

    def test_term_matches_description(self, catalog: Catalog) -> None:
        assert [c.id for c in catalog.search("phrases")] == [2]

    def test_category_filter(self, catalog: Catalog) -> None:
        assert [c.id for c in catalog.search(category="Languages")] == [2]

    def test_level_filter(self, catalog: Catalog) -> None:
        assert [c.id for c in catalog.search(level="Advanced")] == [3]

    def test_filters_combine(self, catalog: Catalog) -> None:
        assert catalog.search("python", category="Languages") == []
        assert [c.id for c in catalog.search("", ALL, "Beginner")] == [1]

    def test_derived_filters(self, catalog: Catalog) -> None:
        assert catalog.categories == ["Design", "Languages", "Technology"]
        assert catalog.levels == ["Advanced", "Beginner", "Intermediate"]


class TestFormatPrice:
    """Tests for price formatting."""

    @pytest.mark.parametrize(
        ("amount", "expected"),
        [
            (1500000, "1.500.000 ₫"),
            (800000, "800.000 ₫"),
            (999, "999 ₫"),
            (0, "0 ₫"),
        ],
    )
    def test_vnd(self, amount: int, expected: str) -> None:
        assert format_price(amount) == expected

    def test_other_currency(self) -> None:
        assert format_price(1200, "USD") == "1.200 $"
        assert format_price(5, "GBP") == "5 GBP"


class TestCatalogEndpoints:
    """Tests for the catalog routes."""

    def test_list_courses(self, client: TestClient) -> None:
        response = client.get("/v1/courses")
        assert response.status_code == 200
        data = response.json()
        assert [c["id"] for c in data] == [1, 2, 3]
        assert data[0]["formatted_price"] == "500.000 ₫"
        assert data[0]["enrolled"] is False
        assert data[0]["progress"] == 0

    def test_search_courses(self, client: TestClient) -> None:
        response = client.get("/v1/courses", params={"q": "spanish"})
        assert [c["id"] for c in response.json()] == [2]

    def test_filters(self, client: TestClient) -> None:
        data = client.get("/v1/courses/filters").json()
        assert data["categories"] == ["Design", "Languages", "Technology"]

    def test_course_detail(self, client: TestClient) -> None:
        response = client.get("/v1/courses/1")
        assert response.status_code == 200
        assert len(response.json()["lessons"]) == 4

    def test_course_not_found(self, client: TestClient) -> None:
        response = client.get("/v1/courses/999")
        assert response.status_code == 404
        assert response.json()["message"] == "Course not found"

    def test_detail_reflects_enrollment(self, logged_in_client: TestClient) -> None:
        """Enrolled course shows progress for the logged in client."""
        logged_in_client.post(
            "/v1/checkout/1",
            json={"method": "bank_transfer", "email": "a@x.com"},
        )
        logged_in_client.post("/v1/courses/1/lessons/101/complete")

        data = logged_in_client.get("/v1/courses/1").json()
        assert data["enrolled"] is True
        assert data["progress"] == 25
        assert data["completed_lessons"] == [101]
