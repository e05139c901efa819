"""
Tests for the enrollments endpoints
"""

import pytest
from fastapi import status


class TestListEnrollments:
    """Tests for GET /enrollments"""

    def test_empty_store(self, client):
        response = client.get("/enrollments")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {
            "enrollments": [],
            "currentPage": 1,
            "perPage": 10,
            "totalItems": 0,
            "totalPages": 0,
        }

    def test_joined_names(self, client, make_user, make_course, make_enrollment):
        user = make_user(first_name="Ada", last_name="Lovelace")
        course = make_course(title="Analytical Engines")
        make_enrollment(user_id=user.id, course_id=course.id)

        [item] = client.get("/enrollments").json()["enrollments"]

        assert item["user_id"] == user.id
        assert item["course_id"] == course.id
        assert item["user_name"] == "Ada Lovelace"
        assert item["course_title"] == "Analytical Engines"
        assert isinstance(item["created_at"], int)
        assert isinstance(item["updated_at"], int)

    def test_filters(self, client, make_user, make_course, make_enrollment):
        ana = make_user(first_name="Ana")
        rui = make_user(first_name="Rui")
        go = make_course(title="Go")
        rust = make_course(title="Rust")
        make_enrollment(user_id=ana.id, course_id=go.id)
        make_enrollment(user_id=ana.id, course_id=rust.id)
        make_enrollment(user_id=rui.id, course_id=go.id)

        by_user = client.get(f"/enrollments?user_id={ana.id}").json()
        by_course = client.get(f"/enrollments?course_id={go.id}").json()
        both = client.get(f"/enrollments?user_id={rui.id}&course_id={go.id}").json()

        assert by_user["totalItems"] == 2
        assert {e["course_title"] for e in by_user["enrollments"]} == {"Go", "Rust"}
        assert by_course["totalItems"] == 2
        assert {e["user_id"] for e in by_course["enrollments"]} == {ana.id, rui.id}
        assert both["totalItems"] == 1
        assert both["enrollments"][0]["user_name"].startswith("Rui")

    @pytest.mark.parametrize("query", ["user_id=0", "course_id=0", "user_id=-4"])
    def test_non_positive_filters_are_ignored(self, client, make_enrollment, query):
        make_enrollment()
        make_enrollment()

        data = client.get(f"/enrollments?{query}").json()

        assert data["totalItems"] == 2

    def test_filter_without_matches(self, client, make_enrollment):
        make_enrollment()

        data = client.get("/enrollments?user_id=999").json()

        assert data["enrollments"] == []
        assert data["totalItems"] == 0
        assert data["totalPages"] == 0

    @pytest.mark.parametrize("query", ["user_id=abc", "course_id=1.5", "page=0", "limit=0"])
    def test_invalid_query(self, client, query):
        assert client.get(f"/enrollments?{query}").status_code == status.HTTP_400_BAD_REQUEST

    @pytest.mark.parametrize("query", [f"user_id={10 ** 20}", f"course_id={2 ** 63}"])
    def test_out_of_range_filter(self, client, make_enrollment, query):
        make_enrollment()

        response = client.get(f"/enrollments?{query}")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "errors" in response.json()

    def test_largest_id_filter_matches_nothing(self, client, make_enrollment):
        make_enrollment()

        response = client.get(f"/enrollments?user_id={2 ** 63 - 1}")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["totalItems"] == 0

    def test_ordered_by_creation(self, client, make_user, make_course, make_enrollment):
        first_course = make_course(title="Zeta")
        second_course = make_course(title="Alpha")
        user = make_user()
        make_enrollment(user_id=user.id, course_id=first_course.id)
        make_enrollment(user_id=user.id, course_id=second_course.id)

        data = client.get("/enrollments").json()

        assert [e["course_title"] for e in data["enrollments"]] == ["Zeta", "Alpha"]

    def test_paginates(self, client, make_enrollment):
        for _ in range(7):
            make_enrollment()

        data = client.get("/enrollments?page=2&limit=3").json()

        assert len(data["enrollments"]) == 3
        assert data["totalItems"] == 7
        assert data["totalPages"] == 3


class TestGetEnrollment:
    """Tests for GET /enrollments/{user_id}/{course_id}"""

    def test_get_enrollment(self, client, make_user, make_course, make_enrollment):
        user = make_user(first_name="Grace", last_name="Hopper")
        course = make_course(title="Compilers")
        make_enrollment(user_id=user.id, course_id=course.id)

        response = client.get(f"/enrollments/{user.id}/{course.id}")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()["enrollment"]
        assert data["user_name"] == "Grace Hopper"
        assert data["course_title"] == "Compilers"

    def test_not_found(self, client, make_user, make_course):
        user = make_user()
        course = make_course()

        response = client.get(f"/enrollments/{user.id}/{course.id}")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.content == b""

    def test_invalid_ids(self, client):
        assert client.get("/enrollments/abc/1").status_code == status.HTTP_400_BAD_REQUEST


class TestCreateEnrollment:
    """Tests for POST /enrollments"""

    def test_create_single(self, client, make_user, make_course):
        user = make_user()
        course = make_course()

        response = client.post("/enrollments", json={"user_id": user.id, "course_id": course.id})

        assert response.status_code == status.HTTP_201_CREATED
        body = response.json()
        assert body["success"] is True
        assert body["data"]["user_id"] == user.id
        assert body["data"]["course_id"] == course.id
        assert isinstance(body["data"]["created_at"], int)

        detail = client.get(f"/enrollments/{user.id}/{course.id}")
        assert detail.status_code == status.HTTP_200_OK

    def test_create_batch(self, client, make_user, make_course):
        user = make_user()
        courses = [make_course() for _ in range(3)]
        payload = [{"user_id": user.id, "course_id": course.id} for course in courses]

        response = client.post("/enrollments", json=payload)

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()["data"]
        assert data["total"] == 3
        assert [e["course_id"] for e in data["enrollments"]] == [c.id for c in courses]

    def test_duplicate_conflicts(self, client, make_enrollment):
        enrollment = make_enrollment()

        response = client.post(
            "/enrollments",
            json={"user_id": enrollment.user_id, "course_id": enrollment.course_id},
        )

        assert response.status_code == status.HTTP_409_CONFLICT
        assert client.get("/enrollments").json()["totalItems"] == 1

    @pytest.mark.parametrize("missing", ["user", "course"])
    def test_unknown_reference_conflicts(self, client, make_user, make_course, missing):
        user_id = 9999 if missing == "user" else make_user().id
        course_id = 9999 if missing == "course" else make_course().id

        response = client.post("/enrollments", json={"user_id": user_id, "course_id": course_id})

        assert response.status_code == status.HTTP_409_CONFLICT
        assert client.get("/enrollments").json()["totalItems"] == 0

    def test_batch_with_one_bad_reference_inserts_nothing(self, client, make_user, make_course):
        user = make_user()
        course = make_course()
        payload = [
            {"user_id": user.id, "course_id": course.id},
            {"user_id": user.id, "course_id": 9999},
        ]

        response = client.post("/enrollments", json=payload)

        assert response.status_code == status.HTTP_409_CONFLICT
        assert client.get("/enrollments").json()["totalItems"] == 0

    @pytest.mark.parametrize(
        "payload",
        [
            {"user_id": "1", "course_id": 1},
            {"user_id": 1, "course_id": 0},
            {"user_id": -1, "course_id": 1},
            {"user_id": 1.5, "course_id": 1},
            {"user_id": True, "course_id": 1},
            {"user_id": 1},
            [],
        ],
    )
    def test_invalid_payload(self, client, payload):
        assert client.post("/enrollments", json=payload).status_code == status.HTTP_400_BAD_REQUEST

    @pytest.mark.parametrize(
        "payload",
        [
            {"user_id": 10 ** 20, "course_id": 1},
            {"user_id": 1, "course_id": 2 ** 63},
            [{"user_id": 1, "course_id": 1}, {"user_id": 10 ** 20, "course_id": 1}],
        ],
    )
    def test_out_of_range_ids_rejected(self, client, payload):
        response = client.post("/enrollments", json=payload)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert client.get("/enrollments").json()["totalItems"] == 0

    def test_largest_id_reaches_the_store(self, client, make_course):
        course = make_course()

        response = client.post("/enrollments", json={"user_id": 2 ** 63 - 1, "course_id": course.id})

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_batch_size_bound(self, client):
        payload = [{"user_id": 1, "course_id": i} for i in range(1, 102)]

        response = client.post("/enrollments", json=payload)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
