"""
HTTP tests for /meals: status codes, response shapes and auth handling.
"""

import uuid

from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from app.config import settings
from domain.enums import AttendanceStatus, UserRole
from domain.models import Meal, MealAttendance, MealFeedback
from repositories import MealRepository
from test_fixtures import (
    auth_headers,
    client,
    db_engine,
    expired_headers,
    make_payload,
    session_factory,
)


def test_health_check(client: TestClient):
    r = client.get("/health-check")
    assert r.status_code == 200
    assert r.json() == {"status": "ok", "service": settings.app_name}


def test_create_meal_example(client: TestClient):
    r = client.post("/meals", json=make_payload(), headers=auth_headers())

    assert r.status_code == 201
    body = r.json()
    assert body["message"] == "Meal created successfully"
    meal = body["meal"]
    assert meal["title"] == "Idli"
    assert meal["type"] == "BREAKFAST"
    assert meal["date"] == "2024-05-01"
    assert meal["imgURL"] == settings.default_meal_image_url
    assert len(meal["ingredients"]) == 1
    ingredient = meal["ingredients"][0]
    assert ingredient["itemName"] == "Idli"
    assert ingredient["gramsPerPax"] == 150
    assert ingredient["mealId"] == meal["id"]


def test_create_meal_twice_conflicts(client: TestClient, session_factory):
    first = client.post("/meals", json=make_payload(), headers=auth_headers())
    second = client.post("/meals", json=make_payload(), headers=auth_headers())

    assert first.status_code == 201
    assert second.status_code == 409
    assert "already exists" in second.json()["error"]

    with session_factory() as db:
        assert db.query(Meal).count() == 1


def test_empty_ingredients(client: TestClient):
    r = client.post("/meals", json=make_payload(ingredients=[]), headers=auth_headers())
    assert r.status_code == 400
    assert r.json() == {"error": "At least one ingredient is required"}


def test_invalid_type(client: TestClient):
    r = client.post("/meals", json=make_payload(type="BRUNCH"), headers=auth_headers())
    assert r.status_code == 400
    assert r.json()["error"] == "Invalid meal type. Must be BREAKFAST, LUNCH, or DINNER"


def test_unknown_field_details(client: TestClient):
    r = client.post("/meals", json=make_payload(servings=200), headers=auth_headers())
    assert r.status_code == 400
    body = r.json()
    assert body["error"] == "Invalid meal payload"
    assert body["details"]["errors"][0]["loc"] == ["servings"]


def test_create_meal_unauthenticated(client: TestClient, session_factory):
    r = client.post("/meals", json=make_payload())
    assert r.status_code == 401
    assert r.json() == {"error": "Unauthorized: Not authenticated"}

    with session_factory() as db:
        assert db.query(Meal).count() == 0


def test_create_meal_student_forbidden(client: TestClient):
    r = client.post(
        "/meals", json=make_payload(), headers=auth_headers(role=UserRole.STUDENT)
    )
    assert r.status_code == 403
    assert r.json() == {"error": "Forbidden: Only admins can create meals"}


def test_create_meal_bad_tokens(client: TestClient):
    foreign = auth_headers(secret="some-other-secret")

    for headers in (expired_headers(), foreign, {"Authorization": "Bearer not.a.token"}):
        r = client.post("/meals", json=make_payload(), headers=headers)
        assert r.status_code == 401


def test_malformed_json_anonymous_is_401(client: TestClient):
    r = client.post(
        "/meals", content=b"{not json", headers={"Content-Type": "application/json"}
    )
    assert r.status_code == 401


def test_malformed_json_admin_is_400(client: TestClient):
    headers = {**auth_headers(), "Content-Type": "application/json"}
    r = client.post("/meals", content=b"{not json", headers=headers)
    assert r.status_code == 400
    assert r.json() == {"error": "Missing required fields: title, type, date"}


def test_create_meal_store_failure(client: TestClient, monkeypatch):
    def broken_create(self, **kwargs):
        raise OperationalError("INSERT INTO meal", {}, Exception("password authentication failed"))

    monkeypatch.setattr(MealRepository, "create_with_ingredients", broken_create)

    r = client.post("/meals", json=make_payload(), headers=auth_headers())
    assert r.status_code == 500
    assert r.json() == {"error": "Internal server error"}


def test_list_meals_round_trip(client: TestClient, session_factory):
    client.post("/meals", json=make_payload(), headers=auth_headers())
    dinner = make_payload(
        title="Chole Bhature",
        type="DINNER",
        date="2024-05-03",
        imgURL="https://cdn.example/chole.jpg",
        ingredients=[
            {"itemName": "Chickpeas", "gramsPerPax": "110"},
            {"itemName": "Maida", "gramsPerPax": 90},
        ],
    )
    created = client.post("/meals", json=dinner, headers=auth_headers()).json()["meal"]

    with session_factory() as db:
        db.add(MealAttendance(meal_id=uuid.UUID(created["id"]), user_id="student-42", status=AttendanceStatus.ATTENDING))
        db.add(MealFeedback(meal_id=uuid.UUID(created["id"]), user_id="student-42", rating=5, comment="Crispy bhature"))
        db.commit()

    r = client.get("/meals", headers=auth_headers())

    assert r.status_code == 200
    meals = r.json()["meals"]
    assert [m["date"] for m in meals] == ["2024-05-03", "2024-05-01"]
    listed = meals[0]
    assert listed["id"] == created["id"]
    assert listed["title"] == "Chole Bhature"
    assert listed["type"] == "DINNER"
    assert listed["imgURL"] == "https://cdn.example/chole.jpg"
    assert sorted((i["itemName"], i["gramsPerPax"]) for i in listed["ingredients"]) == [
        ("Chickpeas", 110),
        ("Maida", 90),
    ]
    assert listed["attendance"][0]["userId"] == "student-42"
    assert listed["attendance"][0]["status"] == "ATTENDING"
    assert listed["feedback"][0]["rating"] == 5
    assert listed["feedback"][0]["comment"] == "Crispy bhature"
    assert meals[1]["attendance"] == []


def test_list_meals_requires_admin(client: TestClient):
    assert client.get("/meals").status_code == 401
    r = client.get("/meals", headers=auth_headers(role=UserRole.STUDENT))
    assert r.status_code == 403
    assert r.json() == {"error": "Forbidden: Only admins can view meals"}


def test_token_cookie_accepted(client: TestClient):
    token = auth_headers()["Authorization"].split(" ", 1)[1]
    r = client.get("/meals", headers={"Cookie": f"messplanner_token={token}"})
    assert r.status_code == 200
    assert r.json() == {"meals": []}


def test_request_id_header(client: TestClient):
    r = client.get("/health-check")
    assert r.headers["X-Request-ID"]
    assert "X-Process-Time" in r.headers


def test_oversized_grams_is_400(client: TestClient, session_factory):
    payload = make_payload(ingredients=[{"itemName": "Idli", "gramsPerPax": "99999999999999999999"}])

    r = client.post("/meals", json=payload, headers=auth_headers())

    assert r.status_code == 400
    assert r.json() == {"error": "gramsPerPax must be at most 2147483647"}
    with session_factory() as db:
        assert db.query(Meal).count() == 0
