"""Tests for the HTTP API."""

from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from recipe_manager.api.app import create_app
from tests.conftest import OTHER_USER, OWNER

HEADERS = {"X-User-Id": OWNER}


@pytest.fixture
def client(container) -> TestClient:
    return TestClient(create_app(container))


def _create_flour(client: TestClient) -> str:
    food = client.post(
        "/foods", json={"name": "Flour", "serving_size_g": 30}, headers=HEADERS
    ).json()
    client.put(
        f"/foods/{food['id']}/profile",
        json={"calories": 364, "protein_g": 10, "carbohydrates_g": 76, "fat_g": 1},
        headers=HEADERS,
    )
    return food["id"]


def test_health(client: TestClient) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_bread_through_the_api(client: TestClient) -> None:
    flour_id = _create_flour(client)
    recipe = client.post(
        "/recipes", json={"name": "Bread", "servings": 4}, headers=HEADERS
    ).json()

    added = client.post(
        f"/recipes/{recipe['id']}/ingredients",
        json={"food_id": flour_id, "quantity": 500, "unit": "g"},
        headers=HEADERS,
    )
    detail = client.get(f"/recipes/{recipe['id']}")

    assert added.status_code == 201
    assert added.json()["calories_calculated"] == pytest.approx(1820.0)
    body = detail.json()
    assert body["recipe"]["calories_per_serving"] == pytest.approx(455.0)
    assert body["ingredients"][0]["food"]["name"] == "Flour"
    assert body["ingredients"][0]["ingredient"]["unit"] == "g"
    assert body["category"] is None


def test_mutation_requires_user_header(client: TestClient) -> None:
    response = client.post("/recipes", json={"name": "Bread", "servings": 4})

    assert response.status_code == 401


def test_domain_errors_map_to_status_codes(client: TestClient) -> None:
    recipe = client.post(
        "/recipes", json={"name": "Bread", "servings": 4}, headers=HEADERS
    ).json()

    forbidden = client.patch(
        f"/recipes/{recipe['id']}",
        json={"name": "Mine now"},
        headers={"X-User-Id": OTHER_USER},
    )
    invalid = client.post(
        "/recipes", json={"name": "Soup", "servings": 0}, headers=HEADERS
    )
    missing = client.get(f"/recipes/{uuid4()}")

    assert forbidden.status_code == 403
    assert forbidden.json()["error"] == "not_authorized"
    assert invalid.status_code == 400
    assert invalid.json()["error"] == "validation_failed"
    assert invalid.json()["details"]
    assert missing.status_code == 404


def test_unknown_unit_is_rejected(client: TestClient) -> None:
    flour_id = _create_flour(client)
    recipe = client.post(
        "/recipes", json={"name": "Bread", "servings": 4}, headers=HEADERS
    ).json()

    response = client.post(
        f"/recipes/{recipe['id']}/ingredients",
        json={"food_id": flour_id, "quantity": 1, "unit": "bushel"},
        headers=HEADERS,
    )

    assert response.status_code == 400


def test_complete_recipe_and_listings(client: TestClient) -> None:
    flour_id = _create_flour(client)

    created = client.post(
        "/recipes/complete",
        json={
            "name": "Flatbread",
            "servings": 2,
            "ingredients": [{"food_id": flour_id, "quantity": 200, "unit": "g"}],
            "instructions": [{"description": "Knead"}, {"description": "Bake"}],
        },
        headers=HEADERS,
    )
    mine = client.get("/recipes/mine", headers=HEADERS)
    search = client.get("/recipes", params={"search": "flat", "limit": 5})
    grouped = client.get(
        f"/recipes/{created.json()['recipe']['id']}/ingredients",
        params={"grouped": True},
    )

    assert created.status_code == 201
    assert [step["step_number"] for step in created.json()["instructions"]] == [1, 2]
    assert mine.json()["pagination"]["total_items"] == 1
    assert search.json()["pagination"]["items_per_page"] == 5
    assert list(grouped.json()["groups"]) == ["Main Ingredients"]


def test_delete_recipe(client: TestClient) -> None:
    recipe = client.post(
        "/recipes", json={"name": "Bread", "servings": 4}, headers=HEADERS
    ).json()

    deleted = client.delete(f"/recipes/{recipe['id']}", headers=HEADERS)

    assert deleted.status_code == 204
    assert client.get(f"/recipes/{recipe['id']}").status_code == 404


def test_category_endpoints(client: TestClient) -> None:
    desserts = client.post(
        "/categories", json={"name": "Desserts"}, headers=HEADERS
    ).json()
    gateaux = client.post(
        "/categories",
        json={"name": "Gateaux", "parent_id": desserts["id"]},
        headers=HEADERS,
    ).json()

    renamed = client.patch(
        f"/categories/{desserts['id']}", json={"slug": "sweets"}, headers=HEADERS
    )
    child = client.get(f"/categories/{gateaux['id']}")
    breadcrumb = client.get(f"/categories/{gateaux['id']}/breadcrumb")
    tree = client.get("/categories/tree")
    blocked = client.delete(f"/categories/{desserts['id']}", headers=HEADERS)

    assert renamed.json()["path"] == "/sweets"
    assert child.json()["category"]["path"] == "/sweets/gateaux"
    assert [entry["slug"] for entry in breadcrumb.json()["breadcrumb"]] == [
        "sweets",
        "gateaux",
    ]
    assert tree.json()["tree"][0]["children"][0]["category"]["name"] == "Gateaux"
    assert blocked.status_code == 409
    assert blocked.json()["error"] == "has_children"


def test_category_cycle_is_unprocessable(client: TestClient) -> None:
    root = client.post("/categories", json={"name": "Root"}, headers=HEADERS).json()
    child = client.post(
        "/categories", json={"name": "Child", "parent_id": root["id"]}, headers=HEADERS
    ).json()

    response = client.patch(
        f"/categories/{root['id']}", json={"parent_id": child["id"]}, headers=HEADERS
    )

    assert response.status_code == 422
    assert response.json()["error"] == "circular_reference"


def test_instruction_reorder_and_summary(client: TestClient) -> None:
    recipe = client.post(
        "/recipes", json={"name": "Bread", "servings": 4}, headers=HEADERS
    ).json()
    url = f"/recipes/{recipe['id']}/instructions"
    mix = client.post(
        url,
        json={"description": "Mix", "duration_minutes": 5, "equipment": ["bowl"]},
        headers=HEADERS,
    ).json()
    bake = client.post(
        url, json={"description": "Bake", "duration_minutes": 30}, headers=HEADERS
    ).json()

    reordered = client.put(
        f"{url}/reorder",
        json={
            "steps": [
                {"id": mix["id"], "step_number": 2},
                {"id": bake["id"], "step_number": 1},
            ]
        },
        headers=HEADERS,
    )
    summary = client.get(f"{url}/summary")

    assert reordered.status_code == 200
    assert [step["description"] for step in reordered.json()["instructions"]] == [
        "Bake",
        "Mix",
    ]
    assert summary.json() == {"total_duration_minutes": 35.0, "equipment": ["bowl"]}


def test_complete_recipe_with_colliding_steps_is_rejected(client: TestClient) -> None:
    response = client.post(
        "/recipes/complete",
        json={
            "name": "Twice",
            "servings": 2,
            "instructions": [
                {"description": "Mix", "step_number": 1},
                {"description": "Rest", "step_number": 1},
            ],
        },
        headers=HEADERS,
    )

    assert response.status_code == 400
    assert client.get("/recipes/mine", headers=HEADERS).json()["items"] == []
