"""Tests for the HTTP API."""

import pytest
from fastapi.testclient import TestClient

from pantry_tracker.api.app import create_app
from pantry_tracker.containers import AppContainer
from tests.payloads import cereal_payload, milk_payload, raw


@pytest.fixture
def client(container: AppContainer) -> TestClient:
    return TestClient(create_app(container))


def test_health(client: TestClient) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_convert_quantity(client: TestClient) -> None:
    response = client.post(
        "/quantities/convert",
        json={"quantity": raw(1, "pound"), "target": "milligram"},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["quantity"] == raw(453592.0, "milligram")
    assert data["display"] == "453592 mg"


def test_convert_across_families_is_rejected(client: TestClient) -> None:
    response = client.post(
        "/quantities/convert",
        json={"quantity": raw(1, "gram"), "target": "milliliter"},
    )

    assert response.status_code == 422
    assert response.json() == {"detail": "Cannot convert gram to milliliter"}


def test_convert_custom_unit_is_rejected(client: TestClient) -> None:
    response = client.post(
        "/quantities/convert",
        json={"quantity": raw(2, {"custom": "bar"}), "target": "gram"},
    )

    assert response.status_code == 422
    assert "custom:bar" in response.json()["detail"]


def test_parse_quantity(client: TestClient) -> None:
    response = client.post("/quantities/parse", json={"text": "1/2 cup"})

    assert response.status_code == 200
    assert response.json() == {
        "quantity": {
            "magnitude": {"kind": "rational", "num": 1.0, "den": 2.0},
            "unit": "cup",
        },
        "display": "1/2 c",
    }


def test_parse_quantity_with_digits(client: TestClient) -> None:
    response = client.post(
        "/quantities/parse", json={"text": "0.125 L", "max_digits": 3}
    )

    assert response.json()["display"] == "0.125 L"


def test_parse_unparsable_text(client: TestClient) -> None:
    response = client.post("/quantities/parse", json={"text": "a pinch"})

    assert response.status_code == 200
    assert response.json() == {"quantity": None, "display": None}


def test_scale_by_weight(client: TestClient) -> None:
    response = client.post(
        "/nutrients/scale",
        json={"food": cereal_payload(), "amount": raw(60, "gram")},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["scale"] == pytest.approx(2)
    assert data["nutrients"]["energy"] == raw(240.0, "calorie")
    assert data["macros"] == [
        {"name": "Carbs", "calories": 176.0},
        {"name": "Fat", "calories": 36.0},
        {"name": "Protein", "calories": 32.0},
    ]


def test_scale_by_servings(client: TestClient) -> None:
    response = client.post(
        "/nutrients/scale",
        json={"food": cereal_payload(), "amount": raw(1.5, "serving")},
    )

    assert response.json()["nutrients"]["energy"] == raw(180.0, "calorie")


def test_scale_rejects_wrong_family(client: TestClient) -> None:
    response = client.post(
        "/nutrients/scale",
        json={"food": cereal_payload(), "amount": raw(1, "cup")},
    )

    assert response.status_code == 422


def test_scale_rejects_empty_container(client: TestClient) -> None:
    food = cereal_payload()
    food["size"] = {"total_amount": raw(0, "gram"), "num_servings": 10}

    response = client.post(
        "/nutrients/scale", json={"food": food, "amount": raw(30, "gram")}
    )

    assert response.status_code == 422
    assert response.json() == {"detail": "Amount must be non-zero"}


def test_nutrient_table(client: TestClient) -> None:
    response = client.post(
        "/nutrients/table",
        json={"nutrients": cereal_payload()["nutrients"], "scale": 2},
    )

    assert response.status_code == 200
    data = response.json()
    rows = {row["nutrient"]: row for row in data["rows"]}
    assert rows["energy"] == {
        "nutrient": "energy",
        "label": "Calories",
        "amount": "240",
        "unit": "",
        "indented": False,
    }
    assert rows["sodium"]["amount"] == "280"
    assert rows["iron"]["amount"] == "0"
    assert data["macros"][0] == {"name": "Carbs", "calories": 176.0}


def test_logbook_nutrients(client: TestClient) -> None:
    payload = {
        "day": "2024-09-15",
        "entries": [
            {
                "food": cereal_payload(),
                "amount": raw(60, "gram"),
                "meal_type": "breakfast",
            },
            {
                "food": milk_payload(),
                "amount": raw(240, "milliliter"),
                "meal_type": "breakfast",
            },
            {"food": cereal_payload(), "amount": raw(1.5, "serving")},
        ],
        "target_nutrients": {
            "energy": raw(2000, "calorie"),
            "protein": raw(50, "gram"),
        },
    }

    response = client.post("/logbook/nutrients", json=payload)

    assert response.status_code == 200
    data = response.json()
    assert data["day"] == "2024-09-15"
    assert data["meal_type"] is None
    assert data["nutrients"]["energy"]["magnitude"]["value"] == pytest.approx(570)
    assert data["nutrients"]["calcium"]["magnitude"]["value"] == pytest.approx(300)
    progress = {item["nutrient"]: item for item in data["progress"]}
    assert progress["energy"]["ratio"] == pytest.approx(0.285)
    assert progress["protein"]["unit"] == "g"

    breakfast = client.post(
        "/logbook/nutrients", json={**payload, "meal_type": "breakfast"}
    ).json()
    assert breakfast["meal_type"] == "breakfast"
    assert breakfast["nutrients"]["energy"]["magnitude"]["value"] == pytest.approx(390)


def test_food_costs(client: TestClient) -> None:
    response = client.post("/foods/costs", json={"food": cereal_payload()})

    assert response.status_code == 200
    data = response.json()
    assert data["cheapest"] == "Corner Market"
    corner, bulk = data["stores"]
    assert corner["per_container"] == pytest.approx(5.0)
    assert corner["per_100_grams"] == pytest.approx(5 / 300 * 100)
    assert corner["per_100_milliliters"] is None
    assert bulk["available"] is False


def test_food_costs_without_available_store(client: TestClient) -> None:
    food = milk_payload()
    food["store_entries"][0]["available"] = False

    response = client.post("/foods/costs", json={"food": food})

    assert response.json()["cheapest"] is None


def test_invalid_payload_is_rejected(client: TestClient) -> None:
    response = client.post(
        "/quantities/convert",
        json={
            "quantity": {
                "magnitude": {"kind": "rational", "num": 1, "den": 0},
                "unit": "cup",
            },
            "target": "milliliter",
        },
    )

    assert response.status_code == 422


def test_parse_long_unit_name(client: TestClient) -> None:
    response = client.post("/quantities/parse", json={"text": "60 grams"})

    assert response.json() == {"quantity": raw(60.0, "gram"), "display": "60 g"}


def test_convert_rejects_overflowing_json_number(client: TestClient) -> None:
    body = (
        '{"quantity": {"magnitude": {"kind": "raw", "value": 1e400},'
        ' "unit": "gram"}, "target": "milligram"}'
    )

    response = client.post(
        "/quantities/convert",
        content=body,
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 422


def test_convert_rejects_result_overflow(client: TestClient) -> None:
    response = client.post(
        "/quantities/convert",
        json={"quantity": raw(1e308, "pound"), "target": "microgram"},
    )

    assert response.status_code == 422
    assert "microgram" in response.json()["detail"]


def test_recipe_nutrients(client: TestClient) -> None:
    recipe = {
        "name": "Overnight Oats",
        "num_servings": 2,
        "metadata": {"prep_time": 5, "other_time": 480},
        "ingredients": [
            {"name": "Oat Cereal", "amount": raw(90, "gram"), "food": cereal_payload()},
            {"name": "Whole Milk", "amount": raw(1, "cup"), "food": milk_payload()},
            {"name": "Salt", "amount": raw(1, {"custom": "pinch"})},
        ],
    }

    response = client.post("/recipes/nutrients", json={"recipe": recipe})

    assert response.status_code == 200
    data = response.json()
    assert data["nutrients"]["energy"]["magnitude"]["value"] == pytest.approx(255)
    assert data["nutrients"]["calcium"]["magnitude"]["value"] == pytest.approx(150)
    assert [item["scale"] for item in data["ingredients"]] == pytest.approx(
        [3, 1, 0]
    )
    assert data["total_time"] == 485


def test_recipe_needs_servings(client: TestClient) -> None:
    response = client.post(
        "/recipes/nutrients", json={"recipe": {"name": "Toast", "num_servings": 0}}
    )

    assert response.status_code == 422


def test_consume_single_amount(client: TestClient) -> None:
    carton = {
        "kind": "single",
        "total": raw(1920, "milliliter"),
        "remaining": raw(1920, "milliliter"),
    }

    response = client.post(
        "/inventory/consume", json={"amount": carton, "used": raw(1, "cup")}
    )

    assert response.status_code == 200
    data = response.json()
    assert data["amount"]["remaining"] == raw(1680.0, "milliliter")
    assert data["fraction_remaining"] == pytest.approx(0.875)
    assert data["is_empty"] is False


def test_consume_collection_amount(client: TestClient) -> None:
    flat = {"kind": "collection", "total": 12, "remaining": 1}

    response = client.post("/inventory/consume", json={"amount": flat, "used": 1})

    assert response.json() == {
        "amount": {"kind": "collection", "total": 12, "remaining": 0},
        "fraction_remaining": 0.0,
        "is_empty": True,
    }


@pytest.mark.parametrize(
    "amount, used",
    [
        ({"kind": "collection", "total": 12, "remaining": 1}, 2),
        ({"kind": "collection", "total": 12, "remaining": 5}, raw(1, "cup")),
        (
            {
                "kind": "single",
                "total": raw(1, "liter"),
                "remaining": raw(1, "liter"),
            },
            3,
        ),
        (
            {
                "kind": "single",
                "total": raw(1, "liter"),
                "remaining": raw(1, "liter"),
            },
            raw(5, "gram"),
        ),
    ],
)
def test_consume_rejects_bad_usage(
    client: TestClient, amount: dict[str, object], used: object
) -> None:
    response = client.post("/inventory/consume", json={"amount": amount, "used": used})

    assert response.status_code == 422
