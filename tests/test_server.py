import pytest
from fastapi.testclient import TestClient

import config
import server
from recipes import RecipeSource


@pytest.fixture
def client(monkeypatch):
    monkeypatch.setattr(config, "OPENAI_API_KEY", None)
    monkeypatch.setattr(config, "LIVE_METRICS", False)
    with TestClient(server.app) as test_client:
        yield test_client


@pytest.fixture
def use_recipe_source():
    def override(source):
        server.app.dependency_overrides[server.get_recipe_source] = lambda: source

    yield override
    server.app.dependency_overrides.pop(server.get_recipe_source, None)


def recipe_payload(**overrides):
    payload = {
        "ingredients": "tomato, onion, garlic",
        "cuisine": "Italian",
        "style": "Homemade",
        "dishType": "Main Course",
    }
    payload.update(overrides)
    return payload


def test_root(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["endpoints"]["recipe"] == "/recipe"


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


def test_cuisines(client):
    response = client.get("/cuisines")
    assert response.json() == {"cuisines": ["Indian", "Italian", "Chinese", "Mexican", "French"]}


def test_recipe_with_fallback_recipes(client):
    response = client.post("/recipe", json=recipe_payload())

    assert response.status_code == 200
    data = response.json()
    assert set(data) == {"recipes", "predictedCuisine", "predictedHealth", "metrics"}
    assert [r["title"] for r in data["recipes"]] == ["Quick tomato", "Homestyle tomato", "Fresh tomato"]
    assert data["recipes"][0]["healthBenefits"] == ["Balanced nutrition", "Easy to make"]
    assert data["predictedCuisine"] == "Italian"
    assert data["metrics"]["naiveBayes"] == {"accuracy": 0.93, "precision": 0.9, "recall": 0.92, "f1": 0.91}
    assert data["metrics"]["decisionTree"]["f1"] == 0.865


def test_recipe_predicts_cuisine_from_keywords(client):
    response = client.post("/recipe", json=recipe_payload(ingredients="turmeric and ginger curry", cuisine="French"))
    assert response.json()["predictedCuisine"] == "Indian"


def test_recipe_protein_and_fiber_is_high_protein(client):
    response = client.post("/recipe", json=recipe_payload(ingredients="chicken, spinach"))

    assert response.status_code == 200
    assert response.json()["predictedHealth"] == "High Protein"


@pytest.mark.parametrize("cuisine", ["Indian", "Chinese", "Mexican"])
def test_recipe_keeps_selected_cuisine_without_keywords(client, cuisine):
    response = client.post("/recipe", json=recipe_payload(ingredients="quinoa, kale", cuisine=cuisine))
    assert response.json()["predictedCuisine"] == cuisine


def test_recipe_uses_generator_output(client, use_recipe_source, make_generator, fenced_recipes, generated_recipes):
    use_recipe_source(RecipeSource(make_generator(text=fenced_recipes)))

    response = client.post("/recipe", json=recipe_payload(ingredients="chicken, lentils, spinach"))

    assert response.status_code == 200
    assert response.json()["recipes"] == generated_recipes


def test_recipe_survives_generator_failure(client, use_recipe_source, make_generator):
    use_recipe_source(RecipeSource(make_generator(error=RuntimeError("boom"))))

    response = client.post("/recipe", json=recipe_payload())

    assert response.status_code == 200
    assert len(response.json()["recipes"]) == 3


@pytest.mark.parametrize("field", ["ingredients", "cuisine", "style", "dishType"])
def test_recipe_requires_every_field(client, field):
    payload = recipe_payload()
    del payload[field]
    assert client.post("/recipe", json=payload).status_code == 422


def test_recipe_rejects_blank_ingredients(client):
    assert client.post("/recipe", json=recipe_payload(ingredients="   ")).status_code == 422


def test_recipe_rejects_unknown_cuisine(client):
    assert client.post("/recipe", json=recipe_payload(cuisine="Klingon")).status_code == 422


def test_unexpected_error_is_generic(client, use_recipe_source):
    class ExplodingSource(RecipeSource):
        def get_recipes(self, *args):
            raise KeyError("secret internal detail")

    use_recipe_source(ExplodingSource())
    response = client.post("/recipe", json=recipe_payload())

    assert response.status_code == 500
    assert response.json() == {"detail": "Recipe generation failed"}


def test_image_without_generator(client):
    response = client.post("/image", json={"ingredients": "paneer", "cuisine": "Indian", "style": "Homemade"})
    assert response.status_code == 503


def test_image_with_generator(client, use_recipe_source, make_generator):
    use_recipe_source(RecipeSource(make_generator(
        text="# Paneer Tikka\n- paneer\n1. Grill",
        images=["https://img/1.png"],
    )))

    response = client.post("/image", json={"ingredients": "paneer", "cuisine": "Indian", "style": "Homemade"})

    assert response.status_code == 200
    assert response.json() == {
        "title": "Paneer Tikka",
        "ingredients": ["paneer"],
        "steps": ["1. Grill"],
        "imageUrls": ["https://img/1.png"],
    }


def test_image_generator_failure(client, use_recipe_source, make_generator):
    use_recipe_source(RecipeSource(make_generator(error=RuntimeError("quota"))))

    response = client.post("/image", json={"ingredients": "paneer", "cuisine": "Indian", "style": "Homemade"})

    assert response.status_code == 500
    assert response.json()["detail"] == "Failed to generate recipe. Please try again later."


def test_live_metrics(monkeypatch):
    monkeypatch.setattr(config, "OPENAI_API_KEY", None)
    monkeypatch.setattr(config, "LIVE_METRICS", True)

    with TestClient(server.app) as test_client:
        data = test_client.post("/recipe", json=recipe_payload()).json()

    assert data["metrics"]["naiveBayes"]["accuracy"] == 1.0
