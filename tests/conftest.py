import json

import pytest

from inference import RecipeClassifier
from train_classifiers import train_models


class FakeGenerator:
    """Stands in for OpenAIRecipeGenerator; records prompts."""

    def __init__(self, text="", images=None, error=None):
        self.text = text
        self.images = images or []
        self.error = error
        self.prompts = []

    def complete(self, prompt):
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.text

    def generate_images(self, prompt, n):
        self.prompts.append(prompt)
        return self.images[:n]


GENERATED_RECIPES = [
    {
        "title": "Chicken Tikka",
        "ingredients": ["chicken", "yogurt", "garam masala"],
        "steps": ["Marinate chicken", "Grill", "Serve"],
        "healthBenefits": ["High protein"],
    },
    {
        "title": "Spinach Dal",
        "ingredients": ["lentils", "spinach"],
        "steps": ["Boil lentils", "Add spinach"],
        "healthBenefits": ["High fiber", "Iron rich"],
    },
]


@pytest.fixture(scope="session")
def models():
    return train_models()


@pytest.fixture(scope="session")
def classifier(models):
    return RecipeClassifier(models)


@pytest.fixture
def fenced_recipes():
    return "```json\n" + json.dumps(GENERATED_RECIPES) + "\n```"


@pytest.fixture
def make_generator():
    return FakeGenerator


@pytest.fixture
def generated_recipes():
    return [dict(recipe) for recipe in GENERATED_RECIPES]
