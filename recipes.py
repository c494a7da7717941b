"""
Recipe candidates: an OpenAI chat model when one is configured, otherwise three
templated recipes built from the user's own ingredient list.
"""
import json
import logging
import re
from dataclasses import dataclass
from typing import List, Optional

from openai import OpenAI
from pydantic import TypeAdapter, ValidationError

import config
from schemas import Recipe

logger = logging.getLogger(__name__)

_recipe_list_adapter = TypeAdapter(List[Recipe])

_CODE_FENCE = re.compile(r"```json|```")
_BULLET = re.compile(r"^[-•*]\s*")
_NUMBERED_STEP = re.compile(r"^[0-9]+[.)]")
_HEADING = re.compile(r"^#+\s*")

FALLBACK_TEMPLATES = [
    {
        "prefix": "Quick",
        "default_subject": "Dish",
        "steps": ["Combine ingredients", "Cook on medium heat", "Garnish & serve"],
        "health_benefits": ["Balanced nutrition", "Easy to make"],
    },
    {
        "prefix": "Homestyle",
        "default_subject": "Recipe",
        "steps": ["Chop ingredients", "Sauté with spices", "Serve hot"],
        "health_benefits": ["Comfort food", "Nutritious"],
    },
    {
        "prefix": "Fresh",
        "default_subject": "Salad",
        "steps": ["Chop", "Toss with dressing", "Serve chilled"],
        "health_benefits": ["Light", "High in fibre"],
    },
]


# ============================================================
# PROMPTS
# ============================================================

def build_recipe_prompt(ingredients, cuisine, style, dish_type):
    return f"""
You are a professional chef. Create 3 creative {dish_type} recipes.
Cuisine: {cuisine}, Style: {style}.
Main ingredients: {ingredients}.
Return valid JSON only in this format:
[
  {{
    "title": "Recipe Name",
    "ingredients": ["ingredient1", "ingredient2"],
    "steps": ["Step 1", "Step 2"],
    "healthBenefits": ["Benefit 1", "Benefit 2"]
  }}
]
""".strip()


def build_text_recipe_prompt(ingredients, cuisine, style):
    return f"""
Create a {style.lower()} {cuisine.lower()} recipe using these ingredients: {ingredients}.
Please include:
1. A realistic recipe title
2. A list of ingredients (use bullet points)
3. Step-by-step cooking instructions (numbered)
Make it sound natural and easy to follow.
""".strip()


def build_image_prompt(title, cuisine, style):
    return f"{title}, {cuisine} cuisine, {style} presentation, professionally plated, natural lighting"


# ============================================================
# GENERATOR
# ============================================================

class OpenAIRecipeGenerator:
    """Thin wrapper around the OpenAI client used by RecipeSource."""

    def __init__(self, api_key, model=None, image_model=None, timeout=None):
        self.client = OpenAI(
            api_key=api_key,
            timeout=timeout or config.GENERATOR_TIMEOUT_SECONDS,
            max_retries=0,
        )
        self.model = model or config.OPENAI_MODEL
        self.image_model = image_model or config.OPENAI_IMAGE_MODEL

    def complete(self, prompt: str) -> str:
        response = self.client.chat.completions.create(
            model=self.model,
            messages=[{"role": "user", "content": prompt}],
            temperature=config.GENERATOR_TEMPERATURE,
            max_tokens=config.GENERATOR_MAX_TOKENS,
        )
        return response.choices[0].message.content or ""

    def generate_images(self, prompt: str, n: int) -> List[str]:
        response = self.client.images.generate(
            model=self.image_model,
            prompt=prompt,
            n=n,
            size=config.IMAGE_SIZE,
        )
        urls = []
        for image in response.data:
            if image.url:
                urls.append(image.url)
            elif image.b64_json:
                urls.append(f"data:image/png;base64,{image.b64_json}")
        return urls


# ============================================================
# PARSING
# ============================================================

@dataclass(frozen=True)
class RecipeParseResult:
    recipes: Optional[List[Recipe]] = None
    reason: Optional[str] = None

    @property
    def ok(self):
        return self.recipes is not None


def strip_code_fences(text: str) -> str:
    return _CODE_FENCE.sub("", text or "").strip()


def parse_recipes(text: str) -> RecipeParseResult:
    cleaned = strip_code_fences(text)
    if not cleaned:
        return RecipeParseResult(reason="empty_response")

    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError:
        return RecipeParseResult(reason="invalid_json")

    if not isinstance(data, list):
        return RecipeParseResult(reason="not_array")
    if not data:
        return RecipeParseResult(reason="empty_array")

    try:
        recipes = _recipe_list_adapter.validate_python(data)
    except ValidationError:
        return RecipeParseResult(reason="invalid_recipe")

    return RecipeParseResult(recipes=recipes)


def parse_recipe_text(text: str):
    """Split a free-text recipe into title, bullet ingredients and numbered steps."""
    lines = [line.strip() for line in (text or "").split("\n") if line.strip()]
    if not lines:
        raise ValueError("Generator returned an empty recipe")

    title = _HEADING.sub("", lines[0]).strip()
    ingredients = [
        _BULLET.sub("", line).strip()
        for line in lines
        if line.startswith(("•", "-", "* "))
    ]
    steps = [line for line in lines if _NUMBERED_STEP.match(line)]
    return title, ingredients, steps


# ============================================================
# FALLBACK
# ============================================================

def split_ingredients(ingredients: str) -> List[str]:
    return [item.strip() for item in (ingredients or "").split(",") if item.strip()]


def fallback_recipes(ingredients: str) -> List[Recipe]:
    base = split_ingredients(ingredients)
    subject = base[0] if base else None

    return [
        Recipe(
            title=f"{template['prefix']} {subject or template['default_subject']}",
            ingredients=list(base),
            steps=list(template["steps"]),
            health_benefits=list(template["health_benefits"]),
        )
        for template in FALLBACK_TEMPLATES
    ]


# ============================================================
# SOURCE
# ============================================================

class RecipeSource:
    def __init__(self, generator=None):
        self.generator = generator

    @property
    def has_generator(self):
        return self.generator is not None

    def get_recipes(self, ingredients, cuisine, style, dish_type) -> List[Recipe]:
        recipes = self._generate(ingredients, cuisine, style, dish_type)
        if recipes is None:
            return fallback_recipes(ingredients)
        return recipes

    def _generate(self, ingredients, cuisine, style, dish_type) -> Optional[List[Recipe]]:
        if self.generator is None:
            return None

        prompt = build_recipe_prompt(ingredients, cuisine, style, dish_type)
        try:
            text = self.generator.complete(prompt)
        except Exception as e:
            logger.warning(f"Recipe generation failed, falling back to template recipes: {e}")
            return None

        result = parse_recipes(text)
        if not result.ok:
            logger.warning(f"Generator response rejected ({result.reason}), falling back to template recipes")
            return None

        logger.info(f"Generator returned {len(result.recipes)} recipes")
        return result.recipes

    def generate_recipe_with_images(self, ingredients, cuisine, style):
        if self.generator is None:
            raise RuntimeError("No recipe generator configured")

        text = self.generator.complete(build_text_recipe_prompt(ingredients, cuisine, style))
        title, ingredient_lines, steps = parse_recipe_text(text)
        image_urls = self.generator.generate_images(
            build_image_prompt(title, cuisine, style), config.IMAGE_COUNT
        )
        return {
            "title": title,
            "ingredients": ingredient_lines,
            "steps": steps,
            "image_urls": image_urls,
        }


def build_recipe_source(api_key=None) -> RecipeSource:
    api_key = api_key if api_key is not None else config.OPENAI_API_KEY
    if not api_key:
        logger.warning("OPENAI_API_KEY not set, serving template recipes only")
        return RecipeSource()
    return RecipeSource(OpenAIRecipeGenerator(api_key))
