from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


# ============================================================
# REQUEST/RESPONSE MODELS
# ============================================================

class Cuisine(str, Enum):
    INDIAN = "Indian"
    ITALIAN = "Italian"
    CHINESE = "Chinese"
    MEXICAN = "Mexican"
    FRENCH = "French"


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Recipe(CamelModel):
    title: str = Field(..., description="Recipe name")
    ingredients: List[str] = Field(..., description="Ingredient lines, in order")
    steps: List[str] = Field(..., description="Cooking steps, in order")
    health_benefits: List[str] = Field(default_factory=list, description="Health benefit tags")


class RecipeRequest(CamelModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "ingredients": "chicken, turmeric, ginger, spinach",
                "cuisine": "Indian",
                "style": "Homemade",
                "dishType": "Main Course",
            }
        }
    )

    ingredients: str = Field(..., description="Comma-separated ingredients")
    cuisine: Cuisine = Field(..., description="Cuisine selected by the user")
    style: str = Field(..., description="Presentation style, e.g. Street Food")
    dish_type: str = Field(..., description="Dish type, e.g. Soup")

    @field_validator('ingredients', 'style', 'dish_type')
    @classmethod
    def validate_not_blank(cls, v):
        if not v.strip():
            raise ValueError("Field cannot be empty")
        return v.strip()


class ModelMetrics(CamelModel):
    accuracy: float
    precision: float
    recall: float
    f1: float


class Metrics(CamelModel):
    naive_bayes: ModelMetrics
    decision_tree: ModelMetrics


class RecipeResponse(CamelModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "recipes": [
                    {
                        "title": "Quick chicken",
                        "ingredients": ["chicken", "turmeric"],
                        "steps": ["Combine ingredients", "Cook on medium heat", "Garnish & serve"],
                        "healthBenefits": ["Balanced nutrition", "Easy to make"],
                    }
                ],
                "predictedCuisine": "Indian",
                "predictedHealth": "High Protein",
                "metrics": {
                    "naiveBayes": {"accuracy": 0.93, "precision": 0.9, "recall": 0.92, "f1": 0.91},
                    "decisionTree": {"accuracy": 0.88, "precision": 0.86, "recall": 0.87, "f1": 0.865},
                },
            }
        }
    )

    recipes: List[Recipe]
    predicted_cuisine: Cuisine
    predicted_health: str
    metrics: Metrics


class ImageRecipeRequest(CamelModel):
    ingredients: str = Field(..., description="Comma-separated ingredients")
    cuisine: Cuisine
    style: str

    @field_validator('ingredients', 'style')
    @classmethod
    def validate_not_blank(cls, v):
        if not v.strip():
            raise ValueError("Field cannot be empty")
        return v.strip()


class ImageRecipeResponse(CamelModel):
    title: str
    ingredients: List[str]
    steps: List[str]
    image_urls: List[str]


class HealthResponse(BaseModel):
    status: str = Field(..., description="Service status")
