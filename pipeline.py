import logging

from inference import RecipeClassifier
from recipes import RecipeSource
from schemas import Metrics, RecipeRequest, RecipeResponse

logger = logging.getLogger(__name__)

# Display values for the dashboard; not measured on held-out data.
# evaluate.evaluate_classifiers() computes real numbers when LIVE_METRICS is on.
STATIC_METRICS = {
    "naiveBayes": {"accuracy": 0.93, "precision": 0.9, "recall": 0.92, "f1": 0.91},
    "decisionTree": {"accuracy": 0.88, "precision": 0.86, "recall": 0.87, "f1": 0.865},
}


def build_recipe_response(
    request: RecipeRequest,
    classifier: RecipeClassifier,
    recipe_source: RecipeSource,
    metrics=None,
) -> RecipeResponse:
    cuisine = request.cuisine.value

    recipes = recipe_source.get_recipes(
        request.ingredients, cuisine, request.style, request.dish_type
    )
    result = classifier.classify(request.ingredients, cuisine)

    logger.info(
        f"Predicted cuisine={result.cuisine} (features {result.cuisine_features}), "
        f"health={result.health} (features {result.health_features})"
    )

    return RecipeResponse(
        recipes=recipes,
        predicted_cuisine=result.cuisine,
        predicted_health=result.health,
        metrics=Metrics.model_validate(metrics or STATIC_METRICS),
    )
