import logging
import threading
from dataclasses import dataclass
from typing import List, Optional

from features import (
    FIBER_SLOT,
    PROTEIN_SLOT,
    encode_cuisine_features,
    encode_health_features,
    has_evidence,
)
from train_classifiers import TrainedModels, train_models

logger = logging.getLogger(__name__)

DEFAULT_HEALTH_LABEL = "Balanced Nutrition"


def fallback_health_label(features: List[int]) -> str:
    """Deterministic health label used whenever the tree cannot answer."""
    if features[PROTEIN_SLOT]:
        return "High Protein"
    if features[FIBER_SLOT]:
        return "High Fiber"
    return DEFAULT_HEALTH_LABEL


@dataclass(frozen=True)
class Classification:
    cuisine: str
    health: str
    cuisine_features: List[int]
    health_features: List[int]


class RecipeClassifier:
    def __init__(self, models: TrainedModels):
        self.models = models

    @property
    def cuisines(self):
        return list(self.models.cuisine_model.classes_)

    def predict_cuisine(self, text: str, selected_cuisine: str) -> str:
        features = encode_cuisine_features(text)
        return self.predict_cuisine_from_features(features, selected_cuisine)

    def predict_cuisine_from_features(self, features: List[int], selected_cuisine: str) -> str:
        # No keyword matched: the model has no evidence, trust the user's pick
        if not has_evidence(features):
            return selected_cuisine
        return self.models.cuisine_model.predict([features])[0]

    def predict_health(self, text: str) -> str:
        return self.predict_health_from_features(encode_health_features(text))

    def predict_health_from_features(self, features: List[int]) -> str:
        label = self._tree_label(features)
        if label is None:
            return fallback_health_label(features)
        return label

    def _tree_label(self, features: List[int]) -> Optional[str]:
        tree = self.models.health_tree
        if tree is None:
            return None
        try:
            prediction = tree.predict([features])
        except Exception as e:
            logger.warning(f"Decision Tree prediction failed, using fallback rule: {e}")
            return None
        if len(prediction) == 0 or not prediction[0]:
            return None
        return str(prediction[0])

    def classify(self, text: str, selected_cuisine: str) -> Classification:
        cuisine_features = encode_cuisine_features(text)
        health_features = encode_health_features(text)
        return Classification(
            cuisine=self.predict_cuisine_from_features(cuisine_features, selected_cuisine),
            health=self.predict_health_from_features(health_features),
            cuisine_features=cuisine_features,
            health_features=health_features,
        )


_classifier = None
_classifier_lock = threading.Lock()


def load_classifier() -> RecipeClassifier:
    """Train both models once per process and return the shared classifier."""
    global _classifier
    if _classifier is None:
        with _classifier_lock:
            if _classifier is None:
                logger.info("Training classifiers...")
                _classifier = RecipeClassifier(train_models())
    return _classifier


def main():
    import argparse

    parser = argparse.ArgumentParser(description="Predict cuisine and health labels for ingredients")
    parser.add_argument("ingredients", help="Comma-separated ingredient text")
    parser.add_argument("--cuisine", default="Indian", help="Cuisine to fall back to when no keyword matches")
    args = parser.parse_args()

    classifier = load_classifier()
    result = classifier.classify(args.ingredients, args.cuisine)

    print("\n" + "="*60)
    print(f"Ingredients: {args.ingredients}")
    print("="*60)
    print(f"Cuisine features: {result.cuisine_features}")
    print(f"Health features:  {result.health_features}")
    print(f"Predicted cuisine: {result.cuisine}")
    print(f"Predicted health:  {result.health}")


if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO)
    main()
