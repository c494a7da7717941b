import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

import numpy as np
from sklearn.tree import DecisionTreeClassifier

from config import TREE_RANDOM_SEED
from features import CUISINES

logger = logging.getLogger(__name__)

# ============================================================
# CONFIGURATION
# ============================================================

# One canonical one-hot example per cuisine, in lexicon slot order
CUISINE_TRAINING_X = [
    [1 if i == j else 0 for j in range(len(CUISINES))]
    for i in range(len(CUISINES))
]
CUISINE_TRAINING_Y = list(CUISINES)

# [protein, fat, fiber]
HEALTH_TRAINING_DATA = [
    ([1, 0, 0], "High Protein"),
    ([0, 1, 0], "Low Fat"),
    ([0, 0, 1], "High Fiber"),
    ([1, 1, 0], "Heart Healthy"),
    ([0, 1, 1], "Energy Booster"),
]
HEALTH_TRAINING_X = [list(features) for features, _ in HEALTH_TRAINING_DATA]
HEALTH_TRAINING_Y = [label for _, label in HEALTH_TRAINING_DATA]

PROBABILITY_FLOOR = 1e-9

TREE_MAX_DEPTH = 3
TREE_MIN_SAMPLES_LEAF = 1


class TrainingDataError(ValueError):
    """Training examples do not form a usable X/y pair."""


def validate_training_data(X: Sequence[Sequence[int]], y: Sequence[str]):
    if not X or not y:
        raise TrainingDataError("Training data is empty")
    if len(X) != len(y):
        raise TrainingDataError(
            f"Training data mismatch: {len(X)} feature rows for {len(y)} labels"
        )
    width = len(X[0])
    if any(len(row) != width for row in X):
        raise TrainingDataError("Training feature arrays not uniform")


# ============================================================
# NAIVE BAYES (cuisine)
# ============================================================

class CuisineNaiveBayes:
    """Categorical Naive Bayes over binary keyword-group features.

    Priors are class frequencies and each likelihood is the mean feature value
    of the class's examples. Zero probabilities are floored before taking logs
    so a missing feature costs a large penalty instead of -inf.
    """

    def __init__(self, floor: float = PROBABILITY_FLOOR):
        self.floor = floor
        self.classes_: List[str] = []
        self.class_log_prior_ = None
        self.feature_log_prob_ = None

    def fit(self, X, y):
        validate_training_data(X, y)

        X = np.asarray(X, dtype=float)
        # Classes keep first-seen order so ties go to the earliest label
        classes = list(dict.fromkeys(y))
        labels = np.asarray(y)

        priors = []
        likelihoods = []
        for label in classes:
            rows = X[labels == label]
            priors.append(len(rows) / len(X))
            likelihoods.append(rows.sum(axis=0) / len(rows))

        self.classes_ = classes
        self.class_log_prior_ = self._floored_log(np.asarray(priors))
        self.feature_log_prob_ = self._floored_log(np.vstack(likelihoods))
        return self

    def _floored_log(self, probabilities):
        return np.log(np.where(probabilities > 0, probabilities, self.floor))

    def joint_log_likelihood(self, X):
        if self.feature_log_prob_ is None:
            raise RuntimeError("CuisineNaiveBayes is not fitted")
        X = np.asarray(X, dtype=float)
        if X.ndim != 2 or X.shape[1] != self.feature_log_prob_.shape[1]:
            raise ValueError(
                f"Expected feature vectors of length {self.feature_log_prob_.shape[1]}"
            )
        return X @ self.feature_log_prob_.T + self.class_log_prior_

    def predict(self, X) -> List[str]:
        scores = self.joint_log_likelihood(X)
        # argmax returns the first maximum, i.e. the first-seen class on ties
        return [self.classes_[i] for i in scores.argmax(axis=1)]


def train_cuisine_classifier(X=None, y=None) -> CuisineNaiveBayes:
    X = CUISINE_TRAINING_X if X is None else X
    y = CUISINE_TRAINING_Y if y is None else y
    model = CuisineNaiveBayes().fit(X, y)
    logger.info(f"Naive Bayes trained on {len(y)} examples: {model.classes_}")
    return model


# ============================================================
# DECISION TREE (health)
# ============================================================

def train_health_tree(X=None, y=None) -> Optional[DecisionTreeClassifier]:
    """Fit the health tree, or return None when training fails."""
    X = HEALTH_TRAINING_X if X is None else X
    y = HEALTH_TRAINING_Y if y is None else y

    try:
        validate_training_data(X, y)
        tree = DecisionTreeClassifier(
            criterion="gini",
            max_depth=TREE_MAX_DEPTH,
            min_samples_leaf=TREE_MIN_SAMPLES_LEAF,
            random_state=TREE_RANDOM_SEED,
        )
        tree.fit(np.asarray(X), np.asarray(y))
    except Exception as e:
        logger.warning(f"Decision Tree training failed, health predictions use the fallback rule: {e}")
        return None

    logger.info(f"Decision Tree trained on {len(y)} examples (depth {tree.get_depth()})")
    return tree


# ============================================================
# TRAINING
# ============================================================

@dataclass(frozen=True)
class TrainedModels:
    cuisine_model: CuisineNaiveBayes
    health_tree: Optional[DecisionTreeClassifier]


def train_models() -> TrainedModels:
    return TrainedModels(
        cuisine_model=train_cuisine_classifier(),
        health_tree=train_health_tree(),
    )


if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO)
    models = train_models()

    print("Cuisine classes:", models.cuisine_model.classes_)
    if models.health_tree is None:
        print("Health tree: not trained")
    else:
        print("Health tree classes:", list(models.health_tree.classes_))
