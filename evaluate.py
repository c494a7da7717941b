"""
Score both classifiers on their fixed training sets.

The sets are tiny and there is no held-out split, so these numbers measure fit
rather than generalisation.
"""
import logging

import pandas as pd
from sklearn.metrics import (
    accuracy_score,
    classification_report,
    precision_recall_fscore_support,
)

from inference import fallback_health_label
from train_classifiers import (
    CUISINE_TRAINING_X,
    CUISINE_TRAINING_Y,
    HEALTH_TRAINING_X,
    HEALTH_TRAINING_Y,
    TrainedModels,
    train_models,
)

logger = logging.getLogger(__name__)


def summarize_training_data():
    rows = [
        {"model": "naiveBayes", "label": label} for label in CUISINE_TRAINING_Y
    ] + [
        {"model": "decisionTree", "label": label} for label in HEALTH_TRAINING_Y
    ]
    df = pd.DataFrame(rows)
    return df.groupby(["model", "label"], sort=False).size().rename("examples").reset_index()


def _score(y_true, y_pred):
    precision, recall, f1, _ = precision_recall_fscore_support(
        y_true, y_pred, average="macro", zero_division=0
    )
    return {
        "accuracy": round(float(accuracy_score(y_true, y_pred)), 4),
        "precision": round(float(precision), 4),
        "recall": round(float(recall), 4),
        "f1": round(float(f1), 4),
    }


def _tree_predictions(models: TrainedModels):
    if models.health_tree is None:
        return [fallback_health_label(x) for x in HEALTH_TRAINING_X]
    return [str(label) for label in models.health_tree.predict(HEALTH_TRAINING_X)]


def evaluate_classifiers(models: TrainedModels):
    nb_pred = models.cuisine_model.predict(CUISINE_TRAINING_X)
    tree_pred = _tree_predictions(models)

    metrics = {
        "naiveBayes": _score(CUISINE_TRAINING_Y, nb_pred),
        "decisionTree": _score(HEALTH_TRAINING_Y, tree_pred),
    }
    logger.info(f"Training-set metrics: {metrics}")
    return metrics


def main():
    models = train_models()

    print("Training data:")
    print(summarize_training_data().to_string(index=False))

    print("\n" + "="*50)
    print("Naive Bayes (cuisine)")
    print("="*50)
    print(classification_report(
        CUISINE_TRAINING_Y,
        models.cuisine_model.predict(CUISINE_TRAINING_X),
        zero_division=0,
        digits=4
    ))

    print("="*50)
    print("Decision Tree (health)")
    print("="*50)
    print(classification_report(
        HEALTH_TRAINING_Y,
        _tree_predictions(models),
        zero_division=0,
        digits=4
    ))

    for name, scores in evaluate_classifiers(models).items():
        print(f"{name}: " + ", ".join(f"{k}={v:.4f}" for k, v in scores.items()))


if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO)
    main()
