from evaluate import evaluate_classifiers, summarize_training_data
from train_classifiers import TrainedModels


def test_training_set_metrics(models):
    metrics = evaluate_classifiers(models)

    assert set(metrics) == {"naiveBayes", "decisionTree"}
    assert metrics["naiveBayes"] == {"accuracy": 1.0, "precision": 1.0, "recall": 1.0, "f1": 1.0}
    assert metrics["decisionTree"]["accuracy"] == 1.0


def test_metrics_without_tree_score_the_fallback_rule(models):
    degraded = TrainedModels(cuisine_model=models.cuisine_model, health_tree=None)
    metrics = evaluate_classifiers(degraded)

    # The rule only reproduces the High Protein and High Fiber examples
    assert metrics["decisionTree"]["accuracy"] == 0.4


def test_training_data_summary():
    df = summarize_training_data()

    assert list(df.columns) == ["model", "label", "examples"]
    assert len(df) == 10
    assert df["examples"].sum() == 10
    assert set(df[df["model"] == "naiveBayes"]["label"]) == {"Indian", "Italian", "Chinese", "Mexican", "French"}
