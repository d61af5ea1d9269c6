#!filepath: tests/test_registry.py
import pytest

from heldout.evaluation.evaluator import BasicClassificationPerformanceEvaluator
from heldout.learners import MajorityClassLearner, SGDClassifierLearner
from heldout.registry import ComponentFactory
from heldout.streams import DataFrameStream, HyperplaneGenerator


def test_factory_builds_registered_components():
    learner = ComponentFactory.learner({"type": "sgd", "params": {"alpha": 0.01}})
    stream = ComponentFactory.stream({"type": "hyperplane", "params": {"num_features": 4}})
    evaluator = ComponentFactory.evaluator({"type": "basic_classification"})

    assert isinstance(learner, SGDClassifierLearner)
    assert learner.model_params == {"loss": "log_loss", "alpha": 0.01}
    assert isinstance(stream, HyperplaneGenerator)
    assert stream.header().num_features == 4
    assert isinstance(evaluator, BasicClassificationPerformanceEvaluator)


def test_factory_majority_with_null_params():
    learner = ComponentFactory.learner({"type": "majority_class", "params": None})

    assert isinstance(learner, MajorityClassLearner)


def test_factory_file_stream(tmp_path):
    path = tmp_path / "data.csv"
    path.write_text("a,label\n1.0,x\n2.0,y\n", encoding="utf-8")

    stream = ComponentFactory.stream(
        {"type": "file", "params": {"path": str(path), "label_column": "label"}}
    )

    assert isinstance(stream, DataFrameStream)
    assert len(stream) == 2


def test_unknown_type():
    with pytest.raises(ValueError, match="unknown learner type"):
        ComponentFactory.learner({"type": "neural_magic"})


def test_missing_type():
    with pytest.raises(KeyError):
        ComponentFactory.evaluator({"params": {}})


def test_unknown_kind():
    with pytest.raises(KeyError):
        ComponentFactory.create("optimizer", {"type": "adam"})
