from .curve import LearningCurve, LearningEvaluation
from .evaluator import BasicClassificationPerformanceEvaluator
from .predictions import (
    PredictionWriter,
    format_prediction_line,
    format_probabilities,
    max_index,
    resolve_ensemble_size,
)
from .recorder import MetricsRecorder

__all__ = [
    "LearningCurve",
    "LearningEvaluation",
    "BasicClassificationPerformanceEvaluator",
    "MetricsRecorder",
    "PredictionWriter",
    "format_prediction_line",
    "format_probabilities",
    "max_index",
    "resolve_ensemble_size",
]
