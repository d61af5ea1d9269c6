# heldout/evaluation/predictions.py
from __future__ import annotations

import math
import re
from pathlib import Path
from typing import Optional, Sequence, TextIO

from heldout import logs
from heldout.core.types import Example

MISSING_LABEL = "?"

# legacy shim: "<name>_<ensemble size>.<ext>", e.g. preds_10.pred
_ENSEMBLE_SUFFIX = re.compile(r"_(\d+)\.[A-Za-z0-9]+$")


# ----------------------------------------------------------------------
# Pure formatting (no IO, never mutates votes)
# ----------------------------------------------------------------------
def max_index(votes: Sequence[float]) -> int:
    """
    First index of the maximum vote; 0 for an empty vector.
    NaN never replaces the running maximum.
    """
    best = 0
    for i in range(1, len(votes)):
        if votes[i] > votes[best]:
            best = i
    return best


def normalize_vote(vote: float, estimators: int) -> float:
    """
    estimators > 0: vote is a sum over ensemble members scaled by 100,
    so divide by estimators * 100. Otherwise pass through.

    inf -> 1.0, NaN -> 0.0
    """
    value = vote / estimators / 100.0 if estimators > 0 else float(vote)

    if math.isinf(value):
        return 1.0
    if math.isnan(value):
        return 0.0
    return value


def format_probabilities(votes: Sequence[float], estimators: int) -> str:
    """
    4-decimal, comma-joined probabilities.

    - a single component gets a synthesized ",0.0" (binary convention)
    - an empty vector renders as ","
    """
    if len(votes) == 0:
        return ","

    text = ",".join(f"{normalize_vote(v, estimators):.4f}" for v in votes)

    if len(votes) == 1:
        text += ",0.0"

    return text


def format_prediction_line(
    votes: Sequence[float],
    label: Optional[int],
    estimators: int,
) -> str:
    """
    <argmax>,<probabilities>,<true label or ?>
    """
    true_label = MISSING_LABEL if label is None else str(int(label))
    return f"{max_index(votes)},{format_probabilities(votes, estimators)},{true_label}"


def resolve_ensemble_size(
    explicit: Optional[int],
    filename: Optional[str | Path],
) -> int:
    """
    Normalization divisor for the prediction file.

    Priority:
        1) explicit configuration
        2) legacy "_<digits>.<ext>" filename suffix
        3) 0 (no normalization)
    """
    if explicit is not None:
        return explicit

    if filename is None:
        return 0

    match = _ENSEMBLE_SUFFIX.search(Path(filename).name)
    if match is None:
        return 0

    estimators = int(match.group(1))
    logs.warning(
        f"[Predictions] ensemble size {estimators} inferred from file name "
        f"{Path(filename).name}; set prediction_ensemble_size explicitly"
    )
    return estimators


# ----------------------------------------------------------------------
# Sink
# ----------------------------------------------------------------------
class PredictionWriter:
    """
    One line per tested example, flushed immediately.

    The stream is owned by the caller (opened / closed by the task).
    """

    def __init__(self, stream: TextIO, estimators: int = 0):
        self._stream = stream
        self.estimators = estimators
        self.lines_written = 0

    def emit(self, example: Example, votes: Sequence[float]) -> None:
        line = format_prediction_line(votes, example.y, self.estimators)
        self._stream.write(line + "\n")
        self._stream.flush()
        self.lines_written += 1
