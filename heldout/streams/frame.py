# heldout/streams/frame.py
from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Sequence

import numpy as np
import pandas as pd
import pyarrow.parquet as pq

from heldout import logs
from heldout.core.interfaces import ExampleStream
from heldout.core.types import Example, StreamHeader
from heldout.utils.errors import EvaluationConfigError, StreamExhaustedError


def _label_key(value) -> str:
    # integer labels with missing values are stored as float: 1.0 -> "1"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class DataFrameStream(ExampleStream):
    """
    DataFrameStream (FINAL)

    Replays the rows of a DataFrame as Examples, in row order.

    Contract:
    - label_column holds the class; classes are indexed in sorted order
      of their string form unless class_labels is given
    - NaN label -> missing label (Example.y is None)
    - feature columns must be numeric; inf is passed through untouched
    """

    def __init__(
        self,
        frame: pd.DataFrame,
        *,
        label_column: str,
        feature_columns: Optional[Sequence[str]] = None,
        class_labels: Optional[Sequence[str]] = None,
    ):
        if label_column not in frame.columns:
            raise EvaluationConfigError(
                f"[DataFrameStream] label column not found: {label_column}"
            )

        if feature_columns is None:
            feature_columns = [c for c in frame.columns if c != label_column]

        missing = [c for c in feature_columns if c not in frame.columns]
        if missing:
            raise EvaluationConfigError(
                f"[DataFrameStream] feature columns not found: {missing}"
            )

        labels = frame[label_column]
        observed = {_label_key(v) for v in labels.dropna()}
        if class_labels is None:
            class_labels = sorted(observed)

        index = {str(label): i for i, label in enumerate(class_labels)}

        unknown = sorted(observed - set(index))
        if unknown:
            raise EvaluationConfigError(
                f"[DataFrameStream] labels not in class_labels: {unknown}"
            )

        self._header = StreamHeader(
            feature_names=tuple(str(c) for c in feature_columns),
            class_labels=tuple(str(c) for c in class_labels),
        )
        self._X = frame[list(feature_columns)].to_numpy(dtype=float)
        self._y: List[Optional[int]] = [
            None if pd.isna(v) else index[_label_key(v)] for v in labels
        ]
        self._pos = 0

    def header(self) -> StreamHeader:
        return self._header

    def has_more(self) -> bool:
        return self._pos < len(self._y)

    def next_example(self) -> Example:
        if self._pos >= len(self._y):
            raise StreamExhaustedError("[DataFrameStream] exhausted")

        row: np.ndarray = self._X[self._pos]
        example = Example(x=tuple(float(v) for v in row), y=self._y[self._pos])
        self._pos += 1
        return example

    def is_restartable(self) -> bool:
        return True

    def restart(self) -> None:
        self._pos = 0

    def __len__(self) -> int:
        return len(self._y)


class FileStream:
    """
    File-backed DataFrameStream factory.

    .csv     -> pandas.read_csv
    .parquet -> pyarrow.parquet.read_table
    """

    @staticmethod
    def open(
        path: str | Path,
        *,
        label_column: str,
        feature_columns: Optional[Sequence[str]] = None,
        class_labels: Optional[Sequence[str]] = None,
    ) -> DataFrameStream:
        p = Path(path)
        if not p.exists():
            raise EvaluationConfigError(f"[FileStream] file not found: {p}")

        suffix = p.suffix.lower()
        if suffix == ".csv":
            frame = pd.read_csv(p)
        elif suffix == ".parquet":
            frame = pq.read_table(p).to_pandas()
        else:
            raise EvaluationConfigError(
                f"[FileStream] unsupported file type: {suffix}"
            )

        logs.info(f"[FileStream] loaded {len(frame)} rows from {p}")

        return DataFrameStream(
            frame,
            label_column=label_column,
            feature_columns=feature_columns,
            class_labels=class_labels,
        )
