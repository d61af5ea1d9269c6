# heldout/streams/cached.py
from __future__ import annotations

from typing import List, Sequence

from heldout.core.interfaces import ExampleStream
from heldout.core.types import Example, StreamHeader
from heldout.utils.errors import StreamExhaustedError


class CachedExampleStream(ExampleStream):
    """
    Fixed in-memory buffer of examples.

    Every restart() replays the same examples in the same order.
    """

    def __init__(self, header: StreamHeader, examples: Sequence[Example]):
        self._header = header
        self._examples: List[Example] = list(examples)
        self._pos = 0

    def header(self) -> StreamHeader:
        return self._header

    def has_more(self) -> bool:
        return self._pos < len(self._examples)

    def next_example(self) -> Example:
        if self._pos >= len(self._examples):
            raise StreamExhaustedError("[CachedExampleStream] exhausted")
        example = self._examples[self._pos]
        self._pos += 1
        return example

    def is_restartable(self) -> bool:
        return True

    def restart(self) -> None:
        self._pos = 0

    def __len__(self) -> int:
        return len(self._examples)
