#!filepath: heldout/utils/filesystem.py
from pathlib import Path
from typing import TextIO

from heldout.utils.errors import ResultFileError
from heldout.utils.logger import logs


class FileSystem:
    """
    File helpers for run outputs
    - create parent directories
    - open result files append-or-create
    """

    @staticmethod
    def ensure_dir(path: str | Path) -> Path:
        """
        Create the directory if it does not exist.
        """
        p = Path(path)
        if not p.exists():
            p.mkdir(parents=True, exist_ok=True)
            logs.debug(f"[FS] created dir: {p}")
        return p

    @staticmethod
    def open_append(path: str | Path, *, purpose: str) -> TextIO:
        """
        Open a text result file for appending.

        - existing file -> appended to
        - missing file  -> created (parent dirs included)
        - line buffered so each println reaches the file
        """
        p = Path(path)
        existed = p.exists()

        try:
            FileSystem.ensure_dir(p.parent)
            stream = open(p, "a", encoding="utf-8", buffering=1)
        except OSError as ex:
            raise ResultFileError(
                f"Unable to open {purpose} file: {p}"
            ) from ex

        logs.info(
            f"[FS] {purpose} file {'appending to' if existed else 'created'}: {p}"
        )
        return stream
