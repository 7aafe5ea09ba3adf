"""
ProgressStore - Persist the user's progress in ~/.tobira/progress.json.

The file is a small key-value document. The progress record lives under a
single key ("readingProgress"); other keys in the file are left alone.

- Loaded once at startup; a missing file means a fresh start
- A corrupt or invalid record is logged and replaced by defaults
- Every commit writes the whole record back synchronously
"""

import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Callable, Optional

from pydantic import ValidationError

from tobira.config import DEFAULT_PROGRESS_PATH, PROGRESS_KEY
from tobira.errors import MalformedPersistedState
from tobira.schemas import UserProgress


logger = logging.getLogger(__name__)

# wire names, as written by UserProgress.to_json_dict()
REQUIRED_FIELDS = ("level", "experience", "completedChapters", "unlockedBooks")


def parse_progress(value) -> UserProgress:
    """
    Validate a decoded progress record.

    Raises:
        MalformedPersistedState: If the record is not a valid UserProgress
    """
    if not isinstance(value, dict):
        raise MalformedPersistedState(
            f"Progress record must be an object, got {type(value).__name__}"
        )
    missing = [name for name in REQUIRED_FIELDS if name not in value]
    if missing:
        raise MalformedPersistedState(f"Progress record is missing fields: {missing}")
    try:
        return UserProgress.model_validate(value)
    except ValidationError as e:
        raise MalformedPersistedState(f"Invalid progress record: {e}") from e


class ProgressStore:
    """
    Own the single UserProgress record and its persistence slot.

    The store is the only writer. commit() and update() hold a lock so that
    read-modify-write sequences from different threads do not interleave.
    """

    def __init__(self, path: Optional[Path] = None, key: str = PROGRESS_KEY):
        """
        Initialize the store and load any saved progress.

        Args:
            path: Path to the JSON document (default: ~/.tobira/progress.json)
            key: Key of the progress record inside the document
        """
        self.path = Path(path) if path is not None else DEFAULT_PROGRESS_PATH
        self.key = key
        self._lock = threading.RLock()
        self._current = self.load()

    @property
    def current(self) -> UserProgress:
        """Latest committed progress snapshot."""
        return self._current

    # -------------------------------------------------------------------------
    # Reading
    # -------------------------------------------------------------------------

    def _read_document(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                document = json.load(f)
        except (OSError, ValueError, RecursionError) as e:
            raise MalformedPersistedState(f"Cannot read {self.path}: {e}") from e
        if not isinstance(document, dict):
            raise MalformedPersistedState(f"{self.path} does not contain a JSON object")
        return document

    def load(self) -> UserProgress:
        """
        Load progress from disk.

        Returns defaults when nothing was saved yet, or when the saved
        record is malformed (the problem is logged, not raised).
        """
        try:
            document = self._read_document()
            if self.key not in document:
                return UserProgress()
            progress = parse_progress(document[self.key])
        except MalformedPersistedState as e:
            logger.warning(f"Ignoring saved progress, starting fresh: {e}")
            return UserProgress()

        logger.info(
            f"Loaded progress: level {progress.level}, {progress.experience} EXP, "
            f"{len(progress.completed_chapters)} chapters completed"
        )
        return progress

    # -------------------------------------------------------------------------
    # Writing
    # -------------------------------------------------------------------------

    def save(self, progress: UserProgress) -> bool:
        """
        Write a progress record to disk.

        Returns:
            True if saved, False if the file could not be written
        """
        try:
            try:
                document = self._read_document()
            except MalformedPersistedState:
                document = {}
            document[self.key] = progress.to_json_dict()

            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=".progress-", suffix=".json")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(document, f, ensure_ascii=False, indent=2)
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            logger.error(f"Failed to save progress to {self.path}: {e}")
            return False
        return True

    def commit(self, progress: UserProgress) -> bool:
        """Replace the current snapshot and save it. Returns the save result."""
        with self._lock:
            self._current = progress
            return self.save(progress)

    def update(self, fn: Callable[[UserProgress], UserProgress]) -> tuple[UserProgress, bool]:
        """
        Apply fn to the current snapshot and commit the result atomically.

        Exceptions from fn propagate and leave the snapshot unchanged.

        Returns:
            Tuple of (new progress, saved flag)
        """
        with self._lock:
            progress = fn(self._current)
            saved = self.commit(progress)
            return progress, saved

    def reset(self) -> bool:
        """Reset to a fresh record and save it."""
        logger.info("Resetting progress")
        return self.commit(UserProgress())
