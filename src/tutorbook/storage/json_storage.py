"""
JSON file storage backend.

Keeps the whole TutoringState in one JSON document, the same shape the
browser version of the app kept under its ``tutoring-data`` key.
"""

import logging
from pathlib import Path
from typing import Callable, Optional, Union

from ..models.state import TutoringState
from ..utils.file_utils import load_json, save_json
from .interfaces import StateStorage, StorageError


logger = logging.getLogger(__name__)


class JsonFileStorage(StateStorage):
    """
    StateStorage backed by a single JSON file.

    When the file does not exist yet, load_all() returns the state built
    by ``initial_state`` (an empty state unless a seed factory is given)
    and writes it out so later loads see the same ids.

    Examples:
        >>> storage = JsonFileStorage(Path("data/tutoring-data.json"))
        >>> state = storage.load_all()
        >>> storage.save_all(state)
    """

    def __init__(
        self,
        filepath: Union[str, Path],
        initial_state: Optional[Callable[[], TutoringState]] = None
    ):
        self.filepath = Path(filepath)
        self._initial_state = initial_state or TutoringState

    def load_all(self) -> TutoringState:
        if not self.filepath.exists():
            logger.info(f"No data file at {self.filepath}, starting a new store")
            state = self._initial_state()
            self.save_all(state)
            return state

        data = load_json(self.filepath)
        if data is None:
            raise StorageError(f"Cannot read data file: {self.filepath}")

        try:
            return TutoringState.from_dict(data)
        except (KeyError, TypeError, ValueError) as e:
            raise StorageError(f"Malformed data file {self.filepath}: {e}") from e

    def save_all(self, state: TutoringState) -> None:
        if not save_json(state.to_dict(), self.filepath):
            raise StorageError(f"Cannot write data file: {self.filepath}")
