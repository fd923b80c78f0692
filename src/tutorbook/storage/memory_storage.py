"""
In-memory storage backend.
"""

import copy
import logging
from typing import Optional

from ..models.state import TutoringState
from .interfaces import StateStorage


logger = logging.getLogger(__name__)


class InMemoryStorage(StateStorage):
    """
    StateStorage kept in process memory.

    Loads hand out deep copies so a caller mutating a loaded state
    changes nothing until it calls save_all().

    Examples:
        >>> storage = InMemoryStorage()
        >>> state = storage.load_all()
        >>> state.allocate_id()
        1
        >>> storage.save_all(state)
    """

    def __init__(self, state: Optional[TutoringState] = None):
        self._state = copy.deepcopy(state) if state is not None else TutoringState()
        self.save_count = 0

    def load_all(self) -> TutoringState:
        return copy.deepcopy(self._state)

    def save_all(self, state: TutoringState) -> None:
        self._state = copy.deepcopy(state)
        self.save_count += 1
        logger.debug(f"State saved in memory (save #{self.save_count})")
