"""
Abstract storage interface.

Services depend on StateStorage rather than on a concrete backend,
which keeps them testable with InMemoryStorage and lets the JSON file
be swapped for something else later.
"""

from abc import ABC, abstractmethod

from ..models.state import TutoringState


class StorageError(Exception):
    """Raised when the store cannot be read or written."""
    pass


class StateStorage(ABC):
    """
    Whole-blob storage for TutoringState.

    Every mutating operation loads the full state, changes it in memory
    and saves it back in one call. There is no versioning between
    callers, so two writers racing on the same store lose one update.
    """

    @abstractmethod
    def load_all(self) -> TutoringState:
        """
        Load the complete state.

        Returns:
            A fresh TutoringState the caller may mutate freely

        Raises:
            StorageError: If the store exists but cannot be read
        """
        pass

    @abstractmethod
    def save_all(self, state: TutoringState) -> None:
        """
        Replace the stored state.

        Args:
            state: State to persist

        Raises:
            StorageError: If the state cannot be written
        """
        pass
