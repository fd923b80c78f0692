"""
Shared plumbing for the application services.
"""

import logging
from datetime import date, datetime
from decimal import Decimal
from typing import Callable, Optional

from ..models.lesson import DEFAULT_DURATION_MINUTES
from ..models.student import DEFAULT_HOURLY_RATE
from ..storage.interfaces import StateStorage


logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


class BaseService:
    """
    Base class for services working on a StateStorage.

    Each mutating operation loads the state once, changes it and saves
    it once. Nothing is written when an operation fails.

    Args:
        storage: Backend holding the TutoringState
        clock: Returns the current local time; used for creation
            timestamps and for "today"
        default_hourly_rate: Rate used when neither input nor student
            provides one
        default_duration: Lesson length used when none is given
    """

    def __init__(
        self,
        storage: StateStorage,
        clock: Optional[Clock] = None,
        default_hourly_rate: Decimal = DEFAULT_HOURLY_RATE,
        default_duration: int = DEFAULT_DURATION_MINUTES
    ):
        self.storage = storage
        self.clock = clock or datetime.now
        self.default_hourly_rate = default_hourly_rate
        self.default_duration = default_duration

    def _now_iso(self) -> str:
        return self.clock().isoformat()

    def _today(self) -> date:
        return self.clock().date()
