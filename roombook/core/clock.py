from __future__ import annotations

from datetime import datetime
from typing import Protocol


class Clock(Protocol):
    """
    Source of the current local wall-clock instant.

    Every time-relative rule ("start must be in the future") reads "now" through this,
    so use cases can be exercised with a fixed instant.
    """

    def now(self) -> datetime:
        raise NotImplementedError
