from __future__ import annotations

from datetime import datetime


class SystemClock:
    """Local wall-clock time, truncated to whole seconds (naive, single implicit zone)."""

    def now(self) -> datetime:
        return datetime.now().replace(microsecond=0)
