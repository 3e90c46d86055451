from __future__ import annotations

from datetime import datetime

# Fixed "now" for every test: Tuesday 2030-01-15 09:00 local time.
NOW = datetime(2030, 1, 15, 9, 0)
TODAY = "2030-01-15"
TOMORROW = "2030-01-16"
