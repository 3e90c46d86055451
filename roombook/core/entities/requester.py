from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class Requester:
    requester_id: int | None
    name: str
    email: str
