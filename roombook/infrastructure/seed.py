from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from sqlalchemy.orm import Session

from roombook.core.entities.room import RoomStatus
from roombook.core.use_cases.manage_directory import RequesterDirectoryUseCase, RoomDirectoryUseCase
from roombook.infrastructure.logging_config import get_logger
from roombook.infrastructure.repositories.requester_directory_impl import RequesterDirectoryImpl
from roombook.infrastructure.repositories.room_directory_impl import RoomDirectoryImpl

logger = get_logger(__name__)


class DirectorySeedError(ValueError):
    """The directory seed file is not a mapping of `rooms` / `requesters` lists."""


def load_directory_seed(path: Path) -> dict[str, list[dict[str, Any]]]:
    """
    Read a YAML seed file of the form:

        rooms:
          - {name: "Room 101", capacity: 30, status: ACTIVE}
        requesters:
          - {name: "Ada", email: "ada@example.org"}
    """
    with path.open("r", encoding="utf-8") as f:
        doc = yaml.safe_load(f) or {}

    if not isinstance(doc, dict):
        raise DirectorySeedError(f"{path}: expected a mapping at top level")

    seed: dict[str, list[dict[str, Any]]] = {}
    for key in ("rooms", "requesters"):
        items = doc.get(key) or []
        if not isinstance(items, list) or not all(isinstance(i, dict) for i in items):
            raise DirectorySeedError(f"{path}: {key!r} must be a list of mappings")
        seed[key] = items
    return seed


def seed_directory(db: Session, path: Path) -> dict[str, int]:
    """
    Insert the seed file's rooms and requesters, only into an empty directory.
    Commits on success.
    """
    rooms = RoomDirectoryUseCase(room_directory=RoomDirectoryImpl(db))
    requesters = RequesterDirectoryUseCase(requester_directory=RequesterDirectoryImpl(db))

    if rooms.list_all() or requesters.list_all():
        logger.info("Directory already populated; skipping seed %s", path)
        return {"rooms": 0, "requesters": 0}

    seed = load_directory_seed(path)
    try:
        for item in seed["rooms"]:
            capacity = int(item["capacity"])
            if capacity <= 0:
                raise ValueError(f"room capacity must be positive, got {capacity}")
            rooms.register(
                name=str(item["name"]),
                capacity=capacity,
                status=RoomStatus(item.get("status", RoomStatus.ACTIVE.value)),
            )
        for item in seed["requesters"]:
            requesters.register(name=str(item["name"]), email=str(item["email"]))
    except (KeyError, TypeError, ValueError) as e:
        db.rollback()
        raise DirectorySeedError(f"{path}: invalid seed entry: {e}") from e

    db.commit()
    logger.info("Seeded directory from %s: %d rooms, %d requesters", path, len(seed["rooms"]), len(seed["requesters"]))
    return {"rooms": len(seed["rooms"]), "requesters": len(seed["requesters"])}
