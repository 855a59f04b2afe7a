"""Small JSON store of sessions the tmux host killed and can recreate."""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path

import dacite

from sesh_switcher.models import ResurrectableSession, model_to_dict

logger = logging.getLogger(__name__)

_DACITE_CONFIG = dacite.Config(type_hooks={datetime: datetime.fromisoformat})


class ResurrectStore:
    """Newest-first list of resurrectable sessions, capped at ``limit``."""

    def __init__(self, path: Path, limit: int = 50) -> None:
        self.path = path
        self.limit = limit

    def load(self) -> list[ResurrectableSession]:
        if not self.path.exists():
            return []
        try:
            with open(self.path, encoding="utf-8") as f:
                raw = json.load(f)
            return [
                dacite.from_dict(ResurrectableSession, item, config=_DACITE_CONFIG)
                for item in raw
            ]
        except (OSError, ValueError, TypeError, dacite.DaciteError) as e:
            logger.warning("Ignoring unreadable resurrect store %s: %s", self.path, e)
            return []

    def save(self, sessions: list[ResurrectableSession]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        data = []
        for session in sessions[: self.limit]:
            item = model_to_dict(session)
            item["closed_at"] = session.closed_at.isoformat() if session.closed_at else None
            data.append(item)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)

    def get(self, name: str) -> ResurrectableSession | None:
        return next((s for s in self.load() if s.name == name), None)

    def add(self, session: ResurrectableSession) -> None:
        sessions = [s for s in self.load() if s.name != session.name]
        self.save([session, *sessions])

    def remove(self, names: list[str] | tuple[str, ...]) -> None:
        sessions = self.load()
        remaining = [s for s in sessions if s.name not in names]
        if len(remaining) != len(sessions):
            self.save(remaining)
