"""JSON file store for saved game sessions.

One document per key under ``local_db/sessions/``. This is the host-side
persistence collaborator; the engine itself only produces and accepts
session snapshots.
"""

from __future__ import annotations

import json
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from ..core.constants import STORAGE_KEY
from ..core.exceptions import SessionFormatError
from ..game.session import Session
from ..utils.logger import get_logger
from .serialization import session_from_jsonable, session_to_jsonable

LOGGER = get_logger(__name__)

DEFAULT_STORE_DIR = Path("local_db/sessions")

_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")


class SessionStore:
    """Save and restore sessions as structured JSON documents."""

    def __init__(self, store_dir: Path | str = DEFAULT_STORE_DIR) -> None:
        self.store_dir = Path(store_dir)
        self.store_dir.mkdir(parents=True, exist_ok=True)

    # ------------------------------------------------------------------
    # Public interface
    # ------------------------------------------------------------------
    def save(self, session: Session, key: str = STORAGE_KEY) -> Path:
        doc = {
            "saved_at": datetime.now(timezone.utc).isoformat(),
            "session": session_to_jsonable(session),
        }
        path = self._path(key)
        path.write_text(json.dumps(doc, ensure_ascii=False, indent=2), encoding="utf-8")
        LOGGER.info("Session saved: %s", path.name)
        return path

    def load(self, key: str = STORAGE_KEY) -> Optional[Session]:
        """Return the stored session, or None when missing or unreadable."""
        path = self._path(key)
        if not path.exists():
            LOGGER.debug("No saved session: %s", path.name)
            return None
        try:
            doc = json.loads(path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError, OSError) as exc:
            LOGGER.warning("Session read error (%s): %s", path.name, exc)
            return None
        payload = doc.get("session", doc) if isinstance(doc, dict) else doc
        try:
            return session_from_jsonable(payload)
        except SessionFormatError as exc:
            LOGGER.warning("Discarding invalid saved session (%s): %s", path.name, exc)
            return None

    def delete(self, key: str = STORAGE_KEY) -> bool:
        path = self._path(key)
        if not path.exists():
            return False
        path.unlink()
        LOGGER.info("Session deleted: %s", path.name)
        return True

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------
    def _path(self, key: str) -> Path:
        if not _KEY_PATTERN.match(key):
            raise ValueError(f"Invalid session key '{key}'")
        return self.store_dir / f"{key}.json"
