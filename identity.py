"""Stable pseudo user id kept in a small local JSON file."""

import json
import logging
import uuid
from pathlib import Path
from typing import Dict

import config

logger = logging.getLogger(__name__)


class IdentityStore:
    """Key/value store persisted as JSON, used for the anonymous user id."""

    def __init__(self, path=config.IDENTITY_PATH, key: str = config.IDENTITY_KEY):
        self.path = Path(path)
        self.key = key

    def _read(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path) as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring unreadable identity store {self.path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def get_user_id(self) -> str:
        """Return the stored user id, creating it on first use."""
        data = self._read()
        uid = data.get(self.key)
        if isinstance(uid, str) and uid:
            return uid

        uid = uuid.uuid4().hex
        data[self.key] = uid
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w") as f:
                json.dump(data, f, indent=2)
        except OSError as e:
            # The id then only lives for this session
            logger.warning(f"Could not save user id to {self.path}: {e}")
            return uid
        logger.info(f"Created new user id in {self.path}")
        return uid
