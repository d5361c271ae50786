"""
Config Store Module for AC Digest.

Holds the watched roster and the notification channel in memory and
persists them as a single JSON record. A mutation builds the new config,
writes it, and only then replaces the live state, all under one lock, so
memory and disk never disagree after a failed write.
"""

import json
import logging
import os
import tempfile
import threading
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Set

from pydantic import ValidationError as PydanticValidationError

from .config import CONFIG_PATH
from .errors import ConfigIOError, ConfigNotFoundError
from .schemas import ConfigRecord

logger = logging.getLogger(__name__)


@dataclass
class Config:
    """Persisted bot state."""
    channel: Optional[str] = None
    users: Set[str] = field(default_factory=set)

    def copy(self) -> "Config":
        return Config(channel=self.channel, users=set(self.users))

    def to_record(self) -> ConfigRecord:
        return ConfigRecord(channel=self.channel, users=sorted(self.users))

    @classmethod
    def from_record(cls, record: ConfigRecord) -> "Config":
        return cls(channel=record.channel, users=set(record.users))


class ConfigStore:
    """
    Thread-safe owner of the bot configuration.

    Features:
    - Atomic file replacement on every save
    - Live state only changes after a successful save
    - Startup restore that tolerates a missing file
    - Snapshot reads for the digest pipeline
    """

    def __init__(self, path: str = CONFIG_PATH):
        self._path = path
        self._config = Config()
        self._lock = threading.RLock()

    @property
    def path(self) -> str:
        return self._path

    # -------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------

    def load(self) -> Config:
        """
        Read the persisted config from disk.

        Returns:
            The stored Config

        Raises:
            ConfigNotFoundError: No config has been saved yet
            ConfigIOError: The file could not be read or decoded
        """
        try:
            with open(self._path, "r", encoding="utf-8") as f:
                raw = f.read()
        except FileNotFoundError:
            raise ConfigNotFoundError(self._path)
        except OSError as e:
            raise ConfigIOError(f"Failed to read config from '{self._path}'", str(e))

        try:
            record = ConfigRecord.model_validate_json(raw)
        except PydanticValidationError as e:
            raise ConfigIOError(f"Malformed config in '{self._path}'", str(e))

        return Config.from_record(record)

    def save(self, config: Config) -> None:
        """
        Atomically overwrite the persisted config with the given record.

        Args:
            config: State to write

        Raises:
            ConfigIOError: The file could not be written
        """
        payload = json.dumps(config.to_record().model_dump(), ensure_ascii=False)
        directory = os.path.dirname(os.path.abspath(self._path))
        tmp_path = None
        try:
            fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".config-", suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(tmp_path, self._path)
        except OSError as e:
            if tmp_path and os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise ConfigIOError(f"Failed to write config to '{self._path}'", str(e))
        logger.debug(f"Config saved to {self._path}")

    def _commit(self, config: Config) -> None:
        """Save then publish. Caller holds the lock."""
        self.save(config)
        self._config = config

    def restore(self) -> bool:
        """
        Load persisted state into the live store.

        Returns:
            True if a saved config was restored, False if defaults are used
        """
        try:
            restored = self.load()
        except ConfigNotFoundError:
            logger.info(f"Note: {self._path} not found, using default config")
            return False

        with self._lock:
            self._config = restored
        logger.info(
            f"Config restored: channel={restored.channel} "
            f"users={sorted(restored.users)}"
        )
        return True

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def users(self) -> List[str]:
        """Sorted snapshot of the roster."""
        with self._lock:
            return sorted(self._config.users)

    def channel(self) -> Optional[str]:
        with self._lock:
            return self._config.channel

    def snapshot(self) -> Config:
        """Copy of the whole config, taken atomically."""
        with self._lock:
            return self._config.copy()

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def register_users(self, names: Iterable[str]) -> List[str]:
        """
        Add users to the roster and persist.

        Args:
            names: Raw user names; whitespace is trimmed and blanks dropped

        Returns:
            The normalized names that were registered
        """
        cleaned = [n.strip() for n in names if n and n.strip()]
        with self._lock:
            updated = self._config.copy()
            updated.users.update(cleaned)
            self._commit(updated)
        logger.info(f"Users registered: {cleaned}")
        return cleaned

    def unregister_user(self, name: str) -> bool:
        """
        Remove a user from the roster and persist. Absent names are a no-op.

        Returns:
            True if the user was registered
        """
        name = name.strip()
        with self._lock:
            updated = self._config.copy()
            present = name in updated.users
            updated.users.discard(name)
            self._commit(updated)
        logger.info(f"User unregistered: {name} (was registered: {present})")
        return present

    def set_channel(self, channel: str) -> None:
        """Overwrite the notification channel and persist."""
        with self._lock:
            updated = self._config.copy()
            updated.channel = str(channel)
            self._commit(updated)
        logger.info(f"Channel set: {channel}")
