"""Saving and loading tournament sessions through a key-value store.

Layout of the store:

- ``teams``: JSON array of ``{id, name}``
- ``mode``: ``league`` or ``knockout`` (plain string)
- ``matches``: JSON array of league fixtures
- ``knockoutRounds``: JSON array of rounds, each an array of matches
- ``savedAt``: ISO-8601 timestamp of the last save
"""

# TourneyKit
# Copyright (C) 2025  TourneyKit developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import json
from datetime import datetime, timezone
from typing import Optional

from dateutil import parser as date_parser

from tourneykit.constants import KEY_MODE, KEY_SAVED_AT, SESSION_KEYS
from tourneykit.storage.store import KeyValueStore
from tourneykit.tournament import TournamentSession
from tourneykit.type_hints import Shuffler, Snapshot
from tourneykit.utils import setup_logger

logger = setup_logger(__name__)


class SessionRepository:
    """Reads and writes whole TournamentSession snapshots.

    Example:
        >>> repo = SessionRepository(MemoryStore())
        >>> session = repo.load()
        >>> team = session.add_team("Rovers")
        >>> repo.save(session)
    """

    def __init__(self, store: KeyValueStore) -> None:
        self.store = store

    def load(self, shuffle: Optional[Shuffler] = None) -> TournamentSession:
        """Restore the stored session.

        Nothing stored, or anything that does not decode, gives a fresh
        session.
        """
        snapshot = self._read_snapshot()
        return TournamentSession.deserialize(snapshot, shuffle=shuffle)

    def save(self, session: TournamentSession) -> None:
        snapshot = session.serialize()
        items = {
            key: snapshot[key] if key == KEY_MODE else json.dumps(snapshot[key])
            for key in SESSION_KEYS
        }
        items[KEY_SAVED_AT] = datetime.now(timezone.utc).isoformat()
        self.store.update(items)
        logger.debug("Tournament saved")

    def clear(self) -> None:
        """Remove everything the repository has stored."""
        for key in SESSION_KEYS + (KEY_SAVED_AT,):
            self.store.delete(key)
        logger.info("Stored tournament cleared")

    def last_saved(self) -> Optional[datetime]:
        """Time of the last save, or None if unknown."""
        raw = self.store.get(KEY_SAVED_AT)
        if not raw:
            return None
        try:
            return date_parser.isoparse(raw)
        except (ValueError, OverflowError):
            logger.warning(f"Ignoring unreadable save timestamp: {raw!r}")
            return None

    def _read_snapshot(self) -> Optional[Snapshot]:
        snapshot: Snapshot = {}
        for key in SESSION_KEYS:
            raw = self.store.get(key)
            if raw is None or raw == "":
                continue
            if key == KEY_MODE:
                snapshot[key] = raw
                continue
            try:
                snapshot[key] = json.loads(raw)
            except ValueError as e:
                logger.warning(
                    f"Stored {key!r} is not valid JSON ({e}); starting fresh"
                )
                return None
        return snapshot or None
