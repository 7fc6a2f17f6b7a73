"""Key-value stores for persisting tournament state.

Stores map string keys to string values and know nothing about tournaments;
:class:`~tourneykit.storage.repository.SessionRepository` sits on top.
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
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List, Optional, Union

from tourneykit.exceptions import StorageException
from tourneykit.utils import setup_logger

logger = setup_logger(__name__)


class KeyValueStore(ABC):
    """String to string storage that outlives the process."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the value for ``key`` or None if absent."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``."""

    def update(self, items: Dict[str, str]) -> None:
        """Store several values at once."""
        for key, value in items.items():
            self.set(key, value)

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove ``key``; absent keys are ignored."""

    @abstractmethod
    def keys(self) -> List[str]:
        """All keys currently stored."""


class MemoryStore(KeyValueStore):
    """In-process store, mainly for tests."""

    def __init__(self, data: Optional[Dict[str, str]] = None) -> None:
        self.data: Dict[str, str] = dict(data or {})

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value

    def delete(self, key: str) -> None:
        self.data.pop(key, None)

    def keys(self) -> List[str]:
        return list(self.data)


class JsonFileStore(KeyValueStore):
    """Store backed by a single JSON object in a file.

    The file is read once when the store is created and rewritten whole on
    every change. A missing or unreadable file starts an empty store.
    """

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)
        self._data: Dict[str, str] = self._read()

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value
        self._write()

    def update(self, items: Dict[str, str]) -> None:
        """Store several values with a single rewrite of the file."""
        self._data.update(items)
        self._write()

    def delete(self, key: str) -> None:
        if key in self._data:
            del self._data[key]
            self._write()

    def keys(self) -> List[str]:
        return list(self._data)

    def _read(self) -> Dict[str, str]:
        if not self.path.exists():
            logger.debug(f"No store file at {self.path}, starting empty")
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Could not read store file {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Store file {self.path} does not hold a JSON object")
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _write(self) -> None:
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(self._data, f, indent=4)
            tmp_path.replace(self.path)
        except OSError as e:
            logger.exception(f"Error saving store file {self.path}:")
            raise StorageException(f"Could not save {self.path}: {e}") from e
