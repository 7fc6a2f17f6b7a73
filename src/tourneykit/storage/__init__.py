from tourneykit.storage.repository import SessionRepository
from tourneykit.storage.store import JsonFileStore, KeyValueStore, MemoryStore

__all__ = ["JsonFileStore", "KeyValueStore", "MemoryStore", "SessionRepository"]
