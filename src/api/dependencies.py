import os

from api.backend import GreedyBackend
from storage.classroom_store import ClassroomStore
from storage.kv_store import JsonFileStore, KeyValueStore, MemoryStore

# Configuration
GREEDY_STORE_PATH = os.getenv("GREEDY_STORE_PATH", "").strip()


def _build_kv_store() -> KeyValueStore:
    if GREEDY_STORE_PATH:
        return JsonFileStore(GREEDY_STORE_PATH)
    return MemoryStore()


backend = GreedyBackend(ClassroomStore(_build_kv_store()))


def get_backend() -> GreedyBackend:
    return backend
