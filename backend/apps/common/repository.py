from typing import Any, Callable, Dict, Generic, List, TypeVar

from .storage import KeyValueStorageProtocol

T = TypeVar("T")


class StoredListRepository(Generic[T]):
    """A list of records serialized as one JSON array under a single storage key."""

    def __init__(
        self,
        storage: KeyValueStorageProtocol,
        key: str,
        *,
        to_dict: Callable[[T], Dict[str, Any]],
        from_dict: Callable[[Dict[str, Any]], T],
    ):
        self.storage = storage
        self.key = key
        self._to_dict = to_dict
        self._from_dict = from_dict

    def load(self) -> List[T]:
        raw = self.storage.get(self.key) or []
        if not isinstance(raw, list):
            return []
        return [self._from_dict(entry) for entry in raw if isinstance(entry, dict)]

    def save(self, records: List[T]) -> None:
        self.storage.set(self.key, [self._to_dict(r) for r in records])

    def clear(self) -> None:
        self.storage.set(self.key, [])
