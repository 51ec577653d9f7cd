"""Key-value storage backends.

The storefront keeps visitor state (cart lines, product comments) as JSON
documents under fixed keys, the way a browser keeps them in local storage.
Views hand services a ``SessionStorage`` bound to the visitor's session; tests
and scripts use ``MemoryStorage``.
"""
from __future__ import annotations

import json
from typing import Any, Dict, Optional, Protocol


class KeyValueStorageProtocol(Protocol):
    def get(self, key: str, default: Any = None) -> Any:
        ...

    def set(self, key: str, value: Any) -> None:
        ...

    def delete(self, key: str) -> None:
        ...


class MemoryStorage:
    """In-process storage. Values go through JSON like a browser's local storage."""

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self._data: Dict[str, str] = {}
        for key, value in (initial or {}).items():
            self.set(key, value)

    def get(self, key: str, default: Any = None) -> Any:
        raw = self._data.get(key)
        if raw is None:
            return default
        return json.loads(raw)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = json.dumps(value)

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def raw(self, key: str) -> Optional[str]:
        return self._data.get(key)


class SessionStorage:
    """Adapter over a Django session (``request.session``)."""

    def __init__(self, session):
        self.session = session

    def get(self, key: str, default: Any = None) -> Any:
        return self.session.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self.session[key] = value
        # Nested lists are mutated in place by callers; always flag the write.
        self.session.modified = True

    def delete(self, key: str) -> None:
        if key in self.session:
            del self.session[key]
            self.session.modified = True


def storage_for_request(request) -> KeyValueStorageProtocol:
    session = getattr(request, "session", None)
    if session is None:
        return MemoryStorage()
    return SessionStorage(session)
