"""In-memory key/value store backing sessions and relayed messages."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from threading import RLock
from typing import Any

from tss_mediator.core.errors import NotFoundError


class MessageStore:
    """Process-wide associative cache from string keys to arbitrary values.

    There is no expiry and no persistence: a value lives until it is
    deleted or the store is cleared. Every operation holds the store lock
    for its whole duration, so multi-key helpers such as :meth:`set_many`
    are atomic with respect to concurrent request handlers.
    """

    def __init__(self) -> None:
        self._items: dict[str, Any] = {}
        self._lock = RLock()

    def exists(self, key: str) -> bool:
        """Return True if a value is stored under ``key``."""
        with self._lock:
            return key in self._items

    def get(self, key: str) -> Any:
        """Return the value stored under ``key``.

        Raises:
            NotFoundError: If nothing is stored under ``key``.
        """
        with self._lock:
            try:
                return self._items[key]
            except KeyError as exc:
                raise NotFoundError(f"no value stored for key {key!r}") from exc

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            self._items[key] = value

    def set_many(self, values: Mapping[str, Any]) -> None:
        """Store every key/value pair in a single critical section."""
        with self._lock:
            self._items.update(values)

    def update(self, key: str, func: Callable[[Any | None], Any]) -> Any:
        """Atomically replace the value under ``key`` with ``func(current)``.

        ``func`` receives ``None`` when the key is absent. The new value is
        stored and returned.
        """
        with self._lock:
            value = func(self._items.get(key))
            self._items[key] = value
            return value

    def delete(self, key: str) -> None:
        """Remove ``key``; a missing key is a no-op."""
        with self._lock:
            self._items.pop(key, None)

    def delete_many(self, keys: Iterable[str]) -> None:
        with self._lock:
            for key in keys:
                self._items.pop(key, None)

    def keys_with_prefix(self, prefix: str) -> list[str]:
        """Return every stored key starting with ``prefix`` in insertion order."""
        with self._lock:
            return [key for key in self._items if key.startswith(prefix)]

    def items_with_prefix(self, prefix: str) -> list[tuple[str, Any]]:
        """Return a consistent snapshot of the pairs whose key starts with ``prefix``."""
        with self._lock:
            return [(key, value) for key, value in self._items.items() if key.startswith(prefix)]

    def clear(self) -> None:
        with self._lock:
            self._items.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)


_STORE = MessageStore()


def get_message_store() -> MessageStore:
    """Return the shared message store."""
    return _STORE
