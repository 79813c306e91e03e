"""Thread-safe memoization keyed by call arguments.

PUBLIC API:
  - Memoizer: Cache results of a computation per argument tuple
"""

import threading
from collections.abc import Callable, Hashable
from typing import Any

__all__ = ["Memoizer"]


class Memoizer:
    """Memoize calls to a function, skipping repeated work for the same key.

    Safe to fill from several threads; two threads racing on the same key may
    both compute, and the last write wins.

        memo = Memoizer()
        info = memo.call(lambda: fetch(pid), pid)
    """

    def __init__(self):
        self._cache: dict[tuple[Hashable, ...], Any] = {}
        self._lock = threading.Lock()
        self._disabled = False

    def call(self, compute: Callable[[], Any], *key: Hashable) -> Any:
        if self._disabled:
            return compute()

        with self._lock:
            if key in self._cache:
                return self._cache[key]

        result = compute()
        with self._lock:
            self._cache[key] = result
        return result

    def clear(self) -> "Memoizer":
        with self._lock:
            self._cache = {}
        return self

    def disable(self) -> "Memoizer":
        """Disable memoization permanently on this instance."""
        self._disabled = True
        return self

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)
