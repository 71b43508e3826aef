import threading

HITS_EXTENSION = "chirpy.hits"


class HitCounter:
    """Process-wide request counter for the file server."""

    def __init__(self):
        self._lock = threading.Lock()
        self._value = 0

    def increment(self) -> int:
        with self._lock:
            self._value += 1
            return self._value

    @property
    def value(self) -> int:
        with self._lock:
            return self._value

    def reset(self) -> int:
        """Zero the counter and return the count it held."""
        with self._lock:
            previous, self._value = self._value, 0
            return previous
