"""
Process-wide session state.

Holds the set of place ids the user has rejected and a cache of resolved
addresses keyed by ``"lat,lng"``. Both only ever grow; they are reset when
the process restarts (or explicitly via ``clear`` in tests).
"""
from __future__ import annotations

import threading

from .models import normalize_place_id


def address_key(lat: float, lng: float) -> str:
    return f"{lat},{lng}"


class SessionStore:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._rejected: set[str] = set()
        self._addresses: dict[str, str] = {}
        self._hits = 0
        self._misses = 0

    # ── Rejections ──────────────────────────────────────────────────────

    def is_rejected(self, place_id: object) -> bool:
        key = normalize_place_id(place_id)
        with self._lock:
            return key in self._rejected

    def reject(self, place_id: object) -> bool:
        """Add ``place_id`` to the rejection set. Returns False if it was already there."""
        key = normalize_place_id(place_id)
        with self._lock:
            if key in self._rejected:
                return False
            self._rejected.add(key)
            return True

    @property
    def rejected_count(self) -> int:
        with self._lock:
            return len(self._rejected)

    # ── Address cache ───────────────────────────────────────────────────

    def lookup_address(self, key: str) -> str | None:
        with self._lock:
            address = self._addresses.get(key)
            if address is None:
                self._misses += 1
            else:
                self._hits += 1
            return address

    def cache_address(self, key: str, address: str) -> None:
        with self._lock:
            self._addresses[key] = address

    def stats(self) -> dict:
        with self._lock:
            total = self._hits + self._misses
            return {
                "size": len(self._addresses),
                "hits": self._hits,
                "misses": self._misses,
                "hit_rate": round(self._hits / total * 100, 1) if total > 0 else 0.0,
                "rejected": len(self._rejected),
            }

    def clear(self) -> None:
        with self._lock:
            self._rejected.clear()
            self._addresses.clear()
            self._hits = 0
            self._misses = 0


_session = SessionStore()


def get_session_store() -> SessionStore:
    """FastAPI dependency returning the process-wide store."""
    return _session
