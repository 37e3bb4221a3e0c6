# =============================================================================
# session_store.py — Session-keyed Solution Store
# =============================================================================
#
# Maps an opaque session id to AT MOST ONE pending solution (a tuple of note
# names).  The generator and the verifier only ever talk to this interface:
#
#   get(session_id)          -> tuple[str, ...] | None
#   set(session_id, notes)   -> None    (replaces any previous solution)
#   clear(session_id)        -> None    (no-op if nothing is pending)
#
# MemorySolutionStore keeps solutions in a process-local dict.  Lifetime is
# the process lifetime; unverified solutions expire after `ttl` seconds so
# abandoned sessions cannot grow the dict without bound.
#
# Concurrency:
#   Every operation holds one lock, so the dict is never corrupted by parallel
#   request threads.  get-then-clear in the verifier is NOT atomic across the
#   two calls: a create racing a verify on the same session is last-write-wins.

from __future__ import annotations
import threading
import time
from typing import Callable, Sequence

from MCE.NMM.constants import SOLUTION_TTL_SEC


class SolutionStore:
    """Abstract get / set / clear capability for per-session solutions."""

    def get(self, session_id: str) -> tuple[str, ...] | None:
        raise NotImplementedError

    def set(self, session_id: str, notes: Sequence[str]) -> None:
        raise NotImplementedError

    def clear(self, session_id: str) -> None:
        raise NotImplementedError


class MemorySolutionStore(SolutionStore):
    """
    In-process solution store with expiry.

    Args:
        ttl:   Seconds a solution stays valid after it is set.  None disables
               expiry.
        clock: Monotonic time source, injectable for tests.
    """

    def __init__(
        self,
        ttl:   float | None = SOLUTION_TTL_SEC,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if ttl is not None and ttl <= 0:
            raise ValueError(f"ttl must be positive or None, got {ttl!r}")
        self.ttl    = ttl
        self._clock = clock
        self._lock  = threading.Lock()
        # session_id -> (notes, expires_at | None)
        self._solutions: dict[str, tuple[tuple[str, ...], float | None]] = {}

    def __len__(self) -> int:
        with self._lock:
            return len(self._solutions)

    def _expired(self, expires_at: float | None, now: float) -> bool:
        return expires_at is not None and now >= expires_at

    def get(self, session_id: str) -> tuple[str, ...] | None:
        with self._lock:
            entry = self._solutions.get(session_id)
            if entry is None:
                return None
            notes, expires_at = entry
            if self._expired(expires_at, self._clock()):
                del self._solutions[session_id]
                return None
            return notes

    def set(self, session_id: str, notes: Sequence[str]) -> None:
        with self._lock:
            now = self._clock()
            self._purge_locked(now)
            expires_at = now + self.ttl if self.ttl is not None else None
            self._solutions[session_id] = (tuple(notes), expires_at)

    def clear(self, session_id: str) -> None:
        with self._lock:
            self._solutions.pop(session_id, None)

    def purge_expired(self) -> int:
        """Drop every expired solution.  Returns how many were removed."""
        with self._lock:
            return self._purge_locked(self._clock())

    def _purge_locked(self, now: float) -> int:
        stale = [sid for sid, (_, exp) in self._solutions.items() if self._expired(exp, now)]
        for sid in stale:
            del self._solutions[sid]
        return len(stale)
