"""
Transient emphasis for chosen search results.

Emphasis is tracked per node in an explicit map of
``{original size, expiry}`` instead of by mutating the node and scheduling
an independent restore. Starting emphasis on a node that is already
emphasized extends the expiry and keeps the originally captured size, so
overlapping requests never capture an inflated value.
"""

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, List

from ..config import EMPHASIS_SECONDS, EMPHASIS_SIZE_FACTOR

logger = logging.getLogger(__name__)


@dataclass
class Emphasis:
    original_size: float
    expires_at: float


class EmphasisTracker:
    """
    Map of active emphases keyed by node id.

    Args:
        duration: Seconds an emphasis stays active.
        clock: Monotonic time source; injectable for tests.
    """

    def __init__(
        self,
        duration: float = EMPHASIS_SECONDS,
        factor: float = EMPHASIS_SIZE_FACTOR,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.duration = duration
        self.factor = factor
        self.clock = clock
        self._active: Dict[str, Emphasis] = {}

    def start(self, node_id: str, current_size: float) -> Emphasis:
        """Begin (or extend) emphasis on a node."""
        now = self.clock()
        self.expire(now)
        entry = self._active.get(node_id)
        if entry is None:
            entry = Emphasis(original_size=current_size, expires_at=now + self.duration)
            self._active[node_id] = entry
        else:
            entry.expires_at = now + self.duration
            logger.debug(f"Extended emphasis on {node_id} until {entry.expires_at:.3f}")
        return entry

    def expire(self, now: float | None = None) -> List[str]:
        """Drop emphases whose time is up; returns the affected node ids."""
        now = self.clock() if now is None else now
        expired = [node_id for node_id, e in self._active.items() if e.expires_at <= now]
        for node_id in expired:
            del self._active[node_id]
        return expired

    def is_active(self, node_id: str, now: float | None = None) -> bool:
        now = self.clock() if now is None else now
        entry = self._active.get(node_id)
        return entry is not None and entry.expires_at > now

    def original_size(self, node_id: str) -> float | None:
        entry = self._active.get(node_id)
        return entry.original_size if entry else None

    def overrides(self, now: float | None = None) -> Dict[str, Dict[str, Any]]:
        """Display overrides for every active emphasis."""
        now = self.clock() if now is None else now
        return {
            node_id: {"size": entry.original_size * self.factor, "highlighted": True}
            for node_id, entry in self._active.items()
            if entry.expires_at > now
        }

    def clear(self) -> None:
        self._active.clear()

    def __len__(self) -> int:
        return len(self._active)
