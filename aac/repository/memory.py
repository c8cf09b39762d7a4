"""
In-memory architecture repository keyed by architecture uid.

Architectures are immutable, so the repository stores and hands out the
instances themselves; every update replaces the whole aggregate.
"""

import logging
import threading
from typing import Dict, List, Optional

from aac.model import Architecture, ArchitectureUid

logger = logging.getLogger(__name__)


class InMemoryArchitectureRepository:
    """Thread-safe dict of architectures; contents are lost on restart."""

    def __init__(self):
        self._architectures: Dict[ArchitectureUid, Architecture] = {}
        self._lock = threading.Lock()

    def save(self, architecture: Architecture) -> Architecture:
        with self._lock:
            self._architectures[architecture.uid] = architecture
        logger.debug(f"Saved architecture: {architecture.uid}")
        return architecture

    def find_by_id(self, uid: ArchitectureUid) -> Optional[Architecture]:
        with self._lock:
            return self._architectures.get(uid)

    def find_all(self) -> List[Architecture]:
        with self._lock:
            return list(self._architectures.values())

    def delete(self, uid: ArchitectureUid) -> bool:
        with self._lock:
            removed = self._architectures.pop(uid, None)
        return removed is not None

    def exists(self, uid: ArchitectureUid) -> bool:
        with self._lock:
            return uid in self._architectures

    def __len__(self) -> int:
        with self._lock:
            return len(self._architectures)
