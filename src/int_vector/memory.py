"""
Allocation guard for vector storage

Asks psutil whether a new buffer fits in available system memory before
the vector allocates it. When psutil cannot answer, the allocation goes
ahead and the interpreter's own MemoryError has the last word.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import psutil

from .config import VectorConfig, get_vector_config

logger = logging.getLogger(__name__)


@dataclass
class MemorySnapshot:
    """Memory usage snapshot at a point in time"""
    rss_mb: float = 0.0  # Resident Set Size (physical memory)
    available_mb: float = 0.0  # Available system memory
    percent: float = 0.0  # System memory in use

    def __post_init__(self):
        """Capture current memory state"""
        try:
            memory_info = psutil.Process().memory_info()
            system_memory = psutil.virtual_memory()

            self.rss_mb = memory_info.rss / 1024 / 1024
            self.available_mb = system_memory.available / 1024 / 1024
            self.percent = system_memory.percent
        except (psutil.Error, OSError) as e:
            logger.debug(f"Memory snapshot unavailable: {e}")


class AllocationGuard:
    """Decides whether a buffer of a given size may be allocated"""

    def __init__(self, config: Optional[VectorConfig] = None):
        self.config = config or get_vector_config()

    def available_bytes(self) -> Optional[int]:
        """Available system memory, or None when psutil cannot tell"""
        try:
            return psutil.virtual_memory().available
        except (psutil.Error, OSError) as e:
            logger.debug(f"psutil could not report available memory: {e}")
            return None

    def can_allocate(self, nbytes: int) -> bool:
        """
        Check that nbytes fit in available memory

        Requests larger than the configured headroom must also leave that
        headroom free. Smaller requests only have to fit.
        """
        if not self.config.check_system_memory:
            return True

        available = self.available_bytes()
        if available is None:
            return True

        headroom = self.config.get_headroom_bytes()
        if nbytes <= headroom:
            return nbytes <= available
        return nbytes <= available - headroom

    def snapshot(self) -> MemorySnapshot:
        return MemorySnapshot()

    def describe(self) -> str:
        """One-line memory summary for failure logs"""
        snapshot = self.snapshot()
        return (
            f"rss={snapshot.rss_mb:.1f}MB available={snapshot.available_mb:.1f}MB "
            f"used={snapshot.percent:.1f}%"
        )
