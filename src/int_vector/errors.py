"""
Error types for IntVector.

There is no recoverable error path inside the container: every failure is
either resource exhaustion or a programming error on the caller's side.
"""

from typing import Optional


class IntVectorError(Exception):
    """Base class for IntVector errors"""

    pass


class AllocationFailure(IntVectorError, MemoryError):
    """Raised when append cannot grow the storage buffer"""

    def __init__(self, message: str, requested_capacity: int = 0,
                 requested_bytes: Optional[int] = None):
        super().__init__(message)
        self.requested_capacity = requested_capacity
        self.requested_bytes = requested_bytes


class UseAfterReleaseError(IntVectorError, RuntimeError):
    """Raised when a released vector is used again"""

    pass


class StaleReferenceError(IntVectorError, RuntimeError):
    """Raised when a ref or iterator outlives the buffer layout it was taken from"""

    pass


class ValueOutOfRangeError(IntVectorError, ValueError):
    """Raised when a value does not fit in a signed 64-bit slot"""

    pass
