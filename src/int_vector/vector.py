"""
IntVector - growable signed integer container

Linus-style direct data structure: one owning type, one buffer, no layers.

Design Principles:
- Capacity doubles on demand (1, 2, 4, 8, ...) for amortized O(1) append
- The array('q') buffer never leaves the vector; callers get live elements
  through bounds-checked accessors, refs and iterators only
- No implicit copies - clone() duplicates, take() transfers ownership
- Not thread-safe - serialize access externally when sharing an instance

Forbidden usage: after release() every operation except release(), len(),
length, capacity, is_released and get_stats() raises UseAfterReleaseError.
Construct a new IntVector instead.
"""

import logging
from array import array
from bisect import bisect_left
from typing import Any, Dict, Iterable, Iterator, List, Optional

import xxhash

from .config import SLOT_BYTES, VectorConfig, get_vector_config
from .errors import (AllocationFailure, StaleReferenceError,
                     UseAfterReleaseError, ValueOutOfRangeError)
from .memory import AllocationGuard

logger = logging.getLogger(__name__)

TYPECODE = "q"
INT_MIN = -(1 << 63)
INT_MAX = (1 << 63) - 1


def _check_value(value: Any) -> int:
    """Validate an element before it reaches the buffer"""
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"IntVector holds int values, got {type(value).__name__}")
    if not INT_MIN <= value <= INT_MAX:
        raise ValueOutOfRangeError(f"Value {value} does not fit in a signed 64-bit slot")
    return value


def _copy_live(source: array, target: array, length: int) -> None:
    """Copy the first length slots of source into target without a temporary array"""
    with memoryview(source) as src, memoryview(target) as dst:
        dst[:length] = src[:length]


class ElementRef:
    """
    Borrowed view of one element

    Valid until the vector reallocates, sorts, is released or hands its
    buffer to another vector via take().
    """

    __slots__ = ("_vector", "_index", "_generation")

    def __init__(self, vector: "IntVector", index: int):
        self._vector = vector
        self._index = index
        self._generation = vector._generation

    @property
    def index(self) -> int:
        return self._index

    @property
    def is_valid(self) -> bool:
        return self._vector._generation == self._generation

    def _check(self) -> None:
        if not self.is_valid:
            raise StaleReferenceError(
                f"Reference to index {self._index} is stale: the vector was "
                f"reallocated, sorted, released or transferred"
            )

    @property
    def value(self) -> int:
        self._check()
        return self._vector._storage[self._index]

    def set(self, value: int) -> None:
        self._check()
        self._vector._storage[self._index] = _check_value(value)

    def __repr__(self) -> str:
        state = "valid" if self.is_valid else "stale"
        return f"ElementRef(index={self._index}, {state})"


class IntVector:
    """Owned, contiguous, growable sequence of signed 64-bit integers"""

    def __init__(self, config: Optional[VectorConfig] = None):
        self._config = config or get_vector_config()
        self._guard = AllocationGuard(self._config)

        # Core state - storage is None iff capacity == 0
        self._storage: Optional[array] = None
        self._length = 0
        self._capacity = 0

        # Bumped whenever outstanding refs and iterators must die
        self._generation = 0
        self._growth_count = 0
        self._released = False

    @classmethod
    def from_iterable(cls, values: Iterable[int],
                      config: Optional[VectorConfig] = None) -> "IntVector":
        """Construct a vector and append values in order"""
        vector = cls(config)
        vector.extend(values)
        return vector

    @property
    def length(self) -> int:
        return self._length

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def is_released(self) -> bool:
        return self._released

    def _ensure_live(self) -> None:
        if self._released:
            raise UseAfterReleaseError(
                "IntVector used after release(); construct a new IntVector instead"
            )

    def _allocation_failure(self, reason: str, capacity: int, nbytes: int) -> AllocationFailure:
        message = f"Cannot allocate {capacity} slots ({nbytes} bytes): {reason}"
        logger.error(f"{message} [{self._guard.describe()}]")
        return AllocationFailure(message, requested_capacity=capacity, requested_bytes=nbytes)

    def _allocate(self, capacity: int) -> array:
        """Allocate a zeroed buffer of capacity slots or fail fatally"""
        nbytes = capacity * SLOT_BYTES

        if capacity > self._config.max_capacity:
            raise self._allocation_failure(
                f"exceeds max_capacity {self._config.max_capacity} "
                f"({self._config.get_max_buffer_bytes()} bytes)", capacity, nbytes
            )
        if not self._guard.can_allocate(nbytes):
            raise self._allocation_failure("not enough free system memory", capacity, nbytes)

        try:
            return array(TYPECODE, [0]) * capacity
        except MemoryError as e:
            raise self._allocation_failure("interpreter out of memory", capacity, nbytes) from e

    def _grow(self) -> None:
        new_capacity = 1 if self._capacity == 0 else self._capacity * 2
        new_storage = self._allocate(new_capacity)

        # Copy live elements in order, then drop the old buffer
        if self._length:
            _copy_live(self._storage, new_storage, self._length)

        old_capacity = self._capacity
        self._storage = new_storage
        self._capacity = new_capacity
        self._generation += 1
        self._growth_count += 1
        logger.debug(f"Grew storage {old_capacity} -> {new_capacity} slots")

    def append(self, value: int) -> None:
        """
        Append value at index length

        Grows storage first when the buffer is full. Raises AllocationFailure
        without touching the vector when the buffer cannot grow.
        """
        self._ensure_live()
        value = _check_value(value)

        if self._length == self._capacity:
            self._grow()

        self._storage[self._length] = value
        self._length += 1

    def extend(self, values: Iterable[int]) -> None:
        """Append each value in turn"""
        self._ensure_live()
        if values is self:
            values = self.to_list()
        for value in values:
            self.append(value)

    def sort(self) -> None:
        """Reorder live elements into non-decreasing order"""
        self._ensure_live()
        if self._length > 1:
            live = self._storage[:self._length]
            self._storage[:self._length] = array(TYPECODE, sorted(live))
        self._generation += 1
        logger.debug(f"Sorted {self._length} elements")

    def release(self) -> None:
        """Drop storage and reset to the empty state. Repeated calls are no-ops."""
        if self._released:
            return

        self._storage = None
        self._length = 0
        self._capacity = 0
        self._generation += 1
        self._released = True
        logger.debug("Released IntVector storage")

    def search_unsorted(self, value: int) -> int:
        """Index of the first element equal to value, or length if absent"""
        self._ensure_live()
        for index in range(self._length):
            if self._storage[index] == value:
                return index
        return self._length

    def search_sorted(self, value: int) -> int:
        """
        Lower-bound binary search

        Assumes live elements are in non-decreasing order; this is not
        checked. Returns the smallest index i with every element before i
        less than value and every element from i on >= value.
        """
        self._ensure_live()
        if self._storage is None:
            return 0
        return bisect_left(self._storage, value, 0, self._length)

    def _normalize_index(self, index: int) -> int:
        if isinstance(index, bool) or not isinstance(index, int):
            raise TypeError(f"IntVector indices must be integers, not {type(index).__name__}")

        position = index + self._length if index < 0 else index
        if not 0 <= position < self._length:
            raise IndexError(f"IntVector index {index} out of range (length {self._length})")
        return position

    def __getitem__(self, index: int) -> int:
        self._ensure_live()
        if isinstance(index, slice):
            raise TypeError("IntVector does not support slicing; use to_list()")
        return self._storage[self._normalize_index(index)]

    def ref(self, index: int) -> ElementRef:
        """Borrow a view of one live element"""
        self._ensure_live()
        return ElementRef(self, self._normalize_index(index))

    def __len__(self) -> int:
        return self._length

    def __iter__(self) -> Iterator[int]:
        self._ensure_live()
        return self._iterate(self._generation)

    def _iterate(self, generation: int) -> Iterator[int]:
        index = 0
        while True:
            if self._generation != generation:
                raise StaleReferenceError("IntVector was reallocated, sorted or released during iteration")
            if index >= self._length:
                return
            yield self._storage[index]
            index += 1

    def __contains__(self, value: object) -> bool:
        return self.search_unsorted(value) < self._length

    def to_list(self) -> List[int]:
        """Detached copy of the live elements"""
        self._ensure_live()
        if self._storage is None:
            return []
        return self._storage[:self._length].tolist()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IntVector):
            return NotImplemented
        self._ensure_live()
        other._ensure_live()
        if self._length != other._length:
            return False
        return self.to_list() == other.to_list()

    __hash__ = None

    def __copy__(self):
        raise TypeError("IntVector cannot be copied implicitly; use clone() or take()")

    def __deepcopy__(self, memo: Dict[int, Any]) -> "IntVector":
        return self.clone()

    def clone(self) -> "IntVector":
        """Deep copy with its own buffer of the same capacity"""
        self._ensure_live()
        other = IntVector(self._config)
        if self._storage is not None:
            other._storage = other._allocate(self._capacity)
            _copy_live(self._storage, other._storage, self._length)
            other._length = self._length
            other._capacity = self._capacity
        return other

    def take(self) -> "IntVector":
        """
        Transfer ownership of the buffer to a new vector

        The source is left empty (not released) and its refs go stale.
        """
        self._ensure_live()
        other = IntVector(self._config)
        other._storage = self._storage
        other._length = self._length
        other._capacity = self._capacity
        other._growth_count = self._growth_count

        self._storage = None
        self._length = 0
        self._capacity = 0
        self._generation += 1
        logger.debug(f"Transferred buffer of {other._capacity} slots")
        return other

    def fingerprint(self) -> str:
        """XXH3-64 digest of the live elements"""
        self._ensure_live()
        data = self._storage[:self._length].tobytes() if self._storage is not None else b""
        return xxhash.xxh3_64(data).hexdigest()

    def get_stats(self) -> Dict[str, Any]:
        """Get storage statistics"""
        return {
            "length": self._length,
            "capacity": self._capacity,
            "growth_count": self._growth_count,
            "released": self._released,
            "buffer_bytes": self._capacity * SLOT_BYTES,
            "fingerprint": None if self._released else self.fingerprint(),
        }

    def __repr__(self) -> str:
        if self._released:
            return "IntVector(<released>)"
        return f"IntVector({self.to_list()!r}, capacity={self._capacity})"
