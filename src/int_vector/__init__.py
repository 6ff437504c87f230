"""
int_vector - growable signed integer container

Single data structure, no abstractions.
"""

from .config import VectorConfig, get_vector_config, reset_config
from .errors import (AllocationFailure, IntVectorError, StaleReferenceError,
                     UseAfterReleaseError, ValueOutOfRangeError)
from .vector import ElementRef, IntVector

__version__ = "0.1.0"

__all__ = [
    "IntVector",
    "ElementRef",
    "VectorConfig",
    "get_vector_config",
    "reset_config",
    "IntVectorError",
    "AllocationFailure",
    "UseAfterReleaseError",
    "StaleReferenceError",
    "ValueOutOfRangeError",
]
