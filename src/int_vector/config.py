"""
Configuration Management for IntVector

Following Linus's principle: "Good configuration is no configuration."
Provides sensible defaults with optional environment variable overrides.
"""

import os
from typing import Optional

import psutil

SLOT_BYTES = 8


def _calculate_default_max_capacity() -> int:
    """
    Derive a capacity ceiling from system memory

    A single vector may use at most a quarter of total RAM.
    """
    try:
        total_bytes = psutil.virtual_memory().total
        max_capacity = total_bytes // 4 // SLOT_BYTES
    except (psutil.Error, OSError):
        # Conservative fallback: 1M slots (8MB)
        return 1 << 20

    return max(VectorConfig.MIN_MAX_CAPACITY, min(max_capacity, VectorConfig.MAX_MAX_CAPACITY))


class VectorConfig:
    """IntVector storage configuration"""

    DEFAULT_MEMORY_HEADROOM_MB = 64  # Memory that must stay free after a growth
    DEFAULT_CHECK_SYSTEM_MEMORY = True

    MIN_MAX_CAPACITY = 1 << 10
    MAX_MAX_CAPACITY = 1 << 40

    def __init__(self, max_capacity: Optional[int] = None,
                 memory_headroom_mb: Optional[int] = None,
                 check_system_memory: Optional[bool] = None):
        # Explicit arguments win over environment variables
        if max_capacity is None:
            max_capacity = self._get_int_env("INT_VECTOR_MAX_CAPACITY", None)
        if max_capacity is None:
            max_capacity = _calculate_default_max_capacity()
        self.max_capacity = max_capacity

        if memory_headroom_mb is None:
            memory_headroom_mb = self._get_int_env(
                "INT_VECTOR_MEMORY_HEADROOM_MB", self.DEFAULT_MEMORY_HEADROOM_MB
            )
        self.memory_headroom_mb = memory_headroom_mb

        if check_system_memory is None:
            check_system_memory = self._get_bool_env(
                "INT_VECTOR_CHECK_SYSTEM_MEMORY", self.DEFAULT_CHECK_SYSTEM_MEMORY
            )
        self.check_system_memory = check_system_memory

        self._validate_config()

    def _get_int_env(self, key: str, default: Optional[int]) -> Optional[int]:
        """Get integer from environment variable with fallback"""
        try:
            value = os.environ.get(key)
            if value is not None:
                return int(value)
        except (ValueError, TypeError):
            pass
        return default

    def _get_bool_env(self, key: str, default: bool) -> bool:
        """Get boolean from environment variable with fallback"""
        value = os.environ.get(key)
        if value is None:
            return default
        value = value.strip().lower()
        if value in ("1", "true", "yes", "on"):
            return True
        if value in ("0", "false", "no", "off"):
            return False
        return default

    def _validate_config(self):
        """Validate configuration values"""
        if self.max_capacity <= 0:
            raise ValueError("max_capacity must be positive")
        if self.memory_headroom_mb < 0:
            raise ValueError("memory_headroom_mb cannot be negative")

    def get_headroom_bytes(self) -> int:
        """Get memory headroom in bytes"""
        return self.memory_headroom_mb * 1024 * 1024

    def get_max_buffer_bytes(self) -> int:
        """Get the largest buffer a single vector may hold"""
        return self.max_capacity * SLOT_BYTES

    def __repr__(self) -> str:
        return (
            f"VectorConfig("
            f"max_capacity={self.max_capacity}, "
            f"memory_headroom_mb={self.memory_headroom_mb}, "
            f"check_system_memory={self.check_system_memory})"
        )


# Global configuration instance
_config: Optional[VectorConfig] = None


def get_vector_config() -> VectorConfig:
    """Get global vector configuration instance"""
    global _config
    if _config is None:
        _config = VectorConfig()
    return _config


def reset_config():
    """Reset configuration (mainly for testing)"""
    global _config
    _config = None
