"""ContextVar-based scan configuration for orgscan.

Provides thread-local configuration using Python's ContextVars (PEP 567).
Scanners read the active config when they are created.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed and race conditions are impossible.

Usage:
    from orgscan.config import ScanConfig, scan_config_context

    with scan_config_context(ScanConfig(stream_capacity=16)):
        scanner = Scanner()
        scanner.feed(source)
        scanner.finalize()

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass

DEFAULT_STREAM_CAPACITY = 100
DEFAULT_CHUNK_SIZE = 64 * 1024


@dataclass(frozen=True, slots=True)
class ScanConfig:
    """Immutable scan configuration.

    Attributes:
        stream_capacity: Items the producer may run ahead of the consumer
            before put() blocks. 0 means unbounded.
        chunk_size: Bytes per read when the loader feeds a file in pieces
        source_file: Default source file recorded on spans

    """

    stream_capacity: int = DEFAULT_STREAM_CAPACITY
    chunk_size: int = DEFAULT_CHUNK_SIZE
    source_file: str | None = None

    def __post_init__(self) -> None:
        if self.stream_capacity < 0:
            msg = f"stream_capacity must be >= 0, got {self.stream_capacity}"
            raise ValueError(msg)
        if self.chunk_size <= 0:
            msg = f"chunk_size must be > 0, got {self.chunk_size}"
            raise ValueError(msg)

    @classmethod
    def from_dict(cls, config_dict: dict) -> "ScanConfig":
        """Create ScanConfig from dictionary.

        Only includes keys that are valid ScanConfig fields; unknown keys
        are silently ignored.

        Args:
            config_dict: Dictionary with config values. Keys should match
                ScanConfig attribute names.

        Returns:
            New ScanConfig instance with values from dict.

        Example:
            >>> config = ScanConfig.from_dict({
            ...     "stream_capacity": 8,
            ...     "unknown_key": "ignored",
            ... })
            >>> config.stream_capacity
            8

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: ScanConfig = ScanConfig()

_scan_config: ContextVar[ScanConfig] = ContextVar(
    "scan_config",
    default=_DEFAULT_CONFIG,
)


def get_scan_config() -> ScanConfig:
    """Get current scan configuration (thread-local)."""
    return _scan_config.get()


def set_scan_config(config: ScanConfig) -> None:
    """Set scan configuration for current context.

    Args:
        config: ScanConfig instance to use for this context.

    """
    _scan_config.set(config)


def reset_scan_config() -> None:
    """Reset to default configuration."""
    _scan_config.set(_DEFAULT_CONFIG)


@contextmanager
def scan_config_context(config: ScanConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Restores the previous config even if an exception is raised.

    Example:
        >>> with scan_config_context(ScanConfig(stream_capacity=0)):
        ...     get_scan_config().stream_capacity
        0

    """
    previous = _scan_config.get()
    _scan_config.set(config)
    try:
        yield
    finally:
        _scan_config.set(previous)


__all__ = [
    "DEFAULT_CHUNK_SIZE",
    "DEFAULT_STREAM_CAPACITY",
    "ScanConfig",
    "get_scan_config",
    "reset_scan_config",
    "scan_config_context",
    "set_scan_config",
]
