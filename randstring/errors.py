#!/usr/bin/env python3
"""
Errors
======
Exception taxonomy for entropy acquisition and string generation.

    RandStringError
    ├── SourceUnavailable          hardware source missing (non-fatal)
    │   └── HardwareRetryExhausted bounded retry loop ran out
    ├── AcquisitionFailure         OS cryptographic handle failed (fatal)
    └── UnknownStrategy            also a ValueError
"""


class RandStringError(Exception):
    """Base class for all randstring errors."""


class SourceUnavailable(RandStringError):
    """The hardware random source is not present or not readable."""


class HardwareRetryExhausted(SourceUnavailable):
    """The hardware source reported no value ready on every attempt."""

    def __init__(self, attempts: int):
        super().__init__(f"Hardware RNG had no value ready after {attempts} attempts")
        self.attempts = attempts


class AcquisitionFailure(RandStringError):
    """The OS cryptographic random source could not be opened or read."""


class UnknownStrategy(RandStringError, ValueError):
    """Requested strategy name is not registered."""

    def __init__(self, name: str, available):
        super().__init__(
            f"Unknown strategy '{name}'. "
            f"Available strategies: {', '.join(available)}"
        )
        self.name = name


__all__ = [
    'RandStringError',
    'SourceUnavailable',
    'HardwareRetryExhausted',
    'AcquisitionFailure',
    'UnknownStrategy',
]
