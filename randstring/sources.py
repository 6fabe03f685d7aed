#!/usr/bin/env python3
"""
Entropy Sources
===============
Raw 32-bit randomness from three kinds of source.

- HardwareRng: the CPU/board hardware generator, exposed by the kernel as a
  character device. Must be probed first; may report "no value ready".
- OsRng: the operating system's cryptographic generator, held through a
  scoped handle that is released on every exit path.
- SeededPrng: Mersenne Twister (MT19937) seeded once. Deterministic and
  NOT cryptographically secure.

Every source exposes ``draw_u32()``. They share no state; build one per
generation call.

Usage:
    with OsRng() as rd:
        seed = rd.draw_u32()

    prng = SeededPrng(seed)
    value = prng.draw_u32()
"""

import os
import random
import secrets
import logging
from pathlib import Path
from typing import Optional, Protocol

from randstring.errors import AcquisitionFailure, HardwareRetryExhausted, SourceUnavailable
from randstring.settings import get_setting

logger = logging.getLogger(__name__)

U32_BYTES = 4


class EntropySource(Protocol):
    """Anything that hands out unsigned 32-bit integers."""

    def draw_u32(self) -> int:
        ...


def _u32_from_bytes(chunk: bytes) -> int:
    return int.from_bytes(chunk, 'little')


# =============================================================================
# Hardware
# =============================================================================

def probe_hardware(cpuinfo_path: Optional[str] = None, flag: Optional[str] = None) -> bool:
    """
    Report whether the processor advertises a hardware RNG instruction.

    Reads the capability flags from the kernel's processor table. Platforms
    without that table report False.
    """
    path = Path(cpuinfo_path or get_setting("hardware.cpuinfo", "/proc/cpuinfo"))
    flag = flag or get_setting("hardware.cpu_flag", "rdrand")

    try:
        text = path.read_text(errors='replace')
    except OSError as e:
        logger.debug(f"CPU capability table unreadable ({path}): {e}")
        return False

    for line in text.splitlines():
        key, _, value = line.partition(':')
        if key.strip() in ('flags', 'Features') and flag in value.split():
            return True
    return False


class HardwareRng:
    """
    Hardware random number generator behind a kernel device.

    The device is opened non-blocking. ``draw_u32`` retries a bounded number
    of times when the device has no value ready (empty or short read, or
    EAGAIN), then raises HardwareRetryExhausted. Any other read error is
    reported as SourceUnavailable.
    """

    def __init__(self, device: Optional[str] = None, retries: Optional[int] = None,
                 cpuinfo_path: Optional[str] = None):
        self.device = Path(device or get_setting("hardware.device", "/dev/hwrng"))
        self.retries = retries if retries is not None else get_setting("hardware.retries", 10)
        if self.retries < 1:
            raise ValueError(f"retries must be at least 1, got {self.retries}")
        self.cpuinfo_path = cpuinfo_path
        self._handle = None

    def probe(self) -> bool:
        """True when the CPU has the instruction and the device is readable."""
        if not probe_hardware(self.cpuinfo_path):
            return False
        return self.device.exists() and os.access(self.device, os.R_OK)

    def open(self) -> "HardwareRng":
        if self._handle is None:
            try:
                fd = os.open(self.device, os.O_RDONLY | getattr(os, 'O_NONBLOCK', 0))
                self._handle = os.fdopen(fd, 'rb', buffering=0)
            except OSError as e:
                raise SourceUnavailable(f"Cannot open hardware RNG {self.device}: {e}") from e
            logger.debug(f"Opened hardware RNG {self.device}")
        return self

    def close(self) -> None:
        if self._handle is not None:
            self._handle.close()
            self._handle = None

    def __enter__(self) -> "HardwareRng":
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def draw_u32(self) -> int:
        if self._handle is None:
            self.open()

        for attempt in range(self.retries):
            try:
                chunk = self._handle.read(U32_BYTES)
            except BlockingIOError:
                chunk = None
            except OSError as e:
                raise SourceUnavailable(f"Cannot read hardware RNG {self.device}: {e}") from e
            if chunk and len(chunk) == U32_BYTES:
                return _u32_from_bytes(chunk)
            logger.debug(f"Hardware RNG not ready, attempt {attempt + 1}/{self.retries}")

        raise HardwareRetryExhausted(self.retries)


# =============================================================================
# Operating system
# =============================================================================

class OsRng:
    """
    Scoped handle on the OS cryptographic random source.

    On POSIX the handle is an open file on the urandom device. Where no
    device path applies (Windows), reads go through ``os.urandom``.
    Failures raise AcquisitionFailure and are not retried.
    """

    def __init__(self, device: Optional[str] = None):
        if device is None and os.name != 'nt':
            device = get_setting("os_rng.device", "/dev/urandom")
        self.device = device
        self._handle = None
        self._read = None

    @property
    def is_open(self) -> bool:
        return self._read is not None

    def open(self) -> "OsRng":
        if self.is_open:
            return self
        if self.device is None:
            self._read = os.urandom
        else:
            try:
                self._handle = open(self.device, 'rb')
            except OSError as e:
                raise AcquisitionFailure(f"Cannot open OS random source {self.device}: {e}") from e
            self._read = self._handle.read
        logger.debug(f"Acquired OS random source {self.device or 'os.urandom'}")
        return self

    def close(self) -> None:
        if self._handle is not None:
            self._handle.close()
            self._handle = None
        self._read = None

    def __enter__(self) -> "OsRng":
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def draw_u32(self) -> int:
        if not self.is_open:
            raise AcquisitionFailure("OS random source is not open")
        try:
            chunk = self._read(U32_BYTES)
        except OSError as e:
            raise AcquisitionFailure(f"Cannot read OS random source: {e}") from e
        if len(chunk) != U32_BYTES:
            raise AcquisitionFailure(
                f"Short read from OS random source ({len(chunk)} of {U32_BYTES} bytes)"
            )
        return _u32_from_bytes(chunk)


def os_seed() -> int:
    """32-bit seed from the OS generator, without holding a handle."""
    return secrets.randbits(32)


# =============================================================================
# Pseudo-random
# =============================================================================

class SeededPrng:
    """
    Mersenne Twister seeded once at construction.

    Output is a pure function of the seed and the number of draws so far.
    Not suitable for secrets.
    """

    def __init__(self, seed: int):
        self.seed = seed
        self._rng = random.Random(seed)

    def draw_u32(self) -> int:
        return self._rng.getrandbits(32)

    def __repr__(self) -> str:
        return f"<SeededPrng seed={self.seed}>"
