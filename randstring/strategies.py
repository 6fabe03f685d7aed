#!/usr/bin/env python3
"""
Generator Strategies
====================
Four ways of building a random string, each pairing an entropy source with
an optional mixer and an alphabet mapper:

    xorshift       SeededPrng(os seed)      -> xorshift32 -> modulo 62
    hardware       HardwareRng              ->            -> modulo 62
    std-random     SeededPrng(os seed)      ->            -> uniform[0, 61]
    std-my-random  SeededPrng(OsRng seed)   ->            -> uniform[0, 61]

All of them stop at alphabet index 61, so '+' and '/' never show up.

Usage:
    from randstring.strategies import generate, generate_batch

    token = generate("std-random", 32)
    batch = generate_batch("xorshift", 10, count=3, seed=1234)
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from randstring.alphabet import map_modulo, map_uniform
from randstring.errors import SourceUnavailable, UnknownStrategy
from randstring.mixer import MASK32, xorshift32
from randstring.sources import HardwareRng, OsRng, SeededPrng, os_seed

logger = logging.getLogger(__name__)

MODULUS = 62
UNIFORM_LOW = 0
UNIFORM_HIGH = 61


def _check_length(length: int) -> None:
    if not isinstance(length, int) or length < 0:
        raise ValueError(f"length must be a non-negative integer, got {length!r}")


# =============================================================================
# Strategies
# =============================================================================

def xorshift_string(length: int, seed: Optional[int] = None) -> str:
    """Mersenne Twister output pushed through xorshift32, mapped by remainder."""
    _check_length(length)
    if seed is None:
        seed = os_seed()
    rng = SeededPrng(seed)
    logger.debug(f"xorshift: seeded with {seed}")
    return ''.join(map_modulo(xorshift32(rng.draw_u32()), MODULUS) for _ in range(length))


def hardware_string(length: int, device: Optional[str] = None, retries: Optional[int] = None,
                    cpuinfo_path: Optional[str] = None) -> str:
    """
    Hardware RNG output mapped by remainder.

    Returns an empty string when the hardware source is missing or stops
    delivering values; this strategy never raises for an absent source.
    """
    _check_length(length)
    hw = HardwareRng(device=device, retries=retries, cpuinfo_path=cpuinfo_path)
    if not hw.probe():
        logger.info("hardware: no hardware RNG available, returning empty string")
        return ""

    try:
        with hw:
            return ''.join(map_modulo(hw.draw_u32(), MODULUS) for _ in range(length))
    except SourceUnavailable as e:
        logger.warning(f"hardware: {e}, returning empty string")
        return ""


def std_random_string(length: int, seed: Optional[int] = None) -> str:
    """Mersenne Twister seeded from the OS, sampled uniformly over [0, 61]."""
    _check_length(length)
    if seed is None:
        seed = os_seed()
    rng = SeededPrng(seed)
    logger.debug(f"std-random: seeded with {seed}")
    return ''.join(map_uniform(rng, UNIFORM_LOW, UNIFORM_HIGH) for _ in range(length))


def std_my_random_string(length: int, seed: Optional[int] = None,
                         device: Optional[str] = None) -> str:
    """
    Mersenne Twister seeded through a scoped OS random handle.

    AcquisitionFailure from the handle propagates to the caller.
    """
    _check_length(length)
    if seed is None:
        with OsRng(device) as rd:
            seed = rd.draw_u32()
    rng = SeededPrng(seed)
    logger.debug(f"std-my-random: seeded with {seed}")
    return ''.join(map_uniform(rng, UNIFORM_LOW, UNIFORM_HIGH) for _ in range(length))


# =============================================================================
# Registry
# =============================================================================

@dataclass(frozen=True)
class StrategyInfo:
    """Description of a registered strategy."""
    name: str
    source: str
    mixer: Optional[str]
    mapper: str
    func: Callable[..., str]
    seeded: bool
    low: int = 0
    high: int = MODULUS - 1


STRATEGIES: Dict[str, StrategyInfo] = {
    'xorshift': StrategyInfo(
        name='xorshift',
        source='SeededPrng (OS seed)',
        mixer='xorshift32',
        mapper='modulo 62',
        func=xorshift_string,
        seeded=True,
    ),
    'hardware': StrategyInfo(
        name='hardware',
        source='HardwareRng',
        mixer=None,
        mapper='modulo 62',
        func=hardware_string,
        seeded=False,
    ),
    'std-random': StrategyInfo(
        name='std-random',
        source='SeededPrng (OS seed)',
        mixer=None,
        mapper='uniform [0, 61]',
        func=std_random_string,
        seeded=True,
        low=UNIFORM_LOW,
        high=UNIFORM_HIGH,
    ),
    'std-my-random': StrategyInfo(
        name='std-my-random',
        source='SeededPrng (OsRng seed)',
        mixer=None,
        mapper='uniform [0, 61]',
        func=std_my_random_string,
        seeded=True,
        low=UNIFORM_LOW,
        high=UNIFORM_HIGH,
    ),
}

STRATEGY_ORDER = ('xorshift', 'hardware', 'std-random', 'std-my-random')
DEFAULT_STRATEGY = 'std-random'


def describe(name: str) -> StrategyInfo:
    info = STRATEGIES.get(name)
    if info is None:
        raise UnknownStrategy(name, STRATEGY_ORDER)
    return info


def generate(name: str, length: int, seed: Optional[int] = None, **source_kwargs) -> str:
    """
    Generate one string with the named strategy.

    Args:
        name: Strategy name (see STRATEGY_ORDER)
        length: Number of characters; 0 gives an empty string
        seed: Fixed seed for the seeded strategies, ignored by 'hardware'
        **source_kwargs: Passed to the strategy (device paths, retries)

    Returns:
        The generated string
    """
    info = describe(name)
    if info.seeded:
        return info.func(length, seed=seed, **source_kwargs)
    return info.func(length, **source_kwargs)


def generate_batch(name: str, length: int, count: int, seed: Optional[int] = None,
                   **source_kwargs) -> List[str]:
    """
    Generate ``count`` strings with the named strategy.

    With a fixed seed, string i uses seed + i so the batch is reproducible
    without repeating the same string.
    """
    if count < 0:
        raise ValueError(f"count must be non-negative, got {count}")
    results = []
    for i in range(count):
        item_seed = None if seed is None else (seed + i) & MASK32
        results.append(generate(name, length, seed=item_seed, **source_kwargs))
    return results
