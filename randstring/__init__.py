#!/usr/bin/env python3
"""
randstring - Random String Generator
====================================

Generates random strings over a 64-symbol alphabet (A-Z a-z 0-9 + /) from
several entropy sources, to compare generation strategies side by side.

Quick Start
-----------
    from randstring import generate, generate_batch

    token = generate("std-random", 32)
    tokens = generate_batch("xorshift", 16, count=4, seed=42)

Modules
-------
    randstring.sources    - Entropy sources (hardware, OS, seeded PRNG)
    randstring.mixer      - xorshift32 bit mixer
    randstring.alphabet   - Alphabet and index mappers
    randstring.strategies - The four named strategies
    randstring.report     - Symbol coverage statistics

CLI Usage
---------
    python -m randstring
    python -m randstring -l 32 -n 8 -o outstring.txt
"""

__version__ = "0.1.0"

from .alphabet import ALPHABET, REACHABLE, map_modulo, map_uniform
from .errors import (
    RandStringError,
    SourceUnavailable,
    HardwareRetryExhausted,
    AcquisitionFailure,
    UnknownStrategy,
)
from .mixer import xorshift32
from .sources import HardwareRng, OsRng, SeededPrng, probe_hardware
from .strategies import (
    STRATEGIES,
    STRATEGY_ORDER,
    StrategyInfo,
    describe,
    generate,
    generate_batch,
)

__all__ = [
    '__version__',
    # Alphabet
    'ALPHABET',
    'REACHABLE',
    'map_modulo',
    'map_uniform',
    # Errors
    'RandStringError',
    'SourceUnavailable',
    'HardwareRetryExhausted',
    'AcquisitionFailure',
    'UnknownStrategy',
    # Sources
    'HardwareRng',
    'OsRng',
    'SeededPrng',
    'probe_hardware',
    'xorshift32',
    # Strategies
    'STRATEGIES',
    'STRATEGY_ORDER',
    'StrategyInfo',
    'describe',
    'generate',
    'generate_batch',
]
