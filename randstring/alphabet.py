#!/usr/bin/env python3
"""
Alphabet Mapper
===============
Maps raw 32-bit randomness onto the 64-character output alphabet.

Two mappers:
- map_modulo: ``ALPHABET[raw % modulus]``. For modulus 64 there is no modulo
  bias on 32-bit input since 64 divides 2**32. The strategies use modulus 62,
  which leaves a small bias towards the first 2**32 % 62 indices.
- map_uniform: uniform integer distribution over an inclusive index range,
  by rejection sampling on the source's 32-bit draws.

Every strategy maps into indices 0-61, so the trailing '+' and '/' are never
produced. That matches the historical output and is kept.
"""

import string

ALPHABET = string.ascii_uppercase + string.ascii_lowercase + string.digits + "+/"
ALPHABET_SIZE = len(ALPHABET)

# Symbols reachable through indices 0-61
REACHABLE = ALPHABET[:62]

U32_RANGE = 1 << 32


def _check_range(low: int, high: int) -> None:
    if low < 0 or high >= ALPHABET_SIZE or low > high:
        raise ValueError(
            f"Index range [{low}, {high}] is outside alphabet [0, {ALPHABET_SIZE})"
        )


def map_modulo(raw: int, modulus: int = 62) -> str:
    """Map a raw value to a symbol by remainder."""
    _check_range(0, modulus - 1)
    return ALPHABET[raw % modulus]


def uniform_index(source, low: int = 0, high: int = 61) -> int:
    """
    Draw an integer uniformly from [low, high] using a 32-bit source.

    Values from the incomplete top bucket are rejected and redrawn, so the
    result carries no modulo bias.
    """
    _check_range(low, high)
    span = high - low + 1
    limit = U32_RANGE - (U32_RANGE % span)
    while True:
        raw = source.draw_u32()
        if raw < limit:
            return low + raw % span


def map_uniform(source, low: int = 0, high: int = 61) -> str:
    """Map a uniform draw from [low, high] to a symbol."""
    return ALPHABET[uniform_index(source, low, high)]
