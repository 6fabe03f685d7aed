#!/usr/bin/env python3
"""
Bit Mixer
=========
Marsaglia xorshift step applied to raw 32-bit values.

The transform is a bijection on 32-bit integers, so it spreads bits around
but adds no entropy beyond the generator that fed it. ``xorshift32(0)`` is
always 0.
"""

MASK32 = 0xFFFFFFFF


def xorshift32(u32: int) -> int:
    """Apply the 13/17/15 shift-xor sequence to a 32-bit value."""
    u32 &= MASK32
    u32 ^= (u32 << 13) & MASK32
    u32 ^= u32 >> 17
    u32 ^= (u32 << 15) & MASK32
    return u32
