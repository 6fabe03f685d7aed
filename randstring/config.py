#!/usr/bin/env python3
"""
Run Configuration
=================
Immutable settings for one CLI run, built once from parsed arguments and
the defaults in configs/app.yaml.
"""

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from randstring.mixer import MASK32
from randstring.settings import get_setting, resolve_path

_LEADING_INT = re.compile(r'\s*([+-]?\d+)')


def atoi(text: str) -> int:
    """
    Parse the leading integer of a string, C ``atoi`` style.

    Trailing garbage is ignored and anything without a leading integer
    gives 0, so ``-l abc`` means length 0 rather than an error.
    """
    match = _LEADING_INT.match(text or '')
    if not match:
        return 0
    return int(match.group(1))


@dataclass(frozen=True)
class RunConfig:
    """Configuration for a generation run."""
    length: int
    count: int
    output: Path
    seed: Optional[int] = None
    stats: bool = False
    quiet: bool = False
    verbose: bool = False

    @classmethod
    def from_args(cls, args) -> "RunConfig":
        """
        Build from an argparse namespace.

        Missing values fall back to app.yaml. Length is clamped to
        generation.max_length and negative numbers become 0. The output path
        is resolved against the working directory.
        """
        cfg = get_setting("generation", {}) or {}

        length = args.length if args.length is not None else cfg.get("default_length", 32)
        length = min(max(length, 0), cfg.get("max_length", 256))

        count = args.count if args.count is not None else cfg.get("default_count", 8)
        count = max(count, 0)

        output = args.output or cfg.get("default_output", "outstring.txt")

        seed = args.seed
        if seed is not None:
            seed &= MASK32

        return cls(
            length=length,
            count=count,
            output=resolve_path(output),
            seed=seed,
            stats=getattr(args, 'stats', False),
            quiet=getattr(args, 'quiet', False),
            verbose=getattr(args, 'verbose', False),
        )
