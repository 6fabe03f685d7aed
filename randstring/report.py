#!/usr/bin/env python3
"""
Coverage Report
===============
Per-strategy symbol statistics for a batch of generated strings, rendered
as a rich table.

Columns:
- distinct symbols seen out of the reachable set
- reachable symbols never seen in the batch
- characters outside the reachable set (should stay 0)
- chi-square of the symbol counts against a uniform distribution
"""

from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from rich.console import Console
from rich.table import Table

from randstring.alphabet import ALPHABET
from randstring.settings import get_setting


@dataclass
class CoverageStats:
    """Symbol coverage of one strategy's output."""
    strategy: str
    strings: int
    characters: int
    distinct: int
    unseen: List[str] = field(default_factory=list)
    out_of_range: int = 0
    chi_square: float = 0.0


def coverage(strategy: str, strings: Iterable[str], symbols: Optional[int] = None) -> CoverageStats:
    """Compute coverage statistics over the first ``symbols`` alphabet characters."""
    if symbols is None:
        symbols = get_setting("report.symbols", 62)
    reachable = ALPHABET[:symbols]

    strings = list(strings)
    counts = Counter(''.join(strings))
    characters = sum(counts.values())

    chi_square = 0.0
    if characters:
        expected = characters / symbols
        chi_square = sum((counts.get(c, 0) - expected) ** 2 / expected for c in reachable)

    return CoverageStats(
        strategy=strategy,
        strings=len(strings),
        characters=characters,
        distinct=sum(1 for c in reachable if counts.get(c)),
        unseen=[c for c in reachable if not counts.get(c)],
        out_of_range=sum(n for c, n in counts.items() if c not in reachable),
        chi_square=chi_square,
    )


def build_table(stats: Iterable[CoverageStats], symbols: Optional[int] = None) -> Table:
    if symbols is None:
        symbols = get_setting("report.symbols", 62)

    table = Table(title="Symbol coverage")
    table.add_column("Strategy", style="bold")
    table.add_column("Strings", justify="right")
    table.add_column("Chars", justify="right")
    table.add_column(f"Distinct /{symbols}", justify="right")
    table.add_column("Unseen", justify="right")
    table.add_column("Outside", justify="right")
    table.add_column(f"Chi-square (df={symbols - 1})", justify="right")

    for s in stats:
        if not s.characters:
            table.add_row(s.strategy, str(s.strings), "0", "-", "-", "-", "-", style="dim")
            continue
        table.add_row(
            s.strategy,
            str(s.strings),
            str(s.characters),
            str(s.distinct),
            str(len(s.unseen)),
            str(s.out_of_range),
            f"{s.chi_square:.1f}",
        )
    return table


def print_report(stats: Iterable[CoverageStats], console: Optional[Console] = None) -> None:
    console = console or Console()
    console.print(build_table(stats))
