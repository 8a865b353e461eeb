from __future__ import annotations

import math
from string import ascii_lowercase

from idlecore.offline import OfflineEarnings


def _build_suffixes() -> list[str]:
    suffixes = ["K", "M", "B", "T"]
    for first in ascii_lowercase:
        for second in ascii_lowercase:
            suffixes.append(first + second)
    return suffixes


SUFFIXES = _build_suffixes()


def format_number(value: float) -> str:
    """Short idle-game style number: 950, 12.5, 1.50K, 3.20aa."""
    if math.isnan(value) or math.isinf(value):
        return "0"

    magnitude = abs(value)
    if magnitude < 1000.0:
        if magnitude >= 100.0:
            return f"{value:.0f}"
        if magnitude >= 10.0:
            return f"{value:.1f}"
        return f"{value:.2f}"

    original = value
    index = 0
    while magnitude >= 1000.0 and index < len(SUFFIXES):
        value /= 1000.0
        magnitude /= 1000.0
        index += 1

    if magnitude >= 1000.0:
        # ran out of suffixes
        return f"{original:.3e}"
    return f"{value:.2f}{SUFFIXES[index - 1]}"


def format_offline_report(result: OfflineEarnings) -> str:
    """Human-readable offline earnings summary."""
    if result.is_empty:
        return "No offline earnings."
    lines = [f"Offline for {result.hours:.2f}h:"]
    for currency_id, amount in sorted(result.currency_earnings.items()):
        lines.append(f"  +{format_number(amount)} {currency_id}")
    for generator_id, amount in sorted(result.generator_breakdown.items()):
        lines.append(f"    {generator_id:.<24s} {format_number(amount)}")
    return "\n".join(lines)
