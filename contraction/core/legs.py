# core/legs.py
"""
Leg contraction scoring over a pivot zigzag.
"""
from typing import List, Sequence, Tuple

from contraction.core.entity import LegDelta, PivotPoint


def leg_amplitudes(pivots: Sequence[PivotPoint]) -> List[float]:
    """Price distance covered by each leg between consecutive pivots."""
    return [
        max(a.price, b.price) - min(a.price, b.price)
        for a, b in zip(pivots[:-1], pivots[1:])
    ]


def compare_legs(previous: float, current: float) -> LegDelta:
    """
    Compare a leg with its predecessor.

    A leg contracts when it is no longer than the previous one (ties count).
    A contracting leg fully overlaps; otherwise the overlap is the shorter
    over the longer amplitude, or 0.0 when either leg has zero length.
    """
    if current <= previous:
        return LegDelta(amplitude=current, overlap=1.0, contracting=True)
    if current == 0.0 or previous == 0.0:
        return LegDelta(amplitude=current, overlap=0.0, contracting=False)
    return LegDelta(amplitude=current, overlap=previous / current, contracting=False)


def score_contraction(pivots: Sequence[PivotPoint]) -> Tuple[float, Tuple[LegDelta, ...]]:
    """
    Score how consistently legs shrink.

    Args:
        pivots: Zigzag vertices ordered oldest first.

    Returns:
        (ratio, deltas): `ratio` is the share of legs 2..M that contract,
        in [0, 1] (0.0 when there are fewer than two legs); `deltas` holds
        one `LegDelta` per compared leg.
    """
    amplitudes = leg_amplitudes(pivots)
    if len(amplitudes) < 2:
        return 0.0, ()

    deltas = tuple(
        compare_legs(previous, current)
        for previous, current in zip(amplitudes[:-1], amplitudes[1:])
    )
    contracting = sum(1 for delta in deltas if delta.contracting)
    return contracting / len(deltas), deltas


def is_contraction(
        pivots: Sequence[PivotPoint],
        ratio: float,
        minimum_required_legs: int,
        minimum_percentage_contracting_legs: float
) -> bool:
    """Enough legs, and enough of them contracting."""
    return (
        len(pivots) >= minimum_required_legs + 1
        and ratio >= minimum_percentage_contracting_legs
    )
