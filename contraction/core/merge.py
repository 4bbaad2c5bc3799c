# core/merge.py
"""
Whipsaw removal for baseline intervals.

Two passes, both walking newest to oldest:
1. Runs that never moved `minimum_atr_delta` ATRs past the baseline are folded
   into their older neighbour.
2. Neighbours left with the same side are coalesced.

Each pass works on its own copy of the list; input lists are never modified.
"""
import logging
from typing import List, Sequence

from contraction.core.entity import Interval, PriceWindow, combine_intervals
from contraction.metrics.types import IntervalType

logger = logging.getLogger(__name__)


def is_significant(interval: Interval, window: PriceWindow, minimum_atr_delta: float) -> bool:
    """
    Whether the run's extreme close cleared the baseline by the ATR margin.

    Baseline and ATR are taken at the bar of the run's own extreme (high for
    ABOVE, low for BELOW).
    """
    pos = window.position(interval.extremum.number)
    margin = window.volatility[pos] * minimum_atr_delta
    if interval.type is IntervalType.ABOVE:
        return interval.highest_close >= window.baseline[pos] + margin
    return interval.lowest_close <= window.baseline[pos] - margin


def merge_insignificant_intervals(
        intervals: Sequence[Interval],
        window: PriceWindow,
        minimum_atr_delta: float
) -> List[Interval]:
    """
    Fold insignificant runs into their older neighbour.

    The oldest run has no older neighbour, so when it fails the test it is
    folded forward into the next run instead, and only while more than two
    runs remain.
    """
    merged = list(intervals)
    for i in range(len(merged) - 1, -1, -1):
        if is_significant(merged[i], window, minimum_atr_delta):
            continue
        if i > 0:
            merged[i - 1] = combine_intervals(merged[i - 1], merged[i])
            del merged[i]
        elif len(merged) > 2:
            merged[1] = combine_intervals(merged[1], merged[0])
            del merged[0]
    return merged


def coalesce_intervals(intervals: Sequence[Interval]) -> List[Interval]:
    """Merge adjacent runs that ended up on the same side of the baseline."""
    merged = list(intervals)
    for i in range(len(merged) - 1, 0, -1):
        if merged[i].type is merged[i - 1].type:
            merged[i - 1] = combine_intervals(merged[i - 1], merged[i])
            del merged[i]
    return merged


def merge_intervals(
        intervals: Sequence[Interval],
        window: PriceWindow,
        minimum_atr_delta: float
) -> List[Interval]:
    """Run both whipsaw passes. Output alternates sides and stays contiguous."""
    significant = merge_insignificant_intervals(intervals, window, minimum_atr_delta)
    merged = coalesce_intervals(significant)
    logger.debug(
        "merged %d intervals -> %d significant -> %d alternating",
        len(intervals), len(significant), len(merged)
    )
    return merged
