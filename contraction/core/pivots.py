# core/pivots.py
from typing import List, Sequence

from contraction.core.entity import BarPoint, Interval, PivotPoint, PriceWindow
from contraction.metrics.types import BarNumber, BarOffset, to_offset


def _pivot(point: BarPoint, current: BarNumber) -> PivotPoint:
    return PivotPoint(
        bar_number=point.number,
        bar_offset=to_offset(point.number, current),
        time=point.time,
        price=point.price,
    )


def _append(pivots: List[PivotPoint], pivot: PivotPoint) -> None:
    # No zero-length legs: drop a vertex on the same bar as the previous one
    if pivots and pivots[-1].bar_number == pivot.bar_number:
        return
    pivots.append(pivot)


def extract_pivot_points(intervals: Sequence[Interval], window: PriceWindow) -> List[PivotPoint]:
    """
    Turn merged intervals into the zigzag of pattern vertices.

    Args:
        intervals: Merged, alternating intervals ordered oldest first.
        window: Window the intervals were scanned from; its last bar is "now".

    Returns:
        Pivots ordered oldest first:
            - the first run's opposite extreme opens the pattern,
            - every run contributes its own extreme (the last run only when
              that extreme is not on the current bar),
            - the current close always closes the pattern.

    Notes:
        - A single interval acts as both first and last run.
    """
    pivots: List[PivotPoint] = []
    if not intervals:
        return pivots

    current = window.current
    last = len(intervals) - 1
    for i, interval in enumerate(intervals):
        if i == 0:
            _append(pivots, _pivot(interval.opposite_extremum, current))
        if i < last or interval.extremum.number != current:
            _append(pivots, _pivot(interval.extremum, current))
        if i == last:
            _append(pivots, PivotPoint(
                bar_number=current,
                bar_offset=BarOffset(0),
                time=window.time[-1],
                price=float(window.close[-1]),
            ))
    return pivots
