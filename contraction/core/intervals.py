# core/intervals.py
"""
Partition a scan window into runs of closes above/below the adaptive baseline.
"""
from dataclasses import replace
from typing import List

from contraction.core.entity import Interval, PriceWindow
from contraction.metrics.types import IntervalType


def _side(close: float, baseline: float, current: IntervalType) -> IntervalType:
    """Side of the baseline; a close sitting exactly on it keeps the current side."""
    if close > baseline:
        return IntervalType.ABOVE
    if close < baseline:
        return IntervalType.BELOW
    return current


def _open_interval(window: PriceWindow, offset: int, interval_type: IntervalType) -> Interval:
    close = window.point(offset, 'close')
    return Interval(
        type=interval_type,
        open=window.point(offset, 'open'),
        high=window.point(offset, 'high'),
        low=window.point(offset, 'low'),
        close=close,
        highest_close=close.price,
        lowest_close=close.price,
    )


def _accumulate(interval: Interval, window: PriceWindow, offset: int) -> Interval:
    close = window.point(offset, 'close')
    high = window.point(offset, 'high')
    low = window.point(offset, 'low')
    return replace(
        interval,
        close=close,
        high=high if high.price > interval.high.price else interval.high,
        low=low if low.price < interval.low.price else interval.low,
        highest_close=max(interval.highest_close, close.price),
        lowest_close=min(interval.lowest_close, close.price),
    )


def scan_intervals(window: PriceWindow, scan_length: int) -> List[Interval]:
    """
    Split the last `scan_length` bars of `window` into baseline-side runs.

    Args:
        window: Price window holding at least `scan_length` bars.
        scan_length: Number of most recent bars to partition.

    Returns:
        Intervals ordered oldest first. Together they cover every bar of the
        scan range with no gaps or overlaps.

    Raises:
        ValueError: If the window is shorter than `scan_length`.

    Notes:
        - The oldest bar opens ABOVE when its close is strictly above the
          baseline, BELOW otherwise.
        - A new run starts only when a close lands strictly on the other side.
    """
    if scan_length < 1:
        raise ValueError("scan_length must be ≥ 1")
    if len(window) < scan_length:
        raise ValueError("window is shorter than scan_length")

    close = window.close
    baseline = window.baseline
    last = len(window) - 1

    oldest = scan_length - 1
    first_type = IntervalType.ABOVE if close[last - oldest] > baseline[last - oldest] else IntervalType.BELOW
    interval = _open_interval(window, oldest, first_type)
    intervals: List[Interval] = []

    for offset in range(scan_length - 2, -1, -1):
        pos = last - offset
        side = _side(close[pos], baseline[pos], interval.type)
        if side is not interval.type:
            intervals.append(interval)
            interval = _open_interval(window, offset, side)
        else:
            interval = _accumulate(interval, window, offset)

    # Last run is still open at the current bar
    intervals.append(interval)
    return intervals


def extend_first_interval(
        intervals: List[Interval],
        window: PriceWindow,
        scan_length: int,
        overscan_length: int
) -> List[Interval]:
    """
    Pull the oldest interval's open back to where its first leg really began.

    Looks `overscan_length` bars past the scan window. An ABOVE run moves its
    open and low to any older bar with a strictly lower low; a BELOW run
    does the same with strictly higher highs.
    """
    if not intervals:
        return []
    if len(window) < scan_length + overscan_length:
        raise ValueError("window is shorter than scan_length + overscan_length")

    first = intervals[0]
    for offset in range(scan_length, scan_length + overscan_length):
        if first.type is IntervalType.ABOVE:
            low = window.point(offset, 'low')
            if low.price < first.low.price:
                first = replace(first, open=window.point(offset, 'open'), low=low)
        else:
            high = window.point(offset, 'high')
            if high.price > first.high.price:
                first = replace(first, open=window.point(offset, 'open'), high=high)

    return [first] + list(intervals[1:])
