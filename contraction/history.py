"""Bookkeeping of confirmed patterns for display consumers."""
from typing import Iterator, List, Tuple

from contraction.core.entity import DetectionResult


class PatternHistory:
    """
    Confirmed patterns, oldest first.

    A forming pattern is re-confirmed bar after bar with a growing envelope.
    When a new confirmation overlaps the last kept pattern it replaces it,
    so each run of confirmations leaves one pattern behind.
    """
    __slots__ = ('_patterns',)

    def __init__(self):
        self._patterns: List[DetectionResult] = []

    def add(self, result: DetectionResult) -> bool:
        """Record `result` if it is a confirmed pattern. Returns whether it was kept."""
        if not result.found:
            return False

        if self._patterns and self._overlaps(self._patterns[-1], result):
            self._patterns[-1] = result
        else:
            self._patterns.append(result)
        return True

    @staticmethod
    def _overlaps(last: DetectionResult, result: DetectionResult) -> bool:
        # Untimed bars cannot be ordered, so they never overlap
        times = (result.open_time, last.close_time, result.close_time)
        if any(t is None for t in times):
            return False
        return result.open_time <= last.close_time <= result.close_time

    @property
    def patterns(self) -> Tuple[DetectionResult, ...]:
        return tuple(self._patterns)

    def clear(self) -> None:
        self._patterns.clear()

    def __len__(self) -> int:
        return len(self._patterns)

    def __iter__(self) -> Iterator[DetectionResult]:
        return iter(self._patterns)
