# test_legs.py
import pytest
from contraction.core.entity import PivotPoint
from contraction.core.legs import leg_amplitudes, compare_legs, score_contraction, is_contraction
from contraction.metrics.types import BarNumber, BarOffset


def _zigzag(prices):
    current = len(prices) - 1
    return [
        PivotPoint(BarNumber(i), BarOffset(current - i), i, float(price))
        for i, price in enumerate(prices)
    ]


def test_leg_amplitudes():
    assert leg_amplitudes(_zigzag([100, 110, 104, 108])) == pytest.approx([10, 6, 4])
    assert leg_amplitudes(_zigzag([100])) == []


def test_widening_legs_score_zero():
    ratio, legs = score_contraction(_zigzag([100, 101, 99, 103, 95]))
    assert ratio == 0.0
    assert len(legs) == 3
    assert not any(leg.contracting for leg in legs)


def test_halving_legs_score_one():
    pivots = _zigzag([100, 116, 108, 112, 110, 111])
    ratio, legs = score_contraction(pivots)

    assert ratio == 1.0
    assert [leg.amplitude for leg in legs] == pytest.approx([8, 4, 2, 1])
    assert all(leg.overlap == 1.0 for leg in legs)
    assert is_contraction(pivots, ratio, 3, 0.8)


def test_equal_legs_count_as_contracting():
    ratio, _ = score_contraction(_zigzag([100, 110, 100, 110]))
    assert ratio == 1.0


def test_partial_overlap():
    ratio, legs = score_contraction(_zigzag([100, 104, 96]))
    assert ratio == 0.0
    assert legs[0].overlap == pytest.approx(0.5)
    assert not legs[0].contracting


def test_zero_length_leg_has_no_overlap():
    _, legs = score_contraction(_zigzag([100, 100, 105]))
    assert legs[0].overlap == 0.0
    assert not legs[0].contracting


def test_compare_legs():
    assert compare_legs(10.0, 5.0).contracting
    assert compare_legs(0.0, 0.0).contracting
    assert compare_legs(5.0, 10.0).overlap == pytest.approx(0.5)


@pytest.mark.parametrize("prices", [[], [100], [100, 110]])
def test_fewer_than_two_legs(prices):
    assert score_contraction(_zigzag(prices)) == (0.0, ())


def test_mixed_ratio_bounds():
    ratio, legs = score_contraction(_zigzag([100, 110, 104, 112, 109, 111]))
    # legs 10, 6, 8, 3, 2 -> 3 of 4 contract
    assert ratio == pytest.approx(0.75)
    assert 0.0 <= ratio <= 1.0
    assert len(legs) == 4


def test_is_contraction_needs_enough_pivots():
    pivots = _zigzag([100, 110, 105])
    ratio, _ = score_contraction(pivots)
    assert ratio == 1.0
    assert not is_contraction(pivots, ratio, 3, 0.8)
    assert is_contraction(pivots, ratio, 2, 0.8)


@pytest.mark.parametrize("threshold", [0.0, 0.5, 0.75])
def test_lower_threshold_still_found(threshold):
    pivots = _zigzag([100, 110, 104, 112, 109, 111])
    ratio, _ = score_contraction(pivots)
    assert is_contraction(pivots, ratio, 3, threshold)
    assert not is_contraction(pivots, ratio, 3, 0.8)
