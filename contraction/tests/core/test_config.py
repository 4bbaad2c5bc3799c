# test_config.py
import pytest
from contraction.core.config import (
    ContractionConfig, BaselineConfig, VolatilityConfig, MINIMUM_SCAN_LENGTH, OVERSCAN_LENGTH
)


def test_contraction_config_defaults():
    config = ContractionConfig()
    assert config.fast_length == 3
    assert config.slow_length == 53
    assert config.minimum_atr_delta == 0.5
    assert config.scan_length == 50
    assert config.overscan_length == OVERSCAN_LENGTH == 20
    assert config.minimum_required_legs == 3
    assert config.minimum_percentage_contracting_legs == 0.8
    assert config.lookback == 70


def test_contraction_config_sub_configs():
    config = ContractionConfig(fast_length=2, slow_length=30, volatility_length=10)
    assert config.baseline == BaselineConfig(fast_length=2, slow_length=30)
    assert config.volatility == VolatilityConfig(length=10)


def test_contraction_config_is_frozen():
    config = ContractionConfig()
    with pytest.raises(AttributeError):
        config.scan_length = 20


@pytest.mark.parametrize("kwargs,message", [
    ({'fast_length': 0}, "fast_length must be > 0"),
    ({'slow_length': -1}, "slow_length must be > 0"),
    ({'fast_length': 53}, "fast_length must be < slow_length"),
    ({'fast_length': 60}, "fast_length must be < slow_length"),
    ({'minimum_atr_delta': 0.0}, "minimum_atr_delta"),
    ({'scan_length': MINIMUM_SCAN_LENGTH - 1}, "scan_length"),
    ({'overscan_length': 10}, "overscan_length"),
    ({'minimum_required_legs': 0}, "minimum_required_legs"),
    ({'minimum_percentage_contracting_legs': 1.1}, "between 0 and 1"),
    ({'minimum_percentage_contracting_legs': -0.1}, "between 0 and 1"),
    ({'volatility_length': 0}, "volatility length"),
    ({'efficiency_length': 0}, "efficiency_length"),
])
def test_contraction_config_invalid(kwargs, message):
    with pytest.raises(ValueError, match=message):
        ContractionConfig(**kwargs)


def test_contraction_config_boundaries_accepted():
    config = ContractionConfig(
        scan_length=MINIMUM_SCAN_LENGTH,
        minimum_required_legs=1,
        minimum_percentage_contracting_legs=0.0,
    )
    assert config.lookback == MINIMUM_SCAN_LENGTH + OVERSCAN_LENGTH
    assert ContractionConfig(minimum_percentage_contracting_legs=1.0)


def test_baseline_config_invalid():
    with pytest.raises(ValueError, match="momentum_length"):
        BaselineConfig(momentum_length=0)


def test_contraction_config_momentum_length():
    config = ContractionConfig(momentum_length=5)
    assert config.baseline.momentum_length == 5
    with pytest.raises(ValueError, match="momentum_length"):
        ContractionConfig(momentum_length=0)
