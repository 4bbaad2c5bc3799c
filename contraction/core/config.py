# core/config.py
from dataclasses import dataclass

MINIMUM_SCAN_LENGTH = 10
OVERSCAN_LENGTH = 20


@dataclass(frozen=True)
class BaselineConfig:
    fast_length: int = 3
    slow_length: int = 53
    efficiency_length: int = 10
    momentum_length: int = 1

    def __post_init__(self):
        if self.fast_length <= 0:
            raise ValueError("fast_length must be > 0")
        if self.slow_length <= 0:
            raise ValueError("slow_length must be > 0")
        if self.fast_length >= self.slow_length:
            raise ValueError("fast_length must be < slow_length")
        if self.efficiency_length <= 0:
            raise ValueError("efficiency_length must be > 0")
        if self.momentum_length < 1:
            raise ValueError("momentum_length must be ≥ 1")


@dataclass(frozen=True)
class VolatilityConfig:
    length: int = 14

    def __post_init__(self):
        if self.length < 1:
            raise ValueError("volatility length must be ≥ 1")


@dataclass(frozen=True)
class ContractionConfig:
    """
    Immutable configuration for volatility contraction detection.

    Validated at construction so a bad setup fails before any bar is fed.
    """

    # --- BASELINE (KAMA) ---
    fast_length: int = 3
    slow_length: int = 53
    efficiency_length: int = 10
    momentum_length: int = 1

    # --- VOLATILITY (ATR) ---
    volatility_length: int = 14

    # --- INTERVALS ---
    minimum_atr_delta: float = 0.5
    scan_length: int = 50
    overscan_length: int = OVERSCAN_LENGTH

    # --- LEGS ---
    minimum_required_legs: int = 3
    minimum_percentage_contracting_legs: float = 0.8

    def __post_init__(self):
        # Length checks live on the sub-configs
        BaselineConfig(self.fast_length, self.slow_length, self.efficiency_length, self.momentum_length)
        VolatilityConfig(self.volatility_length)

        if self.minimum_atr_delta <= 0:
            raise ValueError("minimum_atr_delta must be > 0")
        if self.scan_length < MINIMUM_SCAN_LENGTH:
            raise ValueError(f"scan_length must be ≥ {MINIMUM_SCAN_LENGTH}")
        if self.overscan_length != OVERSCAN_LENGTH:
            raise ValueError(f"overscan_length is fixed at {OVERSCAN_LENGTH}")
        if self.minimum_required_legs < 1:
            raise ValueError("minimum_required_legs must be ≥ 1")
        if not 0.0 <= self.minimum_percentage_contracting_legs <= 1.0:
            raise ValueError("minimum_percentage_contracting_legs must be between 0 and 1")

    @property
    def baseline(self) -> BaselineConfig:
        return BaselineConfig(
            fast_length=self.fast_length,
            slow_length=self.slow_length,
            efficiency_length=self.efficiency_length,
            momentum_length=self.momentum_length,
        )

    @property
    def volatility(self) -> VolatilityConfig:
        return VolatilityConfig(length=self.volatility_length)

    @property
    def lookback(self) -> int:
        """Bars of history one evaluation needs."""
        return self.scan_length + self.overscan_length
