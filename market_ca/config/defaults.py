"""Default configuration parameters for the market automaton."""

from dataclasses import dataclass


@dataclass(frozen=True)
class RuleParams:
    """Transition rule thresholds (neighbour counts range 0-8)."""
    # Flat participants
    moderate_min: int = 4                 # Momentum band lower bound (inclusive)
    moderate_max: int = 7                 # Momentum band upper bound (exclusive)
    contrarian_min: int = 7               # Overwhelming crowd triggers opposite action

    # Open positions
    reversal_min: int = 4                 # Opposing neighbours that force an exit
    take_profit_pct: float = 45.0         # Upper profit/loss exit tier
    exit_pct: float = 20.0                # Lower profit/loss exit tier


@dataclass(frozen=True)
class GridParams:
    """Reference grid dimensions."""
    width: int = 20
    height: int = 20


@dataclass(frozen=True)
class PriceHistoryParams:
    """Rolling candle window parameters."""
    window_size: int = 500


@dataclass(frozen=True)
class DefaultConfig:
    """Complete default configuration."""
    rule: RuleParams
    grid: GridParams
    price_history: PriceHistoryParams


def get_default_config() -> DefaultConfig:
    """Get the default configuration instance."""
    return DefaultConfig(
        rule=RuleParams(),
        grid=GridParams(),
        price_history=PriceHistoryParams(),
    )
