"""Pytest configuration and shared fixtures."""

import pytest
from datetime import datetime, timezone
from typing import Callable, Dict, Optional, Tuple

from market_ca.data.models import Candle, PriceHistory
from market_ca.state.models import Action, GridCoordinates, MarketParticipant
from market_ca.world.grid import MarketGrid

SYMBOLS = {"B": Action.BUY, "S": Action.SELL, ".": Action.NEUTRAL}


def make_candle(close: float, minute: int = 0) -> Candle:
    """Flat candle closing at the given price."""
    return Candle(
        ts=datetime(2023, 1, 1, 12, minute, 0, tzinfo=timezone.utc),
        open=close,
        high=close,
        low=close,
        close=close,
        volume=1000.0,
    )


def build_grid(
    layout: list[str],
    close: Optional[float] = None,
    cells: Optional[Dict[Tuple[int, int], MarketParticipant]] = None,
) -> MarketGrid:
    """
    Build a grid from rows of B/S/. symbols.

    Args:
        layout: One string per row; B=buy, S=sell, .=neutral
        close: Latest close to seed the price history with
        cells: Participants replacing the flat cell at (x, y)
    """
    history = PriceHistory()
    if close is not None:
        history.append(make_candle(close))

    grid = MarketGrid.from_actions([[SYMBOLS[ch] for ch in row] for row in layout], history)
    return grid.with_cells({
        GridCoordinates(x, y): participant for (x, y), participant in (cells or {}).items()
    })


@pytest.fixture
def grid_factory() -> Callable[..., MarketGrid]:
    """Factory building grids from symbol layouts."""
    return build_grid


@pytest.fixture
def sample_candle() -> Candle:
    """Sample candle for testing."""
    return Candle(
        ts=datetime(2023, 1, 1, 12, 0, 0, tzinfo=timezone.utc),
        open=100.0,
        high=105.0,
        low=99.0,
        close=103.0,
        volume=1000.0,
    )


@pytest.fixture
def long_participant() -> MarketParticipant:
    """Long 10 shares entered at a position value of 1000."""
    return MarketParticipant(Action.NEUTRAL, shares_held=10, position_size=1000)


@pytest.fixture
def short_participant() -> MarketParticipant:
    """Short 10 shares entered at a position value of -1000."""
    return MarketParticipant(Action.NEUTRAL, shares_held=-10, position_size=-1000)


@pytest.fixture
def candle_factory() -> Callable[..., Candle]:
    """Factory building flat candles at a given close."""
    return make_candle
