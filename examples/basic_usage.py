#!/usr/bin/env python3
"""
Basic Usage Example - Market CA Simulation

This script demonstrates the basic usage of the market automaton with a
seeded random grid and a simulated price series. It shows how to:
- Build a grid of participants, some holding positions
- Feed candles into the world's price history
- Step the simulation and inspect the action mix

Run: python examples/basic_usage.py
"""

import random
from datetime import datetime, timedelta, timezone

from market_ca.config.defaults import get_default_config
from market_ca.data.models import Candle, PriceHistory
from market_ca.engine import SimulationEngine
from market_ca.logging import configure_logging
from market_ca.state.models import Action, MarketParticipant
from market_ca.world.grid import MarketGrid


def create_random_grid(width: int, height: int, price: float, seed: int = 7) -> MarketGrid:
    """Grid with random actions and roughly one in five cells holding a position."""
    rng = random.Random(seed)
    rows = []
    for _ in range(height):
        row = []
        for _ in range(width):
            action = rng.choice(list(Action))
            roll = rng.random()
            if roll < 0.1:
                shares = rng.randint(1, 20)
                row.append(MarketParticipant(action, shares, shares * price))
            elif roll < 0.2:
                shares = -rng.randint(1, 20)
                row.append(MarketParticipant(action, shares, shares * price))
            else:
                row.append(MarketParticipant(action))
        rows.append(row)

    return MarketGrid(rows, PriceHistory())


def create_candle(ts: datetime, prev_close: float, rng: random.Random) -> Candle:
    """Random-walk candle starting from the previous close."""
    close = max(1.0, prev_close * (1 + rng.gauss(0, 0.05)))
    return Candle(
        ts=ts,
        open=prev_close,
        high=max(prev_close, close) * 1.01,
        low=min(prev_close, close) * 0.99,
        close=close,
        volume=rng.uniform(1000, 5000),
    )


def render(grid: MarketGrid) -> str:
    symbols = {Action.BUY: "B", Action.SELL: "S", Action.NEUTRAL: "."}
    return "\n".join("".join(symbols[a] for a in row) for row in grid.actions())


def main():
    configure_logging(level="INFO")

    config = get_default_config()
    price = 100.0
    grid = create_random_grid(config.grid.width, config.grid.height, price)
    engine = SimulationEngine(grid=grid, config=config)

    rng = random.Random(11)
    ts = datetime(2024, 1, 1, tzinfo=timezone.utc)
    for step in range(10):
        candle = create_candle(ts + timedelta(minutes=step), price, rng)
        engine.on_candle(candle)
        price = candle.close

        result = engine.step()
        print(f"step {result.step:2d}  close {price:7.2f}  changed {result.changed:3d}  "
              + "  ".join(f"{a.value}={result.actions.get(a, 0)}" for a in Action))

    print()
    print(render(engine.grid))


if __name__ == "__main__":
    main()
