"""
Canonical data models for market price data.

This module defines the immutable candle bar and the rolling price history
that exposes the latest close to the transition rule.
"""

import math
from collections import deque
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..config.defaults import PriceHistoryParams
from ..errors import MalformedDataError, MissingDataError


@dataclass(frozen=True)
class Candle:
    """Price bar with UTC timestamp."""
    ts: datetime       # UTC market timestamp
    open: float        # Opening price
    high: float        # High price
    low: float         # Low price
    close: float       # Closing price
    volume: float = 0.0

    def __post_init__(self):
        prices = (self.open, self.high, self.low, self.close)
        if not all(math.isfinite(p) for p in prices):
            raise MalformedDataError(
                "Candle prices must be finite",
                raw_data=repr(prices),
                expected_format="finite OHLC"
            )
        if any(p < 0 for p in prices):
            raise MalformedDataError(
                "Candle prices must be non-negative",
                raw_data=repr(prices),
                expected_format="non-negative OHLC"
            )
        if self.high < max(self.open, self.close, self.low) or self.low > min(self.open, self.close):
            raise MalformedDataError(
                f"High/low prices inconsistent: high={self.high}, low={self.low}",
                raw_data=repr(prices),
                expected_format="low <= open,close <= high"
            )


class PriceHistory:
    """Rolling window of candles; the rule reads only the latest close."""

    def __init__(self, config: Optional[PriceHistoryParams] = None,
                 candles: Optional[list[Candle]] = None):
        self.config = config or PriceHistoryParams()
        self.candles: deque = deque(candles or [], maxlen=self.config.window_size)

    def __len__(self) -> int:
        return len(self.candles)

    def append(self, candle: Candle) -> None:
        """Append a candle; out-of-order timestamps are rejected."""
        if self.candles and candle.ts < self.candles[-1].ts:
            raise MalformedDataError(
                f"Candle at {candle.ts.isoformat()} is older than latest "
                f"{self.candles[-1].ts.isoformat()}",
                expected_format="non-decreasing timestamps"
            )
        self.candles.append(candle)

    @property
    def latest(self) -> Optional[Candle]:
        """Most recent candle, None if no data yet."""
        return self.candles[-1] if self.candles else None

    def get_latest_close(self) -> float:
        """Close of the most recent candle."""
        if not self.candles:
            raise MissingDataError("No candles in price history", data_type="candle")
        return self.candles[-1].close
