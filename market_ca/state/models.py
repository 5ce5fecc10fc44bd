"""
Participant and grid data models for the transition rule.

This module defines immutable data structures for market participants,
grid coordinates and the read-only world interface the rule depends on.
"""

import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import NamedTuple, Optional, Protocol, runtime_checkable

from ..errors import InvalidPositionError


class Action(str, Enum):
    """Action a participant takes on the next step."""
    BUY = "buy"
    SELL = "sell"
    NEUTRAL = "neutral"


class Direction(Enum):
    """Moore neighbourhood offsets as (dx, dy); y grows downward."""
    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)
    UPPER_LEFT = (-1, -1)
    UPPER_RIGHT = (1, -1)
    LOWER_LEFT = (-1, 1)
    LOWER_RIGHT = (1, 1)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]


class GridCoordinates(NamedTuple):
    """Integer cell address, 0 <= x < width, 0 <= y < height."""
    x: int
    y: int

    def offset(self, direction: Direction) -> "GridCoordinates":
        return GridCoordinates(self.x + direction.dx, self.y + direction.dy)


@dataclass(frozen=True)
class MarketParticipant:
    """A grid cell's payload: current action plus the open position, if any."""

    action: Action
    shares_held: int = 0                       # 0 flat, >0 long, <0 short
    position_size: Optional[float] = None      # Position value at entry

    def __post_init__(self):
        if not isinstance(self.action, Action):
            raise InvalidPositionError(
                f"Invalid action: {self.action!r}",
                shares_held=self.shares_held,
                position_size=self.position_size
            )
        if not isinstance(self.shares_held, int) or isinstance(self.shares_held, bool):
            raise InvalidPositionError(
                f"shares_held must be an integer, got {type(self.shares_held).__name__}",
                shares_held=self.shares_held,
                position_size=self.position_size
            )
        if self.position_size is not None and (
            not isinstance(self.position_size, (int, float))
            or isinstance(self.position_size, bool)
            or not math.isfinite(self.position_size)
        ):
            raise InvalidPositionError(
                f"position_size must be a finite number, got {self.position_size!r}",
                shares_held=self.shares_held,
                position_size=self.position_size
            )
        if self.shares_held != 0 and not self.position_size:
            raise InvalidPositionError(
                "Open position requires a non-zero position_size set at entry",
                shares_held=self.shares_held,
                position_size=self.position_size
            )

    @property
    def is_flat(self) -> bool:
        return self.shares_held == 0

    @property
    def is_long(self) -> bool:
        return self.shares_held > 0

    @property
    def is_short(self) -> bool:
        return self.shares_held < 0

    def with_action(self, action: Action) -> "MarketParticipant":
        """Copy of this participant holding a new action."""
        return replace(self, action=action)


# Stand-in for every out-of-bounds neighbour; never written into a grid.
EMPTY_CELL = MarketParticipant(Action.NEUTRAL)


@runtime_checkable
class MarketWorld(Protocol):
    """Read surface the transition rule needs from the grid and price feed."""

    @property
    def width(self) -> int: ...

    @property
    def height(self) -> int: ...

    def get_cell(self, x: int, y: int) -> MarketParticipant: ...

    def get_latest_close(self) -> float: ...


class NeighborCounts(NamedTuple):
    """Bullish/bearish tallies over the eight Moore neighbours."""
    bullish: int
    bearish: int


class DecisionReason(str, Enum):
    """Which branch of the rule produced the action."""
    CONFLICTING_CROWD = "conflicting_crowd"
    MOMENTUM = "momentum"
    CONTRARIAN = "contrarian"
    NO_SIGNAL = "no_signal"
    CROWD_REVERSAL = "crowd_reversal"
    TAKE_PROFIT = "take_profit"
    EXIT_THRESHOLD = "exit_threshold"
    HOLD = "hold"
    ZERO_POSITION_VALUE = "zero_position_value"


@dataclass(frozen=True)
class RuleDecision:
    """Result of evaluating the rule for one cell."""

    action: Action
    reason: DecisionReason
    counts: NeighborCounts
    profit_loss_pct: Optional[float] = None
