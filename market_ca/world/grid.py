"""
Rectangular in-memory market world.

Cells are stored row-major (rows indexed by y). A grid is treated as an
immutable snapshot by the engine: a step builds a new grid rather than
writing into the one being read.
"""

from collections import Counter
from collections.abc import Iterator
from typing import Optional

from ..config.defaults import GridParams
from ..data.models import PriceHistory
from ..errors import MalformedDataError
from ..state.models import Action, GridCoordinates, MarketParticipant


class MarketGrid:
    """Grid of participants plus the price history they trade against."""

    def __init__(self, rows: list[list[MarketParticipant]],
                 price_history: Optional[PriceHistory] = None):
        if not rows or not rows[0]:
            raise MalformedDataError("Grid must have at least one row and one column")
        row_width = len(rows[0])
        if any(len(row) != row_width for row in rows):
            raise MalformedDataError(
                "Grid rows must all have the same width",
                expected_format="rectangular"
            )
        self._rows = [list(row) for row in rows]
        self.price_history = price_history or PriceHistory()

    @classmethod
    def filled(cls, params: Optional[GridParams] = None,
               participant: Optional[MarketParticipant] = None,
               price_history: Optional[PriceHistory] = None) -> "MarketGrid":
        """Grid of the configured size with every cell set to participant."""
        params = params or GridParams()
        participant = participant or MarketParticipant(Action.NEUTRAL)
        rows = [[participant] * params.width for _ in range(params.height)]
        return cls(rows, price_history)

    @classmethod
    def from_actions(cls, actions: list[list[Action]],
                     price_history: Optional[PriceHistory] = None) -> "MarketGrid":
        """Grid of flat participants holding the given actions."""
        rows = [[MarketParticipant(action) for action in row] for row in actions]
        return cls(rows, price_history)

    @property
    def width(self) -> int:
        return len(self._rows[0])

    @property
    def height(self) -> int:
        return len(self._rows)

    def get_cell(self, x: int, y: int) -> MarketParticipant:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"({x}, {y}) outside {self.width}x{self.height} grid")
        return self._rows[y][x]

    def get_latest_close(self) -> float:
        return self.price_history.get_latest_close()

    def coordinates(self) -> Iterator[GridCoordinates]:
        """All cell coordinates, row by row."""
        for y in range(self.height):
            for x in range(self.width):
                yield GridCoordinates(x, y)

    def with_cells(self, updates: dict[GridCoordinates, MarketParticipant]) -> "MarketGrid":
        """New grid with the given cells replaced; self is left untouched."""
        rows = [list(row) for row in self._rows]
        for coords, participant in updates.items():
            rows[coords.y][coords.x] = participant
        return MarketGrid(rows, self.price_history)

    def action_counts(self) -> Counter:
        """Tally of current actions across the grid."""
        return Counter(cell.action for row in self._rows for cell in row)

    def actions(self) -> list[list[Action]]:
        return [[cell.action for cell in row] for row in self._rows]
