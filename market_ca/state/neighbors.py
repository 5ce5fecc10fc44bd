"""
Moore neighbourhood resolution and aggregation.

Out-of-bounds neighbours resolve to the shared EMPTY_CELL sentinel, so
edge and corner cells behave as if bordered by flat, neutral participants.
"""

from collections.abc import Iterator

from .models import (
    EMPTY_CELL,
    Action,
    Direction,
    GridCoordinates,
    MarketParticipant,
    MarketWorld,
    NeighborCounts,
)


def resolve_neighbor(
    world: MarketWorld,
    coords: GridCoordinates,
    direction: Direction
) -> MarketParticipant:
    """
    Return the participant one step from coords in direction.

    Args:
        world: Grid to read from
        coords: Centre cell
        direction: One of the eight Moore directions

    Returns:
        The neighbouring participant, or EMPTY_CELL when either axis falls
        outside the grid
    """
    nx = coords.x + direction.dx
    ny = coords.y + direction.dy

    if not 0 <= nx < world.width:
        return EMPTY_CELL
    if not 0 <= ny < world.height:
        return EMPTY_CELL

    return world.get_cell(nx, ny)


def iter_neighbors(world: MarketWorld, coords: GridCoordinates) -> Iterator[MarketParticipant]:
    """Yield all eight neighbours in Direction order."""
    for direction in Direction:
        yield resolve_neighbor(world, coords, direction)


def _count_action(world: MarketWorld, coords: GridCoordinates, action: Action) -> int:
    return sum(1 for neighbor in iter_neighbors(world, coords) if neighbor.action == action)


def count_bullish(world: MarketWorld, coords: GridCoordinates) -> int:
    """Number of neighbours currently buying (0-8)."""
    return _count_action(world, coords, Action.BUY)


def count_bearish(world: MarketWorld, coords: GridCoordinates) -> int:
    """Number of neighbours currently selling (0-8)."""
    return _count_action(world, coords, Action.SELL)


def count_neighbors(world: MarketWorld, coords: GridCoordinates) -> NeighborCounts:
    """Bullish and bearish counts in a single pass over the neighbourhood."""
    bullish = bearish = 0
    for neighbor in iter_neighbors(world, coords):
        if neighbor.action == Action.BUY:
            bullish += 1
        elif neighbor.action == Action.SELL:
            bearish += 1
    return NeighborCounts(bullish=bullish, bearish=bearish)
