"""
Simulation engine coordinator.

Drives the transition rule over a market grid one step at a time using
double buffering: every next action is computed from the same frozen grid
snapshot, then all of them are committed together as a new grid.
"""

from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .config.defaults import DefaultConfig
from .config.loader import ConfigLoader
from .data.models import Candle, PriceHistory
from .errors import DataQualityError
from .logging.config import get_engine_logger
from .state.models import GridCoordinates, MarketParticipant, RuleDecision
from .state.rule import TransitionRule
from .world.grid import MarketGrid

engine_logger = get_engine_logger(__name__)


@dataclass(frozen=True)
class StepResult:
    """Summary of one committed simulation step."""
    step: int
    actions: Counter          # Action -> cell count after the step
    changed: int              # Cells whose action changed


class SimulationEngine:
    """
    Steps a market grid through the transition rule.

    Position opening and closing belong to an external order-execution
    collaborator; the engine only writes back each cell's new action.
    """

    def __init__(
        self,
        grid: Optional[MarketGrid] = None,
        config: Optional[DefaultConfig] = None,
        config_dir: Optional[Path] = None,
        max_workers: int = 1
    ) -> None:
        """Initialize the simulation engine."""
        self.logger = engine_logger

        if config is None:
            config = ConfigLoader.create(config_dir).load()
        self.config = config

        self.rule = TransitionRule(config.rule)
        self.grid = grid or MarketGrid.filled(
            config.grid,
            price_history=PriceHistory(config.price_history)
        )
        self.max_workers = max_workers
        self.step_count = 0

        self.logger.info(
            "Simulation engine initialized",
            width=self.grid.width,
            height=self.grid.height,
            max_workers=max_workers
        )

    def on_candle(self, candle: Candle) -> bool:
        """Feed a new price bar into the world's price history."""
        try:
            self.grid.price_history.append(candle)
        except DataQualityError as e:
            self.logger.warning(
                "Rejected candle",
                error=str(e),
                candle_ts=candle.ts.isoformat()
            )
            return False
        return True

    def evaluate(self, snapshot: MarketGrid) -> dict[GridCoordinates, RuleDecision]:
        """Decisions for every cell of snapshot; snapshot is not modified."""
        coords = list(snapshot.coordinates())

        def decide(c: GridCoordinates) -> RuleDecision:
            return self.rule.evaluate(snapshot.get_cell(c.x, c.y).action, snapshot, c)

        if self.max_workers > 1:
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                decisions = list(executor.map(decide, coords))
        else:
            decisions = [decide(c) for c in coords]

        return dict(zip(coords, decisions))

    def step(self) -> StepResult:
        """Compute all next actions from the current grid, then commit them."""
        snapshot = self.grid
        decisions = self.evaluate(snapshot)

        updates: dict[GridCoordinates, MarketParticipant] = {}
        for coords, decision in decisions.items():
            cell = snapshot.get_cell(coords.x, coords.y)
            if cell.action != decision.action:
                updates[coords] = cell.with_action(decision.action)

        self.grid = snapshot.with_cells(updates)
        self.step_count += 1

        result = StepResult(
            step=self.step_count,
            actions=self.grid.action_counts(),
            changed=len(updates)
        )
        self.logger.info(
            "Step committed",
            step=result.step,
            changed=result.changed,
            actions={action.value: n for action, n in result.actions.items()}
        )
        return result

    def run(self, steps: int) -> list[StepResult]:
        """Run a number of steps and return their summaries."""
        if steps < 0:
            raise ValueError(f"steps must be non-negative, got {steps}")
        return [self.step() for _ in range(steps)]
