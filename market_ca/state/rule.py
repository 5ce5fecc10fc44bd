"""
Market participant transition rule.

Derives each cell's next action from its own position and the actions of
its eight Moore neighbours:

- Flat participants follow a moderate crowd (momentum) and fade an
  overwhelming one (contrarian); conflicting moderate crowds cancel out.
- Open positions exit when enough neighbours turn against them, otherwise
  when the profit/loss percentage crosses either exit tier.

The rule is a pure function of a frozen world snapshot. It never mutates
the grid or the participant; the simulation driver applies the result.
"""

from typing import Optional

from ..config.defaults import RuleParams
from ..errors import RuleContractError
from ..logging.config import get_rule_logger, log_rule_decision
from .models import (
    Action,
    DecisionReason,
    GridCoordinates,
    MarketParticipant,
    MarketWorld,
    NeighborCounts,
    RuleDecision,
)
from .neighbors import count_neighbors

rule_logger = get_rule_logger(__name__)


def profit_loss_pct(shares_held: int, position_size: float, latest_close: float) -> Optional[float]:
    """
    Profit/loss of an open position relative to its current value.

    Args:
        shares_held: Signed share count (non-zero)
        position_size: Position value at entry
        latest_close: Latest market close price

    Returns:
        (position_size - current_value) / current_value * 100, or None when
        the current value is zero
    """
    current_value = shares_held * latest_close
    if current_value == 0:
        return None
    return (position_size - current_value) / current_value * 100


class TransitionRule:
    """Evaluates the next action of a single grid cell."""

    def __init__(self, params: Optional[RuleParams] = None):
        self.params = params or RuleParams()
        self.logger = rule_logger

    def next_action(
        self,
        current_action: Action,
        world: MarketWorld,
        coords: GridCoordinates
    ) -> Action:
        """Return the action the cell at coords takes on the next step."""
        return self.evaluate(current_action, world, coords).action

    def evaluate(
        self,
        current_action: Action,
        world: MarketWorld,
        coords: GridCoordinates
    ) -> RuleDecision:
        """
        Evaluate the rule for one cell.

        Args:
            current_action: Action the driver holds for the cell
            world: Grid and price snapshot, not mutated during the step
            coords: Cell to evaluate

        Returns:
            RuleDecision with the new action and the branch that produced it

        Raises:
            RuleContractError: If world or coords do not meet the rule's contract
        """
        self._validate_arguments(current_action, world, coords)

        participant = world.get_cell(coords.x, coords.y)
        counts = count_neighbors(world, coords)

        if participant.is_flat:
            action, reason = self.decide_flat(counts)
            decision = RuleDecision(action=action, reason=reason, counts=counts)
        else:
            decision = self.decide_open(participant, counts, world.get_latest_close())

        log_rule_decision(
            self.logger,
            x=coords.x,
            y=coords.y,
            from_action=current_action.value,
            to_action=decision.action.value,
            reason=decision.reason.value,
            context={
                "bullish": counts.bullish,
                "bearish": counts.bearish,
                "shares_held": participant.shares_held,
                "profit_loss_pct": decision.profit_loss_pct,
            }
        )

        return decision

    def decide_flat(self, counts: NeighborCounts) -> tuple[Action, DecisionReason]:
        """Entry decision for a participant without a position."""
        p = self.params
        moderate_bullish = p.moderate_min <= counts.bullish < p.moderate_max
        moderate_bearish = p.moderate_min <= counts.bearish < p.moderate_max

        # Checked first: both moderate crowds at once cancel out
        if moderate_bullish and moderate_bearish:
            return Action.NEUTRAL, DecisionReason.CONFLICTING_CROWD
        if moderate_bullish:
            return Action.BUY, DecisionReason.MOMENTUM
        if counts.bearish >= p.contrarian_min:
            return Action.BUY, DecisionReason.CONTRARIAN
        if moderate_bearish:
            return Action.SELL, DecisionReason.MOMENTUM
        if counts.bullish >= p.contrarian_min:
            return Action.SELL, DecisionReason.CONTRARIAN
        return Action.NEUTRAL, DecisionReason.NO_SIGNAL

    def decide_open(
        self,
        participant: MarketParticipant,
        counts: NeighborCounts,
        latest_close: float
    ) -> RuleDecision:
        """Exit decision for a long or short participant."""
        p = self.params

        if participant.is_long:
            exit_action = Action.SELL
            opposing = counts.bearish
        else:
            exit_action = Action.BUY
            opposing = counts.bullish

        # Crowd reversal takes precedence over profit/loss
        if opposing >= p.reversal_min:
            return RuleDecision(exit_action, DecisionReason.CROWD_REVERSAL, counts)

        pl_pct = profit_loss_pct(participant.shares_held, participant.position_size, latest_close)
        if pl_pct is None:
            self.logger.warning(
                "Zero position value, holding",
                shares_held=participant.shares_held,
                position_size=participant.position_size,
                latest_close=latest_close
            )
            return RuleDecision(Action.NEUTRAL, DecisionReason.ZERO_POSITION_VALUE, counts)

        # Both tiers exit the same way; the upper one is reported separately
        if pl_pct > p.take_profit_pct:
            return RuleDecision(exit_action, DecisionReason.TAKE_PROFIT, counts, pl_pct)
        if pl_pct > p.exit_pct:
            return RuleDecision(exit_action, DecisionReason.EXIT_THRESHOLD, counts, pl_pct)
        return RuleDecision(Action.NEUTRAL, DecisionReason.HOLD, counts, pl_pct)

    def _validate_arguments(
        self,
        current_action: Action,
        world: MarketWorld,
        coords: GridCoordinates
    ) -> None:
        """Fail fast on arguments outside the rule's contract."""
        if not isinstance(current_action, Action):
            raise RuleContractError(
                f"current_action must be an Action, got {type(current_action).__name__}",
                argument="current_action",
                received_type=type(current_action).__name__
            )

        if not isinstance(world, MarketWorld):
            raise RuleContractError(
                f"world must provide width, height, get_cell and get_latest_close, "
                f"got {type(world).__name__}",
                argument="world",
                received_type=type(world).__name__
            )

        if not isinstance(coords, GridCoordinates) or not all(
            isinstance(v, int) and not isinstance(v, bool) for v in coords
        ):
            raise RuleContractError(
                f"coords must be GridCoordinates of two ints, got {coords!r}",
                argument="coords",
                received_type=type(coords).__name__
            )

        if not (0 <= coords.x < world.width and 0 <= coords.y < world.height):
            raise RuleContractError(
                f"coords {tuple(coords)} outside {world.width}x{world.height} grid",
                argument="coords",
                received_type=type(coords).__name__,
                context={"width": world.width, "height": world.height}
            )


transition_rule = TransitionRule()


def next_action(current_action: Action, world: MarketWorld, coords: GridCoordinates) -> Action:
    """Next action for the cell at coords using the default thresholds."""
    return transition_rule.next_action(current_action, world, coords)
