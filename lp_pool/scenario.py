"""Sequential scenario runner.

Creates one pool, applies each step in order and records what every
operation returned together with the reserves it left behind. A failed
step is recorded and the run continues; the pool is unchanged by it.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import structlog

from lp_pool.config import DEFAULT_POOL_PARAMS, PoolParams
from lp_pool.constants import SCALE
from lp_pool.models import Operation, Scenario, ScenarioParams, ScenarioStep
from lp_pool.pool import LpPool, PoolState
from lp_pool.result import PoolError, PoolResult

logger = structlog.get_logger()


@dataclass(frozen=True)
class StepOutcome:
    """Result of one scenario step.

    Attributes:
        op: Operation that ran
        amount: Amount actually passed to the pool ("all" already resolved)
        result: What the pool returned
        state: Pool reserves after the step
    """

    op: Operation
    amount: int
    result: PoolResult
    state: PoolState

    def to_dict(self) -> dict[str, object]:
        value = self.result.value
        out: dict[str, object] = {
            "op": self.op.value,
            "amount": self.amount,
            "ok": self.result.is_valid,
            "value": list(value) if isinstance(value, tuple) else value,
            "state": {
                "base_reserve": self.state.base_reserve,
                "staked_reserve": self.state.staked_reserve,
                "lp_supply": self.state.lp_supply,
            },
        }
        if self.result.error is not None:
            out["error"] = self.result.error.value
        if self.result.max_swap is not None:
            out["max_swap"] = self.result.max_swap
        return out


@dataclass
class ScenarioReport:
    """Everything a scenario run produced."""

    params: PoolParams
    init_error: PoolError | None = None
    steps: list[StepOutcome] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        """True if the pool was created and every step succeeded."""
        return self.init_error is None and all(s.result.is_valid for s in self.steps)

    def to_dict(self) -> dict[str, object]:
        return {
            "params": {
                "price": self.params.price,
                "min_fee": self.params.min_fee,
                "max_fee": self.params.max_fee,
                "liquidity_target": self.params.liquidity_target,
            },
            "init_error": self.init_error.value if self.init_error else None,
            "steps": [s.to_dict() for s in self.steps],
            "succeeded": self.succeeded,
        }


def default_scenario() -> Scenario:
    """Deposit 100, swap 6, deposit 10, swap 30, then withdraw everything."""
    return Scenario(
        params=ScenarioParams(
            price=DEFAULT_POOL_PARAMS.price,
            min_fee=DEFAULT_POOL_PARAMS.min_fee,
            max_fee=DEFAULT_POOL_PARAMS.max_fee,
            liquidity_target=DEFAULT_POOL_PARAMS.liquidity_target,
        ),
        steps=[
            ScenarioStep(op=Operation.ADD_LIQUIDITY, amount=100 * SCALE),
            ScenarioStep(op=Operation.SWAP, amount=6 * SCALE),
            ScenarioStep(op=Operation.ADD_LIQUIDITY, amount=10 * SCALE),
            ScenarioStep(op=Operation.SWAP, amount=30 * SCALE),
            ScenarioStep(op=Operation.REMOVE_LIQUIDITY, amount="all"),
        ],
    )


def run_step(pool: LpPool, step: ScenarioStep) -> StepOutcome:
    """Apply a single step to the pool."""
    amount = pool.lp_supply if step.amount == "all" else step.amount
    result: PoolResult
    if step.op is Operation.ADD_LIQUIDITY:
        result = pool.add_liquidity(amount)
    elif step.op is Operation.REMOVE_LIQUIDITY:
        result = pool.remove_liquidity(amount)
    else:
        result = pool.swap(amount)
    return StepOutcome(op=step.op, amount=amount, result=result, state=pool.snapshot())


def run_scenario(scenario: Scenario) -> ScenarioReport:
    """Create the pool and run every step in order."""
    params = scenario.params.to_pool_params()
    report = ScenarioReport(params=params)

    created = LpPool.from_params(params)
    if created.is_error:
        logger.warning("scenario_init_failed", error=created.error.value if created.error else None)
        report.init_error = created.error
        return report

    pool = created.unwrap()
    for index, step in enumerate(scenario.steps):
        outcome = run_step(pool, step)
        report.steps.append(outcome)
        if outcome.result.is_error:
            logger.warning(
                "scenario_step_failed",
                step=index,
                op=step.op.value,
                amount=outcome.amount,
                error=outcome.result.error.value if outcome.result.error else None,
            )
        else:
            logger.info(
                "scenario_step",
                step=index,
                op=step.op.value,
                amount=outcome.amount,
                value=outcome.result.value,
            )

    logger.info(
        "scenario_complete",
        steps=len(report.steps),
        succeeded=report.succeeded,
    )
    return report
