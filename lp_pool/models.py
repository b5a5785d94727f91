"""Pydantic models for scenario files.

A scenario names the pool parameters and an ordered list of operations
to run against a single pool:

    {
      "params": {"price": 1500000, "min_fee": 1000, "max_fee": 90000,
                 "liquidity_target": 90000000},
      "steps": [{"op": "add_liquidity", "amount": 100000000},
                {"op": "swap", "amount": "6000000"},
                {"op": "remove_liquidity", "amount": "all"}]
    }
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Literal

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, model_validator

from lp_pool.config import PoolParams
from lp_pool.constants import UINT64_MAX


def validate_uint64(value: Any) -> int:
    """Validate that a value is a u64 given as int or decimal string.

    Raises:
        ValueError: If value is not a non-negative integer within u64 range
    """
    if isinstance(value, bool):
        raise ValueError("Uint64 cannot be a boolean")
    if isinstance(value, str):
        try:
            value = int(value)
        except ValueError as err:
            raise ValueError(f"Uint64 must be a decimal integer string: '{value}'") from err
    if not isinstance(value, int):
        raise ValueError(f"Uint64 must be string or int, got {type(value).__name__}")
    if value < 0:
        raise ValueError(f"Uint64 cannot be negative: {value}")
    if value > UINT64_MAX:
        raise ValueError(f"Uint64 overflow: {value} > 2^64-1")
    return value


# 64-bit unsigned integer as int or decimal string (validated)
Uint64 = Annotated[
    int,
    BeforeValidator(validate_uint64),
    Field(description="64-bit unsigned integer"),
]


class Operation(str, Enum):
    """Pool operations a scenario step can invoke."""

    ADD_LIQUIDITY = "add_liquidity"
    REMOVE_LIQUIDITY = "remove_liquidity"
    SWAP = "swap"


class ScenarioParams(BaseModel):
    """Pool parameters as they appear in a scenario file."""

    model_config = ConfigDict(extra="forbid")

    price: Uint64
    min_fee: Uint64
    max_fee: Uint64
    liquidity_target: Uint64

    def to_pool_params(self) -> PoolParams:
        return PoolParams(
            price=self.price,
            min_fee=self.min_fee,
            max_fee=self.max_fee,
            liquidity_target=self.liquidity_target,
        )


class ScenarioStep(BaseModel):
    """One operation in a scenario.

    remove_liquidity accepts "all" to burn the pool's whole LP supply at
    the time the step runs.
    """

    model_config = ConfigDict(extra="forbid")

    op: Operation
    amount: Literal["all"] | Uint64

    @model_validator(mode="after")
    def check_all_only_for_remove(self) -> ScenarioStep:
        if self.amount == "all" and self.op is not Operation.REMOVE_LIQUIDITY:
            raise ValueError(f"amount 'all' is only valid for remove_liquidity, not {self.op.value}")
        return self


class Scenario(BaseModel):
    """Pool parameters plus the operations to run, in order."""

    model_config = ConfigDict(extra="forbid")

    params: ScenarioParams
    steps: list[ScenarioStep] = Field(default_factory=list)
