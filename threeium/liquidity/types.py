from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Callable, Sequence

from solders.pubkey import Pubkey

from threeium.types import AccountInfo

COMMITMENT_LEVELS = ("processed", "confirmed", "finalized")


@dataclass(slots=True, frozen=True)
class LiquidityRoute:
    route_id: str
    observed_accounts: Sequence[Pubkey]


@dataclass(slots=True, frozen=True)
class AccountSnapshot:
    address: Pubkey
    lamports: int
    executable: bool
    owner: Pubkey
    data_length: int


@dataclass(slots=True, frozen=True)
class LiquidityObservation:
    route_id: str
    slot: int
    accounts: tuple[AccountSnapshot, ...]

    def total_lamports(self) -> int:
        return sum(account.lamports for account in self.accounts)


@dataclass(slots=True, frozen=True)
class RouteMetrics:
    route_id: str
    # Lower is better; clamped at zero before scoring.
    execution_cost: float
    # Higher is better for both signals below.
    fee_efficiency: float
    liquidity_depth: float

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(slots=True, frozen=True)
class AllocationWeights:
    execution_cost: float
    fee_efficiency: float
    liquidity_depth: float

    def total(self) -> float:
        return self.execution_cost + self.fee_efficiency + self.liquidity_depth


@dataclass(slots=True, frozen=True)
class RouteAllocation:
    route_id: str
    weight: float

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


MetricsDeriver = Callable[[LiquidityObservation], RouteMetrics]
