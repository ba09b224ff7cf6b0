from .accessor import ChainAccessor, RpcChainAccessor
from .allocator import allocate_routes, score_route
from .engine import LiquidityEngine
from .types import (
    COMMITMENT_LEVELS,
    AccountSnapshot,
    AllocationWeights,
    LiquidityObservation,
    LiquidityRoute,
    MetricsDeriver,
    RouteAllocation,
    RouteMetrics,
)

__all__ = [
    "AccountSnapshot",
    "AllocationWeights",
    "COMMITMENT_LEVELS",
    "ChainAccessor",
    "LiquidityEngine",
    "LiquidityObservation",
    "LiquidityRoute",
    "MetricsDeriver",
    "RouteAllocation",
    "RouteMetrics",
    "RpcChainAccessor",
    "allocate_routes",
    "score_route",
]
