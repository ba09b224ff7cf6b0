"""Deterministic route allocation.

Scores each route with an explicit linear model and allocates weights in
proportion to score. Pure: no I/O, no randomness, no hidden state.

Normalization per route:

- cost is inverted through ``1 / (1 + max(0, cost))`` so lower cost is better
  and the term stays in ``(0, 1]``;
- fee efficiency and liquidity depth are clamped at zero and left unbounded.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

from threeium.common import ensure, ensure_finite_number, ensure_sequence
from threeium.errors import AllocationInfeasibleError, ReferentialIntegrityError

from .types import AllocationWeights, RouteAllocation, RouteMetrics


@dataclass(slots=True, frozen=True)
class _ScoredRoute:
    route_id: str
    score: float


def _validate_weights(weights: AllocationWeights) -> float:
    ensure(isinstance(weights, AllocationWeights), "E_WEIGHTS_INVALID", "weights are required")
    for name in ("execution_cost", "fee_efficiency", "liquidity_depth"):
        value = getattr(weights, name)
        ensure_finite_number(value, "E_WEIGHTS_INVALID", f"weights.{name} must be a finite number", field=name)
        ensure(value >= 0, "E_WEIGHTS_INVALID", f"weights.{name} must be non-negative", field=name, value=value)

    total = weights.total()
    ensure(
        math.isfinite(total),
        "E_WEIGHTS_INVALID",
        "weights sum overflows",
        error_cls=AllocationInfeasibleError,
        total=total,
    )
    ensure(
        total > 0,
        "E_WEIGHTS_INVALID",
        "weights must sum to > 0",
        error_cls=AllocationInfeasibleError,
        total=total,
    )
    return total


def _validate_route(route: RouteMetrics, *, position: int, seen_route_ids: set[str]) -> None:
    ensure(isinstance(route, RouteMetrics), "E_ROUTE_METRIC_INVALID", "routes must contain RouteMetrics", position=position)
    ensure(
        isinstance(route.route_id, str) and len(route.route_id) > 0,
        "E_ROUTE_ID_REQUIRED",
        "routeId is required",
        position=position,
    )
    ensure(
        route.route_id not in seen_route_ids,
        "E_ROUTE_ID_DUPLICATE",
        "routeId must be unique within a call",
        error_cls=ReferentialIntegrityError,
        route_id=route.route_id,
    )
    seen_route_ids.add(route.route_id)
    for name in ("execution_cost", "fee_efficiency", "liquidity_depth"):
        ensure_finite_number(
            getattr(route, name),
            "E_ROUTE_METRIC_INVALID",
            f"{name} must be a finite number",
            route_id=route.route_id,
            field=name,
        )


def score_route(route: RouteMetrics, weights: AllocationWeights, weight_total: float) -> float:
    cost_term = 1 / (1 + max(0, route.execution_cost))
    fee_term = max(0, route.fee_efficiency)
    depth_term = max(0, route.liquidity_depth)
    return (
        weights.execution_cost * cost_term
        + weights.fee_efficiency * fee_term
        + weights.liquidity_depth * depth_term
    ) / weight_total


def allocate_routes(routes: Sequence[RouteMetrics], weights: AllocationWeights) -> list[RouteAllocation]:
    ensure_sequence(routes, "E_ROUTES_REQUIRED", "routes must be a list or tuple")
    weight_total = _validate_weights(weights)

    seen_route_ids: set[str] = set()
    for position, route in enumerate(routes):
        _validate_route(route, position=position, seen_route_ids=seen_route_ids)

    scored = [
        _ScoredRoute(route_id=route.route_id, score=score_route(route, weights, weight_total))
        for route in routes
    ]
    # Highest score first; equal scores fall back to ascending route id.
    scored.sort(key=lambda item: (-item.score, item.route_id))

    total_score = sum(item.score for item in scored)
    ensure(
        math.isfinite(total_score),
        "E_ALLOCATION_IMPOSSIBLE",
        "total score is not finite",
        error_cls=AllocationInfeasibleError,
        route_count=len(scored),
    )
    ensure(
        total_score > 0,
        "E_ALLOCATION_IMPOSSIBLE",
        "total score must be > 0",
        error_cls=AllocationInfeasibleError,
        route_count=len(scored),
    )

    return [RouteAllocation(route_id=item.route_id, weight=item.score / total_score) for item in scored]
