#!/usr/bin/env python3
"""Observe route accounts on-chain and print a deterministic allocation.

Reads ``THREEIUM_CLUSTER``, ``THREEIUM_RPC_URL``, ``THREEIUM_COMMITMENT`` and
``THREEIUM_RPC_TIMEOUT_SECONDS`` (``.env`` supported). The routes file holds::

    {"routes": [{"routeId": "route-a", "accounts": ["<base58>", "..."]}]}

Metrics are derived from raw lamport balances only; this is a smoke tool, not
a pricing model.
"""

from __future__ import annotations

import argparse
import asyncio
import json
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from threeium.client import ConnectionManager
from threeium.common import log_event
from threeium.errors import InputValidationError, ThreeiumError
from threeium.liquidity import (
    AllocationWeights,
    LiquidityEngine,
    LiquidityObservation,
    LiquidityRoute,
    RouteMetrics,
    allocate_routes,
)
from threeium.runtime import ClusterSettings, setup_logger
from threeium.types import parse_pubkey


def load_routes(path: Path) -> list[LiquidityRoute]:
    payload: Any = json.loads(path.read_text(encoding="utf-8"))
    raw_routes = payload.get("routes") if isinstance(payload, dict) else None
    if not isinstance(raw_routes, list):
        raise InputValidationError(code="E_ROUTES_REQUIRED", message="routes file must contain a routes array")

    routes: list[LiquidityRoute] = []
    for index, item in enumerate(raw_routes):
        if not isinstance(item, dict) or not isinstance(item.get("accounts"), list):
            raise InputValidationError(
                code="E_ROUTE_ACCOUNTS_REQUIRED",
                message=f"routes[{index}] must have an accounts array",
            )
        routes.append(
            LiquidityRoute(
                route_id=item.get("routeId"),
                observed_accounts=tuple(
                    parse_pubkey(address, "E_ROUTE_ACCOUNTS_REQUIRED", f"routes[{index}] accounts must be base58 addresses")
                    for address in item["accounts"]
                ),
            )
        )
    return routes


def lamport_metrics(observation: LiquidityObservation) -> RouteMetrics:
    total_lamports = observation.total_lamports()
    return RouteMetrics(
        route_id=observation.route_id,
        execution_cost=float(total_lamports % 1_000_000),
        fee_efficiency=float((total_lamports // 1_000) % 10_000),
        liquidity_depth=float((total_lamports // 1_000_000) % 1_000_000),
    )


async def run(args: argparse.Namespace) -> int:
    logger = setup_logger(args.log_level.upper())
    try:
        settings = ClusterSettings.from_env()
        routes = load_routes(args.routes)
        weights = AllocationWeights(
            execution_cost=args.weights[0],
            fee_efficiency=args.weights[1],
            liquidity_depth=args.weights[2],
        )

        async with ConnectionManager(
            settings.cluster,
            timeout_seconds=settings.rpc_timeout_seconds,
            logger=logger,
        ) as manager:
            engine = LiquidityEngine(
                accessor=manager.chain_accessor(),
                commitment=settings.cluster.commitment,
                logger=logger,
            )
            metrics = await engine.observe_and_derive(routes, lamport_metrics)

        allocations = allocate_routes(metrics, weights)
    except ThreeiumError as error:
        log_event(
            logger,
            level="error",
            event="observe_routes_failed",
            message=f"Route observation failed: {error.message}",
            code=error.code,
            kind=error.kind,
            details=error.details,
        )
        return 1

    output = {
        "metrics": [item.to_dict() for item in metrics],
        "allocations": [item.to_dict() for item in allocations],
    }
    print(json.dumps(output, ensure_ascii=False, indent=2))
    return 0


def main() -> int:
    load_dotenv()

    parser = argparse.ArgumentParser(description="Observe route accounts and allocate weights.")
    parser.add_argument("routes", type=Path, help="path to the JSON routes file")
    parser.add_argument(
        "--weights",
        type=float,
        nargs=3,
        required=True,
        metavar=("EXECUTION_COST", "FEE_EFFICIENCY", "LIQUIDITY_DEPTH"),
    )
    parser.add_argument("--log-level", default="INFO")
    return asyncio.run(run(parser.parse_args()))


if __name__ == "__main__":
    raise SystemExit(main())
