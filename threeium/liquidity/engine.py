from __future__ import annotations

import logging
from typing import Any, Sequence

from solders.pubkey import Pubkey

from threeium.common import ensure, ensure_sequence, guarded_call, log_event
from threeium.errors import ChainAccessorError, ReferentialIntegrityError
from threeium.types import AccountInfo

from .accessor import ChainAccessor
from .types import (
    COMMITMENT_LEVELS,
    AccountSnapshot,
    LiquidityObservation,
    LiquidityRoute,
    MetricsDeriver,
    RouteMetrics,
)


class LiquidityEngine:
    """Reads on-chain account state per route and hands it to a caller-supplied deriver.

    Read-only: the engine never sends transactions and never interprets account
    contents. Routes are processed strictly one after another, in input order.
    """

    def __init__(
        self,
        *,
        accessor: ChainAccessor,
        commitment: str,
        logger: logging.Logger,
    ) -> None:
        ensure(accessor is not None, "E_CONNECTION_REQUIRED", "chain accessor is required")
        ensure(
            isinstance(commitment, str) and commitment in COMMITMENT_LEVELS,
            "E_COMMITMENT_REQUIRED",
            "commitment must be one of processed, confirmed, finalized",
            commitment=commitment,
        )
        self._accessor = accessor
        self._commitment = commitment
        self._logger = logger

    @property
    def commitment(self) -> str:
        return self._commitment

    async def observe_and_derive(
        self,
        routes: Sequence[LiquidityRoute],
        derive: MetricsDeriver,
    ) -> list[RouteMetrics]:
        ensure_sequence(routes, "E_ROUTES_REQUIRED", "routes must be a list or tuple")
        ensure(callable(derive), "E_DERIVER_REQUIRED", "derive must be callable")

        results: list[RouteMetrics] = []
        seen_route_ids: set[str] = set()

        for position, route in enumerate(routes):
            route_id, addresses = self._validate_route(route, position=position, seen_route_ids=seen_route_ids)
            observation = await self._observe(route_id=route_id, addresses=addresses)

            metrics = derive(observation)
            ensure(
                isinstance(metrics, RouteMetrics),
                "E_ROUTE_METRIC_INVALID",
                "derive must return RouteMetrics",
                route_id=route_id,
                received=type(metrics).__name__,
            )
            results.append(metrics)

        return results

    @staticmethod
    def _validate_route(
        route: Any,
        *,
        position: int,
        seen_route_ids: set[str],
    ) -> tuple[str, tuple[Pubkey, ...]]:
        route_id = getattr(route, "route_id", None)
        ensure(
            isinstance(route_id, str) and len(route_id) > 0,
            "E_ROUTE_ID_REQUIRED",
            "routeId is required",
            position=position,
        )
        ensure(
            route_id not in seen_route_ids,
            "E_ROUTE_ID_DUPLICATE",
            "routeId must be unique within a call",
            error_cls=ReferentialIntegrityError,
            route_id=route_id,
            position=position,
        )
        seen_route_ids.add(route_id)

        observed = getattr(route, "observed_accounts", None)
        ensure_sequence(
            observed,
            "E_ROUTE_ACCOUNTS_REQUIRED",
            "observedAccounts must be a list or tuple",
            route_id=route_id,
        )
        for index, address in enumerate(observed):
            ensure(
                isinstance(address, Pubkey),
                "E_ROUTE_ACCOUNTS_REQUIRED",
                "observedAccounts must contain Pubkey values",
                route_id=route_id,
                index=index,
            )
        return route_id, tuple(observed)

    async def _observe(self, *, route_id: str, addresses: tuple[Pubkey, ...]) -> LiquidityObservation:
        address_strings = [str(address) for address in addresses]

        def accessor_error(operation: str) -> Any:
            def wrap(error: Exception) -> ChainAccessorError:
                return ChainAccessorError(
                    code="E_CHAIN_ACCESSOR_FAILED",
                    message=f"chain accessor {operation} failed for route {route_id}: {error}",
                    details={"route_id": route_id, "operation": operation, "addresses": address_strings},
                )

            return wrap

        infos = await guarded_call(
            lambda: self._accessor.get_account_batch(addresses, self._commitment),
            logger=self._logger,
            event="route_observation_failed",
            message="Account batch fetch failed",
            wrap_error=accessor_error("get_account_batch"),
            route_id=route_id,
            commitment=self._commitment,
        )
        slot = await guarded_call(
            lambda: self._accessor.get_current_ordinal(self._commitment),
            logger=self._logger,
            event="route_observation_failed",
            message="Current slot fetch failed",
            wrap_error=accessor_error("get_current_ordinal"),
            route_id=route_id,
            commitment=self._commitment,
        )

        ensure(
            isinstance(infos, (list, tuple)) and len(infos) == len(addresses),
            "E_ACCOUNT_BATCH_MISMATCH",
            "account batch does not match the requested addresses",
            error_cls=ReferentialIntegrityError,
            route_id=route_id,
            requested=len(addresses),
            received=len(infos) if isinstance(infos, (list, tuple)) else None,
        )
        ensure(
            isinstance(slot, int) and not isinstance(slot, bool),
            "E_SLOT_INVALID",
            "chain accessor returned a non-integer slot",
            error_cls=ChainAccessorError,
            route_id=route_id,
            slot=repr(slot),
        )

        snapshots: list[AccountSnapshot] = []
        # Positional correlation: entry i always belongs to requested address i.
        for index, (address, info) in enumerate(zip(addresses, infos)):
            ensure(
                info is not None,
                "E_ACCOUNT_INFO_MISSING",
                "account info missing from RPC response",
                error_cls=ReferentialIntegrityError,
                route_id=route_id,
                address=str(address),
                index=index,
            )
            ensure(
                isinstance(info, AccountInfo),
                "E_ACCOUNT_INFO_INVALID",
                "chain accessor returned a malformed account entry",
                error_cls=ChainAccessorError,
                route_id=route_id,
                address=str(address),
                index=index,
            )
            snapshots.append(
                AccountSnapshot(
                    address=address,
                    lamports=info.lamports,
                    executable=info.executable,
                    owner=info.owner,
                    data_length=info.data_length,
                )
            )

        log_event(
            self._logger,
            level="debug",
            event="route_observed",
            message="Observed route accounts",
            route_id=route_id,
            slot=slot,
            account_count=len(snapshots),
            commitment=self._commitment,
        )
        return LiquidityObservation(route_id=route_id, slot=slot, accounts=tuple(snapshots))
