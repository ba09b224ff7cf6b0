from __future__ import annotations

import logging
from typing import Any

import aiohttp

from threeium.common import ensure, ensure_finite_number, log_event
from threeium.config import ClusterConfig, validate_cluster_config, validate_rpc_url
from threeium.liquidity.accessor import RpcChainAccessor

from .rpc import SolanaRpcClient


class ConnectionManager:
    """Owns the HTTP session behind the JSON-RPC client.

    Read-only by construction: only query methods are exposed. The commitment
    and timeout come from the caller; there are no fallbacks.
    """

    def __init__(
        self,
        config: ClusterConfig,
        *,
        timeout_seconds: float,
        logger: logging.Logger,
    ) -> None:
        validate_cluster_config(config)
        validate_rpc_url(config.rpc_url)
        ensure_finite_number(timeout_seconds, "E_TIMEOUT_INVALID", "timeout_seconds must be a finite number")
        ensure(timeout_seconds > 0, "E_TIMEOUT_INVALID", "timeout_seconds must be positive", timeout=timeout_seconds)

        self._config = config
        self._timeout_seconds = float(timeout_seconds)
        self._logger = logger
        self._session: aiohttp.ClientSession | None = None
        self._rpc: SolanaRpcClient | None = None

    async def connect(self) -> SolanaRpcClient:
        if self._rpc is None:
            self._session = aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=self._timeout_seconds))
            self._rpc = SolanaRpcClient(rpc_url=self._config.rpc_url, session=self._session, logger=self._logger)
            log_event(
                self._logger,
                level="info",
                event="rpc_connected",
                message="Opened RPC session",
                cluster=self._config.cluster,
                rpc_url=self._config.rpc_url,
                commitment=self._config.commitment,
            )
        return self._rpc

    async def close(self) -> None:
        if self._session is not None:
            await self._session.close()
            log_event(
                self._logger,
                level="info",
                event="rpc_closed",
                message="Closed RPC session",
                cluster=self._config.cluster,
            )
        self._session = None
        self._rpc = None

    async def __aenter__(self) -> "ConnectionManager":
        await self.connect()
        return self

    async def __aexit__(self, *_exc_info: Any) -> None:
        await self.close()

    def get_connection(self) -> SolanaRpcClient:
        ensure(self._rpc is not None, "E_CONNECTION_REQUIRED", "connection is not open; call connect() first")
        return self._rpc

    def get_config(self) -> ClusterConfig:
        return self._config

    def chain_accessor(self) -> RpcChainAccessor:
        return RpcChainAccessor(self.get_connection())

    async def healthcheck(self) -> int:
        return await self.get_connection().get_slot(self._config.commitment)
