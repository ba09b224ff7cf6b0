from __future__ import annotations

import asyncio
import base64
import binascii
import itertools
import json
import logging
from typing import Any, Sequence

import aiohttp
from solders.pubkey import Pubkey

from threeium.common import log_event
from threeium.errors import RpcMethodError
from threeium.types import AccountInfo

# getMultipleAccounts rejects requests with more than 100 keys.
MAX_MULTIPLE_ACCOUNTS = 100


def _error_payload_to_message(error_payload: Any) -> str:
    if isinstance(error_payload, dict):
        message = str(error_payload.get("message") or "").strip()
        code = error_payload.get("code")
        if message and code is not None:
            return f"{message} (code={code})"
        if message:
            return message
    return str(error_payload)


class SolanaRpcClient:
    """Minimal JSON-RPC 2.0 client for the read-only Solana methods the SDK needs.

    The ``aiohttp.ClientSession`` is owned by the caller, including its timeout
    policy. The client never retries.
    """

    def __init__(
        self,
        *,
        rpc_url: str,
        session: aiohttp.ClientSession,
        logger: logging.Logger,
    ) -> None:
        self._rpc_url = rpc_url
        self._session = session
        self._logger = logger
        self._request_ids = itertools.count(1)

    @property
    def rpc_url(self) -> str:
        return self._rpc_url

    async def call(self, method: str, params: list[Any] | None = None) -> Any:
        payload: dict[str, Any] = {
            "jsonrpc": "2.0",
            "id": next(self._request_ids),
            "method": method,
            "params": params or [],
        }

        try:
            async with self._session.post(self._rpc_url, json=payload) as response:
                status_code = response.status
                raw_text = await response.text()
        except (aiohttp.ClientError, asyncio.TimeoutError) as error:
            log_event(
                self._logger,
                level="warning",
                event="rpc_transport_error",
                message="RPC request failed before a response was received",
                method=method,
                rpc_url=self._rpc_url,
                error=str(error),
            )
            raise RpcMethodError(method=method, message=f"RPC network error for {method}: {error}") from error

        parsed: Any = None
        try:
            parsed = json.loads(raw_text) if raw_text else {}
        except json.JSONDecodeError:
            parsed = {"raw_text": raw_text}

        if status_code >= 400:
            raise RpcMethodError(
                method=method,
                status=status_code,
                data=parsed,
                message=f"RPC call failed: method={method} status={status_code}",
            )

        if not isinstance(parsed, dict):
            raise RpcMethodError(method=method, data=parsed, message=f"Invalid RPC response for {method}")

        error_payload = parsed.get("error")
        if error_payload:
            error_code = error_payload.get("code") if isinstance(error_payload, dict) else None
            raise RpcMethodError(
                method=method,
                code=error_code if isinstance(error_code, int) else None,
                data=parsed,
                message=f"RPC error for {method}: {_error_payload_to_message(error_payload)}",
            )

        if "result" not in parsed:
            raise RpcMethodError(method=method, data=parsed, message=f"RPC response for {method} has no result")
        return parsed["result"]

    async def get_slot(self, commitment: str) -> int:
        result = await self.call("getSlot", [{"commitment": commitment}])
        if isinstance(result, bool) or not isinstance(result, int):
            raise RpcMethodError(method="getSlot", data=result, message=f"Unexpected getSlot response: {result}")
        return result

    async def get_latest_blockhash(self, commitment: str) -> tuple[str, int | None]:
        result = await self.call("getLatestBlockhash", [{"commitment": commitment}])
        value = result.get("value") if isinstance(result, dict) else None
        if not isinstance(value, dict):
            raise RpcMethodError(
                method="getLatestBlockhash",
                data=result,
                message=f"Unexpected getLatestBlockhash payload: {result}",
            )

        blockhash = str(value.get("blockhash") or "").strip()
        if not blockhash:
            raise RpcMethodError(
                method="getLatestBlockhash",
                data=result,
                message=f"Missing blockhash in RPC response: {result}",
            )
        last_valid_block_height = value.get("lastValidBlockHeight")
        if not isinstance(last_valid_block_height, int) or last_valid_block_height < 0:
            last_valid_block_height = None
        return blockhash, last_valid_block_height

    async def get_multiple_accounts(
        self,
        addresses: Sequence[Pubkey],
        commitment: str,
    ) -> list[AccountInfo | None]:
        infos: list[AccountInfo | None] = []
        for start in range(0, len(addresses), MAX_MULTIPLE_ACCOUNTS):
            chunk = addresses[start : start + MAX_MULTIPLE_ACCOUNTS]
            result = await self.call(
                "getMultipleAccounts",
                [[str(address) for address in chunk], {"commitment": commitment, "encoding": "base64"}],
            )
            value = result.get("value") if isinstance(result, dict) else None
            if not isinstance(value, list) or len(value) != len(chunk):
                raise RpcMethodError(
                    method="getMultipleAccounts",
                    data=result,
                    message=(
                        "Unexpected getMultipleAccounts payload: "
                        f"requested={len(chunk)} received={len(value) if isinstance(value, list) else None}"
                    ),
                )
            infos.extend(self._parse_account(raw) for raw in value)
        return infos

    @staticmethod
    def _parse_account(raw: Any) -> AccountInfo | None:
        if raw is None:
            return None
        if not isinstance(raw, dict):
            raise RpcMethodError(method="getMultipleAccounts", data=raw, message=f"Invalid account entry: {raw}")

        lamports = raw.get("lamports")
        owner = raw.get("owner")
        data = raw.get("data")
        if isinstance(lamports, bool) or not isinstance(lamports, int) or not isinstance(owner, str):
            raise RpcMethodError(method="getMultipleAccounts", data=raw, message=f"Invalid account entry: {raw}")
        if not isinstance(data, list) or not data or not isinstance(data[0], str):
            raise RpcMethodError(method="getMultipleAccounts", data=raw, message="Account data is not base64 encoded")

        try:
            data_length = len(base64.b64decode(data[0]))
            owner_key = Pubkey.from_string(owner)
        except (binascii.Error, ValueError) as error:
            raise RpcMethodError(
                method="getMultipleAccounts",
                data=raw,
                message=f"Account entry decode failed: {error}",
            ) from error

        return AccountInfo(
            lamports=lamports,
            executable=bool(raw.get("executable")),
            owner=owner_key,
            data_length=data_length,
        )
