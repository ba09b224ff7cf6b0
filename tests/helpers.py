from __future__ import annotations

import json
from typing import Any

from solders.instruction import AccountMeta, Instruction
from solders.pubkey import Pubkey

SYSTEM_PROGRAM = "11111111111111111111111111111111"
COMPUTE_BUDGET_PROGRAM = "ComputeBudget111111111111111111111111111111"
TOKEN_PROGRAM = "TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA"
SOL_MINT = "So11111111111111111111111111111111111111112"
USDC_MINT = "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v"


def make_key(seed: int) -> Pubkey:
    return Pubkey(bytes([seed]) * 32)


def make_instruction(
    program: str,
    *,
    data: bytes = b"",
    accounts: list[tuple[Pubkey, bool, bool]] | None = None,
) -> Instruction:
    return Instruction(
        Pubkey.from_string(program),
        data,
        [
            AccountMeta(pubkey=pubkey, is_signer=is_signer, is_writable=is_writable)
            for pubkey, is_signer, is_writable in (accounts or [])
        ],
    )


class FakeResponse:
    def __init__(self, status: int, body: Any) -> None:
        self.status = status
        self._body = body if isinstance(body, str) else json.dumps(body)

    async def text(self) -> str:
        return self._body

    async def __aenter__(self) -> "FakeResponse":
        return self

    async def __aexit__(self, *_exc_info: Any) -> bool:
        return False


class FakeSession:
    """Stands in for ``aiohttp.ClientSession``; replays queued (status, body) pairs or raises queued errors."""

    def __init__(self, responses: list[Any]) -> None:
        self._responses = list(responses)
        self.requests: list[tuple[str, str, Any]] = []

    def _next(self, method: str, url: str, payload: Any) -> FakeResponse:
        self.requests.append((method, url, payload))
        item = self._responses.pop(0)
        if isinstance(item, BaseException):
            raise item
        status, body = item
        return FakeResponse(status, body)

    def post(self, url: str, json: Any = None) -> FakeResponse:
        return self._next("POST", url, json)

    def get(self, url: str) -> FakeResponse:
        return self._next("GET", url, None)


def rpc_result(result: Any) -> tuple[int, dict[str, Any]]:
    return 200, {"jsonrpc": "2.0", "id": 1, "result": result}
