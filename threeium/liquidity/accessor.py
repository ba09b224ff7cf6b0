from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, Sequence

from solders.pubkey import Pubkey

from threeium.types import AccountInfo

if TYPE_CHECKING:
    from threeium.client.rpc import SolanaRpcClient


class ChainAccessor(Protocol):
    """Read-only chain view consumed by ``LiquidityEngine``.

    ``get_account_batch`` must return exactly one entry per requested address,
    in request order; ``None`` marks an account that does not exist.
    """

    async def get_account_batch(
        self,
        addresses: Sequence[Pubkey],
        commitment: str,
    ) -> Sequence[AccountInfo | None]:
        ...

    async def get_current_ordinal(self, commitment: str) -> int:
        ...


class RpcChainAccessor:
    def __init__(self, rpc: SolanaRpcClient) -> None:
        self._rpc = rpc

    async def get_account_batch(
        self,
        addresses: Sequence[Pubkey],
        commitment: str,
    ) -> list[AccountInfo | None]:
        return await self._rpc.get_multiple_accounts(addresses, commitment)

    async def get_current_ordinal(self, commitment: str) -> int:
        return await self._rpc.get_slot(commitment)
