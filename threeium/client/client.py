from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Sequence

from solders.pubkey import Pubkey

from threeium.common import ensure
from threeium.config import ClusterConfig, ProgramRegistry, validate_cluster_config

from .rpc import SolanaRpcClient

SignTransaction = Callable[[Any], Awaitable[Any]]
SignAllTransactions = Callable[[Sequence[Any]], Awaitable[Sequence[Any]]]


@dataclass(slots=True, frozen=True)
class Wallet:
    """Signer-agnostic wallet boundary. The SDK holds no keys and never signs by itself."""

    public_key: Pubkey | None = None
    sign_transaction: SignTransaction | None = None
    sign_all_transactions: SignAllTransactions | None = None


class ThreeiumClient:
    """Stateless entry point bundling the injected collaborators."""

    def __init__(
        self,
        *,
        connection: SolanaRpcClient,
        cluster: ClusterConfig,
        programs: ProgramRegistry,
        wallet: Wallet | None = None,
    ) -> None:
        ensure(connection is not None, "E_CONNECTION_REQUIRED", "connection is required")
        ensure(isinstance(cluster, ClusterConfig), "E_CLUSTER_CONFIG_REQUIRED", "cluster config is required")
        ensure(isinstance(programs, ProgramRegistry), "E_PROGRAM_REGISTRY_REQUIRED", "program registry is required")
        validate_cluster_config(cluster)

        self.connection = connection
        self.cluster = cluster
        self.programs = programs
        self.wallet = wallet

    def can_sign(self) -> bool:
        return self.wallet is not None and self.wallet.sign_transaction is not None

    def require_signer(self) -> SignTransaction:
        ensure(self.can_sign(), "E_SIGNER_REQUIRED", "wallet sign_transaction is required")
        return self.wallet.sign_transaction  # type: ignore[union-attr, return-value]
