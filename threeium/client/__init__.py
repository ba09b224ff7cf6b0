from .client import ThreeiumClient, Wallet
from .connection import ConnectionManager
from .rpc import MAX_MULTIPLE_ACCOUNTS, SolanaRpcClient

__all__ = [
    "ConnectionManager",
    "MAX_MULTIPLE_ACCOUNTS",
    "SolanaRpcClient",
    "ThreeiumClient",
    "Wallet",
]
