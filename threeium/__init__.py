from .errors import (
    AllocationInfeasibleError,
    ChainAccessorError,
    IdlLoadError,
    InputValidationError,
    ReferentialIntegrityError,
    RpcMethodError,
    ThreeiumError,
)
from .types import AccountInfo, parse_pubkey
from .execution import (
    ComposeTransactionInput,
    ExecutionPlan,
    ExecutionRouter,
    PriorityFeeInjection,
    TransactionComposer,
    build_plan,
    compose_v0,
    order_deterministically,
)
from .liquidity import (
    AccountSnapshot,
    AllocationWeights,
    ChainAccessor,
    LiquidityEngine,
    LiquidityObservation,
    LiquidityRoute,
    MetricsDeriver,
    RouteAllocation,
    RouteMetrics,
    RpcChainAccessor,
    allocate_routes,
)
from .ledger import (
    ExecutionFeeEvent,
    ProtocolRevenueEvent,
    SlotWindow,
    YieldCalculator,
    YieldInputs,
    YieldReport,
    compute_yield,
)
from .config import ClusterConfig, ProgramAddress, ProgramRegistry, validate_cluster_config
from .client import ConnectionManager, SolanaRpcClient, ThreeiumClient, Wallet
from .idl import AnchorIdl, load_idl_from_file, load_idl_from_url

__all__ = [
    "AccountInfo",
    "AccountSnapshot",
    "AllocationInfeasibleError",
    "AllocationWeights",
    "AnchorIdl",
    "ChainAccessor",
    "ChainAccessorError",
    "ClusterConfig",
    "ComposeTransactionInput",
    "ConnectionManager",
    "ExecutionFeeEvent",
    "ExecutionPlan",
    "ExecutionRouter",
    "IdlLoadError",
    "InputValidationError",
    "LiquidityEngine",
    "LiquidityObservation",
    "LiquidityRoute",
    "MetricsDeriver",
    "PriorityFeeInjection",
    "ProgramAddress",
    "ProgramRegistry",
    "ProtocolRevenueEvent",
    "ReferentialIntegrityError",
    "RouteAllocation",
    "RouteMetrics",
    "RpcChainAccessor",
    "RpcMethodError",
    "SlotWindow",
    "SolanaRpcClient",
    "ThreeiumClient",
    "ThreeiumError",
    "TransactionComposer",
    "Wallet",
    "YieldCalculator",
    "YieldInputs",
    "YieldReport",
    "allocate_routes",
    "build_plan",
    "compose_v0",
    "compute_yield",
    "load_idl_from_file",
    "load_idl_from_url",
    "order_deterministically",
    "parse_pubkey",
    "validate_cluster_config",
]
