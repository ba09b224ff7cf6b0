from .cluster import (
    CLUSTER_NAMES,
    ClusterConfig,
    ClusterName,
    Commitment,
    validate_cluster_config,
    validate_rpc_url,
)
from .programs import ProgramAddress, ProgramRegistry

__all__ = [
    "CLUSTER_NAMES",
    "ClusterConfig",
    "ClusterName",
    "Commitment",
    "ProgramAddress",
    "ProgramRegistry",
    "validate_cluster_config",
    "validate_rpc_url",
]
