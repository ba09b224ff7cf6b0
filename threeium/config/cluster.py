from __future__ import annotations

from dataclasses import dataclass
from typing import Literal
from urllib.parse import urlsplit

from threeium.common import ensure, ensure_non_empty_string
from threeium.liquidity.types import COMMITMENT_LEVELS

ClusterName = Literal["mainnet-beta", "devnet", "testnet", "custom"]
Commitment = Literal["processed", "confirmed", "finalized"]

CLUSTER_NAMES = ("mainnet-beta", "devnet", "testnet", "custom")


@dataclass(slots=True, frozen=True)
class ClusterConfig:
    """Cluster selection. Every field is required; nothing is defaulted."""

    cluster: ClusterName
    rpc_url: str
    commitment: Commitment


def validate_rpc_url(rpc_url: str) -> str:
    ensure_non_empty_string(rpc_url, "E_RPC_URL_REQUIRED", "rpcUrl is required")
    parsed = urlsplit(rpc_url)
    ensure(
        parsed.scheme in {"http", "https"} and bool(parsed.netloc),
        "E_RPC_URL_INVALID",
        "rpcUrl must be a valid http or https URL",
        rpc_url=rpc_url,
    )
    return rpc_url


def validate_cluster_config(config: ClusterConfig) -> ClusterConfig:
    ensure(isinstance(config, ClusterConfig), "E_CLUSTER_CONFIG_REQUIRED", "cluster config is required")
    ensure_non_empty_string(config.rpc_url, "E_RPC_URL_REQUIRED", "rpcUrl is required")
    ensure_non_empty_string(config.cluster, "E_CLUSTER_REQUIRED", "cluster is required")
    ensure(config.cluster in CLUSTER_NAMES, "E_CLUSTER_REQUIRED", "cluster is not recognised", cluster=config.cluster)
    ensure_non_empty_string(config.commitment, "E_COMMITMENT_REQUIRED", "commitment is required")
    ensure(
        config.commitment in COMMITMENT_LEVELS,
        "E_COMMITMENT_REQUIRED",
        "commitment must be one of processed, confirmed, finalized",
        commitment=config.commitment,
    )
    return config
