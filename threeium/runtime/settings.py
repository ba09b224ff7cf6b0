from __future__ import annotations

import math
import os
from dataclasses import dataclass
from typing import Mapping

from threeium.config import ClusterConfig, validate_cluster_config, validate_rpc_url
from threeium.errors import InputValidationError


def require_env(name: str, environ: Mapping[str, str]) -> str:
    value = (environ.get(name) or "").strip()
    if not value:
        raise InputValidationError(
            code="E_SETTING_REQUIRED",
            message=f"{name} is required",
            details={"variable": name},
        )
    return value


def require_positive_float(name: str, environ: Mapping[str, str]) -> float:
    raw = require_env(name, environ)
    try:
        value = float(raw)
    except ValueError as error:
        raise InputValidationError(
            code="E_SETTING_INVALID",
            message=f"{name} must be a number",
            details={"variable": name, "value": raw},
        ) from error
    if not math.isfinite(value) or value <= 0:
        raise InputValidationError(
            code="E_SETTING_INVALID",
            message=f"{name} must be a positive number",
            details={"variable": name, "value": raw},
        )
    return value


@dataclass(slots=True, frozen=True)
class ClusterSettings:
    """Cluster and RPC settings read from the environment.

    Every variable is mandatory: a missing value is an error, never a default.
    Call ``dotenv.load_dotenv()`` first to pick up a local ``.env`` file.
    """

    cluster: ClusterConfig
    rpc_timeout_seconds: float

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ClusterSettings":
        env = os.environ if environ is None else environ
        cluster = ClusterConfig(
            cluster=require_env("THREEIUM_CLUSTER", env),  # type: ignore[arg-type]
            rpc_url=validate_rpc_url(require_env("THREEIUM_RPC_URL", env)),
            commitment=require_env("THREEIUM_COMMITMENT", env),  # type: ignore[arg-type]
        )
        return cls(
            cluster=validate_cluster_config(cluster),
            rpc_timeout_seconds=require_positive_float("THREEIUM_RPC_TIMEOUT_SECONDS", env),
        )
