from __future__ import annotations

from typing import Any, Mapping


class ThreeiumError(RuntimeError):
    """Base SDK error: stable machine-matchable code plus structured details."""

    kind = "threeium"

    def __init__(
        self,
        *,
        code: str,
        message: str,
        details: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details: dict[str, Any] = dict(details or {})

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": type(self).__name__,
            "kind": self.kind,
            "code": self.code,
            "message": self.message,
            "details": dict(self.details),
        }


class InputValidationError(ThreeiumError):
    kind = "input_shape"


class ReferentialIntegrityError(ThreeiumError):
    kind = "referential_integrity"


class AllocationInfeasibleError(ThreeiumError):
    kind = "domain_infeasibility"


class ChainAccessorError(ThreeiumError):
    kind = "collaborator"


class RpcMethodError(ThreeiumError):
    kind = "collaborator"

    def __init__(
        self,
        *,
        method: str,
        message: str,
        status: int | None = None,
        code: int | None = None,
        data: Any = None,
    ) -> None:
        super().__init__(
            code="E_RPC_METHOD_FAILED",
            message=message,
            details={"method": method, "status": status, "rpc_code": code},
        )
        self.method = method
        self.status = status
        self.rpc_code = code
        self.data = data


class IdlLoadError(ThreeiumError):
    kind = "collaborator"
