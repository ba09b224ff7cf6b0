from .composer import ComposeTransactionInput, TransactionComposer, compose_v0
from .router import (
    ExecutionPlan,
    ExecutionRouter,
    PriorityFeeInjection,
    account_sort_token,
    build_plan,
    instruction_sort_key,
    order_deterministically,
)

__all__ = [
    "ComposeTransactionInput",
    "ExecutionPlan",
    "ExecutionRouter",
    "PriorityFeeInjection",
    "TransactionComposer",
    "account_sort_token",
    "build_plan",
    "compose_v0",
    "instruction_sort_key",
    "order_deterministically",
]
