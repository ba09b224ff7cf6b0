from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from solders.instruction import AccountMeta, Instruction

from threeium.common import ensure, ensure_sequence, log_event


@dataclass(slots=True, frozen=True)
class PriorityFeeInjection:
    """Explicit priority fee / compute budget instruction supplied by the caller."""

    instruction: Instruction | None


@dataclass(slots=True, frozen=True)
class ExecutionPlan:
    instructions: Sequence[Instruction]
    priority_fee: PriorityFeeInjection | None = None


def account_sort_token(meta: AccountMeta) -> str:
    return f"{meta.pubkey}:{'s' if meta.is_signer else '-'}:{'w' if meta.is_writable else '-'}"


def instruction_sort_key(instruction: Instruction) -> tuple[str, str, str]:
    """(program id, payload hex, account tokens) - structural, never semantic."""
    return (
        str(instruction.program_id),
        bytes(instruction.data).hex(),
        "|".join(account_sort_token(meta) for meta in instruction.accounts),
    )


def order_deterministically(instructions: Sequence[Instruction]) -> list[Instruction]:
    ensure_sequence(instructions, "E_INSTRUCTIONS_REQUIRED", "instructions must be a list or tuple")
    for index, instruction in enumerate(instructions):
        ensure(
            isinstance(instruction, Instruction),
            "E_INSTRUCTION_INVALID",
            "instructions must contain Instruction values",
            index=index,
            received=type(instruction).__name__,
        )
    return sorted(instructions, key=instruction_sort_key)


def build_plan(plan: ExecutionPlan) -> list[Instruction]:
    ensure(isinstance(plan, ExecutionPlan), "E_EXECUTION_PLAN_REQUIRED", "execution plan is required")
    ensure_sequence(plan.instructions, "E_INSTRUCTIONS_REQUIRED", "instructions must be a list or tuple")

    priority_fee = plan.priority_fee
    if priority_fee is not None:
        ensure(
            isinstance(priority_fee, PriorityFeeInjection) and isinstance(priority_fee.instruction, Instruction),
            "E_PRIORITY_FEE_INVALID",
            "priority_fee.instruction is required",
        )

    ordered = order_deterministically(plan.instructions)
    if priority_fee is None:
        return ordered
    # The priority instruction is exempt from ordering and always runs first.
    return [priority_fee.instruction, *ordered]


class ExecutionRouter:
    def __init__(self, *, logger: logging.Logger) -> None:
        self._logger = logger

    def order_deterministically(self, instructions: Sequence[Instruction]) -> list[Instruction]:
        return order_deterministically(instructions)

    def build_plan(self, plan: ExecutionPlan) -> list[Instruction]:
        ordered = build_plan(plan)
        log_event(
            self._logger,
            level="debug",
            event="execution_plan_built",
            message="Built deterministic execution plan",
            instruction_count=len(ordered),
            priority_fee_injected=plan.priority_fee is not None,
            program_ids=[str(instruction.program_id) for instruction in ordered],
        )
        return ordered
