"""Unsigned v0 transaction composition.

Fee payer, blockhash and instructions are all explicit: nothing is fetched,
inserted or signed here. Signature slots are filled with the default (zero)
signature; the integrator's wallet replaces them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from solders.hash import Hash
from solders.instruction import Instruction
from solders.message import MessageV0
from solders.pubkey import Pubkey
from solders.signature import Signature
from solders.transaction import VersionedTransaction

from threeium.common import ensure, ensure_non_empty_string, ensure_sequence, log_event
from threeium.errors import InputValidationError


@dataclass(slots=True, frozen=True)
class ComposeTransactionInput:
    fee_payer: Pubkey
    # Base58 blockhash, as returned by getLatestBlockhash.
    recent_blockhash: str
    instructions: Sequence[Instruction]


def _parse_blockhash(value: str) -> Hash:
    try:
        return Hash.from_string(value)
    except ValueError as error:
        raise InputValidationError(
            code="E_BLOCKHASH_INVALID",
            message="recentBlockhash is not a valid base58 hash",
            details={"value": value},
        ) from error


def compose_v0(request: ComposeTransactionInput) -> VersionedTransaction:
    ensure(isinstance(request, ComposeTransactionInput), "E_COMPOSE_INPUT_REQUIRED", "compose input is required")
    ensure(isinstance(request.fee_payer, Pubkey), "E_FEE_PAYER_REQUIRED", "feePayer is required")
    ensure_non_empty_string(request.recent_blockhash, "E_BLOCKHASH_REQUIRED", "recentBlockhash is required")
    ensure_sequence(request.instructions, "E_INSTRUCTIONS_REQUIRED", "instructions must be a list or tuple")
    for index, instruction in enumerate(request.instructions):
        ensure(
            isinstance(instruction, Instruction),
            "E_INSTRUCTION_INVALID",
            "instructions must contain Instruction values",
            index=index,
            received=type(instruction).__name__,
        )

    message = MessageV0.try_compile(
        request.fee_payer,
        list(request.instructions),
        [],
        _parse_blockhash(request.recent_blockhash),
    )
    placeholder_signatures = [Signature.default()] * message.header.num_required_signatures
    return VersionedTransaction.populate(message, placeholder_signatures)


class TransactionComposer:
    def __init__(self, *, logger: logging.Logger) -> None:
        self._logger = logger

    def compose_v0(self, request: ComposeTransactionInput) -> VersionedTransaction:
        transaction = compose_v0(request)
        log_event(
            self._logger,
            level="debug",
            event="transaction_composed",
            message="Composed unsigned v0 transaction",
            fee_payer=str(request.fee_payer),
            instruction_count=len(request.instructions),
            required_signatures=len(transaction.signatures),
        )
        return transaction
