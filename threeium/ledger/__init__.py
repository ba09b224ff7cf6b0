from .calculator import YieldCalculator, compute_yield
from .types import (
    ExecutionFeeEvent,
    ProtocolRevenueEvent,
    SlotWindow,
    YieldInputs,
    YieldReference,
    YieldReport,
    YieldTotals,
)

__all__ = [
    "ExecutionFeeEvent",
    "ProtocolRevenueEvent",
    "SlotWindow",
    "YieldCalculator",
    "YieldInputs",
    "YieldReference",
    "YieldReport",
    "YieldTotals",
    "compute_yield",
]
