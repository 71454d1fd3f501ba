"""
multisend — settlement calculator for multi-send token transfers.

Computes the net per-address, per-denom balance changes of a multi-input,
multi-output transfer, applying burn and commission fees that are
distributed proportionally across non-issuer senders.
"""

from multisend.calculator import (
    SettlementCalculator,
    SettlementConfig,
    SettlementResult,
    compute_balance_changes,
    compute_from_payload,
)
from multisend.core.domain import (
    Balance,
    BalanceChange,
    Coin,
    CoinDelta,
    DenomDefinition,
    MultiSendInstruction,
    Settlement,
)

__version__ = "0.3.0"

__all__ = [
    "Balance",
    "BalanceChange",
    "Coin",
    "CoinDelta",
    "DenomDefinition",
    "MultiSendInstruction",
    "Settlement",
    "SettlementCalculator",
    "SettlementConfig",
    "SettlementResult",
    "compute_balance_changes",
    "compute_from_payload",
]
