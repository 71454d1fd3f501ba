"""Calculator — settlement of multi-send transactions.

- Per-denom balanced-transaction check
- Proportional burn/commission apportionment across non-issuer senders
- Atomic all-or-nothing rejection
"""

from .errors import (
    DuplicateBalance,
    DuplicateDefinition,
    InsufficientBalance,
    SettlementRejected,
    UnbalancedTransaction,
    UnknownDenomination,
    UnknownIssuer,
)
from .settlement_calculator import (
    DenomAggregate,
    SettlementCalculator,
    SettlementConfig,
    SettlementResult,
    compute_balance_changes,
    compute_from_payload,
)
from .working_state import SettlementWorkingState

__all__ = [
    "SettlementCalculator",
    "SettlementConfig",
    "SettlementResult",
    "DenomAggregate",
    "SettlementWorkingState",
    "compute_balance_changes",
    "compute_from_payload",
    # Rejections
    "SettlementRejected",
    "UnbalancedTransaction",
    "InsufficientBalance",
    "UnknownIssuer",
    "UnknownDenomination",
    "DuplicateDefinition",
    "DuplicateBalance",
]
