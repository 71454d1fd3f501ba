"""
Domain models and value objects.

Contains the multi-send entities: Coin, Balance, DenomDefinition,
MultiSendInstruction and the resulting Settlement.
"""

from multisend.core.domain.coin import Balance, BalanceChange, Coin, CoinDelta
from multisend.core.domain.denom import DenomDefinition
from multisend.core.domain.multi_send import MultiSendInstruction
from multisend.core.domain.settlement import Settlement

__all__ = [
    # Coin legs
    "Coin",
    "CoinDelta",
    "Balance",
    "BalanceChange",
    # Denom registry
    "DenomDefinition",
    # Transfer
    "MultiSendInstruction",
    # Result
    "Settlement",
]
