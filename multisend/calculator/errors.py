"""Rejection reasons of the settlement calculator.

Every rejection is terminal for the whole transaction: nothing is partially
applied. Each exception carries the offending denom/address so the host
ledger can report it.
"""

from __future__ import annotations


class SettlementRejected(Exception):
    """Base exception for all rejected multi-send transactions."""

    reason: str = "rejected"


class UnbalancedTransaction(SettlementRejected):
    """Inputs and outputs of a denom do not sum to the same amount."""

    reason = "unbalanced_transaction"

    def __init__(self, denom: str, input_sum: int, output_sum: int) -> None:
        self.denom = denom
        self.input_sum = input_sum
        self.output_sum = output_sum
        super().__init__(
            f"Unbalanced multi-send for denom {denom}: inputs {input_sum} != outputs {output_sum}"
        )


class InsufficientBalance(SettlementRejected):
    """A sender cannot cover its input amount plus burn and commission."""

    reason = "insufficient_balance"

    def __init__(self, address: str, denom: str, available: int, required: int) -> None:
        self.address = address
        self.denom = denom
        self.available = available
        self.required = required
        super().__init__(
            f"Insufficient balance on {address} for denom {denom}: "
            f"available {available}, required {required}"
        )


class UnknownIssuer(SettlementRejected):
    """A commission credit targets an issuer missing from the balance snapshot."""

    reason = "unknown_issuer"

    def __init__(self, issuer: str, denom: str) -> None:
        self.issuer = issuer
        self.denom = denom
        super().__init__(f"Issuer {issuer} of denom {denom} has no balance entry")


class UnknownDenomination(SettlementRejected):
    """A denom of the instruction has no definition (strict mode only)."""

    reason = "unknown_denomination"

    def __init__(self, denom: str) -> None:
        self.denom = denom
        super().__init__(f"No definition for denom {denom}")


class DuplicateDefinition(SettlementRejected):
    """The denom registry holds more than one definition of a denom."""

    reason = "duplicate_definition"

    def __init__(self, denom: str) -> None:
        self.denom = denom
        super().__init__(f"Denom {denom} is defined more than once")


class DuplicateBalance(SettlementRejected):
    """The balance snapshot holds more than one entry for an address."""

    reason = "duplicate_balance"

    def __init__(self, address: str) -> None:
        self.address = address
        super().__init__(f"Address {address} appears more than once in the balance snapshot")
