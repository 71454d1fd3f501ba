"""Per-call accumulator of balance changes.

A fresh SettlementWorkingState is created for every computation and
discarded once the Settlement is built; nothing is shared between calls.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from multisend.core.domain import Settlement


@dataclass
class SettlementWorkingState:
    """Mutable working state of one settlement computation."""

    deltas: dict[str, dict[str, int]] = field(default_factory=dict)
    burned: dict[str, int] = field(default_factory=dict)
    commissions: dict[str, int] = field(default_factory=dict)
    # (address, denom) -> amount debited so far, fees included
    debits: dict[tuple[str, str], int] = field(default_factory=dict)

    def add(self, address: str, denom: str, amount: int) -> None:
        """Merge a signed amount into the (address, denom) delta."""
        coins = self.deltas.setdefault(address, {})
        coins[denom] = coins.get(denom, 0) + amount

    def debit(self, address: str, denom: str, amount: int) -> int:
        """
        Debit a sender and track its cumulative debit.

        Returns:
            Total debited from (address, denom) in this computation
        """
        self.add(address, denom, -amount)
        key = (address, denom)
        self.debits[key] = self.debits.get(key, 0) + amount
        return self.debits[key]

    def record_fees(self, denom: str, burn: int, commission: int) -> None:
        if burn:
            self.burned[denom] = self.burned.get(denom, 0) + burn
        if commission:
            self.commissions[denom] = self.commissions.get(denom, 0) + commission

    def to_settlement(self, report_zero_deltas: bool = False) -> Settlement:
        """
        Collapse the accumulated deltas into a Settlement.

        Args:
            report_zero_deltas: Keep (address, denom) pairs whose net delta is 0

        Returns:
            Settlement with addresses and denoms in sorted order
        """
        changes: dict[str, dict[str, int]] = {}
        for address in sorted(self.deltas):
            coins = {
                denom: amount
                for denom, amount in sorted(self.deltas[address].items())
                if amount != 0 or report_zero_deltas
            }
            if coins:
                changes[address] = coins

        return Settlement(
            changes=changes,
            burned=dict(sorted(self.burned.items())),
            commissions=dict(sorted(self.commissions.items())),
        )
