"""
Settlement — Net balance changes of an accepted multi-send

Immutable Pydantic model produced by the settlement calculator. It is an
aggregation, not a per-leg log: every (address, denom) pair touched by the
instruction collapses into one signed delta.

INVARIANTS:
1. For every denom: sum of deltas over all addresses == -burned[denom]
   (burn leaves the system, commission moves to the issuer)
2. commissions[denom] is already contained in the issuer's delta
3. Addresses and denoms are kept in sorted order
"""

from typing import Any

from pydantic import BaseModel, Field

from .coin import BalanceChange, CoinDelta


class Settlement(BaseModel):
    """
    Net per-address, per-denom balance deltas (negative = debit).

    Besides the deltas, the settlement reports the actual burn and
    commission collected per denom, i.e. the sums of the rounded shares.
    """

    changes: dict[str, dict[str, int]] = Field(
        default_factory=dict, description="address -> denom -> signed delta"
    )
    burned: dict[str, int] = Field(
        default_factory=dict, description="denom -> amount removed from circulation"
    )
    commissions: dict[str, int] = Field(
        default_factory=dict, description="denom -> amount credited to the issuer as commission"
    )

    model_config = {"frozen": True}

    def delta(self, address: str, denom: str) -> int:
        """
        Net change of one (address, denom) pair.

        Returns:
            Signed delta, 0 if the pair is not part of the settlement
        """
        return self.changes.get(address, {}).get(denom, 0)

    def addresses(self) -> list[str]:
        return list(self.changes)

    def net_change(self, denom: str) -> int:
        """Sum of the deltas of a denom over all addresses."""
        return sum(coins.get(denom, 0) for coins in self.changes.values())

    def total_burned(self, denom: str) -> int:
        return self.burned.get(denom, 0)

    def total_commission(self, denom: str) -> int:
        return self.commissions.get(denom, 0)

    def is_empty(self) -> bool:
        return not self.changes

    def to_balance_changes(self) -> list[BalanceChange]:
        """
        List-shaped view of the settlement.

        Returns:
            One BalanceChange per address, coins ordered by denom
        """
        return [
            BalanceChange(
                address=address,
                coins=[CoinDelta(denom=denom, amount=amount) for denom, amount in coins.items()],
            )
            for address, coins in self.changes.items()
        ]

    def to_payload(self) -> dict[str, Any]:
        """JSON-ready dict matching the settlement contract."""
        return {
            "changes": [change.model_dump() for change in self.to_balance_changes()],
            "burned": dict(self.burned),
            "commissions": dict(self.commissions),
        }
