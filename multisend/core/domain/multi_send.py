"""
MultiSendInstruction — Proposed multi-input, multi-output transfer

Inputs are the debit legs (who sends how much), outputs are the credit
legs (who receives how much). Several denoms may move in one instruction;
the instruction must balance per denom, which the calculator checks.
"""

from pydantic import BaseModel, Field

from .coin import Balance


class MultiSendInstruction(BaseModel):
    """
    Multi-send transaction.

    Immutable (frozen=True). Legs keep their submission order; the same
    address may appear in several legs.
    """

    inputs: list[Balance] = Field(default_factory=list, description="Debit legs")
    outputs: list[Balance] = Field(default_factory=list, description="Credit legs")

    model_config = {"frozen": True}

    def denoms(self) -> list[str]:
        """
        Every denom the instruction touches.

        Returns:
            Denoms in first-seen order, inputs before outputs
        """
        seen: dict[str, None] = {}
        for leg in [*self.inputs, *self.outputs]:
            for coin in leg.coins:
                seen.setdefault(coin.denom, None)
        return list(seen)

    def input_totals(self) -> dict[str, int]:
        """Sum of input amounts per denom."""
        return _sum_by_denom(self.inputs)

    def output_totals(self) -> dict[str, int]:
        """Sum of output amounts per denom."""
        return _sum_by_denom(self.outputs)


def _sum_by_denom(legs: list[Balance]) -> dict[str, int]:
    totals: dict[str, int] = {}
    for leg in legs:
        for coin in leg.coins:
            totals[coin.denom] = totals.get(coin.denom, 0) + coin.amount
    return totals
