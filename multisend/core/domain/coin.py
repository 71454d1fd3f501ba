"""
Coin & Balance — Token amounts held by or moved between accounts

Immutable Pydantic models for the coin legs of a multi-send:
- Coin: non-negative amount of one denom (balances, inputs, outputs)
- CoinDelta: signed change of one denom (settlement output)
- Balance: address + coins, with unique denoms
- BalanceChange: address + coin deltas (list-shaped settlement output)

Amounts are Python ints (arbitrary precision), so sums over many large
legs never overflow.
"""

from pydantic import BaseModel, Field, field_validator


# =============================================================================
# COIN MODELS
# =============================================================================


class Coin(BaseModel):
    """Amount of a single denom."""

    denom: str = Field(..., min_length=1, description="Denom identifier (e.g. 'ucore', 'usdt')")
    amount: int = Field(..., ge=0, description="Amount in the smallest unit of the denom")

    model_config = {"frozen": True}


class CoinDelta(BaseModel):
    """Signed balance change of a single denom (negative = debit)."""

    denom: str = Field(..., min_length=1, description="Denom identifier")
    amount: int = Field(..., description="Signed change in the smallest unit of the denom")

    model_config = {"frozen": True}


# =============================================================================
# BALANCE MODELS
# =============================================================================


class Balance(BaseModel):
    """
    Coins attached to one address.

    Used for the starting balance snapshot and for every input/output leg
    of a multi-send. A denom may appear at most once per Balance.
    """

    address: str = Field(..., min_length=1, description="Account address")
    coins: list[Coin] = Field(default_factory=list, description="Coins, one entry per denom")

    model_config = {"frozen": True}

    @field_validator("coins")
    @classmethod
    def validate_unique_denoms(cls, v: list[Coin]) -> list[Coin]:
        """Two coins of the same Balance must not share a denom."""
        seen: set[str] = set()
        for coin in v:
            if coin.denom in seen:
                raise ValueError(f"duplicate denom '{coin.denom}' in balance")
            seen.add(coin.denom)
        return v

    def amount_of(self, denom: str) -> int:
        """
        Amount held for a denom.

        Args:
            denom: Denom identifier

        Returns:
            Coin amount, or 0 when the balance has no coin of that denom
        """
        for coin in self.coins:
            if coin.denom == denom:
                return coin.amount
        return 0

    def denoms(self) -> list[str]:
        """Denoms in coin order."""
        return [coin.denom for coin in self.coins]

    def total_by_denom(self) -> dict[str, int]:
        return {coin.denom: coin.amount for coin in self.coins}


class BalanceChange(BaseModel):
    """Net signed changes for one address, one entry per denom."""

    address: str = Field(..., min_length=1, description="Account address")
    coins: list[CoinDelta] = Field(default_factory=list, description="Per-denom deltas")

    model_config = {"frozen": True}

    def amount_of(self, denom: str) -> int:
        for coin in self.coins:
            if coin.denom == denom:
                return coin.amount
        return 0
