"""
DenomDefinition — Fee attributes of a denom

A denom is defined by its issuer and two fee rates that apply to transfers
made by any address other than the issuer:
- burn_rate: share of the transfer destroyed on top of the transferred value
- commission_rate: share of the transfer sent to the issuer on top of it

Rates are stored as Decimal so that they convert exactly into fractions
in the fee arithmetic. Floats are parsed through their shortest string
form: 0.08 means 8/100, not the nearest binary double.
"""

from decimal import Decimal

from pydantic import BaseModel, Field, field_validator


# =============================================================================
# DENOM DEFINITION MODEL
# =============================================================================


class DenomDefinition(BaseModel):
    """
    Definition of a denom.

    Immutable (frozen=True). One definition per denom is expected; the
    calculator rejects duplicates.
    """

    denom: str = Field(..., min_length=1, description="Unique denom identifier (e.g. 'core', 'usdt')")
    issuer: str = Field(..., min_length=1, description="Address that created the denom")
    burn_rate: Decimal = Field(
        default=Decimal("0"), ge=0, le=1, description="Fraction of the transfer burnt (0-1)"
    )
    commission_rate: Decimal = Field(
        default=Decimal("0"), ge=0, le=1, description="Fraction of the transfer paid to the issuer (0-1)"
    )

    model_config = {"frozen": True}

    @field_validator("burn_rate", "commission_rate", mode="before")
    @classmethod
    def parse_float_rate(cls, v: object) -> object:
        """Floats go through str() so 0.12 stays 0.12."""
        if isinstance(v, float):
            return Decimal(str(v))
        return v

    def is_issuer(self, address: str) -> bool:
        return address == self.issuer

    def has_fees(self) -> bool:
        """True if any transfer of this denom can be charged."""
        return self.burn_rate > 0 or self.commission_rate > 0
