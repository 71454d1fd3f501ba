"""
Core math modules for multisend

Exact rational primitives for fee computation.
"""

from multisend.core.math.fee_arithmetic import (
    RATE_MAX,
    RATE_MIN,
    FeeRounding,
    proportional_share,
    round_fee,
    to_fraction,
    validate_non_negative_amount,
    validate_rate,
)

__all__ = [
    # Constants
    "RATE_MIN",
    "RATE_MAX",
    # Types
    "FeeRounding",
    # Functions
    "to_fraction",
    "round_fee",
    "proportional_share",
    # Validation
    "validate_rate",
    "validate_non_negative_amount",
]
