"""
Contract Validation Module

Validation of JSON payloads exchanged with the host ledger.
"""

from .validators import (
    ContractValidator,
    SchemaLoader,
    SettlementRequestValidator,
    SettlementValidator,
    validate_settlement,
    validate_settlement_request,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "SettlementRequestValidator",
    "SettlementValidator",
    # Functions
    "validate_settlement_request",
    "validate_settlement",
]
