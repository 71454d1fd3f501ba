"""
Core domain models, fee arithmetic, and payload contracts.

Everything here is independent of the ledger that hosts the calculator
(no storage, no network, no signing).
"""
