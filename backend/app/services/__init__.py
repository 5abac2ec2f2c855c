"""Services Layer - catalogue, ledger store, trade settlement, infection tally, registry.

Invariants:
    - Services own the transaction boundary (infrastructure.database.atomic)
    - Business rules are delegated to pure functions in core/
"""
