"""Survivor Exchange Application Package - survivor registry, item ledger, barter and infection reports.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
