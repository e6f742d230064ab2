"""
Recurring ledger backend.
"""
