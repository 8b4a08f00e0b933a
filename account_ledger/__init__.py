"""
Account Ledger

Multi-account personal banking core: per-account balances with an
append-only transaction history, a registry of accounts with an active
selection, and exact Decimal arithmetic throughout.
"""

__version__ = "1.0.0"
