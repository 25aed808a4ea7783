"""
Account Ledger Service

Customer registration, stateless token authentication and a balance ledger
(deposit, withdraw, transfer by phone) with an append-only transaction log.
All monetary values use Decimal precision.
"""

__version__ = "1.0.0"
