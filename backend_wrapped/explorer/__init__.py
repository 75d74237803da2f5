"""
Explorer layer: Etherscan txlist client and the Transaction ingestion schema.
"""

from backend_wrapped.explorer.client import EtherscanClient
from backend_wrapped.explorer.models import Transaction, parse_transactions

__all__ = ["EtherscanClient", "Transaction", "parse_transactions"]
