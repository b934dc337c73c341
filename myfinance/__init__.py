"""Personal finance REST API: users, transactions, balances and contact e-mail."""

__version__ = "0.3.3"