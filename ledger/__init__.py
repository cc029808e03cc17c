"""Ledger API: users, products and the transactions between them."""
