"""Farm Ledger package.

Organized by feature modules (workers, groups, attendance, costing, expenses,
payments, balances) with a thin Flask controller layer over pure ledger
services and repository interfaces.
"""
