# pledger - Personal ledger tracker
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
pledger
-------

A small personal ledger tracker. Financial entries are kept in plain-text
ledger files, one per calendar month (``YYYY-MM.ledger``), and pledger
turns them into a human-readable summary or a JSON snapshot.

Main capabilities:
- a strict, line-oriented entry language (``C 12.50 lunch #food``),
- month resolution from names, numbers or canonical labels,
- single-month, previous-month, per-year and all-ledgers selections,
- tag filtering and per-tag credit/debit rankings,
- JSON export of the parsed entries.

Version: 0.2.0

Usage:
    python -m pledger.cli --help
"""

__all__ = [
    "cli",
    "config",
    "engine",
    "errors",
    "io",
    "logging_config",
    "parser",
    "periods",
    "views",
]

__version__ = "0.2.0"
