# pledger - Personal ledger tracker
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
View utilities for pledger.

This module turns a parsed ``Ledger`` and its ``LedgerSummary`` into the two
output forms offered by the CLI:

- a JSON-ready dictionary (``ledger_to_dict``), where every amount is a
  ``[units, subunits]`` pair,
- a human-readable summary block (``render_summary``) with totals, the net
  amount and the ranked credit/debit tag tables.

Amounts are kept as integers in minor units everywhere else; conversion to
``units.subunits`` only happens here.
"""

from typing import Any

from .engine import Ledger, LedgerSummary
from .parser import Entry


def amount_parts(amount: int) -> tuple[int, int]:
    """Split an amount in minor units into ``(units, subunits)``."""
    return amount // 100, amount % 100


def format_amount(amount: int) -> str:
    """Format an amount in minor units as ``UU.ss``."""
    units, subunits = amount_parts(amount)
    return f"{units:02}.{subunits:02}"


def entry_to_dict(entry: Entry) -> dict[str, Any]:
    return {
        "kind": entry.kind.value,
        "amount": list(amount_parts(entry.amount)),
        "comment": entry.comment,
        "tags": list(entry.tags),
    }


def ledger_to_dict(ledger: Ledger) -> dict[str, Any]:
    """Machine-readable snapshot of a ledger (see the JSON output mode)."""
    return {
        "date": ledger.label,
        "entries": [entry_to_dict(e) for e in ledger.entries],
    }


def _render_tag_table(
    rows: list[tuple[str, int]], tag_width: int, amount_width: int
) -> list[str]:
    return [
        f"{tag:<{tag_width}} {format_amount(amount):>{amount_width}}"
        for tag, amount in rows
    ]


def render_summary(
    ledger: Ledger,
    summary: LedgerSummary,
    tag_width: int = 16,
    amount_width: int = 10,
) -> str:
    """
    Render the human-readable summary of a ledger.

    Layout:

        Ledger for <label>

        Summary:
            <n> entries, totaling <credits> in credits and <debits> in debits
            for a net of <net> in <credit|debit>

        Top credit tags:
        <tag>            <amount>

        Top debit tags:
        <tag>            <amount>
    """
    lines = [
        f"Ledger for {ledger.label}",
        "",
        "Summary:",
        (
            f"\t{summary.entry_count} entries, totaling "
            f"{format_amount(summary.total_credits)} in credits and "
            f"{format_amount(summary.total_debits)} in debits for a net of "
            f"{format_amount(summary.net)} in {summary.net_kind}"
        ),
        "",
        "Top credit tags:",
        *_render_tag_table(summary.credit_tags, tag_width, amount_width),
        "",
        "Top debit tags:",
        *_render_tag_table(summary.debit_tags, tag_width, amount_width),
    ]
    return "\n".join(lines)
