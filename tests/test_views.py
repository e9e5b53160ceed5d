import json

import pytest

from pledger.engine import Ledger, summarize
from pledger.parser import Entry, EntryKind
from pledger.views import amount_parts, format_amount, ledger_to_dict, render_summary


@pytest.mark.parametrize(
    "amount,parts,text",
    [
        (0, (0, 0), "00.00"),
        (5, (0, 5), "00.05"),
        (100, (1, 0), "01.00"),
        (1234, (12, 34), "12.34"),
        (100050, (1000, 50), "1000.50"),
    ],
)
def test_amount_formatting(amount, parts, text) -> None:
    """Amounts print as whole and minor units."""
    assert amount_parts(amount) == parts
    assert format_amount(amount) == text


def test_ledger_to_dict_shape() -> None:
    """JSON export lists every entry with split amounts and tags."""
    ledger = Ledger(
        "2025-05",
        [
            Entry(EntryKind.DEBIT, 1250, "lunch #food #friends", ("#food", "#friends")),
            Entry(EntryKind.CREDIT, 100, "refund", ()),
        ],
    )

    data = ledger_to_dict(ledger)

    assert data == {
        "date": "2025-05",
        "entries": [
            {
                "kind": "Debit",
                "amount": [12, 50],
                "comment": "lunch #food #friends",
                "tags": ["#food", "#friends"],
            },
            {"kind": "Credit", "amount": [1, 0], "comment": "refund", "tags": []},
        ],
    }
    # The snapshot must be JSON-serializable as-is.
    assert json.loads(json.dumps(data)) == data


def test_render_summary_layout() -> None:
    """The text summary has a header, totals and tag tables."""
    ledger = Ledger(
        "2025-05",
        [
            Entry(EntryKind.CREDIT, 100, "#x", ("#x",)),
            Entry(EntryKind.DEBIT, 50, "#x", ("#x",)),
            Entry(EntryKind.CREDIT, 20, "#y", ("#y",)),
        ],
    )

    text = render_summary(ledger, summarize(ledger))

    assert text.splitlines() == [
        "Ledger for 2025-05",
        "",
        "Summary:",
        "\t3 entries, totaling 01.20 in credits and 00.50 in debits "
        "for a net of 00.70 in credit",
        "",
        "Top credit tags:",
        "#x                    01.00",
        "#y                    00.20",
        "",
        "Top debit tags:",
        "#x                    00.50",
    ]


def test_render_summary_custom_widths_and_empty_tables() -> None:
    """Widths are configurable; empty tables still print headers."""
    ledger = Ledger("*", [Entry(EntryKind.DEBIT, 999, "untagged", ())])

    text = render_summary(ledger, summarize(ledger), tag_width=4, amount_width=6)

    assert "Ledger for *" in text
    assert "for a net of 09.99 in debit" in text
    assert text.endswith("Top credit tags:\n\nTop debit tags:")

    tagged = Ledger("*", [Entry(EntryKind.DEBIT, 999, "#a", ("#a",))])
    text = render_summary(tagged, summarize(tagged), tag_width=4, amount_width=6)
    assert text.splitlines()[-1] == "#a    09.99"
