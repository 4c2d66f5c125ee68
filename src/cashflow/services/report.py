from __future__ import annotations

from typing import Iterable

from cashflow.models import Settlement

TITLE = "=== Settlement Summary ==="
EMPTY_NOTE = "All balances are already settled."


def format_settlement_row(settlement: Settlement) -> str:
    return f"{settlement.payer:<15}{settlement.payee:<15}{settlement.amount:<8}{settlement.channel}"


def format_settlement_table(settlements: Iterable[Settlement]) -> str:
    lines = [TITLE, f"{'Payer':<15}{'Payee':<15}{'Amount':<8}UPI", "-" * 50]
    rows = [format_settlement_row(s) for s in settlements]
    lines.extend(rows if rows else [EMPTY_NOTE])
    return "\n".join(lines)
