"""Channel-aware settlement of group debts."""

from cashflow.models import Debt, Participant, Settlement
from cashflow.services.ledger import Ledger, LedgerError, build_ledger
from cashflow.services.settlement import settle

__all__ = [
    "Debt",
    "Ledger",
    "LedgerError",
    "Participant",
    "Settlement",
    "build_ledger",
    "settle",
]
