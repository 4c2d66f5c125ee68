from __future__ import annotations

from typing import List, Sequence

from cashflow.logging import get_logger
from cashflow.models import Settlement
from cashflow.services.ledger import Ledger
from cashflow.services.matcher import find_settlement


def _max_debtor(balances: Sequence[int]) -> int:
    best = 0
    for idx, balance in enumerate(balances):
        if balance < balances[best]:
            best = idx
    return best


def _max_creditor(balances: Sequence[int]) -> int:
    best = 0
    for idx, balance in enumerate(balances):
        if balance > balances[best]:
            best = idx
    return best


class _Run:
    def __init__(self, ledger: Ledger) -> None:
        self.participants = ledger.participants
        self.treasurer = ledger.treasurer
        self.balances = list(ledger.balances)
        self.settlements: list[Settlement] = []

    def pay(self, payer: int, payee: int, amount: int, channel: str) -> None:
        if amount <= 0:
            return
        self.settlements.append(
            Settlement(
                payer=self.participants[payer].name,
                payee=self.participants[payee].name,
                amount=amount,
                channel=channel,
            )
        )
        self.balances[payer] += amount
        self.balances[payee] -= amount

    def unsettled(self) -> bool:
        return any(balance != 0 for balance in self.balances)


def settle(ledger: Ledger) -> List[Settlement]:
    log = get_logger(__name__)
    run = _Run(ledger)
    t = run.treasurer

    while run.unsettled():
        d = _max_debtor(run.balances)
        amount_to_pay = -run.balances[d]

        match = find_settlement(d, run.participants, run.balances)
        if match is not None:
            transfer = min(amount_to_pay, match.balance)
            log.debug(
                "settlement.direct",
                payer=run.participants[d].name,
                payee=run.participants[match.creditor].name,
                amount=transfer,
                channel=match.channel,
            )
            run.pay(d, match.creditor, transfer, match.channel)
            continue

        # d is never the treasurer here: it shares a channel with every creditor
        run.pay(d, t, amount_to_pay, run.participants[d].channels[0])
        fc = _max_creditor(run.balances)
        forward = min(-run.balances[t], run.balances[fc])
        log.debug(
            "settlement.route",
            payer=run.participants[d].name,
            payee=run.participants[fc].name,
            received=amount_to_pay,
            forwarded=forward,
        )
        run.pay(t, fc, forward, run.participants[fc].channels[0])

    log.info(
        "settlement.done",
        transfers=len(run.settlements),
        total=sum(s.amount for s in run.settlements),
    )
    return run.settlements
