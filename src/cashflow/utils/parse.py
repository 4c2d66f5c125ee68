from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator

from cashflow.services.ledger import (
    DebtSpec,
    InsufficientParticipants,
    InvalidChannelCount,
    InvalidDebtAmount,
    MalformedInput,
    ParticipantSpec,
)


@dataclass(slots=True)
class Session:
    participants: list[ParticipantSpec] = field(default_factory=list)
    debts: list[DebtSpec] = field(default_factory=list)


class _Tokens:
    def __init__(self, text: str) -> None:
        self._iter: Iterator[str] = iter(text.split())

    def next(self, what: str) -> str:
        try:
            return next(self._iter)
        except StopIteration:
            raise MalformedInput(f"Unexpected end of input, expected {what}") from None

    def count(self, what: str, error: type[Exception] = MalformedInput) -> int:
        token = self.next(what)
        try:
            value = int(token)
        except ValueError:
            raise error(f"Invalid {what}: {token!r}") from None
        if value < 0:
            raise error(f"Invalid {what}: {value}")
        return value

    def rest(self) -> list[str]:
        return list(self._iter)


def parse_session(text: str) -> Session:
    """
    Parse the console input format.

    Layout (whitespace separated, line breaks are not significant):
    - number of participants, the first one is the Treasurer
    - per participant: name, channel count, then that many channels
    - number of debts
    - per debt: debtor, creditor, amount
    """
    tokens = _Tokens(text)
    session = Session()

    token = tokens.next("participant count")
    try:
        n = int(token)
    except ValueError:
        raise MalformedInput(f"Invalid participant count: {token!r}") from None
    if n < 2:
        raise InsufficientParticipants("At least 2 participants required.")
    for _ in range(n):
        name = tokens.next("participant name")
        k = tokens.count(f"channel count for {name}", InvalidChannelCount)
        channels = [tokens.next(f"channel for {name}") for _ in range(k)]
        session.participants.append(ParticipantSpec(name=name, channels=channels))

    m = tokens.count("debt count")
    for _ in range(m):
        debtor = tokens.next("debtor")
        creditor = tokens.next("creditor")
        amount = tokens.next("amount")
        try:
            value = int(amount)
        except ValueError:
            raise InvalidDebtAmount(f"Invalid amount: {amount!r}") from None
        session.debts.append(DebtSpec(debtor=debtor, creditor=creditor, amount=value))

    leftover = tokens.rest()
    if leftover:
        raise MalformedInput(f"Unexpected trailing input: {' '.join(leftover[:3])}")
    return session
