from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Participant:
    name: str
    channels: tuple[str, ...]
    is_treasurer: bool = False


@dataclass(frozen=True, slots=True)
class Debt:
    debtor: str
    creditor: str
    amount: int


@dataclass(frozen=True, slots=True)
class Settlement:
    payer: str
    payee: str
    amount: int
    channel: str
