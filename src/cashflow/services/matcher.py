from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from cashflow.models import Participant


@dataclass(frozen=True, slots=True)
class Match:
    creditor: int
    balance: int
    channel: str


def common_channels(a: Participant, b: Participant) -> list[str]:
    return sorted(set(a.channels) & set(b.channels))


def find_settlement(
    debtor: int,
    participants: Sequence[Participant],
    balances: Sequence[int],
) -> Optional[Match]:
    """Largest creditor that shares a channel with ``debtor``.

    Ties keep the first creditor in participant order. ``None`` means no
    creditor with a positive balance shares a channel with the debtor.
    """
    best: Optional[Match] = None
    for idx, participant in enumerate(participants):
        balance = balances[idx]
        if balance <= 0:
            continue
        common = common_channels(participants[debtor], participant)
        if not common:
            continue
        if best is None or balance > best.balance:
            best = Match(creditor=idx, balance=balance, channel=common[0])
    return best
