from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional, Sequence, Union

from cashflow.logging import get_logger
from cashflow.models import Debt, Participant
from cashflow.services.balances import compute_balances


class LedgerError(ValueError):
    pass


class InsufficientParticipants(LedgerError):
    pass


class InvalidChannelCount(LedgerError):
    pass


class InvalidDebtAmount(LedgerError):
    pass


class UnknownParticipant(LedgerError):
    pass


class DuplicateParticipant(LedgerError):
    pass


class MalformedInput(LedgerError):
    pass


@dataclass(slots=True)
class ParticipantSpec:
    name: str
    channels: Sequence[str]


@dataclass(slots=True)
class DebtSpec:
    debtor: str
    creditor: str
    amount: int


ParticipantInput = Union[ParticipantSpec, Mapping[str, Any]]
DebtInput = Union[DebtSpec, Mapping[str, Any]]


@dataclass(frozen=True, slots=True)
class Ledger:
    participants: tuple[Participant, ...]
    matrix: tuple[tuple[int, ...], ...]
    treasurer: int
    balances: tuple[int, ...]

    @property
    def names(self) -> list[str]:
        return [p.name for p in self.participants]

    def index_of(self, name: str) -> int:
        for idx, participant in enumerate(self.participants):
            if participant.name == name:
                return idx
        raise UnknownParticipant(f"Unknown participant: {name!r}")

    def balance_of(self, name: str) -> int:
        return self.balances[self.index_of(name)]


def _participant_spec(raw: ParticipantInput) -> ParticipantSpec:
    if isinstance(raw, ParticipantSpec):
        return raw
    try:
        return ParticipantSpec(name=raw["name"], channels=raw.get("channels", ()))
    except (KeyError, TypeError, AttributeError) as exc:
        raise MalformedInput(f"Invalid participant entry: {raw!r}") from exc


def _debt_spec(raw: DebtInput) -> DebtSpec:
    if isinstance(raw, DebtSpec):
        return raw
    try:
        return DebtSpec(debtor=raw["debtor"], creditor=raw["creditor"], amount=raw["amount"])
    except (KeyError, TypeError) as exc:
        raise MalformedInput(f"Invalid debt entry: {raw!r}") from exc


def _validate_amount(amount: object) -> int:
    # bool is an int subclass and never a valid amount
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise InvalidDebtAmount(f"Debt amount must be an integer, got {amount!r}")
    if amount <= 0:
        raise InvalidDebtAmount(f"Debt amount must be positive, got {amount}")
    return amount


def build_ledger(
    participants: Sequence[ParticipantInput],
    debts: Sequence[DebtInput],
    treasurer: Optional[str] = None,
) -> Ledger:
    log = get_logger(__name__)

    specs = [_participant_spec(raw) for raw in participants]
    if len(specs) < 2:
        raise InsufficientParticipants("At least 2 participants required.")

    index: dict[str, int] = {}
    for position, spec in enumerate(specs):
        if not isinstance(spec.name, str) or not spec.name.strip():
            raise MalformedInput(f"Participant #{position + 1} has no name")
        if spec.name in index:
            raise DuplicateParticipant(f"Duplicate participant: {spec.name!r}")
        index[spec.name] = position

    if treasurer is None:
        t = 0
    elif treasurer in index:
        t = index[treasurer]
    else:
        raise UnknownParticipant(f"Unknown treasurer: {treasurer!r}")

    channel_sets: list[set[str]] = []
    for position, spec in enumerate(specs):
        if isinstance(spec.channels, (str, bytes)) or not isinstance(spec.channels, Iterable):
            raise MalformedInput(f"Channels of {spec.name!r} must be a list of identifiers")
        channels = {str(channel) for channel in spec.channels}
        if not channels and position != t:
            raise InvalidChannelCount(f"Participant {spec.name!r} has no payment channels")
        channel_sets.append(channels)

    n = len(specs)
    matrix = [[0] * n for _ in range(n)]
    for raw in debts:
        debt = _debt_spec(raw)
        amount = _validate_amount(debt.amount)
        for name in (debt.debtor, debt.creditor):
            if name not in index:
                raise UnknownParticipant(f"Unknown participant in debt: {name!r}")
        matrix[index[debt.debtor]][index[debt.creditor]] += amount

    # Treasurer must be able to receive from and pay to anyone
    for position, channels in enumerate(channel_sets):
        if position != t:
            channel_sets[t].update(channels)
    if not channel_sets[t]:
        raise InvalidChannelCount("No payment channels declared")

    frozen_matrix = tuple(tuple(row) for row in matrix)
    ledger = Ledger(
        participants=tuple(
            Participant(name=spec.name, channels=tuple(sorted(channels)), is_treasurer=position == t)
            for position, (spec, channels) in enumerate(zip(specs, channel_sets))
        ),
        matrix=frozen_matrix,
        treasurer=t,
        balances=tuple(compute_balances(frozen_matrix)),
    )
    log.info("ledger.built", participants=n, treasurer=specs[t].name)
    return ledger


def aggregate_debts(ledger: Ledger) -> list[Debt]:
    """Non-zero cells of the debt matrix, in participant order."""
    debts: list[Debt] = []
    for i, row in enumerate(ledger.matrix):
        for j, amount in enumerate(row):
            if amount:
                debts.append(
                    Debt(
                        debtor=ledger.participants[i].name,
                        creditor=ledger.participants[j].name,
                        amount=amount,
                    )
                )
    return debts
