import pytest

from cashflow.services.ledger import (
    DebtSpec,
    InsufficientParticipants,
    InvalidChannelCount,
    InvalidDebtAmount,
    MalformedInput,
    ParticipantSpec,
)
from cashflow.utils.parse import parse_session


SAMPLE = """
3
Ravi 1 gpay
Asha 2 gpay phonepe
Kiran 1 paytm
2
Asha Kiran 300
Kiran Ravi 100
"""


def test_parse_session():
    session = parse_session(SAMPLE)

    assert session.participants == [
        ParticipantSpec(name="Ravi", channels=["gpay"]),
        ParticipantSpec(name="Asha", channels=["gpay", "phonepe"]),
        ParticipantSpec(name="Kiran", channels=["paytm"]),
    ]
    assert session.debts == [
        DebtSpec(debtor="Asha", creditor="Kiran", amount=300),
        DebtSpec(debtor="Kiran", creditor="Ravi", amount=100),
    ]


def test_parse_session_ignores_line_layout():
    session = parse_session("2 T 1 x A 1 x 1 A T 5")

    assert [p.name for p in session.participants] == ["T", "A"]
    assert session.debts == [DebtSpec(debtor="A", creditor="T", amount=5)]


def test_parse_session_zero_debts():
    assert parse_session("2 T 1 x A 1 x 0").debts == []


@pytest.mark.parametrize("count", ["-1", "two"])
def test_parse_session_invalid_channel_count(count):
    with pytest.raises(InvalidChannelCount):
        parse_session(f"2 T {count} x A 1 x 0")


def test_parse_session_invalid_amount():
    with pytest.raises(InvalidDebtAmount):
        parse_session("2 T 1 x A 1 x 1 A T ten")


@pytest.mark.parametrize(
    "text",
    [
        "",
        "two",
        "2 T 1 x A 1 x",
        "2 T 1 x A 1 x 1 A T",
        "2 T 1 x A 1 x 0 extra",
    ],
)
def test_parse_session_malformed(text):
    with pytest.raises(MalformedInput):
        parse_session(text)


@pytest.mark.parametrize("text", ["0", "1", "-2", "1 T 1 x"])
def test_parse_session_too_few_participants(text):
    with pytest.raises(InsufficientParticipants, match="At least 2 participants required."):
        parse_session(text)
