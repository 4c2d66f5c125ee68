from __future__ import annotations

from typing import Sequence


def compute_balances(matrix: Sequence[Sequence[int]]) -> list[int]:
    """Net balance per participant: owed to them minus owed by them.

    ``matrix[i][j]`` is the amount participant ``i`` owes participant ``j``.
    """
    n = len(matrix)
    balances = [0] * n
    for i in range(n):
        for j in range(n):
            balances[i] += matrix[j][i] - matrix[i][j]
    return balances
