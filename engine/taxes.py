import math
from dataclasses import dataclass
from typing import Sequence, Tuple


@dataclass(frozen=True)
class StandardBracket:
    limit: float      # inclusive upper bound, math.inf for the last bracket
    rate: float
    deduction: float  # subtracted after applying the rate


# Monthly IRRF progressive table, effective from Feb/2024
STANDARD_BRACKETS: Tuple[StandardBracket, ...] = (
    StandardBracket(limit=2259.20, rate=0.0, deduction=0.0),
    StandardBracket(limit=2826.65, rate=0.075, deduction=169.44),
    StandardBracket(limit=3751.05, rate=0.15, deduction=381.44),
    StandardBracket(limit=4664.68, rate=0.225, deduction=662.77),
    StandardBracket(limit=math.inf, rate=0.275, deduction=896.00),
)


def find_bracket(monthly_salary: float, brackets: Sequence[StandardBracket] = STANDARD_BRACKETS) -> StandardBracket:
    """First bracket whose limit covers the salary, else the last one."""
    for bracket in brackets:
        if monthly_salary <= bracket.limit:
            return bracket
    return brackets[-1]


def calculate_standard_ir(monthly_salary: float, brackets: Sequence[StandardBracket] = STANDARD_BRACKETS):
    """
    Calculate the monthly income tax under the current progressive table.

    Returns a (tax, bracket) tuple. Tax is never negative. Non-positive
    salaries are taxed 0 against the first bracket.
    """
    if monthly_salary <= 0:
        return 0.0, brackets[0]

    bracket = find_bracket(monthly_salary, brackets)
    tax = monthly_salary * bracket.rate - bracket.deduction
    return max(0.0, tax), bracket
