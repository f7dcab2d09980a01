"""Loan and utility-cost parameters and financial calculation helpers."""

import math
from dataclasses import dataclass

MAN_YEN = 10000  # 1万円

# Loan assumptions
LOAN_INTEREST_RATE = 0.01     # 年利1.0%（固定）
LOAN_TERM_YEARS = 35
LOAN_TO_VALUE_PERCENT = 90    # 予算の90%を借入

# Utility cost assumptions (円/月)
STANDARD_UTILITY_COST = 25000          # 大手HMの平均光熱費
BASE_UTILITY_COST = 15000              # 1人目の光熱費
FLAT_ADDITIONAL_PERSON_COST = 8000     # 簡易版: 2人目以降の一律加算


@dataclass(frozen=True)
class LoanParams:

    annual_rate: float = LOAN_INTEREST_RATE
    term_years: int = LOAN_TERM_YEARS
    loan_to_value_percent: int = LOAN_TO_VALUE_PERCENT

    @property
    def monthly_rate(self) -> float:
        return self.annual_rate / 12

    @property
    def num_payments(self) -> int:
        return self.term_years * 12

    def loan_amount(self, budget: int) -> int:
        """Budget (万円) → loan principal (円)"""
        return budget * MAN_YEN * self.loan_to_value_percent // 100


def _calc_equal_payment(principal: float, monthly_rate: float, months: int) -> float:
    """Calculate monthly loan payment (元利均等返済)"""
    if monthly_rate == 0:
        return principal / months
    r = monthly_rate
    n = months
    return principal * r * (1 + r) ** n / ((1 + r) ** n - 1)


def round_half_up(value: float) -> int:
    """Round to nearest integer, .5 away from zero for positives (Math.round compatible)."""
    return math.floor(value + 0.5)
