"""Loan payment and utility cost calculations."""

from housing_advice_jp.family import Household, resolve_family_size
from housing_advice_jp.params import (
    BASE_UTILITY_COST,
    FLAT_ADDITIONAL_PERSON_COST,
    STANDARD_UTILITY_COST,
    LoanParams,
    _calc_equal_payment,
    round_half_up,
)

DEFAULT_LOAN = LoanParams()


def calc_monthly_payment(budget: int, loan: LoanParams = DEFAULT_LOAN) -> int:
    """Monthly payment (円) for a budget in 万円.

    Zero rate divides the principal exactly (integer division); otherwise the
    equal-payment amount is rounded half-up to whole yen.
    """
    principal = loan.loan_amount(budget)
    months = loan.num_payments
    if loan.monthly_rate == 0:
        return principal // months
    return round_half_up(_calc_equal_payment(principal, loan.monthly_rate, months))


def estimate_utility_cost(family: Household | str | None) -> float:
    """Estimated utility cost (円/月): 2人目以降は1人目の半額を加算"""
    size = resolve_family_size(family)
    base_cost = float(BASE_UTILITY_COST)
    return base_cost + (size - 1) * (base_cost / 2)


def estimate_utility_cost_flat(family: Household | str | None) -> int:
    """Estimated utility cost (円/月): 2人目以降は一律8,000円を加算"""
    size = resolve_family_size(family)
    return BASE_UTILITY_COST + (size - 1) * FLAT_ADDITIONAL_PERSON_COST


def calc_utility_cost_difference(family: Household | str | None) -> float:
    """Baseline minus estimate (円/月). Positive = cheaper than 大手HM."""
    return STANDARD_UTILITY_COST - estimate_utility_cost(family)


def calc_rent_difference(monthly_payment: int, current_rent: int) -> int:
    return monthly_payment - current_rent
