"""Request orchestration: validate input, calculate, compose advice."""

import logging
from dataclasses import dataclass

from housing_advice_jp.advice import TextGenerator, generate_advice
from housing_advice_jp.calculation import (
    calc_monthly_payment,
    calc_rent_difference,
    calc_utility_cost_difference,
)
from housing_advice_jp.family import OTHER_LABEL, Household

logger = logging.getLogger(__name__)

MISSING_FIELDS_MESSAGE = "すべての項目を入力してください。"
RANGE_MESSAGE = "年収と予算は1以上、現在の家賃は0以上の整数で入力してください。"
CUSTOM_SIZE_MESSAGE = "その他を選択した場合は、家族の人数（1人以上）を入力してください。"
UNEXPECTED_ERROR_PREFIX = "エラーが発生しました: "


@dataclass(frozen=True)
class SimulationInput:

    annual_income: int | None = None       # 年収（万円）
    budget: int | None = None              # 予算（万円）
    current_rent: int | None = None        # 現在の家賃（円/月）
    family_composition: str | None = None  # 家族構成ラベル
    custom_family_size: int | None = None  # その他を選択した場合の人数

    @property
    def household(self) -> Household:
        """Tagged family composition; その他 carries its explicit size."""
        if self.family_composition == OTHER_LABEL:
            return Household.other(self.custom_family_size)
        return Household.from_label(self.family_composition)


@dataclass(frozen=True)
class SimulationResult:

    input: SimulationInput
    monthly_payment: int               # 円/月
    rent_difference: int               # 返済額 - 現在の家賃（円/月）
    utility_cost_difference: float     # 大手HMとの差額（円/月、正=当社が安い）
    advice: str
    advice_source: str = "fallback"

    @property
    def household(self) -> Household:
        return self.input.household


@dataclass(frozen=True)
class SimulationFailure:

    input: SimulationInput
    message: str


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_input(sim_input: SimulationInput) -> str | None:
    """Return a user-facing error message, or None when the input is complete."""
    amounts = (sim_input.annual_income, sim_input.budget, sim_input.current_rent)
    if any(v is None for v in amounts) or not sim_input.family_composition:
        return MISSING_FIELDS_MESSAGE
    if not all(_is_int(v) for v in amounts):
        return RANGE_MESSAGE
    if sim_input.annual_income < 1 or sim_input.budget < 1 or sim_input.current_rent < 0:
        return RANGE_MESSAGE
    if sim_input.family_composition == OTHER_LABEL and (
        not _is_int(sim_input.custom_family_size) or sim_input.custom_family_size < 1
    ):
        return CUSTOM_SIZE_MESSAGE
    return None


def run_simulation(
    sim_input: SimulationInput, generator: TextGenerator,
) -> SimulationResult | SimulationFailure:
    """Validate → calculate → advise. Never raises; failures echo the input."""
    error = validate_input(sim_input)
    if error is not None:
        return SimulationFailure(sim_input, error)

    try:
        household = sim_input.household
        monthly_payment = calc_monthly_payment(sim_input.budget)
        utility_cost_difference = calc_utility_cost_difference(household)
        rent_difference = calc_rent_difference(monthly_payment, sim_input.current_rent)
        outcome = generate_advice(generator, sim_input, monthly_payment, utility_cost_difference)
    except Exception as e:
        logger.exception("シミュレーション中に予期しないエラーが発生しました")
        return SimulationFailure(sim_input, f"{UNEXPECTED_ERROR_PREFIX}{e}")

    return SimulationResult(
        input=sim_input,
        monthly_payment=monthly_payment,
        rent_difference=rent_difference,
        utility_cost_difference=utility_cost_difference,
        advice=outcome.text,
        advice_source=outcome.source,
    )
