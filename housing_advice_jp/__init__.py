"""Housing Purchase Advice Simulation Package."""

from housing_advice_jp.params import (
    LoanParams,
    LOAN_INTEREST_RATE,
    LOAN_TERM_YEARS,
    LOAN_TO_VALUE_PERCENT,
    STANDARD_UTILITY_COST,
)
from housing_advice_jp.family import (
    Household,
    FAMILY_CHOICES,
    OTHER_LABEL,
    estimate_family_size,
)
from housing_advice_jp.calculation import (
    calc_monthly_payment,
    calc_rent_difference,
    calc_utility_cost_difference,
    estimate_utility_cost,
    estimate_utility_cost_flat,
)
from housing_advice_jp.advice import (
    AdviceOutcome,
    Generated,
    GenerationFailed,
    GenerationResult,
    TextGenerator,
    build_fallback_advice,
    build_prompt,
    calc_payment_ratio,
    generate_advice,
)
from housing_advice_jp.simulation import (
    SimulationInput,
    SimulationResult,
    SimulationFailure,
    run_simulation,
    validate_input,
)

__all__ = [
    "LoanParams",
    "LOAN_INTEREST_RATE",
    "LOAN_TERM_YEARS",
    "LOAN_TO_VALUE_PERCENT",
    "STANDARD_UTILITY_COST",
    "Household",
    "FAMILY_CHOICES",
    "OTHER_LABEL",
    "estimate_family_size",
    "calc_monthly_payment",
    "calc_rent_difference",
    "calc_utility_cost_difference",
    "estimate_utility_cost",
    "estimate_utility_cost_flat",
    "AdviceOutcome",
    "Generated",
    "GenerationFailed",
    "GenerationResult",
    "TextGenerator",
    "build_fallback_advice",
    "build_prompt",
    "calc_payment_ratio",
    "generate_advice",
    "SimulationInput",
    "SimulationResult",
    "SimulationFailure",
    "run_simulation",
    "validate_input",
]
