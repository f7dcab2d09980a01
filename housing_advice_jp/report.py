"""Template-based Markdown rendering of the input form and simulation result.

Uses Python f-strings (no template engine dependency).
"""

from __future__ import annotations

from pathlib import Path

from housing_advice_jp.advice import SOURCE_AI, calc_payment_ratio
from housing_advice_jp.calculation import estimate_utility_cost, estimate_utility_cost_flat
from housing_advice_jp.family import FAMILY_CHOICES, OTHER_LABEL
from housing_advice_jp.params import (
    LOAN_INTEREST_RATE,
    LOAN_TERM_YEARS,
    LOAN_TO_VALUE_PERCENT,
    STANDARD_UTILITY_COST,
)
from housing_advice_jp.simulation import SimulationInput, SimulationResult

# ---------------------------------------------------------------------------
# Format helpers
# ---------------------------------------------------------------------------

def fmt_yen(v: float) -> str:
    """円 → "X,XXX円" """
    return f"{v:,.0f}円"


def fmt_signed_yen(v: float) -> str:
    """円 → "+X,XXX円" / "▲X,XXX円" """
    if v < 0:
        return f"▲{abs(v):,.0f}円"
    return f"+{v:,.0f}円"


def fmt_man(v: float) -> str:
    """万円 → "X,XXX万円" """
    return f"{v:,.0f}万円"


def _field(value: object | None, suffix: str = "") -> str:
    if value is None or value == "":
        return "（未入力）"
    if isinstance(value, int):
        return f"{value:,}{suffix}"
    return f"{value}{suffix}"


# ---------------------------------------------------------------------------
# Input form
# ---------------------------------------------------------------------------

def render_input_form(sim_input: SimulationInput | None = None, error: str | None = None) -> str:
    """Render the input form, echoing any values already entered."""
    if sim_input is None:
        sim_input = SimulationInput()
    lines = ["# 住宅購入シミュレーション 入力", ""]
    if error:
        lines += [f"> ⚠ {error}", ""]
    lines += [
        "| 項目 | オプション | 入力値 |",
        "|---|---|---|",
        f"| 年収（万円） | `--annual-income` | {_field(sim_input.annual_income, '万円')} |",
        f"| 予算（万円） | `--budget` | {_field(sim_input.budget, '万円')} |",
        f"| 現在の家賃（円/月） | `--current-rent` | {_field(sim_input.current_rent, '円')} |",
        f"| 家族構成 | `--family` | {_field(sim_input.family_composition)} |",
        f"| 家族の人数（{OTHER_LABEL}の場合） | `--family-size` | {_field(sim_input.custom_family_size, '人')} |",
        "",
        f"家族構成の選択肢: {' / '.join(FAMILY_CHOICES)}",
        "",
    ]
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Result
# ---------------------------------------------------------------------------

def _render_summary(result: SimulationResult) -> str:
    inp = result.input
    household = result.household
    ratio = calc_payment_ratio(inp.annual_income, result.monthly_payment)
    lines = [
        "## 試算結果",
        "",
        "| 項目 | 値 |",
        "|---|---|",
        f"| 年収 | {fmt_man(inp.annual_income)} |",
        f"| 予算 | {fmt_man(inp.budget)} |",
        f"| 家族構成 | {household.display_label()} |",
        f"| 毎月の返済額 | {fmt_yen(result.monthly_payment)} |",
        f"| 返済比率 | {ratio:.1f}% |",
        f"| 現在の家賃 | {fmt_yen(inp.current_rent)} |",
        f"| 家賃との差額 | {fmt_signed_yen(result.rent_difference)} |",
        f"| 大手HMとの光熱費差額 | {fmt_signed_yen(result.utility_cost_difference)}/月 |",
        "",
        f"※ 借入額は予算の{LOAN_TO_VALUE_PERCENT}%、金利{LOAN_INTEREST_RATE * 100:.1f}%・"
        f"{LOAN_TERM_YEARS}年の元利均等返済で試算。",
        "",
    ]
    return "\n".join(lines)


def _render_utility(result: SimulationResult) -> str:
    household = result.household
    lines = [
        "## 光熱費の目安",
        "",
        f"- 大手HM平均: {fmt_yen(STANDARD_UTILITY_COST)}/月",
        f"- 当社想定（{household.size}人世帯）: {fmt_yen(estimate_utility_cost(household))}/月",
        f"- 簡易目安（2人目以降 一律加算）: {fmt_yen(estimate_utility_cost_flat(household))}/月",
        "",
    ]
    return "\n".join(lines)


def _render_advice(result: SimulationResult) -> str:
    title = "AIアドバイス" if result.advice_source == SOURCE_AI else "アドバイス（自動生成）"
    return f"## {title}\n\n{result.advice.rstrip()}\n"


def _render_charts(chart_paths: list[Path]) -> str:
    if not chart_paths:
        return ""
    lines = ["## チャート", ""]
    for p in chart_paths:
        lines.append(f"![{p.stem}]({p.as_posix()})")
    lines.append("")
    return "\n".join(lines)


def render_result(result: SimulationResult, chart_paths: list[Path] | None = None) -> str:
    """Render a complete Markdown report from a SimulationResult."""
    sections = [
        "# 住宅購入シミュレーション 結果\n",
        _render_summary(result),
        _render_utility(result),
        _render_advice(result),
        _render_charts(chart_paths or []),
    ]
    return "\n".join(s for s in sections if s)
