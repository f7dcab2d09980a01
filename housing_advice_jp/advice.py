"""Advice narrative generation.

Builds the prompt sent to the text generator and a deterministic fallback
narrative from the same calculated values. ``generate_advice`` makes one
generation attempt and substitutes the fallback on failure or empty output.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from housing_advice_jp.params import MAN_YEN

if TYPE_CHECKING:
    from housing_advice_jp.simulation import SimulationInput

logger = logging.getLogger(__name__)

# Payment ratio thresholds (返済比率, %)
RATIO_APPROPRIATE = 25.0
RATIO_STANDARD = 30.0

QUOTA_MARKER = "insufficient_quota"
RATE_LIMIT_MARKER = "429"

QUOTA_NOTICE = (
    "\n\n※注: OpenAI APIの使用上限に達しているため、AI生成機能は一時的に利用できません。"
    "上記は自動生成された一般的なアドバイスです。"
)
RATE_LIMIT_NOTICE = (
    "\n\n※注: APIの利用制限に達しているため、AI生成機能は一時的に利用できません。"
    "上記は自動生成された一般的なアドバイスです。"
)

SOURCE_AI = "ai"
SOURCE_FALLBACK = "fallback"


# ---------------------------------------------------------------------------
# Generation result / capability
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Generated:
    text: str


@dataclass(frozen=True)
class GenerationFailed:
    reason: str


GenerationResult = Generated | GenerationFailed


class TextGenerator(Protocol):
    def generate(self, prompt: str) -> GenerationResult: ...


@dataclass(frozen=True)
class AdviceOutcome:
    text: str
    source: str  # SOURCE_AI or SOURCE_FALLBACK


# ---------------------------------------------------------------------------
# Shared analysis helpers
# ---------------------------------------------------------------------------

def calc_monthly_income(annual_income: int) -> float:
    """年収（万円）→ 月収（円）"""
    return annual_income * MAN_YEN / 12


def calc_payment_ratio(annual_income: int, monthly_payment: int) -> float:
    """返済比率（%）= 返済額 ÷ 月収 × 100"""
    return monthly_payment / calc_monthly_income(annual_income) * 100


def payment_ratio_comment(ratio: float, subject: str = "この返済額") -> str:
    if ratio <= RATIO_APPROPRIATE:
        return f"{subject}は適正な範囲内です。無理のない返済計画といえます。"
    if ratio <= RATIO_STANDARD:
        return f"{subject}は一般的な基準内です。家計とのバランスを確認しながら検討することをお勧めします。"
    return "返済比率がやや高めです。家計の他の支出とのバランスを慎重に検討してください。"


# ---------------------------------------------------------------------------
# Prompt
# ---------------------------------------------------------------------------

def build_prompt(sim_input: SimulationInput, monthly_payment: int, utility_cost_difference: float) -> str:
    """Render the sales-talk brief for the text generator. Pure text, no I/O."""
    household = sim_input.household
    monthly_income = calc_monthly_income(sim_input.annual_income)
    ratio = calc_payment_ratio(sim_input.annual_income, monthly_payment)
    rent_difference = monthly_payment - sim_input.current_rent

    lines = [
        "あなたは住宅営業のプロフェッショナルです。以下の情報を基に、"
        "顧客に寄り添った親しみやすい営業トークを生成してください。",
        "",
        "【顧客情報】",
        f"年収: {sim_input.annual_income}万円",
        f"予算: {sim_input.budget}万円",
        f"現在の家賃: {sim_input.current_rent:,}円/月",
        f"家族構成: {household.display_label()}",
        f"世帯人数: {household.size}人",
        "",
        "【試算結果と分析】",
        f"毎月の返済額: {monthly_payment:,}円",
        f"月収: 約{monthly_income:,.0f}円（年収{sim_input.annual_income}万円÷12ヶ月）",
        f"返済比率: 約{ratio:.1f}%（返済額÷月収）",
        f"→ {payment_ratio_comment(ratio, subject='返済比率')}",
        "",
        "【現在の家賃との比較】",
    ]
    if rent_difference < 0:
        lines.append(f"返済額は現在の家賃よりも{abs(rent_difference):,}円少なくなります。")
        lines.append("→ 家計の負担が軽減されるため、検討の価値があります。")
    elif rent_difference > 0:
        lines.append(f"返済額は現在の家賃よりも{rent_difference:,}円多くなりますが、")
        lines.append("→ 資産形成という点では大きな違いがあります。")
    else:
        lines.append("返済額と現在の家賃は同じです。")
        lines.append("→ 家賃がそのまま資産形成に回る形になります。")

    lines += ["", "【光熱費について】"]
    if utility_cost_difference > 0:
        lines.append(f"大手HMとの光熱費差額: 月額約{utility_cost_difference:,.0f}円の節約")
        lines.append(f"年間の節約額: 約{utility_cost_difference * 12:,.0f}円")
        lines.append("→ 長期的に見ると大きなメリットとなります。")
    elif utility_cost_difference < 0:
        lines.append(f"大手HMとの光熱費差額: 月額約{abs(utility_cost_difference):,.0f}円高くなります")
    else:
        lines.append("光熱費: 大手HMと同等")

    lines += [
        "",
        "【営業トークの要件】",
        "以下の内容を必ず含めて、親しみやすく丁寧な口調で営業トークを生成してください：",
        "1. 返済額について（返済比率の分析を含む）",
        "2. 現在の家賃との比較（差額を具体的に言及）",
        "3. 光熱費の節約効果（差額がある場合）",
        "4. 家族構成に応じた提案",
        "5. 数字を効果的に活用して説得力のある内容",
        "6. 押し売りではなく、顧客の立場に立った提案",
        "",
        "営業トークを生成してください（400文字程度）:",
    ]
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Fallback narrative
# ---------------------------------------------------------------------------

def build_fallback_advice(sim_input: SimulationInput, monthly_payment: int, utility_cost_difference: float) -> str:
    """Deterministic advice used when AI generation is unavailable."""
    household = sim_input.household
    monthly_income = calc_monthly_income(sim_input.annual_income)
    ratio = calc_payment_ratio(sim_input.annual_income, monthly_payment)
    rent = sim_input.current_rent

    lines = [
        "ご入力いただいた情報を基に、以下の点をご提案いたします。",
        "",
        "【返済額について】",
        f"年収{sim_input.annual_income}万円の場合、月収は約{monthly_income:,.0f}円となります。",
        f"返済額{monthly_payment:,}円は月収の約{ratio:.1f}%です。",
        payment_ratio_comment(ratio),
        "",
        "【現在の家賃との比較】",
    ]
    if monthly_payment < rent:
        lines.append(f"返済額は現在の家賃（{rent:,}円）よりも{rent - monthly_payment:,}円少なくなります。")
        lines.append("家計の負担が軽減されるため、検討の価値があります。")
    elif monthly_payment > rent:
        lines.append(f"返済額は現在の家賃（{rent:,}円）よりも{monthly_payment - rent:,}円多くなりますが、")
        lines.append("資産形成という点では大きな違いがあります。")
    else:
        lines.append(f"返済額は現在の家賃（{rent:,}円）と同じです。")
        lines.append("家賃として支払っていた金額が、そのまま資産形成に回る形になります。")

    if utility_cost_difference > 0:
        lines += [
            "",
            "【光熱費の節約効果】",
            f"大手HMと比較して、月額約{utility_cost_difference:,.0f}円の光熱費節約が期待できます。",
            f"年間では約{utility_cost_difference * 12:,.0f}円の節約となります。",
        ]
    elif utility_cost_difference < 0:
        lines += [
            "",
            "【光熱費について】",
            f"ご家族の人数を考慮すると、大手HMの平均より月額約{abs(utility_cost_difference):,.0f}円高くなる見込みです。",
            "断熱性能や設備の選び方で抑えられる部分もありますので、あわせてご相談ください。",
        ]

    lines += ["", f"【{household.display_label()}のご家族におすすめ】"]
    if household.has_children:
        lines.append("お子様がいらっしゃるご家庭では、長期的な資産形成と教育資金計画の両立が重要です。")
        lines.append("住宅購入は大きな投資となりますが、将来の資産形成につながります。")
    else:
        lines.append("ご家族での生活設計を考える上で、住宅購入は重要な選択肢です。")
        lines.append("ご予算と将来設計を踏まえて、慎重にご検討ください。")

    return "\n".join(lines) + "\n"


def failure_notice(reason: str) -> str:
    """Disclosure appended to the fallback for quota / rate-limit failures ("" otherwise)."""
    if QUOTA_MARKER in reason:
        return QUOTA_NOTICE
    if RATE_LIMIT_MARKER in reason:
        return RATE_LIMIT_NOTICE
    return ""


# ---------------------------------------------------------------------------
# Orchestration
# ---------------------------------------------------------------------------

def _attempt(generator: TextGenerator, prompt: str) -> GenerationResult:
    try:
        return generator.generate(prompt)
    except Exception as e:
        logger.exception("AIアドバイス生成中にエラーが発生しました")
        return GenerationFailed(f"{type(e).__name__}: {e}")


def generate_advice(
    generator: TextGenerator,
    sim_input: SimulationInput,
    monthly_payment: int,
    utility_cost_difference: float,
) -> AdviceOutcome:
    """One generation attempt; fallback narrative on failure or empty text."""
    prompt = build_prompt(sim_input, monthly_payment, utility_cost_difference)
    logger.info("AIアドバイス生成を開始します。プロンプト長: %d", len(prompt))

    result = _attempt(generator, prompt)
    if isinstance(result, Generated) and isinstance(result.text, str) and result.text.strip():
        logger.info("AIアドバイス生成成功。レスポンス長: %d", len(result.text))
        return AdviceOutcome(result.text, SOURCE_AI)

    reason = str(result.reason) if isinstance(result, GenerationFailed) else "empty response"
    logger.warning("AIアドバイスを利用できないため定型アドバイスを使用します: %s", reason)
    fallback = build_fallback_advice(sim_input, monthly_payment, utility_cost_difference)
    return AdviceOutcome(fallback + failure_notice(reason), SOURCE_FALLBACK)
