"""Chart generation for simulation results."""

import platform
from pathlib import Path

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import matplotlib.ticker as ticker

from housing_advice_jp.calculation import estimate_utility_cost, estimate_utility_cost_flat
from housing_advice_jp.family import Household
from housing_advice_jp.params import STANDARD_UTILITY_COST
from housing_advice_jp.simulation import SimulationResult

COLOR_PAYMENT = "#1f77b4"   # blue
COLOR_RENT = "#7f7f7f"      # gray
COLOR_UTILITY = "#2ca02c"   # green
COLOR_FLAT = "#ff7f0e"      # orange
COLOR_BASELINE = "#d62728"  # red


def _setup_japanese_font():
    """Configure matplotlib to use a Japanese font."""
    system = platform.system()
    if system == "Darwin":
        font_family = "Hiragino Sans"
    elif system == "Linux":
        font_family = "Noto Sans CJK JP"
    else:
        font_family = "sans-serif"
    plt.rcParams["font.family"] = font_family
    plt.rcParams["axes.unicode_minus"] = False


def _format_yen_axis(ax: plt.Axes):
    ax.yaxis.set_major_formatter(ticker.FuncFormatter(lambda x, _: f"{x:,.0f}"))


def _save(fig, output_path: Path, stem: str, name: str) -> Path:
    output_path.mkdir(parents=True, exist_ok=True)
    suffix = f"-{name}" if name else ""
    filepath = output_path / f"{stem}{suffix}.png"
    fig.tight_layout()
    fig.savefig(filepath, dpi=150)
    plt.close(fig)
    return filepath


def plot_payment_comparison(result: SimulationResult, output_path: Path, name: str = "") -> Path:
    """Bar chart of current rent vs monthly payment (plus utility cost difference).

    Returns:
        Path to the generated PNG file (payment-{name}.png).
    """
    _setup_japanese_font()

    labels = ["現在の家賃", "毎月の返済額"]
    values = [result.input.current_rent, result.monthly_payment]
    colors = [COLOR_RENT, COLOR_PAYMENT]

    fig, ax = plt.subplots(figsize=(8, 6))
    bars = ax.bar(labels, values, color=colors, width=0.5)
    for bar, v in zip(bars, values):
        ax.annotate(
            f"{v:,.0f}円",
            xy=(bar.get_x() + bar.get_width() / 2, v),
            ha="center", va="bottom", fontsize=11,
        )

    diff = result.rent_difference
    sign = "+" if diff >= 0 else "▲"
    ax.set_title(f"返済額と現在の家賃（差額 {sign}{abs(diff):,.0f}円/月）")
    ax.set_ylabel("円/月")
    ax.grid(True, axis="y", alpha=0.3)
    _format_yen_axis(ax)
    return _save(fig, output_path, "payment", name)


def plot_utility_by_family_size(
    output_path: Path, name: str = "", max_size: int = 6,
    highlight: Household | None = None,
) -> Path:
    """Line chart of estimated utility cost by household size vs 大手HM baseline.

    Draws both estimate variants (half-base increment and flat 8,000円 increment).
    """
    _setup_japanese_font()

    sizes = list(range(1, max_size + 1))
    households = [Household.other(n) for n in sizes]
    half_base = [estimate_utility_cost(h) for h in households]
    flat = [estimate_utility_cost_flat(h) for h in households]

    fig, ax = plt.subplots(figsize=(10, 6))
    ax.plot(sizes, half_base, marker="o", color=COLOR_UTILITY, linewidth=2, label="当社想定")
    ax.plot(sizes, flat, marker="s", color=COLOR_FLAT, linewidth=1.5, linestyle="--", label="簡易目安")
    ax.axhline(STANDARD_UTILITY_COST, color=COLOR_BASELINE, linewidth=1, linestyle=":", label="大手HM平均")

    if highlight is not None and 1 <= highlight.size <= max_size:
        y = estimate_utility_cost(highlight)
        ax.scatter([highlight.size], [y], s=160, facecolors="none", edgecolors=COLOR_PAYMENT, linewidths=2, zorder=5)
        ax.annotate(
            highlight.display_label(), xy=(highlight.size, y), xytext=(0, 12),
            textcoords="offset points", ha="center", fontsize=10, color=COLOR_PAYMENT,
        )

    ax.set_xlabel("世帯人数")
    ax.set_ylabel("光熱費（円/月）")
    ax.set_title("世帯人数別の想定光熱費")
    ax.set_xticks(sizes)
    ax.legend(loc="upper left")
    ax.grid(True, alpha=0.3)
    _format_yen_axis(ax)
    return _save(fig, output_path, "utility", name)
