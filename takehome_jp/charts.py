"""Chart generation for salary sweep results."""

import platform
from pathlib import Path

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import matplotlib.ticker as ticker

from takehome_jp.takehome import NetIncomeResult

COMPONENT_COLORS = {
    "net_income": "#66c2a5",
    "income_tax": "#fc8d62",
    "resident_tax": "#8da0cb",
    "social_insurance": "#e78ac3",
}


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


def _format_man_axis(axis):
    """Show 円 values as 万円 on the given axis."""
    axis.set_major_formatter(
        ticker.FuncFormatter(lambda x, _: f"{x / 10000:,.0f}万")
    )


def _save(fig, output_path: Path, stem: str, name: str) -> Path:
    output_path.mkdir(parents=True, exist_ok=True)
    suffix = f"-{name}" if name else ""
    filepath = output_path / f"{stem}{suffix}.png"
    fig.tight_layout()
    fig.savefig(filepath, dpi=150)
    plt.close(fig)
    return filepath


def plot_takehome_breakdown(results: list[NetIncomeResult], output_path: Path, name: str = "") -> Path:
    """Stacked area of where each yen of gross salary goes.

    Args:
        results: calculate_net_income() results ordered by salary.
        output_path: directory to save the PNG.
        name: optional suffix for the output filename (e.g. "family" → "breakdown-family.png").

    Returns:
        Path to the generated PNG file.
    """
    if not results:
        raise ValueError("No results for breakdown chart")
    _setup_japanese_font()

    salaries = [r.salary for r in results]
    fig, ax = plt.subplots(figsize=(12, 7))
    ax.stackplot(
        salaries,
        [r.net_income for r in results],
        [r.income_tax for r in results],
        [r.resident_tax for r in results],
        [r.insurance.total for r in results],
        labels=["手取り", "所得税", "住民税", "社会保険料"],
        colors=[
            COMPONENT_COLORS["net_income"],
            COMPONENT_COLORS["income_tax"],
            COMPONENT_COLORS["resident_tax"],
            COMPONENT_COLORS["social_insurance"],
        ],
        alpha=0.8,
    )
    ax.set_xlabel("額面年収")
    ax.set_ylabel("金額（円/年）")
    ax.set_title("額面年収の内訳（手取り・税・社会保険料）")
    ax.legend(loc="upper left")
    ax.grid(True, alpha=0.3)
    _format_man_axis(ax.xaxis)
    _format_man_axis(ax.yaxis)
    return _save(fig, output_path, "breakdown", name)


def plot_effective_rates(results: list[NetIncomeResult], output_path: Path, name: str = "") -> Path:
    """Take-home ratio (left axis) and furusato nozei limit (right axis) against salary."""
    if not results:
        raise ValueError("No results for rate chart")
    _setup_japanese_font()

    salaries = [r.salary for r in results]
    ratios = [r.net_income / r.salary * 100 if r.salary else 0.0 for r in results]
    limits = [r.furusato_nozei.limit for r in results]

    fig, ax = plt.subplots(figsize=(12, 7))
    ax.plot(salaries, ratios, color="#1f77b4", linewidth=2, label="手取り率")
    ax.set_xlabel("額面年収")
    ax.set_ylabel("手取り率（%）")
    ax.yaxis.set_major_formatter(ticker.FuncFormatter(lambda x, _: f"{x:.0f}%"))
    _format_man_axis(ax.xaxis)
    ax.grid(True, alpha=0.3)

    ax_right = ax.twinx()
    ax_right.plot(salaries, limits, color="#d62728", linewidth=1.8, linestyle="--", label="ふるさと納税限度額")
    ax_right.set_ylabel("ふるさと納税限度額（円）")
    ax_right.yaxis.set_major_formatter(ticker.FuncFormatter(lambda x, _: f"{x:,.0f}"))

    lines = [*ax.get_lines(), *ax_right.get_lines()]
    ax.legend(lines, [line.get_label() for line in lines], loc="upper right")
    ax.set_title("手取り率とふるさと納税限度額")
    return _save(fig, output_path, "rates", name)
