"""Chart generation for projection results."""

import math
from decimal import Decimal
from pathlib import Path

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import matplotlib.ticker as ticker

from investment_calc.currency import DEFAULT_CURRENCY, currency_symbol, format_money, get_currency
from investment_calc.engine import ProjectionResult
from investment_calc.export import ExportError

# Series color mapping (shared by line and pie charts)
COLOR_BALANCE = "#007bff"        # blue
COLOR_CONTRIBUTIONS = "#28a745"  # green
COLOR_INTEREST = "#ffc107"       # yellow


def _format_currency_axis(ax: plt.Axes, currency: str):
    """Y axis tick labels in the display currency."""
    cur = get_currency(currency)
    ax.yaxis.set_major_formatter(
        ticker.FuncFormatter(lambda x, _: format_money(x, cur))
    )


def _save(fig: plt.Figure, output_path: Path, stem: str, name: str) -> Path:
    suffix = f"-{name}" if name else ""
    filepath = output_path / f"{stem}{suffix}.png"
    try:
        output_path.mkdir(parents=True, exist_ok=True)
        fig.tight_layout()
        fig.savefig(filepath, dpi=150)
    except OSError as e:
        raise ExportError(f"Error saving chart: {filepath}: {e}") from e
    finally:
        plt.close(fig)
    return filepath


def growth_series(result: ProjectionResult) -> dict[str, list[float]]:
    """Year-indexed series for the growth chart, starting at year 0.

    Contributions are cumulative additional contributions (starting amount
    excluded); interest is cumulative interest.
    """
    years = [0]
    balance = [float(result.starting_amount)]
    contributions = [0.0]
    interest = [0.0]
    cum_contrib = 0
    cum_interest = 0
    for y in result.yearly:
        cum_contrib += y.contributions
        cum_interest += y.interest
        years.append(y.year)
        balance.append(float(y.end_balance))
        contributions.append(float(cum_contrib))
        interest.append(float(cum_interest))
    return {
        "years": years,
        "balance": balance,
        "contributions": contributions,
        "interest": interest,
    }


def plot_growth(
    result: ProjectionResult,
    output_path: Path,
    currency: str = DEFAULT_CURRENCY,
    name: str = "",
) -> Path:
    """Generate a line chart of balance, cumulative contributions and interest.

    Args:
        result: projection to draw (yearly records are used).
        output_path: directory to save the PNG.
        currency: display currency code for the Y axis.
        name: optional suffix for the output filename (e.g. "plan" → "growth-plan.png").

    Returns:
        Path to the generated PNG file.

    Raises:
        ExportError: an amount is beyond float range, or the file cannot be saved.
    """
    series = growth_series(result)
    if not all(math.isfinite(v) for values in series.values() for v in values):
        raise ExportError(
            "Cannot draw growth chart: amounts exceed the plottable range "
            f"(end balance ~1e{result.end_balance.adjusted()})"
        )

    fig, ax = plt.subplots(figsize=(10, 6))
    ax.plot(series["years"], series["balance"], label="Total Balance",
            color=COLOR_BALANCE, linewidth=2, marker="o")
    ax.plot(series["years"], series["contributions"], label="Cumulative Additional Contributions",
            color=COLOR_CONTRIBUTIONS, linewidth=2, marker="o")
    ax.plot(series["years"], series["interest"], label="Total Interest",
            color=COLOR_INTEREST, linewidth=2, marker="o")

    ax.set_xlabel("Years")
    ax.set_ylabel(f"Amount ({currency_symbol(currency)})")
    ax.set_title("Investment Growth Over Time")
    ax.xaxis.set_major_locator(ticker.MaxNLocator(integer=True))
    ax.legend(loc="upper left")
    ax.grid(True, alpha=0.3)
    _format_currency_axis(ax, currency)

    return _save(fig, output_path, "growth", name)


def breakdown_slices(result: ProjectionResult) -> list[tuple[str, Decimal, str]] | None:
    """Pie slices (label, amount, color), or None when the plan is a net withdrawal."""
    additional = result.additional_contributions
    if additional < 0:
        return None
    slices = [
        ("Starting Amount", result.starting_amount, COLOR_CONTRIBUTIONS),
        ("Additional Contributions", additional, COLOR_BALANCE),
        ("Interest Earned", result.total_interest, COLOR_INTEREST),
    ]
    return [s for s in slices if s[1] > 0]


def slice_shares(slices: list[tuple[str, Decimal, str]]) -> list[float]:
    """Wedge sizes as fractions of the total, computed before leaving Decimal."""
    total = sum((s[1] for s in slices), Decimal(0))
    return [float(s[1] / total) for s in slices]


def plot_breakdown(
    result: ProjectionResult,
    output_path: Path,
    currency: str = DEFAULT_CURRENCY,
    name: str = "",
) -> Path | None:
    """Generate the end-balance composition pie chart.

    Returns None (no file written) for withdrawals or when nothing is positive.
    """
    slices = breakdown_slices(result)
    if not slices:
        return None
    cur = get_currency(currency)

    fig, ax = plt.subplots(figsize=(8, 8))
    ax.pie(
        slice_shares(slices),
        labels=[f"{label}: {format_money(amount, cur)}" for label, amount, _ in slices],
        colors=[color for _, _, color in slices],
        autopct=lambda pct: f"{pct:.0f}%",
        startangle=90,
        counterclock=False,
        wedgeprops=dict(edgecolor="white"),
    )
    ax.set_title(f"End Balance Composition ({format_money(result.end_balance, cur)})")
    ax.axis("equal")

    return _save(fig, output_path, "breakdown", name)
