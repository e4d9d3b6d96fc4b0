"""Plain-text report, on-screen summary and schedule tables.

Every renderer takes the result and the display currency explicitly; nothing
here reads module-level state.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from investment_calc.currency import (
    DEFAULT_CURRENCY,
    format_money,
    format_percent,
    get_currency,
)
from investment_calc.engine import ProjectionResult
from investment_calc.export import ExportError, ensure_suffix

DEFAULT_REPORT_FILENAME = "investment_results.txt"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

WIDE_RULE = "=" * 60
NARROW_RULE = "-" * 40

# ---------------------------------------------------------------------------
# Text report
# ---------------------------------------------------------------------------

def _label_row(label: str, value: str) -> str:
    return f"{label + ':':<23} {value}"


def format_report(
    result: ProjectionResult,
    currency: str = DEFAULT_CURRENCY,
    generated_at: datetime | None = None,
) -> str:
    """Render the full text report for a projection."""
    if generated_at is None:
        generated_at = datetime.now()

    def money(v) -> str:
        return format_money(v, currency)

    lines = [
        WIDE_RULE,
        "INVESTMENT CALCULATION RESULTS",
        WIDE_RULE,
        "",
        f"Generated on: {generated_at.strftime(DATE_FORMAT)}",
        "",
        "INPUT PARAMETERS:",
        NARROW_RULE,
        _label_row("Starting Amount", money(result.starting_amount)),
        _label_row("Investment Period", f"{result.years} years"),
        _label_row("Annual Return Rate", format_percent(result.annual_rate)),
        _label_row("Compounding Frequency", result.compounding_frequency),
        "",
        "FINAL RESULTS:",
        NARROW_RULE,
        _label_row("End Balance", money(result.end_balance)),
        _label_row("Total Contributions", money(result.total_contributions)),
        _label_row("Total Interest Earned", money(result.total_interest)),
        _label_row("Total Return", format_percent(result.total_return_percent)),
        "",
    ]

    if result.yearly:
        lines += [
            "YEARLY SUMMARY:",
            NARROW_RULE,
            f"{'Year':<6} | {'Balance':<15} | {'Interest':<15}",
            NARROW_RULE,
        ]
        for y in result.yearly:
            lines.append(f"{y.year:<6} | {money(y.end_balance):<15} | {money(y.interest):<15}")

    lines += [
        "",
        WIDE_RULE,
        "End of Report",
        WIDE_RULE,
    ]
    return "\n".join(lines) + "\n"


def save_report(
    result: ProjectionResult,
    path: Path | str | None = None,
    currency: str = DEFAULT_CURRENCY,
    append: bool = False,
    generated_at: datetime | None = None,
) -> Path:
    """Write (or append) the text report and return the file path.

    Raises ExportError when the file cannot be written.
    """
    target = Path(path) if path else Path(DEFAULT_REPORT_FILENAME)
    target = ensure_suffix(target, ".txt")
    content = format_report(result, currency, generated_at)
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        if append:
            with open(target, "a", encoding="utf-8") as f:
                f.write("\n\n" + content)
        else:
            target.write_text(content, encoding="utf-8")
    except OSError as e:
        raise ExportError(f"Error saving results to file: {target}: {e}") from e
    return target


# ---------------------------------------------------------------------------
# Summary and schedules
# ---------------------------------------------------------------------------

def format_summary(result: ProjectionResult, currency: str = DEFAULT_CURRENCY) -> str:
    """Short results block shown after a calculation."""
    cur = get_currency(currency)
    additional = result.additional_contributions
    lines = [
        "Investment Results",
        f"  End Balance: {format_money(result.end_balance, cur)}",
        f"  Starting Amount: {format_money(result.starting_amount, cur)}",
    ]
    if additional >= 0:
        lines.append(f"  Total Additional Contributions: {format_money(additional, cur)}")
    else:
        lines.append(f"  Total Withdrawals: {format_money(additional.copy_abs(), cur)}")
    lines += [
        f"  Total Interest Earned: {format_money(result.total_interest, cur)}",
        "",
        "Details:",
        f"  Compounding Frequency: {result.compounding_frequency}",
        f"  Annual Return Rate: {format_percent(result.annual_rate)}",
        f"  Number of Years: {result.years}",
        f"  Currency: {cur.code}",
    ]
    if result.is_withdrawal:
        lines += ["", "Note: Negative contribution values indicate withdrawals from the account."]
    return "\n".join(lines)


def _contribution_label(result: ProjectionResult) -> str:
    return "Withdrawals" if result.is_withdrawal else "Contributions"


def format_annual_schedule(result: ProjectionResult, currency: str = DEFAULT_CURRENCY) -> str:
    lines = [
        f"{'Year':<6} {'Start Balance':<18} {_contribution_label(result):<18} "
        f"{'Interest':<18} {'End Balance':<18}".rstrip(),
        "-" * 90,
    ]
    for y in result.yearly:
        cells = [
            format_money(v, currency)
            for v in (y.start_balance, y.contributions, y.interest, y.end_balance)
        ]
        lines.append(f"{y.year:<6} " + " ".join(f"{c:<18}" for c in cells).rstrip())
    return "\n".join(lines) + "\n"


def format_monthly_schedule(result: ProjectionResult, currency: str = DEFAULT_CURRENCY) -> str:
    lines = [
        f"{'Month':<18} {'Start Balance':<15} {_contribution_label(result):<15} "
        f"{'Interest':<15} {'End Balance':<15}".rstrip(),
        "-" * 80,
    ]
    for m in result.monthly:
        cells = [
            format_money(v, currency)
            for v in (m.start_balance, m.contribution, m.interest, m.end_balance)
        ]
        lines.append(f"{m.label:<18} " + " ".join(f"{c:<15}" for c in cells).rstrip())
    lines += [
        "-" * 80,
        f"Total months: {len(result.monthly)}",
    ]
    return "\n".join(lines) + "\n"
