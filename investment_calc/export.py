"""CSV schedule export."""

import csv
from pathlib import Path
from typing import TextIO

from investment_calc.engine import ProjectionResult, round_display

MONTHLY_HEADER = ["Month", "Start Balance", "Contributions", "Interest", "End Balance"]
YEARLY_HEADER = ["Year", "Start Balance", "Contributions", "Interest", "End Balance"]


class ExportError(Exception):
    """Raised when an export file cannot be written. The result stays in memory."""


def fmt_csv(value) -> str:
    """Fixed 2 decimals, always '.' as the separator."""
    return f"{round_display(value):.2f}"


def schedule_rows(result: ProjectionResult, monthly: bool) -> list[list[str]]:
    """Header plus one row per month or year."""
    if monthly:
        rows = [list(MONTHLY_HEADER)]
        for rec in result.monthly:
            rows.append([
                rec.label,
                fmt_csv(rec.start_balance),
                fmt_csv(rec.contribution),
                fmt_csv(rec.interest),
                fmt_csv(rec.end_balance),
            ])
    else:
        rows = [list(YEARLY_HEADER)]
        for rec in result.yearly:
            rows.append([
                str(rec.year),
                fmt_csv(rec.start_balance),
                fmt_csv(rec.contributions),
                fmt_csv(rec.interest),
                fmt_csv(rec.end_balance),
            ])
    return rows


def write_schedule_csv(result: ProjectionResult, monthly: bool, stream: TextIO) -> None:
    writer = csv.writer(stream, lineterminator="\n")
    writer.writerows(schedule_rows(result, monthly))


def default_csv_name(monthly: bool) -> str:
    return "monthly_schedule.csv" if monthly else "annual_schedule.csv"


def ensure_suffix(path: Path, suffix: str) -> Path:
    if path.suffix.lower() != suffix:
        return path.with_name(path.name + suffix)
    return path


def export_schedule_csv(result: ProjectionResult, path: Path, monthly: bool = False) -> Path:
    """Write the schedule to `path` (".csv" appended if missing).

    Returns the written path. Raises ExportError on I/O failure.
    """
    path = ensure_suffix(Path(path), ".csv")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8", newline="") as f:
            write_schedule_csv(result, monthly, f)
    except OSError as e:
        raise ExportError(f"Error exporting CSV: {path}: {e}") from e
    return path
