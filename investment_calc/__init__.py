"""Compound Interest Investment Projection Package."""

from investment_calc.params import (
    InvestmentParameters,
    CompoundingFrequency,
    ContributionTiming,
    InvalidParameter,
    validate_params,
    MIN_YEARS,
    MAX_YEARS,
    MAX_CONTRIBUTIONS_PER_YEAR,
)
from investment_calc.engine import (
    project,
    aggregate_years,
    round_display,
    MonthlyRecord,
    YearlyRecord,
    ProjectionResult,
)
from investment_calc.currency import Currency, get_currency, format_money
from investment_calc.session import Session, NoResultError
from investment_calc.export import ExportError, export_schedule_csv, write_schedule_csv
from investment_calc.report import (
    format_report,
    save_report,
    format_summary,
    format_annual_schedule,
    format_monthly_schedule,
)

__all__ = [
    "InvestmentParameters",
    "CompoundingFrequency",
    "ContributionTiming",
    "InvalidParameter",
    "validate_params",
    "MIN_YEARS",
    "MAX_YEARS",
    "MAX_CONTRIBUTIONS_PER_YEAR",
    "project",
    "aggregate_years",
    "round_display",
    "MonthlyRecord",
    "YearlyRecord",
    "ProjectionResult",
    "Currency",
    "get_currency",
    "format_money",
    "Session",
    "NoResultError",
    "ExportError",
    "export_schedule_csv",
    "write_schedule_csv",
    "format_report",
    "save_report",
    "format_summary",
    "format_annual_schedule",
    "format_monthly_schedule",
]
