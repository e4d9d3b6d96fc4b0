"""Core projection engine."""

import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Context, Decimal, InvalidOperation, localcontext

from investment_calc.params import InvalidParameter, InvestmentParameters

MONTHS_PER_YEAR = 12

# Fixed scales (fractional digits) for intermediate values
RATE_SCALE = Decimal("1e-30")
AMOUNT_SCALE = Decimal("1e-20")
RECORD_SCALE = Decimal("1e-10")
DISPLAY_SCALE = Decimal("0.01")

# Balances are quantized to fixed scales, so precision only has to cover the
# integer digits of a long high-rate run.
_CONTEXT = Context(prec=1000, rounding=ROUND_HALF_UP)

# Months (1-based, within the year) that receive a contribution
QUARTERLY_MONTHS = (1, 4, 7, 10)


def to_decimal(value) -> Decimal:
    """Convert int/float/str to Decimal without binary float noise."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, int):
        return Decimal(value)
    return Decimal(str(value))


def round_display(value: Decimal) -> Decimal:
    """Round to 2 decimals (half-up) for display and export."""
    rounded = to_decimal(value).quantize(
        DISPLAY_SCALE, rounding=ROUND_HALF_UP, context=_CONTEXT,
    )
    if rounded.is_zero():
        return rounded.copy_abs()
    return rounded


@dataclass(frozen=True)
class MonthlyRecord:
    year: int
    month: int  # 1-12 within the year
    start_balance: Decimal
    contribution: Decimal
    interest: Decimal
    end_balance: Decimal

    @property
    def label(self) -> str:
        return f"Year {self.year}, Month {self.month}"


@dataclass(frozen=True)
class YearlyRecord:
    year: int
    start_balance: Decimal
    contributions: Decimal
    interest: Decimal
    end_balance: Decimal


@dataclass(frozen=True)
class ProjectionResult:
    params: InvestmentParameters
    end_balance: Decimal
    total_contributions: Decimal  # includes starting amount
    total_interest: Decimal
    monthly: tuple[MonthlyRecord, ...]
    yearly: tuple[YearlyRecord, ...]

    @property
    def starting_amount(self) -> Decimal:
        return to_decimal(self.params.starting_amount)

    @property
    def years(self) -> int:
        return self.params.years

    @property
    def annual_rate(self) -> Decimal:
        return to_decimal(self.params.annual_rate)

    @property
    def compounding_frequency(self) -> str:
        return self.params.frequency.label

    @property
    def additional_contributions(self) -> Decimal:
        """Net contributions beyond the starting amount (negative = withdrawals)."""
        with localcontext(_CONTEXT):
            return self.total_contributions - self.starting_amount

    @property
    def is_withdrawal(self) -> bool:
        return self.additional_contributions < 0

    @property
    def total_return_percent(self) -> Decimal:
        """Total interest as a percentage of total contributions."""
        if self.total_contributions == 0:
            return Decimal(0)
        with localcontext(_CONTEXT):
            ratio = (self.total_interest / self.total_contributions).quantize(
                Decimal("0.0001")
            )
            return ratio * 100


def _monthly_interest_factor(annual_rate: Decimal, periods_per_year: int) -> Decimal:
    """Return m - 1 where m = (1 + r/n)^(n/12).

    The fractional power is taken in floating point and converted back via the
    float's shortest repr. Reordering the steps changes the trailing digits.
    """
    rate = (annual_rate / 100).quantize(RATE_SCALE)
    periodic_rate = (rate / periods_per_year).quantize(RATE_SCALE)
    base = Decimal(1) + periodic_rate
    if base < 0:
        raise InvalidParameter(
            f"Annual rate {annual_rate}% gives a negative growth base for "
            f"{periods_per_year} compounding periods per year"
        )
    periods_per_month = periods_per_year / 12.0
    multiplier = math.pow(float(base), periods_per_month)
    return Decimal(repr(multiplier)) - 1


def _contribution_for_month(
    month_in_year: int,
    annual_contribution: Decimal,
    contributions_per_year: int,
    per_event: Decimal,
) -> Decimal:
    """Contribution scheduled in the given month (1-12).

    1/4/12 events per year land on January, quarter starts, or every month.
    Any other count spreads the annual amount evenly over 12 months.
    """
    if contributions_per_year == 0 and annual_contribution == 0:
        return Decimal(0)
    if contributions_per_year == 1:
        return per_event if month_in_year == 1 else Decimal(0)
    if contributions_per_year == 4:
        return per_event if month_in_year in QUARTERLY_MONTHS else Decimal(0)
    if contributions_per_year == 12:
        return per_event
    return (annual_contribution / MONTHS_PER_YEAR).quantize(AMOUNT_SCALE)


def _simulate_months(
    starting_amount: Decimal,
    years: int,
    interest_factor: Decimal,
    annual_contribution: Decimal,
    contributions_per_year: int,
    at_beginning: bool,
) -> list[MonthlyRecord]:
    per_event = Decimal(0)
    if contributions_per_year > 0:
        per_event = (annual_contribution / contributions_per_year).quantize(AMOUNT_SCALE)

    records = []
    balance = starting_amount
    for month in range(1, years * MONTHS_PER_YEAR + 1):
        year, month_in_year = divmod(month - 1, MONTHS_PER_YEAR)
        month_in_year += 1
        start = balance
        contribution = _contribution_for_month(
            month_in_year, annual_contribution, contributions_per_year, per_event,
        )

        if at_beginning:
            balance += contribution
            interest = ((start + contribution) * interest_factor).quantize(AMOUNT_SCALE)
            balance += interest
        else:
            interest = (start * interest_factor).quantize(AMOUNT_SCALE)
            balance += interest
            balance += contribution

        records.append(MonthlyRecord(
            year=year + 1,
            month=month_in_year,
            start_balance=start.quantize(RECORD_SCALE),
            contribution=contribution.quantize(RECORD_SCALE),
            interest=interest.quantize(RECORD_SCALE),
            end_balance=balance.quantize(RECORD_SCALE),
        ))
    return records


def aggregate_years(
    monthly: list[MonthlyRecord] | tuple[MonthlyRecord, ...], starting_amount: Decimal,
) -> list[YearlyRecord]:
    """Roll every 12 consecutive months into a YearlyRecord."""
    yearly = []
    year_start = starting_amount
    contributions = Decimal(0)
    interest = Decimal(0)
    for i, rec in enumerate(monthly):
        contributions += rec.contribution
        interest += rec.interest
        if (i + 1) % MONTHS_PER_YEAR == 0:
            yearly.append(YearlyRecord(
                year=(i + 1) // MONTHS_PER_YEAR,
                start_balance=year_start,
                contributions=contributions,
                interest=interest,
                end_balance=rec.end_balance,
            ))
            year_start = rec.end_balance
            contributions = Decimal(0)
            interest = Decimal(0)
    return yearly


def project(params: InvestmentParameters) -> ProjectionResult:
    """Run a month-by-month projection and return the full result.

    Raises InvalidParameter for a non-positive duration, a negative
    contribution count, a rate whose growth base is negative, or amounts
    that overflow the working precision.
    Unknown compounding frequencies resolve to monthly.
    """
    if params.years <= 0:
        raise InvalidParameter(f"Duration must be at least 1 year (got {params.years})")
    if params.contributions_per_year < 0:
        raise InvalidParameter(
            f"Contributions per year cannot be negative (got {params.contributions_per_year})"
        )

    try:
        with localcontext(_CONTEXT):
            starting_amount = to_decimal(params.starting_amount)
            annual_contribution = to_decimal(params.annual_contribution)
            interest_factor = _monthly_interest_factor(
                to_decimal(params.annual_rate), params.periods_per_year,
            )
            monthly = _simulate_months(
                starting_amount,
                params.years,
                interest_factor,
                annual_contribution,
                params.contributions_per_year,
                params.contribute_at_beginning,
            )
            yearly = aggregate_years(monthly, starting_amount)

            total_contributions = starting_amount + sum(
                (m.contribution for m in monthly), Decimal(0)
            )
            total_interest = sum((m.interest for m in monthly), Decimal(0))
            end_balance = monthly[-1].end_balance
    except (InvalidOperation, OverflowError) as e:
        raise InvalidParameter(
            "Amounts are too large to project; reduce the starting amount, "
            "contribution, rate or duration"
        ) from e

    return ProjectionResult(
        params=params,
        end_balance=end_balance,
        total_contributions=total_contributions,
        total_interest=total_interest,
        monthly=tuple(monthly),
        yearly=tuple(yearly),
    )
