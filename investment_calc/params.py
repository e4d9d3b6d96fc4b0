"""Investment parameters and boundary validation."""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

# Form limits
MIN_YEARS = 1
MAX_YEARS = 100
MIN_RATE_PERCENT = Decimal(-100)
MAX_RATE_PERCENT = Decimal(1000)
MAX_CONTRIBUTIONS_PER_YEAR = 365
MAX_AMOUNT = Decimal(10) ** 15  # starting amount and |annual contribution|


class InvalidParameter(ValueError):
    """Raised when parameters cannot produce a projection."""


class CompoundingFrequency(Enum):
    ANNUALLY = ("Annually", 1)
    QUARTERLY = ("Quarterly", 4)
    MONTHLY = ("Monthly", 12)
    WEEKLY = ("Weekly", 52)
    DAILY = ("Daily", 365)

    def __init__(self, label: str, periods: int):
        self.label = label
        self.periods = periods

    @classmethod
    def parse(cls, value: "CompoundingFrequency | str") -> "CompoundingFrequency":
        """Resolve a frequency name. Unknown names fall back to MONTHLY."""
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        for freq in cls:
            if freq.label.lower() == key:
                return freq
        return cls.MONTHLY


class ContributionTiming(Enum):
    BEGINNING = "Beginning of Period"
    END = "End of Period"

    @classmethod
    def parse(cls, value: "ContributionTiming | str | bool") -> "ContributionTiming":
        """Accept beginning/end, the long labels, or a contribute-at-beginning flag."""
        if isinstance(value, cls):
            return value
        if isinstance(value, bool):
            return cls.BEGINNING if value else cls.END
        key = str(value).strip().lower()
        if key in ("beginning", "begin", "start", "beginning of period"):
            return cls.BEGINNING
        if key in ("end", "end of period"):
            return cls.END
        raise InvalidParameter(
            f"Contribution timing must be 'beginning' or 'end' (got {value!r})"
        )


@dataclass(frozen=True)
class InvestmentParameters:

    starting_amount: Decimal = Decimal("20000")
    years: int = 10
    annual_rate: Decimal = Decimal("7")  # percent, 7 = 7%
    compounding: CompoundingFrequency | str = CompoundingFrequency.MONTHLY
    annual_contribution: Decimal = Decimal("12000")  # negative = withdrawal
    contributions_per_year: int = 12
    timing: ContributionTiming = ContributionTiming.BEGINNING

    @property
    def frequency(self) -> CompoundingFrequency:
        return CompoundingFrequency.parse(self.compounding)

    @property
    def periods_per_year(self) -> int:
        return self.frequency.periods

    @property
    def contribute_at_beginning(self) -> bool:
        return ContributionTiming.parse(self.timing) is ContributionTiming.BEGINNING


def validate_params(params: InvestmentParameters) -> list[str]:
    """Check form-level ranges. Returns list of error messages."""
    errors = []

    start = Decimal(str(params.starting_amount))
    if start < 0:
        errors.append("Starting amount cannot be negative.")
    elif start > MAX_AMOUNT:
        errors.append(f"Starting amount cannot exceed {MAX_AMOUNT:,}.")

    if abs(Decimal(str(params.annual_contribution))) > MAX_AMOUNT:
        errors.append(
            f"Annual contribution must be between -{MAX_AMOUNT:,} and {MAX_AMOUNT:,}."
        )

    if params.years < MIN_YEARS or params.years > MAX_YEARS:
        errors.append(f"Years must be between {MIN_YEARS} and {MAX_YEARS}.")

    rate = Decimal(str(params.annual_rate))
    if rate < MIN_RATE_PERCENT or rate > MAX_RATE_PERCENT:
        errors.append(
            f"Annual return rate must be between {MIN_RATE_PERCENT}% and {MAX_RATE_PERCENT}%."
        )

    cpy = params.contributions_per_year
    if cpy < 0 or cpy > MAX_CONTRIBUTIONS_PER_YEAR:
        errors.append(
            f"Contributions per year must be between 0 and {MAX_CONTRIBUTIONS_PER_YEAR}."
        )

    return errors
