"""Per-user calculation context passed to rendering and export."""

from dataclasses import dataclass

from investment_calc.currency import DEFAULT_CURRENCY, Currency, get_currency
from investment_calc.engine import ProjectionResult, project
from investment_calc.params import InvestmentParameters


class NoResultError(RuntimeError):
    """Raised when output is requested before any calculation."""


@dataclass
class Session:
    currency: str = DEFAULT_CURRENCY
    last_result: ProjectionResult | None = None

    @property
    def selected_currency(self) -> Currency:
        return get_currency(self.currency)

    def select_currency(self, code: str) -> Currency:
        cur = get_currency(code)
        self.currency = cur.code
        return cur

    def calculate(self, params: InvestmentParameters) -> ProjectionResult:
        """Project and remember the result. A failed run keeps the previous one."""
        result = project(params)
        self.last_result = result
        return result

    def require_result(self) -> ProjectionResult:
        if self.last_result is None:
            raise NoResultError("No results to export. Please calculate first.")
        return self.last_result
