"""CLI entry point for chart generation."""

import sys
from pathlib import Path

from investment_calc.charts import plot_breakdown, plot_growth
from investment_calc.config import create_parser, resolve_namespace
from investment_calc.export import ExportError
from investment_calc.params import InvalidParameter
from investment_calc.session import Session


def _build_parser():
    parser = create_parser("Investment projection chart generation")
    parser.add_argument(
        "--output", type=Path, default=Path("reports/charts"),
        help="Output directory (default: reports/charts)",
    )
    parser.add_argument(
        "--name", type=str, default="",
        help="Output filename suffix (e.g. plan → growth-plan.png)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    _, params, currency, args = resolve_namespace(parser, args)

    session = Session()
    session.select_currency(currency.code)
    print(f"Projection ({params.years} years, {params.frequency.label} compounding)...", file=sys.stderr)
    try:
        result = session.calculate(params)
    except InvalidParameter as e:
        print(f"Error calculating investment: {e}", file=sys.stderr)
        return 1

    # Each chart is attempted independently; any failure sets the exit status.
    status = 0
    try:
        path = plot_growth(result, args.output, currency=session.currency, name=args.name)
        print(f"  → {path}", file=sys.stderr)
    except ExportError as e:
        print(f"  {e}", file=sys.stderr)
        status = 1

    try:
        path = plot_breakdown(result, args.output, currency=session.currency, name=args.name)
        if path is None:
            print("  Pie chart is not shown for withdrawals.", file=sys.stderr)
        else:
            print(f"  → {path}", file=sys.stderr)
    except ExportError as e:
        print(f"  {e}", file=sys.stderr)
        status = 1

    print("Done", file=sys.stderr)
    return status


if __name__ == "__main__":
    sys.exit(main())
