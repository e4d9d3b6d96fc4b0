"""CLI entry point for a single projection (summary, schedules, exports)."""

import sys
from pathlib import Path

from investment_calc.config import create_parser, resolve_namespace
from investment_calc.export import ExportError, default_csv_name, export_schedule_csv
from investment_calc.params import InvalidParameter
from investment_calc.report import (
    DEFAULT_REPORT_FILENAME,
    format_annual_schedule,
    format_monthly_schedule,
    format_summary,
    save_report,
)
from investment_calc.session import Session


def _build_parser():
    parser = create_parser("Compound interest investment projection")
    parser.add_argument(
        "--schedule", choices=["none", "annual", "monthly", "both"], default="annual",
        help="Schedule table(s) printed after the summary (default: annual)",
    )
    parser.add_argument(
        "--csv", type=Path, nargs="?", const=Path(default_csv_name(False)), default=None,
        help="Export the annual schedule to CSV (default name: annual_schedule.csv)",
    )
    parser.add_argument(
        "--monthly-csv", type=Path, nargs="?", const=Path(default_csv_name(True)), default=None,
        help="Export the monthly schedule to CSV (default name: monthly_schedule.csv)",
    )
    parser.add_argument(
        "--report", type=Path, nargs="?", const=Path(DEFAULT_REPORT_FILENAME), default=None,
        help=f"Save the text report (default name: {DEFAULT_REPORT_FILENAME})",
    )
    parser.add_argument(
        "--append", action="store_true",
        help="Append to the report file instead of overwriting it",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    _, params, currency, args = resolve_namespace(parser, args)

    session = Session()
    session.select_currency(currency.code)
    try:
        result = session.calculate(params)
    except InvalidParameter as e:
        print(f"Error calculating investment: {e}", file=sys.stderr)
        return 1

    print("=" * 80)
    print(format_summary(result, session.currency))
    print("=" * 80)
    if args.schedule in ("annual", "both"):
        print()
        print("Annual Schedule")
        print(format_annual_schedule(result, session.currency), end="")
    if args.schedule in ("monthly", "both"):
        print()
        print("Monthly Schedule")
        print(format_monthly_schedule(result, session.currency), end="")

    # Export failures are reported and skipped; the projection stays valid.
    status = 0
    exports = [
        (args.csv, lambda p: export_schedule_csv(session.require_result(), p, monthly=False)),
        (args.monthly_csv, lambda p: export_schedule_csv(session.require_result(), p, monthly=True)),
        (args.report, lambda p: save_report(
            session.require_result(), p, currency=session.currency, append=args.append,
        )),
    ]
    for target, write in exports:
        if target is None:
            continue
        try:
            path = write(target)
            print(f"  → {path}", file=sys.stderr)
        except ExportError as e:
            print(f"  {e}", file=sys.stderr)
            status = 1
    return status


if __name__ == "__main__":
    sys.exit(main())
