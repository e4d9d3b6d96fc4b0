"""TOML config loader with CLI > config > default resolution."""

import argparse
import sys
import tomllib
from decimal import Decimal, InvalidOperation
from pathlib import Path

from investment_calc.currency import Currency, get_currency
from investment_calc.params import (
    CompoundingFrequency,
    ContributionTiming,
    InvalidParameter,
    InvestmentParameters,
    validate_params,
)

DEFAULT_CONFIG_PATH = Path("config.toml")

DEFAULTS = {
    "starting_amount": "20000",
    "years": 10,
    "rate": "7",
    "compounding": "Monthly",
    "contribution": "12000",
    "contributions_per_year": 12,
    "timing": "beginning",
    "currency": "USD",
}

# Numeric keys parsed as Decimal (TOML floats are read through str())
_DECIMAL_KEYS = ("starting_amount", "rate", "contribution")
_INT_KEYS = ("years", "contributions_per_year")


def load_config(path: Path | None = None) -> dict:
    """Load TOML config file. Returns empty dict if file doesn't exist."""
    if path is None:
        path = DEFAULT_CONFIG_PATH
    if not path.exists():
        return {}
    try:
        with open(path, "rb") as f:
            raw = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        print(f"Failed to read config file: {path}: {e}", file=sys.stderr)
        raise SystemExit(1)
    # Long key names (annual_rate, annual_contribution) are aliases
    if "annual_rate" in raw and "rate" not in raw:
        raw["rate"] = raw.pop("annual_rate")
    if "annual_contribution" in raw and "contribution" not in raw:
        raw["contribution"] = raw.pop("annual_contribution")
    # Normalize timing: TOML bool (contribute at beginning) → string
    if isinstance(raw.get("timing"), bool):
        raw["timing"] = "beginning" if raw["timing"] else "end"
    return raw


def create_parser(description: str) -> argparse.ArgumentParser:
    """Create argparse parser with shared projection flags."""
    d = DEFAULTS
    frequencies = ", ".join(f.label for f in CompoundingFrequency)
    currencies = ", ".join(c.option_label for c in Currency)
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument("--config", type=Path, default=None, help="Config file path (default: config.toml)")
    parser.add_argument("--starting-amount", type=str, default=None, help=f"Starting amount (default: {d['starting_amount']})")
    parser.add_argument("--years", type=str, default=None, help=f"Investment period in years, 1-100 (default: {d['years']})")
    parser.add_argument("--rate", type=str, default=None, help=f"Annual return rate in percent, may be negative (default: {d['rate']})")
    parser.add_argument("--compounding", type=str, default=None, help=f"Compounding frequency: {frequencies} (default: {d['compounding']})")
    parser.add_argument("--contribution", type=str, default=None, help=f"Annual contribution, negative for withdrawals (default: {d['contribution']})")
    parser.add_argument("--contributions-per-year", type=str, default=None, help=f"Contribution events per year, 0-365 (default: {d['contributions_per_year']})")
    parser.add_argument("--timing", type=str, default=None, help=f"Contribution timing: beginning or end of period (default: {d['timing']})")
    parser.add_argument("--currency", type=str, default=None, help=f"Display currency: {currencies} (default: {d['currency']})")
    return parser


def resolve(args: argparse.Namespace, config: dict) -> dict:
    """Resolve values with priority: CLI flag > config.toml > hardcoded default."""
    resolved = {}
    for key, default in DEFAULTS.items():
        cli_val = getattr(args, key, None)
        resolved[key] = cli_val if cli_val is not None else config.get(key, default)
    return resolved


def _parse_decimal(key: str, value) -> Decimal:
    if isinstance(value, bool):
        raise InvalidParameter(f"Please enter valid numbers for all fields: {key}={value!r}")
    try:
        return Decimal(str(value).strip())
    except InvalidOperation:
        raise InvalidParameter(f"Please enter valid numbers for all fields: {key}={value!r}") from None


def _parse_int(key: str, value) -> int:
    if isinstance(value, bool):
        raise InvalidParameter(f"Please enter valid numbers for all fields: {key}={value!r}")
    try:
        return int(str(value).strip())
    except ValueError:
        raise InvalidParameter(f"Please enter valid numbers for all fields: {key}={value!r}") from None


def build_params(r: dict) -> InvestmentParameters:
    """Build InvestmentParameters from resolved config dict.

    Raises InvalidParameter with a human-readable message for missing,
    malformed or out-of-range values. Nothing is computed on failure.
    """
    missing = [k for k in (*_DECIMAL_KEYS, *_INT_KEYS) if str(r.get(k, "")).strip() == ""]
    if missing:
        raise InvalidParameter(f"Please fill in all required fields: {', '.join(missing)}")

    decimals = {k: _parse_decimal(k, r[k]) for k in _DECIMAL_KEYS}
    ints = {k: _parse_int(k, r[k]) for k in _INT_KEYS}
    if not all(v.is_finite() for v in decimals.values()):
        raise InvalidParameter("Please enter valid numbers for all fields: values must be finite")

    params = InvestmentParameters(
        starting_amount=decimals["starting_amount"],
        years=ints["years"],
        annual_rate=decimals["rate"],
        compounding=CompoundingFrequency.parse(r["compounding"]),
        annual_contribution=decimals["contribution"],
        contributions_per_year=ints["contributions_per_year"],
        timing=ContributionTiming.parse(r["timing"]),
    )
    errors = validate_params(params)
    if errors:
        raise InvalidParameter("\n".join(errors))
    return params


def resolve_namespace(
    parser: argparse.ArgumentParser, args: argparse.Namespace,
) -> tuple[dict, InvestmentParameters, Currency, argparse.Namespace]:
    """Load config, resolve values and build parameters.

    Returns (resolved_dict, params, currency, namespace). Invalid input exits
    through parser.error with the validation message.
    """
    config = load_config(args.config)
    r = resolve(args, config)
    try:
        params = build_params(r)
    except InvalidParameter as e:
        parser.error(str(e))
    return r, params, get_currency(r["currency"]), args
