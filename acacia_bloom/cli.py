"""
Command-line front end: forecast a product from a JSON inputs file.

Usage:
    acacia-bloom inputs.json                      # 30-day forecast from today
    acacia-bloom inputs.json --days 14 --today 2026-07-01
    acacia-bloom inputs.json --settings settings.json --output result.json

The inputs file holds one payload object or a list of them (one forecast
per product).  Exit codes: 0 ok, 2 invalid input, 1 I/O failure.
"""

from datetime import date
from pathlib import Path
from typing import List, Optional
import argparse
import json
import logging
import sys

from .config import DEFAULT_FORECAST_DAYS, load_settings
from .engine import AcaciaBloomEngine
from .payloads import forecast_result_to_dict, forecasting_inputs_from_dict
from .utils.error_formatting import ErrorFormatter
from .utils.logging_config import setup_logging
from .utils.paths import get_default_settings_path

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_IO_ERROR = 1
EXIT_INVALID_INPUT = 2


def _iso_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid date '{value}', expected YYYY-MM-DD") from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="acacia-bloom",
        description="Acacia Bloom demand forecast for Kenyan marketplace products",
    )
    parser.add_argument("inputs", type=Path, help="JSON file with forecasting inputs")
    parser.add_argument("--days", type=int, default=DEFAULT_FORECAST_DAYS,
                        help=f"Forecast horizon in days (default: {DEFAULT_FORECAST_DAYS})")
    parser.add_argument("--today", type=_iso_date, default=None,
                        help="Forecast start date YYYY-MM-DD (default: today)")
    parser.add_argument("--settings", type=Path, default=None,
                        help="settings.json with engine overrides (default: <project>/settings.json if present)")
    parser.add_argument("--output", type=Path, default=None,
                        help="Write the result JSON here instead of stdout")
    parser.add_argument("--log-dir", type=Path, default=None,
                        help="Directory for log files (default: <project>/logs)")
    parser.add_argument("--verbose", action="store_true",
                        help="Log per-stage DEBUG traces and include technical details in error messages")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_dir, verbose=args.verbose)

    try:
        with open(args.inputs, 'r', encoding='utf-8') as f:
            payload = json.load(f)
    except json.JSONDecodeError as exc:
        error = ErrorFormatter.format_payload_error(exc, str(args.inputs))
        logger.warning(error.format_for_log())
        print(error.format_for_display(args.verbose), file=sys.stderr)
        return EXIT_INVALID_INPUT
    except OSError as exc:
        error = ErrorFormatter.format_io_error(exc, str(args.inputs), "read")
        logger.error(error.format_for_log())
        print(error.format_for_display(args.verbose), file=sys.stderr)
        return EXIT_IO_ERROR

    single = isinstance(payload, dict)
    payloads = [payload] if single else payload

    try:
        inputs_list = [forecasting_inputs_from_dict(p) for p in payloads]
    except (KeyError, TypeError, AttributeError) as exc:
        error = ErrorFormatter.format_payload_error(exc, str(args.inputs))
        logger.warning(error.format_for_log())
        print(error.format_for_display(args.verbose), file=sys.stderr)
        return EXIT_INVALID_INPUT
    except ValueError as exc:
        error = ErrorFormatter.format_validation_error(exc, "parse inputs", {"File": str(args.inputs)})
        logger.warning(error.format_for_log())
        print(error.format_for_display(args.verbose), file=sys.stderr)
        return EXIT_INVALID_INPUT

    try:
        settings_path = args.settings if args.settings is not None else get_default_settings_path()
        engine = AcaciaBloomEngine(load_settings(settings_path))
        results = [engine.generate_forecast(inputs, args.days, args.today) for inputs in inputs_list]
    except ValueError as exc:
        error = ErrorFormatter.format_validation_error(exc, "forecast", {"Days": args.days})
        logger.warning(error.format_for_log())
        print(error.format_for_display(args.verbose), file=sys.stderr)
        return EXIT_INVALID_INPUT

    documents = [
        {"productId": inputs.product_id, **forecast_result_to_dict(result)}
        for inputs, result in zip(inputs_list, results)
    ]
    text = json.dumps(documents[0] if single else documents, indent=2)

    if args.output is None:
        print(text)
        return EXIT_OK

    try:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(text + "\n", encoding='utf-8')
    except OSError as exc:
        error = ErrorFormatter.format_io_error(exc, str(args.output), "write")
        logger.error(error.format_for_log())
        print(error.format_for_display(args.verbose), file=sys.stderr)
        return EXIT_IO_ERROR

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
