#!/usr/bin/env python3
# CLI entry point for Microstock Studio
# Validates metadata files and reports which records are ready for submission

import argparse
import json
import logging
import sys
from pathlib import Path

from microstock_studio.config import get_settings
from microstock_studio.logging_config import bind_source, configure_logging
from microstock_studio.metadata_loader import MetadataParseError, load_metadata_file
from microstock_studio.report import build_report_rows, format_result, write_report
from microstock_studio.state import MetadataRecord, ValidationResult
from microstock_studio.validators import MetadataValidator

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_BAD_INPUT = 2


def validate_records(
    records: list[MetadataRecord], validator: MetadataValidator | None = None
) -> list[ValidationResult]:
    """Validate every record, binding its source to log output."""
    validator = validator or MetadataValidator()
    results = []
    for record in records:
        with bind_source(record.source):
            result = validator.validate(record.metadata)
            if not result.passed:
                logger.info(
                    "Record blocked: %d error(s)",
                    len(result.errors),
                    extra={"score": result.score},
                )
        results.append(result)
    return results


def is_submittable(result: ValidationResult, strict: bool = False) -> bool:
    """Errors always block; with strict, warnings block too."""
    if strict:
        return result.passed and not result.warnings
    return result.passed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="microstock-validate",
        description="Microstock Studio - Validate image metadata for stock submission",
    )
    parser.add_argument(
        "paths",
        nargs="+",
        help="Metadata files (.json, .csv or .xlsx)",
    )
    parser.add_argument(
        "--report",
        type=str,
        help="Write a tabular report (.csv or .xlsx)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print results as a JSON array instead of text",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        default=None,
        help="Treat warnings as blocking (or set MICROSTOCK_STRICT)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: MICROSTOCK_LOG_LEVEL or INFO)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    args = build_parser().parse_args(argv)
    settings = get_settings()

    configure_logging(args.log_level or settings.log_level, json_format=settings.log_json)
    strict = settings.strict if args.strict is None else args.strict

    # Load all files first; any unreadable input aborts before validation
    records: list[MetadataRecord] = []
    for raw_path in args.paths:
        try:
            records.extend(load_metadata_file(Path(raw_path)))
        except (FileNotFoundError, MetadataParseError, ValueError) as e:
            print(f"Error: {e}", file=sys.stderr)
            return EXIT_BAD_INPUT

    if not records:
        print("Warning: No metadata records found", file=sys.stderr)

    results = validate_records(records)

    if args.json:
        payload = [
            {"source": record.source, **result.to_dict()}
            for record, result in zip(records, results)
        ]
        print(json.dumps(payload, indent=2))
    else:
        for record, result in zip(records, results):
            print(format_result(record.source, result))

    if args.report:
        try:
            write_report(build_report_rows(records, results), args.report)
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            return EXIT_BAD_INPUT

    failed = sum(1 for r in results if not is_submittable(r, strict))
    if not args.json:
        print("\n" + "=" * 50)
        print(f"Records: {len(results)}  Passed: {len(results) - failed}  Failed: {failed}")

    return EXIT_FAILED if failed else EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
