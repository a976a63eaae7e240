"""Command-line interface for the shift planner."""

import argparse
import logging
import sys
from typing import Optional

from shiftplanner.config import PlannerConfig, load_config
from shiftplanner.domain.directory import StaffDirectory
from shiftplanner.exceptions import ShiftPlannerError
from shiftplanner.importer import load_staff, sample_staff
from shiftplanner.output.pdf_generator import PDFGenerator
from shiftplanner.output.text_report import TextReportGenerator
from shiftplanner.scheduling.session import PlanningSession
from shiftplanner.validation.validator import ScheduleValidator

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_USAGE = 1
EXIT_DATA_ERROR = 2


def configure_logging(verbose: bool = False) -> None:
    """Set up root logging for command-line use."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )


def build_config(args: argparse.Namespace) -> PlannerConfig:
    """Combine the optional config file with command-line overrides."""
    config = load_config(args.config) if getattr(args, "config", None) else PlannerConfig()
    overrides = {}
    if getattr(args, "required", None) is not None:
        overrides["required_count"] = args.required
    if getattr(args, "alerts", None) is not None:
        overrides["alert_language"] = args.alerts
    if overrides:
        config = PlannerConfig.from_dict({**config.to_dict(), **overrides})
    return config


def print_validation(directory: StaffDirectory) -> bool:
    """Print directory validation results. Returns True when valid."""
    result = ScheduleValidator().validate_directory(directory)

    print(f"Staff records: {len(directory)} ({len(directory.names())} people)")
    span = directory.date_range()
    if span:
        print(f"Availability: {span[0]} to {span[1]}")

    if result.is_valid:
        print("Validation: PASSED")
    else:
        print(f"Validation: FAILED ({len(result.errors)} errors)")
        for error in result.errors[:5]:
            print(f"    - {error}")
        if len(result.errors) > 5:
            print(f"    ... and {len(result.errors) - 5} more errors")

    if result.warnings:
        print(f"Warnings ({len(result.warnings)}):")
        for warning in result.warnings[:5]:
            print(f"    - {warning}")
        if len(result.warnings) > 5:
            print(f"    ... and {len(result.warnings) - 5} more warnings")

    return result.is_valid


def run_plan(
    staff,
    config: PlannerConfig,
    text_path: Optional[str] = None,
    pdf_path: Optional[str] = None,
) -> int:
    """Generate a schedule for ``staff`` and emit the requested reports."""
    session = PlanningSession(
        required_count=config.required_count,
        alert_policy=config.alert_policy(),
    )
    directory = session.load_staff(staff)

    if not print_validation(directory):
        return EXIT_DATA_ERROR
    print()

    schedule = session.generate()

    report = TextReportGenerator(aggregator=session.aggregator)
    if text_path:
        report.generate(schedule, directory, text_path, config.include_dashboard)
        print(f"Text report written to {text_path}")
    else:
        print(report.generate_to_string(schedule, directory, config.include_dashboard))

    if pdf_path:
        unicode_font = config.alert_language != "en" or any(
            not m.name.isascii() or not m.skill.isascii() for m in directory
        )
        generator = PDFGenerator(
            margin=config.page_margin,
            unicode_font=unicode_font,
            aggregator=session.aggregator,
        )
        generator.generate(schedule, directory, pdf_path, config.include_dashboard)
        print(f"PDF written to {pdf_path}")

    return EXIT_OK


def _add_plan_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--required", "-r",
        type=int,
        help="Required staff per slot (default: 2, or the config file value)",
    )
    parser.add_argument(
        "--alerts", "-a",
        choices=["en", "ja"],
        help="Alert language (default: en)",
    )
    parser.add_argument(
        "--config",
        type=str,
        help="JSON config file",
    )
    parser.add_argument(
        "--text", "-t",
        type=str,
        help="Write the text report to this file instead of stdout",
    )
    parser.add_argument(
        "--pdf", "-o",
        type=str,
        help="Output PDF file path",
    )


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for CLI."""
    parser = argparse.ArgumentParser(
        description="Shift Planner - assign staff to time slots from availability lists",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s generate staff.csv              Plan from a CSV file, 2 per slot
  %(prog)s generate staff.xlsx -r 3        Plan from Excel, 3 per slot
  %(prog)s generate staff.csv -o plan.pdf  Also write a PDF

  %(prog)s sample                          Plan the built-in sample roster
  %(prog)s sample --alerts ja              Use Japanese alert wording

  %(prog)s validate staff.csv              Check a staff file without planning
        """,
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    generate_parser = subparsers.add_parser("generate", help="Generate a schedule from a staff file")
    generate_parser.add_argument("input", help="Staff list (.csv, .xlsx or .xls)")
    _add_plan_arguments(generate_parser)

    sample_parser = subparsers.add_parser("sample", help="Generate a schedule for the sample roster")
    _add_plan_arguments(sample_parser)

    validate_parser = subparsers.add_parser("validate", help="Validate a staff file")
    validate_parser.add_argument("input", help="Staff list (.csv, .xlsx or .xls)")

    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    if args.command is None:
        parser.print_help()
        return EXIT_USAGE

    try:
        if args.command == "validate":
            directory = StaffDirectory(load_staff(args.input))
            return EXIT_OK if print_validation(directory) else EXIT_DATA_ERROR

        config = build_config(args)
        if args.command == "generate":
            staff = load_staff(args.input)
            if not staff:
                print(f"No staff records found in {args.input}", file=sys.stderr)
                return EXIT_DATA_ERROR
        else:
            staff = sample_staff()
        return run_plan(staff, config, args.text, args.pdf)

    except (ShiftPlannerError, OSError, ValueError) as exc:
        logger.error("%s", exc)
        return EXIT_DATA_ERROR


if __name__ == "__main__":
    sys.exit(main())
