"""
Lesson planner command line.

Usage:
    lesson-planner new [--save]
    lesson-planner analyze (--text TEXT | --text-file FILE) [--plan-id ID] [--save]
    lesson-planner list
    lesson-planner show PLAN_ID
    lesson-planner export-pdf PLAN_ID [--output-dir DIR]
    lesson-planner export-csv [--output-dir DIR]

Examples:
    # Analyze pasted lesson text into a new plan and save it
    lesson-planner analyze --text-file lesson.txt --save

    # Fill the empty fields of a saved plan from more text
    lesson-planner analyze --plan-id plan-1709500000000 --text "الواجب: حل تمارين ص 20" --save

    # Export a saved plan to PDF
    lesson-planner export-pdf plan-1709500000000 --output-dir output/pdf
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from . import messages
from .models.lesson_plan import LessonPlan
from .models.result import Result
from .service import LessonPlannerService
from .utils.config import config
from .utils.di_container import DIContainer, configure_default_services


logger = logging.getLogger(__name__)


def parse_arguments(argv: Optional[List[str]] = None):
    """
    Parse command-line arguments.

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(
        prog="lesson-planner",
        description="Compose, analyze, save and export daily lesson plans",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )

    parser.add_argument(
        "--data-dir",
        type=Path,
        help="Directory for saved plans (overrides LESSON_PLANNER_DATA_DIR)"
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Logging level (default: LOG_LEVEL or INFO)"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    new_parser = subparsers.add_parser("new", help="Create a plan prefilled from the teacher profile")
    new_parser.add_argument("--save", action="store_true", help="Save the new plan")

    analyze_parser = subparsers.add_parser("analyze", help="Fill a plan from free lesson text")
    source = analyze_parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--text", help="Lesson text")
    source.add_argument("--text-file", type=Path, help="File containing the lesson text")
    analyze_parser.add_argument("--plan-id", help="Saved plan to fill (default: a new plan)")
    analyze_parser.add_argument("--save", action="store_true", help="Save the merged plan")

    subparsers.add_parser("list", help="List saved plans")

    show_parser = subparsers.add_parser("show", help="Print a saved plan as JSON")
    show_parser.add_argument("plan_id")

    pdf_parser = subparsers.add_parser("export-pdf", help="Export a saved plan to PDF")
    pdf_parser.add_argument("plan_id")
    pdf_parser.add_argument("--output-dir", type=Path, help="Output directory (default: OUTPUT_DIR/pdf)")

    csv_parser = subparsers.add_parser("export-csv", help="Export all saved plans to CSV")
    csv_parser.add_argument("--output-dir", type=Path, help="Output directory (default: OUTPUT_DIR/csv)")

    return parser.parse_args(argv)


def display_plans(plans: List[LessonPlan]):
    """Print a table of saved plans."""
    print("\n" + "=" * 70)
    print(f"SAVED LESSON PLANS ({len(plans)})")
    print("=" * 70)

    for idx, plan in enumerate(plans, 1):
        print(
            f"{idx:3d}. {plan.get('id', ''):20s} | {plan.get('date', ''):10s} | "
            f"{plan.get('subject', '') or '-'} | {plan.get('lesson_title', '') or '-'}"
        )

    print("=" * 70)


def display_plan(plan: LessonPlan):
    """Print a plan as JSON."""
    print(json.dumps(plan, ensure_ascii=False, indent=2))


def report(result: Result) -> int:
    """Print a result message and map it to an exit code."""
    if result.message:
        stream = sys.stdout if result.is_success else sys.stderr
        print(result.message, file=stream)
    return 0 if result.is_success else 1


def read_lesson_text(args) -> Result[str]:
    """Take the lesson text from --text, or read it from --text-file."""
    if args.text is not None:
        return Result.success(args.text)

    try:
        return Result.success(args.text_file.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Cannot read lesson text from {args.text_file}: {e}")
        return Result.failure(messages.TEXT_FILE_UNREADABLE, e)


def run_command(args, service: LessonPlannerService) -> int:
    """
    Execute the selected subcommand.

    Returns:
        Process exit code
    """
    if args.command == "new":
        plan = service.new_plan()
        display_plan(plan)
        return report(service.save(plan)) if args.save else 0

    if args.command == "analyze":
        text = read_lesson_text(args)
        if text.is_failure:
            return report(text)

        if args.plan_id:
            opened = service.open_plan(args.plan_id)
            if opened.is_failure:
                return report(opened)
            plan = opened.value
        else:
            plan = service.new_plan()

        analyzed = service.analyze(plan, text.value)
        if analyzed.is_failure:
            return report(analyzed)

        display_plan(analyzed.value)
        report(analyzed)
        return report(service.save(analyzed.value)) if args.save else 0

    if args.command == "list":
        listed = service.list_plans()
        if listed.is_failure:
            return report(listed)
        display_plans(listed.value)
        return 0

    if args.command == "show":
        opened = service.open_plan(args.plan_id)
        if opened.is_success:
            display_plan(opened.value)
        return report(opened)

    if args.command == "export-pdf":
        opened = service.open_plan(args.plan_id)
        if opened.is_failure:
            return report(opened)
        output_dir = args.output_dir or config.output_dir / "pdf"
        exported = service.export_pdf(opened.value, output_dir)
        if exported.is_success:
            print(exported.value)
        return report(exported)

    if args.command == "export-csv":
        output_dir = args.output_dir or config.output_dir / "csv"
        exported = service.export_csv(output_dir)
        if exported.is_success:
            print(exported.value)
        return report(exported)

    raise ValueError(f"Unknown command: {args.command}")


def main(argv: Optional[List[str]] = None) -> int:
    """
    Command line entry point.

    Returns:
        Process exit code
    """
    args = parse_arguments(argv)

    config.apply_overrides(data_dir=args.data_dir, log_level=args.log_level)

    try:
        config.validate()
    except ValueError as e:
        print(str(e), file=sys.stderr)
        return 2

    config.create_output_directories()

    container = DIContainer()
    configure_default_services(container, config)
    container.resolve(logging.Logger)

    service = container.resolve(LessonPlannerService)

    try:
        return run_command(args, service)
    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        return 130


if __name__ == "__main__":
    sys.exit(main())
