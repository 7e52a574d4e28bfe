#!/usr/bin/env python3
"""
Monthly tutoring report.

This script prints the monthly statistics of every student (or one
student) and the total salary owed for the month.

Usage:
    python run_report.py --month 2024-01 [--student ID] [--hide-values] [--export]

Examples:
    # Report for January 2024
    python run_report.py --month 2024-01

    # One student, amounts hidden
    python run_report.py --month 2024-01 --student std_3f9a1c2b7d4e --hide-values

    # Also write JSON and CSV reports to the output directory
    python run_report.py --month 2024-01 --export

    # Use another data file
    export EDU_DATA_FILE="backup/edu_tracking_data.json"
    python run_report.py --month 2024-01
"""

import sys
import argparse
import logging
from datetime import datetime
from pathlib import Path
from typing import List, Tuple

import pandas as pd

from edu_tracking.models.record import Student
from edu_tracking.models.stats import MonthlyStats
from edu_tracking.stats.aggregator import calculate_student_stats, calculate_total_salary
from edu_tracking.stats.insights import HomeworkAlert, homework_alerts
from edu_tracking.storage.profile_store import ProfileStore
from edu_tracking.utils.config import config
from edu_tracking.utils.file_utils import generate_filename, save_csv, save_json
from edu_tracking.utils.formatting import format_currency
from edu_tracking.utils.logger import setup_logger


def parse_arguments(argv=None):
    """
    Parse command-line arguments.

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(
        description="Monthly attendance, salary and homework report",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )

    parser.add_argument(
        "--month",
        default=datetime.now().strftime("%Y-%m"),
        help="Target month in YYYY-MM format (default: current month)"
    )

    parser.add_argument(
        "--data-file",
        type=Path,
        help="Student data file (overrides EDU_DATA_FILE env var)"
    )

    parser.add_argument(
        "--student",
        help="Only report the student with this id"
    )

    parser.add_argument(
        "--hide-values",
        action="store_true",
        help="Mask salary amounts in output and logs"
    )

    parser.add_argument(
        "--export",
        action="store_true",
        help="Write JSON and CSV reports to the output directory"
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Logging level (default: LOG_LEVEL env var)"
    )

    return parser.parse_args(argv)


def parse_target_month(month_str: str) -> tuple:
    """
    Parse month string to (year, month).

    Args:
        month_str: Month string in YYYY-MM format

    Returns:
        Tuple of (year, month)

    Raises:
        ValueError: If format is invalid
    """
    try:
        year, month = month_str.split("-")
        year = int(year)
        month = int(month)

        if not (1 <= month <= 12):
            raise ValueError("Month must be between 1 and 12")

        if year < 2000 or year > 2100:
            raise ValueError("Year must be between 2000 and 2100")

        return year, month

    except Exception as e:
        raise ValueError(f"Invalid month format '{month_str}': {e}")


def display_student(
    student: Student,
    stats: MonthlyStats,
    alerts: List[HomeworkAlert],
    hide_values: bool
):
    """
    Display the statistics of one student.

    Args:
        student: Student profile
        stats: Monthly statistics
        alerts: Homework alerts
        hide_values: Mask salary amounts
    """
    print("\n" + "=" * 60)
    print(f"{student.full_name} ({student.class_name}) [{student.id}]")
    print("=" * 60)
    print(f"Salary:                   {format_currency(stats.total_salary, hide=hide_values)}")
    print(f"  based on {stats.paid_sessions} sessions")
    print(
        f"Attendance:               {stats.active_count} / {stats.total_sessions} scheduled"
        f" ({stats.attendance_rate:.0%})"
    )
    print(
        f"  attended: {stats.attended_count}  makeup: {stats.makeup_count}"
        f"  absent: {stats.absent_count}"
    )
    print(
        f"Average knowledge:        {stats.avg_scores.knowledge:.2f}"
        f" ({stats.valid_knowledge_count} sessions)"
    )
    print(
        f"Average quantity:         {stats.avg_scores.quantity:.2f}"
        f" ({stats.valid_quantity_count} sessions)"
    )
    print(
        f"Average test score:       {stats.avg_scores.test:.2f}"
        f" ({stats.valid_test_count} tests)"
    )
    hw = stats.homework_counts
    print(
        f"Homework:                 satisfactory {hw.satisfactory}, "
        f"incomplete {hw.incomplete}, not done {hw.none}"
    )
    print(f"Formula tests passed:     {stats.formula_pass_count} / {stats.valid_formula_count}")
    print(
        f"Old lesson tests passed:  {stats.old_lesson_pass_count} / "
        f"{stats.valid_old_lesson_count}"
    )
    print(
        f"Homework assigned:        {stats.assigned_homework_count}, "
        f"not assigned: {stats.no_homework_count}"
    )

    for alert in alerts:
        print(f"! {alert.message}")


def build_report_rows(results: List[Tuple[Student, MonthlyStats]]) -> pd.DataFrame:
    """
    Flatten per-student statistics into one row per student.

    Args:
        results: (student, stats) pairs

    Returns:
        DataFrame with one row per student
    """
    rows = []
    for student, stats in results:
        row = {
            "student_id": student.id,
            "full_name": student.full_name,
            "class_name": student.class_name,
        }
        flat = stats.to_dict()
        for key in ("avg_scores", "homework_counts"):
            for sub_key, value in flat.pop(key).items():
                flat[f"{key}.{sub_key}"] = value
        row.update(flat)
        rows.append(row)

    return pd.DataFrame(rows)


def save_report(
    year: int,
    month: int,
    results: List[Tuple[Student, MonthlyStats]],
    total_salary: float,
    output_dir: Path
):
    """
    Save the monthly report as JSON and CSV.

    Args:
        year: Target year
        month: Target month
        results: (student, stats) pairs
        total_salary: Salary owed over all students
        output_dir: Directory receiving the reports
    """
    prefix = f"monthly_report_{year}{month:02d}"

    report = {
        "target_month": f"{year}-{month:02d}",
        "generated_at": datetime.now().isoformat(),
        "total_salary": total_salary,
        "students": [
            {
                "student_id": student.id,
                "full_name": student.full_name,
                "stats": stats.to_dict(),
            }
            for student, stats in results
        ],
    }

    json_path = output_dir / generate_filename(prefix, "json")
    if save_json(report, json_path):
        print(f"\nReport saved to: {json_path}")

    if results:
        csv_path = output_dir / generate_filename(prefix, "csv")
        if save_csv(build_report_rows(results), csv_path):
            print(f"Student statistics saved to: {csv_path}")


def main(argv=None):
    """Main execution function."""
    # Parse arguments
    args = parse_arguments(argv)

    hide_values = args.hide_values or config.hide_values

    # Setup logging
    logger = setup_logger(
        "edu_tracking",
        level=getattr(logging, args.log_level or config.log_level, logging.INFO),
        hide_values=hide_values
    )

    try:
        # Parse target month
        year, month = parse_target_month(args.month)
        logger.info(f"Target month: {year}-{month:02d}")

        # Validate configuration
        config.validate()

        store = ProfileStore(
            args.data_file or config.data_file,
            default_class_name=config.default_class_name,
            default_base_salary=config.default_base_salary
        )
        students = store.load()

        if args.student:
            students = [s for s in students if s.id == args.student]
            if not students:
                print(f"ERROR: Student not found: {args.student}")
                return 1

        if not students:
            print("\nNo students found.")
            logger.info("No students, exiting")
            return 0

        results = []
        for student in students:
            stats = calculate_student_stats(student, month, year)
            alerts = homework_alerts(
                student.history,
                stats,
                threshold=config.no_homework_threshold
            )
            display_student(student, stats, alerts, hide_values)
            results.append((student, stats))

        total_salary = calculate_total_salary(students, month, year)

        print("\n" + "=" * 60)
        print(
            f"TOTAL SALARY {month:02d}/{year}:  "
            f"{format_currency(total_salary, hide=hide_values)}"
        )
        print("=" * 60)
        logger.info(f"Reported {len(results)} students, salary: {total_salary}")

        if args.export:
            save_report(
                year,
                month,
                results,
                total_salary,
                config.output_dir / "reports"
            )

        return 0

    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        logger.info("Interrupted by user")
        return 130

    except Exception as e:
        logger.error(f"Unexpected error: {e}", exc_info=True)
        print(f"\nERROR: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
