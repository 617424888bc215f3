import argparse
import logging
import os
import sys
from ministry_scheduler import utils
from ministry_scheduler.config import load_config
from ministry_scheduler.errors import StoreError
from ministry_scheduler.service_dates import plan_month
from ministry_scheduler.store import CsvStore
from ministry_scheduler.validation import FileValidationError


def make_store(args, config):
    if args.backend == "sheets":
        from ministry_scheduler.sheets_store import GoogleSheetsStore, open_spreadsheet

        return GoogleSheetsStore(open_spreadsheet(config), config)
    if not args.data_folder:
        raise StoreError("--data-folder (or DATA_FOLDER) is required for the csv backend")
    return CsvStore(args.data_folder, config)


def _target_month(args):
    year, month = plan_month()
    return args.year or year, args.month or month


def main():
    default_data_folder = os.getenv("DATA_FOLDER")

    parser = argparse.ArgumentParser(description="Music Ministry Scheduler CLI")
    parser.add_argument("--verbose", action="store_true", help="Enable verbose (DEBUG) logging")
    parser.add_argument("--config", type=str, default=None, help="Path to config JSON")
    parser.add_argument(
        "--backend",
        choices=["csv", "sheets"],
        default="csv",
        help="Where the roster and sheets live (default: csv)",
    )
    parser.add_argument(
        "--data-folder",
        type=str,
        default=default_data_folder,
        help="Folder holding the CSV sheets (csv backend)",
    )

    subparsers = parser.add_subparsers(dest="command")

    refresh_parser = subparsers.add_parser(
        "refresh", help="Rebuild the availability matrix from the roster"
    )
    refresh_parser.add_argument("--year", type=int, help="Year (default: next month's)")
    refresh_parser.add_argument("--month", type=int, choices=range(1, 13), help="Month 1-12")

    subparsers.add_parser(
        "apply-responses", help="Record form responses in the roster and refresh the matrix"
    )
    subparsers.add_parser(
        "setup-month", help="Set up next month's sheet and retire last month's"
    )
    subparsers.add_parser("report", help="Print next month's availability")
    subparsers.add_parser("names", help="Print roster names for the form dropdown")

    args = parser.parse_args()
    utils.setup_logging(verbose=args.verbose)

    try:
        config = load_config(args.config)
    except (FileNotFoundError, FileValidationError) as exc:
        logging.error(str(exc))
        sys.exit(1)

    year, month = plan_month()
    try:
        if args.command == "refresh":
            from ministry_scheduler.availability import refresh_matrix

            year, month = _target_month(args)
            store = make_store(args, config)
            ok = refresh_matrix(store, config, year, month)
        elif args.command == "apply-responses":
            from ministry_scheduler.submissions import apply_responses

            store = make_store(args, config)
            ok = apply_responses(store, config)
        elif args.command == "setup-month":
            from ministry_scheduler.monthly import form_date_choices, monthly_setup

            store = make_store(args, config)
            ok = monthly_setup(store, config)
            if ok:
                print("Form date choices:")
                for choice in form_date_choices(config, year, month):
                    print(f"  {choice}")
        elif args.command == "report":
            from ministry_scheduler.availability import run_availability_report

            store = make_store(args, config)
            ok = run_availability_report(store, config)
        elif args.command == "names":
            store = make_store(args, config)
            for name in store.roster_names():
                print(name)
            ok = True
        else:
            parser.print_help()
            ok = True
    except StoreError as exc:
        logging.error(str(exc))
        ok = False

    if not ok:
        sys.exit(1)


if __name__ == "__main__":
    main()
