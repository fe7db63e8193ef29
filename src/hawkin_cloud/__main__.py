"""
Entry point for running hawkin_cloud as a module.

Usage:
    python -m hawkin_cloud login-check
    python -m hawkin_cloud build-db 2024-01-01 data/tests --format parquet
    python -m hawkin_cloud sync-db data/tests.parquet
    python -m hawkin_cloud force-time <test id> data/trial.csv
"""

import argparse
import sys

from hawkin_cloud.api.database import build_database, sync_database
from hawkin_cloud.api.forcetime import get_forcetime
from hawkin_cloud.api.storage import FileFormat
from hawkin_cloud.config import HawkinConfig
from hawkin_cloud.log import configure_logging
from hawkin_cloud.sdk.auth import login
from hawkin_cloud.sdk.client import HawkinClient
from hawkin_cloud.sdk.exceptions import HawkinError
from hawkin_cloud.utils import epoch_to_local


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hawkin-cloud",
        description="Hawkin Dynamics cloud client - export and sync force-plate tests",
    )
    parser.add_argument(
        "--env-file",
        default=None,
        help="Path to a .env file with HAWKIN_REFRESH_TOKEN (default: ./.env)"
    )
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("login-check", help="Verify the refresh token and show the token expiry")

    build = commands.add_parser("build-db", help="Export all tests since a date to a file")
    build.add_argument("start_date", help="First day to export, YYYY-MM-DD or epoch seconds")
    build.add_argument("output", help="Output path; the format's extension is added if missing")
    build.add_argument(
        "--format",
        default=FileFormat.CSV.value,
        choices=[f.value for f in FileFormat],
        help="File format (default: csv)"
    )
    build.add_argument("--test-type", default="all", help="Test type id, name or abbreviation (default: all)")
    build.add_argument("--include-inactive", action="store_true", help="Keep tests flagged inactive")
    build.add_argument("--window-days", type=int, default=None, help="Days per query window (default: 14)")

    sync = commands.add_parser("sync-db", help="Bring an existing database file up to date")
    sync.add_argument("path", help="Database file written by build-db")
    sync.add_argument("--new-path", default=None, help="Write the synced table here instead")
    sync.add_argument("--include-inactive", action="store_true", help="Keep tests flagged inactive")
    sync.add_argument(
        "--keep-all-columns",
        action="store_true",
        help="Keep metric columns found on only one side of the merge"
    )

    force = commands.add_parser("force-time", help="Save the force-time samples of one test as csv")
    force.add_argument("test_id", help="Test id")
    force.add_argument("output", help="Output csv path")
    force.add_argument("--test-type", default=None, help="Test type of the trial, if known")

    return parser


def run(args: argparse.Namespace, config: HawkinConfig) -> str:
    """Execute one subcommand and return the message to print."""
    client = HawkinClient()
    session = login(client, config.refresh_token, config.region)

    if args.command == "login-check":
        return f"Logged in to {session.base_url}; token expires at {epoch_to_local(session.expires_at)}"

    if args.command == "build-db":
        path = build_database(
            client,
            args.start_date if not args.start_date.isdigit() else int(args.start_date),
            args.output,
            test_type=args.test_type,
            include_inactive=args.include_inactive,
            file_format=args.format,
            window_days=args.window_days or config.window_days,
        )
        return f"Database written to {path}"

    if args.command == "sync-db":
        path = sync_database(
            client,
            args.path,
            include_inactive=args.include_inactive,
            new_path=args.new_path,
            keep_all_columns=args.keep_all_columns,
        )
        return f"Database synced to {path}"

    df = get_forcetime(client, args.test_id, test_type=args.test_type)
    df.to_csv(args.output, index=False)
    return f"{len(df)} samples written to {args.output}"


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = HawkinConfig.from_env(args.env_file)
        config.validate()
        configure_logging(
            output=config.log_output,
            stdout_level=config.log_level,
            log_file=config.log_file,
            file_level=config.log_level,
        )
        message = run(args, config)
    except HawkinError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(message)
    return 0


if __name__ == "__main__":
    sys.exit(main())
