from __future__ import annotations

import argparse
import asyncio
import getpass
import json
import sys
from pathlib import Path

from .config import ConfigError, load_config
from .error_mapper import error_message
from .exceptions import ApiError
from .logging_utils import configure_logging
from .models_reports import ReportFilters
from .session import ApiSession


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="academy-client", description="Academy dashboard API client")
    parser.add_argument("--env-file", help="Optional .env file to load before the environment")
    parser.add_argument("--log-level", default="WARNING")
    commands = parser.add_subparsers(dest="command", required=True)

    login = commands.add_parser("login", help="Sign in and store the session")
    login.add_argument("--username", required=True)
    login.add_argument("--password", help="Prompted when omitted")
    login.add_argument("--branch", help="Branch id; required when the username belongs to branches")

    commands.add_parser("logout", help="Forget the stored session")
    commands.add_parser("whoami", help="Show the stored session user")

    stats = commands.add_parser("stats", help="Print dashboard statistics")
    stats.add_argument("--branch", help="Branch id (super administrators only)")

    export = commands.add_parser("export", help="Download a report spreadsheet")
    export.add_argument(
        "--type",
        dest="report_type",
        default="comprehensive",
        choices=["comprehensive", "students", "courses", "financial", "attendance"],
    )
    export.add_argument("--out", default=".", help="Directory for the downloaded file")
    export.add_argument("--branch")
    export.add_argument("--start-date")
    export.add_argument("--end-date")
    export.add_argument("--period", choices=["monthly", "quarterly", "yearly"])
    return parser


def _emit(payload: object) -> None:
    print(json.dumps(payload, indent=2, default=str))


async def run_command(args: argparse.Namespace, api: ApiSession) -> int:
    if args.command == "logout":
        api.logout()
        _emit({"status": "signed_out"})
        return 0

    if args.command == "whoami":
        current = api.current
        if current is None:
            _emit({"status": "signed_out"})
            return 1
        _emit(current.user.model_dump(mode="json", by_alias=True))
        return 0

    if args.command == "login":
        password = args.password or getpass.getpass("Password: ")
        login = await api.auth_client().login(args.username, password, args.branch)
        session = api.establish(login)
        _emit({"status": "signed_in", "user": session.user.model_dump(mode="json", by_alias=True)})
        return 0

    if args.command == "stats":
        stats = await api.dashboard_client().stats(args.branch)
        _emit(stats.model_dump(mode="json", by_alias=True, exclude_none=True))
        return 0

    if args.command == "export":
        filters = ReportFilters(
            branch_id=args.branch,
            start_date=args.start_date,
            end_date=args.end_date,
            period=args.period,
        )
        downloaded = await api.reports_client().export(args.report_type, filters)
        target = downloaded.save(Path(args.out))
        _emit({"status": "exported", "path": str(target)})
        return 0

    raise ValueError(f"Unknown command: {args.command}")


async def _main(args: argparse.Namespace) -> int:
    config = load_config(args.env_file)
    async with ApiSession(config=config) as api:
        return await run_command(args, api)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)
    try:
        return asyncio.run(_main(args))
    except ConfigError as exc:
        print(json.dumps({"error": "ConfigError", "message": str(exc)}), file=sys.stderr)
        return 1
    except ApiError as exc:
        payload = {"error": type(exc).__name__, "message": error_message(exc), "status_code": exc.status_code}
        print(json.dumps(payload), file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
