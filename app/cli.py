"""
quincena-plan — command-line front end for the planner.

  quincena-plan init     [--plan PATH]                write the default plan file
  quincena-plan validate [--plan PATH | --token T]    check a plan without running it
  quincena-plan run      [--plan PATH | --token T] [--periods N] [--csv PATH] [--ledger]
  quincena-plan share    [--plan PATH]                print a compact share token
"""

from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

from core.config import LOG_LEVEL, PLAN_FILE
from core.defaults import default_plan
from core.exceptions import ConfigurationError
from core.log import setup_logging
from data_prep.persistence import Plan, decode_share_token, encode_share_token, load_plan, save_plan
from data_prep.validators import validate_configuration
from engine.runner import run_projection
from reports.aggregator import export_csv
from reports.summary import plan_summary

EXIT_INVALID = 2


def _load(args: argparse.Namespace) -> Plan:
    if getattr(args, "token", None):
        return decode_share_token(args.token)
    return load_plan(args.plan)


def _cmd_init(args: argparse.Namespace) -> int:
    target = Path(args.plan)
    if target.exists() and not args.force:
        print(f"{target} already exists (use --force to overwrite).")
        return 1
    config, projection = default_plan()
    save_plan(config, projection, target)
    print(f"Wrote default plan to {target}")
    return 0


def _cmd_validate(args: argparse.Namespace) -> int:
    config, projection = _load(args)
    result = validate_configuration(config, projection)
    print(result.summary())
    return 0 if result.is_valid else EXIT_INVALID


def _cmd_run(args: argparse.Namespace) -> int:
    config, projection = _load(args)
    if args.periods is not None:
        projection = replace(projection, n_periods=args.periods)

    try:
        periods = run_projection(config, projection)
    except ConfigurationError as exc:
        print("Plan is invalid:")
        for message in exc.errors:
            print(f"  ✗ {message}")
        return EXIT_INVALID

    if args.ledger:
        for p in periods:
            print(f"\n{p.label}  (ending cash {p.ending_cash_balance:,}, debt {p.total_debt:,})")
            for t in p.transactions:
                flag = " !" if t.is_critical else ""
                print(f"  {t.kind.value:<16} {t.label:<32} {t.amount:>14,}{flag}")
        print()

    print(plan_summary(periods).to_dataframe().to_string(index=False))

    if args.csv:
        export_csv(periods, args.csv)
        print(f"\nExported {sum(len(p.transactions) for p in periods)} transactions to {args.csv}")
    return 0


def _cmd_share(args: argparse.Namespace) -> int:
    config, projection = _load(args)
    print(encode_share_token(config, projection))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="quincena-plan", description="Quincena debt and savings planner")
    parser.add_argument("--log-level", default=LOG_LEVEL)
    parser.add_argument("--json-logs", action="store_true", help="emit logs as JSON lines")
    sub = parser.add_subparsers(dest="command", required=True)

    def _with_source(p: argparse.ArgumentParser, token: bool = True) -> None:
        p.add_argument("--plan", type=Path, default=PLAN_FILE, help="plan JSON file")
        if token:
            p.add_argument("--token", help="share token (takes precedence over --plan)")

    p_init = sub.add_parser("init", help="write the default plan")
    _with_source(p_init, token=False)
    p_init.add_argument("--force", action="store_true")
    p_init.set_defaults(func=_cmd_init)

    p_validate = sub.add_parser("validate", help="validate a plan")
    _with_source(p_validate)
    p_validate.set_defaults(func=_cmd_validate)

    p_run = sub.add_parser("run", help="run the projection")
    _with_source(p_run)
    p_run.add_argument("--periods", type=int, help="override the number of quincenas")
    p_run.add_argument("--csv", type=Path, help="write the flat transaction export here")
    p_run.add_argument("--ledger", action="store_true", help="print every period's transactions")
    p_run.set_defaults(func=_cmd_run)

    p_share = sub.add_parser("share", help="print a share token for a plan")
    _with_source(p_share, token=False)
    p_share.set_defaults(func=_cmd_share)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level, json_format=args.json_logs)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
