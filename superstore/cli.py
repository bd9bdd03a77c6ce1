#!/usr/bin/env python3
"""
Superstore Analytics CLI — run catalog queries, export the full report, or serve the API.

USAGE:
  superstore list                                        # List available queries
  superstore query sales_by_subcategory                  # Print one query as a table
  superstore query month_over_month_growth --format json
  superstore query high_value_sales --threshold 2500
  superstore query summary_totals --period year --year 2014

  superstore all                                         # Workbook + JSON for every query
  superstore all --output ./out

  superstore serve --port 8000                           # Start API server

Inputs are discovered in the inbox folder (SUPERSTORE_DATA_DIR/inbox) or given
explicitly with --orders/--people/--returns.
"""
from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from datetime import datetime
from pathlib import Path

import pandas as pd

from superstore.config import INBOX_FOLDER, REPORTS_FOLDER
from superstore.data.store import DataStore
from superstore.data.schemas import PeriodFilter, PeriodType
from superstore.errors import SuperstoreError


def _build_period(args) -> PeriodFilter | None:
    """Build a PeriodFilter from CLI args."""
    pt = getattr(args, "period", None)
    region = getattr(args, "region", None)
    if pt is None:
        return PeriodFilter(PeriodType.ALL, region=region) if region else None
    try:
        return PeriodFilter(
            period_type=PeriodType(pt),
            year=getattr(args, "year", None),
            month=getattr(args, "month", None),
            quarter=getattr(args, "quarter", None),
            region=region,
        )
    except ValueError as exc:
        raise SuperstoreError(f"Invalid period: {exc}") from exc


def _load_store(args) -> DataStore:
    explicit = [args.orders, args.people, args.returns]
    if any(explicit):
        if not all(explicit):
            raise SuperstoreError("--orders, --people and --returns must be given together")
        return DataStore().load_files(Path(args.orders), Path(args.people), Path(args.returns))
    return DataStore().load(Path(args.inbox))


def _write_json(path: Path, data) -> None:
    """Write JSON to path, creating parent dirs."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        json.dump(data, f, indent=2, default=str)


def cmd_list(args):
    """List the query catalog."""
    from superstore.analytics.catalog import CATALOG

    print(f"\nQUERIES ({len(CATALOG)}):\n")
    for i, q in enumerate(CATALOG.values(), 1):
        print(f"{i:<4}{q.name:<30}{q.group:<10}{q.description}")
    print()


def cmd_query(args):
    """Run one query and print its result."""
    from superstore.analytics.catalog import get_query
    from superstore.reports.analysis_report import generate_query_json

    get_query(args.name)
    store = _load_store(args)
    period = _build_period(args)

    params = {}
    if args.threshold is not None:
        params["threshold"] = args.threshold
    if args.top is not None:
        params["top"] = args.top

    data = generate_query_json(store, args.name, period, **params)
    if args.format == "json":
        print(json.dumps(data, indent=2, default=str))
        return

    print(f"\n{args.name} — {data['description']}  |  {data['period_label']}  |  {data['row_count']:,} rows\n")
    with pd.option_context("display.max_rows", args.max_rows, "display.width", 160):
        print(pd.DataFrame(data["rows"], columns=data["columns"]).to_string(index=False))
    print()


def cmd_all(args):
    """Run every query and export a workbook plus JSON."""
    from superstore.reports.analysis_report import generate_excel, generate_json

    print("\n" + "=" * 70)
    print("  SUPERSTORE ANALYTICS — FULL REPORT")
    print("=" * 70)
    print(f"  Started: {datetime.now():%Y-%m-%d %H:%M:%S}")

    store = _load_store(args)
    period = _build_period(args)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    output_folder = Path(args.output) if args.output else REPORTS_FOLDER / timestamp
    output_folder.mkdir(parents=True, exist_ok=True)

    print(f"\n  Period: {store.date_range(period)}")
    print("  Generating reports...\n")

    generate_excel(store, output_folder / "Superstore_Analysis.xlsx", period)
    print("   Superstore_Analysis.xlsx")

    _write_json(output_folder / "superstore_analysis.json", generate_json(store, period))
    print("   superstore_analysis.json")

    ref = store.referential_report()
    if ref["orphaned_returns"]:
        print(f"\n  Note: {ref['orphaned_returns']} return(s) reference unknown orders")

    print(f"\n  Reports saved to: {output_folder}")
    print("=" * 70 + "\n")


def cmd_serve(args):
    """Start the API server."""
    import uvicorn
    print(f"\nStarting Superstore Analytics API on port {args.port}...")
    uvicorn.run("superstore.main:app", host="0.0.0.0", port=args.port, reload=args.reload,
                timeout_keep_alive=65)


def _add_input_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--inbox", default=str(INBOX_FOLDER), help="Folder holding the three input CSVs")
    p.add_argument("--orders", help="Orders CSV (overrides inbox discovery)")
    p.add_argument("--people", help="People CSV")
    p.add_argument("--returns", help="Returns CSV")


def _add_period_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--period", choices=["month", "quarter", "year"], help="Period type")
    p.add_argument("--year", type=int, help="Year")
    p.add_argument("--month", type=int, help="Month (1-12)")
    p.add_argument("--quarter", type=int, help="Quarter (1-4)")
    p.add_argument("--region", help="Restrict order lines to one region")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="superstore",
        description="Superstore Analytics — retail sales query engine",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Command")

    list_parser = subparsers.add_parser("list", help="List available queries")
    list_parser.set_defaults(func=cmd_list)

    query_parser = subparsers.add_parser("query", help="Run one query")
    query_parser.add_argument("name", help="Query name (see 'list')")
    query_parser.add_argument("--format", choices=["table", "json"], default="table")
    query_parser.add_argument("--threshold", type=float, help="Outlier threshold")
    query_parser.add_argument("--top", type=int, help="Row limit for top-N queries")
    query_parser.add_argument("--max-rows", type=int, default=60, help="Rows shown in table mode")
    _add_input_args(query_parser)
    _add_period_args(query_parser)
    query_parser.set_defaults(func=cmd_query)

    all_parser = subparsers.add_parser("all", help="Run every query and export")
    all_parser.add_argument("--output", help="Output directory (default: timestamped folder in reports)")
    _add_input_args(all_parser)
    _add_period_args(all_parser)
    all_parser.set_defaults(func=cmd_all)

    serve_parser = subparsers.add_parser("serve", help="Start API server")
    serve_parser.add_argument("--port", type=int, default=int(os.environ.get("PORT", "8000")), help="Port (default 8000)")
    serve_parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
    serve_parser.set_defaults(func=cmd_serve)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    if not args.command:
        parser.print_help()
        return 0

    try:
        args.func(args)
    except SuperstoreError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
