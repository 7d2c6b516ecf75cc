#!/usr/bin/env python3
"""
Print an event's submissions and grant status, optionally exporting to CSV.

Usage:
    uv run python src/scripts/event_report.py <event_code> [--status Rejected] [--export out.csv]

Example:
    uv run python src/scripts/event_report.py ABC123 --query gmail --page 2
"""

import argparse
import asyncio
import sys
from datetime import datetime, timezone
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.config import COOLDOWN_FILE, OUTPUT_DIR
from models.records import StatusFilter
from services.cooldown import CooldownStore, JsonFileCooldownStore
from services.dashboard import FetchResult, load_event_view
from services.export import export_filename, submissions_to_csv


def print_view(result: FetchResult) -> None:
    view = result.data
    event = view.event
    print(f"Event Code: {event['code']} ({event['status']})")
    if event["organizer_name"]:
        print(f"Organizer: {event['organizer_name']}")
    print(", ".join(f"{name}: {count}" for name, count in view.counts.items()))
    print(
        f"\nShowing page {view.page} of {max(view.total_pages, 1)} "
        f"({view.total_matches} matching, filter={view.status_filter.value})"
    )
    print("=" * 80)

    if not view.rows:
        print("No records found.")
    for row in view.rows:
        print(f"{row['name']:<24} {row['email']:<32} {row['status']:<9} {row['website']}")
        if row["decision_reason"]:
            print(f"    Reason: {row['decision_reason']}")

    print("=" * 80)
    eligibility = view.eligibility
    state = "enabled" if eligibility.enabled else "disabled"
    print(
        f"Grant: {eligibility.reason_label} [{state}] - "
        f"{eligibility.approved_count} approved, ${eligibility.amount}"
    )


async def main():
    parser = argparse.ArgumentParser(
        description="Show an event's submissions and grant eligibility"
    )
    parser.add_argument("event_code", help="Event code, e.g. ABC123")
    parser.add_argument("--query", default="", help="Search name, email or website")
    parser.add_argument(
        "--status",
        default=StatusFilter.ALL.value,
        choices=[s.value for s in StatusFilter],
        help="Status filter",
    )
    parser.add_argument("--page", type=int, default=1, help="Page number (10 rows per page)")
    parser.add_argument(
        "--export",
        nargs="?",
        const="",
        type=str,
        help="Write the filtered rows to CSV (defaults to output/workshop-<code>-<date>.csv)",
    )
    parser.add_argument(
        "--cooldown-file",
        type=Path,
        default=COOLDOWN_FILE,
        help="Local grant cooldown store",
    )

    args = parser.parse_args()

    store: CooldownStore = JsonFileCooldownStore(args.cooldown_file)
    result = await load_event_view(
        args.event_code,
        query=args.query,
        status_filter=args.status,
        page=args.page,
        marker=store.get(args.event_code),
        now=datetime.now(timezone.utc),
    )

    if not result.ok:
        print(f"\nError ({result.error.value}): {result.message}")
        print("Retry: run the same command again once the problem is resolved.")
        sys.exit(1)

    print_view(result)

    if args.export is not None:
        if args.export:
            output_path = Path(args.export)
        else:
            filename = export_filename(args.event_code, datetime.now(timezone.utc).date())
            output_path = OUTPUT_DIR / filename
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(submissions_to_csv(result.data.filtered), encoding="utf-8")
        print(f"\nExported {len(result.data.filtered)} rows to {output_path}")


if __name__ == "__main__":
    asyncio.run(main())
