#!/usr/bin/env python3
"""
Request the boba grant for an event from the command line.

Checks eligibility first, sends the request to Slack, then starts the local
24h cooldown for the event.

Usage:
    uv run python src/scripts/request_grant.py <event_code> --name "Ada Lovelace" --email ada@example.com
"""

import argparse
import asyncio
import sys
from datetime import datetime, timezone
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.config import COOLDOWN_FILE, SLACK_WEBHOOK_URL
from core.errors import DashboardError
from models.records import PaymentMethod
from services.cooldown import CooldownStore, JsonFileCooldownStore
from services.dashboard import load_event_view
from services.grants import submit_grant_request


async def main():
    parser = argparse.ArgumentParser(description="Request the boba grant for an event")
    parser.add_argument("event_code", help="Event code, e.g. ABC123")
    parser.add_argument("--name", required=True, help="Organizer name")
    parser.add_argument("--email", required=True, help="Organizer email")
    parser.add_argument(
        "--payment-method",
        default=PaymentMethod.REIMBURSEMENT.value,
        choices=[method.value for method in PaymentMethod],
    )
    parser.add_argument("--info", default="", help="Additional info for the grant team")
    parser.add_argument("--cooldown-file", type=Path, default=COOLDOWN_FILE)

    args = parser.parse_args()

    store: CooldownStore = JsonFileCooldownStore(args.cooldown_file)
    now = datetime.now(timezone.utc)
    result = await load_event_view(args.event_code, marker=store.get(args.event_code), now=now)
    if not result.ok:
        print(f"\nError ({result.error.value}): {result.message}")
        sys.exit(1)

    eligibility = result.data.eligibility
    if not eligibility.enabled:
        print(f"\nGrant not available: {eligibility.reason_label}")
        sys.exit(1)

    payload = {
        "eventCode": args.event_code,
        "organizerName": args.name,
        "organizerEmail": args.email,
        "amount": eligibility.amount,
        "approvedCount": eligibility.approved_count,
        "paymentMethod": args.payment_method,
        "additionalInfo": args.info,
    }

    try:
        submission = await submit_grant_request(payload, SLACK_WEBHOOK_URL, now=now)
    except DashboardError as e:
        print(f"\nError: {e.message}")
        for detail in e.details:
            print(f"  - {detail}")
        sys.exit(1)

    store.record(args.event_code, submission.requested_at)
    print(f"\n{submission.message} (${eligibility.amount} for {eligibility.approved_count} approved)")


if __name__ == "__main__":
    asyncio.run(main())
