"""
Configuration constants and environment setup.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# =============================================================================
# PATHS
# =============================================================================

PROJECT_ROOT = Path(__file__).parent.parent.parent
DB_PATH = PROJECT_ROOT / "data" / "db" / "boba-dashboard.db"
OUTPUT_DIR = PROJECT_ROOT / "output"
COOLDOWN_FILE = PROJECT_ROOT / "data" / "cooldowns.json"

# =============================================================================
# UPSTREAM RECORD STORE (Airbridge over the spreadsheet base)
# =============================================================================

AIRBRIDGE_API_KEY = os.environ.get("AIRBRIDGE_API_KEY", "")
AIRBRIDGE_BASE_URL = os.environ.get(
    "AIRBRIDGE_BASE_URL", "https://airbridge.hackclub.com/v0.2"
).rstrip("/")
AIRBRIDGE_BASE_NAME = os.environ.get("AIRBRIDGE_BASE_NAME", "Boba Club Dashboard")

EVENT_CODES_TABLE = "Event Codes"
WEBSITES_TABLE = "Websites"

EVENT_FIELDS = ["Event Code", "Status", "Organizer Name", "Slack ID"]
SUBMISSION_FIELDS = [
    "Email",
    "Name",
    "Status",
    "Event Code",
    "Playable URL",
    "Decision Reason (to email)",
]

UPSTREAM_TIMEOUT_SECONDS = float(os.environ.get("UPSTREAM_TIMEOUT_SECONDS", "8"))

# =============================================================================
# IDENTITY / ACCESS
# =============================================================================

IDENTITY_URL = os.environ.get("IDENTITY_URL", "https://auth.hackclub.com/api/v1/me")

# Slack IDs allowed to see every event (comma separated)
ADMIN_SLACK_IDS = frozenset(
    slack_id.strip()
    for slack_id in os.environ.get("ADMIN_SLACK_IDS", "").split(",")
    if slack_id.strip()
)

# =============================================================================
# NOTIFICATIONS
# =============================================================================

SLACK_WEBHOOK_URL = os.environ.get("SLACK_WEBHOOK_URL", "")

# =============================================================================
# GRANT POLICY
# =============================================================================

GRANT_PER_APPROVAL = 5  # dollars per approved submission
MIN_APPROVED_FOR_GRANT = 3
MAX_APPROVED_COUNT = 10000
MAX_GRANT_AMOUNT = 100000
GRANT_COOLDOWN_HOURS = 24
COOLDOWN_KEY_PREFIX = "grant-request-"


# Maximum lengths for free text forwarded to the notification channel
MAX_EVENT_CODE_LENGTH = 100
MAX_NAME_LENGTH = 200
MAX_EMAIL_LENGTH = 200
MAX_ADDITIONAL_INFO_LENGTH = 1000

# =============================================================================
# DASHBOARD
# =============================================================================

PAGE_SIZE = 10
CSV_HEADERS = ["Name", "Email", "Status", "Website", "Decision Reason"]

# =============================================================================
# API CONFIGURATION
# =============================================================================

API_HOST = os.environ.get("API_HOST", "0.0.0.0")
API_PORT = int(os.environ.get("API_PORT", "8000"))
API_DEBUG = os.environ.get("API_DEBUG", "false").lower() == "true"
REQUEST_LOG_ENABLED = os.environ.get("REQUEST_LOG_ENABLED", "true").lower() == "true"
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
API_VERSION = "1.0.0"
