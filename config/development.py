import os
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# memory | json | mysql
STORE_BACKEND = os.getenv("STORE_BACKEND", "json")
LEDGER_PATH = os.getenv("LEDGER_PATH", str(ROOT / "data" / "attendance.json"))

EVENTS_PATH = os.getenv("EVENTS_PATH", str(ROOT / "data" / "events.json"))
MEMBERS_PATH = os.getenv("MEMBERS_PATH", str(ROOT / "data" / "members.json"))
BADGE_CATALOG_PATH = os.getenv("BADGE_CATALOG_PATH", str(ROOT / "data" / "badges.json"))

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "event_checkin"),
}

# Event used when a scanned pass carries no event id; unset means such scans are refused.
DEFAULT_EVENT_ID = int(os.environ["DEFAULT_EVENT_ID"]) if os.getenv("DEFAULT_EVENT_ID") else None

SCAN_INTERVAL_SECONDS = float(os.getenv("SCAN_INTERVAL_SECONDS", "0.2"))
STORAGE_RETRY_ATTEMPTS = int(os.getenv("STORAGE_RETRY_ATTEMPTS", "3"))

# If enabled (mysql backend only), app will apply database/schema.sql on startup
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
