SECRET_KEY = "test-secret"

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

STORE_BACKEND = "memory"
LEDGER_PATH = None

EVENTS_PATH = None
MEMBERS_PATH = None
BADGE_CATALOG_PATH = None

DB_CONFIG = {}

DEFAULT_EVENT_ID = None

SCAN_INTERVAL_SECONDS = 0.0
STORAGE_RETRY_ATTEMPTS = 1

AUTO_INIT_DB = False
