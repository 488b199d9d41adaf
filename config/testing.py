import os

from .config import build_logging

SECRET_KEY = "test-secret"

# Connections are short-lived, so the test store must be a file (":memory:" would be empty each time)
DB_CONFIG = {
    "path": os.getenv("DB_PATH", "instance/barber_school_test.sqlite3"),
    "busy_timeout_ms": 1000,
}

DEBUG = False
TESTING = True

AUTO_INIT_DB = True
AUTO_SEED_DB = True

SESSION_DAYS = 1
ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "admin123"

LOGGING = build_logging("WARNING")
