import os

from .config import Config, build_logging

SECRET_KEY = Config.SECRET_KEY

DB_CONFIG = {
    "path": Config.DB_PATH,
    "busy_timeout_ms": Config.DB_BUSY_TIMEOUT_MS,
}

DEBUG = True

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = Config.AUTO_INIT_DB if "AUTO_INIT_DB" in os.environ else True
# Optional: also create the admin account on startup
AUTO_SEED_DB = Config.AUTO_SEED_DB if "AUTO_SEED_DB" in os.environ else True

SESSION_DAYS = Config.SESSION_DAYS
ADMIN_USERNAME = Config.ADMIN_USERNAME
ADMIN_PASSWORD = Config.ADMIN_PASSWORD

LOGGING = build_logging(Config.LOG_LEVEL)
