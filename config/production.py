import os

from .config import Config, build_logging

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "path": Config.DB_PATH,
    "busy_timeout_ms": Config.DB_BUSY_TIMEOUT_MS,
}

DEBUG = False

AUTO_INIT_DB = Config.AUTO_INIT_DB
AUTO_SEED_DB = Config.AUTO_SEED_DB

SESSION_DAYS = Config.SESSION_DAYS
ADMIN_USERNAME = Config.ADMIN_USERNAME
ADMIN_PASSWORD = Config.ADMIN_PASSWORD

LOGGING = build_logging(Config.LOG_LEVEL, log_file=os.getenv("LOG_FILE", ""))
