import os


def _flag(name: str, default: str) -> bool:
    return os.environ.get(name, default).strip().lower() in {"1", "true", "yes", "on"}


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY") or "barber-school-dev-key"

    # SQLite file; the parent directory is created on first connect
    DB_PATH = os.environ.get("DB_PATH", "instance/barber_school.sqlite3")
    DB_BUSY_TIMEOUT_MS = int(os.environ.get("DB_BUSY_TIMEOUT_MS", "5000"))

    # Dev helpers
    AUTO_INIT_DB = _flag("AUTO_INIT_DB", "0")
    AUTO_SEED_DB = _flag("AUTO_SEED_DB", "0")

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
    SESSION_DAYS = int(os.environ.get("SESSION_DAYS", "7"))

    ADMIN_USERNAME = os.environ.get("ADMIN_USERNAME", "admin")
    ADMIN_PASSWORD = os.environ.get("ADMIN_PASSWORD", "admin123")


def build_logging(level: str, *, log_file: str = "") -> dict:
    handlers = {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "standard",
        },
    }
    if log_file:
        handlers["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "filename": log_file,
            "maxBytes": 1024 * 1024 * 5,
            "backupCount": 3,
            "formatter": "standard",
        }

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "format": "[%(asctime)s] %(levelname)s %(name)s: %(message)s",
            },
        },
        "handlers": handlers,
        "loggers": {
            "barber_school": {
                "handlers": list(handlers),
                "level": level,
                "propagate": False,
            },
            "werkzeug": {
                "handlers": ["console"],
                "level": "INFO",
            },
        },
    }
