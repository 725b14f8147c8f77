"""
Logging Configuration
All logging settings live here.
"""

from pathlib import Path

# BASE_DIR mirrors base.py
BASE_DIR = Path(__file__).resolve().parent.parent.parent.parent


def get_logging_config(debug: bool = False, log_to_file: bool = True) -> dict:
    """
    Build the logging dict for the current environment.

    Args:
        debug: DEBUG mode
        log_to_file: also write order/shipping events to logs/orders.log
    """
    order_handlers = ["console", "file"] if log_to_file else ["console"]

    handlers = {
        "console": {
            "level": "DEBUG" if debug else "INFO",
            "class": "logging.StreamHandler",
            "formatter": "simple",
        },
    }
    if log_to_file:
        handlers["file"] = {
            "level": "INFO",
            "class": "logging.FileHandler",
            "filename": BASE_DIR / "logs" / "orders.log",
            "formatter": "verbose",
        }

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "verbose": {
                "format": "{levelname} {asctime} {module} {process:d} {thread:d} {message}",
                "style": "{",
            },
            "simple": {
                "format": "{levelname} {message}",
                "style": "{",
            },
        },
        "handlers": handlers,
        "loggers": {
            # 400/500 responses
            "django.request": {
                "handlers": ["console"],
                "level": "WARNING",
                "propagate": False,
            },
            "shop.views.order_views": {
                "handlers": order_handlers,
                "level": "DEBUG" if debug else "INFO",
                "propagate": False,
            },
            "shop.views.cart_views": {
                "handlers": ["console"],
                "level": "DEBUG" if debug else "INFO",
                "propagate": False,
            },
            "shop.services": {
                "handlers": order_handlers,
                "level": "DEBUG" if debug else "INFO",
                "propagate": False,
            },
        },
    }


def ensure_logs_dir() -> None:
    """Create the logs directory used by the file handler."""
    logs_dir = BASE_DIR / "logs"
    if not logs_dir.exists():
        logs_dir.mkdir(exist_ok=True)
