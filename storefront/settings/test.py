"""
Django Test Settings
Settings used by pytest and the Django test runner
"""

import os

os.environ.setdefault("DJANGO_SECRET_KEY", "test-secret-key-not-for-production")

from storefront.settings.base import *  # noqa: F401, F403, E402
from storefront.settings.components.logging import get_logging_config  # noqa: E402

# ==========================================================================
# Test Mode Flag
# ==========================================================================

TESTING = True
DEBUG = True

# ==========================================================================
# Database (SQLite - no server needed for the suite)
# ==========================================================================

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

# ==========================================================================
# Cache (Dummy - caching disabled in tests)
# ==========================================================================

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.dummy.DummyCache",
    }
}

# ==========================================================================
# Rate Limiting - effectively disabled
# ==========================================================================

REST_FRAMEWORK["DEFAULT_THROTTLE_RATES"] = {  # noqa: F405
    "login": "1000/min",
    "register": "1000/hour",
    "order_create": "1000/min",
    "shipping_quote": "1000/min",
    "contact": "1000/hour",
    "anon_global": "10000/hour",
    "user_global": "10000/hour",
}

# ==========================================================================
# Logging (quiet, console only)
# ==========================================================================

LOGGING = get_logging_config(debug=False, log_to_file=False)

# ==========================================================================
# Password Hashing (fast hasher for test speed)
# ==========================================================================

PASSWORD_HASHERS = [
    "django.contrib.auth.hashers.MD5PasswordHasher",
]
