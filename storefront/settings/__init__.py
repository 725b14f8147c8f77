"""
Django Settings Package
Loads the settings module that matches the DJANGO_ENV environment variable.

Usage:
- local development: DJANGO_ENV=local (default)
- production: DJANGO_ENV=production
- tests: DJANGO_ENV=test (selected automatically under pytest)

Example:
    # .env
    DJANGO_ENV=local

    # or on the command line
    DJANGO_ENV=production python manage.py runserver
"""

import os
import sys

# Detect pytest or the Django test runner
_is_testing = (
    "test" in sys.argv  # Django test
    or ("pytest" in sys.argv[0] if sys.argv else False)  # pytest
    or os.getenv("PYTEST_CURRENT_TEST") is not None  # running inside pytest
    or os.getenv("TESTING") == "True"  # manual override
)

# Precedence: tests > environment variable > default (local)
if _is_testing:
    _env = "test"
else:
    _env = os.environ.get("DJANGO_ENV", "local")

if _env == "production":
    from storefront.settings.production import *  # noqa: F401, F403
elif _env == "test":
    from storefront.settings.test import *  # noqa: F401, F403
else:
    from storefront.settings.local import *  # noqa: F401, F403
