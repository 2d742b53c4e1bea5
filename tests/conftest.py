"""Test configuration shared by the whole suite."""

import os

# Must be set before the application modules load their configuration
os.environ.setdefault("APP_ENVIRONMENT", "test")
os.environ.setdefault("ADMIN_SECURE_COOKIES", "false")

from tests.fixtures import *  # noqa: E402,F401,F403
