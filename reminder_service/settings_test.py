"""Test-specific Django settings."""

from .settings import *

# Use SQLite for faster tests
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

# Disable debug for tests
DEBUG = False

# Use a simple password hasher for speed
PASSWORD_HASHERS = [
    "django.contrib.auth.hashers.MD5PasswordHasher",
]

# Use local cache for tests
CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
    }
}

# Deterministic local time for schedule computations
TIME_ZONE = "UTC"

JWT_SECRET = "test-jwt-secret-with-enough-length-for-hs256"

FRONTEND_BASE_URL = "https://app.example.com"

VAPID_PUBLIC_KEY = "test-vapid-public-key"
VAPID_PRIVATE_KEY = "test-vapid-private-key"
VAPID_CONTACT_EMAIL = "reminders@example.com"

REMINDERS = {
    "APP_URL": "https://app.example.com/",
    "MAILBOX_BACKEND": "local",
    "WORKER_RESYNC_SECONDS": 300,
    "INCOMPLETE_CHALLENGES_PROVIDER": "",
}

# Suppress logs during tests (only show CRITICAL errors)
LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "handlers": {
        "null": {
            "class": "logging.NullHandler",
        },
    },
    "root": {
        "handlers": ["null"],
        "level": "CRITICAL",
    },
    "loggers": {
        "django": {
            "handlers": ["null"],
            "level": "CRITICAL",
            "propagate": False,
        },
        "reminders": {
            "handlers": ["null"],
            "level": "CRITICAL",
            "propagate": False,
        },
    },
}

# Test-specific settings
TEST_MODE = True
