"""
Test settings - SQLite, eager Celery and a fixed Remita configuration.
"""
import os

os.environ.setdefault(
    'SECRET_KEY', 'test-secret-key-only-for-testing-do-not-use-in-production')

from .base import *  # noqa: E402,F401,F403

DEBUG = True

ALLOWED_HOSTS = ['testserver', 'localhost', '127.0.0.1']

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': BASE_DIR / 'test_db.sqlite3',
    }
}

AUTH_PASSWORD_VALIDATORS = []
PASSWORD_HASHERS = [
    'django.contrib.auth.hashers.MD5PasswordHasher',
]

STATICFILES_DIRS = []

CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
    }
}

CELERY_TASK_ALWAYS_EAGER = True
CELERY_TASK_EAGER_PROPAGATES = True

# JSON only, no throttling
REST_FRAMEWORK = {
    **REST_FRAMEWORK,
    'DEFAULT_RENDERER_CLASSES': [
        'rest_framework.renderers.JSONRenderer',
    ],
    'DEFAULT_THROTTLE_CLASSES': [],
}

# Remita (every test patches the HTTP layer or injects a fake gateway)
REMITA_API_BASE_URL = 'https://remita.test'
REMITA_MERCHANT_ID = '2547916'
REMITA_SERVICE_TYPE_ID = '4430731'
REMITA_API_KEY = 'test-api-key'
REMITA_TIMEOUT = 5
REMITA_USE_MOCK = False

REMITA_TEST_FALLBACK_ENABLED = False
REMITA_TEST_FALLBACK_RRR = '290019681818'
REMITA_TEST_FALLBACK_MATRIC = 'ABC/12345'

HOSTEL_FEE_AMOUNT = 219000

CRON_SECRET = 'test-cron-secret'

REQUEST_LOGGING_ENABLED = False

# Everything propagates to the root logger so caplog sees it
LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
        },
    },
    'loggers': {
        'django': {
            'handlers': ['console'],
            'level': 'WARNING',
        },
    },
}


class DisableMigrations:
    def __contains__(self, item):
        return True

    def __getitem__(self, item):
        return None


MIGRATION_MODULES = DisableMigrations()
