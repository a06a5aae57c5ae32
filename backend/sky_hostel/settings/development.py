"""
Development settings - used for local development.
"""
from .base import *

DEBUG = True

ALLOWED_HOSTS = ['localhost', '127.0.0.1', '.localhost']

# Local Postgres; DATABASE_URL is only read in production
DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.postgresql',
        'NAME': os.environ.get('DB_NAME', 'sky_hostel'),
        'USER': os.environ.get('DB_USER', 'sky_hostel_user'),
        'PASSWORD': os.environ.get('DB_PASSWORD', 'sky_hostel_pass'),
        'HOST': os.environ.get('DB_HOST', 'localhost'),
        'PORT': os.environ.get('DB_PORT', '5432'),
    }
}

# Registration and payment frontend
CORS_ALLOWED_ORIGINS = [FRONTEND_URL, "http://127.0.0.1:3000"]

# Without Remita credentials, issue mock references
REMITA_USE_MOCK = os.getenv(
    'REMITA_USE_MOCK', 'False' if REMITA_API_KEY else 'True').lower() == 'true'

# Sweep endpoint usable locally without exporting a secret
CRON_SECRET = CRON_SECRET or 'dev-cron-secret'

REQUEST_LOGGING_ENABLED = os.getenv(
    'REQUEST_LOGGING_ENABLED', 'True').lower() == 'true'

CELERY_BROKER_URL = os.environ.get('REDIS_URL', 'redis://localhost:6379/0')
CELERY_RESULT_BACKEND = CELERY_BROKER_URL
CELERY_TIMEZONE = TIME_ZONE
