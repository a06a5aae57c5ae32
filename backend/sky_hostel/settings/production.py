"""
Production settings - used for deployment.
"""
import dj_database_url
import logging
from .base import *

logger = logging.getLogger(__name__)


def env_list(name):
    """Comma-separated environment variable as a list, blanks dropped."""
    return [item.strip() for item in os.environ.get(name, '').split(',') if item.strip()]


DEBUG = os.environ.get('DEBUG', 'False').lower() == 'true'

# e.g. "api.skyhostel.ng,skyhostel.onrender.com"
ALLOWED_HOSTS = env_list('ALLOWED_HOSTS')

# e.g. "https://skyhostel.ng"; empty blocks every browser origin
CORS_ALLOWED_ORIGINS = env_list('CORS_ALLOWED_ORIGINS')

for _name, _value in (('ALLOWED_HOSTS', ALLOWED_HOSTS),
                      ('CORS_ALLOWED_ORIGINS', CORS_ALLOWED_ORIGINS)):
    if not _value:
        logger.warning(f"{_name} is not set; matching requests will be rejected.")

DATABASES = {
    'default': dj_database_url.config(
        default=os.environ.get('DATABASE_URL'),
        conn_max_age=600,
        conn_health_checks=True,
    )
}

# TLS ends at the platform proxy
SECURE_SSL_REDIRECT = False
SECURE_PROXY_SSL_HEADER = ('HTTP_X_FORWARDED_PROTO', 'https')
SECURE_HSTS_SECONDS = 60 * 60 * 24 * 365
SECURE_HSTS_INCLUDE_SUBDOMAINS = True
SECURE_CONTENT_TYPE_NOSNIFF = True
SESSION_COOKIE_SECURE = True
CSRF_COOKIE_SECURE = True
X_FRAME_OPTIONS = 'DENY'

if not CRON_SECRET:
    logger.warning(
        "CRON_SECRET not set. The pending payment sweep endpoint will "
        "reject every request."
    )

if REMITA_TEST_FALLBACK_ENABLED:
    logger.warning(
        "REMITA_TEST_FALLBACK_ENABLED is on. The configured test reference "
        "will be reported as paid whenever Remita is unreachable."
    )

if not REMITA_API_KEY and not REMITA_USE_MOCK:
    logger.warning("REMITA_API_KEY not set. Reference generation will fail.")

# Static files served by WhiteNoise
MIDDLEWARE.insert(1, 'whitenoise.middleware.WhiteNoiseMiddleware')
STORAGES = {
    'default': {
        'BACKEND': 'django.core.files.storage.FileSystemStorage',
    },
    'staticfiles': {
        'BACKEND': 'whitenoise.storage.CompressedManifestStaticFilesStorage',
    },
}

LOGGING['formatters']['verbose']['format'] = '{levelname} {asctime} {name} {message}'
LOGGING['handlers']['console']['formatter'] = 'verbose'
for _logger in ('apps', 'sky_hostel', 'celery'):
    LOGGING['loggers'][_logger]['level'] = 'INFO'
LOGGING['loggers']['django.request'] = {
    'handlers': ['console'],
    'level': 'INFO',
    'propagate': False,
}

CELERY_BROKER_URL = os.environ.get('REDIS_URL')
CELERY_RESULT_BACKEND = os.environ.get('REDIS_URL')

# Sentry for error tracking
if os.environ.get('SENTRY_DSN'):
    import sentry_sdk
    from sentry_sdk.integrations.django import DjangoIntegration
    from sentry_sdk.integrations.celery import CeleryIntegration

    sentry_sdk.init(
        dsn=os.environ.get('SENTRY_DSN'),
        integrations=[DjangoIntegration(), CeleryIntegration()],
        traces_sample_rate=0.1,
        send_default_pii=False
    )
