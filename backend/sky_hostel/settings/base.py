"""
Base Django settings for Sky Hostel project.

Contains all common settings used across all environments.
Environment-specific settings should override these in their respective files.
"""
import os
from pathlib import Path
from celery.schedules import crontab
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Project root directory (three levels up from this file)
BASE_DIR = Path(__file__).resolve().parent.parent.parent

# Security
SECRET_KEY = os.environ.get('SECRET_KEY')
if not SECRET_KEY:
    raise ValueError("SECRET_KEY environment variable is not set!")

# Core Django applications
DJANGO_APPS = [
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',
]

# Third-party applications
THIRD_PARTY_APPS = [
    'rest_framework',
    'corsheaders',
    'drf_spectacular',
]

# Project applications
LOCAL_APPS = [
    'apps.students',
    'apps.payments',
]

INSTALLED_APPS = DJANGO_APPS + THIRD_PARTY_APPS + LOCAL_APPS

# Middleware configuration
MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'corsheaders.middleware.CorsMiddleware',
    'sky_hostel.middleware.RequestLoggingMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

# URL configuration
ROOT_URLCONF = 'sky_hostel.urls'

# Template configuration
TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [BASE_DIR / 'templates'],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.debug',
                'django.template.context_processors.request',
                'django.contrib.auth.context_processors.auth',
                'django.contrib.messages.context_processors.messages',
            ],
        },
    },
]

# WSGI/ASGI configuration
WSGI_APPLICATION = 'sky_hostel.wsgi.application'
ASGI_APPLICATION = 'sky_hostel.asgi.application'

# Password validation
AUTH_PASSWORD_VALIDATORS = [
    {
        'NAME': 'django.contrib.auth.password_validation.UserAttributeSimilarityValidator',
    },
    {
        'NAME': 'django.contrib.auth.password_validation.MinimumLengthValidator',
    },
    {
        'NAME': 'django.contrib.auth.password_validation.CommonPasswordValidator',
    },
    {
        'NAME': 'django.contrib.auth.password_validation.NumericPasswordValidator',
    },
]

# Internationalization
LANGUAGE_CODE = 'en-us'
TIME_ZONE = 'Africa/Lagos'
USE_I18N = True
USE_TZ = True

# Static files configuration
STATIC_URL = '/static/'
STATIC_ROOT = BASE_DIR / 'staticfiles'
STATICFILES_DIRS = [
    BASE_DIR / 'static',
] if (BASE_DIR / 'static').exists() else []

# Primary key field configuration
DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

# Frontend URL (registration and payment pages)
FRONTEND_URL = os.getenv('FRONTEND_URL', 'http://localhost:3000')

# Django REST Framework configuration
REST_FRAMEWORK = {
    'DEFAULT_AUTHENTICATION_CLASSES': [
        'rest_framework.authentication.SessionAuthentication',
    ],
    'DEFAULT_PERMISSION_CLASSES': [
        'rest_framework.permissions.IsAdminUser',
    ],
    'DEFAULT_RENDERER_CLASSES': [
        'rest_framework.renderers.JSONRenderer',
        'rest_framework.renderers.BrowsableAPIRenderer',
    ],
    'DEFAULT_THROTTLE_CLASSES': [
        'rest_framework.throttling.AnonRateThrottle',
    ],
    'DEFAULT_THROTTLE_RATES': {
        'anon': '300/hour',
    },
    'DEFAULT_SCHEMA_CLASS': 'drf_spectacular.openapi.AutoSchema',
}

# drf-spectacular settings for API documentation
SPECTACULAR_SETTINGS = {
    'TITLE': 'Sky Hostel API',
    'DESCRIPTION': 'Student hostel registration and Remita fee payments',
    'VERSION': '1.0.0',
    'SERVE_INCLUDE_SCHEMA': False,
    'SWAGGER_UI_SETTINGS': {
        'deepLinking': True,
        'displayOperationId': True,
    },
    'COMPONENT_SPLIT_REQUEST': True,
    'SCHEMA_PATH_PREFIX': '/api/v1/',
}

# Remita Configuration
REMITA_API_BASE_URL = os.getenv(
    'REMITA_API_BASE_URL', 'https://remitademo.net')
REMITA_MERCHANT_ID = os.getenv('REMITA_MERCHANT_ID', '2547916')
REMITA_SERVICE_TYPE_ID = os.getenv('REMITA_SERVICE_TYPE_ID', '')
REMITA_API_KEY = os.getenv('REMITA_API_KEY', '')
REMITA_TIMEOUT = int(os.getenv('REMITA_TIMEOUT', 30))
REMITA_USE_MOCK = os.getenv('REMITA_USE_MOCK', 'False').lower() == 'true'

# Known test reference reported as paid when the gateway is unreachable
REMITA_TEST_FALLBACK_ENABLED = os.getenv(
    'REMITA_TEST_FALLBACK_ENABLED', 'False').lower() == 'true'
REMITA_TEST_FALLBACK_RRR = os.getenv('REMITA_TEST_FALLBACK_RRR', '290019681818')
REMITA_TEST_FALLBACK_MATRIC = os.getenv(
    'REMITA_TEST_FALLBACK_MATRIC', 'ABC/12345')

# Full hostel fee in Naira
HOSTEL_FEE_AMOUNT = int(os.getenv('HOSTEL_FEE_AMOUNT', 219000))

# Shared secret for the pending-payment sweep endpoint
CRON_SECRET = os.getenv('CRON_SECRET', '')

# Celery Configuration for Periodic Tasks
CELERY_BEAT_SCHEDULE = {
    'sweep-pending-payments-every-8-hours': {
        'task': 'sweep_pending_payments',
        'schedule': crontab(minute=0, hour='*/8'),  # Every 8 hours
    },
}

# Logging - console only; services attach structured context as record.context
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'verbose': {
            'format': '{levelname} {asctime} {name} {message}',
            'style': '{',
        },
        'simple': {
            'format': '{levelname} {message}',
            'style': '{',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'simple',
        },
    },
    'root': {
        'handlers': ['console'],
        'level': LOG_LEVEL,
    },
    'loggers': {
        name: {'handlers': ['console'], 'level': level, 'propagate': False}
        for name, level in (
            ('django', os.getenv('DJANGO_LOG_LEVEL', 'INFO')),
            ('apps', 'DEBUG'),
            ('sky_hostel', 'DEBUG'),
            ('sky_hostel.requests', 'INFO'),
            ('celery', 'INFO'),
            # Service loggers are named after their class
            ('PaymentService', LOG_LEVEL),
            ('RemitaGatewayClient', LOG_LEVEL),
            ('StudentRegistrationService', LOG_LEVEL),
        )
    },
}

# Request logging middleware
REQUEST_LOGGING_ENABLED = os.getenv(
    'REQUEST_LOGGING_ENABLED', 'False').lower() == 'true'
REQUEST_LOGGING_LEVEL = os.getenv('REQUEST_LOGGING_LEVEL', 'INFO')
