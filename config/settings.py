"""
Django settings for the Sativar project.

Every deployment-specific value comes from the environment.
"""
import os
from pathlib import Path

from .database import get_database_config
from .storage import get_storage_settings

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.getenv('SECRET_KEY', 'django-insecure-dev-key-change-me')
DEBUG = os.getenv('DEBUG', 'true').lower() == 'true'
ALLOWED_HOSTS = [h for h in os.getenv('ALLOWED_HOSTS', 'localhost,127.0.0.1,testserver').split(',') if h]

INSTALLED_APPS = [
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',
    'apps.core',
    'apps.identity',
    'apps.clients',
    'apps.plans',
    'apps.invoices',
    'apps.expenses',
    'apps.tasks',
    'apps.knowledge_base',
    'apps.company',
    'apps.notifications',
    'apps.dashboard',
    'apps.system',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ROOT_URLCONF = 'config.urls'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.request',
                'django.contrib.auth.context_processors.auth',
                'django.contrib.messages.context_processors.messages',
            ],
        },
    },
]

WSGI_APPLICATION = 'config.wsgi.application'
ASGI_APPLICATION = 'config.asgi.application'

DATABASES = {
    'default': get_database_config(BASE_DIR),
}

AUTH_USER_MODEL = 'identity.User'

AUTH_PASSWORD_VALIDATORS = [
    {'NAME': 'django.contrib.auth.password_validation.MinimumLengthValidator'},
]

LANGUAGE_CODE = 'en-us'
TIME_ZONE = os.getenv('TIME_ZONE', 'America/Sao_Paulo')
USE_I18N = True
USE_TZ = True

STATIC_URL = 'static/'
STATIC_ROOT = BASE_DIR / 'staticfiles'

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

# =============================================================================
# File storage (company logo)
# =============================================================================
globals().update(get_storage_settings(BASE_DIR))

# =============================================================================
# Session cookie (JWT)
# =============================================================================
SESSION_SECRET = os.getenv('SESSION_SECRET', SECRET_KEY)
SESSION_TOKEN_COOKIE = 'session'
SESSION_TOKEN_LIFETIME_HOURS = int(os.getenv('SESSION_TOKEN_LIFETIME_HOURS', '24'))

# =============================================================================
# Data provider used by read-side services (database | json)
# =============================================================================
DATA_PROVIDER = os.getenv('DATA_PROVIDER', 'database')
DATA_FILE_PATH = Path(os.getenv('DATA_FILE_PATH', str(BASE_DIR / 'data' / 'local_storage.json')))

# =============================================================================
# Plan renewal alerts
# =============================================================================
RENEWAL_LOOKAHEAD_DAYS = int(os.getenv('RENEWAL_LOOKAHEAD_DAYS', '5'))
# Alert on never-invoiced subscriptions whose activation date already passed
RENEWAL_ALERT_PAST_ACTIVATIONS = os.getenv('RENEWAL_ALERT_PAST_ACTIVATIONS', 'true').lower() == 'true'

# =============================================================================
# Background tasks
# =============================================================================
TASK_BACKEND = os.getenv('TASK_BACKEND', 'local')
CELERY_BROKER_URL = os.getenv('CELERY_BROKER_URL', 'redis://localhost:6379/0')
CELERY_RESULT_BACKEND = os.getenv('CELERY_RESULT_BACKEND', CELERY_BROKER_URL)
CELERY_TIMEZONE = TIME_ZONE

# =============================================================================
# Logging
# =============================================================================
LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'simple': {
            'format': '{asctime} {levelname} {name}: {message}',
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
        'level': os.getenv('LOG_LEVEL', 'INFO'),
    },
    'loggers': {
        'django.db.backends': {
            'level': 'WARNING',
        },
    },
}
