"""
Django settings for the exchange rates bot.
All deployment-specific values come from environment variables.
"""

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.getenv("DJANGO_SECRET_KEY", "insecure-dev-key-change-me")
DEBUG = os.getenv("DJANGO_DEBUG", "false").lower() == "true"
ALLOWED_HOSTS = [h for h in os.getenv("DJANGO_ALLOWED_HOSTS", "localhost,127.0.0.1,testserver").split(",") if h]

INSTALLED_APPS = [
    "rest_framework",
    "drf_spectacular",
    "apps.rates",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
]

ROOT_URLCONF = "core.urls"
WSGI_APPLICATION = "core.wsgi.application"

# The bot keeps no state of its own
DATABASES = {}

LANGUAGE_CODE = "en-us"
TIME_ZONE = "Europe/Moscow"
USE_I18N = False
USE_TZ = True

REST_FRAMEWORK = {
    "DEFAULT_SCHEMA_CLASS": "drf_spectacular.openapi.AutoSchema",
    "DEFAULT_AUTHENTICATION_CLASSES": [],
    "DEFAULT_PERMISSION_CLASSES": ["rest_framework.permissions.AllowAny"],
    "UNAUTHENTICATED_USER": None,
    "DEFAULT_RENDERER_CLASSES": ["rest_framework.renderers.JSONRenderer"],
}

SPECTACULAR_SETTINGS = {
    "TITLE": "Exchange Rates On Date bot",
    "DESCRIPTION": "Telegram webhook for historical exchange rate lookups",
    "VERSION": "1.0.0",
}

# Celery
CELERY_BROKER_URL = os.getenv("CELERY_BROKER_URL", "redis://localhost:6379/0")
CELERY_RESULT_BACKEND = os.getenv("CELERY_RESULT_BACKEND", CELERY_BROKER_URL)
CELERY_TASK_SERIALIZER = "json"
CELERY_RESULT_SERIALIZER = "json"
CELERY_ACCEPT_CONTENT = ["json"]
CELERY_TIMEZONE = TIME_ZONE

# Telegram
TELEGRAM_BOT_TOKEN = os.getenv("TELEGRAM_BOT_TOKEN", "")
TELEGRAM_API_URL = os.getenv("TELEGRAM_API_URL", "https://api.telegram.org")
TELEGRAM_WEBHOOK_SECRET = os.getenv("TELEGRAM_WEBHOOK_SECRET", "")

# Exchange rates
FREE_CURRENCY_API_KEY = os.getenv("FREE_CURRENCY_API_KEY", "")
FREE_CURRENCY_API_URL = os.getenv("FREE_CURRENCY_API_URL", "https://freecurrencyapi.net")
RATES_PROVIDER = os.getenv("RATES_PROVIDER", "free_currency_api")
RATES_BASE_CURRENCY = os.getenv("RATES_BASE_CURRENCY", "RUB")
RATES_EARLIEST_DATE = os.getenv("RATES_EARLIEST_DATE", "1999-01-01")
RATES_HTTP_TIMEOUT = float(os.getenv("RATES_HTTP_TIMEOUT", "10"))
# Process webhook updates in the request instead of dispatching a Celery task
RATES_BOT_PROCESS_INLINE = os.getenv("RATES_BOT_PROCESS_INLINE", "false").lower() == "true"

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "verbose": {
            "format": "{asctime} {levelname} {name}: {message}",
            "style": "{",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "verbose",
        },
    },
    "root": {
        "handlers": ["console"],
        "level": "WARNING",
    },
    "loggers": {
        "apps": {
            "level": os.getenv("RATES_LOG_LEVEL", "INFO"),
        },
    },
}
