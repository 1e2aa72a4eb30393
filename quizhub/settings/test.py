"""
Nastavení pro spouštění testů.

SQLite v paměti, rychlé hashování hesel a žádné přístupy k OAuth.
"""
from .base import *

DEBUG = False

SECRET_KEY = "quizhub-test-secret-key-not-for-production-use-0123456789"

ALLOWED_HOSTS = ["testserver", "localhost", "127.0.0.1"]

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

EMAIL_BACKEND = "django.core.mail.backends.locmem.EmailBackend"

ADMIN_EMAILS = "admin@example.com"

STORAGES["staticfiles"]["BACKEND"] = "django.contrib.staticfiles.storage.StaticFilesStorage"

LOGGING["loggers"]["core"]["level"] = "CRITICAL"
LOGGING["loggers"]["quiz"]["level"] = "CRITICAL"
LOGGING["loggers"]["contact"]["level"] = "CRITICAL"
LOGGING["loggers"]["accounts"]["level"] = "CRITICAL"
