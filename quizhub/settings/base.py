"""
Základní nastavení společné pro všechna prostředí.

Hodnoty, které se liší podle nasazení, se čtou z proměnných prostředí.
Pokud existuje lokální soubor ``.env``, načte se jako první.
"""
import os
from pathlib import Path

from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent.parent.parent

load_dotenv(BASE_DIR / ".env")


# Definice aplikací

INSTALLED_APPS = [
    "core",
    "accounts",
    "quiz",
    "contact",
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    "django.contrib.sites",
    "django.contrib.sitemaps",
    "allauth",
    "allauth.account",
    "allauth.socialaccount",
    "allauth.socialaccount.providers.google",
    "allauth.socialaccount.providers.github",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
    "allauth.account.middleware.AccountMiddleware",
    # Musí být za AuthenticationMiddleware, na odpovědi sladí cookie
    # s nápovědou přihlášení s request.user
    "core.middleware.RouteGuardMiddleware",
]

ROOT_URLCONF = "quizhub.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [BASE_DIR / "templates"],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.debug",
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
                "core.context_processors.site",
            ],
        },
    },
]

WSGI_APPLICATION = "quizhub.wsgi.application"

SITE_ID = 1


# Databáze

DATABASES = {
    "default": {
        "ENGINE": os.environ.get("DATABASE_ENGINE", "django.db.backends.sqlite3"),
        "NAME": os.environ.get("DATABASE_NAME", str(BASE_DIR / "db.sqlite3")),
        "USER": os.environ.get("DATABASE_USER", ""),
        "PASSWORD": os.environ.get("DATABASE_PASSWORD", ""),
        "HOST": os.environ.get("DATABASE_HOST", ""),
        "PORT": os.environ.get("DATABASE_PORT", ""),
    }
}

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"


# Přihlášení (django-allauth, pouze OAuth poskytovatelé)

AUTHENTICATION_BACKENDS = [
    "django.contrib.auth.backends.ModelBackend",
    "allauth.account.auth_backends.AuthenticationBackend",
]

AUTH_PASSWORD_VALIDATORS = [
    {"NAME": "django.contrib.auth.password_validation.UserAttributeSimilarityValidator"},
    {"NAME": "django.contrib.auth.password_validation.MinimumLengthValidator"},
    {"NAME": "django.contrib.auth.password_validation.CommonPasswordValidator"},
    {"NAME": "django.contrib.auth.password_validation.NumericPasswordValidator"},
]

LOGIN_URL = "/accounts/login/"
LOGIN_REDIRECT_URL = "/dashboard/"
ACCOUNT_LOGOUT_REDIRECT_URL = "/"

ACCOUNT_LOGIN_METHODS = {"email"}
ACCOUNT_SIGNUP_FIELDS = ["email*"]
ACCOUNT_EMAIL_VERIFICATION = "none"
SOCIALACCOUNT_ONLY = True
SOCIALACCOUNT_LOGIN_ON_GET = True
# Přihlášení přes druhého poskytovatele se stejným ověřeným e-mailem se
# propojí s existujícím uživatelem, nevznikne duplicitní účet
SOCIALACCOUNT_EMAIL_AUTHENTICATION = True
SOCIALACCOUNT_EMAIL_AUTHENTICATION_AUTO_CONNECT = True

SOCIALACCOUNT_PROVIDERS = {}
if os.environ.get("AUTH_GOOGLE_ID") and os.environ.get("AUTH_GOOGLE_SECRET"):
    SOCIALACCOUNT_PROVIDERS["google"] = {
        "APPS": [{
            "client_id": os.environ["AUTH_GOOGLE_ID"],
            "secret": os.environ["AUTH_GOOGLE_SECRET"],
            "key": "",
        }],
        "SCOPE": ["profile", "email"],
    }
if os.environ.get("AUTH_GITHUB_ID") and os.environ.get("AUTH_GITHUB_SECRET"):
    SOCIALACCOUNT_PROVIDERS["github"] = {
        "APPS": [{
            "client_id": os.environ["AUTH_GITHUB_ID"],
            "secret": os.environ["AUTH_GITHUB_SECRET"],
            "key": "",
        }],
        "SCOPE": ["user:email"],
    }

# Cookie, kterou hledá strážce cest. Znamená jen "nejspíš přihlášen",
# view funkce stále kontrolují request.user
SESSION_HINT_COOKIE_NAME = "quizhub_signed_in"


# Konfigurace webu (načte se jednou do core.config.SiteConfig)

APP_URL = os.environ.get("APP_URL", "")
ADMIN_EMAILS = os.environ.get("ADMIN_EMAILS", "")

RATE_LIMITS = {
    "api": (100, 60_000),
    "auth": (10, 60_000),
    "create": (20, 60_000),
    "score": (30, 60_000),
    "search": (60, 60_000),
    "contact": (5, 60_000),
}
RATE_LIMIT_MAX_KEYS = 10_000
RATE_LIMIT_SWEEP_INTERVAL_MS = 60_000


# Internacionalizace

LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True


# Statické soubory a nahrané soubory

STATIC_URL = "/static/"
STATIC_ROOT = BASE_DIR / "staticfiles"

MEDIA_URL = "/media/"
MEDIA_ROOT = BASE_DIR / "media"

STORAGES = {
    "default": {
        "BACKEND": "django.core.files.storage.FileSystemStorage",
    },
    "staticfiles": {
        "BACKEND": "django.contrib.staticfiles.storage.StaticFilesStorage",
    },
}

# Větší avatary formulář nastavení odmítne
AVATAR_MAX_BYTES = 2 * 1024 * 1024


# Logování

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "verbose": {
            "format": "{asctime} {levelname} {name} {message}",
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
        "django": {"handlers": ["console"], "level": "INFO", "propagate": False},
        "core": {"handlers": ["console"], "level": "INFO", "propagate": False},
        "quiz": {"handlers": ["console"], "level": "INFO", "propagate": False},
        "accounts": {"handlers": ["console"], "level": "INFO", "propagate": False},
        "contact": {"handlers": ["console"], "level": "INFO", "propagate": False},
    },
}
