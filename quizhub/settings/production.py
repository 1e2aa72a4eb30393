"""
Produkční nastavení.

DEBUG je vypnutý, tajné klíče a povolené domény se berou z prostředí a
cookies se posílají jen přes HTTPS.
"""
from .base import *

DEBUG = False

SECRET_KEY = os.environ["DJANGO_SECRET_KEY"]

ALLOWED_HOSTS = [h.strip() for h in os.environ.get("DJANGO_ALLOWED_HOSTS", "").split(",") if h.strip()]
CSRF_TRUSTED_ORIGINS = [APP_URL] if APP_URL else []

SESSION_COOKIE_SECURE = True
CSRF_COOKIE_SECURE = True
SECURE_PROXY_SSL_HEADER = ("HTTP_X_FORWARDED_PROTO", "https")

# ManifestStaticFilesStorage přidává do názvů souborů hash obsahu,
# prohlížeč tak po nasazení nenačte starý JS/CSS z cache.
# Viz https://docs.djangoproject.com/en/5.0/ref/contrib/staticfiles/#manifeststaticfilesstorage
STORAGES["staticfiles"]["BACKEND"] = "django.contrib.staticfiles.storage.ManifestStaticFilesStorage"

# Načtení lokálních nastavení (pokud existují)
try:
    from .local import *
except ImportError:
    pass
