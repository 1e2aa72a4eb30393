"""
Vývojové nastavení pro Django aplikaci.

Používá se při vývoji na lokálním počítači. Bezpečnostní nastavení je
mírnější, aby byl vývoj jednodušší.
"""
from .base import *

# SECURITY WARNING: don't run with debug turned on in production!
# V DEBUG režimu se zobrazují detailní chybové stránky
DEBUG = True

# SECURITY WARNING: keep the secret key used in production secret!
# Výchozí klíč je pouze pro vývoj
SECRET_KEY = os.environ.get(
    "DJANGO_SECRET_KEY",
    "django-insecure-7q!v2m@x9k#e4w$z8r^t1y&u5i*o0p-quizhub-dev-only",
)

# SECURITY WARNING: define the correct hosts in production!
ALLOWED_HOSTS = ["*"]

# E-maily se pouze vypisují do konzole (neodesílají se)
EMAIL_BACKEND = "django.core.mail.backends.console.EmailBackend"

LOGGING["loggers"]["quiz"]["level"] = "DEBUG"
LOGGING["loggers"]["core"]["level"] = "DEBUG"

# Načtení lokálních nastavení (pokud existují)
try:
    from .local import *
except ImportError:
    pass
