"""
WSGI konfigurace pro QuizHub.

WSGI je standardní rozhraní mezi webovým serverem (např. Gunicorn) a Django
aplikací. V produkci se server nasměruje na ``application``.
"""
import os
from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "quizhub.settings.production")

application = get_wsgi_application()
