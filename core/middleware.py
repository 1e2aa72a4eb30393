"""
Strážce cest.

Rychlý a přibližný filtr, který běží u každého požadavku na stránku ještě
před view:

- chráněná stránka bez cookie s nápovědou přihlášení -> přesměrování na
  přihlášení, původní cesta zůstane v ``?next=``,
- přihlašovací stránka s touto cookie -> přesměrování na nástěnku,
- všechno ostatní projde.

Strážce se dívá jen na to, jestli cookie *existuje*. Session nikdy
neověřuje. Rozhoduje ``request.user``, který kontroluje ``login_required``
(v API ``require_user``) v cílovém view. Podvržená nebo stará cookie tedy
návštěvníka dostane nejvýš k této kontrole.

Na odpovědi middleware sladí cookie s ``request.user``: nastaví ji, když je
uživatel přihlášený, a smaže, když není. Stará cookie tak stojí nejvýš
jedno přesměrování navíc.
"""
import re

from django.conf import settings
from django.contrib.auth import REDIRECT_FIELD_NAME
from django.http import HttpResponseRedirect
from django.urls import reverse
from django.utils.http import urlencode

# Vzory celé cesty; "[^/]+" odpovídá právě jednomu segmentu
PROTECTED_PATHS = [
    r"/quiz/[^/]+/play",
    r"/result/[^/]+",
    r"/create",
    r"/edit/[^/]+",
    r"/dashboard",
    r"/profile",
    r"/settings",
]

# Ukotveno na obou koncích, volitelné lomítko na konci kvůli Django URL
_PROTECTED_RE = [re.compile(rf"^{pattern}/?$") for pattern in PROTECTED_PATHS]

# Nikdy se nehlídá: API, statické soubory a SEO soubory
EXCLUDED_PREFIXES = ("/api/", "/static/", "/media/")
EXCLUDED_PATHS = ("/favicon.ico", "/sitemap.xml", "/robots.txt")


def is_protected(path: str) -> bool:
    return any(regex.match(path) for regex in _PROTECTED_RE)


def is_excluded(path: str) -> bool:
    return path.startswith(EXCLUDED_PREFIXES) or path in EXCLUDED_PATHS


def has_session_hint(request) -> bool:
    return bool(request.COOKIES.get(settings.SESSION_HINT_COOKIE_NAME))


class RouteGuardMiddleware:
    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        path = request.path_info
        if not is_excluded(path):
            redirect = self.guard(request, path)
            if redirect is not None:
                return redirect

        response = self.get_response(request)
        self.sync_session_hint(request, response)
        return response

    def guard(self, request, path):
        signed_in = has_session_hint(request)
        if is_protected(path) and not signed_in:
            query = urlencode({REDIRECT_FIELD_NAME: request.get_full_path()})
            return HttpResponseRedirect(f"{settings.LOGIN_URL}?{query}")
        if path == settings.LOGIN_URL and signed_in:
            return HttpResponseRedirect(reverse("dashboard"))
        return None

    def sync_session_hint(self, request, response):
        user = getattr(request, "user", None)
        authenticated = user is not None and user.is_authenticated
        name = settings.SESSION_HINT_COOKIE_NAME
        if authenticated and not has_session_hint(request):
            response.set_cookie(
                name,
                "1",
                max_age=settings.SESSION_COOKIE_AGE,
                secure=settings.SESSION_COOKIE_SECURE,
                httponly=True,
                samesite="Lax",
            )
        elif not authenticated and has_session_hint(request):
            response.delete_cookie(name, samesite="Lax")
