"""
Role na kvízovém webu.

Existuje jediná vyšší role: administrátor webu, který spravuje zprávy z
kontaktního formuláře. Administrátor je přihlášený uživatel, jehož e-mail
je v seznamu ``ADMIN_EMAILS`` načteném při startu do ``SiteConfig``.
"""

from django.contrib.auth.models import User

from core.config import get_site_config
from core.exceptions import Forbidden, Unauthorized


def user_is_admin(user: User) -> bool:
    """
    Zkontroluje, zda je uživatel administrátor webu.

    Args:
        user: Django User objekt (může být anonymní)

    Returns:
        True, pokud je uživatel přihlášený a jeho e-mail je v seznamu.

    Note:
        Anonymní uživatel nikdy není administrátor.
    """
    if not user or not user.is_authenticated:
        return False
    return get_site_config().is_admin_email(user.email)


def require_admin(request):
    """Vrátí přihlášeného administrátora, jinak vyhodí 401 (anonym) nebo 403."""
    if not request.user.is_authenticated:
        raise Unauthorized()
    if not user_is_admin(request.user):
        raise Forbidden()
    return request.user
