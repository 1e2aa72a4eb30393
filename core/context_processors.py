"""Kontext šablon společný pro všechny stránky."""
from .config import get_site_config


def site(request):
    config = get_site_config()
    user = getattr(request, "user", None)
    is_admin = bool(user and user.is_authenticated and config.is_admin_email(user.email))
    return {
        "app_url": config.app_url,
        "is_site_admin": is_admin,
    }
