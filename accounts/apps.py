"""
Konfigurace aplikace ``accounts``.
"""
from django.apps import AppConfig


class AccountsConfig(AppConfig):
    """
    Konfigurace aplikace accounts.

    Načítá signály, které ke každému uživateli udržují jeho Profile.
    """
    default_auto_field = "django.db.models.BigAutoField"
    name = "accounts"

    def ready(self):
        from . import signals  # noqa: F401
