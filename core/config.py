"""
Typovaná konfigurace webu.

Hodnoty z prostředí (seznam adminů, veřejná URL, limity požadavků) se
jednou načtou z Django settings do neměnného ``SiteConfig``. View funkce si
ho berou přes ``get_site_config()`` a samy settings ani prostředí nečtou.
"""
from dataclasses import dataclass, field

from django.apps import apps


@dataclass(frozen=True)
class RateLimitRule:
    max_requests: int
    window_ms: int


@dataclass(frozen=True)
class SiteConfig:
    admin_emails: frozenset = frozenset()
    app_url: str = ""
    rate_limits: dict = field(default_factory=dict)

    @classmethod
    def from_settings(cls, settings):
        """
        Sestaví konfiguraci z Django settings.

        ``ADMIN_EMAILS`` je řetězec oddělený čárkami; prázdné položky se
        zahodí a adresy se porovnávají bez ohledu na velikost písmen.
        """
        admin_emails = frozenset(
            email.strip().lower()
            for email in (settings.ADMIN_EMAILS or "").split(",")
            if email.strip()
        )
        rate_limits = {
            scope: RateLimitRule(max_requests=limit, window_ms=window)
            for scope, (limit, window) in settings.RATE_LIMITS.items()
        }
        return cls(
            admin_emails=admin_emails,
            app_url=(settings.APP_URL or "").rstrip("/"),
            rate_limits=rate_limits,
        )

    def is_admin_email(self, email) -> bool:
        if not email:
            return False
        return email.strip().lower() in self.admin_emails

    def rate_limit(self, scope) -> RateLimitRule:
        return self.rate_limits[scope]


def get_site_config() -> SiteConfig:
    return apps.get_app_config("core").site_config
