"""
Konfigurace aplikace ``core``.

Aplikace drží sdílené objekty procesu, na které spoléhají ostatní aplikace:
typovanou konfiguraci webu a rate limiter. Oba vznikají jednou při startu v
``ready()`` a získávají se přes ``core.config.get_site_config`` a
``core.ratelimit.get_rate_limiter``.
"""
from django.apps import AppConfig


class CoreConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "core"

    site_config = None
    rate_limiter = None

    def ready(self):
        from django.conf import settings

        from .config import SiteConfig
        from .ratelimit import FixedWindowRateLimiter

        self.site_config = SiteConfig.from_settings(settings)
        self.rate_limiter = FixedWindowRateLimiter(
            max_keys=settings.RATE_LIMIT_MAX_KEYS,
            sweep_interval_ms=settings.RATE_LIMIT_SWEEP_INTERVAL_MS,
        )
