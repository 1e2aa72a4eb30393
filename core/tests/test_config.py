from types import SimpleNamespace

from django.test import SimpleTestCase

from core.config import RateLimitRule, SiteConfig, get_site_config


def fake_settings(**overrides):
    values = {"ADMIN_EMAILS": "", "APP_URL": "", "RATE_LIMITS": {"contact": (5, 60_000)}}
    values.update(overrides)
    return SimpleNamespace(**values)


class SiteConfigTests(SimpleTestCase):
    def test_admin_emails_are_trimmed_and_case_insensitive(self):
        config = SiteConfig.from_settings(fake_settings(ADMIN_EMAILS=" Boss@Example.com, ,ops@example.com "))
        self.assertEqual(config.admin_emails, frozenset({"boss@example.com", "ops@example.com"}))
        self.assertTrue(config.is_admin_email("BOSS@example.com"))
        self.assertFalse(config.is_admin_email("someone@example.com"))
        self.assertFalse(config.is_admin_email(None))

    def test_empty_allowlist(self):
        self.assertEqual(SiteConfig.from_settings(fake_settings()).admin_emails, frozenset())

    def test_rate_limit_presets(self):
        config = SiteConfig.from_settings(fake_settings(APP_URL="https://quiz.example.com/"))
        self.assertEqual(config.rate_limit("contact"), RateLimitRule(max_requests=5, window_ms=60_000))
        self.assertEqual(config.app_url, "https://quiz.example.com")

    def test_loaded_once_at_startup(self):
        config = get_site_config()
        self.assertIs(config, get_site_config())
        self.assertTrue(config.is_admin_email("admin@example.com"))
