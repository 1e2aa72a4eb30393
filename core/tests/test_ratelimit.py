import threading

from django.http import HttpResponse
from django.test import RequestFactory, SimpleTestCase, TestCase

from core.exceptions import TooManyRequests
from core.ratelimit import FixedWindowRateLimiter, client_ip, enforce_rate_limit, get_rate_limiter, rate_limit


class FakeClock:
    def __init__(self, now=0):
        self.now = now

    def __call__(self):
        return self.now


class FixedWindowRateLimiterTests(SimpleTestCase):
    def setUp(self):
        self.clock = FakeClock()
        self.limiter = FixedWindowRateLimiter(clock=self.clock)
        self.factory = RequestFactory()

    def test_allows_up_to_the_limit_then_denies(self):
        results = [self.limiter.allow("k", 5, 60_000) for _ in range(6)]
        self.assertEqual(results, [True] * 5 + [False])

    def test_window_boundary_is_inclusive(self):
        for _ in range(6):
            self.limiter.allow("k", 5, 60_000)
        self.clock.now = 60_000
        self.assertFalse(self.limiter.allow("k", 5, 60_000))

    def test_new_window_starts_with_a_fresh_count(self):
        for _ in range(6):
            self.limiter.allow("k", 5, 60_000)
        self.clock.now = 60_001
        result = self.limiter.check("k", 5, 60_000)
        self.assertTrue(result.allowed)
        self.assertEqual(result.remaining, 4)

    def test_keys_are_independent(self):
        for _ in range(5):
            self.limiter.allow("a", 5, 60_000)
        self.assertFalse(self.limiter.allow("a", 5, 60_000))
        self.assertTrue(self.limiter.allow("b", 5, 60_000))

    def test_result_reports_reset_time(self):
        self.limiter.check("k", 1, 60_000)
        self.clock.now = 15_500
        result = self.limiter.check("k", 1, 60_000)
        self.assertFalse(result.allowed)
        self.assertEqual(result.remaining, 0)
        self.assertEqual(result.reset_after_ms, 44_500)
        self.assertEqual(result.retry_after, 45)
        self.assertEqual(result.headers()["X-RateLimit-Limit"], "1")

    def test_retry_after_is_at_least_one_second(self):
        self.limiter.check("k", 1, 1_000)
        self.clock.now = 1_000
        self.assertEqual(self.limiter.check("k", 1, 1_000).retry_after, 1)

    def test_sweep_drops_expired_windows(self):
        limiter = FixedWindowRateLimiter(clock=self.clock, sweep_interval_ms=1_000)
        limiter.allow("short", 5, 100)
        limiter.allow("long", 5, 60_000)
        self.clock.now = 2_000
        limiter.allow("other", 5, 60_000)
        self.assertEqual(len(limiter), 2)

    def test_decorator_counts_into_the_given_limiter(self):
        limiter = FixedWindowRateLimiter(clock=FakeClock())
        view = rate_limit("contact", limiter=limiter)(lambda request: HttpResponse("ok"))
        response = view(self.factory.post("/", REMOTE_ADDR="192.0.2.10"))
        self.assertEqual(response["X-RateLimit-Remaining"], "4")
        self.assertEqual(len(limiter), 1)
        self.assertEqual(len(get_rate_limiter()), 0)

    def test_sweep_waits_for_its_interval(self):
        limiter = FixedWindowRateLimiter(clock=self.clock, sweep_interval_ms=10_000)
        limiter.allow("short", 5, 100)
        self.clock.now = 5_000
        limiter.allow("other", 5, 60_000)
        self.assertEqual(len(limiter), 2)

    def test_max_keys_evicts_least_recently_used(self):
        limiter = FixedWindowRateLimiter(clock=self.clock, max_keys=2)
        limiter.allow("a", 5, 60_000)
        limiter.allow("b", 5, 60_000)
        limiter.allow("a", 5, 60_000)
        limiter.allow("c", 5, 60_000)
        self.assertEqual(len(limiter), 2)
        # "b" byl zahozen, počítá se znovu od začátku
        self.assertEqual(limiter.check("b", 5, 60_000).remaining, 4)

    def test_reset_and_clear(self):
        self.limiter.allow("a", 1, 60_000)
        self.limiter.allow("b", 1, 60_000)
        self.limiter.reset("a")
        self.assertTrue(self.limiter.allow("a", 1, 60_000))
        self.limiter.clear()
        self.assertEqual(len(self.limiter), 0)

    def test_rejects_non_positive_max_keys(self):
        with self.assertRaises(ValueError):
            FixedWindowRateLimiter(max_keys=0)

    def test_concurrent_requests_are_counted_exactly(self):
        limiter = FixedWindowRateLimiter(clock=self.clock)
        allowed = []
        lock = threading.Lock()

        def worker():
            for _ in range(50):
                ok = limiter.allow("shared", 300, 60_000)
                with lock:
                    allowed.append(ok)

        threads = [threading.Thread(target=worker) for _ in range(10)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        self.assertEqual(allowed.count(True), 300)
        self.assertEqual(allowed.count(False), 200)


class ClientIpTests(SimpleTestCase):
    def setUp(self):
        self.factory = RequestFactory()

    def test_prefers_first_forwarded_address(self):
        request = self.factory.get("/", HTTP_X_FORWARDED_FOR="203.0.113.7, 10.0.0.1", HTTP_X_REAL_IP="10.0.0.2")
        self.assertEqual(client_ip(request), "203.0.113.7")

    def test_falls_back_to_real_ip_then_remote_addr(self):
        self.assertEqual(client_ip(self.factory.get("/", HTTP_X_REAL_IP="198.51.100.4")), "198.51.100.4")
        self.assertEqual(client_ip(self.factory.get("/", REMOTE_ADDR="192.0.2.1")), "192.0.2.1")

    def test_unknown_without_any_address(self):
        request = self.factory.get("/")
        request.META.pop("REMOTE_ADDR", None)
        self.assertEqual(client_ip(request), "unknown")


class EnforceRateLimitTests(TestCase):
    def setUp(self):
        get_rate_limiter().clear()
        self.factory = RequestFactory()

    def test_raises_with_retry_guidance_over_the_limit(self):
        limiter = FixedWindowRateLimiter(clock=FakeClock())
        request = self.factory.post("/api/contacts/", REMOTE_ADDR="192.0.2.10")
        for _ in range(5):
            enforce_rate_limit(request, "contact", limiter)
        with self.assertRaises(TooManyRequests) as caught:
            enforce_rate_limit(request, "contact", limiter)
        self.assertEqual(caught.exception.retry_after, 60)

    def test_scopes_use_separate_keys(self):
        limiter = FixedWindowRateLimiter(clock=FakeClock())
        request = self.factory.post("/", REMOTE_ADDR="192.0.2.10")
        for _ in range(5):
            enforce_rate_limit(request, "contact", limiter)
        enforce_rate_limit(request, "create", limiter)
        self.assertEqual(len(limiter), 2)

    def test_unknown_scope_is_a_programming_error(self):
        with self.assertRaises(KeyError):
            enforce_rate_limit(self.factory.get("/"), "nope")
