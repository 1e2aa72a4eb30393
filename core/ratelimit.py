"""
Omezení počtu požadavků s pevným oknem.

Každý klíč (obvykle ``"<scope>:<ip klienta>"``) má svůj čítač a čas začátku
aktuálního okna. Okno trvá ``window_ms`` milisekund a po uplynutí se celé
vynuluje, takže klient může na hranici oken poslat až dvojnásobek limitu.
Tato nepřesnost je přijatelná.

Stav je jen v paměti procesu. Při N procesech aplikace je skutečný limit
``max_requests * N``.

Paměť je omezená dvěma způsoby:
- líný úklid zahodí všechna prošlá okna, nejvýše jednou za
  ``sweep_interval_ms``,
- ``max_keys`` omezuje počet klíčů; jako první se zahodí nejdéle nepoužitý.
"""
import logging
import math
import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from functools import wraps

from django.apps import apps

from .config import get_site_config
from .exceptions import TooManyRequests

logger = logging.getLogger(__name__)


def _monotonic_ms():
    return time.monotonic() * 1000


@dataclass
class _Window:
    count: int
    started_at: float
    window_ms: float

    def expired(self, now):
        return now > self.started_at + self.window_ms


@dataclass(frozen=True)
class RateLimitResult:
    allowed: bool
    limit: int
    remaining: int
    reset_after_ms: float

    @property
    def retry_after(self) -> int:
        """Celé sekundy do konce aktuálního okna (alespoň 1)."""
        return max(1, math.ceil(self.reset_after_ms / 1000))

    def headers(self):
        return {
            "X-RateLimit-Limit": str(self.limit),
            "X-RateLimit-Remaining": str(self.remaining),
            "X-RateLimit-Reset": str(self.retry_after),
        }


class FixedWindowRateLimiter:
    """
    Vláknově bezpečný čítač s pevným oknem pro libovolné řetězcové klíče.

    Args:
        clock: funkce vracející aktuální čas v milisekundách.
            Výchozí jsou monotónní hodiny; testy podstrčí vlastní.
        max_keys: maximální počet sledovaných klíčů.
        sweep_interval_ms: minimální doba mezi dvěma úklidy prošlých oken.
    """

    def __init__(self, clock=None, max_keys=10_000, sweep_interval_ms=60_000):
        if max_keys < 1:
            raise ValueError("max_keys must be at least 1")
        self._clock = clock or _monotonic_ms
        self._max_keys = max_keys
        self._sweep_interval_ms = sweep_interval_ms
        self._windows = OrderedDict()
        self._lock = threading.Lock()
        self._last_sweep = self._clock()

    def __len__(self):
        with self._lock:
            return len(self._windows)

    def allow(self, key, max_requests, window_ms) -> bool:
        """Započítá jeden požadavek pro ``key`` a vrátí, zda je v limitu."""
        return self.check(key, max_requests, window_ms).allowed

    def check(self, key, max_requests, window_ms) -> RateLimitResult:
        """
        Započítá jeden požadavek pro ``key`` a popíše výsledné okno.

        Chybějící nebo uplynulé okno (``now > started_at + window_ms``) začne
        znovu s počtem 1 a požadavek projde. Jinak se počet zvýší a požadavek
        projde právě tehdy, když je nový počet ``<= max_requests``.
        """
        with self._lock:
            now = self._clock()
            self._sweep(now)

            window = self._windows.get(key)
            if window is None or now > window.started_at + window_ms:
                if window is None:
                    self._make_room()
                window = _Window(count=1, started_at=now, window_ms=window_ms)
                self._windows[key] = window
            else:
                window.count += 1
                window.window_ms = window_ms
            self._windows.move_to_end(key)

            return RateLimitResult(
                allowed=window.count <= max_requests,
                limit=max_requests,
                remaining=max(0, max_requests - window.count),
                reset_after_ms=max(0, window.started_at + window_ms - now),
            )

    def reset(self, key):
        with self._lock:
            self._windows.pop(key, None)

    def clear(self):
        with self._lock:
            self._windows.clear()
            self._last_sweep = self._clock()

    def _sweep(self, now):
        if now - self._last_sweep < self._sweep_interval_ms:
            return
        stale = [key for key, window in self._windows.items() if window.expired(now)]
        for key in stale:
            del self._windows[key]
        self._last_sweep = now
        if stale:
            logger.debug("Swept %d expired rate limit windows", len(stale))

    def _make_room(self):
        while len(self._windows) >= self._max_keys:
            self._windows.popitem(last=False)


def get_rate_limiter() -> FixedWindowRateLimiter:
    return apps.get_app_config("core").rate_limiter


def client_ip(request) -> str:
    """
    Co nejlepší odhad adresy klienta.

    Přednost má první adresa z ``X-Forwarded-For``, pak ``X-Real-IP``, pak
    adresa socketu. Hlavičkám se věří tak, jak přišly; aplikace musí běžet
    za proxy, která je přepisuje.
    """
    forwarded = request.META.get("HTTP_X_FORWARDED_FOR")
    if forwarded:
        return forwarded.split(",")[0].strip()
    real_ip = request.META.get("HTTP_X_REAL_IP")
    if real_ip:
        return real_ip.strip()
    return request.META.get("REMOTE_ADDR") or "unknown"


def enforce_rate_limit(request, scope, limiter=None) -> RateLimitResult:
    """
    Započítá požadavek do limitu ``scope`` ze ``SiteConfig``.

    Klíč je ``"<scope>:<ip klienta>"``.

    Raises:
        TooManyRequests: klient v tomto okně překročil limit.
    """
    if limiter is None:
        limiter = get_rate_limiter()
    rule = get_site_config().rate_limit(scope)
    ip = client_ip(request)
    result = limiter.check(f"{scope}:{ip}", rule.max_requests, rule.window_ms)
    if not result.allowed:
        logger.warning("Rate limit exceeded for %s on %s", ip, scope)
        raise TooManyRequests(retry_after=result.retry_after)
    return result


def rate_limit(scope, limiter=None):
    """
    Dekorátor view, který na každý požadavek použije ``enforce_rate_limit``.

    Požadavky nad limit vyhodí ``TooManyRequests``; view musí být obalené
    ``api_view`` (jako vnější dekorátor), aby chyba skončila jako JSON.
    Povolené odpovědi nesou hlavičky ``X-RateLimit-*``.
    """
    def decorator(view):
        @wraps(view)
        def wrapper(request, *args, **kwargs):
            result = enforce_rate_limit(request, scope, limiter)
            response = view(request, *args, **kwargs)
            for header, value in result.headers().items():
                response[header] = value
            return response
        return wrapper
    return decorator
