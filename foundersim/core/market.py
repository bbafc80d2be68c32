"""
Market factor source.

The simulation engine takes the market factor as a plain argument. This
module provides the value callers feed it: a seasonal daily factor and a
small time-to-live cache that serves the last known value and falls back to
a neutral default when the source is unavailable.
"""

import math
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from foundersim.config import get_settings
from foundersim.utils.logging import get_logger
from foundersim.utils.numbers import round_half_up

logger = get_logger(__name__)

DAYS_PER_YEAR = 365

MarketFactorProvider = Callable[[datetime], float]


def seasonal_market_factor(day_of_year: int, amplitude: Optional[float] = None) -> float:
    """
    Deterministic daily market factor: a sine wave over the year.

    With the default amplitude of 0.2 the factor stays within [0.8, 1.2].
    """
    if amplitude is None:
        amplitude = get_settings().market.amplitude
    factor = 1.0 + amplitude * math.sin((day_of_year / DAYS_PER_YEAR) * 2 * math.pi)
    return round_half_up(factor, 2)


def seasonal_provider(now: datetime) -> float:
    """Provider that derives the factor from the calendar day of ``now``."""
    return seasonal_market_factor(now.timetuple().tm_yday)


class MarketFactorCache:
    """
    Caller-owned cache for the market factor.

    Serves the cached value while it is fresh and refreshes it from the
    provider once it is older than the TTL. When the provider fails the last
    known value is kept; with nothing cached the default is returned.
    """

    def __init__(
        self,
        provider: Optional[MarketFactorProvider] = None,
        ttl: Optional[timedelta] = None,
        default: Optional[float] = None,
    ):
        settings = get_settings().market
        self.provider = provider or seasonal_provider
        self.ttl = timedelta(hours=settings.cache_ttl_hours) if ttl is None else ttl
        self.default = settings.default_factor if default is None else default

        self._value: Optional[float] = None
        self._fetched_at: Optional[datetime] = None

    @property
    def value(self) -> Optional[float]:
        return self._value

    @property
    def fetched_at(self) -> Optional[datetime]:
        return self._fetched_at

    def is_stale(self, now: Optional[datetime] = None) -> bool:
        if self._fetched_at is None:
            return True
        now = now or datetime.now(timezone.utc)
        return now - self._fetched_at > self.ttl

    def get(self, now: Optional[datetime] = None) -> float:
        """
        Return the current market factor.

        Args:
            now: Point in time to evaluate freshness against (defaults to UTC now)

        Returns:
            The cached, refreshed or default factor
        """
        now = now or datetime.now(timezone.utc)

        if not self.is_stale(now):
            return self._value

        try:
            fresh = float(self.provider(now))
        except Exception as e:
            logger.warning("market_factor_refresh_failed", error=str(e))
            return self.default if self._value is None else self._value

        self._value = fresh
        self._fetched_at = now
        logger.info("market_factor_refreshed", value=fresh, fetched_at=now.isoformat())
        return fresh

    def invalidate(self) -> None:
        self._value = None
        self._fetched_at = None
