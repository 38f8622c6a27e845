"""Live USD->NZD exchange rate with a fixed fallback."""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

import requests

from fire_tracker.core.currency import DEFAULT_USD_TO_NZD
from fire_tracker.schemas.records import utc_now

logger = logging.getLogger(__name__)

DEFAULT_RATE_URL = "https://api.exchangerate-api.com/v4/latest/USD"


@dataclass(frozen=True)
class ExchangeRate:
    rate: float
    timestamp: datetime
    fallback: bool = False


class ExchangeRateProvider:
    """
    Fetches the USD->NZD rate and caches it in process.

    Failures never propagate: the caller always gets a usable rate, the
    default one when the service is unreachable or returns garbage.
    """

    def __init__(
        self,
        url: str = DEFAULT_RATE_URL,
        timeout: float = 5.0,
        cache_seconds: float = 300.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.url = url
        self.timeout = timeout
        self.cache_seconds = cache_seconds
        self.session = session or requests.Session()
        self._cached: Optional[ExchangeRate] = None
        self._cached_at = 0.0
        self._lock = threading.Lock()

    def fetch(self) -> ExchangeRate:
        with self._lock:
            if self._cached is not None and time.monotonic() - self._cached_at < self.cache_seconds:
                return self._cached

        try:
            response = self.session.get(self.url, timeout=self.timeout)
            response.raise_for_status()
            rate = float(response.json()["rates"]["NZD"])
        except requests.RequestException as exc:
            logger.warning("exchange rate request failed, using %s: %s", DEFAULT_USD_TO_NZD, exc)
            return ExchangeRate(rate=DEFAULT_USD_TO_NZD, timestamp=utc_now(), fallback=True)
        except (ValueError, KeyError, TypeError) as exc:
            logger.warning("invalid exchange rate response, using %s: %s", DEFAULT_USD_TO_NZD, exc)
            return ExchangeRate(rate=DEFAULT_USD_TO_NZD, timestamp=utc_now(), fallback=True)

        if rate <= 0:
            logger.warning("non-positive exchange rate %s, using %s", rate, DEFAULT_USD_TO_NZD)
            return ExchangeRate(rate=DEFAULT_USD_TO_NZD, timestamp=utc_now(), fallback=True)

        result = ExchangeRate(rate=rate, timestamp=utc_now())
        # the request runs unlocked; only the cache pair is guarded
        with self._lock:
            self._cached = result
            self._cached_at = time.monotonic()
        logger.info("fetched USD->NZD rate %s", rate)
        return result
