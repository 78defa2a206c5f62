"""
Redis caching for computed reports (system health, relationship report)
Reduces repeated database probing and external service calls
"""
import json
import logging
from functools import wraps
from typing import Any, Callable, Optional

from .rate_limiter import get_redis_client

logger = logging.getLogger(__name__)

HEALTH_REPORT_KEY = "system_health:latest"
DIAGNOSIS_REPORT_KEY = "database_diagnosis:latest"


class Cache:
    """Redis cache wrapper with automatic serialization"""

    def __init__(self):
        self.redis_client = None

    def _get_client(self):
        """Lazy load Redis client"""
        if self.redis_client is None:
            try:
                self.redis_client = get_redis_client()
            except Exception as e:
                logger.warning(f"⚠️ Redis cache unavailable: {e}")
                return None
        return self.redis_client

    def get(self, key: str) -> Optional[Any]:
        client = self._get_client()
        if not client:
            return None

        try:
            value = client.get(key)
            if value:
                logger.debug(f"✅ Cache HIT: {key}")
                return json.loads(value)
            logger.debug(f"❌ Cache MISS: {key}")
            return None
        except Exception as e:
            logger.error(f"❌ Cache get error for {key}: {e}")
            return None

    def set(self, key: str, value: Any, ttl: int = 3600) -> bool:
        """Set value in cache with TTL (default 1 hour)"""
        client = self._get_client()
        if not client:
            return False

        try:
            client.setex(key, ttl, json.dumps(value, default=str))
            logger.debug(f"✅ Cache SET: {key} (TTL: {ttl}s)")
            return True
        except Exception as e:
            logger.error(f"❌ Cache set error for {key}: {e}")
            return False


# Global cache instance
cache = Cache()


def cached(key_prefix: str, ttl: int = 3600, key_builder: Optional[Callable] = None):
    """
    Decorator to cache async function results

    Example:
        @cached(key_prefix="system_optimization", ttl=60)
        async def get_database_metrics(db):
            ...
    """

    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            if key_builder:
                cache_key = key_builder(*args, **kwargs)
            else:
                arg_str = str(args[0]) if args else "default"
                cache_key = f"{key_prefix}:{arg_str}"

            cached_value = cache.get(cache_key)
            if cached_value is not None:
                return cached_value

            result = await func(*args, **kwargs)
            if result is not None:
                cache.set(cache_key, result, ttl)
            return result

        return wrapper

    return decorator


def get_cached_health_report() -> Optional[dict]:
    return cache.get(HEALTH_REPORT_KEY)


def set_cached_health_report(report: dict, ttl: int = 3600) -> bool:
    return cache.set(HEALTH_REPORT_KEY, report, ttl)


def set_cached_diagnosis(diagnosis: dict, ttl: int = 86400) -> bool:
    return cache.set(DIAGNOSIS_REPORT_KEY, diagnosis, ttl)


def get_cached_diagnosis() -> Optional[dict]:
    return cache.get(DIAGNOSIS_REPORT_KEY)
