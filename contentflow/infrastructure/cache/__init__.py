"""Cache: Redis service and cache key utilities.

Used by the plan repository for price lookups. CacheService reads its
connection settings from contentflow.core.config; key format is in keys.py.
"""

from contentflow.infrastructure.cache.cache_protocol import CacheProtocol
from contentflow.infrastructure.cache.keys import plan_key, plan_name_key, plan_pattern
from contentflow.infrastructure.cache.redis_cache import CacheService

__all__ = [
    "CacheProtocol",
    "CacheService",
    "plan_key",
    "plan_name_key",
    "plan_pattern",
]
