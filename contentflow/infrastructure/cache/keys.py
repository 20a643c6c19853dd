"""Cache key builders. Single place for key format (DRY).

Key components (plan id, plan name) must not contain CACHE_KEY_SEP
to avoid ambiguous or colliding keys.
"""

from contentflow.core.constants import CACHE_KEY_SEP, CACHE_PREFIX_PLAN


def _validate_key_component(value: str, name: str) -> None:
    """Raise ValueError if value contains the cache key separator."""
    if CACHE_KEY_SEP in value:
        raise ValueError(
            f"Cache key component {name!r} must not contain separator {CACHE_KEY_SEP!r}"
        )


def plan_key(plan_id: str) -> str:
    """Cache key for plan by ID."""
    _validate_key_component(plan_id, "plan_id")
    return f"{CACHE_PREFIX_PLAN}{CACHE_KEY_SEP}id{CACHE_KEY_SEP}{plan_id}"


def plan_name_key(name: str) -> str:
    """Cache key for plan by unique name."""
    _validate_key_component(name, "name")
    return f"{CACHE_PREFIX_PLAN}{CACHE_KEY_SEP}name{CACHE_KEY_SEP}{name}"


def plan_pattern() -> str:
    """SCAN pattern matching every plan key (used when a plan changes)."""
    return f"{CACHE_PREFIX_PLAN}{CACHE_KEY_SEP}*"

