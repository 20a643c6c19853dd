"""Core constants: cache key prefixes, default states, and billing literals.

Single source of truth for values shared between the domain, repositories
and background jobs.
"""

# Cache key prefixes
CACHE_PREFIX_PLAN = "plan"

# Delimiter for composite keys
CACHE_KEY_SEP = ":"

# Default state sequences seeded for a new flow: (state name, order)
DEFAULT_STATES: tuple[tuple[str, int], ...] = (("Draft", 1), ("Publish", 2))
DEFAULT_CONTROLLED_STATES: tuple[tuple[str, int], ...] = (
    ("Draft", 1),
    ("Review", 2),
    ("Publish", 3),
)

# Plan durations in days, keyed by billing period
MONTHLY_PLAN_DAYS = 30
YEARLY_PLAN_DAYS = 365

# Minimum width of the numeric part of an instance id (INV0007)
INSTANCE_ID_WIDTH = 4
# Minimum width of the numeric part of an invoice number
INVOICE_NUMBER_WIDTH = 6
