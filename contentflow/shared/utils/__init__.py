"""Shared utilities: datetime and generators."""

from contentflow.shared.utils.datetime import add_days, ensure_utc, utc_now
from contentflow.shared.utils.generators import format_sequence, generate_cuid

__all__ = [
    "add_days",
    "ensure_utc",
    "format_sequence",
    "generate_cuid",
    "utc_now",
]
