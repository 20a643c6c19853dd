"""Domain value objects and shared value types."""

from contentflow.domain.value_objects.core import ContentTypePrefix, HexColor

__all__ = [
    "ContentTypePrefix",
    "HexColor",
]
