"""Content use cases: content types and their instances."""

from contentflow.application.use_cases.content.content_type_operations import (
    ContentTypeService,
)
from contentflow.application.use_cases.content.instance_operations import InstanceService

__all__ = [
    "ContentTypeService",
    "InstanceService",
]
