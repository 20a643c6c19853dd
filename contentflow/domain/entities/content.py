"""Content type and instance identifier rules."""

from dataclasses import dataclass

from contentflow.core.constants import INSTANCE_ID_WIDTH
from contentflow.domain.value_objects.core import ContentTypePrefix
from contentflow.shared.utils.generators import format_sequence


@dataclass
class ContentTypeEntity:
    """Domain entity for a content type bound to a flow."""

    id: str
    organisation_id: str
    name: str
    prefix: ContentTypePrefix
    flow_id: str
    instance_counter: int = 0

    def issue_instance_id(self) -> str:
        """Advance the counter and return the next instance identifier (e.g. INV0007)."""
        self.instance_counter += 1
        return instance_id_for(self.prefix.value, self.instance_counter)


def instance_id_for(prefix: str, sequence: int) -> str:
    """Return ``prefix`` followed by ``sequence`` zero-padded to four digits."""
    return format_sequence(prefix, sequence, INSTANCE_ID_WIDTH)
