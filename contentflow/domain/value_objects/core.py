"""Domain value objects for the contentflow application.

Value objects are immutable types that represent domain concepts with
self-validation. They have no identity, only value.
"""

import re
from dataclasses import dataclass

_PREFIX_RE = re.compile(r"^[A-Z]{2,6}$")
_COLOR_RE = re.compile(r"^#[0-9a-fA-F]{6}$")


@dataclass(frozen=True)
class ContentTypePrefix:
    """Value object for a content type's instance id prefix.

    Prefixes are 2-6 uppercase letters (e.g. 'INV', 'OFFR').
    """

    value: str

    def __post_init__(self) -> None:
        if not self.value:
            raise ValueError("Prefix must be a non-empty string")
        if not _PREFIX_RE.match(self.value):
            raise ValueError("Prefix must be 2-6 uppercase letters (e.g., 'INV')")


@dataclass(frozen=True)
class HexColor:
    """Value object for a '#rrggbb' colour used to label content types."""

    value: str

    def __post_init__(self) -> None:
        if not _COLOR_RE.match(self.value):
            raise ValueError("Color must be a hex value like '#1a2b3c'")
