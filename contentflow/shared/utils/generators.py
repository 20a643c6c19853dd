"""ID and value generators (CUID primary keys, human-readable sequences)."""

from cuid2 import cuid_wrapper

cuid_generator = cuid_wrapper()


def generate_cuid() -> str:
    """Generate a collision-resistant unique identifier (CUID2).

    Returns:
        A new CUID string.
    """
    result = cuid_generator()
    if not isinstance(result, str):
        raise TypeError(
            f"Expected str from cuid_generator, got {type(result).__name__}"
        )
    return result


def format_sequence(prefix: str, number: int, width: int, separator: str = "") -> str:
    """Return prefix + number zero-padded to at least `width` digits.

    Numbers wider than `width` are kept whole (INV + 12345 -> INV12345).

    Raises:
        ValueError: If number is not positive.
    """
    if number < 1:
        raise ValueError(f"Sequence number must be positive, got {number}")
    return f"{prefix}{separator}{str(number).zfill(width)}"
