"""ID generators (CUID for documents, timestamped ids for embedded services)."""

from cuid2 import cuid_wrapper

from concierge.shared.utils.datetime import to_timestamp_ms, utc_now

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


def generate_embedded_id(prefix: str) -> str:
    """Id for an item embedded in a reservation's services array.

    Format is '<prefix>_<epoch ms>' (e.g. 'shopping_1718000000000'), which
    existing documents already use and the UI parses.
    """
    return f"{prefix or 'service'}_{to_timestamp_ms(utc_now())}"
