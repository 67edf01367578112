"""Percent-encoding helpers for calendar and share links."""

from urllib.parse import quote

from coffeedate.config.constants import URI_COMPONENT_SAFE


def encode_uri_component(text: str) -> str:
    """Percent-encode text as a single URI component.

    Matches the browser's ``encodeURIComponent``: UTF-8 bytes, with only
    alphanumerics and ``-_.!~*'()`` left as-is (spaces become ``%20``).

    Args:
        text: Free text to embed in a query parameter.

    Returns:
        The encoded component.
    """
    return quote(str(text), safe=URI_COMPONENT_SAFE)
