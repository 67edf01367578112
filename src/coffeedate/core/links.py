"""Calendar-service and share links for a single event."""

from coffeedate.config.constants import (
    CALENDAR_SERVICE_TITLE,
    CALENDAR_SERVICE_URL,
    DETAILS_PREFIX,
    SHARE_FALLBACK_LOCATION,
    SHARE_MESSAGE_TEMPLATE,
    SMS_LINK_PREFIX,
)
from coffeedate.core.event_model import Event
from coffeedate.core.formatting import to_display_string, to_utc_compact_timestamp
from coffeedate.utils.encoding import encode_uri_component


def build_calendar_service_link(event: Event) -> str:
    """Build a Google Calendar "add event" link.

    Each free-text field is encoded on its own; ``dates`` holds only digits,
    ``T``, ``Z`` and ``/`` and is left as-is.
    """
    dates = f"{to_utc_compact_timestamp(event.start)}/{to_utc_compact_timestamp(event.end)}"
    details = encode_uri_component(DETAILS_PREFIX + (event.location or ""))
    location = encode_uri_component(event.location or "")
    return (
        f"{CALENDAR_SERVICE_URL}?action=TEMPLATE&text={CALENDAR_SERVICE_TITLE}"
        f"&dates={dates}&details={details}&location={location}"
    )


def build_event_link(event: Event, page_url: str) -> str:
    """Deep link that reopens this event's details (``page_url#event-<ms>``)."""
    return f"{page_url}#{event.id}"


def build_share_link(event: Event, page_url: str) -> str:
    """Build an ``sms:`` link whose body invites to this event.

    The whole message is encoded as one unit since the protocol only takes
    a single ``body`` parameter.
    """
    body = SHARE_MESSAGE_TEMPLATE.format(
        when=to_display_string(event.start),
        where=event.location or SHARE_FALLBACK_LOCATION,
        url=build_event_link(event, page_url),
    )
    return SMS_LINK_PREFIX + encode_uri_component(body)
