"""Centralized constants for CoffeeDate.

Literal texts and formats shared by the recurrence engine and the
calendar exporters.
"""

# Cadence sentinel: 30 means "monthly on the same day-of-month"
MONTHLY_CADENCE = 30

# Event identifiers double as deep-link fragments (#event-<epoch ms>)
EVENT_ID_PREFIX = "event-"

# ICS calendar constants
ICS_PRODID = "-//CoffeeDate//EN"
ICS_VERSION = "2.0"
ICS_MIME_TYPE = "text/calendar"
ICS_LINE_SEPARATOR = "\r\n"  # RFC5545 requires CRLF

# Fixed event texts
EVENT_SUMMARY = "Coffee Date"
EVENT_DESCRIPTION = "Coffee date"

# Google Calendar template link
CALENDAR_SERVICE_URL = "https://calendar.google.com/calendar/render"
CALENDAR_SERVICE_TITLE = "Coffee+Date"  # already form-encoded
DETAILS_PREFIX = "Coffee date at "

# SMS share link
SMS_LINK_PREFIX = "sms:?&body="
SHARE_FALLBACK_LOCATION = "our spot"
SHARE_MESSAGE_TEMPLATE = "Coffee date on {when} at {where}. View details: {url}"

# Download file names
SINGLE_EVENT_FILENAME = "coffee-date.ics"
SERIES_FILENAME = "coffee-dates-series.ics"

# Status messages
STATUS_GENERATED = "Generated {count} events."

# Characters encodeURIComponent leaves untouched (besides alphanumerics)
URI_COMPONENT_SAFE = "-_.!~*'()"

# Timezone abbreviation to IANA zone mapping
ABBR_TO_TZ = {
    # North America
    "EST": "America/New_York",
    "EDT": "America/New_York",
    "CST": "America/Chicago",
    "CDT": "America/Chicago",
    "MST": "America/Denver",
    "MDT": "America/Denver",
    "PST": "America/Los_Angeles",
    "PDT": "America/Los_Angeles",
    # United Kingdom / Europe
    "GMT": "Europe/London",
    "BST": "Europe/London",
    "CET": "Europe/Paris",
    "CEST": "Europe/Paris",
    "EET": "Europe/Athens",
    "EEST": "Europe/Athens",
    # Australia
    "AEST": "Australia/Sydney",
    "AEDT": "Australia/Sydney",
    # Asia
    "IST": "Asia/Kolkata",
}
