import re

from .exceptions import InvalidInput
from .phone_utils import clean_digits

# Dotted IPv4 hosts are accepted alongside domain names.
URL_PATTERN = re.compile(
    r"(http|https)://"
    r"(?:[a-zA-Z0-9_.-]+\.[a-zA-Z]{2,}|\d{1,3}(?:\.\d{1,3}){3})"
    r"(/.*)?",
    re.ASCII,
)
MIN_PHONE_DIGITS = 10


def validate_url(value: str | None) -> str:
    """Validate and return the URL."""
    if not value:
        raise InvalidInput("URL is required")
    if not URL_PATTERN.fullmatch(value):
        raise InvalidInput("Invalid URL format")
    return value


def validate_phone_number(value: str | None) -> str:
    """Validate the phone number and return it unchanged."""
    if not value:
        raise InvalidInput("Phone number is required")
    if len(clean_digits(value)) < MIN_PHONE_DIGITS:
        raise InvalidInput("Invalid phone number format")
    return value
