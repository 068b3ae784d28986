"""
Phone number utility functions.
"""

import re

from .constants import COUNTRY_CODES, DEFAULT_COUNTRY_CODE

_NON_DIGITS = re.compile(r"\D")


def clean_digits(phone: str) -> str:
    """Strip everything but digits from ``phone``."""
    return _NON_DIGITS.sub("", phone)


def normalize_phone_number(phone: str) -> str:
    """
    Convert a phone number to an international, E.164-like form.

    Numbers already starting with ``+`` are returned untouched. Otherwise
    the prefix is inferred from the digits: an 11 digit national number
    with a leading ``0`` is treated as Nigerian, a 10 digit number as
    North American, anything else just gets a ``+``.

    Examples:
        >>> normalize_phone_number("08031234567")
        '+2348031234567'
        >>> normalize_phone_number("4155551234")
        '+14155551234'
        >>> normalize_phone_number("+44 20 7946 0958")
        '+44 20 7946 0958'
    """
    if phone.startswith("+"):
        return phone

    cleaned = clean_digits(phone)
    if cleaned.startswith("0") and len(cleaned) == 11:
        return f"+234{cleaned[1:]}"
    if len(cleaned) == 10 and not cleaned.startswith("0"):
        return f"+1{cleaned}"
    return f"+{cleaned}"


def detect_country_code(cleaned: str) -> str:
    """Return the calling code ``cleaned`` starts with, ``"1"`` if unknown."""
    for code in COUNTRY_CODES:
        if cleaned.startswith(code):
            return code
    return DEFAULT_COUNTRY_CODE


def format_phone_number(cleaned: str, country_code: str) -> str:
    """Format digits for display, North American numbers as ``+1 (NXX) NXX-XXXX``."""
    if country_code == "1":
        return f"+1 ({cleaned[1:4]}) {cleaned[4:7]}-{cleaned[7:11]}"
    return f"+{country_code} {cleaned[len(country_code):]}"
