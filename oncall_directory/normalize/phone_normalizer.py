"""
Phone number helpers for OnCall Directory.

Cleans directory phone numbers and renders them for display, dialing
and messaging links.
"""

import re
import logging
from typing import Dict
import phonenumbers
from phonenumbers import PhoneNumberFormat

logger = logging.getLogger(__name__)

_NON_DIAL_PATTERN = re.compile(r'[^\d+]')
_NON_DIGIT_PATTERN = re.compile(r'\D')


def clean_phone(phone) -> str:
    """Strip everything except digits and '+' from a phone number."""
    if not isinstance(phone, str):
        return ""
    return _NON_DIAL_PATTERN.sub('', phone)


def format_phone_display(phone) -> str:
    """
    Format a phone number for display.

    Ten-digit numbers render as (XXX) XXX-XXXX; anything else is
    returned as given.

    Args:
        phone: Raw phone number

    Returns:
        Display string
    """
    cleaned = clean_phone(phone)
    if len(cleaned) == 10 and cleaned.isdigit():
        return f"({cleaned[:3]}) {cleaned[3:6]}-{cleaned[6:]}"
    return phone if isinstance(phone, str) else ""


def to_whatsapp_number(phone) -> str:
    """
    Build a WhatsApp-friendly number (digits only, with country code).

    Ten-digit numbers are assumed to be US/PR and get a leading 1.
    """
    cleaned = clean_phone(phone)
    digits = _NON_DIGIT_PATTERN.sub('', cleaned)
    if len(digits) == 10:
        return f"1{digits}"
    return digits


def is_valid_phone(phone) -> bool:
    """Check that a cleaned phone number has between 10 and 15 characters."""
    cleaned = clean_phone(phone)
    return 10 <= len(cleaned) <= 15


def normalize_phone_e164(phone, default_country: str = "US") -> str:
    """
    Normalize phone number to E164 format.

    Args:
        phone: Raw phone number
        default_country: Region used for numbers without a country code

    Returns:
        Normalized phone number in E164 format, or "" if invalid
    """
    if not isinstance(phone, str) or not phone.strip():
        return ""

    try:
        parsed_phone = phonenumbers.parse(phone, default_country)
    except phonenumbers.NumberParseException as e:
        logger.warning(f"Failed to normalize phone '{phone}': {e}")
        return ""

    if not phonenumbers.is_valid_number(parsed_phone):
        return ""

    return phonenumbers.format_number(parsed_phone, PhoneNumberFormat.E164)


def generate_phone_links(phone, default_country: str = "US") -> Dict[str, str]:
    """
    Generate action links for a directory phone number.

    Dial links prefer the E164 form and fall back to the cleaned number.

    Args:
        phone: Raw phone number
        default_country: Region used for numbers without a country code

    Returns:
        Dictionary with sms, tel and whatsapp links
    """
    dial = normalize_phone_e164(phone, default_country) or clean_phone(phone)

    return {
        "sms": f"sms:{dial}",
        "tel": f"tel:{dial}",
        "whatsapp": f"https://wa.me/{to_whatsapp_number(phone)}"
    }
