"""Validation utilities for common data types."""

import re
from typing import Optional


URL_PATTERN = re.compile(
    r'^https?://'  # http:// or https://
    r'(?:www\.)?'
    r'[-a-zA-Z0-9@:%._+~#=]{2,256}\.[a-z]{2,6}\b'  # host
    r'(?:[-a-zA-Z0-9@:%_+.~#?&/=]*)$',  # path, query
    re.IGNORECASE,
)


def validate_url(url: str) -> tuple[bool, Optional[str]]:
    """
    Validate URL format.

    Args:
        url: URL to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not url:
        return False, "URL is required"

    if not URL_PATTERN.match(url):
        return False, "Please use a valid URL with HTTP or HTTPS"

    return True, None


def validate_phone(phone: str) -> tuple[bool, Optional[str]]:
    """
    Validate phone number format (basic validation).

    Args:
        phone: Phone number to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not phone:
        return False, "Phone number is required"

    # Remove common separators
    cleaned = re.sub(r'[\s\-\(\)\.\+]', '', phone)

    if not re.search(r'\d', cleaned):
        return False, "Phone number must contain digits"

    digits = re.findall(r'\d', cleaned)
    if len(digits) < 7 or len(digits) > 15:
        return False, "Phone number must be between 7 and 15 digits"

    return True, None


def is_string_list(value: object) -> bool:
    """Check that value is a list made only of strings."""
    return isinstance(value, list) and all(isinstance(item, str) for item in value)
