"""Format checks shared by the entity services."""

import re
from typing import Optional

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
PHONE_PATTERN = re.compile(r"^\+?[0-9\s-]{7,15}$")


def is_valid_name(name: Optional[str]) -> bool:
    # Any non-blank text is accepted.
    return bool(name and name.strip())


def is_valid_email(email: Optional[str]) -> bool:
    return is_valid_name(email) and EMAIL_PATTERN.match(email) is not None


def is_valid_phone_number(phone: Optional[str]) -> bool:
    return is_valid_name(phone) and PHONE_PATTERN.match(phone) is not None
