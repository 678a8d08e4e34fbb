import math
import re
from typing import Any


def to_number(value: Any, default: float = 0.0) -> float:
    """
    Coerces loosely typed form input into a float.

    None, empty strings, non-numeric text, NaN and infinities all become
    `default`. Comma decimal separators ("12,5") are accepted.
    """
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        text = str(value).strip().replace(" ", "").replace(",", ".")
        if not text:
            return default
        try:
            number = float(text)
        except ValueError:
            return default
    if math.isnan(number) or math.isinf(number):
        return default
    return number


def mask_email(email: str) -> str:
    """
    Masks an email for logs.
    john.doe@mail.com -> jo***@mail.com
    """
    if not email or "@" not in email:
        return "***"
    user, domain = email.split("@", 1)
    return f"{user[:2]}***@{domain}"


def normalize_phone(phone: str) -> str:
    """Keeps digits and a leading plus sign."""
    phone = phone.strip()
    prefix = "+" if phone.startswith("+") else ""
    return prefix + re.sub(r"\D", "", phone)
