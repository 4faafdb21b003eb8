"""
Phone normalization and verification code helpers.
"""

import re
import secrets

from .exceptions import InvalidCodeFormatError, InvalidPhoneError

CODE_LENGTH = 6

# 55 + two-digit area code (no zero) + 8 or 9 digit subscriber number
_BR_PHONE = re.compile(r"^55[1-9]{2}\d{8,9}$")
_CODE = re.compile(r"^[0-9]{6}$")


def normalize_phone(raw: str) -> str:
    """
    Normalize a Brazilian phone number to ``+55AADDDDDDDDD``.

    Numbers given without the country code (10 or 11 digits) get ``55``
    prefixed.

    Raises:
        InvalidPhoneError: If the number is not a valid Brazilian number
    """
    digits = re.sub(r"\D", "", raw or "")
    if len(digits) in (10, 11):
        digits = f"55{digits}"
    if not _BR_PHONE.match(digits):
        raise InvalidPhoneError(raw)
    return f"+{digits}"


def generate_code() -> str:
    """Six uniformly random digits from the OS CSPRNG."""
    return f"{secrets.randbelow(10 ** CODE_LENGTH):0{CODE_LENGTH}d}"


def validate_code_format(code: str) -> str:
    """
    Ensure a submitted code is exactly six ASCII digits.

    Raises:
        InvalidCodeFormatError: On any other input
    """
    code = (code or "").strip()
    if not _CODE.match(code):
        raise InvalidCodeFormatError()
    return code
