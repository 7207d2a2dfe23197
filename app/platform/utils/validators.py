"""
Local checks applied before anything is sent to the backend.

Only ASCII digits count: ``str.isdigit`` and ``\\d`` also accept other
Unicode digit characters, which the backend rejects.
"""
import re

PHONE_PATTERN = re.compile(r"[0-9]{10}")
OTP_PATTERN = re.compile(r"[0-9]{6}")
AADHAAR_PATTERN = re.compile(r"[0-9]{12}")
PINCODE_PATTERN = re.compile(r"[0-9]{6}")

PHONE_ERROR = "Please enter a valid 10-digit phone number"
OTP_ERROR = "Please enter a valid 6-digit OTP"
AADHAAR_ERROR = "Aadhaar number must be 12 digits"
PINCODE_ERROR = "PIN code must be 6 digits"


def _require(pattern: re.Pattern, value, message: str) -> str:
    if not isinstance(value, str) or not pattern.fullmatch(value):
        raise ValueError(message)
    return value


def validate_phone(value) -> str:
    return _require(PHONE_PATTERN, value, PHONE_ERROR)


def validate_otp(value) -> str:
    return _require(OTP_PATTERN, value, OTP_ERROR)


def validate_aadhaar(value) -> str:
    return _require(AADHAAR_PATTERN, value, AADHAAR_ERROR)


def validate_pincode(value) -> str:
    return _require(PINCODE_PATTERN, value, PINCODE_ERROR)
