"""
Chilean RUT Utilities

Validation and formatting of RUT values (national ID with a modulo-11
verification character).

Accepted inputs: ``12345678-5``, ``12.345.678-5`` or ``123456785``.
"""

import re

_SEPARATORS = re.compile(r"[.\-\s]")
_NON_RUT_CHARS = re.compile(r"[^0-9Kk]")

RUT_ERROR_MESSAGES = {
    "REQUIRED": "El RUT es obligatorio",
    "INVALID_FORMAT": "El formato del RUT no es válido",
    "INVALID_DIGIT": "El dígito verificador del RUT no es correcto",
    "INVALID": "El RUT no es válido",
}


def clean_rut(rut: str) -> str:
    """Strip dots, dashes and whitespace and uppercase the result."""
    if not rut or not isinstance(rut, str):
        return rut
    return _SEPARATORS.sub("", rut).upper()


def calculate_verification_digit(rut_number: str) -> str:
    """
    Compute the verification character for the digits of a RUT.

    Weights 2..7 are applied cycling from the least significant digit.
    11 maps to ``"0"`` and 10 maps to ``"K"``.
    """
    total = 0
    multiplier = 2
    for digit in reversed(rut_number):
        total += int(digit) * multiplier
        multiplier = 2 if multiplier == 7 else multiplier + 1

    result = 11 - (total % 11)
    if result == 11:
        return "0"
    if result == 10:
        return "K"
    return str(result)


def is_valid_rut(rut: str) -> bool:
    """Return True when the RUT is well formed and its check character matches."""
    if not rut or not isinstance(rut, str):
        return False

    cleaned = clean_rut(rut)
    if len(cleaned) < 2:
        return False

    number, check = cleaned[:-1], cleaned[-1]
    if not (number.isascii() and number.isdigit()):
        return False

    return calculate_verification_digit(number) == check


def _group_thousands(number: str) -> str:
    groups = []
    while len(number) > 3:
        groups.insert(0, number[-3:])
        number = number[:-3]
    groups.insert(0, number)
    return ".".join(groups)


def format_rut(rut: str) -> str:
    """Format a RUT as ``12.345.678-5``. Inputs shorter than 2 chars are returned as is."""
    if not rut or not isinstance(rut, str):
        return rut

    cleaned = clean_rut(rut)
    if len(cleaned) < 2:
        return rut

    return f"{_group_thousands(cleaned[:-1])}-{cleaned[-1]}"


def validate_and_format_rut(rut: str) -> str | None:
    """Return the formatted RUT when valid, otherwise None."""
    if is_valid_rut(rut):
        return format_rut(rut)
    return None


def format_rut_input(value: str) -> str:
    """
    Progressively format a RUT while it is being typed.

    Anything but digits and K is dropped. Applying it to its own output
    returns the same string.
    """
    if not value:
        return value

    cleaned = _NON_RUT_CHARS.sub("", value).upper()
    if len(cleaned) <= 1:
        return cleaned

    return f"{_group_thousands(cleaned[:-1])}-{cleaned[-1]}"
