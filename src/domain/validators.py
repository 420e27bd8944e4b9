"""Field validators for user records.

All functions here are pure predicates: they return a boolean and never
raise. Turning a failed check into an error is the registry's job.

Tax IDs follow the Brazilian CPF scheme: eleven digits written as
``DDD.DDD.DDD-DD`` whose last two digits are check digits over the first
nine (and ten) digits.
"""

import re
from typing import Final

EMAIL_PATTERN: Final = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")

PASSWORD_PATTERN: Final = re.compile(
    r"(?=.*[a-z])(?=.*[A-Z])(?=.*[0-9])(?=.*[@$!%*?&])[A-Za-z0-9@$!%*?&]{8,}"
)

TAX_ID_PATTERN: Final = re.compile(r"[0-9]{3}\.[0-9]{3}\.[0-9]{3}-[0-9]{2}")
TAX_ID_LENGTH: Final[int] = 11
_NON_DIGITS: Final = re.compile(r"[^0-9]+")


def is_valid_email(email: str) -> bool:
    """Check that ``email`` looks like ``local@domain.tld``.

    No DNS or mailbox verification is performed.
    """
    return EMAIL_PATTERN.fullmatch(email) is not None


def is_valid_password(password: str) -> bool:
    """Check the password complexity policy.

    At least eight characters with a lowercase letter, an uppercase letter,
    a digit and one of ``@$!%*?&``; no other characters are allowed.
    """
    return PASSWORD_PATTERN.fullmatch(password) is not None


def is_valid_tax_id_format(tax_id: str) -> bool:
    """Check that ``tax_id`` is written as ``DDD.DDD.DDD-DD``."""
    return TAX_ID_PATTERN.fullmatch(tax_id) is not None


def compute_check_digit(digits: str, length: int) -> int:
    """Compute a CPF check digit over the first ``length`` digits.

    Digits are weighted from ``length + 1`` down to 2, the weighted sum is
    multiplied by 10 and reduced mod 11, and a result of 10 becomes 0.

    Args:
        digits: A string of ASCII digits at least ``length`` long.
        length: 9 for the first check digit, 10 for the second.

    Returns:
        int: The expected check digit.

    Examples:
        >>> compute_check_digit("111444777", 9)
        3
        >>> compute_check_digit("1114447773", 10)
        5
    """
    total = sum(
        int(digits[i - 1]) * (length + 2 - i) for i in range(1, length + 1)
    )
    remainder = (total * 10) % 11
    return 0 if remainder >= 10 else remainder


def is_valid_tax_id_digits(tax_id: str) -> bool:
    """Check the tax ID's digit count, blacklist and check digits.

    Punctuation is ignored. Sequences of eleven identical digits are
    rejected even though their check digits happen to match.
    """
    digits = _NON_DIGITS.sub("", tax_id)
    if len(digits) != TAX_ID_LENGTH:
        return False

    if len(set(digits)) == 1:
        return False

    return compute_check_digit(digits, 9) == int(digits[9]) and compute_check_digit(
        digits, 10
    ) == int(digits[10])


def is_valid_tax_id(tax_id: str) -> bool:
    """Check both the format and the check digits of a tax ID."""
    return is_valid_tax_id_format(tax_id) and is_valid_tax_id_digits(tax_id)
