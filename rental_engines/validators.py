"""
Module: rental_engines.validators
Responsibility:
    Predicate checks for resident and unit input: CPF check digits, phone
    and e-mail syntax, unit code normalization, and the resident form
    rules built on top of them.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import rental_kernel.

Invariants enforced:
    - Predicates are total: invalid input yields ``False``, never an error.
    - ``normalize_unit_code`` is the one validator that raises, always with
      ``InvalidUnitCodeError`` and its user-facing Portuguese message.

Failure modes:
    - InvalidUnitCodeError from ``normalize_unit_code``.

Usage:
    from rental_engines.validators import is_valid_cpf, normalize_unit_code

    is_valid_cpf("529.982.247-25")   # True
    normalize_unit_code(" 10.a ")    # "10A"
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Mapping

from rental_kernel.exceptions import InvalidUnitCodeError
from rental_kernel.logging_config import get_logger

logger = get_logger("engines.validators")

_NON_DIGITS = re.compile(r"[^0-9]")
_REPEATED_DIGITS = re.compile(r"([0-9])\1{10}")
_UNIT_CODE = re.compile(r"([0-9]{1,4})([a-g])")
_EMAIL = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
_NAME = re.compile(r"[a-zA-ZÀ-ſ\s]+")

MIN_PASSWORD_LENGTH = 4

# Resident form messages, keyed by field
NAME_ERROR = "Nome deve ter pelo menos 2 caracteres e conter apenas letras"
CPF_ERROR = "CPF inválido"
EMAIL_ERROR = "Formato de email inválido"
PHONE_ERROR = "Formato de telefone inválido"
PASSWORD_REQUIRED_ERROR = "Senha é obrigatória"
PASSWORD_LENGTH_ERROR = f"Senha deve ter pelo menos {MIN_PASSWORD_LENGTH} caracteres"


def clean_digits(value: str) -> str:
    """Keep only the ASCII digits 0-9."""
    return _NON_DIGITS.sub("", value)


# ============================================================================
# CPF
# ============================================================================


def _cpf_check_digit(digits: str, first_weight: int) -> int:
    total = sum(
        int(d) * weight
        for d, weight in zip(digits, range(first_weight, 1, -1))
    )
    remainder = (total * 10) % 11
    return 0 if remainder in (10, 11) else remainder


def is_valid_cpf(cpf: str) -> bool:
    """
    Validate a Brazilian CPF by its two check digits.

    Formatting characters are ignored.  Numbers made of a single repeated
    digit pass the arithmetic but are not issued, so they are rejected.
    """
    digits = clean_digits(cpf)
    if len(digits) != 11:
        return False
    if _REPEATED_DIGITS.fullmatch(digits):
        return False

    if _cpf_check_digit(digits[:9], 10) != int(digits[9]):
        return False
    return _cpf_check_digit(digits[:10], 11) == int(digits[10])


# ============================================================================
# Unit codes
# ============================================================================


def normalize_unit_code(value: str) -> str:
    """
    Normalize a unit code to ``{number}{LETTER}``.

    Whitespace and dots are removed and case is ignored, so ``"10a"``,
    ``"10 A"`` and ``"10.a"`` all become ``"10A"``.  The number part is
    kept exactly as typed (leading zeros included).

    Raises:
        InvalidUnitCodeError: If the input is not 1-4 ASCII digits followed
            by a single letter A-G.
    """
    cleaned = re.sub(r"\s+", "", value.strip()).replace(".", "").lower()
    match = _UNIT_CODE.fullmatch(cleaned)
    if match is None:
        logger.debug("unit_code_rejected", extra={"raw_code": value})
        raise InvalidUnitCodeError(value)

    number, letter = match.groups()
    return f"{number}{letter.upper()}"


def is_valid_unit_code(code: str) -> bool:
    """True when ``code`` can be normalized."""
    try:
        normalize_unit_code(code)
    except InvalidUnitCodeError:
        return False
    return True


# ============================================================================
# Contact details
# ============================================================================


def is_valid_phone(phone: str) -> bool:
    """Landlines have 10 digits with area code, mobiles 11."""
    return len(clean_digits(phone)) in (10, 11)


def is_valid_email(email: str) -> bool:
    # UX-level check only: one @, non-empty parts, a dot in the domain.
    return _EMAIL.fullmatch(email) is not None


def is_valid_name(name: str) -> bool:
    trimmed = name.strip()
    return len(trimmed) >= 2 and _NAME.fullmatch(trimmed) is not None


# ============================================================================
# Forms
# ============================================================================


@dataclass(frozen=True)
class FormValidationResult:
    """Outcome of a form check: field name -> first error message."""

    errors: dict[str, str] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return not self.errors


def validate_password(password: str) -> tuple[bool, list[str]]:
    errors: list[str] = []
    if len(password) < MIN_PASSWORD_LENGTH:
        errors.append(PASSWORD_LENGTH_ERROR)
    return not errors, errors


def validate_resident_form(
    form: Mapping[str, Any],
    is_editing: bool = False,
) -> FormValidationResult:
    """
    Check a resident create/edit form.

    Args:
        form: Mapping with ``name``, ``cpf``, ``email``, ``phone`` and an
            optional ``password``.
        is_editing: When True the password is only checked if one was given.

    Returns:
        FormValidationResult with one message per failing field.
    """
    errors: dict[str, str] = {}

    if not is_valid_name(form.get("name") or ""):
        errors["name"] = NAME_ERROR
    if not is_valid_cpf(form.get("cpf") or ""):
        errors["cpf"] = CPF_ERROR
    if not is_valid_email(form.get("email") or ""):
        errors["email"] = EMAIL_ERROR
    if not is_valid_phone(form.get("phone") or ""):
        errors["phone"] = PHONE_ERROR

    password = form.get("password") or ""
    if not is_editing or password:
        if not password:
            errors["password"] = PASSWORD_REQUIRED_ERROR
        else:
            ok, password_errors = validate_password(password)
            if not ok:
                errors["password"] = password_errors[0]

    if errors:
        logger.debug("resident_form_rejected", extra={"fields": sorted(errors)})
    return FormValidationResult(errors=errors)
