"""
Tests for resident and unit validators.

Covers:
- CPF check digits
- Unit code normalization
- Phone, e-mail and name predicates
- Resident form rules
"""

import pytest

from rental_engines.validators import (
    CPF_ERROR,
    EMAIL_ERROR,
    NAME_ERROR,
    PASSWORD_LENGTH_ERROR,
    PASSWORD_REQUIRED_ERROR,
    PHONE_ERROR,
    clean_digits,
    is_valid_cpf,
    is_valid_email,
    is_valid_name,
    is_valid_phone,
    is_valid_unit_code,
    normalize_unit_code,
    validate_password,
    validate_resident_form,
)
from rental_kernel.exceptions import InvalidUnitCodeError

VALID_CPF = "529.982.247-25"


class TestCPF:
    """CPF validation by check digits."""

    @pytest.mark.parametrize("cpf", [VALID_CPF, "52998224725", "111.444.777-35", "123.456.789-09"])
    def test_valid(self, cpf):
        assert is_valid_cpf(cpf)

    @pytest.mark.parametrize("cpf", ["111.111.111-11", "000.000.000-00", "99999999999"])
    def test_repeated_digits_rejected(self, cpf):
        """Repeated-digit numbers pass the arithmetic but are rejected."""
        assert not is_valid_cpf(cpf)

    @pytest.mark.parametrize("cpf", ["529.982.247-2", "5299822472500", "", "abc", "٥٢٩٩٨٢٢٤٧٢٥"])
    def test_wrong_length(self, cpf):
        assert not is_valid_cpf(cpf)

    def test_every_single_digit_change_is_rejected(self):
        """Altering any one digit of a valid CPF invalidates it."""
        digits = clean_digits(VALID_CPF)
        for position in range(11):
            for replacement in "0123456789":
                if replacement == digits[position]:
                    continue
                mutated = digits[:position] + replacement + digits[position + 1:]
                assert not is_valid_cpf(mutated), mutated


class TestUnitCode:
    """Unit codes normalize to number + uppercase letter."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("10a", "10A"),
            ("10A", "10A"),
            (" 10 A ", "10A"),
            ("10.a", "10A"),
            ("007b", "007B"),
            ("1234g", "1234G"),
        ],
    )
    def test_normalize(self, raw, expected):
        assert normalize_unit_code(raw) == expected

    @pytest.mark.parametrize("raw", ["10H", "12345A", "A10", "10", "", "10AB", "١٠a", "１０a"])
    def test_invalid_raises(self, raw):
        with pytest.raises(InvalidUnitCodeError) as exc_info:
            normalize_unit_code(raw)

        assert exc_info.value.code == "INVALID_UNIT_CODE"
        assert str(exc_info.value) == InvalidUnitCodeError.MESSAGE

    def test_predicate(self):
        assert is_valid_unit_code("5b")
        assert not is_valid_unit_code("5z")


class TestContactPredicates:

    @pytest.mark.parametrize("phone", ["(85) 99999-8888", "85 3333-4444", "85999998888"])
    def test_valid_phone(self, phone):
        assert is_valid_phone(phone)

    @pytest.mark.parametrize("phone", ["123", "(85) 9999-88", "859999988881", "٨٥٩٩٩٩٩٨٨٨٨"])
    def test_invalid_phone(self, phone):
        assert not is_valid_phone(phone)

    @pytest.mark.parametrize("email", ["ana@example.com", "a.b@c.com.br"])
    def test_valid_email(self, email):
        assert is_valid_email(email)

    @pytest.mark.parametrize("email", ["ana@example", "ana example@x.com", "@x.com", "", "ana@example.com\n"])
    def test_invalid_email(self, email):
        assert not is_valid_email(email)

    def test_name(self):
        assert is_valid_name("José da Silva")
        assert not is_valid_name("J")
        assert not is_valid_name("R2D2")

    def test_clean_digits_keeps_ascii_only(self):
        assert clean_digits("(85) ٩٩٩ 12-34") == "851234"


class TestResidentForm:
    """Resident form produces one message per failing field."""

    def _form(self, **overrides):
        form = {
            "name": "Maria Souza",
            "cpf": VALID_CPF,
            "email": "maria@example.com",
            "phone": "(85) 99999-8888",
            "password": "segredo",
        }
        form.update(overrides)
        return form

    def test_valid_form(self):
        result = validate_resident_form(self._form())

        assert result.is_valid
        assert result.errors == {}

    def test_all_fields_invalid(self):
        result = validate_resident_form(
            {"name": "M", "cpf": "123", "email": "x", "phone": "1", "password": "abc"}
        )

        assert result.errors == {
            "name": NAME_ERROR,
            "cpf": CPF_ERROR,
            "email": EMAIL_ERROR,
            "phone": PHONE_ERROR,
            "password": PASSWORD_LENGTH_ERROR,
        }

    def test_password_required_on_create(self):
        result = validate_resident_form(self._form(password=""))

        assert result.errors == {"password": PASSWORD_REQUIRED_ERROR}

    def test_password_optional_when_editing(self):
        result = validate_resident_form(self._form(password=None), is_editing=True)

        assert result.is_valid

    def test_password_still_checked_when_editing(self):
        result = validate_resident_form(self._form(password="abc"), is_editing=True)

        assert result.errors == {"password": PASSWORD_LENGTH_ERROR}

    def test_validate_password(self):
        assert validate_password("abcd") == (True, [])
        assert validate_password("abc") == (False, [PASSWORD_LENGTH_ERROR])
