"""
Tests for the typed exception hierarchy.
"""

import pytest

from rental_kernel.exceptions import (
    InvalidUnitCodeError,
    RentalKernelError,
    UnitError,
    UnitNotAvailableError,
    UnitStatusChangeError,
    ValidationError,
)


class TestErrorCodes:
    """Every exception carries a machine-readable code."""

    @pytest.mark.parametrize(
        "exc_class,code",
        [
            (RentalKernelError, "RENTAL_KERNEL_ERROR"),
            (ValidationError, "VALIDATION_ERROR"),
            (InvalidUnitCodeError, "INVALID_UNIT_CODE"),
            (UnitError, "UNIT_ERROR"),
            (UnitNotAvailableError, "UNIT_NOT_AVAILABLE"),
            (UnitStatusChangeError, "UNIT_STATUS_CHANGE_NOT_ALLOWED"),
        ],
    )
    def test_codes(self, exc_class, code):
        assert exc_class.code == code
        assert issubclass(exc_class, RentalKernelError)


class TestMessages:
    """User-facing messages are in Portuguese."""

    def test_invalid_unit_code(self):
        exc = InvalidUnitCodeError("10H")

        assert str(exc) == "Código de unidade inválido. Use o formato: número + letra (ex: 10A, 5B)"
        assert exc.field == "code"
        assert exc.value == "10H"
        assert isinstance(exc, ValidationError)

    def test_unit_not_available(self):
        exc = UnitNotAvailableError("10A", "OCCUPIED")

        assert str(exc) == "Unidade 10A não está disponível (status: OCCUPIED)"
        assert exc.unit_code == "10A"
        assert exc.status == "OCCUPIED"

    def test_status_change_fields(self):
        exc = UnitStatusChangeError("5B", "OCCUPIED", "MAINTENANCE")

        assert exc.current_status == "OCCUPIED"
        assert exc.requested_status == "MAINTENANCE"
        assert isinstance(exc, UnitError)
