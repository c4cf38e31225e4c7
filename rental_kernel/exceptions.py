"""
Typed Exception Hierarchy for the Rental Kernel.

===============================================================================
WHY TYPED EXCEPTIONS
===============================================================================

Form and request handlers must map rule failures to field-level messages.
Matching on message text is fragile (the messages are user-facing
Portuguese and change with copy edits), so every error is:

  1. A TYPED exception class (catch by type, not message)
  2. Carrying a static CODE attribute (machine-readable, API-safe)
  3. Carrying structured DATA (the offending field and value)

Example - WRONG way to handle errors:
    try:
        code = normalize_unit_code(form["code"])
    except Exception as e:
        if "inválido" in str(e):  # FRAGILE - copy might change
            show_error("code")

Example - RIGHT way:
    try:
        code = normalize_unit_code(form["code"])
    except InvalidUnitCodeError as e:
        errors[e.field] = str(e)  # user-facing Portuguese message

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

    RentalKernelError (base)
    |
    +-- ValidationError
    |   +-- InvalidUnitCodeError
    |
    +-- UnitError
        +-- UnitNotAvailableError
        +-- UnitStatusChangeError

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Category    | Code                            | When Raised
------------|---------------------------------|-------------------------------------
Validation  | VALIDATION_ERROR                | Input cannot be parsed or accepted
            | INVALID_UNIT_CODE               | Unit code is not {1-4 digits}{A-G}
------------|---------------------------------|-------------------------------------
Unit        | UNIT_NOT_AVAILABLE              | Leasing a unit that is not AVAILABLE
            | UNIT_STATUS_CHANGE_NOT_ALLOWED  | Moving an OCCUPIED unit elsewhere
"""


class RentalKernelError(Exception):
    """
    Base exception for all rental kernel errors.

    All subclasses must have a `code` class attribute for machine-readable
    error identification.
    """

    code: str = "RENTAL_KERNEL_ERROR"


# Validation exceptions


class ValidationError(RentalKernelError):
    """Input value rejected by a validation rule."""

    code: str = "VALIDATION_ERROR"

    def __init__(self, message: str, field: str | None = None, value: object = None):
        self.field = field
        self.value = value
        super().__init__(message)


class InvalidUnitCodeError(ValidationError):
    """Unit code does not match the number + letter (A-G) format."""

    code: str = "INVALID_UNIT_CODE"

    MESSAGE = "Código de unidade inválido. Use o formato: número + letra (ex: 10A, 5B)"

    def __init__(self, value: object):
        super().__init__(self.MESSAGE, field="code", value=value)


# Unit exceptions


class UnitError(RentalKernelError):
    """Base exception for unit rule violations."""

    code: str = "UNIT_ERROR"


class UnitNotAvailableError(UnitError):
    """A lease was requested for a unit that is not AVAILABLE."""

    code: str = "UNIT_NOT_AVAILABLE"

    def __init__(self, unit_code: str, status: str):
        self.unit_code = unit_code
        self.status = status
        super().__init__(f"Unidade {unit_code} não está disponível (status: {status})")


class UnitStatusChangeError(UnitError):
    """An OCCUPIED unit cannot be moved to a different status."""

    code: str = "UNIT_STATUS_CHANGE_NOT_ALLOWED"

    def __init__(self, unit_code: str, current_status: str, requested_status: str):
        self.unit_code = unit_code
        self.current_status = current_status
        self.requested_status = requested_status
        super().__init__(
            f"Cannot change status of occupied unit {unit_code} "
            f"to {requested_status}"
        )
