"""
rental_services -- Package init and public API.

Responsibility:
    Imperative shell over the pure engines.  This is the **only** layer
    that reads wall-clock time (through an injected ``Clock``) or loads
    the billing policy.

Architecture position:
    Services -- orchestration over engines + config + kernel.

        rental_services/ -> rental_engines/  (allowed)
        rental_services/ -> rental_config/   (allowed)
        rental_engines/  -> rental_services/ (FORBIDDEN)
        rental_kernel/   -> rental_services/ (FORBIDDEN)
"""

from rental_kernel.logging_config import get_logger

logger = get_logger("services")

from rental_services.billing_service import BillingService

__all__ = ["BillingService"]
