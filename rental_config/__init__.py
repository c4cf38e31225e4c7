"""
rental_config -- single public entrypoint for billing configuration.

Responsibility:
    Provides the ONLY way to obtain the billing policy at runtime through
    ``get_active_policy()``.  YAML loading is internal tooling and never
    exposed to callers.

Architecture position:
    Configuration -- sits above ``rental_kernel`` and ``rental_engines``
    and below ``rental_services``.  Engines MUST NEVER import from
    ``rental_config``; services pass policy values into engine calls.

Failure modes:
    - ``FileNotFoundError`` -- no policy file with the requested name.
    - ``ValueError`` -- the policy failed validation.

Audit relevance:
    Every successful ``get_active_policy()`` call emits a
    ``RENTAL_CONFIG_TRACE`` log entry with the policy name, version and
    checksum, tying computed fines back to the rates that produced them.
"""

from __future__ import annotations

from pathlib import Path

from rental_config.loader import load_policy
from rental_config.schema import BillingPolicy
from rental_kernel.logging_config import get_logger

_logger = get_logger("config")

# Default policy sets directory
_DEFAULT_CONFIG_DIR = Path(__file__).parent / "sets"


def get_active_policy(
    name: str = "default",
    config_dir: Path | None = None,
) -> BillingPolicy:
    """The ONLY public configuration entrypoint.

    Args:
        name: Policy file stem under the sets directory.
        config_dir: Override path to the policy sets directory.
            Defaults to rental_config/sets/.

    Returns:
        A validated, frozen BillingPolicy.

    Raises:
        FileNotFoundError: If ``<name>.yaml`` does not exist.
        ValueError: If the policy fails validation.
    """
    sets_dir = config_dir or _DEFAULT_CONFIG_DIR
    policy = load_policy(sets_dir / f"{name}.yaml")

    _logger.info(
        "RENTAL_CONFIG_TRACE",
        extra={
            "trace_type": "RENTAL_CONFIG_TRACE",
            "policy_name": policy.name,
            "policy_version": policy.version,
            "checksum": policy.checksum,
            "fine_rate": str(policy.fine_rate),
            "interest_rate": str(policy.interest_rate),
        },
    )
    return policy


__all__ = ["BillingPolicy", "get_active_policy"]
