"""
Configuration Loader (``rental_config.loader``).

Responsibility
--------------
Loads billing policy YAML files and parses them into the frozen
``rental_config.schema.BillingPolicy``.  Callers do not use this module
directly; the runtime entry point is ``rental_config.get_active_policy()``.

Invariants enforced
-------------------
* Every parsed object is a frozen dataclass from ``schema.py``.
* Rates are parsed from their YAML text into ``Decimal`` (never float).
* ``compute_checksum`` produces a deterministic SHA-256 hash for
  configuration identity and change detection.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Missing required keys in parsed dict  -> ``KeyError`` propagates.
* Out-of-range values  -> ``ValueError`` from ``validate_policy``.
"""

from __future__ import annotations

import hashlib
import json
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any

import yaml

from rental_config.schema import BillingPolicy

SUPPORTED_CURRENCIES = frozenset({"BRL"})


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
    """
    with open(path, encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def parse_rate(value: Any) -> Decimal:
    """
    Parse a rate from YAML.

    YAML reads ``0.02`` as a float; going through ``str`` keeps the
    literal the author wrote.
    """
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError) as e:
        raise ValueError(f"Cannot parse rate from {value!r}") from e


def parse_policy(data: dict[str, Any]) -> BillingPolicy:
    """
    Parse a ``BillingPolicy`` from a dict.

    Preconditions:
        - ``data`` contains a ``policy`` mapping with at least ``name``.
    Raises:
        KeyError: if required keys are missing.
        ValueError: if a rate cannot be parsed.
    """
    policy = data["policy"]
    charges = policy.get("charges", {})
    leases = policy.get("leases", {})
    display = policy.get("display", {})
    defaults = BillingPolicy(name=policy["name"])

    return BillingPolicy(
        name=policy["name"],
        fine_rate=parse_rate(charges.get("fine_rate", defaults.fine_rate)),
        interest_rate=parse_rate(charges.get("interest_rate", defaults.interest_rate)),
        due_day=int(charges.get("due_day", defaults.due_day)),
        lease_warning_days=int(leases.get("warning_days", defaults.lease_warning_days)),
        currency=display.get("currency", defaults.currency),
        version=int(policy.get("version", defaults.version)),
        checksum=compute_checksum(data),
    )


def validate_policy(policy: BillingPolicy) -> list[str]:
    """Return a list of problems with ``policy``; empty when it is usable."""
    errors: list[str] = []
    for name in ("fine_rate", "interest_rate"):
        rate = getattr(policy, name)
        if not Decimal(0) <= rate <= Decimal(1):
            errors.append(f"{name} must be between 0 and 1, got {rate}")
    if not 1 <= policy.due_day <= 31:
        errors.append(f"due_day must be between 1 and 31, got {policy.due_day}")
    if policy.lease_warning_days < 0:
        errors.append(
            f"lease_warning_days cannot be negative, got {policy.lease_warning_days}"
        )
    if policy.currency not in SUPPORTED_CURRENCIES:
        errors.append(f"Unsupported currency: {policy.currency}")
    return errors


def load_policy(path: Path) -> BillingPolicy:
    """
    Load and validate a policy file.

    Raises:
        FileNotFoundError, yaml.YAMLError, KeyError: see module docstring.
        ValueError: if validation fails.
    """
    policy = parse_policy(load_yaml_file(path))
    errors = validate_policy(policy)
    if errors:
        raise ValueError(
            f"Billing policy {path.name} failed validation:\n"
            + "\n".join(f"  - {e}" for e in errors)
        )
    return policy


def compute_checksum(data: dict[str, Any]) -> str:
    """
    Compute SHA-256 checksum of canonical JSON serialization.

    Postconditions:
        - Identical ``data`` always produces identical checksums.
    """
    canonical = json.dumps(data, sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode()).hexdigest()
