"""
Rental Kernel

Domain types and infrastructure shared by the rental rule engines:
- Frozen snapshots of units, leases and transactions
- Decimal-only money helpers with half-up cent rounding
- Injectable clock
- Typed exceptions and structured JSON logging
"""

__version__ = "0.1.0"
