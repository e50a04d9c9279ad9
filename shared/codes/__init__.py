"""
Shared business codes used across layers (Domain/Core/API).

This package exposes BusinessCode at `shared.codes` so that the domain
exceptions and the HTTP status mapping in `core.exceptions` never drift.
"""
from enum import IntEnum


class BusinessCode(IntEnum):
    """Unified business status codes (single source of truth)."""

    # Success
    SUCCESS = 0

    # Parameter errors (1xxxx)
    PARAM_ERROR = 10000
    PARAM_MISSING = 10001
    PARAM_TYPE_ERROR = 10002
    PARAM_VALIDATION_ERROR = 10003

    # Business errors (2xxxx)
    BUSINESS_ERROR = 20000
    NOT_FOUND = 20006  # Generic resource not found

    # System errors (4xxxx)
    SYSTEM_ERROR = 40000
    CONFIGURATION_ERROR = 40004  # Server-side deployment is missing settings
    SIGNING_ERROR = 40005


__all__ = ["BusinessCode"]
