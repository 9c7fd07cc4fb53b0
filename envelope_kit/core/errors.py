"""Error Hierarchy — typed, categorized exceptions for every encoding failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - All errors are deterministic functions of the input data: never retried
    - to_response() produces the REST error body used by the shell handlers
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with EnvelopeError base: FastAPI global handler catches all (ADR: uniform error shape)
    - ErrorContext as dataclass: rich observability without coupling to logging framework
    - Encoding failures are 500-level: bad application data is a server defect, not a client error
    - contract_violation() is the one construction path for EncodingContractViolation:
      every broken invariant is logged once, where it is detected
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone

logger = logging.getLogger(__name__)


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    RESOLUTION = "resolution"
    HOMOGENEITY = "homogeneity"
    STRUCTURE = "structure"
    CONTRACT = "contract"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    value_type: str | None = None
    variant: str | None = None
    debug_info: dict[str, Any] | None = None


class EnvelopeError(Exception):
    """Base exception for all envelope encoding errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "value_type": self.context.value_type,
                    "variant": self.context.variant,
                },
            }
        }


# ─── Resolution Errors ──────────────────────────────────────────

class UnresolvableTypeError(EnvelopeError):
    """No encoding strategy matches the value's type."""
    def __init__(self, type_name: str, reason: str | None = None, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.value_type = type_name
        message = f"No encoder for values of type '{type_name}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(
            message, "UNRESOLVABLE_TYPE", ErrorCategory.RESOLUTION,
            ErrorSeverity.ERROR, ctx,
        )
        self.type_name = type_name


class MixedElementTypeError(EnvelopeError):
    """A collection holds elements of two or more incompatible kinds."""
    def __init__(self, kinds: list[str], context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.debug_info = {"kinds": list(kinds)}
        super().__init__(
            "Serializing collections of different element types is not supported. "
            f"Selected encoders: {', '.join(kinds)}",
            "MIXED_ELEMENT_TYPES", ErrorCategory.HOMOGENEITY,
            ErrorSeverity.ERROR, ctx,
        )
        self.kinds = list(kinds)


# ─── Structure Errors ───────────────────────────────────────────

class MissingKeyOrValueError(EnvelopeError):
    """A key/value pair has a null key or a null value."""
    def __init__(self, missing: str, context: ErrorContext | None = None):
        shape = "Entry(None, ...)" if missing == "key" else "Entry(..., None)"
        super().__init__(
            f"{shape} is not supported",
            "MISSING_KEY_OR_VALUE", ErrorCategory.STRUCTURE,
            ErrorSeverity.ERROR, context,
        )
        self.missing = missing


class InvalidMapKeyError(EnvelopeError):
    """A mapping key does not encode to a primitive document node."""
    def __init__(self, key_type: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.value_type = key_type
        super().__init__(
            f"Value of type '{key_type}' can't be used as a document key",
            "INVALID_MAP_KEY", ErrorCategory.STRUCTURE,
            ErrorSeverity.ERROR, ctx,
        )
        self.key_type = key_type


# ─── Contract Errors ────────────────────────────────────────────

class EncodingContractViolation(EnvelopeError):
    """An internal invariant broke. Always a programming defect, never defaulted."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "ENCODING_CONTRACT_VIOLATION", ErrorCategory.CONTRACT,
            ErrorSeverity.CRITICAL, context,
        )


def contract_violation(message: str, variant: str | None = None) -> EncodingContractViolation:
    """Log a broken invariant and return the exception for the caller to raise."""
    logger.error(
        f"Encoding contract violation: {message}",
        extra={"error_code": "ENCODING_CONTRACT_VIOLATION", "variant": variant},
    )
    return EncodingContractViolation(message, ErrorContext(variant=variant))
