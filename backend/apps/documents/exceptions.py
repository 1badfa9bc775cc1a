from __future__ import annotations

from typing import Iterable

from rest_framework import status
from rest_framework.exceptions import APIException, NotFound


class BusinessRuleViolation(APIException):
    """A mutation that is well-formed but not allowed in the document's current state."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "The requested change violates a business rule."
    default_code = "business_rule_violation"

    def __init__(self, detail=None, code=None):
        super().__init__(detail, code)
        self.message = str(detail or self.default_detail)

    def __str__(self) -> str:
        return self.message


class InvalidTransition(BusinessRuleViolation):
    default_code = "invalid_transition"

    def __init__(self, current: str, target: str, allowed: Iterable[str]):
        self.current = current
        self.target = target
        self.allowed = list(allowed)
        message = (
            f"Invalid status transition from {current} to {target}. "
            f"Allowed: {', '.join(self.allowed) if self.allowed else 'none'}"
        )
        super().__init__({"detail": message, "allowed": self.allowed})
        self.message = message


class UnknownReference(APIException):
    """A referenced record does not exist or belongs to another company."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Referenced record was not found."
    default_code = "unknown_reference"

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__({field: [message]})

    def __str__(self) -> str:
        return self.message


class DocumentNotFound(NotFound):
    default_code = "document_not_found"
