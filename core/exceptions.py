# core/exceptions.py
from __future__ import annotations

from typing import Iterable


class DomainError(Exception):
    """Base class for domain-level errors."""
    def __init__(self, message: str, *, code: str | None = None):
        super().__init__(message)
        self.code = code or self.__class__.__name__


class ValidationError(DomainError):
    """Raised when data is invalid or violates constraints."""

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        activity_id: str | None = None,
        reference: str | None = None,
    ):
        super().__init__(message, code=code)
        self.activity_id = activity_id
        self.reference = reference


class NotFoundError(DomainError):
    """Raised when an entity is not found."""


class BusinessRuleError(DomainError):
    """Raised when business rules are violated."""


class CycleDetectedError(BusinessRuleError):
    """Raised when the precedence graph is not a DAG."""

    def __init__(self, activity_ids: Iterable[str], *, code: str = "SCHEDULE_CYCLE"):
        self.activity_ids = tuple(activity_ids)
        listed = ", ".join(self.activity_ids)
        super().__init__(
            f"Cannot schedule project: circular dependency detected between {listed}.",
            code=code,
        )


class ConcurrencyError(DomainError):
    """Raised when optimistic locking detects a stale update."""
