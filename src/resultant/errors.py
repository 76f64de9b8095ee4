"""Contract violations for Result misuse.

A Failure payload is ordinary domain data and is never interpreted here.
This module covers the other kind of error: a caller reading the wrong
variant, handing a Result a missing payload, or returning a non-Result
from a ``flat_map`` mapper. Those are programmer errors, so they surface
as an unchecked ``ContractViolation`` (a ``RuntimeError``) carrying a
structured, pydantic-validated ``Violation``.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated, Literal, Self

from pydantic import BaseModel, ConfigDict, Field, ValidationError, computed_field

from resultant.config import ContractSettings, get_settings
from resultant.observability import get_logger

_MISSING = object()

VariantName = Literal["Success", "Failure"]


class ViolationCode(StrEnum):
    """Machine-readable kinds of contract violation."""
    WRONG_VARIANT = "WRONG_VARIANT"
    MISSING_PAYLOAD = "MISSING_PAYLOAD"
    NOT_A_RESULT = "NOT_A_RESULT"


class Violation(BaseModel):
    """Structured description of a contract violation.

    Attributes:
        code: What kind of misuse happened
        operation: Accessor or combinator that detected it
        message: Human-readable explanation
        variant: Variant of the Result involved, if any
        payload_repr: Truncated repr of the offending payload, if any
    """

    model_config = ConfigDict(
        frozen=True,
        str_strip_whitespace=True,
        json_schema_extra={
            "title": "Contract Violation",
            "description": "Misuse of a Result by its caller",
            "examples": [{
                "code": "WRONG_VARIANT",
                "operation": "success",
                "message": "not a success",
                "variant": "Failure",
                "payload_repr": "'boom'",
            }],
        },
    )

    code: ViolationCode
    operation: Annotated[str, Field(min_length=1, description="Accessor or combinator name")]
    message: Annotated[str, Field(min_length=1, description="Human-readable message")]
    variant: VariantName | None = Field(default=None, description="Variant of the Result involved")
    payload_repr: str | None = Field(default=None, description="Truncated payload repr")

    @computed_field
    @property
    def is_access_error(self) -> bool:
        """Whether the caller read the payload of the wrong variant."""
        return self.code is ViolationCode.WRONG_VARIANT

    def render(self) -> str:
        """Format as a single line for exception messages and logs."""
        where = f"{self.variant}.{self.operation}" if self.variant else self.operation
        tail = f" (payload={self.payload_repr})" if self.payload_repr is not None else ""
        return f"[{self.code}] {where}: {self.message}{tail}"

    __str__ = render


class ContractViolation(RuntimeError):
    """Raised when a Result is used in a way its contract forbids.

    Never caught or converted by this package. Callers are expected to
    check ``is_success()``/``is_failure()`` or fold with ``then``/``map``
    rather than recover from this.
    """

    __slots__ = ("violation",)

    def __init__(self, violation: Violation) -> None:
        self.violation = violation
        super().__init__(violation.render())

    @property
    def code(self) -> ViolationCode:
        return self.violation.code

    @classmethod
    def create(
        cls,
        code: ViolationCode,
        operation: str,
        message: str,
        *,
        variant: VariantName | None = None,
        payload: object = _MISSING,
    ) -> Self:
        """Build a violation, truncating the payload repr to the configured limit."""
        return cls(Violation(
            code=code,
            operation=operation,
            message=message,
            variant=variant,
            payload_repr=None if payload is _MISSING else _truncate(repr(payload)),
        ))


def violation(
    code: ViolationCode,
    operation: str,
    message: str,
    *,
    variant: VariantName | None = None,
    payload: object = _MISSING,
) -> ContractViolation:
    """Create a ContractViolation and log it; the caller raises it.

    Broken RESULTANT_* configuration never replaces the violation: the
    contract defaults are used instead.

    Example:
        >>> raise violation(ViolationCode.WRONG_VARIANT, "failure", "not a failure", variant="Success")
    """
    exc = ContractViolation.create(code, operation, message, variant=variant, payload=payload)
    if _contract_settings().log_violations:
        get_logger("resultant").warning("contract violation", **exc.violation.model_dump(mode="json"))
    return exc


def _contract_settings() -> ContractSettings:
    try:
        return get_settings().contracts
    except ValidationError:
        return ContractSettings.model_construct()


def _truncate(text: str) -> str:
    limit = _contract_settings().repr_limit
    return text if len(text) <= limit else f"{text[:limit - 3]}..."
