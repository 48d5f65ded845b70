"""Structured error payload written by the artnorm CLI."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class ErrorCode(str, Enum):
    """Codes a caller can branch on."""

    CONFIG_ERROR = "CONFIG_ERROR"
    INVALID_FORMAT = "INVALID_FORMAT"
    UNSUPPORTED_ARTIFACT = "UNSUPPORTED_ARTIFACT"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class StructuredError(BaseModel):
    """Error document emitted on stdout in place of further output.

    `remediation` tells the operator what to change; `retryable` is False
    for every error artnorm raises today since none depend on transient
    state.
    """

    code: ErrorCode = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="What went wrong")
    remediation: str = Field(..., description="How to fix the invocation or input")
    retryable: bool = Field(default=False, description="Whether the same call may succeed later")
    context: dict[str, Any] | None = Field(
        default=None,
        description="Details such as the config path or input line number",
    )

    model_config = {"extra": "forbid", "use_enum_values": True}
