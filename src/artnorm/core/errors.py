"""Exceptions raised outside the per-record path.

Record content never raises: bad records pass through with a warning.
What does raise is the surrounding machinery, namely the configuration
file, the CLI input framing and routes to mappers that do not exist.
Each exception carries a StructuredError that the CLI prints on stdout.
"""

import sys
from typing import Any, NoReturn

from artnorm.core import logging as log
from artnorm.models.error import ErrorCode, StructuredError


class ArtnormError(Exception):
    """Base exception; `error` holds the payload shown to the caller."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        remediation: str,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.error = StructuredError(
            code=code,
            message=message,
            remediation=remediation,
            context=context or None,
        )


class ConfigError(ArtnormError):
    """Configuration file missing, unreadable or failing validation."""

    def __init__(self, message: str, path: str | None = None, errors: list[str] | None = None):
        context: dict[str, Any] = {}
        if path:
            context["path"] = path
        if errors:
            context["errors"] = errors
        super().__init__(
            ErrorCode.CONFIG_ERROR,
            message,
            remediation="Check the file against the plugins/types/sentinel_timestamp keys",
            context=context,
        )


class InputFormatError(ArtnormError):
    """An input line is neither a JSON record nor a tagged payload."""

    def __init__(self, message: str, line_number: int | None = None):
        super().__init__(
            ErrorCode.INVALID_FORMAT,
            message,
            remediation="Provide one JSON record or one '<plugin>:<payload>' line per input line",
            context={"line_number": line_number} if line_number is not None else None,
        )


class UnknownMapperError(ArtnormError):
    """A route names a mapper that is not registered."""

    def __init__(self, mapper_name: str, supported: list[str]):
        super().__init__(
            ErrorCode.UNSUPPORTED_ARTIFACT,
            f"Mapper '{mapper_name}' is not registered",
            remediation=f"Route to one of: {', '.join(supported)}",
            context={"mapper": mapper_name, "supported": supported},
        )


def handle_error(error: Exception, exit_code: int = 1) -> NoReturn:
    """Print the structured form of an error on stdout and exit.

    Exceptions that are not ArtnormError are reported as INTERNAL_ERROR
    and logged on stderr as well.
    """
    from artnorm.cli.output import output_error

    if isinstance(error, ArtnormError):
        structured = error.error
    else:
        log.error("Unexpected error", type=type(error).__name__, error=str(error))
        structured = StructuredError(
            code=ErrorCode.INTERNAL_ERROR,
            message=str(error),
            remediation="Report this together with the input that triggered it",
            context={"type": type(error).__name__},
        )

    output_error(structured)
    sys.exit(exit_code)
