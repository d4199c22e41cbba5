"""covgate error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Report parsing
- 9xxx: Internal

Only conditions that make a report unreadable or ambiguous are raised.
Tolerated malformations, unresolved paths and missing gate metrics are
represented as data by the components that meet them.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002
    CONFIG_FILE_NOT_FOUND = 2004

    # Report parsing (3xxx)
    REPORT_INVALID_XML = 3001
    REPORT_INVALID_JSON = 3002
    REPORT_UNKNOWN_FORMAT = 3003
    REPORT_UNDETECTABLE_FORMAT = 3004
    UNRECOGNIZED_MUTATION_STATUS = 3010

    # Internal (9xxx)
    INTERNAL_ERROR = 9001


@dataclass(frozen=True, slots=True)
class CovgateError(Exception):
    """Base error with structured context for JSON output."""

    code: ErrorCode
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'REPORT_INVALID_XML')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(CovgateError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )

    @classmethod
    def file_not_found(cls, path: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_FILE_NOT_FOUND,
            message=f"Config file not found: {path}",
            details={"path": path},
        )


class ReportParseError(CovgateError):
    """A coverage or mutation report that cannot be read as a whole."""

    @classmethod
    def invalid_xml(cls, format_id: str, reason: str) -> "ReportParseError":
        return cls(
            code=ErrorCode.REPORT_INVALID_XML,
            message=f"Invalid {format_id} XML: {reason}",
            details={"format": format_id, "reason": reason},
        )

    @classmethod
    def invalid_json(cls, format_id: str, reason: str) -> "ReportParseError":
        return cls(
            code=ErrorCode.REPORT_INVALID_JSON,
            message=f"Invalid {format_id} JSON: {reason}",
            details={"format": format_id, "reason": reason},
        )

    @classmethod
    def unknown_format(cls, format_id: str, valid: list[str]) -> "ReportParseError":
        return cls(
            code=ErrorCode.REPORT_UNKNOWN_FORMAT,
            message=f"Unknown report format: {format_id!r}. Valid formats: {', '.join(valid)}",
            details={"format": format_id, "valid": valid},
        )

    @classmethod
    def undetectable_format(cls, kind: str) -> "ReportParseError":
        return cls(
            code=ErrorCode.REPORT_UNDETECTABLE_FORMAT,
            message=f"Could not detect {kind} report format; declare it explicitly",
            details={"kind": kind},
        )


class UnrecognizedMutationStatus(ReportParseError):
    """A mutant status outside the closed status enumeration.

    Raised instead of guessing a status, since a wrong guess changes the
    mutation score.
    """

    @classmethod
    def from_status(
        cls, status: str, mutant_id: str | None = None
    ) -> "UnrecognizedMutationStatus":
        where = f" (mutant {mutant_id})" if mutant_id else ""
        return cls(
            code=ErrorCode.UNRECOGNIZED_MUTATION_STATUS,
            message=f"Unrecognized mutation status {status!r}{where}",
            details={"status": status, "mutant_id": mutant_id},
        )

    @property
    def status(self) -> str:
        return str(self.details.get("status", ""))

    @property
    def mutant_id(self) -> str | None:
        return self.details.get("mutant_id")


class InternalError(CovgateError):
    """Internal/unexpected errors."""

    @classmethod
    def unexpected(cls, reason: str, **details: Any) -> "InternalError":
        return cls(
            code=ErrorCode.INTERNAL_ERROR,
            message=f"Internal error: {reason}",
            details=details,
        )
