"""
Error messaging for the command-line front end.

Turns exceptions raised at the engine boundary into ErrorContext objects
with a readable message, the technical details and recovery steps.
"""

from typing import Any, Dict, List, Optional
from dataclasses import dataclass, field
from enum import Enum
import json


class ErrorSeverity(Enum):
    """Error severity classification."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


@dataclass
class ErrorContext:
    """
    Structured error context for user-facing messages.

    Attributes:
        message: Readable error description
        severity: Error severity level
        technical_details: Technical error info (for logs/debugging)
        context: Additional context (file, product, operation)
        recovery_steps: Actions the user can take
        error_code: Short code for documentation/support
    """
    message: str
    severity: ErrorSeverity
    technical_details: str
    context: Dict[str, Any] = field(default_factory=dict)
    recovery_steps: List[str] = field(default_factory=list)
    error_code: Optional[str] = None

    def format_for_display(self, include_technical: bool = False) -> str:
        """
        Format error for terminal output.

        Args:
            include_technical: Include technical details in message

        Returns:
            Multi-line message
        """
        lines = [self.message]

        if self.context:
            lines.append("")
            lines.append("Details:")
            for key, value in self.context.items():
                if value is not None:
                    lines.append(f"  - {key}: {value}")

        if self.recovery_steps:
            lines.append("")
            lines.append("Suggested actions:")
            for i, step in enumerate(self.recovery_steps, 1):
                lines.append(f"  {i}. {step}")

        if include_technical and self.technical_details:
            lines.append("")
            lines.append("Technical details:")
            lines.append(f"  {self.technical_details}")

        if self.error_code:
            lines.append("")
            lines.append(f"Error code: {self.error_code}")

        return "\n".join(lines)

    def format_for_log(self) -> str:
        """Format error for structured logging."""
        context_str = ", ".join(f"{k}={v}" for k, v in self.context.items() if v is not None)
        return f"[{self.severity.value.upper()}] {self.message} | Context: {context_str} | Technical: {self.technical_details}"


class ErrorFormatter:
    """Transforms exceptions into ErrorContext objects."""

    @staticmethod
    def format_validation_error(
        exc: Exception,
        operation: str,
        context: Optional[Dict[str, Any]] = None,
    ) -> ErrorContext:
        """
        Format contract violations (ValueError from models or the engine).

        Args:
            exc: The ValueError raised
            operation: Operation attempted (e.g. "forecast")
            context: Additional context

        Returns:
            ErrorContext with validation guidance
        """
        ctx = {"Operation": operation}
        if context:
            ctx.update(context)

        message_lower = str(exc).lower()
        recovery_steps = ["Fix the field named in the message and retry"]
        if "date" in message_lower:
            recovery_steps.append("Dates use ISO format: YYYY-MM-DD (e.g. 2026-01-28)")
        if "forecast_days" in message_lower:
            recovery_steps.append("The forecast horizon must be a positive whole number of days")
        if "impact" in message_lower:
            recovery_steps.append("Event impact multipliers must lie between 0.5 and 2.0")

        return ErrorContext(
            message=f"Invalid input: {exc}",
            severity=ErrorSeverity.WARNING,
            technical_details=f"{type(exc).__name__}: {exc}",
            context=ctx,
            recovery_steps=recovery_steps,
            error_code="VAL_001",
        )

    @staticmethod
    def format_payload_error(
        exc: Exception,
        file_path: str,
    ) -> ErrorContext:
        """
        Format errors raised while decoding an inputs JSON payload.

        Args:
            exc: JSONDecodeError, KeyError or TypeError
            file_path: Payload file

        Returns:
            ErrorContext with payload guidance
        """
        if isinstance(exc, json.JSONDecodeError):
            return ErrorContext(
                message=f"File is not valid JSON: {file_path}",
                severity=ErrorSeverity.ERROR,
                technical_details=f"line {exc.lineno}, column {exc.colno}: {exc.msg}",
                context={"File": file_path},
                recovery_steps=[
                    "Check the file with a JSON validator",
                    "Make sure the file is UTF-8 encoded",
                ],
                error_code="PAY_001",
            )

        if isinstance(exc, KeyError):
            return ErrorContext(
                message=f"Required field missing from payload: {exc}",
                severity=ErrorSeverity.ERROR,
                technical_details=f"KeyError: {exc}",
                context={"File": file_path},
                recovery_steps=[
                    "Required fields: productId, productCategory, historicalSales, location",
                    "location needs county, isUrban and population",
                ],
                error_code="PAY_002",
            )

        return ErrorContext(
            message=f"Malformed payload: {exc}",
            severity=ErrorSeverity.ERROR,
            technical_details=f"{type(exc).__name__}: {exc}",
            context={"File": file_path},
            recovery_steps=["Check the field types against the documented payload"],
            error_code="PAY_999",
        )

    @staticmethod
    def format_io_error(
        exc: Exception,
        file_path: str,
        operation: str,
    ) -> ErrorContext:
        """
        Format I/O errors (file not found, permission denied, etc.).

        Args:
            exc: I/O exception
            file_path: File path that caused the error
            operation: Operation attempted (read, write)

        Returns:
            ErrorContext with I/O error guidance
        """
        if isinstance(exc, FileNotFoundError):
            return ErrorContext(
                message=f"File not found: {file_path}",
                severity=ErrorSeverity.ERROR,
                technical_details=str(exc),
                context={"File": file_path, "Operation": operation},
                recovery_steps=[
                    "Check that the file path is correct",
                    "Relative paths are resolved from the current directory",
                ],
                error_code="IO_001",
            )

        if isinstance(exc, PermissionError):
            return ErrorContext(
                message=f"Insufficient permissions for: {file_path}",
                severity=ErrorSeverity.ERROR,
                technical_details=str(exc),
                context={"File": file_path, "Operation": operation},
                recovery_steps=["Check read/write permissions on the file and its directory"],
                error_code="IO_002",
            )

        return ErrorContext(
            message=f"I/O error during {operation}: {file_path}",
            severity=ErrorSeverity.ERROR,
            technical_details=str(exc),
            context={"File": file_path, "Operation": operation},
            recovery_steps=[
                "Check available disk space",
                "Retry the operation",
            ],
            error_code="IO_003",
        )
