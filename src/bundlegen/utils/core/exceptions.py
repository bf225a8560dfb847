"""
Basic exception classes for bundlegen.

This module contains the exception hierarchy used throughout the code
generation pipeline without creating import cycles.
"""

from __future__ import annotations

from enum import Enum


class ErrorSeverity(Enum):
    """Error severity levels for classification and handling."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCategory(Enum):
    """Categories of errors for appropriate handling strategies."""

    CONFIGURATION = "configuration"
    BUNDLE = "bundle"
    GENERATION = "generation"
    RESOURCE = "resource"
    UNKNOWN = "unknown"


class BundleGenError(Exception):
    """Base exception class for bundlegen specific errors."""

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.UNKNOWN,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        user_message: str | None = None,
        context: object | None = None,
        recoverable: bool = True,
    ) -> None:
        super().__init__(message)
        self.category: ErrorCategory = category
        self.severity: ErrorSeverity = severity
        self.user_message: str = user_message or message
        self.context: object | None = context
        self.recoverable: bool = recoverable


class ConfigurationError(BundleGenError):
    """Configuration-related errors (invalid key filter, unknown options)."""

    def __init__(
        self,
        message: str,
        user_message: str | None = None,
        context: object | None = None,
    ) -> None:
        super().__init__(
            message,
            category=ErrorCategory.CONFIGURATION,
            severity=ErrorSeverity.HIGH,
            recoverable=False,
            user_message=user_message,
            context=context,
        )


class BundleError(BundleGenError):
    """Resource bundle read errors."""

    def __init__(
        self,
        message: str,
        user_message: str | None = None,
        context: object | None = None,
        recoverable: bool = True,
    ) -> None:
        super().__init__(
            message,
            category=ErrorCategory.BUNDLE,
            severity=ErrorSeverity.MEDIUM,
            user_message=user_message,
            context=context,
            recoverable=recoverable,
        )


class GenerationError(BundleGenError):
    """Errors raised while rendering or writing generated sources."""

    def __init__(
        self,
        message: str,
        user_message: str | None = None,
        context: object | None = None,
        recoverable: bool = True,
    ) -> None:
        super().__init__(
            message,
            category=ErrorCategory.GENERATION,
            severity=ErrorSeverity.MEDIUM,
            user_message=user_message,
            context=context,
            recoverable=recoverable,
        )
