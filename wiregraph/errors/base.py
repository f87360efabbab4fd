"""Base error classes with rich context for wiregraph."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional, Type, TypeVar

from loguru import logger
from pydantic import BaseModel, Field


class ErrorContext(BaseModel):
    """Rich context information for errors."""

    timestamp: datetime = Field(default_factory=datetime.now)
    user_message: Optional[str] = None
    technical_details: Dict[str, Any] = Field(default_factory=dict)
    suggestions: List[str] = Field(default_factory=list)
    related_errors: List[Dict[str, Any]] = Field(default_factory=list)

    def add_suggestion(self, suggestion: str) -> None:
        """Add a helpful suggestion for resolving the error."""
        self.suggestions.append(suggestion)

    def add_technical_detail(self, key: str, value: Any) -> None:
        """Add technical debugging information."""
        self.technical_details[key] = value

    def add_related_error(self, error: Exception) -> None:
        """Add a related error for context."""
        self.related_errors.append({
            "type": type(error).__name__,
            "message": str(error),
        })


T = TypeVar("T", bound="WiregraphError")


class WiregraphError(Exception):
    """Base exception class for wiregraph with rich context support."""

    def __init__(
        self,
        message: str,
        *,
        context: Optional[ErrorContext] = None,
        cause: Optional[Exception] = None,
        error_code: Optional[str] = None,
    ):
        """Initialize wiregraph error with context.

        Args:
            message: Human-readable error message
            context: Rich error context
            cause: Original exception that caused this error
            error_code: Unique error code for programmatic handling
        """
        super().__init__(message)
        self.message = message
        self.context = context or ErrorContext()
        self.cause = cause
        self.error_code = error_code or self._generate_error_code()

        self.context.user_message = message
        if cause:
            self.context.add_related_error(cause)

        self._log_error()

    def _generate_error_code(self) -> str:
        """Generate an error code from the class name."""
        class_name = self.__class__.__name__
        # Convert CamelCase to UPPER_SNAKE_CASE
        code = ""
        for i, char in enumerate(class_name):
            if i > 0 and char.isupper() and class_name[i - 1].islower():
                code += "_"
            code += char.upper()
        return code.replace("_ERROR", "")

    def _log_error(self) -> None:
        """Log the error with its code attached."""
        logger.bind(error_code=self.error_code).debug(
            f"{type(self).__name__}: {self.message}"
        )

    @classmethod
    def from_exception(
        cls: Type[T],
        exc: Exception,
        message: Optional[str] = None,
        **kwargs: Any,
    ) -> T:
        """Create error from another exception."""
        return cls(message or str(exc), cause=exc, **kwargs)

    def with_context(self: T, **kwargs: Any) -> T:
        """Add context information to the error."""
        for key, value in kwargs.items():
            self.context.add_technical_detail(key, value)
        return self

    def with_suggestion(self: T, suggestion: str) -> T:
        """Add a suggestion for resolving the error."""
        self.context.add_suggestion(suggestion)
        return self

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for serialization."""
        return {
            "error_type": self.__class__.__name__,
            "error_code": self.error_code,
            "message": self.message,
            "context": self.context.model_dump(mode="json"),
            "cause": str(self.cause) if self.cause else None,
        }
