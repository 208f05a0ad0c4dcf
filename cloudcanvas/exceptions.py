"""
Custom Exception Hierarchy for Cloud Canvas

Generation itself never fails on user input: unknown kinds, missing
attributes and dangling references all degrade to placeholder output. The
exceptions below cover the remaining fatal paths, which are authoring bugs in
the static knowledge base and unreadable input at the CLI boundary.
"""

from typing import Any, Dict, Optional


class CloudCanvasError(Exception):
    """
    Base exception class for all Cloud Canvas related errors.

    Provides structured error information including context, error codes,
    and optional recovery suggestions.
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
        recovery_suggestion: Optional[str] = None,
    ) -> None:
        """
        Initialize the base exception.

        Args:
            message: Human-readable error message
            error_code: Optional error code for programmatic handling
            context: Optional dictionary with error context
            cause: Optional underlying exception that caused this error
            recovery_suggestion: Optional suggestion for error recovery
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.context = context or {}
        self.cause = cause
        self.recovery_suggestion = recovery_suggestion

    def __str__(self) -> str:
        """Return a formatted error message with context."""
        result = self.message
        if self.error_code:
            result = f"[{self.error_code}] {result}"
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            result += f" (context: {context_str})"
        if self.cause:
            result += f" (caused by: {self.cause})"
        if self.recovery_suggestion:
            result += f" (suggestion: {self.recovery_suggestion})"
        return result

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code,
            "context": self.context,
            "cause": str(self.cause) if self.cause else None,
            "recovery_suggestion": self.recovery_suggestion,
        }


class TemplateSyntaxError(CloudCanvasError):
    """Raised when a template has malformed conditional-block markers."""

    def __init__(
        self,
        message: str,
        position: Optional[int] = None,
        block_name: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        context = kwargs.get("context", {})
        if position is not None:
            context["position"] = position
        if block_name:
            context["block"] = block_name
        kwargs["context"] = context
        kwargs.setdefault("error_code", "TEMPLATE_SYNTAX_ERROR")
        super().__init__(message, **kwargs)
        self.position = position
        self.block_name = block_name


class KnowledgeBaseError(CloudCanvasError):
    """Raised when a knowledge base entry fails load-time validation."""

    def __init__(
        self, message: str, resource_kind: Optional[str] = None, **kwargs: Any
    ) -> None:
        context = kwargs.get("context", {})
        if resource_kind:
            context["resource_kind"] = resource_kind
        kwargs["context"] = context
        kwargs.setdefault("error_code", "KNOWLEDGE_BASE_INVALID")
        kwargs.setdefault(
            "recovery_suggestion",
            "Fix the template or attribute lists of the offending catalog entry",
        )
        super().__init__(message, **kwargs)
        self.resource_kind = resource_kind


class GraphInputError(CloudCanvasError):
    """Raised when a graph file cannot be read or does not validate."""

    def __init__(self, message: str, path: Optional[str] = None, **kwargs: Any) -> None:
        context = kwargs.get("context", {})
        if path:
            context["path"] = path
        kwargs["context"] = context
        kwargs.setdefault("error_code", "GRAPH_INPUT_INVALID")
        kwargs.setdefault(
            "recovery_suggestion",
            "Provide a JSON or YAML document with 'nodes' and 'edges' lists",
        )
        super().__init__(message, **kwargs)
