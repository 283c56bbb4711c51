"""Custom exceptions for configuration management."""

from typing import List, Optional


class ConfigurationError(Exception):
    """
    Raised when the YAML file or the environment fails validation.

    Collects every validation error found in one pass, together with hints
    for fixing them, and renders them into a single readable message.
    """

    def __init__(
        self,
        message: str,
        errors: Optional[List[str]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        self.message = message
        self.errors = errors or []
        self.suggestions = suggestions or []
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        parts = [self.message]

        if self.errors:
            parts.append("\nValidation Errors:")
            parts.extend(f"  {i}. {error}" for i, error in enumerate(self.errors, 1))

        if self.suggestions:
            parts.append("\nSuggestions:")
            parts.extend(f"  - {suggestion}" for suggestion in self.suggestions)

        return "\n".join(parts)

    def add_error(self, error: str) -> None:
        """Add a validation error to the list."""
        self.errors.append(error)

    def add_suggestion(self, suggestion: str) -> None:
        """Add a helpful suggestion to the list."""
        self.suggestions.append(suggestion)
