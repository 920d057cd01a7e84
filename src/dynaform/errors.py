"""
Exception hierarchy for dynaform.

Per-field validation failures are not exceptions; they are reported as
FieldValidationError records inside a ValidationResult. The classes here
cover the failures that cross a collaborator boundary.
"""

from typing import Any

__all__ = [
    "FormError",
    "DescriptorError",
    "FetchError",
    "SubmitError",
    "FormStateError",
]


class FormError(Exception):
    """Base exception for all dynaform errors."""

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}

        parts = [message]
        if details:
            parts.append("Details:")
            parts.extend(f"  {k}: {v}" for k, v in details.items())

        super().__init__("\n".join(parts) if len(parts) > 1 else message)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for structured logging and JSON responses."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


class DescriptorError(FormError):
    """The descriptor list is malformed (bad shape or duplicate names)."""


class FetchError(FormError):
    """The descriptor list could not be retrieved.

    Fatal to a form session until it is reloaded.
    """


class SubmitError(FormError):
    """The descriptor store rejected or failed a replace.

    Recoverable: the edited values are kept and the user may resubmit.
    """


class FormStateError(FormError):
    """An operation was attempted in a state that does not allow it."""
