"""
Data models for dynaform.

This module contains Pydantic models for:
- Field descriptors (the persisted form definition)
- Validation results
- The rendering surface (form views)
"""

from dynaform.models.field_descriptor import (
    FieldDescriptor,
    FieldKind,
    FieldValue,
    dump_descriptors,
    parse_descriptors,
)
from dynaform.models.form_view import (
    FormState,
    FormView,
    RenderedField,
)
from dynaform.models.validation_result import (
    FieldValidationError,
    ValidationResult,
)

__all__ = [
    # Descriptors
    "FieldDescriptor",
    "FieldKind",
    "FieldValue",
    "parse_descriptors",
    "dump_descriptors",
    # Rendering
    "FormState",
    "FormView",
    "RenderedField",
    # Validation
    "ValidationResult",
    "FieldValidationError",
]
