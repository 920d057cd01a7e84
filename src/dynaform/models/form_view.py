"""
Rendering surface models.

A FormView is a read-only snapshot of a form session handed to a
presentation layer. Nothing in it is shared with the controller's live
state, so renderers cannot mutate the session.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class FormState(str, Enum):
    """Lifecycle of a form session."""

    LOADING = "loading"
    READY = "ready"
    SUBMITTING = "submitting"
    ERROR = "error"


class RenderedField(BaseModel):
    """Everything a presentation layer needs to draw one input."""

    model_config = ConfigDict(frozen=True)

    name: str
    type: str
    variant: str | None = None
    label: str
    placeholder: str | None = None
    description: str | None = None
    value: Any = None
    error: str | None = None
    required: bool = False
    disabled: bool = False
    interactions: int = 0
    synthetic: bool = Field(default=False, description="True for fields with no backing descriptor")


class FormView(BaseModel):
    """Snapshot of a form session for rendering."""

    model_config = ConfigDict(frozen=True)

    state: FormState
    fields: list[RenderedField] = Field(default_factory=list)
    errors: dict[str, str] = Field(default_factory=dict, description="First error per field, hidden fields included")
    load_error: str | None = None
    submit_enabled: bool = False
    submit_label: str = "Submit"
    reset_label: str = "Reset"

    def get_field(self, name: str) -> RenderedField | None:
        """Look up a rendered field by name."""
        for field in self.fields:
            if field.name == name:
                return field
        return None

    @property
    def field_names(self) -> list[str]:
        return [f.name for f in self.fields]
