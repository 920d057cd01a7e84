"""
Field descriptor models.

A descriptor is the server-supplied description of one form input: its
name, type tag, display strings, constraints and current value. The list
of descriptors is the only thing the descriptor store persists.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from dynaform.errors import DescriptorError

FieldValue = str | int | float | bool | None


class FieldKind(str, Enum):
    """Known field kinds. Each one selects a validation strategy."""

    TEXT = "text"
    NUMBER = "number"
    EMAIL = "email"
    TEL = "tel"
    CHECKBOX = "checkbox"

    @classmethod
    def from_type(cls, type_tag: str | None) -> "FieldKind":
        """Map a raw ``type`` tag to a kind, falling back to TEXT."""
        try:
            return cls((type_tag or "").lower())
        except ValueError:
            return cls.TEXT


class FieldDescriptor(BaseModel):
    """
    Description of a single form input.

    ``type`` is kept as the raw string so that unknown tags survive a
    fetch/replace round trip; use ``kind`` for dispatch. Keys the model
    does not know about are preserved as extras for the same reason.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    name: str = Field(..., min_length=1, description="Unique key within the form")
    type: str = Field(default="text", description="Type tag: text, number, email, tel, checkbox")
    label: str | None = Field(default=None, description="Human-readable label")
    placeholder: str | None = Field(default=None, description="Placeholder text")
    description: str | None = Field(default=None, description="Help text")
    required: bool = Field(default=False, description="Whether a value is required")
    disabled: bool = Field(default=False, description="Rendering hint only")
    value: FieldValue = Field(default=None, description="Current value")
    row_index: int | None = Field(default=None, alias="rowIndex", description="Layout hint")
    variant: str | None = Field(default=None, description="Rendering control selector")
    checked: bool | None = Field(default=None, description="Initial checked state")

    @property
    def kind(self) -> FieldKind:
        return FieldKind.from_type(self.type)

    @property
    def display_name(self) -> str:
        return self.label or self.name

    def to_wire(self) -> dict[str, Any]:
        """Dump the descriptor the way it travels over the wire."""
        return self.model_dump(by_alias=True, exclude_unset=True, mode="json")


_descriptor_list = TypeAdapter(list[FieldDescriptor])


def parse_descriptors(data: Any) -> list[FieldDescriptor]:
    """
    Validate a decoded JSON array into descriptors.

    Raises:
        DescriptorError: If the payload is not a list of descriptors or
            two descriptors share a name.
    """
    try:
        descriptors = _descriptor_list.validate_python(data)
    except ValidationError as e:
        raise DescriptorError(
            "Invalid descriptor list",
            details={"errors": e.error_count(), "first": e.errors()[0]["msg"]},
        ) from e

    seen: set[str] = set()
    duplicates: list[str] = []
    for descriptor in descriptors:
        if descriptor.name in seen:
            duplicates.append(descriptor.name)
        seen.add(descriptor.name)

    if duplicates:
        raise DescriptorError(
            "Descriptor names must be unique",
            details={"duplicates": ", ".join(duplicates)},
        )

    return descriptors


def dump_descriptors(descriptors: list[FieldDescriptor]) -> list[dict[str, Any]]:
    """Serialize descriptors to their wire form."""
    return [d.to_wire() for d in descriptors]
