"""Descriptor store interface."""

from typing import Any, Protocol

from dynaform.models.field_descriptor import FieldDescriptor

UPDATE_ACK_MESSAGE = "Form updated successfully!"


class DescriptorStore(Protocol):
    """
    Persistence collaborator for a form's descriptor list.

    Implementations raise FetchError from ``fetch`` and SubmitError from
    ``replace``. ``replace`` swaps the whole list; there is no patching
    and no partial failure.
    """

    async def fetch(self) -> list[FieldDescriptor]: ...

    async def replace(self, descriptors: list[FieldDescriptor]) -> dict[str, Any]: ...
