"""
In-memory descriptor store.

The reference collaborator: holds one descriptor list and swaps it
wholesale on replace. Used by the reference server and by tests.
"""

import logging
from typing import Any

from dynaform.models.field_descriptor import FieldDescriptor, parse_descriptors
from dynaform.store.base import UPDATE_ACK_MESSAGE

logger = logging.getLogger("dynaform.store")

# Form served when no descriptors are supplied
SAMPLE_FORM: list[dict[str, Any]] = [
    {
        "checked": True,
        "description": "This is your public display name",
        "disabled": False,
        "name": "Username",
        "placeholder": "shadcn",
        "required": True,
        "type": "text",
        "rowIndex": 0,
        "value": "",
        "variant": "Input",
    },
    {
        "label": "Age",
        "name": "age",
        "placeholder": "Enter your age",
        "required": True,
        "rowIndex": 1,
        "type": "number",
        "value": 18,
        "variant": "Input",
    },
    {
        "label": "Agree to terms",
        "name": "terms_001",
        "checked": False,
        "required": True,
        "rowIndex": 2,
        "type": "checkbox",
        "variant": "Checkbox",
    },
]


class InMemoryDescriptorStore:
    """Descriptor store backed by a single in-process list."""

    def __init__(self, descriptors: list[FieldDescriptor] | None = None):
        self._descriptors = (
            list(descriptors) if descriptors is not None else parse_descriptors(SAMPLE_FORM)
        )
        self.fetch_count = 0
        self.replace_count = 0

    async def fetch(self) -> list[FieldDescriptor]:
        self.fetch_count += 1
        return [d.model_copy(deep=True) for d in self._descriptors]

    async def replace(self, descriptors: list[FieldDescriptor]) -> dict[str, Any]:
        self.replace_count += 1
        self._descriptors = [d.model_copy(deep=True) for d in descriptors]
        logger.info(f"Replaced descriptor list ({len(descriptors)} fields)")
        return {"message": UPDATE_ACK_MESSAGE}

    @property
    def descriptors(self) -> list[FieldDescriptor]:
        """Current list, for inspection."""
        return list(self._descriptors)
