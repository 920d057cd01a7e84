"""
Visibility Rule Evaluator.

Decides which fields a presentation layer should draw given the current
live values. Only the synthetic ``contact`` field is conditional.
"""

from collections.abc import Iterable, Mapping
from typing import Any

from dynaform.models.field_descriptor import FieldDescriptor
from dynaform.rules.constants import AGE_FIELD, CONTACT_FIELD, CONTACT_MIN_AGE
from dynaform.rules.schema_builder import coerce_number


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def contact_visible(values: Mapping[str, Any]) -> bool:
    """True when ``age`` is present and numerically greater than 18."""
    age = values.get(AGE_FIELD)
    if _is_blank(age):
        return False
    number = coerce_number(age)
    return number is not None and number > CONTACT_MIN_AGE


def visible_fields(
    descriptors: Iterable[FieldDescriptor],
    values: Mapping[str, Any],
) -> list[str]:
    """
    Names of the fields to render, in order.

    Every descriptor is shown except one named ``contact``; the synthetic
    contact field is appended when the age rule allows it.
    """
    names = [d.name for d in descriptors if d.name != CONTACT_FIELD]
    if contact_visible(values):
        names.append(CONTACT_FIELD)
    return names
