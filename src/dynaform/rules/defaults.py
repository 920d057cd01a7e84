"""Default Value Deriver: initial live values from descriptor state."""

from collections.abc import Iterable

from dynaform.models.field_descriptor import FieldDescriptor, FieldKind, FieldValue


def derive_default(descriptor: FieldDescriptor) -> FieldValue:
    if descriptor.kind == FieldKind.CHECKBOX:
        return bool(descriptor.value)
    return descriptor.value if descriptor.value is not None else ""


def derive_defaults(descriptors: Iterable[FieldDescriptor]) -> dict[str, FieldValue]:
    """
    Map each descriptor name to its initial value.

    Checkboxes coerce their value to bool (absent is False); every other
    field uses its value, or an empty string when it has none.
    """
    return {d.name: derive_default(d) for d in descriptors}
