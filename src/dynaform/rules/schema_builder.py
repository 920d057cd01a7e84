"""
Schema Builder.

Turns a list of field descriptors into a ValidationRuleset: one rule per
descriptor name plus the synthetic ``contact`` rule. Each rule is a
pydantic TypeAdapter over a single value, so coercion and error
reporting go through pydantic's own machinery.
"""

import math
import re
from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Annotated, Any

from pydantic import AfterValidator, TypeAdapter, ValidationError
from pydantic_core import PydanticCustomError

from dynaform.models.field_descriptor import FieldDescriptor, FieldKind
from dynaform.models.validation_result import FieldValidationError, ValidationResult
from dynaform.rules import constants as c

Check = Callable[[Any], Any]


def _require_string(value: Any) -> str:
    if not isinstance(value, str):
        raise PydanticCustomError("string_type", c.STRING_TYPE_MESSAGE)
    return value


def coerce_number(value: Any) -> int | float | None:
    """
    Coerce an input representation to a number.

    Blank strings coerce to 0, integral results come back as ``int``.
    Returns None when the value is not numeric (including NaN/inf,
    digit separators and ints too large for a float).
    """
    if isinstance(value, (bool, int, float)):
        try:
            number = float(value)
        except OverflowError:
            return None
    elif isinstance(value, str):
        text = value.strip()
        if "_" in text:
            return None
        if not text:
            number = 0.0
        else:
            try:
                number = float(text)
            except ValueError:
                return None
    else:
        return None

    if not math.isfinite(number):
        return None
    return int(number) if number.is_integer() else number


def _optional(check: Check) -> Check:
    """Let absence (None) through untouched; blank strings are still checked."""

    def optional_check(value: Any) -> Any:
        if value is None:
            return value
        return check(value)

    return optional_check


def _pattern_check(pattern: re.Pattern[str], error_type: str, message: str) -> Check:
    def check(value: Any) -> str:
        if value is None:
            raise PydanticCustomError("missing", c.MISSING_MESSAGE)
        text = _require_string(value)
        if not pattern.fullmatch(text):
            raise PydanticCustomError(error_type, message)
        return text

    return check


def _number_check(
    bounds: tuple[int, int],
    type_message: str,
    min_message: str,
    max_message: str,
) -> Check:
    low, high = bounds

    def check(value: Any) -> int | float:
        number = coerce_number(value)
        if number is None:
            raise PydanticCustomError("number_type", type_message)
        if number < low:
            raise PydanticCustomError("too_small", min_message)
        if number > high:
            raise PydanticCustomError("too_big", max_message)
        return number

    return check


def _checkbox_check(value: Any) -> bool | None:
    if value is None or isinstance(value, bool):
        return value
    raise PydanticCustomError("bool_type", c.BOOLEAN_TYPE_MESSAGE)


def _required_text_check(display_name: str) -> Check:
    def check(value: Any) -> str:
        text = _require_string("" if value is None else value).strip()
        if not text:
            raise PydanticCustomError(
                "required",
                c.REQUIRED_MESSAGE_TEMPLATE,
                {"name": display_name},
            )
        return text

    return check


def _optional_text_check(value: Any) -> str | None:
    if value is None:
        return None
    return _require_string(value)


def _contact_check(value: Any) -> str:
    if isinstance(value, str) and (
        c.EMAIL_PATTERN.fullmatch(value) or c.PHONE_PATTERN.fullmatch(value)
    ):
        return value
    raise PydanticCustomError("invalid_contact", c.CONTACT_MESSAGE)


@dataclass
class FieldRule:
    """Validation rule for one field."""

    name: str
    kind: FieldKind
    check: Check = field(repr=False)
    required: bool = False
    pattern: str | None = None
    minimum: int | None = None
    maximum: int | None = None
    synthetic: bool = False

    def __post_init__(self) -> None:
        self._adapter = TypeAdapter(Annotated[Any, AfterValidator(self.check)])

    def validate(self, value: Any) -> ValidationResult:
        """Validate and coerce a single value."""
        try:
            coerced = self._adapter.validate_python(value)
        except ValidationError as e:
            return ValidationResult(
                is_valid=False,
                errors=[
                    FieldValidationError(
                        field_name=self.name,
                        error_type=err["type"],
                        message=err["msg"],
                        received=value,
                    )
                    for err in e.errors()
                ],
            )
        return ValidationResult(is_valid=True, validated_data={self.name: coerced})

    def to_json_schema(self) -> dict[str, Any]:
        """Export this rule as a JSON Schema property."""
        prop: dict[str, Any] = {
            "type": {
                FieldKind.NUMBER: "number",
                FieldKind.CHECKBOX: "boolean",
            }.get(self.kind, "string"),
        }
        if self.kind == FieldKind.EMAIL:
            prop["format"] = "email"
        if self.pattern:
            prop["pattern"] = self.pattern
        if self.minimum is not None:
            prop["minimum"] = self.minimum
        if self.maximum is not None:
            prop["maximum"] = self.maximum
        if self.kind == FieldKind.TEXT and self.required:
            prop["minLength"] = 1
        return prop


def build_rule(descriptor: FieldDescriptor) -> FieldRule:
    """
    Build the rule for one descriptor.

    Dispatches on ``descriptor.kind``; unknown type tags have already
    been mapped to TEXT by FieldKind.from_type.
    """
    kind = descriptor.kind
    required = descriptor.required

    if kind == FieldKind.EMAIL:
        check = _pattern_check(c.EMAIL_PATTERN, "invalid_email", c.EMAIL_MESSAGE)
        return FieldRule(
            name=descriptor.name,
            kind=kind,
            check=check if required else _optional(check),
            required=required,
            pattern=c.EMAIL_PATTERN.pattern,
        )

    if kind == FieldKind.NUMBER:
        if descriptor.name == c.AGE_FIELD:
            bounds = c.AGE_BOUNDS
            check = _number_check(bounds, c.AGE_TYPE_MESSAGE, c.AGE_MIN_MESSAGE, c.AGE_MAX_MESSAGE)
        else:
            bounds = c.NUMBER_BOUNDS
            check = _number_check(
                bounds,
                c.NUMBER_TYPE_MESSAGE,
                c.NUMBER_MIN_MESSAGE_TEMPLATE.format(bound=bounds[0]),
                c.NUMBER_MAX_MESSAGE_TEMPLATE.format(bound=bounds[1]),
            )
        return FieldRule(
            name=descriptor.name,
            kind=kind,
            check=check if required else _optional(check),
            required=required,
            minimum=bounds[0],
            maximum=bounds[1],
        )

    if kind == FieldKind.TEL:
        check = _pattern_check(c.PHONE_PATTERN, "invalid_phone", c.PHONE_MESSAGE)
        return FieldRule(
            name=descriptor.name,
            kind=kind,
            check=check if required else _optional(check),
            required=required,
            pattern=c.PHONE_PATTERN.pattern,
        )

    if kind == FieldKind.CHECKBOX:
        # Unchecked is always valid, whatever ``required`` says.
        return FieldRule(name=descriptor.name, kind=kind, check=_checkbox_check)

    return FieldRule(
        name=descriptor.name,
        kind=FieldKind.TEXT,
        check=_required_text_check(descriptor.display_name) if required else _optional_text_check,
        required=required,
    )


def build_contact_rule() -> FieldRule:
    """Build the rule for the synthetic ``contact`` field."""
    return FieldRule(
        name=c.CONTACT_FIELD,
        kind=FieldKind.TEXT,
        check=_contact_check,
        required=True,
        synthetic=True,
    )


class ValidationRuleset(Mapping[str, FieldRule]):
    """Mapping of field name to rule, in descriptor order."""

    def __init__(self, rules: Iterable[FieldRule]):
        self._rules: dict[str, FieldRule] = {rule.name: rule for rule in rules}

    def __getitem__(self, name: str) -> FieldRule:
        return self._rules[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __repr__(self) -> str:
        return f"ValidationRuleset({list(self._rules)})"

    def validate_field(self, name: str, value: Any) -> list[FieldValidationError]:
        """Validate a single field; names without a rule always pass."""
        rule = self._rules.get(name)
        if rule is None:
            return []
        return rule.validate(value).errors

    def validate(
        self,
        values: Mapping[str, Any],
        skip: Iterable[str] = (),
    ) -> ValidationResult:
        """
        Validate a full value map.

        Args:
            values: Live values keyed by field name. Missing keys are
                validated as None. Keys without a rule are dropped.
            skip: Field names to leave out of this run.

        Returns:
            ValidationResult with coerced data when every rule passes.
        """
        skipped = set(skip)
        return ValidationResult.merge(
            [
                rule.validate(values.get(name))
                for name, rule in self._rules.items()
                if name not in skipped
            ]
        )

    def to_json_schema(self) -> dict[str, Any]:
        """Export the ruleset as a JSON Schema object."""
        return {
            "$schema": "https://json-schema.org/draft/2020-12/schema",
            "type": "object",
            "properties": {name: rule.to_json_schema() for name, rule in self._rules.items()},
            "required": [name for name, rule in self._rules.items() if rule.required],
        }


def build_ruleset(descriptors: Iterable[FieldDescriptor]) -> ValidationRuleset:
    """
    Build a validation ruleset from a descriptor list.

    Never fails. The synthetic ``contact`` rule is always added last and
    replaces any descriptor that happens to share its name.
    """
    rules = [build_rule(d) for d in descriptors if d.name != c.CONTACT_FIELD]
    rules.append(build_contact_rule())
    return ValidationRuleset(rules)
