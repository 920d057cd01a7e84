"""Tests for the schema builder."""

import pytest

from dynaform.models.field_descriptor import FieldDescriptor, FieldKind
from dynaform.rules.schema_builder import build_rule, build_ruleset, coerce_number


def messages(rule, value):
    return [e.message for e in rule.validate(value).errors]


class TestRulesetShape:
    """Tests for ruleset cardinality."""

    def test_one_rule_per_descriptor_plus_contact(self):
        """Every descriptor gets a rule and contact is always added."""
        ruleset = build_ruleset([
            FieldDescriptor(name="nickname", type="text"),
            FieldDescriptor(name="age", type="number"),
            FieldDescriptor(name="terms", type="checkbox"),
        ])
        assert list(ruleset) == ["nickname", "age", "terms", "contact"]
        assert len(ruleset) == 4

    def test_empty_descriptor_list(self):
        """An empty form still validates contact."""
        ruleset = build_ruleset([])
        assert list(ruleset) == ["contact"]
        assert ruleset["contact"].synthetic

    def test_contact_descriptor_is_replaced(self):
        """A descriptor named contact does not shadow the synthetic rule."""
        ruleset = build_ruleset([FieldDescriptor(name="contact", type="number")])
        assert len(ruleset) == 1
        assert ruleset["contact"].synthetic

    def test_unknown_type_falls_back_to_text(self):
        """Unrecognised type tags degrade to the text strategy."""
        rule = build_rule(FieldDescriptor(name="birthday", type="date", required=True))
        assert rule.kind == FieldKind.TEXT
        assert messages(rule, "") == ["birthday is required"]


class TestTextRule:
    """Tests for the default text strategy."""

    def test_required_rejects_empty_and_whitespace(self):
        rule = build_rule(FieldDescriptor(name="Username", required=True))
        assert messages(rule, "") == ["Username is required"]
        assert messages(rule, "   ") == ["Username is required"]
        assert messages(rule, None) == ["Username is required"]

    def test_required_message_uses_label(self):
        rule = build_rule(FieldDescriptor(name="user", label="Display name", required=True))
        assert messages(rule, "") == ["Display name is required"]

    def test_required_accepts_and_trims(self):
        rule = build_rule(FieldDescriptor(name="Username", required=True))
        result = rule.validate("  a ")
        assert result.is_valid
        assert result.validated_data == {"Username": "a"}

    def test_optional_accepts_empty(self):
        rule = build_rule(FieldDescriptor(name="bio"))
        assert rule.validate("").is_valid
        assert rule.validate(None).is_valid

    def test_rejects_non_string(self):
        rule = build_rule(FieldDescriptor(name="bio"))
        assert messages(rule, 5) == ["Expected string"]


class TestNumberRule:
    """Tests for number coercion and bounds."""

    @pytest.fixture
    def age_rule(self):
        return build_rule(FieldDescriptor(name="age", type="number", required=True))

    def test_age_in_range(self, age_rule):
        assert age_rule.validate(18).validated_data == {"age": 18}
        assert age_rule.validate(120).is_valid
        assert age_rule.validate(1).is_valid

    def test_age_coerced_from_string(self, age_rule):
        assert age_rule.validate("19").validated_data == {"age": 19}
        assert age_rule.validate(" 42.5 ").validated_data == {"age": 42.5}

    def test_age_out_of_range(self, age_rule):
        assert messages(age_rule, 121) == ["Age must be less than 120"]
        assert messages(age_rule, 0) == ["Age must be at least 1"]

    def test_age_not_numeric(self, age_rule):
        assert messages(age_rule, "abc") == ["Age must be a number"]
        assert messages(age_rule, "nan") == ["Age must be a number"]
        assert messages(age_rule, "1_000") == ["Age must be a number"]

    def test_age_too_large_for_float(self, age_rule):
        """Integers beyond float range are non-numeric, not a crash."""
        assert messages(age_rule, 10**400) == ["Age must be a number"]

    def test_required_blank_coerces_to_zero(self, age_rule):
        assert messages(age_rule, "") == ["Age must be at least 1"]

    def test_other_numbers_bounded_to_100(self):
        rule = build_rule(FieldDescriptor(name="quantity", type="number", required=True))
        assert messages(rule, 101) == ["Number must be less than or equal to 100"]
        assert messages(rule, 0) == ["Number must be greater than or equal to 1"]
        assert messages(rule, "many") == ["Expected number"]
        assert rule.validate("100").validated_data == {"quantity": 100}

    def test_optional_allows_absence(self):
        """Only None is absent; a blank string is still coerced and bounded."""
        rule = build_rule(FieldDescriptor(name="quantity", type="number"))
        assert rule.validate(None).validated_data == {"quantity": None}
        assert messages(rule, "") == ["Number must be greater than or equal to 1"]
        assert messages(rule, 500) == ["Number must be less than or equal to 100"]

    def test_optional_age_keeps_age_messages(self):
        rule = build_rule(FieldDescriptor(name="age", type="number"))
        assert messages(rule, 121) == ["Age must be less than 120"]


class TestPatternRules:
    """Tests for email and tel strategies."""

    def test_email(self):
        rule = build_rule(FieldDescriptor(name="mail", type="email", required=True))
        assert rule.validate("user@example.com").is_valid
        assert messages(rule, "user@example") == ["Invalid email format"]
        assert messages(rule, None) == ["Required"]

    def test_optional_email(self):
        rule = build_rule(FieldDescriptor(name="mail", type="email"))
        assert rule.validate(None).is_valid
        assert messages(rule, "") == ["Invalid email format"]
        assert messages(rule, "nope") == ["Invalid email format"]

    def test_tel(self):
        rule = build_rule(FieldDescriptor(name="phone", type="tel", required=True))
        assert rule.validate("555-123-4567").is_valid
        assert rule.validate("(555) 123-4567").is_valid
        assert rule.validate("+1234567890").is_valid
        assert messages(rule, "12345") == ["Invalid phone number format"]

    def test_optional_tel(self):
        rule = build_rule(FieldDescriptor(name="phone", type="tel"))
        assert rule.validate(None).is_valid
        assert messages(rule, "") == ["Invalid phone number format"]

    def test_trailing_newline_rejected(self):
        """The whole value must match, not just a prefix."""
        tel = build_rule(FieldDescriptor(name="phone", type="tel", required=True))
        email = build_rule(FieldDescriptor(name="mail", type="email", required=True))
        assert messages(tel, "555-123-4567\n") == ["Invalid phone number format"]
        assert messages(email, "a@b.co\n") == ["Invalid email format"]


class TestCheckboxRule:
    """Tests for the checkbox strategy."""

    def test_unchecked_passes_even_when_required(self):
        rule = build_rule(FieldDescriptor(name="terms", type="checkbox", required=True))
        assert not rule.required
        assert rule.validate(False).is_valid
        assert rule.validate(None).is_valid

    def test_rejects_non_boolean(self):
        rule = build_rule(FieldDescriptor(name="terms", type="checkbox"))
        assert messages(rule, "yes") == ["Expected boolean"]


class TestContactRule:
    """Tests for the synthetic contact rule."""

    @pytest.fixture
    def contact_rule(self):
        return build_ruleset([])["contact"]

    @pytest.mark.parametrize("value", ["user@example.com", "555-123-4567"])
    def test_accepts_email_or_phone(self, contact_rule, value):
        assert contact_rule.validate(value).is_valid

    @pytest.mark.parametrize(
        "value", ["not-valid", "", None, "555-123-4567\n", "user@example.com\n"]
    )
    def test_rejects_everything_else(self, contact_rule, value):
        assert messages(contact_rule, value) == ["Please enter a valid email or phone number"]


class TestRulesetValidation:
    """Tests for whole-form validation."""

    @pytest.fixture
    def ruleset(self):
        return build_ruleset([
            FieldDescriptor(name="Username", required=True),
            FieldDescriptor(name="age", type="number", required=True),
            FieldDescriptor(name="terms", type="checkbox", required=True),
        ])

    def test_valid_form_returns_coerced_data(self, ruleset):
        result = ruleset.validate({
            "Username": " bob ",
            "age": "30",
            "terms": False,
            "contact": "user@example.com",
            "extra": "dropped",
        })
        assert result.is_valid
        assert result.validated_data == {
            "Username": "bob",
            "age": 30,
            "terms": False,
            "contact": "user@example.com",
        }

    def test_missing_contact_fails(self, ruleset):
        result = ruleset.validate({"Username": "bob", "age": 30, "terms": True})
        assert not result.is_valid
        assert result.to_error_dict() == {
            "contact": ["Please enter a valid email or phone number"],
        }

    def test_skip_leaves_field_out(self, ruleset):
        result = ruleset.validate({"Username": "bob", "age": 30}, skip=["contact"])
        assert result.is_valid
        assert "contact" not in result.validated_data

    def test_validate_field(self, ruleset):
        assert ruleset.validate_field("age", 121)[0].error_type == "too_big"
        assert ruleset.validate_field("unknown", "x") == []

    def test_json_schema_export(self, ruleset):
        schema = ruleset.to_json_schema()
        assert schema["type"] == "object"
        assert schema["properties"]["age"] == {"type": "number", "minimum": 1, "maximum": 120}
        assert schema["properties"]["terms"] == {"type": "boolean"}
        assert schema["required"] == ["Username", "age", "contact"]


class TestCoerceNumber:
    """Tests for number coercion."""

    def test_values(self):
        assert coerce_number("18") == 18
        assert coerce_number(2.5) == 2.5
        assert coerce_number(True) == 1
        assert coerce_number("") == 0
        assert coerce_number("abc") is None
        assert coerce_number("inf") is None
        assert coerce_number([1]) is None

    def test_rejects_digit_separators(self):
        assert coerce_number("1_000") is None
        assert coerce_number("1_0.5") is None

    def test_huge_integer_is_not_a_number(self):
        assert coerce_number(10**400) is None
        assert coerce_number(10**20) == 10**20
