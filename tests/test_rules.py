"""Tests for default derivation and visibility rules."""

import pytest

from dynaform.models.field_descriptor import FieldDescriptor
from dynaform.rules.defaults import derive_defaults
from dynaform.rules.visibility import contact_visible, visible_fields


class TestDeriveDefaults:
    """Tests for the default value deriver."""

    def test_checkbox_without_value_is_false(self):
        defaults = derive_defaults([FieldDescriptor(name="terms", type="checkbox")])
        assert defaults == {"terms": False}

    def test_checkbox_value_coerced_to_bool(self):
        defaults = derive_defaults([
            FieldDescriptor(name="a", type="checkbox", value=True),
            FieldDescriptor(name="b", type="checkbox", value=""),
            FieldDescriptor(name="c", type="checkbox", value=1),
        ])
        assert defaults == {"a": True, "b": False, "c": True}

    def test_text_value_kept(self):
        defaults = derive_defaults([FieldDescriptor(name="Username", value="shadcn")])
        assert defaults == {"Username": "shadcn"}

    def test_missing_value_becomes_empty_string(self):
        defaults = derive_defaults([
            FieldDescriptor(name="Username"),
            FieldDescriptor(name="age", type="number"),
        ])
        assert defaults == {"Username": "", "age": ""}

    def test_number_value_kept(self):
        defaults = derive_defaults([FieldDescriptor(name="age", type="number", value=18)])
        assert defaults == {"age": 18}


class TestContactVisibility:
    """Tests for the age/contact visibility rule."""

    @pytest.mark.parametrize("age", [19, "19", 45.5, "120"])
    def test_visible_over_18(self, age):
        assert contact_visible({"age": age})

    @pytest.mark.parametrize("age", [18, "18", 0, "", None, "abc", False, "1_000", "19\n1"])
    def test_hidden_otherwise(self, age):
        assert not contact_visible({"age": age})

    def test_hidden_when_age_absent(self):
        assert not contact_visible({})


class TestVisibleFields:
    """Tests for the rendered field list."""

    @pytest.fixture
    def descriptors(self):
        return [
            FieldDescriptor(name="Username"),
            FieldDescriptor(name="age", type="number"),
            FieldDescriptor(name="contact", type="text"),
            FieldDescriptor(name="terms", type="checkbox"),
        ]

    def test_contact_descriptor_never_rendered(self, descriptors):
        assert visible_fields(descriptors, {"age": 10}) == ["Username", "age", "terms"]

    def test_contact_appended_when_visible(self, descriptors):
        assert visible_fields(descriptors, {"age": 30}) == ["Username", "age", "terms", "contact"]
