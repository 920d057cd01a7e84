"""
Form rules for dynaform.

This module contains the pure functions of the engine:
- Schema building (descriptor list -> validation ruleset)
- Default value derivation
- Visibility evaluation
"""

from dynaform.rules.defaults import derive_defaults
from dynaform.rules.schema_builder import (
    FieldRule,
    ValidationRuleset,
    build_contact_rule,
    build_rule,
    build_ruleset,
    coerce_number,
)
from dynaform.rules.visibility import contact_visible, visible_fields

__all__ = [
    "FieldRule",
    "ValidationRuleset",
    "build_rule",
    "build_contact_rule",
    "build_ruleset",
    "coerce_number",
    "derive_defaults",
    "contact_visible",
    "visible_fields",
]
