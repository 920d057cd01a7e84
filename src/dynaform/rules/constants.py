"""
Constants for the validation rules.

Patterns, bounds and messages used by the schema builder and the
visibility evaluator live here so the two stay in agreement.
"""

import re

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

PHONE_PATTERN = re.compile(r"^[+]?[(]?[0-9]{3}[)]?[-\s.]?[0-9]{3}[-\s.]?[0-9]{4,6}$")

# Synthetic field, validated and rendered but never persisted
CONTACT_FIELD = "contact"
CONTACT_LABEL = "Phone or Email"
CONTACT_PLACEHOLDER = "Enter phone or email"

# Field whose value drives contact visibility and carries its own bounds
AGE_FIELD = "age"
CONTACT_MIN_AGE = 18

AGE_BOUNDS = (1, 120)
NUMBER_BOUNDS = (1, 100)

# Messages
EMAIL_MESSAGE = "Invalid email format"
PHONE_MESSAGE = "Invalid phone number format"
CONTACT_MESSAGE = "Please enter a valid email or phone number"
REQUIRED_MESSAGE_TEMPLATE = "{name} is required"
MISSING_MESSAGE = "Required"
STRING_TYPE_MESSAGE = "Expected string"
BOOLEAN_TYPE_MESSAGE = "Expected boolean"
NUMBER_TYPE_MESSAGE = "Expected number"
NUMBER_MIN_MESSAGE_TEMPLATE = "Number must be greater than or equal to {bound}"
NUMBER_MAX_MESSAGE_TEMPLATE = "Number must be less than or equal to {bound}"
AGE_TYPE_MESSAGE = "Age must be a number"
AGE_MIN_MESSAGE = "Age must be at least 1"
AGE_MAX_MESSAGE = "Age must be less than 120"
