"""
dynaform: schema-driven form validation and rendering.

A server supplies a list of field descriptors; dynaform turns it into a
validation ruleset, derives initial values, decides which fields are
visible, and persists edited values back through a replace-all store.

Simple Usage:
    from dynaform import FormController, HttpDescriptorStore

    controller = FormController(HttpDescriptorStore("http://localhost:9110"))
    await controller.load()

    controller.change("age", 21)
    view = controller.render()       # includes the "contact" field now

    saved = await controller.submit()

Pure engine:
    from dynaform import build_ruleset, derive_defaults, visible_fields

    ruleset = build_ruleset(descriptors)
    result = ruleset.validate({"age": "121"})
    result.to_error_dict()           # {"age": ["Age must be less than 120"], ...}

Reference server:
    python run_form_server.py --port 9110
"""

from dynaform.controller import (
    FormController,
    FormSession,
    merge_values,
)
from dynaform.errors import (
    DescriptorError,
    FetchError,
    FormError,
    FormStateError,
    SubmitError,
)
from dynaform.models.field_descriptor import (
    FieldDescriptor,
    FieldKind,
    dump_descriptors,
    parse_descriptors,
)
from dynaform.models.form_view import (
    FormState,
    FormView,
    RenderedField,
)
from dynaform.models.validation_result import (
    FieldValidationError,
    ValidationResult,
)
from dynaform.notifications import (
    LoggingNotifier,
    Notification,
    Notifier,
)
from dynaform.rules import (
    FieldRule,
    ValidationRuleset,
    build_ruleset,
    contact_visible,
    derive_defaults,
    visible_fields,
)
from dynaform.store import (
    DescriptorCache,
    DescriptorStore,
    HttpDescriptorStore,
    InMemoryDescriptorStore,
)

__all__ = [
    # Main interface
    "FormController",
    "FormSession",
    "merge_values",
    # Descriptors
    "FieldDescriptor",
    "FieldKind",
    "parse_descriptors",
    "dump_descriptors",
    # Engine
    "FieldRule",
    "ValidationRuleset",
    "build_ruleset",
    "derive_defaults",
    "contact_visible",
    "visible_fields",
    # Validation
    "ValidationResult",
    "FieldValidationError",
    # Rendering and notifications
    "FormState",
    "FormView",
    "RenderedField",
    "Notification",
    "Notifier",
    "LoggingNotifier",
    # Stores
    "DescriptorStore",
    "DescriptorCache",
    "HttpDescriptorStore",
    "InMemoryDescriptorStore",
    # Errors
    "FormError",
    "DescriptorError",
    "FetchError",
    "SubmitError",
    "FormStateError",
]

__version__ = "0.1.0"
