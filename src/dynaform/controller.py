"""
Form Controller.

This is the main entry point for dynaform. It owns one form session:
fetches descriptors, builds the ruleset and defaults, tracks live values
and interaction counters, validates on every change, and persists the
merged descriptor list on submit.
"""

import logging
from dataclasses import dataclass, field
from typing import Any

from dynaform.config import get_config
from dynaform.errors import FetchError, FormStateError, SubmitError
from dynaform.models.field_descriptor import FieldDescriptor, FieldValue
from dynaform.models.form_view import FormState, FormView, RenderedField
from dynaform.models.validation_result import ValidationResult
from dynaform.notifications import (
    SUBMIT_FAILURE_MESSAGE,
    SUBMIT_SUCCESS_MESSAGE,
    LoggingNotifier,
    Notification,
    Notifier,
)
from dynaform.rules.constants import (
    AGE_FIELD,
    CONTACT_FIELD,
    CONTACT_LABEL,
    CONTACT_PLACEHOLDER,
)
from dynaform.rules.defaults import derive_defaults
from dynaform.rules.schema_builder import ValidationRuleset, build_ruleset
from dynaform.rules.visibility import contact_visible, visible_fields
from dynaform.store.base import DescriptorStore
from dynaform.store.cache import DescriptorCache

logger = logging.getLogger("dynaform.controller")

LOAD_FAILURE_MESSAGE = "Error loading form"


@dataclass
class FormSession:
    """State of one rendering session. Only FormController writes to it."""

    descriptors: list[FieldDescriptor] = field(default_factory=list)
    ruleset: ValidationRuleset | None = None
    defaults: dict[str, FieldValue] = field(default_factory=dict)
    values: dict[str, Any] = field(default_factory=dict)
    interactions: dict[str, int] = field(default_factory=dict)
    errors: dict[str, str] = field(default_factory=dict)


def merge_values(
    descriptors: list[FieldDescriptor],
    values: dict[str, Any],
) -> list[FieldDescriptor]:
    """
    Copy submitted values into the descriptors that back them.

    The synthetic ``contact`` field has no descriptor and is never merged.
    Descriptors without a submitted value are copied unchanged.
    """
    merged = []
    for descriptor in descriptors:
        if descriptor.name in values and descriptor.name != CONTACT_FIELD:
            merged.append(descriptor.model_copy(update={"value": values[descriptor.name]}))
        else:
            merged.append(descriptor.model_copy())
    return merged


class FormController:
    """
    Controller for a schema-driven form session.

    Usage:
        controller = FormController(HttpDescriptorStore())
        await controller.load()

        controller.change("age", "21")
        view = controller.render()   # contact is now visible

        if await controller.submit():
            ...
    """

    def __init__(
        self,
        store: DescriptorStore,
        cache: DescriptorCache | None = None,
        notifier: Notifier | None = None,
        validate_hidden_contact: bool | None = None,
    ):
        """
        Initialize the controller.

        Args:
            store: Persistence collaborator used for replace.
            cache: Cache used for reads. If None, one is created over ``store``
                with the configured stale time and retry count.
            notifier: Receives submit notifications. Defaults to LoggingNotifier.
            validate_hidden_contact: Whether submit validates ``contact`` while
                it is hidden. If None, uses config.validate_hidden_contact.
        """
        config = get_config()
        self.store = store
        self.cache = cache if cache is not None else DescriptorCache(store)
        self.notifier = notifier if notifier is not None else LoggingNotifier()
        self.validate_hidden_contact = (
            validate_hidden_contact
            if validate_hidden_contact is not None
            else config.validate_hidden_contact
        )

        self._state = FormState.LOADING
        self._load_error: str | None = None
        self._session = FormSession()

    @property
    def state(self) -> FormState:
        return self._state

    @property
    def descriptors(self) -> list[FieldDescriptor]:
        return list(self._session.descriptors)

    @property
    def ruleset(self) -> ValidationRuleset | None:
        return self._session.ruleset

    @property
    def defaults(self) -> dict[str, FieldValue]:
        return dict(self._session.defaults)

    @property
    def values(self) -> dict[str, Any]:
        return dict(self._session.values)

    @property
    def interactions(self) -> dict[str, int]:
        return dict(self._session.interactions)

    @property
    def errors(self) -> dict[str, str]:
        return dict(self._session.errors)

    async def load(self) -> FormState:
        """
        Fetch descriptors and prepare the session.

        Any fetch failure leaves the session in the ERROR state; it is
        logged, not raised.
        """
        if self._state == FormState.SUBMITTING:
            raise FormStateError("Cannot reload while a submit is in flight")

        self._state = FormState.LOADING
        try:
            descriptors = await self.cache.get()
        except FetchError as e:
            logger.error(f"Cannot load form: {e.message}")
            self._load_error = LOAD_FAILURE_MESSAGE
            self._state = FormState.ERROR
            return self._state
        except Exception as e:
            logger.exception(f"Unexpected error loading form: {type(e).__name__}: {e}")
            self._load_error = LOAD_FAILURE_MESSAGE
            self._state = FormState.ERROR
            return self._state

        self._set_descriptors(descriptors)
        self._load_error = None
        self._state = FormState.READY
        return self._state

    def _set_descriptors(self, descriptors: list[FieldDescriptor]) -> None:
        session = self._session
        session.descriptors = descriptors
        session.ruleset = build_ruleset(descriptors)
        session.defaults = derive_defaults(descriptors)
        session.values = dict(session.defaults)
        session.errors = {}
        logger.debug(f"Built ruleset for fields: {list(session.ruleset)}")

    def _require_ready(self, action: str) -> None:
        if self._state != FormState.READY:
            raise FormStateError(
                f"Cannot {action} while the form is {self._state.value}",
                details={"state": self._state.value},
            )

    def change(self, name: str, value: Any) -> list[str]:
        """
        Apply a user edit to one field.

        Updates the live value, bumps the field's interaction counter and
        re-validates that field.

        Returns:
            The field's current error messages (empty when valid).

        Raises:
            KeyError: If ``name`` is not a field of this form.
            FormStateError: If the form is not READY.
        """
        self._require_ready("edit")
        session = self._session
        if name not in session.ruleset:
            raise KeyError(name)

        session.values[name] = value
        session.interactions[name] = session.interactions.get(name, 0) + 1

        errors = session.ruleset.validate_field(name, value)
        if errors:
            session.errors[name] = errors[0].message
        else:
            session.errors.pop(name, None)

        if name == AGE_FIELD and not contact_visible(session.values):
            session.errors.pop(CONTACT_FIELD, None)

        return [e.message for e in errors]

    def is_visible(self, name: str) -> bool:
        return name in visible_fields(self._session.descriptors, self._session.values)

    def validate(self) -> ValidationResult:
        """Validate the full live value map against the ruleset."""
        session = self._session
        if session.ruleset is None:
            raise FormStateError("No descriptors loaded")

        skip = []
        if not self.validate_hidden_contact and not contact_visible(session.values):
            skip.append(CONTACT_FIELD)
        return session.ruleset.validate(session.values, skip=skip)

    async def submit(self) -> bool:
        """
        Validate and persist the form.

        Returns:
            True when the store accepted the updated descriptor list.
            False when validation failed (nothing is sent) or the store
            failed (a failure notification is emitted and the edited
            values are kept).

        Raises:
            FormStateError: If the form is not READY, which includes a
                submit that is already in flight.
        """
        self._require_ready("submit")
        session = self._session

        result = self.validate()
        session.errors = result.first_messages()
        if not result.is_valid:
            logger.info(f"Submit blocked by {result.error_count} validation error(s)")
            return False

        updated = merge_values(session.descriptors, result.validated_data or {})

        self._state = FormState.SUBMITTING
        try:
            await self.store.replace(updated)
        except SubmitError as e:
            self._state = FormState.READY
            self.notifier(
                Notification(level="error", message=SUBMIT_FAILURE_MESSAGE, detail=e.message)
            )
            return False
        except Exception as e:
            logger.exception(f"Unexpected error during submit: {type(e).__name__}: {e}")
            self._state = FormState.READY
            self.notifier(
                Notification(level="error", message=SUBMIT_FAILURE_MESSAGE, detail=str(e))
            )
            return False

        self._state = FormState.READY
        self.cache.invalidate()
        self.notifier(Notification(level="success", message=SUBMIT_SUCCESS_MESSAGE))
        await self.load()
        return True

    def reset(self) -> None:
        """Restore default values and clear counters and errors. No I/O."""
        self._require_ready("reset")
        session = self._session
        session.values = dict(session.defaults)
        session.interactions = {}
        session.errors = {}

    def render(self) -> FormView:
        """Build a read-only snapshot for a presentation layer."""
        session = self._session
        fields: list[RenderedField] = []

        if self._state in (FormState.READY, FormState.SUBMITTING):
            by_name = {d.name: d for d in session.descriptors}
            for name in visible_fields(session.descriptors, session.values):
                descriptor = None if name == CONTACT_FIELD else by_name[name]
                fields.append(self._render_field(name, descriptor))

        return FormView(
            state=self._state,
            fields=fields,
            errors=dict(session.errors),
            load_error=self._load_error,
            submit_enabled=self._state == FormState.READY,
            submit_label="Submitting..." if self._state == FormState.SUBMITTING else "Submit",
        )

    def _render_field(self, name: str, descriptor: FieldDescriptor | None) -> RenderedField:
        session = self._session
        common = {
            "name": name,
            "value": session.values.get(name, ""),
            "error": session.errors.get(name),
            "interactions": session.interactions.get(name, 0),
        }
        if descriptor is None:
            return RenderedField(
                type="text",
                label=CONTACT_LABEL,
                placeholder=CONTACT_PLACEHOLDER,
                required=True,
                synthetic=True,
                **common,
            )
        return RenderedField(
            type=descriptor.type,
            variant=descriptor.variant,
            label=descriptor.display_name,
            placeholder=descriptor.placeholder,
            description=descriptor.description,
            required=descriptor.required,
            disabled=descriptor.disabled,
            **common,
        )
