"""
Form state controller.

The controller owns the current form value and the error map. Controls
write into it either through a field adapter (inputs that report their own
changes) or through ``set_value`` (discrete choice controls that report a
single selection). Both kinds of binding share one registry and one value
tree. Validation runs only when the form is submitted.

Usage:
    controller = FormController(schema)

    first_name = controller.bind("firstName")
    first_name.on_change("Joe")
    controller.set_value("dateOfBirth.month", "04")

    result = controller.submit(on_valid=save)
    controller.error_for("email")
"""

import copy
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Iterator

from form_state.exceptions import BindingError
from form_state.log import get_logger
from form_state.models.schema import FieldSchema, FormSchema
from form_state.models.validation_result import ValidationResult
from form_state.paths import FieldPath, delete_in, get_in, join_path, set_in

logger = get_logger("controller")

FieldListener = Callable[[str | None], None]
StateListener = Callable[["FormController"], None]
SubmitCallback = Callable[[Any], Any]


class FormState(str, Enum):
    """Whole-form validity, as of the last submit."""

    PRISTINE = "pristine"
    INVALID = "invalid"
    VALID = "valid"


class BindingMode(str, Enum):
    """How a control reports its value."""

    NATIVE = "native"
    EXTERNAL = "external"


@dataclass
class RegisteredField:
    """Binding between a leaf path and the controls that drive it."""

    path: str
    schema: FieldSchema
    mode: BindingMode
    listeners: list[FieldListener] = field(default_factory=list)


class FieldAdapter:
    """
    Read/write/notify handle for one registered field.

    A native input calls ``on_change`` with its raw string value; the
    adapter writes it into the controller and notifies subscribers.
    """

    def __init__(self, controller: "FormController", registered: RegisteredField):
        self._controller = controller
        self._field = registered

    @property
    def path(self) -> str:
        return self._field.path

    @property
    def mode(self) -> BindingMode:
        return self._field.mode

    @property
    def value(self) -> str | None:
        """Current value, or None if the field is unset."""
        return self._controller.get_value(self._field.path)

    @property
    def error(self) -> str | None:
        """Error message from the last submit, or None."""
        return self._controller.error_for(self._field.path)

    def on_change(self, value: str) -> None:
        """Write a new raw value reported by the control."""
        self._controller.set_value(self._field.path, value)

    def clear(self) -> None:
        """Make the field absent again."""
        self._controller.clear_value(self._field.path)

    def subscribe(self, listener: FieldListener) -> Callable[[], None]:
        """
        Call ``listener`` with the new value whenever this field changes.

        Returns:
            A function that removes the listener.
        """
        self._field.listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._field.listeners:
                self._field.listeners.remove(listener)

        return unsubscribe

    def __repr__(self) -> str:
        return f"FieldAdapter(path={self.path!r}, mode={self.mode.value!r})"


def _iter_leaves(tree: Mapping[str, Any], prefix: tuple[str, ...] = ()) -> Iterator[tuple[tuple[str, ...], Any]]:
    for key, value in tree.items():
        path = prefix + (key,)
        if isinstance(value, Mapping):
            yield from _iter_leaves(value, path)
        else:
            yield path, value


class FormController:
    """
    Holds field values and validation errors for one form.

    The controller is the only writer of its value tree and error map.
    Callers read them through ``get_value``, ``values``, ``error_for`` and
    ``errors``, which return copies or plain strings.
    """

    def __init__(
        self,
        schema: FormSchema,
        initial_values: Mapping[str, Any] | None = None,
    ):
        """
        Initialize the controller.

        Args:
            schema: The form schema. It is shared read-only.
            initial_values: Optional nested mapping of starting values.
                Every leaf must be a declared field holding a string.

        Raises:
            BindingError: If initial_values contains an undeclared path.
            TypeError: If an initial value is not a string.
        """
        self._schema = schema
        self._fields: dict[str, RegisteredField] = {}
        self._listeners: list[StateListener] = []
        self._initial_values = self._load(initial_values or {})
        self._values: dict[str, Any] = copy.deepcopy(self._initial_values)
        self._errors: dict[str, str] = {}
        self._state = FormState.PRISTINE
        self._submit_count = 0

    @property
    def schema(self) -> FormSchema:
        return self._schema

    @property
    def state(self) -> FormState:
        return self._state

    @property
    def submit_count(self) -> int:
        return self._submit_count

    @property
    def values(self) -> dict[str, Any]:
        """Deep copy of the current form value."""
        return copy.deepcopy(self._values)

    @property
    def errors(self) -> dict[str, str]:
        """Copy of the error map from the last submit."""
        return dict(self._errors)

    @property
    def registered_fields(self) -> dict[str, RegisteredField]:
        return dict(self._fields)

    def bind(self, path: FieldPath) -> FieldAdapter:
        """
        Bind a self-reporting input control to a leaf field.

        Raises:
            BindingError: If ``path`` is not a leaf declared in the schema.
        """
        return FieldAdapter(self, self._ensure_registered(path, BindingMode.NATIVE))

    def register(self, path: FieldPath) -> FieldAdapter:
        """
        Register a field driven from outside, such as a choice control.

        Raises:
            BindingError: If ``path`` is not a leaf declared in the schema.
        """
        return FieldAdapter(self, self._ensure_registered(path, BindingMode.EXTERNAL))

    def set_value(self, path: FieldPath, value: str) -> None:
        """
        Write a field value without validating it.

        Unregistered but declared fields are registered as externally driven.

        Raises:
            BindingError: If ``path`` is not a leaf declared in the schema.
            TypeError: If ``value`` is not a string.
        """
        registered = self._ensure_registered(path, BindingMode.EXTERNAL)
        if not isinstance(value, str):
            raise TypeError(
                f"Field '{registered.path}' expects a string value, got {type(value).__name__}"
            )
        set_in(self._values, registered.path, value)
        logger.debug(f"Set '{registered.path}' = {value!r}")
        self._notify_field(registered, value)
        self._notify()

    def get_value(self, path: FieldPath) -> str | None:
        """
        Read a field value, or None if it is unset.

        Raises:
            BindingError: If ``path`` is not a leaf declared in the schema.
        """
        key, _ = self._resolve(path)
        return get_in(self._values, key)

    def clear_value(self, path: FieldPath) -> None:
        """
        Remove a field value so the field is absent again.

        Raises:
            BindingError: If ``path`` is not a leaf declared in the schema.
        """
        registered = self._ensure_registered(path, BindingMode.EXTERNAL)
        if delete_in(self._values, registered.path):
            logger.debug(f"Cleared '{registered.path}'")
            self._notify_field(registered, None)
            self._notify()

    def submit(self, on_valid: SubmitCallback | None = None) -> ValidationResult:
        """
        Validate the whole form and hand the typed value on if it is valid.

        The error map is replaced, not merged, so errors for fields that are
        now valid disappear. ``on_valid`` runs only on success, after the
        controller state has been updated.

        Args:
            on_valid: Called with the typed value when validation succeeds.

        Returns:
            The ValidationResult of this run.
        """
        snapshot = copy.deepcopy(self._values)
        result = self._schema.validate(snapshot)

        self._submit_count += 1
        self._errors = result.to_error_map()
        self._state = FormState.VALID if result.is_valid else FormState.INVALID

        if result.is_valid:
            logger.info(f"Form '{self._schema.form_id}' submitted successfully")
        else:
            logger.debug(
                f"Form '{self._schema.form_id}' failed validation with "
                f"{result.error_count} error(s): {', '.join(result.paths)}"
            )
        self._notify()

        if result.is_valid and on_valid is not None:
            on_valid(result.typed_value)
        return result

    def error_for(self, path: FieldPath) -> str | None:
        """Error message for ``path`` from the last submit, or None."""
        try:
            key = join_path(path)
        except (TypeError, ValueError):
            return None
        return self._errors.get(key)

    def reset(self, values: Mapping[str, Any] | None = None) -> None:
        """
        Return to the pristine state.

        Args:
            values: New starting values. If None, the initial values are
                restored; otherwise they also become the new initial values.
        """
        if values is not None:
            self._initial_values = self._load(values)
        self._values = copy.deepcopy(self._initial_values)
        self._errors = {}
        self._state = FormState.PRISTINE
        self._submit_count = 0
        logger.debug(f"Form '{self._schema.form_id}' reset")

        for registered in self._fields.values():
            self._notify_field(registered, get_in(self._values, registered.path))
        self._notify()

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """
        Call ``listener`` with the controller after every state change.

        Returns:
            A function that removes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _resolve(self, path: FieldPath) -> tuple[str, FieldSchema]:
        try:
            key = join_path(path)
        except (TypeError, ValueError) as e:
            raise BindingError(str(path), str(e)) from e

        node = self._schema.get_field(key)
        if node is None:
            raise BindingError(key, "path is not declared in the schema")
        if not isinstance(node, FieldSchema):
            raise BindingError(key, "path is a group of fields, not a leaf")
        return key, node

    def _ensure_registered(self, path: FieldPath, mode: BindingMode) -> RegisteredField:
        key, schema = self._resolve(path)
        registered = self._fields.get(key)
        if registered is None:
            registered = RegisteredField(path=key, schema=schema, mode=mode)
            self._fields[key] = registered
            logger.debug(f"Registered '{key}' ({mode.value})")
        return registered

    def _load(self, values: Mapping[str, Any]) -> dict[str, Any]:
        tree: dict[str, Any] = {}
        for segments, value in _iter_leaves(values):
            key, _ = self._resolve(segments)
            if not isinstance(value, str):
                raise TypeError(f"Field '{key}' expects a string value, got {type(value).__name__}")
            set_in(tree, key, value)
        return tree

    def _notify_field(self, registered: RegisteredField, value: str | None) -> None:
        for listener in list(registered.listeners):
            listener(value)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)
