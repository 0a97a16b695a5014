"""Tests for FormController."""

import logging

import pytest

from form_state.controller import BindingMode, FieldAdapter, FormController, FormState
from form_state.exceptions import BindingError
from form_state.rules.constants import EMAIL_MESSAGE, REQUIRED_MESSAGE


@pytest.fixture
def controller(signup_schema) -> FormController:
    return FormController(signup_schema)


def _fill(controller: FormController, values: dict) -> None:
    for path, value in values.items():
        controller.bind(path).on_change(value)


class TestBinding:
    """Tests for bind, register and set_value."""

    def test_bind_declared_leaf(self, controller):
        """Test binding a native input to a declared field."""
        adapter = controller.bind("firstName")
        assert isinstance(adapter, FieldAdapter)
        assert adapter.path == "firstName"
        assert adapter.mode is BindingMode.NATIVE
        assert adapter.value is None

    def test_bind_segment_path(self, controller):
        """Test that segment paths normalise to dotted paths."""
        adapter = controller.bind(("dateOfBirth", "month"))
        assert adapter.path == "dateOfBirth.month"

    def test_bind_undeclared_path(self, controller):
        """Test that binding an undeclared path fails immediately."""
        with pytest.raises(BindingError) as exc_info:
            controller.bind("middleName")
        assert exc_info.value.path == "middleName"
        assert "middleName" not in controller.registered_fields

    @pytest.mark.parametrize("path", ["dateOfBirth", "email.domain", "", "dateOfBirth..day"])
    def test_bind_non_leaf_paths(self, controller, path):
        """Test that groups and malformed paths cannot be bound."""
        with pytest.raises(BindingError):
            controller.bind(path)

    def test_register_external(self, controller):
        """Test registering a choice control."""
        adapter = controller.register("dateOfBirth.day")
        assert adapter.mode is BindingMode.EXTERNAL
        assert controller.registered_fields["dateOfBirth.day"].mode is BindingMode.EXTERNAL

    def test_one_record_per_path(self, controller):
        """Test that repeated bindings share a single registration."""
        native = controller.bind("email")
        again = controller.register("email")
        assert again.mode is BindingMode.NATIVE
        assert len(controller.registered_fields) == 1
        native.on_change("joe@acme.com")
        assert again.value == "joe@acme.com"

    def test_set_value_registers_field(self, controller):
        """Test that set_value registers a declared field on first use."""
        controller.set_value("dateOfBirth.month", "04")
        assert controller.registered_fields["dateOfBirth.month"].mode is BindingMode.EXTERNAL
        assert controller.get_value("dateOfBirth.month") == "04"
        assert controller.values == {"dateOfBirth": {"month": "04"}}

    def test_set_value_undeclared_path(self, controller):
        """Test that set_value rejects undeclared paths."""
        with pytest.raises(BindingError):
            controller.set_value("middleName", "Q")
        assert controller.values == {}

    def test_set_value_requires_string(self, controller):
        """Test that leaf values must be strings."""
        with pytest.raises(TypeError):
            controller.set_value("dateOfBirth.year", 1990)

    def test_get_value_undeclared_path(self, controller):
        with pytest.raises(BindingError):
            controller.get_value("middleName")


class TestFieldValues:
    """Tests for value storage."""

    def test_adapter_write(self, controller):
        """Test that native writes land in the form value."""
        adapter = controller.bind("firstName")
        adapter.on_change("Joe")
        assert adapter.value == "Joe"
        assert controller.values == {"firstName": "Joe"}

    def test_values_are_copies(self, controller):
        """Test that callers cannot mutate controller state."""
        controller.set_value("dateOfBirth.day", "17")
        snapshot = controller.values
        snapshot["dateOfBirth"]["day"] = "01"
        assert controller.get_value("dateOfBirth.day") == "17"

    def test_writes_do_not_validate(self, controller):
        """Test that edits leave the error map and state alone."""
        controller.bind("email").on_change("not-an-email")
        assert controller.state is FormState.PRISTINE
        assert controller.errors == {}

    def test_clear_value_prunes_group(self, controller):
        """Test that clearing the last leaf of a group removes the group."""
        controller.set_value("dateOfBirth.month", "04")
        controller.clear_value("dateOfBirth.month")
        assert controller.get_value("dateOfBirth.month") is None
        assert controller.values == {}

    def test_adapter_clear(self, controller):
        adapter = controller.bind("company")
        adapter.on_change("Acme")
        adapter.clear()
        assert adapter.value is None

    def test_initial_values(self, signup_schema):
        """Test seeding the controller with nested values."""
        controller = FormController(signup_schema, initial_values={"dateOfBirth": {"year": "1990"}})
        assert controller.get_value("dateOfBirth.year") == "1990"

    def test_initial_values_undeclared(self, signup_schema):
        with pytest.raises(BindingError):
            FormController(signup_schema, initial_values={"middleName": "Q"})

    def test_initial_values_non_string(self, signup_schema):
        with pytest.raises(TypeError):
            FormController(signup_schema, initial_values={"firstName": None})


class TestSubmit:
    """Tests for submit and the error map."""

    def test_failed_submit(self, controller, valid_signup):
        """Test that a failed submit records errors and skips the callback."""
        received = []
        _fill(controller, {**valid_signup, "email": ""})
        result = controller.submit(received.append)

        assert not result.is_valid
        assert received == []
        assert controller.state is FormState.INVALID
        assert controller.errors == {"email": REQUIRED_MESSAGE}
        assert controller.error_for("email") == REQUIRED_MESSAGE
        assert controller.error_for("firstName") is None

    def test_successful_submit(self, controller, valid_signup):
        """Test that a valid form hands the typed value to the callback."""
        received = []
        _fill(controller, valid_signup)
        controller.set_value("dateOfBirth.month", "04")
        result = controller.submit(received.append)

        assert result.is_valid
        assert controller.state is FormState.VALID
        assert controller.errors == {}
        assert len(received) == 1
        assert received[0] is result.typed_value
        assert received[0].email == "joe@acme.com"
        assert received[0].dateOfBirth.month == "04"

    def test_submit_without_callback(self, controller, valid_signup):
        _fill(controller, valid_signup)
        assert controller.submit().is_valid

    def test_submit_is_idempotent(self, controller):
        """Test that two submits without edits give the same error map."""
        controller.bind("email").on_change("not-an-email")
        controller.submit()
        first = controller.errors
        controller.submit()
        assert controller.errors == first
        assert list(first) == ["firstName", "lastName", "company", "email"]
        assert first["email"] == EMAIL_MESSAGE

    def test_stale_error_cleared(self, controller, valid_signup):
        """Test that correcting a field clears its error on the next submit."""
        _fill(controller, {**valid_signup, "email": "not-an-email"})
        controller.submit()
        assert controller.error_for("email") == EMAIL_MESSAGE

        controller.bind("email").on_change("joe@acme.com")
        assert controller.error_for("email") == EMAIL_MESSAGE
        assert controller.state is FormState.INVALID

        controller.submit()
        assert controller.error_for("email") is None
        assert controller.state is FormState.VALID

    def test_error_map_replaced(self, controller, valid_signup):
        """Test that errors from an earlier run do not survive a later one."""
        _fill(controller, {**valid_signup, "firstName": ""})
        controller.submit()
        controller.bind("firstName").on_change("Joe")
        controller.bind("company").on_change("")
        controller.submit()
        assert controller.errors == {"company": REQUIRED_MESSAGE}

    def test_error_order(self, controller, valid_signup):
        """Test that failures follow declaration order."""
        _fill(controller, {"lastName": "Doe", "company": "Acme", "email": "bad"})
        result = controller.submit()
        assert result.paths == ["firstName", "email"]

    def test_submit_snapshot_excludes_later_edits(self, controller, valid_signup):
        """Test that edits made by the callback do not alter the submitted value."""
        _fill(controller, valid_signup)
        result = controller.submit(lambda typed: controller.set_value("company", "Other"))
        assert result.validated_data["company"] == "Acme"
        assert controller.get_value("company") == "Other"

    def test_callback_error_propagates(self, controller, valid_signup):
        """Test that a failing callback raises after the state is updated."""
        _fill(controller, valid_signup)

        def fail(typed):
            raise RuntimeError("storage unavailable")

        with pytest.raises(RuntimeError):
            controller.submit(fail)
        assert controller.state is FormState.VALID

    def test_submit_count(self, controller):
        controller.submit()
        controller.submit()
        assert controller.submit_count == 2

    def test_error_for_lookup_forms(self, controller):
        """Test error lookups by segment path and for unknown paths."""
        controller.submit()
        assert controller.error_for(("firstName",)) == REQUIRED_MESSAGE
        assert controller.error_for("middleName") is None
        assert controller.error_for("") is None

    def test_adapter_error(self, controller):
        adapter = controller.bind("lastName")
        assert adapter.error is None
        controller.submit()
        assert adapter.error == REQUIRED_MESSAGE

    def test_success_logged(self, controller, valid_signup, caplog):
        _fill(controller, valid_signup)
        with caplog.at_level(logging.INFO, logger="form-state"):
            controller.submit()
        assert "submitted successfully" in caplog.text


class TestResetAndNotifications:
    """Tests for reset and change listeners."""

    def test_reset_restores_initial_values(self, signup_schema):
        """Test that reset returns to the pristine state."""
        controller = FormController(signup_schema, initial_values={"company": "Acme"})
        controller.bind("company").on_change("Other")
        controller.submit()

        controller.reset()
        assert controller.state is FormState.PRISTINE
        assert controller.errors == {}
        assert controller.submit_count == 0
        assert controller.values == {"company": "Acme"}

    def test_reset_with_new_values(self, controller):
        """Test that reset values become the new initial values."""
        controller.reset({"firstName": "Ann"})
        controller.set_value("firstName", "Bob")
        controller.reset()
        assert controller.get_value("firstName") == "Ann"

    def test_adapter_listener(self, controller):
        """Test that field listeners see each new value."""
        seen = []
        adapter = controller.bind("firstName")
        unsubscribe = adapter.subscribe(seen.append)

        adapter.on_change("Jo")
        controller.set_value("firstName", "Joe")
        adapter.clear()
        unsubscribe()
        adapter.on_change("ignored")

        assert seen == ["Jo", "Joe", None]

    def test_controller_listener(self, controller):
        """Test that state listeners fire on writes and submits."""
        states = []
        unsubscribe = controller.subscribe(lambda c: states.append(c.state))

        controller.set_value("firstName", "Joe")
        controller.submit()
        unsubscribe()
        controller.submit()

        assert states == [FormState.PRISTINE, FormState.INVALID]

    def test_reset_notifies_fields(self, controller):
        seen = []
        adapter = controller.bind("email")
        adapter.on_change("joe@acme.com")
        adapter.subscribe(seen.append)
        controller.reset()
        assert seen == [None]
