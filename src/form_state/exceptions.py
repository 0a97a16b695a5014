"""Custom exceptions for the form_state package."""


class FormStateError(Exception):
    """Base exception for form_state errors."""
    pass


class SchemaDefinitionError(FormStateError):
    """Exception raised when a form schema is declared incorrectly."""
    pass


class BindingError(FormStateError):
    """
    Exception raised when a control is bound to a path the schema does not declare.

    This signals that the UI and the schema have drifted apart. It is raised
    at bind time and never folded into the error map.
    """

    def __init__(self, path: str, reason: str | None = None):
        self.path = path
        message = f"Cannot bind field '{path}'"
        if reason:
            message += f": {reason}"
        super().__init__(message)
