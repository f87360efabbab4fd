"""Tests for specific error types."""

from wiregraph.di import Token
from wiregraph.errors import (
    CircularDependencyError,
    ConfigurationError,
    DuplicateRegistrationError,
    IdentifierInferenceError,
    InvalidSelfBindingError,
    NotInjectableError,
    RegistrationError,
    ResolutionError,
    ServiceNotFoundError,
    WiregraphError,
)


class Database:
    pass


class TestWiregraphError:
    """Test the base error."""

    def test_error_code_from_class_name(self):
        """Codes are derived from the class name without the Error suffix."""
        assert WiregraphError("x").error_code == "WIREGRAPH"
        assert ServiceNotFoundError("x").error_code == "SERVICE_NOT_FOUND"

    def test_explicit_error_code(self):
        assert WiregraphError("x", error_code="CUSTOM").error_code == "CUSTOM"

    def test_with_context_and_suggestion(self):
        """Builders add details and return the error."""
        error = WiregraphError("x").with_context(key="value").with_suggestion("try again")

        assert error.context.technical_details["key"] == "value"
        assert error.context.suggestions == ["try again"]

    def test_cause_is_recorded(self):
        cause = KeyError("missing")
        error = WiregraphError.from_exception(cause, "wrapped")

        assert error.cause is cause
        assert error.context.related_errors[0]["type"] == "KeyError"

    def test_to_dict(self):
        """Errors serialize to plain data."""
        data = DuplicateRegistrationError.for_identifier(Database).to_dict()

        assert data["error_type"] == "DuplicateRegistrationError"
        assert data["error_code"] == "DUPLICATE_REGISTRATION"
        assert data["context"]["technical_details"]["identifier"] == "Database"
        assert data["cause"] is None


class TestRegistrationErrors:
    """Test registration error factories."""

    def test_hierarchy(self):
        assert issubclass(DuplicateRegistrationError, RegistrationError)
        assert issubclass(NotInjectableError, RegistrationError)
        assert issubclass(RegistrationError, WiregraphError)

    def test_duplicate(self):
        error = DuplicateRegistrationError.for_identifier("db")

        assert "'db'" in error.message
        assert error.ident == "db"
        assert error.context.suggestions

    def test_not_injectable(self):
        error = NotInjectableError.for_class(Database)

        assert "@injectable" in error.message
        assert error.ident is Database

    def test_invalid_self_binding(self):
        error = InvalidSelfBindingError.for_value(Token("db"))

        assert "non-class" in error.message


class TestDeclarationErrors:
    """Test identifier inference errors."""

    def test_for_parameter(self):
        error = IdentifierInferenceError.for_parameter(Database, 2, "conn", reason="no type annotation")

        assert "parameter 2 ('conn')" in error.message
        assert "Database" in error.message
        assert error.owner is Database
        assert error.context.technical_details["reason"] == "no type annotation"

    def test_for_property(self):
        error = IdentifierInferenceError.for_property(Database, "pool")

        assert "property 'pool'" in error.message
        assert error.context.technical_details["property_name"] == "pool"


class TestResolutionErrors:
    """Test resolution error factories."""

    def test_not_found_with_path(self):
        error = ServiceNotFoundError.for_identifier("db", ("app", "repo", "db"))

        assert isinstance(error, ResolutionError)
        assert "'app' -> 'repo'" in error.message
        assert error.path == ("app", "repo", "db")

    def test_not_found_top_level(self):
        error = ServiceNotFoundError.for_identifier("db", ("db",))

        assert "required by" not in error.message

    def test_circular_chain(self):
        error = CircularDependencyError(("a", "b", "a"))

        assert error.chain == ("a", "b", "a")
        assert error.ident == "a"
        assert error.message == "Circular dependency detected: 'a' -> 'b' -> 'a'"
        assert error.context.technical_details["path"] == ["'a'", "'b'", "'a'"]


class TestConfigurationError:
    """Test ConfigurationError."""

    def test_invalid_value(self):
        error = ConfigurationError.invalid_value("log_level", "LOUD", "log level")

        assert "Invalid value for log_level" in error.message
        assert error.error_code == "CONFIG_INVALID_VALUE"
        assert error.context.technical_details["invalid_value"] == "LOUD"
