"""Specific error types for wiregraph registration, declaration and resolution."""

from __future__ import annotations

from typing import Any, Iterable, Optional, Tuple

from ..di.identifiers import describe_identifier
from .base import WiregraphError


class RegistrationError(WiregraphError):
    """Errors raised while adding services to a collection."""

    def __init__(self, message: str, *, ident: Any = None, **kwargs: Any):
        """Initialize registration error."""
        super().__init__(message, **kwargs)
        self.ident = ident

        if ident is not None:
            self.context.add_technical_detail("identifier", describe_identifier(ident))


class DuplicateRegistrationError(RegistrationError):
    """The identifier is already registered in the target collection."""

    @classmethod
    def for_identifier(cls, ident: Any) -> "DuplicateRegistrationError":
        """Create error for an identifier that is already present."""
        error = cls(
            f"Service {describe_identifier(ident)} already added to collection",
            ident=ident,
        )
        error.with_suggestion(
            "Register the service in a separate collection and compose them "
            "with ServiceMultiCollection to override it"
        )
        return error


class NotInjectableError(RegistrationError):
    """A constructible registration targets a class never marked injectable."""

    @classmethod
    def for_class(cls, impl: type, ident: Any = None) -> "NotInjectableError":
        """Create error for an undecorated implementation class."""
        error = cls(
            f"Class {impl.__qualname__} has not been decorated with @injectable",
            ident=ident if ident is not None else impl,
        )
        error.with_suggestion(f"Decorate {impl.__qualname__} with @injectable")
        return error


class InvalidSelfBindingError(RegistrationError):
    """A self-bound registration was given something that is not a class."""

    @classmethod
    def for_value(cls, value: Any) -> "InvalidSelfBindingError":
        """Create error for a self-binding of a non-class value."""
        error = cls(
            f"Cannot self bind to a non-class: {value!r}",
            ident=value if isinstance(value, str) else None,
        )
        error.with_suggestion("Pass the implementation class explicitly")
        return error


class InvalidIdentifierError(RegistrationError):
    """A registration key is not a string, token or class."""

    @classmethod
    def for_value(cls, value: Any) -> "InvalidIdentifierError":
        """Create error for a value that cannot act as an identifier."""
        error = cls(f"{value!r} is not a valid service identifier")
        error.with_context(value_type=type(value).__name__)
        error.with_suggestion("Use a str, a Token or a class as the identifier")
        return error


class DeclarationError(WiregraphError):
    """Errors raised while declaring injectable classes."""

    def __init__(self, message: str, *, owner: Optional[type] = None, **kwargs: Any):
        """Initialize declaration error."""
        super().__init__(message, **kwargs)
        self.owner = owner

        if owner is not None:
            self.context.add_technical_detail("class", owner.__qualname__)


class MultipleDecorationError(DeclarationError):
    """A class was marked injectable more than once."""

    @classmethod
    def for_class(cls, owner: type) -> "MultipleDecorationError":
        """Create error for a class decorated twice."""
        return cls(
            f"Cannot decorate class {owner.__qualname__} multiple times",
            owner=owner,
        )


class IdentifierInferenceError(DeclarationError):
    """An injection site has no explicit identifier and its type is unusable."""

    @classmethod
    def for_parameter(
        cls, owner: type, index: int, name: Optional[str] = None, reason: Optional[str] = None
    ) -> "IdentifierInferenceError":
        """Create error for a constructor parameter."""
        label = f"parameter {index}" + (f" ({name!r})" if name else "")
        error = cls(
            f"Cannot determine type of {label} for class {owner.__qualname__}, "
            "either change the type or use Inject(ident)",
            owner=owner,
        )
        error.with_context(parameter_index=index, parameter_name=name)
        if reason:
            error.with_context(reason=reason)
        return error

    @classmethod
    def for_property(
        cls, owner: type, name: str, reason: Optional[str] = None
    ) -> "IdentifierInferenceError":
        """Create error for an injected attribute."""
        error = cls(
            f"Cannot determine type of property {name!r} for class {owner.__qualname__}, "
            "either change the type or use Inject(ident)",
            owner=owner,
        )
        error.with_context(property_name=name)
        if reason:
            error.with_context(reason=reason)
        return error


class ResolutionError(WiregraphError):
    """Errors raised while building an object graph."""

    def __init__(
        self,
        message: str,
        *,
        ident: Any = None,
        path: Iterable[Any] = (),
        **kwargs: Any,
    ):
        """Initialize resolution error."""
        super().__init__(message, **kwargs)
        self.ident = ident
        self.path: Tuple[Any, ...] = tuple(path)

        if ident is not None:
            self.context.add_technical_detail("identifier", describe_identifier(ident))
        if self.path:
            self.context.add_technical_detail(
                "path", [describe_identifier(i) for i in self.path]
            )


class ServiceNotFoundError(ResolutionError):
    """The identifier is absent from every searched collection."""

    @classmethod
    def for_identifier(
        cls, ident: Any, path: Iterable[Any] = ()
    ) -> "ServiceNotFoundError":
        """Create error for a missing service."""
        path = tuple(path)
        message = f"Service {describe_identifier(ident)} does not exist in container"
        if len(path) > 1:
            message += f" (required by {' -> '.join(describe_identifier(i) for i in path[:-1])})"
        error = cls(message, ident=ident, path=path)
        error.with_suggestion(f"Register {describe_identifier(ident)} before resolving it")
        return error


class CircularDependencyError(ResolutionError):
    """A dependency chain revisits an identifier on its own path."""

    def __init__(self, chain: Iterable[Any], **kwargs: Any):
        """Initialize with the offending chain in traversal order."""
        self.chain: Tuple[Any, ...] = tuple(chain)
        super().__init__(
            "Circular dependency detected: "
            + " -> ".join(describe_identifier(i) for i in self.chain),
            ident=self.chain[-1] if self.chain else None,
            path=self.chain,
            **kwargs,
        )


class ScopeClosedError(ResolutionError):
    """A closed ServiceScope was asked for a service."""


class ConfigurationError(WiregraphError):
    """Settings could not be loaded or validated."""

    def __init__(
        self,
        message: str,
        *,
        field_path: Optional[str] = None,
        invalid_value: Any = None,
        **kwargs: Any,
    ):
        """Initialize configuration error."""
        super().__init__(message, **kwargs)

        if field_path:
            self.context.add_technical_detail("field_path", field_path)
        if invalid_value is not None:
            self.context.add_technical_detail("invalid_value", str(invalid_value))

    @classmethod
    def invalid_value(cls, field_path: str, value: Any, expected: str) -> "ConfigurationError":
        """Create error for an invalid setting value."""
        error = cls(
            f"Invalid value for {field_path}: got {value!r}, expected {expected}",
            field_path=field_path,
            invalid_value=value,
            error_code="CONFIG_INVALID_VALUE",
        )
        error.with_suggestion(f"Ensure {field_path} is a valid {expected}")
        return error
