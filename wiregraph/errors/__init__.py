"""Error taxonomy for wiregraph.

Every failure is synchronous and propagates to the caller; the engine never
returns a partially built object graph.
"""

from .base import ErrorContext, WiregraphError
from .types import (
    CircularDependencyError,
    ConfigurationError,
    DeclarationError,
    DuplicateRegistrationError,
    IdentifierInferenceError,
    InvalidIdentifierError,
    InvalidSelfBindingError,
    MultipleDecorationError,
    NotInjectableError,
    RegistrationError,
    ResolutionError,
    ScopeClosedError,
    ServiceNotFoundError,
)

__all__ = [
    # Base classes
    "WiregraphError",
    "ErrorContext",
    # Registration
    "RegistrationError",
    "DuplicateRegistrationError",
    "NotInjectableError",
    "InvalidSelfBindingError",
    "InvalidIdentifierError",
    # Declaration
    "DeclarationError",
    "MultipleDecorationError",
    "IdentifierInferenceError",
    # Resolution
    "ResolutionError",
    "ServiceNotFoundError",
    "CircularDependencyError",
    "ScopeClosedError",
    # Configuration
    "ConfigurationError",
]
