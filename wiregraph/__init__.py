"""wiregraph: declarative dependency injection.

```python
from wiregraph import ServiceCollection, injectable

@injectable
class Repository:
    pass

@injectable
class UserService:
    def __init__(self, repo: Repository):
        self.repo = repo

services = ServiceCollection()
services.add_singleton(Repository)
services.add_transient(UserService)

users = services.get(UserService)
```

Logging is disabled until ``configure()`` or ``setup_logging()`` is called.
"""

from loguru import logger

from .di import (
    ConstructibleDescriptor,
    DependencyDescriptor,
    FactoryDescriptor,
    FixedDescriptor,
    Inject,
    Kind,
    Lifetime,
    ResolutionContext,
    ServiceCollection,
    ServiceIdent,
    ServiceMultiCollection,
    ServiceScope,
    SingletonCell,
    Token,
    declare_dependency,
    describe_identifier,
    get_dependency_descriptor,
    injectable,
    is_class_tagged,
    is_service_ident,
    resolve,
)
from .errors import (
    CircularDependencyError,
    ConfigurationError,
    DeclarationError,
    DuplicateRegistrationError,
    ErrorContext,
    IdentifierInferenceError,
    InvalidIdentifierError,
    InvalidSelfBindingError,
    MultipleDecorationError,
    NotInjectableError,
    RegistrationError,
    ResolutionError,
    ScopeClosedError,
    ServiceNotFoundError,
    WiregraphError,
)
from .config import WiregraphSettings, configure, get_settings, load_settings
from .utils import reset_logging, setup_logging

logger.disable("wiregraph")

__version__ = "0.1.0"

__all__ = [
    # Collections
    "ServiceCollection",
    "ServiceMultiCollection",
    "ServiceScope",
    # Declaration
    "injectable",
    "Inject",
    "Token",
    "declare_dependency",
    "get_dependency_descriptor",
    "is_class_tagged",
    "DependencyDescriptor",
    # Descriptors
    "Lifetime",
    "Kind",
    "ConstructibleDescriptor",
    "FactoryDescriptor",
    "FixedDescriptor",
    "SingletonCell",
    # Resolution
    "ResolutionContext",
    "resolve",
    "ServiceIdent",
    "describe_identifier",
    "is_service_ident",
    # Errors
    "WiregraphError",
    "ErrorContext",
    "RegistrationError",
    "DuplicateRegistrationError",
    "NotInjectableError",
    "InvalidSelfBindingError",
    "InvalidIdentifierError",
    "DeclarationError",
    "MultipleDecorationError",
    "IdentifierInferenceError",
    "ResolutionError",
    "ServiceNotFoundError",
    "CircularDependencyError",
    "ScopeClosedError",
    "ConfigurationError",
    # Settings
    "WiregraphSettings",
    "configure",
    "get_settings",
    "load_settings",
    "setup_logging",
    "reset_logging",
]
