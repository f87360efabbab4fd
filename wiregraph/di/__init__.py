"""Dependency injection engine.

Register services in a ``ServiceCollection``, then ask it (or a
``ServiceMultiCollection`` composed of several collections) for an
identifier to get a fully wired instance back.
"""

# identifiers must load first: the error types render identifiers
from .identifiers import ServiceIdent, Token, describe_identifier, is_service_ident
from .metadata import (
    DependencyDescriptor,
    declare_dependency,
    get_dependency_descriptor,
    is_class_tagged,
)
from .decorators import Inject, injectable
from .services import (
    ConstructibleDescriptor,
    FactoryDescriptor,
    FixedDescriptor,
    Kind,
    Lifetime,
    ServiceDescriptor,
    SingletonCell,
)
from .resolution import ResolutionContext, resolve
from .collection import ServiceCollection
from .multi_collection import ServiceMultiCollection
from .scope import ServiceScope

__all__ = [
    # Identifiers
    "ServiceIdent",
    "Token",
    "describe_identifier",
    "is_service_ident",
    # Declaration
    "injectable",
    "Inject",
    "DependencyDescriptor",
    "declare_dependency",
    "get_dependency_descriptor",
    "is_class_tagged",
    # Descriptors
    "Lifetime",
    "Kind",
    "ServiceDescriptor",
    "ConstructibleDescriptor",
    "FactoryDescriptor",
    "FixedDescriptor",
    "SingletonCell",
    # Resolution
    "ResolutionContext",
    "resolve",
    "ServiceCollection",
    "ServiceMultiCollection",
    "ServiceScope",
]
