"""Service collection: the registration store."""

from typing import Any, Callable, Dict, List, Optional, TYPE_CHECKING, Type, TypeVar

from loguru import logger

from ..errors import (
    DuplicateRegistrationError,
    InvalidIdentifierError,
    InvalidSelfBindingError,
    NotInjectableError,
)
from .identifiers import ServiceIdent, describe_identifier, is_service_ident
from .metadata import is_class_tagged
from .resolution import resolve
from .services import (
    ConstructibleDescriptor,
    FactoryDescriptor,
    FixedDescriptor,
    Lifetime,
    ServiceDescriptor,
)

if TYPE_CHECKING:
    from .scope import ServiceScope

T = TypeVar("T")


class ServiceCollection:
    """A collection of services.

    Registrations are append-only and keep their insertion order. To start
    over, build a new collection.
    """

    def __init__(self):
        self._services: Dict[ServiceIdent, ServiceDescriptor] = {}

    def get(self, ident: ServiceIdent) -> Any:
        """Resolve a service using only this collection's registrations.

        Args:
            ident: The identifier to resolve

        Returns:
            The resolved value
        """
        return resolve(ident, [self._services])

    def create_scope(self) -> "ServiceScope":
        """Open a scope sharing scoped services across several ``get`` calls."""
        from .scope import ServiceScope
        return ServiceScope([self])

    @property
    def store(self) -> Dict[ServiceIdent, ServiceDescriptor]:
        """The underlying identifier -> descriptor mapping."""
        return self._services

    def __contains__(self, ident: ServiceIdent) -> bool:
        return ident in self._services

    def __len__(self) -> int:
        return len(self._services)

    def identifiers(self) -> List[ServiceIdent]:
        """List registered identifiers in registration order."""
        return list(self._services)

    def descriptor(self, ident: ServiceIdent) -> Optional[ServiceDescriptor]:
        """Return the descriptor registered under ``ident``, if any."""
        return self._services.get(ident)

    def add(self, ident: ServiceIdent, descriptor: ServiceDescriptor) -> None:
        """Add a prepared descriptor under ``ident``.

        Raises:
            InvalidIdentifierError: If ``ident`` is not an identifier
            DuplicateRegistrationError: If the identifier is already present
            NotInjectableError: If a constructible descriptor targets a class
                never marked ``@injectable``
        """
        if not is_service_ident(ident):
            raise InvalidIdentifierError.for_value(ident)
        if ident in self._services:
            raise DuplicateRegistrationError.for_identifier(ident)
        if isinstance(descriptor, ConstructibleDescriptor) and not is_class_tagged(descriptor.impl):
            raise NotInjectableError.for_class(descriptor.impl, ident)

        self._services[ident] = descriptor
        logger.debug(f"Registered {descriptor.kind.value} service {describe_identifier(ident)}")

    def add_constructible(
        self,
        ident: ServiceIdent,
        impl: Optional[Type[T]] = None,
        *,
        lifetime: Lifetime = Lifetime.TRANSIENT,
    ) -> None:
        """Add an injectable class.

        Args:
            ident: Identifier to register under; when ``impl`` is omitted the
                identifier must be the class itself (self-binding)
            impl: Implementation class
            lifetime: Sharing policy for built instances

        Raises:
            InvalidSelfBindingError: If self-binding a non-class
            NotInjectableError: If the class was never marked ``@injectable``
        """
        if impl is None:
            if not isinstance(ident, type) or ident is object:
                raise InvalidSelfBindingError.for_value(ident)
            impl = ident

        if not isinstance(impl, type):
            raise TypeError(
                f"Implementation for {describe_identifier(ident)} must be a class, got {impl!r}"
            )

        self.add(ident, ConstructibleDescriptor(impl, lifetime))

    def add_transient(self, ident: ServiceIdent, impl: Optional[Type[T]] = None) -> None:
        """Add a class whose instances are never shared."""
        self.add_constructible(ident, impl, lifetime=Lifetime.TRANSIENT)

    def add_scoped(self, ident: ServiceIdent, impl: Optional[Type[T]] = None) -> None:
        """Add a class shared within one resolution scope."""
        self.add_constructible(ident, impl, lifetime=Lifetime.SCOPED)

    def add_singleton(self, ident: ServiceIdent, impl: Optional[Type[T]] = None) -> None:
        """Add a class built once and shared forever."""
        self.add_constructible(ident, impl, lifetime=Lifetime.SINGLETON)

    def add_factory(
        self,
        ident: ServiceIdent,
        producer: Callable[[], Any],
        *,
        lifetime: Lifetime = Lifetime.TRANSIENT,
    ) -> None:
        """Add a zero-argument function producing the service."""
        if not callable(producer):
            raise TypeError(f"Factory for {describe_identifier(ident)} must be callable")
        self.add(ident, FactoryDescriptor(producer, lifetime))

    def add_transient_factory(self, ident: ServiceIdent, producer: Callable[[], Any]) -> None:
        self.add_factory(ident, producer, lifetime=Lifetime.TRANSIENT)

    def add_scoped_factory(self, ident: ServiceIdent, producer: Callable[[], Any]) -> None:
        self.add_factory(ident, producer, lifetime=Lifetime.SCOPED)

    def add_singleton_factory(self, ident: ServiceIdent, producer: Callable[[], Any]) -> None:
        self.add_factory(ident, producer, lifetime=Lifetime.SINGLETON)

    def add_fixed(self, ident: ServiceIdent, value: Any) -> None:
        """Add a value returned as-is on every resolution."""
        self.add(ident, FixedDescriptor(value))
