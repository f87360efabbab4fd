"""Object graph resolution.

``resolve`` walks the dependency graph depth-first across an ordered list of
service stores. The first store holding an identifier supplies its
descriptor, at every level of the walk, so one graph can span several
collections.

Cycle detection follows the active chain only: two siblings depending on the
same service are fine, an identifier reappearing among its own ancestors is
not.
"""

from typing import Any, Callable, Dict, Iterator, Mapping, Optional, Sequence, Tuple

from loguru import logger

from ..config import current_settings
from ..errors import (
    CircularDependencyError,
    IdentifierInferenceError,
    InvalidIdentifierError,
    ServiceNotFoundError,
)
from .identifiers import ServiceIdent, describe_identifier, is_service_ident
from .metadata import DependencyDescriptor, get_dependency_descriptor
from .services import (
    ConstructibleDescriptor,
    Kind,
    Lifetime,
    ServiceDescriptor,
)

ServiceStore = Mapping[ServiceIdent, ServiceDescriptor]
ResolutionPath = Tuple[ServiceIdent, ...]


class ResolutionContext:
    """Cache of scoped instances for one resolution scope."""

    def __init__(self):
        self._instances: Dict[ServiceIdent, Any] = {}

    def __contains__(self, ident: ServiceIdent) -> bool:
        return ident in self._instances

    def __len__(self) -> int:
        return len(self._instances)

    def __iter__(self) -> Iterator[ServiceIdent]:
        return iter(self._instances)

    def get(self, ident: ServiceIdent) -> Any:
        return self._instances[ident]

    def store(self, ident: ServiceIdent, value: Any) -> None:
        self._instances[ident] = value

    def clear(self) -> None:
        self._instances.clear()


def find_descriptor(
    ident: ServiceIdent, stores: Sequence[ServiceStore]
) -> Optional[ServiceDescriptor]:
    """Return the descriptor from the first store containing ``ident``."""
    for store in stores:
        descriptor = store.get(ident)
        if descriptor is not None:
            return descriptor
    return None


def _using_lifetime(
    ident: ServiceIdent,
    path: ResolutionPath,
    descriptor: ServiceDescriptor,
    build: Callable[[], Any],
    context: ResolutionContext,
) -> Any:
    """Serve from the lifetime cache or build and store per lifetime."""
    if descriptor.lifetime is Lifetime.SINGLETON:
        if not descriptor.cell.is_set and descriptor.cell.building:
            # re-entered from its own factory or constructor
            raise CircularDependencyError(path + (ident,))
        return descriptor.cell.get_or_build(build)

    if descriptor.lifetime is Lifetime.SCOPED:
        if ident in context:
            return context.get(ident)
        value = build()
        context.store(ident, value)
        return value

    return build()


def _resolve_dependency(
    dep: ServiceIdent,
    path: ResolutionPath,
    stores: Sequence[ServiceStore],
    context: ResolutionContext,
) -> Any:
    if dep in path:
        raise CircularDependencyError(path + (dep,))
    return _resolve(dep, path + (dep,), stores, context)


def _construct(
    descriptor: ConstructibleDescriptor,
    path: ResolutionPath,
    stores: Sequence[ServiceStore],
    context: ResolutionContext,
) -> Any:
    """Resolve a class's declared dependencies and instantiate it."""
    impl = descriptor.impl
    deps = get_dependency_descriptor(impl) or DependencyDescriptor()

    try:
        param_idents = deps.param_identifiers()
    except KeyError as e:
        raise IdentifierInferenceError.for_parameter(
            impl, e.args[0], reason="no identifier declared"
        ) from e

    args = [_resolve_dependency(dep, path, stores, context) for dep in param_idents]
    props = {
        name: _resolve_dependency(dep, path, stores, context)
        for name, dep in deps.props.items()
    }

    instance = impl(*args)
    for name, value in props.items():
        setattr(instance, name, value)

    if descriptor.lifetime is Lifetime.SINGLETON:
        logger.debug(f"Created singleton instance of {impl.__qualname__}")
    return instance


def _resolve(
    ident: ServiceIdent,
    path: ResolutionPath,
    stores: Sequence[ServiceStore],
    context: ResolutionContext,
) -> Any:
    descriptor = find_descriptor(ident, stores)
    if descriptor is None:
        raise ServiceNotFoundError.for_identifier(ident, path)

    settings = current_settings()
    if settings is not None and settings.log_resolution:
        logger.debug(
            f"Resolving {describe_identifier(ident)} ({descriptor.kind.value}) "
            f"at depth {len(path)}"
        )

    if descriptor.kind is Kind.FIXED:
        return descriptor.value

    if descriptor.kind is Kind.CONSTRUCTIBLE:
        def build() -> Any:
            return _construct(descriptor, path, stores, context)
    else:
        build = descriptor.producer

    return _using_lifetime(ident, path, descriptor, build, context)


def resolve(
    ident: ServiceIdent,
    stores: Sequence[ServiceStore],
    context: Optional[ResolutionContext] = None,
) -> Any:
    """Build the value registered under ``ident``.

    Args:
        ident: Identifier to resolve
        stores: Service stores in priority order
        context: Scoped-instance cache to use; a fresh one when omitted, which
            makes scoped services live for this call only

    Returns:
        The fully wired value

    Raises:
        ServiceNotFoundError: If ``ident`` or a transitive dependency is missing
        CircularDependencyError: If the dependency chain loops back on itself
    """
    if not is_service_ident(ident):
        raise InvalidIdentifierError.for_value(ident)

    return _resolve(ident, (ident,), stores, context if context is not None else ResolutionContext())
