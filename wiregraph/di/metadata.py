"""Per-class injection metadata.

Two facts are recorded on an injectable class, both as *own* attributes so a
subclass never inherits them:

- the injectable tag set by ``@injectable``
- the ``DependencyDescriptor`` listing which identifier feeds each
  constructor parameter and each injected attribute
"""

from dataclasses import dataclass, field
from threading import Lock
from typing import Dict, List, Optional

from loguru import logger

from .identifiers import ServiceIdent, describe_identifier, is_service_ident

_TAG_ATTR = "__wiregraph_injectable__"
_DEPS_ATTR = "__wiregraph_dependencies__"

_metadata_lock = Lock()


@dataclass
class DependencyDescriptor:
    """Identifiers consumed by one constructible class."""
    params: Dict[int, ServiceIdent] = field(default_factory=dict)
    props: Dict[str, ServiceIdent] = field(default_factory=dict)

    def param_identifiers(self) -> List[ServiceIdent]:
        """Constructor parameter identifiers in positional order.

        Raises:
            KeyError: If a parameter index below the highest declared one
                has no identifier
        """
        if not self.params:
            return []
        return [self.params[index] for index in range(max(self.params) + 1)]


def is_class_tagged(cls: type) -> bool:
    """Check whether ``cls`` itself (not a base) was marked injectable."""
    return cls.__dict__.get(_TAG_ATTR, False) is True


def tag_class(cls: type) -> None:
    """Mark ``cls`` as injectable."""
    setattr(cls, _TAG_ATTR, True)


def get_dependency_descriptor(cls: type) -> Optional[DependencyDescriptor]:
    """Return the descriptor declared on ``cls``, if any."""
    return cls.__dict__.get(_DEPS_ATTR)


def declare_dependency(
    cls: type,
    ident: ServiceIdent,
    *,
    param_index: Optional[int] = None,
    prop: Optional[str] = None,
) -> DependencyDescriptor:
    """Record the identifier for one constructor parameter or attribute.

    Declarations merge into the class's existing descriptor; declaring the
    same site again replaces only that entry.

    Args:
        cls: The class that consumes the dependency
        ident: Identifier to resolve for the injection site
        param_index: Constructor parameter index (0 is the first after self)
        prop: Attribute name for property injection

    Returns:
        The class's descriptor after the merge
    """
    from ..errors import IdentifierInferenceError

    if (param_index is None) == (prop is None):
        raise ValueError("Exactly one of param_index or prop must be given")

    if not is_service_ident(ident):
        if param_index is not None:
            raise IdentifierInferenceError.for_parameter(
                cls, param_index, reason=f"{ident!r} is not a valid identifier"
            )
        raise IdentifierInferenceError.for_property(
            cls, prop, reason=f"{ident!r} is not a valid identifier"
        )

    with _metadata_lock:
        descriptor = get_dependency_descriptor(cls)
        if descriptor is None:
            descriptor = DependencyDescriptor()
            setattr(cls, _DEPS_ATTR, descriptor)

        if param_index is not None:
            descriptor.params[param_index] = ident
        else:
            descriptor.props[prop] = ident

    logger.debug(
        f"Declared dependency {describe_identifier(ident)} for "
        f"{cls.__qualname__}."
        + (f"__init__[{param_index}]" if param_index is not None else prop)
    )
    return descriptor
