"""Service descriptors and lifetimes.

A descriptor is the registered recipe for producing the value behind one
identifier. There are exactly three kinds:

- ``ConstructibleDescriptor``: build an ``@injectable`` class, wiring its
  declared dependencies
- ``FactoryDescriptor``: call a zero-argument producer
- ``FixedDescriptor``: hand back one stored value

Constructible and factory descriptors carry a lifetime and a
``SingletonCell``; the cell is only used by ``Lifetime.SINGLETON``.
"""

from dataclasses import dataclass, field
from enum import Enum
from threading import Lock, get_ident
from typing import Any, Callable, Optional, TypeVar, Union

T = TypeVar("T")

_EMPTY = object()


class Lifetime(Enum):
    """Instance sharing policies."""
    TRANSIENT = "transient"
    SCOPED = "scoped"
    SINGLETON = "singleton"


class Kind(Enum):
    """Descriptor variants."""
    CONSTRUCTIBLE = "constructible"
    FACTORY = "factory"
    FIXED = "fixed"


class SingletonCell:
    """Cache cell holding a descriptor's singleton instance.

    Building goes through ``get_or_build`` so that when several threads race
    for the same singleton the first builder wins and the others wait for it
    and reuse its instance. A builder that asks its own cell for the value
    gets a RuntimeError instead of waiting on itself.
    """

    def __init__(self):
        self._value: Any = _EMPTY
        self._lock = Lock()
        self._builder_thread: Optional[int] = None

    @property
    def is_set(self) -> bool:
        return self._value is not _EMPTY

    @property
    def building(self) -> bool:
        """Whether the current thread is inside this cell's builder."""
        return self._builder_thread == get_ident()

    @property
    def value(self) -> Any:
        if self._value is _EMPTY:
            raise LookupError("Singleton has not been built yet")
        return self._value

    def get_or_build(self, builder: Callable[[], T]) -> T:
        """Return the cached instance, building it on first use.

        Args:
            builder: Produces the instance; called at most once per cell

        Returns:
            The singleton instance

        Raises:
            RuntimeError: If called from inside its own builder
        """
        if self._value is _EMPTY:
            if self.building:
                raise RuntimeError("Singleton requested again while it is being built")
            with self._lock:
                # Double-check locking
                if self._value is _EMPTY:
                    self._builder_thread = get_ident()
                    try:
                        self._value = builder()
                    finally:
                        self._builder_thread = None
        return self._value

    def reset(self) -> None:
        """Drop the cached instance."""
        with self._lock:
            self._value = _EMPTY


@dataclass(eq=False)
class ConstructibleDescriptor:
    """Builds instances of an injectable class."""
    impl: type
    lifetime: Lifetime = Lifetime.TRANSIENT
    cell: SingletonCell = field(default_factory=SingletonCell, repr=False)
    kind: Kind = field(default=Kind.CONSTRUCTIBLE, init=False)


@dataclass(eq=False)
class FactoryDescriptor:
    """Produces values by calling a zero-argument function."""
    producer: Callable[[], Any]
    lifetime: Lifetime = Lifetime.TRANSIENT
    cell: SingletonCell = field(default_factory=SingletonCell, repr=False)
    kind: Kind = field(default=Kind.FACTORY, init=False)


@dataclass(eq=False)
class FixedDescriptor:
    """Always resolves to the same stored value."""
    value: Any
    kind: Kind = field(default=Kind.FIXED, init=False)


ServiceDescriptor = Union[ConstructibleDescriptor, FactoryDescriptor, FixedDescriptor]
