"""Caller-controlled resolution scopes.

``ServiceCollection.get`` opens a fresh scope for every call, so a scoped
service is shared within one object graph only. A ``ServiceScope`` keeps one
scope open across many ``get`` calls, e.g. for the duration of a request:

```python
with services.create_scope() as scope:
    handler = scope.get(Handler)
    audit = scope.get(AuditLog)  # shares scoped services with handler
```
"""

from typing import Any, Iterable

from loguru import logger

from ..errors import ScopeClosedError
from .identifiers import ServiceIdent, describe_identifier
from .resolution import ResolutionContext, resolve


class ServiceScope:
    """Shares scoped instances across calls until closed.

    The member collections are fixed when the scope opens.
    """

    def __init__(self, collections: Iterable[Any]):
        self._stores = [collection.store for collection in collections]
        self._context = ResolutionContext()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def get(self, ident: ServiceIdent) -> Any:
        """Resolve a service inside this scope."""
        if self._closed:
            raise ScopeClosedError(
                f"Cannot resolve {describe_identifier(ident)} from a closed scope",
                ident=ident,
            )
        return resolve(ident, self._stores, self._context)

    def close(self) -> None:
        """Drop the scoped instances held by this scope."""
        if not self._closed:
            logger.debug(f"Closing scope holding {len(self._context)} scoped instances")
        self._context.clear()
        self._closed = True

    def __enter__(self) -> "ServiceScope":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
