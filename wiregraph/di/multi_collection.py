"""Resolution across several service collections at once."""

from typing import Any, Dict, List, TYPE_CHECKING, Tuple

from loguru import logger

from .collection import ServiceCollection
from .identifiers import ServiceIdent
from .resolution import ServiceStore, resolve

if TYPE_CHECKING:
    from .scope import ServiceScope


class ServiceMultiCollection:
    """Resolves services from multiple collections as if they were one.

    Collections are searched in the order they were added, at every step of
    the graph walk, so a service in one collection may depend on services in
    any other, in both directions. When two collections register the same
    identifier, the collection added first wins.

    Changing membership only affects later resolutions; singletons already
    built stay cached on their own collection's descriptors.
    """

    def __init__(self, *collections: ServiceCollection):
        # dict keys give an insertion-ordered set
        self._collections: Dict[ServiceCollection, None] = dict.fromkeys(collections)

    @property
    def collections(self) -> Tuple[ServiceCollection, ...]:
        """Member collections in priority order."""
        return tuple(self._collections)

    def stores(self) -> List[ServiceStore]:
        """Snapshot of the member stores in priority order."""
        return [collection.store for collection in self._collections]

    def get(self, ident: ServiceIdent) -> Any:
        """Resolve a service using all collections currently held.

        Args:
            ident: The identifier to resolve

        Returns:
            The resolved value
        """
        return resolve(ident, self.stores())

    def create_scope(self) -> "ServiceScope":
        """Open a scope over the current members."""
        from .scope import ServiceScope
        return ServiceScope(self.collections)

    def add_collections(self, *collections: ServiceCollection) -> None:
        """Add the given collections in order, skipping ones already held."""
        for collection in collections:
            self._collections.setdefault(collection, None)
        logger.debug(f"Multi-collection now holds {len(self._collections)} collections")

    def remove_collections(self, *collections: ServiceCollection) -> None:
        """Remove the given collections; unknown ones are ignored."""
        for collection in collections:
            self._collections.pop(collection, None)
        logger.debug(f"Multi-collection now holds {len(self._collections)} collections")

    def clear_collections(self) -> None:
        """Drop every held collection."""
        self._collections.clear()

    def __contains__(self, collection: ServiceCollection) -> bool:
        return collection in self._collections

    def __len__(self) -> int:
        return len(self._collections)
