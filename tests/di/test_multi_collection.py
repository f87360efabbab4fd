"""Tests for ServiceMultiCollection."""

from typing import Annotated

import pytest

from wiregraph.di import Inject, ServiceCollection, ServiceMultiCollection, injectable
from wiregraph.errors import CircularDependencyError, ServiceNotFoundError


def chain_classes():
    """Fresh A, B(A) and C(B)."""
    @injectable
    class A:
        pass

    @injectable
    class B:
        def __init__(self, a: A):
            self.a = a

    @injectable
    class C:
        def __init__(self, b: B):
            self.b = b

    return A, B, C


class TestMultiCollectionResolution:
    """Test resolution across collections."""

    def test_resolves_from_collections_in_order(self):
        """A dependency missing from one collection is found in another."""
        A, B, _ = chain_classes()
        c1 = ServiceCollection()
        c1.add_transient(A)
        c2 = ServiceCollection()
        c2.add_transient(B)

        with pytest.raises(ServiceNotFoundError):
            c2.get(B)

        multi = ServiceMultiCollection(c1, c2)
        b = multi.get(B)

        assert isinstance(b, B)
        assert isinstance(b.a, A)

    def test_bidirectional(self):
        """C in the first collection needs B from the second, which needs A from the first."""
        A, B, C = chain_classes()
        c1 = ServiceCollection()
        c1.add_transient(A)
        c1.add_transient(C)
        c2 = ServiceCollection()
        c2.add_transient(B)

        for multi in (ServiceMultiCollection(c1, c2), ServiceMultiCollection(c2, c1)):
            c = multi.get(C)
            assert isinstance(c, C)
            assert isinstance(c.b, B)
            assert isinstance(c.b.a, A)

    def test_first_added_collection_wins(self):
        """A duplicate identifier across collections is allowed; priority decides."""
        c1 = ServiceCollection()
        c1.add_fixed("name", "first")
        c2 = ServiceCollection()
        c2.add_fixed("name", "second")

        assert ServiceMultiCollection(c1, c2).get("name") == "first"
        assert ServiceMultiCollection(c2, c1).get("name") == "second"

    def test_singleton_cached_on_owning_collection(self):
        """A singleton resolved through the composition is the collection's singleton."""
        A, _, _ = chain_classes()
        c1 = ServiceCollection()
        c1.add_singleton(A)

        multi = ServiceMultiCollection(c1)
        assert multi.get(A) is c1.get(A)

    def test_cycle_across_collections(self):
        """Cycles spanning collections are still detected."""
        @injectable
        class X:
            def __init__(self, y: Annotated[object, Inject("y")]):
                pass

        @injectable
        class Y:
            def __init__(self, x: Annotated[object, Inject("x")]):
                pass

        c1 = ServiceCollection()
        c1.add_transient("x", X)
        c2 = ServiceCollection()
        c2.add_transient("y", Y)

        with pytest.raises(CircularDependencyError) as exc_info:
            ServiceMultiCollection(c1, c2).get("x")
        assert exc_info.value.chain == ("x", "y", "x")


class TestMultiCollectionMembership:
    """Test adding, removing and clearing member collections."""

    def test_duplicates_are_ignored(self):
        """A collection is held once, at its first position."""
        c1 = ServiceCollection()
        c2 = ServiceCollection()
        multi = ServiceMultiCollection(c1, c2, c1)
        multi.add_collections(c2)

        assert multi.collections == (c1, c2)
        assert len(multi) == 2

    def test_add_collections(self):
        """Added collections take part in later resolutions."""
        c1 = ServiceCollection()
        c1.add_fixed("value", 1)
        multi = ServiceMultiCollection()

        with pytest.raises(ServiceNotFoundError):
            multi.get("value")

        multi.add_collections(c1)
        assert multi.get("value") == 1
        assert c1 in multi

    def test_remove_collections(self):
        """Removed collections no longer take part; unknown ones are ignored."""
        c1 = ServiceCollection()
        c1.add_fixed("name", "first")
        c2 = ServiceCollection()
        c2.add_fixed("name", "second")
        multi = ServiceMultiCollection(c1, c2)

        multi.remove_collections(c1, ServiceCollection())

        assert multi.get("name") == "second"
        assert multi.collections == (c2,)

    def test_clear_collections(self):
        c1 = ServiceCollection()
        c1.add_fixed("name", "first")
        multi = ServiceMultiCollection(c1)

        multi.clear_collections()

        assert len(multi) == 0
        with pytest.raises(ServiceNotFoundError):
            multi.get("name")

    def test_removal_keeps_built_singletons(self):
        """Membership changes do not reset caches already populated."""
        A, _, _ = chain_classes()
        c1 = ServiceCollection()
        c1.add_singleton(A)
        multi = ServiceMultiCollection(c1)

        first = multi.get(A)
        multi.clear_collections()
        multi.add_collections(c1)

        assert multi.get(A) is first
