"""Tests for service descriptors and the singleton cache cell."""

import time
from threading import Thread

import pytest

from wiregraph.di import (
    ConstructibleDescriptor,
    FactoryDescriptor,
    FixedDescriptor,
    Kind,
    Lifetime,
    SingletonCell,
)


class TestSingletonCell:
    """Test suite for SingletonCell."""

    def test_builds_once(self):
        """The builder runs on first use only."""
        calls = []

        def build():
            calls.append(1)
            return {"instance": len(calls)}

        cell = SingletonCell()
        first = cell.get_or_build(build)
        second = cell.get_or_build(build)

        assert first is second
        assert len(calls) == 1
        assert cell.is_set
        assert cell.value is first

    def test_caches_none(self):
        """A built None counts as built."""
        calls = []

        def build():
            calls.append(1)
            return None

        cell = SingletonCell()
        assert cell.get_or_build(build) is None
        assert cell.get_or_build(build) is None
        assert len(calls) == 1

    def test_value_before_build(self):
        """Reading an empty cell is an error."""
        cell = SingletonCell()

        assert not cell.is_set
        with pytest.raises(LookupError):
            cell.value

    def test_failed_build_leaves_cell_empty(self):
        """An exception from the builder propagates and nothing is cached."""
        cell = SingletonCell()

        def boom():
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            cell.get_or_build(boom)
        assert not cell.is_set
        assert cell.get_or_build(lambda: 5) == 5

    def test_reentrant_build_fails(self):
        """A builder asking its own cell fails instead of waiting on itself."""
        cell = SingletonCell()

        with pytest.raises(RuntimeError):
            cell.get_or_build(lambda: cell.get_or_build(object))
        assert not cell.is_set
        assert not cell.building

    def test_reset(self):
        """Reset forgets the instance."""
        cell = SingletonCell()
        first = cell.get_or_build(object)
        cell.reset()

        assert cell.get_or_build(object) is not first

    def test_thread_safety(self):
        """Racing threads share the first builder's instance."""
        calls = []

        def build():
            calls.append(1)
            time.sleep(0.01)
            return object()

        cell = SingletonCell()
        instances = []

        def get_instance():
            instances.append(cell.get_or_build(build))

        threads = [Thread(target=get_instance) for _ in range(10)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(calls) == 1
        assert all(inst is instances[0] for inst in instances)


class TestDescriptors:
    """Test the descriptor variants."""

    def test_kinds(self):
        """Each variant reports its kind."""
        class Impl:
            pass

        assert ConstructibleDescriptor(Impl).kind is Kind.CONSTRUCTIBLE
        assert FactoryDescriptor(Impl).kind is Kind.FACTORY
        assert FixedDescriptor(1).kind is Kind.FIXED

    def test_default_lifetime_is_transient(self):
        class Impl:
            pass

        assert ConstructibleDescriptor(Impl).lifetime is Lifetime.TRANSIENT
        assert FactoryDescriptor(Impl).lifetime is Lifetime.TRANSIENT

    def test_each_descriptor_owns_its_cell(self):
        """Cells are never shared between descriptors."""
        class Impl:
            pass

        first = ConstructibleDescriptor(Impl, Lifetime.SINGLETON)
        second = ConstructibleDescriptor(Impl, Lifetime.SINGLETON)

        assert first.cell is not second.cell
