"""Unit tests for SingletonCell."""

import threading
import time

import pytest

from glue_di.application.singleton_cell import SingletonCell
from glue_di.domain import SingletonState


class Connection:
    pass


class TestSingletonCellStates:
    """Test cases for the cell state machine."""

    def test_cell_starts_empty(self):
        """Test that a new cell is empty."""
        cell = SingletonCell()
        assert cell.state is SingletonState.EMPTY
        assert not cell.is_populated

    def test_cell_populated_after_first_call(self):
        """Test that the first call populates the cell."""
        cell = SingletonCell()

        instance = cell.get_or_create(Connection)

        assert isinstance(instance, Connection)
        assert cell.state is SingletonState.POPULATED
        assert cell.is_populated

    def test_cell_is_initializing_during_construction(self):
        """Test that the factory observes the INITIALIZING state."""
        cell = SingletonCell()
        observed = []

        def factory():
            observed.append(cell.state)
            return Connection()

        cell.get_or_create(factory)

        assert observed == [SingletonState.INITIALIZING]


class TestSingletonCellCaching:
    """Test cases for construct-once semantics."""

    def test_returns_same_instance(self):
        """Test that repeated calls return the cached instance."""
        cell = SingletonCell()

        first = cell.get_or_create(Connection)
        second = cell.get_or_create(Connection)

        assert first is second

    def test_factory_called_once(self):
        """Test that the factory runs only on the first call."""
        cell = SingletonCell()
        calls = []

        def factory():
            calls.append(1)
            return Connection()

        for _ in range(5):
            cell.get_or_create(factory)

        assert len(calls) == 1

    def test_caches_none_result(self):
        """Test that a None instance is cached like any other value."""
        cell = SingletonCell()
        calls = []

        def factory():
            calls.append(1)
            return None

        assert cell.get_or_create(factory) is None
        assert cell.get_or_create(factory) is None
        assert len(calls) == 1


class TestSingletonCellFailures:
    """Test cases for failed construction."""

    def test_failure_propagates_unchanged(self):
        """Test that the factory's exception reaches the caller."""
        cell = SingletonCell()
        error = RuntimeError("database unavailable")

        def factory():
            raise error

        with pytest.raises(RuntimeError) as exc_info:
            cell.get_or_create(factory)

        assert exc_info.value is error

    def test_failure_returns_cell_to_empty(self):
        """Test that a failed construction can be retried."""
        cell = SingletonCell()
        attempts = []

        def factory():
            attempts.append(1)
            if len(attempts) == 1:
                raise RuntimeError("first attempt fails")
            return Connection()

        with pytest.raises(RuntimeError):
            cell.get_or_create(factory)
        assert cell.state is SingletonState.EMPTY

        instance = cell.get_or_create(factory)

        assert isinstance(instance, Connection)
        assert cell.state is SingletonState.POPULATED
        assert len(attempts) == 2


class TestSingletonCellConcurrency:
    """Test cases for concurrent first-time access."""

    def test_concurrent_first_access_constructs_once(self):
        """Test that racing threads converge on one instance."""
        cell = SingletonCell()
        calls = []
        results = []
        barrier = threading.Barrier(8, timeout=10)

        def factory():
            calls.append(1)
            time.sleep(0.05)
            return Connection()

        def worker():
            barrier.wait()
            results.append(cell.get_or_create(factory))

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(calls) == 1
        assert len(results) == 8
        assert all(result is results[0] for result in results)
