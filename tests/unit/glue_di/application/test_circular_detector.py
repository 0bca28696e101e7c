"""Unit tests for CircularDependencyDetector."""

import threading

import pytest

from glue_di.application.circular_detector import CircularDependencyDetector
from glue_di.domain import CyclicDependencyError


class ServiceA:
    pass


class ServiceB:
    pass


class ServiceC:
    pass


class TestCircularDependencyDetector:
    """Test cases for CircularDependencyDetector class."""

    def test_detector_initialization(self):
        """Test that detector initializes enabled with a lazy stack."""
        detector = CircularDependencyDetector()
        assert detector.enabled is True
        assert not hasattr(detector._local, "stack")
        assert detector.depth == 0

    def test_push_multiple_dependencies(self):
        """Test that push adds dependencies in sequence."""
        detector = CircularDependencyDetector()

        detector.push(ServiceA)
        detector.push(ServiceB)
        detector.push(ServiceC)

        assert detector._get_stack() == [ServiceA, ServiceB, ServiceC]
        assert detector.depth == 3

    def test_push_detects_cycle(self):
        """Test that pushing a type already in the stack raises."""
        detector = CircularDependencyDetector()
        detector.push(ServiceA)
        detector.push(ServiceB)

        with pytest.raises(CyclicDependencyError) as exc_info:
            detector.push(ServiceA)

        assert exc_info.value.dependency_chain == [ServiceA, ServiceB, ServiceA]
        assert "ServiceA -> ServiceB -> ServiceA" in str(exc_info.value)

    def test_cycle_chain_starts_at_first_occurrence(self):
        """Test that the chain omits types resolved before the cycle began."""
        detector = CircularDependencyDetector()
        detector.push(ServiceA)
        detector.push(ServiceB)
        detector.push(ServiceC)

        with pytest.raises(CyclicDependencyError) as exc_info:
            detector.push(ServiceB)

        assert exc_info.value.dependency_chain == [ServiceB, ServiceC, ServiceB]

    def test_push_detects_self_reference(self):
        """Test immediate self-reference."""
        detector = CircularDependencyDetector()
        detector.push(ServiceA)

        with pytest.raises(CyclicDependencyError):
            detector.push(ServiceA)

    def test_cycle_detection_leaves_stack_untouched(self):
        """Test that a detected cycle does not push the repeated type."""
        detector = CircularDependencyDetector()
        detector.push(ServiceA)

        with pytest.raises(CyclicDependencyError):
            detector.push(ServiceA)

        assert detector._get_stack() == [ServiceA]

    def test_disabled_detector_tracks_without_raising(self):
        """Test that a disabled detector still records depth."""
        detector = CircularDependencyDetector(enabled=False)
        detector.push(ServiceA)
        detector.push(ServiceA)

        assert detector.depth == 2

    def test_string_tokens(self):
        """Test that non-class tokens are tracked."""
        detector = CircularDependencyDetector()
        detector.push("config")

        with pytest.raises(CyclicDependencyError):
            detector.push("config")

    def test_pop_removes_last(self):
        """Test that pop removes the most recent type."""
        detector = CircularDependencyDetector()
        detector.push(ServiceA)
        detector.push(ServiceB)

        detector.pop()

        assert detector._get_stack() == [ServiceA]

    def test_pop_on_empty_stack(self):
        """Test that popping an empty stack is a no-op."""
        detector = CircularDependencyDetector()
        detector.pop()
        assert detector.depth == 0

    def test_clear(self):
        """Test that clear empties the stack."""
        detector = CircularDependencyDetector()
        detector.push(ServiceA)
        detector.push(ServiceB)

        detector.clear()

        assert detector.depth == 0

    def test_thread_isolation(self):
        """Test that each thread has its own resolution stack."""
        detector = CircularDependencyDetector()
        detector.push(ServiceA)

        thread_stack = []
        exception_raised = []

        def thread_worker():
            try:
                detector.push(ServiceB)
                detector.push(ServiceA)
                thread_stack.extend(detector._get_stack())
            except CyclicDependencyError:
                exception_raised.append(True)

        thread = threading.Thread(target=thread_worker)
        thread.start()
        thread.join()

        assert detector._get_stack() == [ServiceA]
        assert thread_stack == [ServiceB, ServiceA]
        assert not exception_raised
