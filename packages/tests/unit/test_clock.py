"""Unit tests for chronokit._clock — clock port and system adapter.

Test Techniques Used:
    - Specification-based Testing: Verifying ClockPort protocol
      contract
    - Protocol Conformance: isinstance checks for structural
      subtyping
    - Boundary Value Analysis: Monotonic ordering guarantees
"""

from __future__ import annotations

from chronokit._clock import ClockPort, SystemClock
from chronokit.testing import FakeClock


class TestSystemClock:
    """Tests for SystemClock production implementation.

    Technique: Specification-based Testing — verifying public
    contract.
    """

    def test_satisfies_clock_port_protocol(self) -> None:
        """SystemClock is recognized as ClockPort."""
        clock = SystemClock()
        assert isinstance(clock, ClockPort)

    def test_now_returns_int_milliseconds(self) -> None:
        """now() returns an int value."""
        clock = SystemClock()
        result = clock.now()
        assert isinstance(result, int)

    def test_now_is_monotonically_non_decreasing(self) -> None:
        """Successive calls return non-decreasing values."""
        clock = SystemClock()
        t1 = clock.now()
        t2 = clock.now()
        assert t2 >= t1


class TestFakeClock:
    """Tests for the FakeClock test double.

    Technique: Protocol Conformance plus state inspection.
    """

    def test_satisfies_clock_port_protocol(self) -> None:
        """FakeClock is recognized as ClockPort."""
        assert isinstance(FakeClock(), ClockPort)

    def test_starts_at_given_time(self) -> None:
        """Constructor value is returned by now()."""
        assert FakeClock(42).now() == 42

    def test_advance_moves_forward(self) -> None:
        """advance() adds to the current time and returns it."""
        clock = FakeClock(100)
        assert clock.advance(250) == 350
        assert clock.now() == 350

    def test_set_jumps_to_absolute_time(self) -> None:
        """set() replaces the current time."""
        clock = FakeClock(100)
        clock.set(5000)
        assert clock.now() == 5000


class TestClockPortProtocol:
    """Tests for ClockPort protocol definition.

    Technique: Protocol Conformance — structural subtyping checks.
    """

    def test_custom_class_satisfies_protocol(self) -> None:
        """A class with now() -> int satisfies ClockPort."""

        class StaticClock:
            def now(self) -> int:
                return 42

        assert isinstance(StaticClock(), ClockPort)

    def test_class_without_now_does_not_satisfy(self) -> None:
        """A class without now() does not satisfy ClockPort."""

        class NotAClock:
            pass

        assert not isinstance(NotAClock(), ClockPort)
