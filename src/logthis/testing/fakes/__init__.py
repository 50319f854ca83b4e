"""Testing fakes – in-memory doubles for sinks, deliver functions and clocks."""
from logthis.kernel.time import FrozenClock
from logthis.testing.fakes.clock import FakeClock
from logthis.testing.fakes.deliver import GatedDeliver
from logthis.testing.fakes.sinks import FailingSink, RecordingSink

__all__ = ["FailingSink", "FakeClock", "FrozenClock", "GatedDeliver", "RecordingSink"]
