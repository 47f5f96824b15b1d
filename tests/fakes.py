"""Deterministic stand-ins shared by the test suite."""


class FakeClock:
    """Manually advanced seconds source for TTL and timing tests."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds
