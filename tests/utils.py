from typing import Iterable


class FakeClock:
    """
    Returns given readings one by one, then keeps returning the last one.
    `set` and `tick` drop pending readings and move the clock.
    """

    def __init__(self, readings: Iterable[int] = (), start: int = 1483200000100):
        self._readings = list(readings)
        self.now = self._readings[0] if self._readings else start
        self.calls = 0

    def __call__(self) -> int:
        if self._readings:
            self.now = self._readings.pop(0)
        self.calls += 1
        return self.now

    def set(self, now: int) -> None:
        self._readings.clear()
        self.now = now

    def tick(self, ms: int = 1) -> None:
        self.set(self.now + ms)
