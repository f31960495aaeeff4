#!filepath: mobsim/observability/timer.py
import time
from typing import Dict


class Timer:
    """
    perf_counter based named timer
    - start(name)
    - end(name) -> elapsed seconds (0.0 when disabled or never started)
    - nested names are independent
    """

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self._start: Dict[str, float] = {}

    def start(self, name: str) -> None:
        if not self.enabled:
            return
        self._start[name] = time.perf_counter()

    def end(self, name: str) -> float:
        if not self.enabled:
            return 0.0
        started = self._start.pop(name, None)
        if started is None:
            return 0.0
        return time.perf_counter() - started
