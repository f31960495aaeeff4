#!filepath: mobsim/observability/progress.py
from mobsim import logs


class ProgressReporter:
    """
    Lightest possible progress output: one log line per update, nothing when disabled.
    """

    def __init__(self, enabled: bool = True, every: int = 1):
        self.enabled = enabled
        self.every = max(1, int(every))

    def start(self, task: str, total: int, unit: str = ""):
        if not self.enabled:
            return
        logs.info(f"[Progress] {task} started total={total} {unit}")

    def update(self, task: str, current: int, total: int, unit: str = "", extra: str = ""):
        if not self.enabled:
            return
        if current % self.every and current != total:
            return
        suffix = f" {extra}" if extra else ""
        logs.info(f"[Progress] {task}: {current}/{total} {unit}{suffix}")

    def done(self, task: str):
        if not self.enabled:
            return
        logs.info(f"[Progress] {task} done")
