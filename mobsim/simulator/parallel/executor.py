# mobsim/simulator/parallel/executor.py
from __future__ import annotations

import os
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from dataclasses import dataclass
from typing import Callable, Generic, Iterable, List, Optional, TypeVar

from mobsim import logs

T = TypeVar("T")
R = TypeVar("R")


@dataclass(frozen=True)
class RunOutcome(Generic[R]):
    """Result of one item: exactly one of result / error is set."""

    name: str
    result: Optional[R] = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class ParallelExecutor:
    """
    ParallelExecutor (FINAL)

    Thread pool over independent simulation runs.

    Rules:
      - outcomes are returned in input order, whatever the completion order
      - fail_fast=True: the first failure cancels pending items and is re-raised
      - fail_fast=False: every item runs, failures are kept in RunOutcome.error
      - one worker -> plain sequential loop, no pool
    """

    @staticmethod
    def run(
        *,
        items: Iterable[T],
        handler: Callable[[T], R],
        max_workers: int | None = None,
        fail_fast: bool = True,
        name_of: Callable[[T], str] = str,
    ) -> List[RunOutcome[R]]:
        items = list(items)
        if not items:
            logs.info("[ParallelExecutor] no items to process")
            return []

        workers = ParallelExecutor._resolve_workers(items, max_workers)
        logs.info(f"[ParallelExecutor] start total={len(items)} workers={workers}")

        if workers == 1:
            return ParallelExecutor._run_sequential(items, handler, fail_fast, name_of)
        return ParallelExecutor._run_parallel(items, handler, workers, fail_fast, name_of)

    # ---------------- internal ----------------

    @staticmethod
    def _resolve_workers(items: list, max_workers: int | None) -> int:
        cpu = os.cpu_count() or 1
        if max_workers is None:
            return min(cpu, len(items))
        return max(1, min(max_workers, len(items)))

    @staticmethod
    def _run_sequential(items, handler, fail_fast, name_of) -> List[RunOutcome]:
        outcomes: List[RunOutcome] = []
        for item in items:
            try:
                outcomes.append(RunOutcome(name=name_of(item), result=handler(item)))
            except Exception as e:
                if fail_fast:
                    raise
                logs.warning(f"[ParallelExecutor] {name_of(item)} failed: {e}")
                outcomes.append(RunOutcome(name=name_of(item), error=e))
        return outcomes

    @staticmethod
    def _run_parallel(items, handler, workers, fail_fast, name_of) -> List[RunOutcome]:
        logs.info(f"[ParallelExecutor] run parallel | workers={workers}")

        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="sim") as pool:
            futures = [pool.submit(handler, item) for item in items]

            if fail_fast:
                done, pending = wait(futures, return_when=FIRST_EXCEPTION)
                failed = next((f for f in futures if f in done and f.exception() is not None), None)
                if failed is not None:
                    for fut in pending:
                        fut.cancel()
                    raise failed.exception()

        outcomes: List[RunOutcome] = []
        for item, fut in zip(items, futures):
            error = fut.exception()
            if error is not None:
                if fail_fast:
                    raise error
                logs.warning(f"[ParallelExecutor] {name_of(item)} failed: {error}")
                outcomes.append(RunOutcome(name=name_of(item), error=error))
            else:
                outcomes.append(RunOutcome(name=name_of(item), result=fut.result()))
        return outcomes
