"""BoundedPoller — condition polling with a hard deadline.

Re-evaluates a condition at a fixed interval until it holds or the deadline
passes. This is the only place elapsed time is measured; the dispatcher and
the readiness gate delegate all timing here.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from pagegate.core.models import WaitResult
from pagegate.sync.evaluator import holds

if TYPE_CHECKING:
    from collections.abc import Callable

    from pagegate.core.models import Condition, EvalState, Locator, WaitSpec
    from pagegate.sync.evaluator import ConditionEvaluator

logger = logging.getLogger(__name__)


class BoundedPoller:
    """Timeout + interval retry loop."""

    def __init__(
        self,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._clock = clock
        self._sleep = sleep

    def now(self) -> float:
        return self._clock()

    def deadline_for(self, spec: WaitSpec) -> float:
        """Absolute deadline for a wait starting now."""
        return self._clock() + spec.timeout_s

    def poll(
        self,
        evaluator: ConditionEvaluator,
        locator: Locator | None,
        condition: Condition,
        spec: WaitSpec,
        deadline: float | None = None,
    ) -> WaitResult:
        """Poll condition until it holds or the deadline passes.

        Args:
            evaluator: Evaluator used for each check.
            locator: Element to check (None for surface conditions).
            condition: Condition to wait for.
            spec: Timeout and poll interval.
            deadline: Absolute clock value shared by several waits. When None,
                the deadline is now + spec.timeout.

        Returns:
            WaitResult. ``satisfied`` is False on timeout.

        Raises:
            UnsupportedConditionError: Propagated from the evaluator.
        """
        start = self._clock()
        end = start + spec.timeout_s if deadline is None else deadline
        polls = 0

        while True:
            state = evaluator.evaluate(locator, condition)
            polls += 1
            if holds(state, condition):
                return self._result(True, state, start, polls)

            now = self._clock()
            if now >= end:
                logger.debug(
                    "Gave up on %s %s after %d poll(s)",
                    locator or "page",
                    condition.describe(),
                    polls,
                )
                return self._result(False, state, start, polls)
            self._sleep(min(spec.poll_interval_s, end - now))

    def _result(self, satisfied: bool, state: EvalState, start: float, polls: int) -> WaitResult:
        elapsed_ms = max(0, int(round((self._clock() - start) * 1000)))
        return WaitResult(satisfied=satisfied, state=state, elapsed_ms=elapsed_ms, polls=polls)
