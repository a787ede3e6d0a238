"""ReadinessGate — "this page, and not another one, is showing".

A gate is an ordered list of requirements. Load-wait polls them in order
against one shared deadline, so the total wait never exceeds a single
timeout. The point-in-time check makes one pass with no sleeping.

States: NOT_LOADED --(load-wait ok)--> LOADED --(check or load-wait fails)--> DEGRADED.
A failed load-wait on a gate that never loaded leaves it NOT_LOADED.
Nothing returns a gate to LOADED except another successful load-wait.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pagegate.core.exceptions import ConditionTimeoutError
from pagegate.core.models import GateState, Requirement
from pagegate.sync.evaluator import holds

if TYPE_CHECKING:
    from collections.abc import Iterable

    from pagegate.core.models import WaitSpec
    from pagegate.sync.evaluator import ConditionEvaluator
    from pagegate.sync.poller import BoundedPoller

logger = logging.getLogger(__name__)


class ReadinessGate:
    """Aggregate readiness condition for one page."""

    def __init__(self, requirements: Iterable[Requirement], name: str = "page") -> None:
        self._requirements = tuple(requirements)
        if not self._requirements:
            msg = f"Readiness gate '{name}' needs at least one requirement"
            raise ValueError(msg)
        self._name = name
        self._state = GateState.NOT_LOADED

    @property
    def name(self) -> str:
        return self._name

    @property
    def state(self) -> GateState:
        return self._state

    @property
    def requirements(self) -> tuple[Requirement, ...]:
        return self._requirements

    def wait_for_ready(
        self,
        evaluator: ConditionEvaluator,
        poller: BoundedPoller,
        spec: WaitSpec,
    ) -> None:
        """Block until every requirement holds, all within one timeout.

        Raises:
            ConditionTimeoutError: Naming the first requirement still unmet at
                the shared deadline.
        """
        start = poller.now()
        deadline = poller.deadline_for(spec)
        for requirement in self._requirements:
            result = poller.poll(
                evaluator,
                requirement.locator,
                requirement.condition,
                spec,
                deadline=deadline,
            )
            if not result.satisfied:
                elapsed_ms = int(round((poller.now() - start) * 1000))
                logger.warning(
                    "%s did not load: %s unmet after %dms",
                    self._name,
                    requirement.describe(),
                    elapsed_ms,
                )
                if self._state == GateState.LOADED:
                    self._state = GateState.DEGRADED
                raise ConditionTimeoutError(
                    requirement.locator, requirement.condition, elapsed_ms
                )
        self._state = GateState.LOADED
        logger.info("%s loaded", self._name)

    def is_displaying(self, evaluator: ConditionEvaluator) -> bool:
        """Single pass: True only if every requirement holds right now."""
        displaying = all(
            holds(evaluator.evaluate(r.locator, r.condition), r.condition)
            for r in self._requirements
        )
        if not displaying and self._state == GateState.LOADED:
            logger.info("%s no longer displayed", self._name)
            self._state = GateState.DEGRADED
        return displaying
