"""Dispatcher — probe and action calling conventions over the poller.

Probes answer state questions and never raise for lookup failures or
timeouts: they degrade to ``False`` / ``""``. Actions wait for a
precondition, then mutate, and raise a descriptive error when they cannot.
Every call re-resolves its locator; element handles are never cached.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from pagegate.core.exceptions import (
    ConditionTimeoutError,
    DriverError,
    PageGateError,
    TargetNotFoundError,
)
from pagegate.core.models import (
    AttributePresent,
    Clickable,
    Enabled,
    Present,
    ProbeResult,
    TextContains,
    Visible,
    WaitSpec,
)
from pagegate.sync.evaluator import ConditionEvaluator, holds
from pagegate.sync.poller import BoundedPoller

if TYPE_CHECKING:
    from collections.abc import Callable

    from pagegate.core.models import Condition, Locator
    from pagegate.driver.base import BaseDriver, ElementHandle
    from pagegate.sync.gate import ReadinessGate

logger = logging.getLogger(__name__)


class Dispatcher:
    """Probe/action front end for one driver session."""

    def __init__(
        self,
        driver: BaseDriver,
        wait: WaitSpec | None = None,
        poller: BoundedPoller | None = None,
    ) -> None:
        self._driver = driver
        self._wait = wait or WaitSpec()
        self._poller = poller or BoundedPoller()
        self._evaluator = ConditionEvaluator(driver)

    @property
    def driver(self) -> BaseDriver:
        return self._driver

    @property
    def default_wait(self) -> WaitSpec:
        return self._wait

    @property
    def evaluator(self) -> ConditionEvaluator:
        return self._evaluator

    @property
    def poller(self) -> BoundedPoller:
        return self._poller

    # -- Probes ----------------------------------------------------------------

    def probe(
        self,
        locator: Locator,
        condition: Condition | None = None,
        wait: WaitSpec | None = None,
    ) -> bool:
        """Return True if locator satisfies condition (default: visible).

        With ``wait=None`` this is a single immediate check. With a WaitSpec the
        condition is polled until it holds or the wait runs out.
        """
        condition = condition or Visible()
        if wait is None:
            return holds(self._evaluator.evaluate(locator, condition), condition)
        return self._poller.poll(self._evaluator, locator, condition, wait).satisfied

    def wait_until(
        self,
        locator: Locator | None,
        condition: Condition,
        wait: WaitSpec | None = None,
    ) -> bool:
        """Bounded probe: poll with the given (or default) wait, never raise on timeout."""
        result = self._poller.poll(self._evaluator, locator, condition, wait or self._wait)
        return result.satisfied

    def lookup(
        self,
        locator: Locator,
        attribute: str | None = None,
        wait: WaitSpec | None = None,
    ) -> ProbeResult:
        """Read element text (or an attribute) without raising.

        When ``wait`` is given the element must first become visible within it.
        Missing element, timeout, or driver failure give ``ProbeResult(found=False)``.
        """
        if wait is not None and not self.probe(locator, Visible(), wait):
            return ProbeResult()
        try:
            element = self._driver.find_one(locator)
            if element is None:
                return ProbeResult()
            if attribute is None:
                return ProbeResult(found=True, value=element.get_text().strip())
            value = element.get_attribute(attribute)
        except Exception as e:  # noqa: BLE001
            logger.debug("Read of %s failed: %s", locator, e)
            return ProbeResult()
        if value is None:
            return ProbeResult()
        return ProbeResult(found=True, value=value)

    def read(
        self,
        locator: Locator,
        attribute: str | None = None,
        wait: WaitSpec | None = None,
    ) -> str:
        """Text (or attribute) of locator, ``""`` when it cannot be read."""
        return self.lookup(locator, attribute, wait).value

    def is_displayed(self, locator: Locator) -> bool:
        return self.probe(locator, Visible())

    def is_enabled(self, locator: Locator) -> bool:
        return self.probe(locator, Enabled())

    def is_present(self, locator: Locator) -> bool:
        return self.probe(locator, Present())

    def has_attribute(self, locator: Locator, name: str) -> bool:
        return self.probe(locator, AttributePresent(name=name))

    def text_contains(self, locator: Locator, text: str, wait: WaitSpec | None = None) -> bool:
        return self.probe(locator, TextContains(text=text), wait)

    def is_ready(self, gate: ReadinessGate) -> bool:
        """Point-in-time readiness check (single pass, never raises on lookup failure)."""
        return gate.is_displaying(self._evaluator)

    # -- Actions ---------------------------------------------------------------

    def wait_for(
        self,
        locator: Locator | None,
        condition: Condition,
        wait: WaitSpec | None = None,
    ) -> None:
        """Block until condition holds.

        Raises:
            ConditionTimeoutError: Condition still unmet at the deadline.
        """
        result = self._poller.poll(self._evaluator, locator, condition, wait or self._wait)
        if not result.satisfied:
            logger.warning(
                "Timed out after %dms waiting for %s %s",
                result.elapsed_ms,
                locator or "page",
                condition.describe(),
            )
            raise ConditionTimeoutError(locator, condition, result.elapsed_ms)

    def wait_for_ready(self, gate: ReadinessGate, wait: WaitSpec | None = None) -> None:
        """Block until every gate requirement holds within one shared deadline."""
        gate.wait_for_ready(self._evaluator, self._poller, wait or self._wait)

    def act(
        self,
        locator: Locator,
        operation: Callable[[ElementHandle], Any],
        precondition: Condition | None = None,
        wait: WaitSpec | None = None,
        description: str | None = None,
    ) -> None:
        """Wait for precondition (default: clickable), then run operation on the element.

        Args:
            locator: Target element.
            operation: Callable receiving the freshly resolved element.
            precondition: Condition to establish first.
            wait: Wait for the precondition; defaults to the dispatcher's wait.
            description: Name of the operation for error messages.

        Raises:
            ConditionTimeoutError: Precondition never became true.
            TargetNotFoundError: Element vanished after the precondition held.
            DriverError: The operation itself failed.
        """
        precondition = precondition or Clickable()
        name = description or getattr(operation, "__name__", "action")
        self.wait_for(locator, precondition, wait)

        try:
            element = self._driver.find_one(locator)
        except Exception as e:
            raise TargetNotFoundError(locator) from e
        if element is None:
            raise TargetNotFoundError(locator)

        try:
            operation(element)
        except PageGateError:
            raise
        except Exception as e:
            msg = f"{name} on {locator} failed: {e}"
            raise DriverError(msg) from e
        logger.debug("%s on %s", name, locator)

    def click(self, locator: Locator, wait: WaitSpec | None = None) -> None:
        self.act(locator, lambda el: el.click(), Clickable(), wait, "click")

    def clear(self, locator: Locator, wait: WaitSpec | None = None) -> None:
        self.act(locator, lambda el: el.clear(), Visible(), wait, "clear")

    def enter_text(self, locator: Locator, text: str, wait: WaitSpec | None = None) -> None:
        """Replace the field's contents with text (clear, then type)."""

        def _replace(element: ElementHandle) -> None:
            element.clear()
            element.type(text)

        self.act(locator, _replace, Clickable(), wait, "enter text")
