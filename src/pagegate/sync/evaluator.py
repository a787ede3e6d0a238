"""ConditionEvaluator — one non-blocking condition check.

Answers "does the node behind this locator satisfy this condition right now?"
with an EvalState. Driver failures during lookup are reported as
TARGET_ABSENT; an unknown condition kind is raised immediately.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pagegate.core.exceptions import UnsupportedConditionError
from pagegate.core.models import (
    AttributeEquals,
    AttributePresent,
    Clickable,
    Enabled,
    EvalState,
    Invisible,
    Present,
    TextContains,
    TextEquals,
    TitleEquals,
    UrlContains,
    UrlEquals,
    Visible,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from pagegate.core.models import Condition, Locator
    from pagegate.driver.base import BaseDriver, ElementHandle

logger = logging.getLogger(__name__)


def holds(state: EvalState, condition: Condition) -> bool:
    """True if state counts as success. Absence conditions also accept a missing target."""
    return state == EvalState.SATISFIED or (
        state == EvalState.TARGET_ABSENT and condition.expects_absence
    )


def _state(ok: bool) -> EvalState:
    return EvalState.SATISFIED if ok else EvalState.NOT_YET


def _visible(element: ElementHandle, _: Condition) -> EvalState:
    return _state(element.is_visible())


def _clickable(element: ElementHandle, _: Condition) -> EvalState:
    return _state(element.is_visible() and element.is_enabled())


def _enabled(element: ElementHandle, _: Condition) -> EvalState:
    return _state(element.is_enabled())


def _present(element: ElementHandle, _: Condition) -> EvalState:
    return EvalState.SATISFIED


def _invisible(element: ElementHandle, _: Condition) -> EvalState:
    return _state(not element.is_visible())


def _attribute_equals(element: ElementHandle, condition: AttributeEquals) -> EvalState:
    return _state(element.get_attribute(condition.name) == condition.value)


def _attribute_present(element: ElementHandle, condition: AttributePresent) -> EvalState:
    return _state(element.get_attribute(condition.name) is not None)


def _text_contains(element: ElementHandle, condition: TextContains) -> EvalState:
    return _state(condition.text in element.get_text().strip())


def _text_equals(element: ElementHandle, condition: TextEquals) -> EvalState:
    return _state(element.get_text().strip() == condition.text)


_ELEMENT_CHECKS: dict[type, Callable[..., EvalState]] = {
    Visible: _visible,
    Clickable: _clickable,
    Enabled: _enabled,
    Present: _present,
    Invisible: _invisible,
    AttributeEquals: _attribute_equals,
    AttributePresent: _attribute_present,
    TextContains: _text_contains,
    TextEquals: _text_equals,
}

_SURFACE_CHECKS: dict[type, Callable[..., bool]] = {
    TitleEquals: lambda driver, c: driver.title() == c.title,
    UrlEquals: lambda driver, c: driver.current_url() == c.url,
    UrlContains: lambda driver, c: c.fragment in driver.current_url(),
}


class ConditionEvaluator:
    """Single-shot condition checks against a driver."""

    def __init__(self, driver: BaseDriver) -> None:
        self._driver = driver

    @property
    def driver(self) -> BaseDriver:
        return self._driver

    def evaluate(self, locator: Locator | None, condition: Condition) -> EvalState:
        """Check condition once.

        Args:
            locator: Element to check. None for surface conditions (title, URL).
            condition: Condition to check.

        Returns:
            SATISFIED, NOT_YET, or TARGET_ABSENT (element missing or lookup failed).

        Raises:
            UnsupportedConditionError: Unknown condition kind, or a locator that
                does not fit the condition.
        """
        kind = type(condition)

        if kind in _SURFACE_CHECKS:
            if locator is not None:
                msg = f"Condition '{condition.describe()}' does not take a locator"
                raise UnsupportedConditionError(msg)
            try:
                return _state(_SURFACE_CHECKS[kind](self._driver, condition))
            except Exception as e:  # noqa: BLE001
                logger.debug("Surface check %s failed: %s", condition.describe(), e)
                return EvalState.TARGET_ABSENT

        check = _ELEMENT_CHECKS.get(kind)
        if check is None:
            msg = f"Unsupported condition kind: {kind.__name__}"
            raise UnsupportedConditionError(msg)
        if locator is None:
            msg = f"Condition '{condition.describe()}' needs a locator"
            raise UnsupportedConditionError(msg)

        try:
            element = self._driver.find_one(locator)
            if element is None:
                return EvalState.TARGET_ABSENT
            return check(element, condition)
        except Exception as e:  # noqa: BLE001
            logger.debug("Lookup of %s failed: %s", locator, e)
            return EvalState.TARGET_ABSENT
