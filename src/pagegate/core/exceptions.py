"""pagegate custom exception hierarchy.

All exceptions inherit from PageGateError.
ConditionTimeoutError / TargetNotFoundError carry the locator so a failing
action names the element it was waiting for.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pagegate.core.models import Condition, Locator


class PageGateError(Exception):
    """Base exception for all pagegate errors."""


class ConfigError(PageGateError):
    """Configuration file load/validation error."""


class PageDefinitionError(PageGateError):
    """Page definition YAML parsing/validation error, or unknown element name."""


class DriverError(PageGateError):
    """Browser driver error (launch failure, failed click, etc.)."""


class UnsupportedConditionError(PageGateError):
    """Condition kind the evaluator cannot check. Always a programming error."""


class ConditionTimeoutError(PageGateError):
    """A condition never became true before the wait deadline."""

    def __init__(self, locator: Locator | None, condition: Condition, elapsed_ms: int) -> None:
        self.locator = locator
        self.condition = condition
        self.elapsed_ms = elapsed_ms
        target = f"{locator} to be {condition.describe()}" if locator else condition.describe()
        super().__init__(f"Timed out after {elapsed_ms}ms waiting for {target}")


class TargetNotFoundError(PageGateError):
    """Element could not be resolved when an action needed it."""

    def __init__(self, locator: Locator) -> None:
        self.locator = locator
        super().__init__(f"Element not found: {locator}")


class PageAssertionError(PageGateError, AssertionError):
    """Page-level verification failed (URL, title, text)."""
