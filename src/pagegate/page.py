"""Page — generic page object driven by a PageDefinition.

One class covers every page: the definition supplies the locator table and
the readiness requirements, the dispatcher supplies probe/action semantics.

    page = Page(driver, load_page_definition(Path("pages/swag_labs_login.yaml")))
    page.open()
    page.wait_for_page_to_load()
    page.enter("username", "standard_user")
    page.click("login_button")
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pagegate.core.exceptions import PageAssertionError, PageDefinitionError
from pagegate.core.models import AttributePresent, Invisible
from pagegate.sync.dispatcher import Dispatcher
from pagegate.sync.gate import ReadinessGate

if TYPE_CHECKING:
    from pagegate.core.models import GateState, Locator, PageDefinition, WaitSpec
    from pagegate.driver.base import BaseDriver

logger = logging.getLogger(__name__)


class Page:
    """Page object over a locator table."""

    def __init__(
        self,
        driver: BaseDriver,
        definition: PageDefinition,
        wait: WaitSpec | None = None,
        dispatcher: Dispatcher | None = None,
    ) -> None:
        self._definition = definition
        self._dispatcher = dispatcher or Dispatcher(driver, wait or definition.wait)
        self._gate = ReadinessGate(definition.requirements(), name=definition.name)

    @property
    def name(self) -> str:
        return self._definition.name

    @property
    def definition(self) -> PageDefinition:
        return self._definition

    @property
    def dispatcher(self) -> Dispatcher:
        return self._dispatcher

    @property
    def gate(self) -> ReadinessGate:
        return self._gate

    @property
    def state(self) -> GateState:
        return self._gate.state

    def locator(self, element: str) -> Locator:
        """Locator for a named element.

        Raises:
            PageDefinitionError: The page declares no such element.
        """
        try:
            return self._definition.elements[element]
        except KeyError:
            msg = f"Page '{self.name}' has no element '{element}'"
            raise PageDefinitionError(msg) from None

    # -- Page level ------------------------------------------------------------

    def open(self, url: str | None = None) -> None:
        target = url or self._definition.url
        if not target:
            msg = f"Page '{self.name}' has no URL to open"
            raise PageDefinitionError(msg)
        logger.info("Opening %s at %s", self.name, target)
        self._dispatcher.driver.navigate(target)

    def wait_for_page_to_load(self, wait: WaitSpec | None = None) -> None:
        """Block until the page's readiness requirements hold (one shared timeout)."""
        self._dispatcher.wait_for_ready(self._gate, wait)

    def is_page_displaying(self) -> bool:
        return self._dispatcher.is_ready(self._gate)

    def get_page_title(self) -> str:
        return self._dispatcher.driver.title()

    def get_current_url(self) -> str:
        return self._dispatcher.driver.current_url()

    def assert_url(self, expected: str, contains: bool = False) -> None:
        actual = self.get_current_url()
        ok = expected in actual if contains else actual == expected
        if not ok:
            relation = "contain" if contains else "be"
            msg = f"Expected URL to {relation} '{expected}' but was '{actual}'"
            raise PageAssertionError(msg)

    def assert_title(self, expected: str) -> None:
        actual = self.get_page_title()
        if actual != expected:
            msg = f"Expected page title '{expected}' but was '{actual}'"
            raise PageAssertionError(msg)

    # -- Actions ---------------------------------------------------------------

    def enter(self, element: str, text: str) -> None:
        self._dispatcher.enter_text(self.locator(element), text)

    def clear(self, element: str) -> None:
        self._dispatcher.clear(self.locator(element))

    def click(self, element: str) -> None:
        self._dispatcher.click(self.locator(element))

    def wait_for_absent(self, element: str, wait: WaitSpec | None = None) -> bool:
        """Wait for element to be hidden or gone. False on timeout, never raises."""
        return self._dispatcher.wait_until(self.locator(element), Invisible(), wait)

    # -- Probes ----------------------------------------------------------------

    def is_displayed(self, element: str) -> bool:
        return self._dispatcher.is_displayed(self.locator(element))

    def is_enabled(self, element: str) -> bool:
        return self._dispatcher.is_enabled(self.locator(element))

    def is_required(self, element: str) -> bool:
        """True if the element carries a ``required`` attribute, whatever its value."""
        return self._dispatcher.probe(self.locator(element), AttributePresent(name="required"))

    def get_value(self, element: str) -> str:
        return self._dispatcher.read(self.locator(element), "value")

    def get_text(self, element: str, wait: WaitSpec | None = None) -> str:
        return self._dispatcher.read(self.locator(element), wait=wait)

    def get_attribute(self, element: str, name: str) -> str:
        return self._dispatcher.read(self.locator(element), name)

    def is_prepopulated_with(self, element: str, expected: str) -> bool:
        return self.get_value(element) == expected

    def text_contains(self, element: str, expected: str) -> bool:
        return self._dispatcher.text_contains(self.locator(element), expected)

    def assert_text_contains(self, element: str, expected: str) -> None:
        actual = self.get_text(element)
        if expected not in actual:
            msg = f"{element} text does not contain '{expected}'. Actual: '{actual}'"
            raise PageAssertionError(msg)
