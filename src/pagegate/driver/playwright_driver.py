"""PlaywrightDriver — Playwright-based browser driver.

Implements BaseDriver using the Playwright sync API. Waiting is left to the
poller, so element operations run with a short action timeout.
"""

from __future__ import annotations

from playwright.sync_api import (
    Browser,
    BrowserContext,
    Error,
    Page,
    Playwright,
    sync_playwright,
)
from playwright.sync_api import (
    Locator as PWLocator,
)

from pagegate.core.exceptions import DriverError
from pagegate.core.models import DriverConfig, Locator, LocatorStrategy
from pagegate.driver.base import BaseDriver, ElementHandle


class PlaywrightElement(ElementHandle):
    """ElementHandle over a single Playwright locator."""

    def __init__(self, locator: PWLocator, action_timeout_ms: int) -> None:
        self._locator = locator
        self._timeout = action_timeout_ms

    def is_visible(self) -> bool:
        return self._locator.is_visible()

    def is_enabled(self) -> bool:
        return self._locator.is_enabled(timeout=self._timeout)

    def get_text(self) -> str:
        return self._locator.inner_text(timeout=self._timeout)

    def get_attribute(self, name: str) -> str | None:
        """Return an attribute value. ``value`` reads the live input value."""
        if name == "value":
            try:
                return self._locator.input_value(timeout=self._timeout)
            except Error:
                # Not an input/textarea/select: fall back to the HTML attribute.
                pass
        return self._locator.get_attribute(name, timeout=self._timeout)

    def click(self) -> None:
        self._locator.click(timeout=self._timeout)

    def clear(self) -> None:
        self._locator.clear(timeout=self._timeout)

    def type(self, text: str) -> None:
        self._locator.press_sequentially(text, timeout=self._timeout)


class PlaywrightDriver(BaseDriver):
    """Playwright-based browser driver."""

    def __init__(self, config: DriverConfig | None = None) -> None:
        self._config = config or DriverConfig()
        self._playwright: Playwright | None = None
        self._browser: Browser | None = None
        self._context: BrowserContext | None = None
        self._page: Page | None = None

    @property
    def page(self) -> Page:
        """Current Playwright page. Raises DriverError if not started."""
        if self._page is None:
            msg = "PlaywrightDriver not started. Call start() first."
            raise DriverError(msg)
        return self._page

    def __enter__(self) -> PlaywrightDriver:
        self.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()

    def start(self) -> None:
        """Launch browser and create page."""
        try:
            pw = sync_playwright().start()
            self._playwright = pw

            browser_type = getattr(pw, self._config.browser, None)
            if browser_type is None:
                msg = f"Unknown browser: {self._config.browser}"
                raise DriverError(msg)

            self._browser = browser_type.launch(headless=self._config.headless)
            self._context = self._browser.new_context(
                viewport={
                    "width": self._config.viewport_width,
                    "height": self._config.viewport_height,
                },
                ignore_https_errors=True,
            )
            self._context.set_default_timeout(self._config.action_timeout_ms)
            self._page = self._context.new_page()
        except DriverError:
            raise
        except Exception as e:
            msg = f"Failed to start PlaywrightDriver: {e}"
            raise DriverError(msg) from e

    def stop(self) -> None:
        """Close browser and cleanup."""
        try:
            if self._context:
                self._context.close()
            if self._browser:
                self._browser.close()
            if self._playwright:
                self._playwright.stop()
        except Exception as e:
            msg = f"Failed to stop PlaywrightDriver: {e}"
            raise DriverError(msg) from e
        finally:
            self._page = None
            self._context = None
            self._browser = None
            self._playwright = None

    def navigate(self, url: str) -> None:
        """Navigate to URL."""
        try:
            self.page.goto(url, wait_until="domcontentloaded")
        except Exception as e:
            msg = f"Navigation to {url} failed: {e}"
            raise DriverError(msg) from e

    def find_one(self, locator: Locator) -> ElementHandle | None:
        matches = self._resolve(locator)
        if matches.count() == 0:
            return None
        return PlaywrightElement(matches.first, self._config.action_timeout_ms)

    def find_all(self, locator: Locator) -> list[ElementHandle]:
        matches = self._resolve(locator)
        return [
            PlaywrightElement(matches.nth(i), self._config.action_timeout_ms)
            for i in range(matches.count())
        ]

    def current_url(self) -> str:
        return self.page.url

    def title(self) -> str:
        return self.page.title()

    def _resolve(self, locator: Locator) -> PWLocator:
        """Translate a Locator into a Playwright locator."""
        page = self.page
        value = locator.value
        strategy = locator.strategy
        if strategy == LocatorStrategy.ID:
            return page.locator(f'[id="{value}"]')
        if strategy == LocatorStrategy.CSS:
            return page.locator(value)
        if strategy == LocatorStrategy.XPATH:
            return page.locator(f"xpath={value}")
        if strategy == LocatorStrategy.CLASS_NAME:
            return page.locator(f".{value}")
        if strategy == LocatorStrategy.NAME:
            return page.locator(f'[name="{value}"]')
        if strategy == LocatorStrategy.TEXT:
            return page.get_by_text(value, exact=True)
        if strategy == LocatorStrategy.TEST_ID:
            return page.get_by_test_id(value)
        if strategy == LocatorStrategy.PLACEHOLDER:
            return page.get_by_placeholder(value, exact=True)
        msg = f"Unsupported locator strategy: {strategy}"
        raise DriverError(msg)
