"""Tests for PlaywrightDriver — Playwright-based browser driver.

Uses MagicMock pages so no browser is launched.
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from playwright.sync_api import Error

from pagegate.core.exceptions import DriverError
from pagegate.core.models import DriverConfig, Locator, LocatorStrategy
from pagegate.driver import DRIVER_REGISTRY
from pagegate.driver.base import BaseDriver
from pagegate.driver.playwright_driver import PlaywrightDriver, PlaywrightElement


class TestPlaywrightDriverInit:
    def test_default_config(self) -> None:
        driver = PlaywrightDriver()
        assert driver._config.browser == "chromium"
        assert driver._config.headless is True
        assert driver._page is None

    def test_custom_config(self) -> None:
        driver = PlaywrightDriver(DriverConfig(browser="firefox", action_timeout_ms=1000))
        assert driver._config.browser == "firefox"
        assert driver._config.action_timeout_ms == 1000

    def test_page_property_raises_before_start(self) -> None:
        with pytest.raises(DriverError, match="not started"):
            _ = PlaywrightDriver().page

    def test_registered(self) -> None:
        assert DRIVER_REGISTRY["playwright"] is PlaywrightDriver
        assert issubclass(PlaywrightDriver, BaseDriver)


@pytest.fixture
def mock_page() -> MagicMock:
    page = MagicMock()
    page.url = "https://www.saucedemo.com/inventory.html"
    page.title.return_value = "Swag Labs"
    return page


@pytest.fixture
def driver(mock_page: MagicMock) -> PlaywrightDriver:
    driver = PlaywrightDriver(DriverConfig(action_timeout_ms=750))
    driver._page = mock_page
    return driver


class TestPlaywrightDriverPage:
    def test_navigate(self, driver: PlaywrightDriver, mock_page: MagicMock) -> None:
        driver.navigate("https://www.saucedemo.com/")
        mock_page.goto.assert_called_once_with(
            "https://www.saucedemo.com/", wait_until="domcontentloaded"
        )

    def test_navigate_failure_wrapped(
        self, driver: PlaywrightDriver, mock_page: MagicMock
    ) -> None:
        mock_page.goto.side_effect = RuntimeError("net::ERR_NAME_NOT_RESOLVED")
        with pytest.raises(DriverError, match="Navigation to https://nowhere failed"):
            driver.navigate("https://nowhere")

    def test_url_and_title(self, driver: PlaywrightDriver) -> None:
        assert driver.current_url() == "https://www.saucedemo.com/inventory.html"
        assert driver.title() == "Swag Labs"

    def test_stop_resets_state(self, driver: PlaywrightDriver) -> None:
        context = MagicMock()
        driver._context = context
        driver.stop()
        context.close.assert_called_once()
        assert driver._page is None


class TestLocatorResolution:
    @pytest.mark.parametrize(
        ("locator", "selector"),
        [
            (Locator.by_id("user-name"), '[id="user-name"]'),
            (Locator.css("div.error h3"), "div.error h3"),
            (Locator.xpath("//input[@id='password']"), "xpath=//input[@id='password']"),
            (Locator.class_name("login_logo"), ".login_logo"),
            (Locator(strategy=LocatorStrategy.NAME, value="user"), '[name="user"]'),
        ],
    )
    def test_selector_strategies(
        self,
        driver: PlaywrightDriver,
        mock_page: MagicMock,
        locator: Locator,
        selector: str,
    ) -> None:
        mock_page.locator.return_value.count.return_value = 1
        assert driver.find_one(locator) is not None
        mock_page.locator.assert_called_once_with(selector)

    def test_text_strategies(self, driver: PlaywrightDriver, mock_page: MagicMock) -> None:
        factories = (mock_page.get_by_text, mock_page.get_by_test_id, mock_page.get_by_placeholder)
        for factory in factories:
            factory.return_value.count.return_value = 0
        driver.find_all(Locator(strategy=LocatorStrategy.TEXT, value="Login"))
        mock_page.get_by_text.assert_called_once_with("Login", exact=True)
        driver.find_all(Locator(strategy=LocatorStrategy.TEST_ID, value="login-button"))
        mock_page.get_by_test_id.assert_called_once_with("login-button")
        driver.find_all(Locator(strategy=LocatorStrategy.PLACEHOLDER, value="Username"))
        mock_page.get_by_placeholder.assert_called_once_with("Username", exact=True)

    def test_find_one_missing(self, driver: PlaywrightDriver, mock_page: MagicMock) -> None:
        mock_page.locator.return_value.count.return_value = 0
        assert driver.find_one(Locator.by_id("gone")) is None

    def test_find_all(self, driver: PlaywrightDriver, mock_page: MagicMock) -> None:
        matches = mock_page.locator.return_value
        matches.count.return_value = 3
        assert len(driver.find_all(Locator.css("li"))) == 3
        assert [c.args for c in matches.nth.call_args_list] == [(0,), (1,), (2,)]


class TestPlaywrightElement:
    @pytest.fixture
    def pw_locator(self) -> MagicMock:
        return MagicMock()

    def test_operations_use_action_timeout(self, pw_locator: MagicMock) -> None:
        element = PlaywrightElement(pw_locator, 750)
        element.click()
        element.clear()
        element.type("standard_user")
        pw_locator.click.assert_called_once_with(timeout=750)
        pw_locator.clear.assert_called_once_with(timeout=750)
        pw_locator.press_sequentially.assert_called_once_with("standard_user", timeout=750)

    def test_value_reads_live_input(self, pw_locator: MagicMock) -> None:
        pw_locator.input_value.return_value = "typed"
        assert PlaywrightElement(pw_locator, 750).get_attribute("value") == "typed"
        pw_locator.get_attribute.assert_not_called()

    def test_value_falls_back_to_attribute(self, pw_locator: MagicMock) -> None:
        pw_locator.input_value.side_effect = Error("Not an input element")
        pw_locator.get_attribute.return_value = "Login"
        assert PlaywrightElement(pw_locator, 750).get_attribute("value") == "Login"

    def test_other_attribute(self, pw_locator: MagicMock) -> None:
        pw_locator.get_attribute.return_value = None
        assert PlaywrightElement(pw_locator, 750).get_attribute("required") is None
        pw_locator.get_attribute.assert_called_once_with("required", timeout=750)
