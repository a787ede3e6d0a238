"""Shared fixtures: an in-memory driver and a fake clock.

The fake clock's sleep advances time instead of blocking, so timing
properties (poll counts, elapsed time) are checked deterministically.
"""

from __future__ import annotations

import pytest

from pagegate.core.models import Locator, WaitSpec
from pagegate.driver.base import BaseDriver, ElementHandle
from pagegate.sync.dispatcher import Dispatcher
from pagegate.sync.poller import BoundedPoller


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0
        self.sleeps: list[float] = []

    def monotonic(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


class FakeElement(ElementHandle):
    def __init__(
        self,
        *,
        visible: bool = True,
        enabled: bool = True,
        text: str = "",
        attributes: dict[str, str] | None = None,
    ) -> None:
        self.visible = visible
        self.enabled = enabled
        self.text = text
        self.attributes = dict(attributes or {})
        self.clicks = 0
        self.fail_on_click = False

    def is_visible(self) -> bool:
        return self.visible

    def is_enabled(self) -> bool:
        return self.enabled

    def get_text(self) -> str:
        return self.text

    def get_attribute(self, name: str) -> str | None:
        return self.attributes.get(name)

    def click(self) -> None:
        if self.fail_on_click:
            msg = "Element click intercepted"
            raise RuntimeError(msg)
        self.clicks += 1

    def clear(self) -> None:
        self.attributes["value"] = ""

    def type(self, text: str) -> None:
        self.attributes["value"] = self.attributes.get("value", "") + text


class FakeDriver(BaseDriver):
    """Driver whose elements can appear and disappear on the fake clock."""

    def __init__(self, clock: FakeClock) -> None:
        self._clock = clock
        self._elements: dict[Locator, tuple[FakeElement, float, float | None]] = {}
        self._broken: set[Locator] = set()
        self.url = ""
        self.page_title = ""
        self.lookups = 0
        self.started = False
        self.navigations: list[str] = []

    def add(
        self,
        locator: Locator,
        *,
        appears_at: float = 0.0,
        disappears_at: float | None = None,
        **kwargs: object,
    ) -> FakeElement:
        element = FakeElement(**kwargs)  # type: ignore[arg-type]
        self._elements[locator] = (element, appears_at, disappears_at)
        return element

    def break_lookup(self, locator: Locator) -> None:
        self._broken.add(locator)

    def start(self) -> None:
        self.started = True

    def stop(self) -> None:
        self.started = False

    def navigate(self, url: str) -> None:
        self.navigations.append(url)
        self.url = url

    def find_one(self, locator: Locator) -> ElementHandle | None:
        self.lookups += 1
        if locator in self._broken:
            msg = f"stale element reference: {locator}"
            raise RuntimeError(msg)
        entry = self._elements.get(locator)
        if entry is None:
            return None
        element, appears_at, disappears_at = entry
        now = self._clock.now
        if now < appears_at or (disappears_at is not None and now >= disappears_at):
            return None
        return element

    def find_all(self, locator: Locator) -> list[ElementHandle]:
        element = self.find_one(locator)
        return [element] if element is not None else []

    def current_url(self) -> str:
        return self.url

    def title(self) -> str:
        return self.page_title


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def driver(clock: FakeClock) -> FakeDriver:
    return FakeDriver(clock)


@pytest.fixture
def poller(clock: FakeClock) -> BoundedPoller:
    return BoundedPoller(clock=clock.monotonic, sleep=clock.sleep)


@pytest.fixture
def wait_spec() -> WaitSpec:
    return WaitSpec(timeout_ms=2000, poll_interval_ms=200)


@pytest.fixture
def dispatcher(driver: FakeDriver, poller: BoundedPoller, wait_spec: WaitSpec) -> Dispatcher:
    return Dispatcher(driver, wait_spec, poller)
