"""Driver plugin registry."""

from pagegate.driver.playwright_driver import PlaywrightDriver

DRIVER_REGISTRY: dict[str, type] = {
    "playwright": PlaywrightDriver,
}
