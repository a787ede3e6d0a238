"""BaseDriver ABC — browser driver interface.

PlaywrightDriver implements this. The wait/verify layer only consumes
these capabilities; it never reaches into a concrete driver.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pagegate.core.models import Locator


class ElementHandle(ABC):
    """A resolved UI node. Valid only for the call that resolved it."""

    @abstractmethod
    def is_visible(self) -> bool:
        """Return True if the element is rendered and visible."""
        ...

    @abstractmethod
    def is_enabled(self) -> bool:
        """Return True if the element accepts interaction."""
        ...

    @abstractmethod
    def get_text(self) -> str:
        """Return the visible text of the element."""
        ...

    @abstractmethod
    def get_attribute(self, name: str) -> str | None:
        """Return an attribute value, or None if the attribute is absent."""
        ...

    @abstractmethod
    def click(self) -> None:
        """Click the element."""
        ...

    @abstractmethod
    def clear(self) -> None:
        """Clear an editable element."""
        ...

    @abstractmethod
    def type(self, text: str) -> None:
        """Type text into the element, appending to its current value."""
        ...


class BaseDriver(ABC):
    """Browser driver abstract interface."""

    @abstractmethod
    def start(self) -> None:
        """Open the browser session."""
        ...

    @abstractmethod
    def stop(self) -> None:
        """Close the browser session."""
        ...

    @abstractmethod
    def navigate(self, url: str) -> None:
        """Navigate to URL."""
        ...

    @abstractmethod
    def find_one(self, locator: Locator) -> ElementHandle | None:
        """Resolve the first element matching locator, or None."""
        ...

    @abstractmethod
    def find_all(self, locator: Locator) -> list[ElementHandle]:
        """Resolve every element matching locator."""
        ...

    @abstractmethod
    def current_url(self) -> str:
        """Return current URL."""
        ...

    @abstractmethod
    def title(self) -> str:
        """Return the document title."""
        ...
