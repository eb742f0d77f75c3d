"""Browser engine abstractions."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class LaunchOptions:
    """Settings used to start a browser process."""

    headless: bool = False
    executable_path: Optional[str] = None
    args: list[str] = field(default_factory=list)


@dataclass
class ScrollMetrics:
    """Scroll position of a document after a scroll step."""

    scroll_top: float
    client_height: float
    scroll_height: float

    def at_bottom(self, tolerance: float) -> bool:
        return self.scroll_top + self.client_height >= self.scroll_height - tolerance


class PageHandle(ABC):
    """A single page (tab) inside a running browser."""

    @property
    @abstractmethod
    def url(self) -> str:
        """Return the page's current address."""

    @abstractmethod
    def goto(self, url: str) -> None:
        """Load ``url`` and wait for the load event."""

    @abstractmethod
    def title(self) -> str:
        """Return the document title."""

    @abstractmethod
    def has_selector(self, selector: str) -> bool:
        """Return whether ``selector`` matches at least one element."""

    @abstractmethod
    def click(self, selector: str, delay_ms: int = 0) -> None:
        """Click the first element matching ``selector``."""

    @abstractmethod
    def scroll_by(self, delta_y: int) -> ScrollMetrics:
        """Scroll the window vertically and return the resulting metrics."""

    @abstractmethod
    def wait_until_ready(self) -> None:
        """Block until ``document.readyState`` is ``complete``."""

    @abstractmethod
    def content(self) -> str:
        """Return the full serialized markup of the page."""

    @abstractmethod
    def set_viewport(self, width: int, height: int) -> None:
        """Resize the page viewport."""

    @abstractmethod
    def screenshot(self, quality: int) -> bytes:
        """Capture the visible viewport as a JPEG image."""

    @abstractmethod
    def bring_to_front(self) -> None:
        """Give the page foreground focus."""

    @abstractmethod
    def close(self) -> None:
        """Close the page."""


class BrowserHandle(ABC):
    """A running browser process."""

    @abstractmethod
    def new_page(self) -> PageHandle:
        """Open a new page."""

    @abstractmethod
    def close(self) -> None:
        """Terminate the browser and every page it owns."""


class BrowserEngine(ABC):
    """Factory for browser processes."""

    @abstractmethod
    def launch(self, options: LaunchOptions) -> BrowserHandle:
        """Start a browser process.

        Implementations raise :class:`~.errors.EngineNotFound` when no browser
        executable is available and :class:`~.errors.LaunchFailure` for any
        other start-up problem.
        """
