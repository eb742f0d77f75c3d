"""Playwright-powered browser engine implementation."""

from __future__ import annotations

import logging
import os
import shutil
import sys
from pathlib import Path
from typing import Iterable, Optional

from playwright.sync_api import Browser, Error, Page, Playwright, sync_playwright

from .base import BrowserEngine, BrowserHandle, LaunchOptions, PageHandle, ScrollMetrics
from .errors import EngineNotFound, LaunchFailure

LOGGER = logging.getLogger(__name__)

_SCROLL_SCRIPT = """
(delta) => {
  window.scrollBy(0, delta);
  const root = document.documentElement;
  return {
    scrollTop: root.scrollTop,
    clientHeight: root.clientHeight,
    scrollHeight: root.scrollHeight,
  };
}
"""

_EXECUTABLE_NAMES = (
    "google-chrome",
    "google-chrome-stable",
    "chromium",
    "chromium-browser",
    "chrome",
)


def _default_locations() -> list[Path]:
    if sys.platform.startswith("win"):
        locations = [
            Path(r"C:\Program Files\Google\Chrome\Application\chrome.exe"),
            Path(r"C:\Program Files (x86)\Google\Chrome\Application\chrome.exe"),
        ]
        local_app_data = os.environ.get("LOCALAPPDATA")
        if local_app_data:
            locations.append(Path(local_app_data) / "Google" / "Chrome" / "Application" / "chrome.exe")
        return locations
    if sys.platform == "darwin":
        return [
            Path("/Applications/Google Chrome.app/Contents/MacOS/Google Chrome"),
            Path("/Applications/Chromium.app/Contents/MacOS/Chromium"),
        ]
    return [
        Path("/usr/bin/google-chrome"),
        Path("/usr/bin/google-chrome-stable"),
        Path("/usr/bin/chromium"),
        Path("/usr/bin/chromium-browser"),
        Path("/snap/bin/chromium"),
    ]


def find_browser_executable(candidates: Optional[Iterable[Path]] = None) -> Optional[str]:
    """Return the first installed Chrome/Chromium executable, if any."""

    paths = list(candidates) if candidates is not None else _default_locations()
    for path in paths:
        if path.is_file():
            return str(path)
    if candidates is not None:
        return None
    for name in _EXECUTABLE_NAMES:
        found = shutil.which(name)
        if found:
            return found
    return None


class PlaywrightPage(PageHandle):
    """Page handle backed by a Playwright page."""

    def __init__(self, page: Page) -> None:
        self._page = page

    @property
    def url(self) -> str:
        return self._page.url

    def goto(self, url: str) -> None:
        self._page.goto(url, wait_until="load")

    def title(self) -> str:
        return self._page.title()

    def has_selector(self, selector: str) -> bool:
        return self._page.query_selector(selector) is not None

    def click(self, selector: str, delay_ms: int = 0) -> None:
        self._page.click(selector, delay=delay_ms)

    def scroll_by(self, delta_y: int) -> ScrollMetrics:
        metrics = self._page.evaluate(_SCROLL_SCRIPT, delta_y)
        return ScrollMetrics(
            scroll_top=metrics["scrollTop"],
            client_height=metrics["clientHeight"],
            scroll_height=metrics["scrollHeight"],
        )

    def wait_until_ready(self) -> None:
        self._page.wait_for_function("() => document.readyState === 'complete'")

    def content(self) -> str:
        return self._page.content()

    def set_viewport(self, width: int, height: int) -> None:
        self._page.set_viewport_size({"width": width, "height": height})

    def screenshot(self, quality: int) -> bytes:
        return self._page.screenshot(type="jpeg", quality=quality, full_page=False)

    def bring_to_front(self) -> None:
        self._page.bring_to_front()

    def close(self) -> None:
        self._page.close()


class PlaywrightBrowser(BrowserHandle):
    """A Chromium process started through Playwright."""

    def __init__(self, playwright: Playwright, browser: Browser) -> None:
        self._playwright = playwright
        self._browser = browser
        self._context = browser.new_context(no_viewport=True)

    def new_page(self) -> PageHandle:
        return PlaywrightPage(self._context.new_page())

    def close(self) -> None:
        LOGGER.debug("Stopping Playwright browser")
        try:
            self._context.close()
        finally:
            try:
                self._browser.close()
            finally:
                self._playwright.stop()


class PlaywrightEngine(BrowserEngine):
    """Launch Chrome (or Playwright's bundled Chromium) through Playwright."""

    def __init__(self, use_bundled_browser: bool = False) -> None:
        self._use_bundled_browser = use_bundled_browser

    def launch(self, options: LaunchOptions) -> BrowserHandle:
        executable = options.executable_path
        if executable and not Path(executable).is_file():
            raise EngineNotFound(f"Chrome executable not found at {executable}.")
        if not executable:
            executable = find_browser_executable()
        if not executable and not self._use_bundled_browser:
            raise EngineNotFound(
                "Chrome executable not found. Please make sure Google Chrome is installed."
            )

        LOGGER.debug("Starting Playwright browser (executable=%s)", executable or "bundled")
        playwright: Optional[Playwright] = None
        try:
            playwright = sync_playwright().start()
            browser = playwright.chromium.launch(
                headless=options.headless,
                executable_path=executable,
                args=list(options.args),
            )
            return PlaywrightBrowser(playwright, browser)
        except Error as exc:
            if playwright is not None:
                playwright.stop()
            raise LaunchFailure(str(exc)) from exc
