"""Registry owning the single browser session and its named tabs."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Optional

from .base import BrowserEngine, BrowserHandle, LaunchOptions, PageHandle
from .errors import DuplicateTab, NoSession, TabNotFound

LOGGER = logging.getLogger(__name__)


@dataclass
class Tab:
    """A named page belonging to the current session."""

    name: str
    page: PageHandle
    last_url: Optional[str] = None

    def navigate(self, url: str) -> None:
        self.page.goto(url)
        self.last_url = self.page.url


class TabRegistry:
    """Own at most one browser session and a name-to-tab mapping.

    Tabs are kept in registration order. When an operation omits a tab name
    the oldest surviving tab is used.
    """

    def __init__(self, engine: BrowserEngine, options: Optional[LaunchOptions] = None) -> None:
        self._engine = engine
        self._options = options or LaunchOptions()
        self._lock = threading.RLock()
        self._browser: Optional[BrowserHandle] = None
        self._tabs: dict[str, Tab] = {}

    @property
    def is_running(self) -> bool:
        return self._browser is not None

    def launch(
        self,
        url: Optional[str] = None,
        tab_name: str = "default",
        *,
        headless: Optional[bool] = None,
    ) -> Tab:
        """Start a fresh session with a single tab, replacing any live one."""

        with self._lock:
            if self._browser is not None:
                LOGGER.info("Closing existing browser before relaunch")
                self.close()

            options = self._options
            if headless is not None and headless != options.headless:
                options = LaunchOptions(
                    headless=headless,
                    executable_path=options.executable_path,
                    args=list(options.args),
                )
            browser = self._engine.launch(options)
            try:
                tab = Tab(name=tab_name, page=browser.new_page())
                if url:
                    tab.navigate(url)
            except Exception:
                LOGGER.warning("Browser start-up failed; tearing the session down")
                browser.close()
                raise
            self._browser = browser
            self._tabs = {tab_name: tab}
            LOGGER.info("Browser launched with tab %s", tab_name)
            return tab

    def close(self) -> bool:
        """Close the session if one exists; return whether anything was closed."""

        with self._lock:
            browser = self._browser
            if browser is None:
                return False
            self._browser = None
            self._tabs = {}
            browser.close()
            LOGGER.info("Browser closed")
            return True

    def create_tab(self, tab_name: str, url: Optional[str] = None) -> Tab:
        with self._lock:
            if self._browser is None:
                raise NoSession("Browser not launched. Please launch browser first.")
            if tab_name in self._tabs:
                raise DuplicateTab(tab_name)
            page = self._browser.new_page()
            tab = Tab(name=tab_name, page=page)
            if url:
                try:
                    tab.navigate(url)
                except Exception:
                    page.close()
                    raise
            self._tabs[tab_name] = tab
            LOGGER.info("New tab created: %s", tab_name)
            return tab

    def get_tab(self, tab_name: Optional[str] = None) -> Optional[Tab]:
        if not tab_name:
            return next(iter(self._tabs.values()), None)
        return self._tabs.get(tab_name)

    def list_tab_names(self) -> list[str]:
        return list(self._tabs)

    def switch_tab(self, tab_name: str) -> Tab:
        tab = self._require(tab_name)
        tab.page.bring_to_front()
        return tab

    def close_tab(self, tab_name: str) -> None:
        with self._lock:
            tab = self._require(tab_name)
            tab.page.close()
            del self._tabs[tab_name]
            LOGGER.info("Tab closed: %s", tab_name)

    def _require(self, tab_name: str) -> Tab:
        tab = self._tabs.get(tab_name)
        if tab is None:
            raise TabNotFound(tab_name)
        return tab
