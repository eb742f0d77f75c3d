from __future__ import annotations

from typing import Callable, Optional

import pytest

from social_crawl_tool.browser.base import (
    BrowserEngine,
    BrowserHandle,
    LaunchOptions,
    PageHandle,
    ScrollMetrics,
)
from social_crawl_tool.browser.registry import TabRegistry
from social_crawl_tool.config import CrawlerConfig
from social_crawl_tool.dispatcher import ActionDispatcher
from social_crawl_tool.reporting.base import InMemoryRenderSink, Reporter

BLANK_PAGE = "<html><head></head><body></body></html>"


class FakePage(PageHandle):
    def __init__(
        self,
        html: str = BLANK_PAGE,
        title: str = "Fake",
        selectors: tuple[str, ...] = (),
        scroll_height: int = 5000,
        client_height: int = 1000,
    ) -> None:
        self.html = html
        self.page_title = title
        self.selectors = set(selectors)
        self.scroll_height = scroll_height
        self.client_height = client_height
        self.scroll_top = 0
        self.current_url = "about:blank"
        self.visited: list[str] = []
        self.clicks: list[tuple[str, int]] = []
        self.scroll_calls: list[int] = []
        self.viewport: Optional[tuple[int, int]] = None
        self.screenshot_qualities: list[int] = []
        self.ready_waits = 0
        self.in_front = False
        self.closed = False
        self.goto_error: Optional[Exception] = None

    @property
    def url(self) -> str:
        return self.current_url

    def goto(self, url: str) -> None:
        if self.goto_error is not None:
            raise self.goto_error
        self.current_url = url
        self.visited.append(url)

    def title(self) -> str:
        return self.page_title

    def has_selector(self, selector: str) -> bool:
        return selector in self.selectors

    def click(self, selector: str, delay_ms: int = 0) -> None:
        self.clicks.append((selector, delay_ms))

    def scroll_by(self, delta_y: int) -> ScrollMetrics:
        self.scroll_calls.append(delta_y)
        max_top = max(0, self.scroll_height - self.client_height)
        self.scroll_top = min(max(self.scroll_top + delta_y, 0), max_top)
        return ScrollMetrics(
            scroll_top=self.scroll_top,
            client_height=self.client_height,
            scroll_height=self.scroll_height,
        )

    def wait_until_ready(self) -> None:
        self.ready_waits += 1

    def content(self) -> str:
        return self.html

    def set_viewport(self, width: int, height: int) -> None:
        self.viewport = (width, height)

    def screenshot(self, quality: int) -> bytes:
        self.screenshot_qualities.append(quality)
        return b"jpeg-bytes"

    def bring_to_front(self) -> None:
        self.in_front = True

    def close(self) -> None:
        self.closed = True


class FakeBrowser(BrowserHandle):
    def __init__(self, page_factory: Callable[[], FakePage]) -> None:
        self._page_factory = page_factory
        self.pages: list[FakePage] = []
        self.closed = False

    def new_page(self) -> FakePage:
        page = self._page_factory()
        self.pages.append(page)
        return page

    def close(self) -> None:
        self.closed = True
        for page in self.pages:
            page.closed = True


class FakeEngine(BrowserEngine):
    def __init__(self) -> None:
        self.launches: list[LaunchOptions] = []
        self.browsers: list[FakeBrowser] = []
        self.error: Optional[Exception] = None
        self.page_factory: Callable[[], FakePage] = FakePage

    def launch(self, options: LaunchOptions) -> FakeBrowser:
        self.launches.append(options)
        if self.error is not None:
            raise self.error
        browser = FakeBrowser(lambda: self.page_factory())
        self.browsers.append(browser)
        return browser


class CollectingReporter(Reporter):
    def __init__(self) -> None:
        self.lines: list[tuple[str, str]] = []

    def report(self, actor: str, text: str) -> None:
        self.lines.append((actor, text))

    @property
    def texts(self) -> list[str]:
        return [text for _, text in self.lines]


@pytest.fixture
def engine() -> FakeEngine:
    return FakeEngine()


@pytest.fixture
def registry(engine: FakeEngine) -> TabRegistry:
    return TabRegistry(engine, LaunchOptions(headless=False, args=["--no-sandbox"]))


@pytest.fixture
def reporter() -> CollectingReporter:
    return CollectingReporter()


@pytest.fixture
def sink() -> InMemoryRenderSink:
    return InMemoryRenderSink()


@pytest.fixture
def sleeps() -> list[float]:
    return []


@pytest.fixture
def config() -> CrawlerConfig:
    return CrawlerConfig.model_validate({"reporting": {"actor": "crawler"}})


@pytest.fixture
def dispatcher(
    registry: TabRegistry,
    reporter: CollectingReporter,
    sink: InMemoryRenderSink,
    config: CrawlerConfig,
    sleeps: list[float],
) -> ActionDispatcher:
    return ActionDispatcher(
        registry=registry,
        reporter=reporter,
        sink=sink,
        config=config,
        sleep=sleeps.append,
    )
