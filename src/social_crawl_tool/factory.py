"""Factories for constructing components from configuration."""

from __future__ import annotations

from typing import Optional

from .browser.base import BrowserEngine, LaunchOptions
from .browser.playwright_engine import PlaywrightEngine
from .browser.registry import TabRegistry
from .config import BrowserConfig, CrawlerConfig, ReportingConfig
from .dispatcher import ActionDispatcher
from .reporting.base import ConsoleReporter, DirectoryRenderSink, InMemoryRenderSink, RenderSink, Reporter


def build_engine(config: BrowserConfig) -> BrowserEngine:
    return PlaywrightEngine(use_bundled_browser=config.use_bundled_browser)


def build_registry(config: BrowserConfig, engine: Optional[BrowserEngine] = None) -> TabRegistry:
    options = LaunchOptions(
        headless=config.headless,
        executable_path=str(config.executable_path) if config.executable_path else None,
        args=list(config.args),
    )
    return TabRegistry(engine or build_engine(config), options)


def build_reporter(config: ReportingConfig) -> Reporter:
    channel = config.channel.lower()
    if channel == "console":
        return ConsoleReporter()
    raise ValueError(f"Unsupported reporting channel: {config.channel}")


def build_sink(config: ReportingConfig) -> RenderSink:
    if config.output_dir is not None:
        return DirectoryRenderSink(config.output_dir)
    return InMemoryRenderSink()


def build_dispatcher(config: CrawlerConfig) -> ActionDispatcher:
    return ActionDispatcher(
        registry=build_registry(config.browser),
        reporter=build_reporter(config.reporting),
        sink=build_sink(config.reporting),
        config=config,
    )
