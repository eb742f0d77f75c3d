"""Click, scroll and wait actions."""

from __future__ import annotations

import logging
from typing import Callable

from ..browser.base import PageHandle
from ..config import InteractionConfig
from ..models import ClickParameters, ScrollDirection, ScrollParameters, WaitParameters
from .base import Action, register_action

LOGGER = logging.getLogger(__name__)


def scroll_to_bottom(
    page: PageHandle,
    config: InteractionConfig,
    sleep: Callable[[float], None],
) -> tuple[int, bool]:
    """Advance by fixed steps until the document bottom is within tolerance.

    Returns the number of steps taken and whether the bottom was reached.
    """

    interval = config.scroll_interval_ms / 1000
    steps = 0
    while config.scroll_max_steps is None or steps < config.scroll_max_steps:
        metrics = page.scroll_by(config.scroll_step_px)
        steps += 1
        if metrics.at_bottom(config.scroll_tolerance_px):
            return steps, True
        sleep(interval)
    LOGGER.warning("Stopped scrolling after %d steps without reaching the bottom", steps)
    return steps, False


@register_action("browser_click")
class ClickAction(Action[ClickParameters]):
    description = "Click an element on the page using a CSS selector"
    parameters = ClickParameters
    error_prefix = "Error clicking element"

    def execute(self, params: ClickParameters) -> str:
        page = self.context.resolve_tab(params.tab_name).page
        if not page.has_selector(params.selector):
            return f"Element not found for selector: {params.selector}"
        page.click(params.selector, delay_ms=self.context.config.interaction.click_delay_ms)
        self.context.settle(params.wait_after_ms)
        return f"Clicked element: {params.selector}"


@register_action("browser_scroll")
class ScrollAction(Action[ScrollParameters]):
    description = "Scroll the page by a specific amount or to a position"
    parameters = ScrollParameters
    error_prefix = "Error scrolling page"

    def execute(self, params: ScrollParameters) -> str:
        page = self.context.resolve_tab(params.tab_name).page
        if params.to_bottom:
            steps, reached = scroll_to_bottom(page, self.context.config.interaction, self.context.sleep)
            LOGGER.debug("Scrolled to bottom in %d steps (reached=%s)", steps, reached)
            options = "toBottom: true"
        else:
            sign = -1 if params.direction is ScrollDirection.UP else 1
            page.scroll_by(sign * params.pixels)
            options = f"direction: {params.direction.value}, pixels: {params.pixels}"
        self.context.settle(params.wait_after_ms)
        return f"Scrolled page ({options})"


@register_action("browser_wait")
class WaitAction(Action[WaitParameters]):
    description = "Wait for a specified amount of time in milliseconds"
    parameters = WaitParameters
    error_prefix = "Error during wait"

    def execute(self, params: WaitParameters) -> str:
        milliseconds = params.milliseconds or 3000
        self.context.sleep(milliseconds / 1000)
        return f"Waited for {milliseconds}ms ({milliseconds / 1000:g}s)"
