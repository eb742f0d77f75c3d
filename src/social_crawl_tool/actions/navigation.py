"""Navigation actions."""

from __future__ import annotations

from ..models import NavigateParameters, WaitForNavigationParameters
from .base import Action, register_action


@register_action("browser_navigate")
class NavigateAction(Action[NavigateParameters]):
    description = "Navigate the browser to a specific URL. Input must be a full URL, e.g. https://example.com"
    parameters = NavigateParameters

    def execute(self, params: NavigateParameters) -> str:
        tab = self.context.resolve_tab(params.tab_name)
        tab.navigate(params.url)
        return f"Successfully navigated to {params.url}. Page title: {tab.page.title()}"

    def error_line(self, params: NavigateParameters, exc: BaseException) -> str:
        return f"Error navigating to {params.url}: {exc}"


@register_action("browser_wait_for_navigation")
class WaitForNavigationAction(Action[WaitForNavigationParameters]):
    """Wait for the document to finish loading, then settle.

    ``strategy`` is echoed back but every strategy waits the same way.
    """

    description = "Wait for navigation to complete using specified strategy"
    parameters = WaitForNavigationParameters
    error_prefix = "Error waiting for navigation"

    def execute(self, params: WaitForNavigationParameters) -> str:
        tab = self.context.resolve_tab(params.tab_name)
        tab.page.wait_until_ready()
        tab.last_url = tab.page.url
        self.context.settle(self.context.config.interaction.ready_settle_ms)
        return f"Navigation completed with strategy: {params.strategy}"
