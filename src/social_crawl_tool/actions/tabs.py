"""Session and tab management actions."""

from __future__ import annotations

from ..models import (
    CloseBrowserParameters,
    CreateTabParameters,
    LaunchBrowserParameters,
    ListTabsParameters,
    NamedTabParameters,
)
from .base import Action, register_action


@register_action("launch_browser")
class LaunchBrowserAction(Action[LaunchBrowserParameters]):
    description = (
        "Launch a new Chrome browser instance. This will open a new browser window "
        "that can be controlled programmatically."
    )
    parameters = LaunchBrowserParameters
    error_prefix = "Error launching Chrome"

    def execute(self, params: LaunchBrowserParameters) -> str:
        browser_config = self.context.config.browser
        headless = browser_config.headless if params.headless is None else params.headless
        url = params.url if params.url is not None else browser_config.default_url
        tab_name = params.tab_name or browser_config.default_tab
        self.context.registry.launch(url or None, tab_name, headless=headless)
        mode = "headless mode" if headless else "visible mode for supervision"
        result = f"Successfully launched Chrome browser in {mode}."
        if url:
            result += f" Navigated to: {url}"
        return result + f" Created tab: {tab_name}"


@register_action("close_browser")
class CloseBrowserAction(Action[CloseBrowserParameters]):
    description = (
        "Close the current browser instance. This will close all browser windows and free up resources."
    )
    parameters = CloseBrowserParameters
    error_prefix = "Error closing browser"

    def execute(self, params: CloseBrowserParameters) -> str:
        if self.context.registry.close():
            return "Successfully closed Chrome browser"
        return "No browser instance was running"


@register_action("create_tab")
class CreateTabAction(Action[CreateTabParameters]):
    description = (
        "Create a new tab in the existing browser. Useful for managing multiple tasks "
        "like post list and post&profile views."
    )
    parameters = CreateTabParameters
    error_prefix = "Error creating tab"

    def execute(self, params: CreateTabParameters) -> str:
        self.context.registry.create_tab(params.tab_name, params.url)
        result = f"Successfully created new tab: {params.tab_name}"
        if params.url:
            result += f" and navigated to: {params.url}"
        return result


@register_action("switch_tab")
class SwitchTabAction(Action[NamedTabParameters]):
    description = "Switch to a specific tab by name. This will bring the tab to the front."
    parameters = NamedTabParameters
    error_prefix = "Error switching tab"

    def execute(self, params: NamedTabParameters) -> str:
        self.context.registry.switch_tab(params.tab_name)
        return f"Successfully switched to tab: {params.tab_name}"


@register_action("close_tab")
class CloseTabAction(Action[NamedTabParameters]):
    description = "Close a specific tab by name."
    parameters = NamedTabParameters
    error_prefix = "Error closing tab"

    def execute(self, params: NamedTabParameters) -> str:
        self.context.registry.close_tab(params.tab_name)
        return f"Successfully closed tab: {params.tab_name}"


@register_action("list_tabs")
class ListTabsAction(Action[ListTabsParameters]):
    description = "List all currently open tabs in the browser."
    parameters = ListTabsParameters
    error_prefix = "Error listing tabs"

    def execute(self, params: ListTabsParameters) -> str:
        names = self.context.registry.list_tab_names()
        if not names:
            return "No tabs are currently open."
        return f"Currently open tabs: {', '.join(names)}"
