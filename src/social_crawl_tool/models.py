"""Parameter models for the named browser actions."""

from __future__ import annotations

import enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from .extraction.screenshot import ScreenshotQuality, ViewportSize

TAB_NAME_DESCRIPTION = (
    "Name of the tab to perform the action on. If not specified, uses the first available tab."
)


class ScrollDirection(str, enum.Enum):
    DOWN = "down"
    UP = "up"


class ActionParameters(BaseModel):
    """Base for action arguments; accepts camelCase or snake_case keys."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")


class TabTargetParameters(ActionParameters):
    tab_name: Optional[str] = Field(default=None, alias="tabName", description=TAB_NAME_DESCRIPTION)


class LaunchBrowserParameters(ActionParameters):
    headless: Optional[bool] = Field(
        default=None,
        description="Run without a visible window. Defaults to the configured value (visible).",
    )
    url: Optional[str] = Field(
        default=None,
        description="URL to navigate to after launching. Defaults to the configured start page; pass an empty string to skip.",
    )
    tab_name: Optional[str] = Field(
        default=None,
        alias="tabName",
        description='Name for the initial tab. Defaults to the configured tab name ("default").',
    )


class CloseBrowserParameters(ActionParameters):
    pass


class ListTabsParameters(ActionParameters):
    pass


class CreateTabParameters(ActionParameters):
    tab_name: str = Field(
        alias="tabName",
        description='Name for the new tab (e.g., "post_list", "post_profile")',
    )
    url: Optional[str] = Field(default=None, description="Optional URL to navigate to in the new tab")


class NamedTabParameters(ActionParameters):
    tab_name: str = Field(alias="tabName", description="Name of the tab")


class ClickParameters(TabTargetParameters):
    selector: str = Field(description="CSS selector of the element to click")
    wait_after_ms: int = Field(
        default=300,
        ge=0,
        alias="waitAfterMs",
        description="Optional sleep after click in milliseconds",
    )


class ScrollParameters(TabTargetParameters):
    direction: ScrollDirection = Field(default=ScrollDirection.DOWN, description="Scroll direction")
    pixels: int = Field(default=1000, ge=0, description="Number of pixels to scroll")
    to_bottom: bool = Field(
        default=False,
        alias="toBottom",
        description="If true, scroll to the bottom of the page",
    )
    wait_after_ms: int = Field(
        default=300,
        ge=0,
        alias="waitAfterMs",
        description="Optional sleep after scroll in milliseconds",
    )


class WaitParameters(ActionParameters):
    milliseconds: Optional[int] = Field(
        default=3000,
        ge=0,
        description="Number of milliseconds to wait (default: 3000ms = 3 seconds)",
    )


class NavigateParameters(TabTargetParameters):
    url: str = Field(description="The URL to navigate to")


class WaitForNavigationParameters(TabTargetParameters):
    strategy: str = Field(default="all", description="Navigation wait strategy")


class ViewScreenParameters(TabTargetParameters):
    input: Optional[str] = Field(
        default=None,
        description="Flags: full (for full page capture), high (for high quality), small (for smaller viewport)",
    )
    quality: Optional[ScreenshotQuality] = Field(
        default=None,
        description="Explicit quality tier; overrides the flags.",
    )
    viewport: Optional[ViewportSize] = Field(
        default=None,
        description="Explicit viewport width tier; overrides the flags.",
    )


class SnapshotDomParameters(TabTargetParameters):
    search_term: Optional[str] = Field(
        default=None,
        alias="searchTerm",
        description="Filter elements containing this text (supports hashtag format like #busan_food)",
    )


class ActionCall(BaseModel):
    """A named action invocation, as issued by an orchestrator or script."""

    action: str
    arguments: dict[str, Any] = Field(default_factory=dict)
