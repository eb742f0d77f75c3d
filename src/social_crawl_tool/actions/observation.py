"""Screenshot and DOM snapshot actions."""

from __future__ import annotations

import logging

from ..extraction.screenshot import ScreenshotOptions, capture_screenshot
from ..extraction.snapshot import capture_snapshot
from ..models import SnapshotDomParameters, ViewScreenParameters
from .base import Action, register_action

LOGGER = logging.getLogger(__name__)


@register_action("view_screen")
class ViewScreenAction(Action[ViewScreenParameters]):
    description = (
        "Take a screenshot and return it as base64 data. Input flags: full (for full page capture), "
        "high (for high quality), small (for smaller viewport)"
    )
    parameters = ViewScreenParameters
    error_prefix = "Error taking screenshot"

    def execute(self, params: ViewScreenParameters) -> str:
        page = self.context.resolve_tab(params.tab_name).page
        options = ScreenshotOptions.from_flags(params.input)
        if params.quality is not None or params.viewport is not None:
            options = ScreenshotOptions(
                quality=params.quality or options.quality,
                viewport=params.viewport or options.viewport,
            )
        settings = self.context.config.snapshot
        result = capture_screenshot(page, options, height=settings.viewport_height)
        LOGGER.debug("Captured %dx%d screenshot (%d bytes)", result.width, result.height, len(result.data))
        self.context.sink.update_image(settings.image_slot, result.data_url())
        return "Screenshot captured and saved"


@register_action("browser_snapshot_dom")
class SnapshotDomAction(Action[SnapshotDomParameters]):
    description = (
        "Capture DOM snapshot of the current page. Use searchTerm to filter elements containing "
        'specific text (e.g., "busan_food" or "#busan_food")'
    )
    parameters = SnapshotDomParameters
    error_prefix = "Error capturing DOM snapshot"

    def execute(self, params: SnapshotDomParameters) -> str:
        page = self.context.resolve_tab(params.tab_name).page
        settings = self.context.config.snapshot
        result = capture_snapshot(page, params.search_term, limit=settings.max_chars)
        if not result.found:
            if params.search_term:
                return f"No elements found containing: {params.search_term}"
            return "No elements found matching selector: body"
        self.context.sink.update_rendering(settings.rendering_slot, result.content)
        line = "DOM snapshot captured and saved to location rendering"
        if result.truncated:
            line += f" (truncated to {settings.max_chars} characters)"
        return line
