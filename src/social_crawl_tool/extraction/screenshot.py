"""Viewport screenshot capture."""

from __future__ import annotations

import base64
import enum
from dataclasses import dataclass
from typing import Optional

from ..browser.base import PageHandle

DEFAULT_VIEWPORT_HEIGHT = 600


class ScreenshotQuality(str, enum.Enum):
    """JPEG quality tiers."""

    LOW = "low"
    HIGH = "high"

    @property
    def jpeg_quality(self) -> int:
        return 100 if self is ScreenshotQuality.HIGH else 80


class ViewportSize(str, enum.Enum):
    """Viewport width tiers."""

    SMALL = "small"
    NORMAL = "normal"

    @property
    def width(self) -> int:
        return 800 if self is ViewportSize.SMALL else 1200


@dataclass(frozen=True)
class ScreenshotOptions:
    """Quality and viewport tiers for one capture, decoded once from flags."""

    quality: ScreenshotQuality = ScreenshotQuality.LOW
    viewport: ViewportSize = ViewportSize.NORMAL

    @classmethod
    def from_flags(cls, flags: Optional[str]) -> "ScreenshotOptions":
        """Decode free-form flags such as ``"high small"``.

        Matching is a case-sensitive substring check. ``full`` is accepted for
        compatibility but captures never extend beyond the viewport.
        """

        text = flags or ""
        return cls(
            quality=ScreenshotQuality.HIGH if "high" in text else ScreenshotQuality.LOW,
            viewport=ViewportSize.SMALL if "small" in text else ViewportSize.NORMAL,
        )


@dataclass
class ScreenshotResult:
    """An encoded viewport capture."""

    data: bytes
    quality: int
    width: int
    height: int
    format: str = "jpeg"

    def base64(self) -> str:
        return base64.b64encode(self.data).decode("ascii")

    def data_url(self) -> str:
        return f"data:image/{self.format};base64,{self.base64()}"


def capture_screenshot(
    page: PageHandle,
    options: ScreenshotOptions,
    height: int = DEFAULT_VIEWPORT_HEIGHT,
) -> ScreenshotResult:
    width = options.viewport.width
    quality = options.quality.jpeg_quality
    page.set_viewport(width, height)
    return ScreenshotResult(
        data=page.screenshot(quality),
        quality=quality,
        width=width,
        height=height,
    )
