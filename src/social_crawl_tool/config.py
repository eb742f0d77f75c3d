"""Configuration models for social crawl tool."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BrowserConfig(BaseModel):
    """Settings for launching the browser."""

    headless: bool = False
    executable_path: Optional[Path] = None
    use_bundled_browser: bool = Field(
        default=False,
        description="Fall back to Playwright's bundled Chromium when Chrome is not installed.",
    )
    args: list[str] = Field(
        default_factory=lambda: ["--no-sandbox", "--disable-setuid-sandbox", "--start-maximized"]
    )
    default_url: str = "https://www.instagram.com/"
    default_tab: str = "default"


class InteractionConfig(BaseModel):
    """Timings used by interaction actions."""

    click_delay_ms: int = Field(default=50, ge=0)
    scroll_step_px: int = Field(default=800, gt=0)
    scroll_interval_ms: int = Field(default=100, ge=0)
    scroll_tolerance_px: int = Field(default=10, ge=0)
    scroll_max_steps: Optional[int] = Field(
        default=None,
        description="Upper bound on scroll-to-bottom steps; unbounded when unset.",
    )
    ready_settle_ms: int = Field(default=3000, ge=0)


class SnapshotConfig(BaseModel):
    """Settings for DOM snapshots and screenshots."""

    max_chars: int = Field(default=100_000, gt=0)
    rendering_slot: int = 0
    image_slot: int = 0
    viewport_height: int = Field(default=600, gt=0)


class ReportingConfig(BaseModel):
    """Where outcome lines and captures are delivered."""

    channel: str = Field(default="console")
    actor: str = Field(default="crawler")
    output_dir: Optional[Path] = None


class CrawlerConfig(BaseSettings):
    """Top-level configuration for the crawler."""

    model_config = SettingsConfigDict(
        env_prefix="SOCIAL_CRAWL_TOOL_",
        env_file=(".env",),
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
    )

    browser: BrowserConfig = Field(default_factory=BrowserConfig)
    interaction: InteractionConfig = Field(default_factory=InteractionConfig)
    snapshot: SnapshotConfig = Field(default_factory=SnapshotConfig)
    reporting: ReportingConfig = Field(default_factory=ReportingConfig)


def load_config(
    path: Path | None = None,
    *,
    env_file: Path | None = None,
    **overrides: object,
) -> CrawlerConfig:
    """Load configuration from an optional file and overrides."""

    data: dict[str, Any] = {}
    if path:
        import yaml

        data = yaml.safe_load(path.read_text()) or {}
    if overrides:
        _deep_update(data, overrides)
    settings_kwargs: dict[str, object] = {}
    if env_file is not None:
        settings_kwargs["_env_file"] = env_file
    config = CrawlerConfig(**data, **settings_kwargs)
    if not data:
        return config

    merged = config.model_dump(mode="python")
    _deep_update(merged, data)
    return CrawlerConfig.model_validate(merged)


def _deep_update(target: dict[str, Any], updates: Mapping[str, Any]) -> None:
    """Recursively merge ``updates`` into ``target`` in-place."""

    for key, value in updates.items():
        if (
            isinstance(value, Mapping)
            and isinstance(existing := target.get(key), Mapping)
        ):
            nested: dict[str, Any]
            if isinstance(existing, dict):
                nested = existing
            else:
                nested = dict(existing)
            _deep_update(nested, value)
            target[key] = nested
        else:
            target[key] = value
