"""Outcome reporting and rendering sinks."""

from __future__ import annotations

import base64
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterable, Optional

from rich.console import Console
from rich.markup import escape

LOGGER = logging.getLogger(__name__)


class Reporter(ABC):
    """Receives one human-readable outcome line per action."""

    @abstractmethod
    def report(self, actor: str, text: str) -> None:
        """Deliver an outcome line attributed to ``actor``."""


class ConsoleReporter(Reporter):
    """Print outcome lines to the console using Rich."""

    def __init__(self, console: Optional[Console] = None) -> None:
        self._console = console or Console()

    def report(self, actor: str, text: str) -> None:
        style = "red" if text.startswith("Error") else "cyan"
        self._console.print(escape(f"[{actor}] {text}"), style=style)


class CompositeReporter(Reporter):
    """Fan-out reporter that forwards lines to several reporters."""

    def __init__(self, reporters: Iterable[Reporter]) -> None:
        self._reporters = list(reporters)

    def report(self, actor: str, text: str) -> None:
        for reporter in self._reporters:
            reporter.report(actor, text)


class RenderSink(ABC):
    """Destination for snapshot markup and screenshots, one value per slot."""

    @abstractmethod
    def update_rendering(self, slot: int, markup: str) -> None:
        """Replace the markup stored in ``slot``."""

    @abstractmethod
    def update_image(self, slot: int, data_url: str) -> None:
        """Replace the image stored in ``slot``."""


class InMemoryRenderSink(RenderSink):
    """Keep the latest rendering and images in memory."""

    def __init__(self) -> None:
        self.renderings: dict[int, str] = {}
        self.images: dict[int, str] = {}

    def update_rendering(self, slot: int, markup: str) -> None:
        self.renderings[slot] = markup

    def update_image(self, slot: int, data_url: str) -> None:
        self.images[slot] = data_url


class DirectoryRenderSink(RenderSink):
    """Write the latest rendering and images into a directory."""

    def __init__(self, directory: Path) -> None:
        self._directory = directory

    def update_rendering(self, slot: int, markup: str) -> None:
        path = self._prepare(f"rendering-{slot}.html")
        path.write_text(markup, encoding="utf-8")
        LOGGER.debug("Rendering written to %s", path)

    def update_image(self, slot: int, data_url: str) -> None:
        header, _, payload = data_url.partition(",")
        extension = header.split(";")[0].rpartition("/")[2] or "bin"
        if extension == "jpeg":
            extension = "jpg"
        path = self._prepare(f"image-{slot}.{extension}")
        path.write_bytes(base64.b64decode(payload))
        LOGGER.debug("Image written to %s", path)

    def _prepare(self, filename: str) -> Path:
        self._directory.mkdir(parents=True, exist_ok=True)
        return self._directory / filename
