"""Errors raised by the browser session layer."""

from __future__ import annotations


class BrowserToolError(RuntimeError):
    """Base class for failures reported by the browser session layer."""


class EngineNotFound(BrowserToolError):
    """Raised when no usable browser executable can be located."""


class LaunchFailure(BrowserToolError):
    """Raised when the browser engine refuses to start."""


class NoSession(BrowserToolError):
    """Raised when an operation requires a live browser session."""


class NoBrowser(NoSession):
    """Raised when an action cannot resolve a tab to act on."""

    def __init__(self, message: str = "Browser not launched. Please run launch_browser first.") -> None:
        super().__init__(message)


class DuplicateTab(BrowserToolError):
    """Raised when creating a tab whose name is already registered."""

    def __init__(self, name: str) -> None:
        super().__init__(f'Tab with name "{name}" already exists.')
        self.name = name


class TabNotFound(BrowserToolError):
    """Raised when referencing a tab name that is not registered."""

    def __init__(self, name: str) -> None:
        super().__init__(f'Tab "{name}" not found.')
        self.name = name
