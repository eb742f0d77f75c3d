"""Action base class and the named-action registry."""

from __future__ import annotations

import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, ClassVar, Generic, Optional, TypeVar

from ..browser.errors import NoBrowser
from ..browser.registry import Tab, TabRegistry
from ..config import CrawlerConfig
from ..models import ActionParameters
from ..reporting.base import RenderSink

P = TypeVar("P", bound=ActionParameters)

_ACTIONS: dict[str, type["Action[Any]"]] = {}


def register_action(name: str) -> Callable[[type["Action[P]"]], type["Action[P]"]]:
    """Class decorator exposing an action under ``name``."""

    def decorator(cls: type["Action[P]"]) -> type["Action[P]"]:
        if name in _ACTIONS:
            raise ValueError(f"Action already registered: {name}")
        cls.name = name
        _ACTIONS[name] = cls
        return cls

    return decorator


def get_action(name: str) -> Optional[type["Action[Any]"]]:
    return _ACTIONS.get(name)


def registered_actions() -> dict[str, type["Action[Any]"]]:
    return dict(_ACTIONS)


@dataclass
class ActionContext:
    """Collaborators shared by every action invocation."""

    registry: TabRegistry
    sink: RenderSink
    config: CrawlerConfig = field(default_factory=CrawlerConfig)
    sleep: Callable[[float], None] = time.sleep

    def resolve_tab(self, tab_name: Optional[str] = None) -> Tab:
        tab = self.registry.get_tab(tab_name)
        if tab is None:
            raise NoBrowser()
        return tab

    def settle(self, milliseconds: int) -> None:
        if milliseconds > 0:
            self.sleep(milliseconds / 1000)


class Action(ABC, Generic[P]):
    """A named operation that produces exactly one outcome line."""

    name: ClassVar[str] = ""
    description: ClassVar[str] = ""
    parameters: ClassVar[type[ActionParameters]] = ActionParameters
    error_prefix: ClassVar[str] = "Error"

    def __init__(self, context: ActionContext) -> None:
        self.context = context

    @abstractmethod
    def execute(self, params: P) -> str:
        """Perform the action and return the success line."""

    def error_line(self, params: P, exc: BaseException) -> str:
        return f"{self.error_prefix}: {exc}"
