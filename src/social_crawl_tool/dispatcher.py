"""Dispatch named actions and report exactly one outcome line for each."""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Iterable, Mapping, Optional

from pydantic import ValidationError

from .actions import ActionContext, get_action, registered_actions
from .browser.errors import BrowserToolError
from .browser.registry import TabRegistry
from .config import CrawlerConfig
from .models import ActionCall
from .reporting.base import RenderSink, Reporter

LOGGER = logging.getLogger(__name__)


def _format_validation_error(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error["loc"]) or "arguments"
        parts.append(f"{location}: {error['msg']}")
    return "; ".join(parts)


def describe_actions() -> list[dict[str, Any]]:
    """Return the name, description and parameter schema of every action."""

    return [
        {
            "name": name,
            "description": action.description,
            "parameters": action.parameters.model_json_schema(by_alias=True),
        }
        for name, action in sorted(registered_actions().items())
    ]


class ActionDispatcher:
    """Run named actions against a :class:`TabRegistry`.

    Failures never propagate: every call, successful or not, produces one line
    that is pushed to the reporter and returned.
    """

    def __init__(
        self,
        registry: TabRegistry,
        reporter: Reporter,
        sink: RenderSink,
        config: Optional[CrawlerConfig] = None,
        actor: Optional[str] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        config = config or CrawlerConfig()
        self._registry = registry
        self._reporter = reporter
        self._actor = actor or config.reporting.actor
        self._context = ActionContext(registry=registry, sink=sink, config=config, sleep=sleep)

    @property
    def registry(self) -> TabRegistry:
        return self._registry

    def dispatch(self, name: str, arguments: Optional[Mapping[str, Any]] = None) -> str:
        line = self._execute(name, dict(arguments or {}))
        self._reporter.report(self._actor, line)
        return line

    def run(self, calls: Iterable[ActionCall]) -> list[str]:
        return [self.dispatch(call.action, call.arguments) for call in calls]

    def shutdown(self) -> None:
        """Close the browser session, logging instead of raising."""

        try:
            self._registry.close()
        except Exception:  # pragma: no cover - best effort during shutdown
            LOGGER.exception("Error closing browser during shutdown")

    def _execute(self, name: str, arguments: dict[str, Any]) -> str:
        action_cls = get_action(name)
        if action_cls is None:
            LOGGER.warning("Unknown action requested: %s", name)
            return f"Unknown action: {name}"
        try:
            params = action_cls.parameters.model_validate(arguments)
        except ValidationError as exc:
            return f"Invalid arguments for {name}: {_format_validation_error(exc)}"

        action = action_cls(self._context)
        LOGGER.info("Executing action %s %s", name, arguments)
        try:
            return action.execute(params)
        except BrowserToolError as exc:
            LOGGER.warning("Action %s failed: %s", name, exc)
            return action.error_line(params, exc)
        except Exception as exc:
            LOGGER.exception("Unhandled error while executing %s", name)
            return action.error_line(params, exc)
