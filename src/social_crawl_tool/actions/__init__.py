"""Named browser actions.

Importing this package registers every action.
"""

from . import interaction, navigation, observation, tabs  # noqa: F401
from .base import Action, ActionContext, get_action, register_action, registered_actions

__all__ = ["Action", "ActionContext", "get_action", "register_action", "registered_actions"]
