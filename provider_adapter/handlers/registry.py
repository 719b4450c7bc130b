"""Lookup table from action to handler."""
import structlog
from .base import ActionHandler
from .identitet import GetAllIdentitetHandler
from .rettighet import GetAllRettighetHandler
from ..actions import TilgangerAction, parse_action

log = structlog.get_logger()


class HandlerRegistry:
    """Maps actions to their handlers. Unregistered actions resolve to None."""

    def __init__(self, handlers: dict[TilgangerAction, ActionHandler] | None = None):
        self._handlers: dict[TilgangerAction, ActionHandler] = dict(handlers or {})

    def register(self, action: TilgangerAction, handler: ActionHandler):
        """Register (or replace) the handler for an action."""
        self._handlers[action] = handler
        log.info("handler.registered", action=action.value, handler=type(handler).__name__)

    def get(self, action: TilgangerAction) -> ActionHandler | None:
        return self._handlers.get(action)

    def resolve(self, name: str | None) -> ActionHandler | None:
        """
        Find the handler for an action string.

        Raises:
            UnknownActionError: If the string is not a known action
        """
        return self.get(parse_action(name))

    def actions(self) -> list[TilgangerAction]:
        return list(self._handlers)


def default_registry() -> HandlerRegistry:
    """Registry with the example handlers."""
    return HandlerRegistry({
        TilgangerAction.GET_ALL_IDENTITET: GetAllIdentitetHandler(),
        TilgangerAction.GET_ALL_RETTIGHET: GetAllRettighetHandler(),
    })
