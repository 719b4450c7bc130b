"""Adapter exception hierarchy."""


class AdapterError(Exception):
    """Base class for errors raised while handling an event."""


class UnknownActionError(AdapterError, ValueError):
    """Raised when an action string does not name a known action."""

    def __init__(self, action: str | None):
        self.action = action
        super().__init__(f"Unknown action: {action!r}")


class HandlerContractError(AdapterError):
    """Raised when an action handler changes more than the response data."""
