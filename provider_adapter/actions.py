"""Actions understood by the tilganger adapter."""
from enum import Enum

from .errors import UnknownActionError


class TilgangerAction(str, Enum):
    """Closed set of actions a consumer may request."""
    GET_ALL_IDENTITET = "GET_ALL_IDENTITET"
    GET_ALL_RETTIGHET = "GET_ALL_RETTIGHET"
    GET_IDENTITET = "GET_IDENTITET"
    GET_RETTIGHET = "GET_RETTIGHET"


def parse_action(name: str | None) -> TilgangerAction:
    """
    Resolve an action string to the enum.

    Raises:
        UnknownActionError: If the string is not a known action
    """
    try:
        return TilgangerAction(name)
    except ValueError:
        raise UnknownActionError(name) from None
