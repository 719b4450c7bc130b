"""Example handler returning rights."""
from .base import ActionHandler
from .identitet import IDENTITET, RETTIGHET
from ..event_models import Event, Resource


class GetAllRettighetHandler(ActionHandler):
    """Sample data for GET_ALL_RETTIGHET."""

    def produce(self, response: Event) -> None:
        batcave = Resource(
            type=RETTIGHET,
            system_id="BATCAVE",
            attributes={
                "navn": "Batcave",
                "kode": "BAT-002",
                "beskrivelse": "Grants access to the secret cave",
            },
        )
        batcave.add_relation("identitet", IDENTITET, "systemid", "BATMAN")
        batcave.add_relation("identitet", IDENTITET, "systemid", "ROBIN")
        response.add_data(batcave)

        batmobile = Resource(
            type=RETTIGHET,
            system_id="BATMOBILE",
            attributes={
                "navn": "Batmobile",
                "kode": "BAT-001",
                "beskrivelse": "Grants access to driving the ultimate vehicle",
            },
        )
        batmobile.add_relation("identitet", IDENTITET, "systemid", "BATMAN")
        response.add_data(batmobile)
