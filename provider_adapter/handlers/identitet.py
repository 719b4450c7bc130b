"""Example handler returning identities."""
from .base import ActionHandler
from ..event_models import Event, Resource

IDENTITET = "tilganger.identitet"
RETTIGHET = "tilganger.rettighet"
PERSONALRESSURS = "administrasjon.personal.personalressurs"


class GetAllIdentitetHandler(ActionHandler):
    """
    Sample data for GET_ALL_IDENTITET.

    A real adapter would look the identities up in the source application
    and translate them to resources here.
    """

    def produce(self, response: Event) -> None:
        batman = (
            Resource(type=IDENTITET, system_id="BATMAN")
            .add_relation("personalressurs", PERSONALRESSURS, "ansattnummer", "100001")
            .add_relation("rettighet", RETTIGHET, "systemid", "BATCAVE")
            .add_relation("rettighet", RETTIGHET, "systemid", "BATMOBILE")
        )
        response.add_data(batman)

        robin = (
            Resource(type=IDENTITET, system_id="ROBIN")
            .add_relation("personalressurs", PERSONALRESSURS, "ansattnummer", "100002")
            .add_relation("rettighet", RETTIGHET, "systemid", "BATCAVE")
        )
        response.add_data(robin)
