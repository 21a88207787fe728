"""Active zone selection and piste orientation."""

from ..errors import InvalidZoneError
from ..models import MatchState
from ..utils import DEFAULT_ZONE_ORDER


class ZoneService:
    """Service for the active zone and the displayed zone order."""

    def __init__(self, match_state: MatchState):
        self.match_state = match_state

    def set_active(self, zone: str) -> None:
        """
        Make ``zone`` the zone new actions are tagged with.

        Raises:
            InvalidZoneError: If the zone is not in the current zone order
        """
        if zone not in self.match_state.zone_order:
            raise InvalidZoneError(zone)
        self.match_state.active_zone = zone

    def invert(self) -> None:
        """Mirror the piste by swapping the outer zones."""
        order = self.match_state.zone_order
        order[0], order[-1] = order[-1], order[0]

    def reset_active(self) -> None:
        self.match_state.active_zone = self.match_state.zone_order[0]

    def reset_order(self) -> None:
        self.match_state.zone_order = list(DEFAULT_ZONE_ORDER)

    def get_zone_data(self) -> dict:
        return {
            "active_zone": self.match_state.active_zone,
            "zone_order": list(self.match_state.zone_order),
        }
