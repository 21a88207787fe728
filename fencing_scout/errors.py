"""Exception types raised by the Fencing Scout domain and persistence layers."""


class MatchError(Exception):
    """Base class for domain errors reported back to the user."""


class InvalidZoneError(MatchError, ValueError):
    """Raised when a zone outside the fixed zone set is supplied."""

    def __init__(self, zone: object):
        self.zone = zone
        super().__init__(f"Invalid zone: {zone!r}")


class EmptyLogError(MatchError):
    """Raised when finalizing a match that has no recorded actions."""

    def __init__(self) -> None:
        super().__init__("No actions recorded in the current match to archive")


class ArchiveFullError(MatchError):
    """Raised when every archive slot is already in use."""

    def __init__(self, capacity: int):
        self.capacity = capacity
        super().__init__(f"The maximum of {capacity} matches has already been saved")


class PersistenceError(Exception):
    """Raised by document stores when a load or save cannot be completed."""
